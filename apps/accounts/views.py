from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.common.throttling import throttle_scope

from .serializers import (
    AuthResponseSerializer,
    ChangePasswordSerializer,
    ErrorResponseSerializer,
    MessageResponseSerializer,
    RefreshTokenSerializer,
    UserLoginSerializer,
    UserRegistrationSerializer,
    UserSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    refresh_tokens,
    change_password as change_user_password,
    EmailAlreadyExistsError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidRefreshTokenError,
    IncorrectPasswordError,
)
from .tokens import issue_tokens


def _auth_payload(user, tokens):
    return {
        **tokens,
        'user': UserSerializer(user).data,
    }


@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
    },
    description="Register a company owner or employee and receive JWT tokens.",
    tags=['auth'],
)
@throttle_scope('register')
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = register_user(**serializer.validated_data)
    except EmailAlreadyExistsError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except UserRegistrationError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(_auth_payload(user, issue_tokens(user)), status=status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
    },
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@throttle_scope('login')
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = authenticate_user(**serializer.validated_data)
    except (InvalidCredentialsError, InactiveAccountError) as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)

    return Response(_auth_payload(user, issue_tokens(user)))


@extend_schema(
    request=RefreshTokenSerializer,
    responses={
        200: AuthResponseSerializer,
        401: ErrorResponseSerializer,
    },
    description="Exchange a refresh token for a new token pair.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def refresh(request):
    """Refresh the token pair."""
    serializer = RefreshTokenSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user, tokens = refresh_tokens(refresh_token=serializer.validated_data['refresh_token'])
    except InvalidRefreshTokenError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)

    return Response(_auth_payload(user, tokens))


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    """Get current authenticated user."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=ChangePasswordSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Change the password of the current user.",
    tags=['auth'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def change_password(request):
    """Change password after confirming the current one."""
    serializer = ChangePasswordSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        change_user_password(user=request.user, **serializer.validated_data)
    except IncorrectPasswordError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'message': 'Hasło zostało zmienione'})


@extend_schema(
    request=None,
    responses={200: MessageResponseSerializer},
    description="Logout. Tokens are stateless, the client discards them.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """Logout the current user."""
    return Response({'message': 'Wylogowano pomyślnie'})
