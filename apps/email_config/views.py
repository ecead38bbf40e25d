from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.common.throttling import throttle_scope

from .permissions import EmailScopePermission
from .serializers import (
    ConnectionTestResultSerializer,
    EmailConfigSerializer,
    EmailConfigWriteSerializer,
    ImapTestSerializer,
    InboxMessageSerializer,
    InboxQuerySerializer,
    SendEmailSerializer,
    SmtpTestSerializer,
)
from . import services


@extend_schema(tags=['email-config'])
class EmailConfigViewSet(viewsets.ViewSet):
    """
    Mailbox configuration of one scope (user, company or system-admin).

    The scope is bound in urls.py:
        EmailConfigViewSet.as_view({'get': 'retrieve'}, scope='user')
    """

    scope = services.SCOPE_USER
    permission_classes = [IsAuthenticated, EmailScopePermission]

    def _config(self, request):
        return services.get_config(scope=self.scope, user=request.user)

    @extend_schema(responses={200: EmailConfigSerializer})
    def retrieve(self, request):
        return Response(EmailConfigSerializer(self._config(request)).data)

    @extend_schema(request=EmailConfigWriteSerializer, responses={201: EmailConfigSerializer})
    def create(self, request):
        serializer = EmailConfigWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        config = services.create_config(scope=self.scope, user=request.user, data=serializer.validated_data)
        return Response(EmailConfigSerializer(config).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=EmailConfigWriteSerializer, responses={200: EmailConfigSerializer})
    def update(self, request):
        serializer = EmailConfigWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        config = services.update_config(scope=self.scope, user=request.user, data=serializer.validated_data)
        return Response(EmailConfigSerializer(config).data)

    def destroy(self, request):
        services.delete_config(scope=self.scope, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=SendEmailSerializer, responses={200: ConnectionTestResultSerializer})
    def send(self, request):
        serializer = SendEmailSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        config = services.decrypted(self._config(request))
        services.send_email(config, **serializer.validated_data)
        return Response({'success': True, 'message': 'Wiadomość została wysłana'})

    @extend_schema(parameters=[InboxQuerySerializer], responses={200: InboxMessageSerializer(many=True)})
    def inbox(self, request):
        query = InboxQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        config = services.decrypted(self._config(request))
        messages = services.fetch_inbox(config, limit=query.validated_data['limit'])
        return Response(InboxMessageSerializer(messages, many=True).data)


@extend_schema(tags=['email-config'], request=SmtpTestSerializer, responses={200: ConnectionTestResultSerializer})
@throttle_scope('smtp_test')
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def smtp_check(request):
    """Try SMTP credentials without saving them."""
    serializer = SmtpTestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return Response(services.check_smtp(serializer.validated_data))


@extend_schema(tags=['email-config'], request=ImapTestSerializer, responses={200: ConnectionTestResultSerializer})
@throttle_scope('imap_test')
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def imap_check(request):
    """Try IMAP credentials without saving them."""
    serializer = ImapTestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return Response(services.check_imap(serializer.validated_data))
