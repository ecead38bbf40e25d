"""User authentication and token refresh services."""

import logging
from typing import Tuple

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings

from apps.accounts.tokens import RefreshToken, issue_tokens

from .exceptions import (
    IncorrectPasswordError,
    InactiveAccountError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
)

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Authenticate user with email and password.

    Uses select_for_update() to prevent race conditions when updating last_login.

    Args:
        email: User's email (case-insensitive)
        password: User's password

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid
        InactiveAccountError: If account is deactivated
    """
    user = (
        User.objects
        .select_for_update()
        .filter(email__iexact=email.strip())
        .first()
    )

    if user is None or not user.check_password(password):
        raise InvalidCredentialsError('Nieprawidłowe dane logowania')

    if not user.is_active:
        raise InactiveAccountError('Konto użytkownika jest nieaktywne')

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user


def refresh_tokens(*, refresh_token: str) -> Tuple[User, dict]:
    """
    Exchange a refresh token for a new token pair.

    The token is verified with the refresh secret, so access tokens and tokens
    signed with any other key are rejected.

    Returns:
        Tuple of (user, tokens dict)

    Raises:
        InvalidRefreshTokenError: If the token is invalid or the user is gone/inactive
    """
    try:
        token = RefreshToken(refresh_token)
    except TokenError:
        raise InvalidRefreshTokenError('Nieprawidłowy lub wygasły token odświeżania')

    user_id = token.payload.get(api_settings.USER_ID_CLAIM)
    user = User.objects.filter(id=user_id).first() if user_id else None

    if user is None or not user.is_active:
        logger.warning('Refresh rejected for missing or inactive user %s', user_id)
        raise InvalidRefreshTokenError('Nieprawidłowy lub wygasły token odświeżania')

    return user, issue_tokens(user)


@transaction.atomic
def change_password(*, user: User, current_password: str, new_password: str) -> None:
    """
    Change the password of an authenticated user.

    Raises:
        IncorrectPasswordError: If current_password does not match
    """
    if not user.check_password(current_password):
        raise IncorrectPasswordError('Obecne hasło jest nieprawidłowe')

    user.set_password(new_password)
    user.save(update_fields=['password', 'updated_at'])
    logger.info('Password changed for user %s', user.id)
