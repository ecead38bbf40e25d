"""
JWT token classes.

Access and refresh tokens are signed with different secrets (JWT_SECRET and
JWT_REFRESH_SECRET) so a token of one kind can never be verified as the other.
"""

from django.conf import settings
from rest_framework_simplejwt.backends import TokenBackend
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import (
    AccessToken as BaseAccessToken,
    RefreshToken as BaseRefreshToken,
)


def _backend(signing_key: str) -> TokenBackend:
    return TokenBackend(
        api_settings.ALGORITHM,
        signing_key=signing_key,
        audience=api_settings.AUDIENCE,
        issuer=api_settings.ISSUER,
        leeway=api_settings.LEEWAY,
    )


class AccessToken(BaseAccessToken):
    """Short lived token accepted by JWTAuthentication."""

    def get_token_backend(self):
        return _backend(settings.JWT_SECRET)


class RefreshToken(BaseRefreshToken):
    """Long lived token, only accepted by the refresh endpoint."""

    access_token_class = AccessToken

    def get_token_backend(self):
        return _backend(settings.JWT_REFRESH_SECRET)

    @classmethod
    def for_user(cls, user):
        token = super().for_user(user)
        token['email'] = user.email
        token['role'] = user.role
        token['company_id'] = str(user.company_id) if user.company_id else None
        return token


def issue_tokens(user) -> dict:
    """Return a fresh access/refresh pair for the user."""
    refresh = RefreshToken.for_user(user)
    return {
        'access_token': str(refresh.access_token),
        'refresh_token': str(refresh),
    }
