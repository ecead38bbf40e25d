"""
JWT authentication for websocket connections.

The access token is read from the ``token`` query parameter or, for clients
that can set headers, from ``Authorization: Bearer <token>``.
"""

import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings

from apps.accounts.models import User
from apps.accounts.tokens import AccessToken

logger = logging.getLogger(__name__)


def _token_from_scope(scope):
    query = parse_qs(scope.get('query_string', b'').decode())
    if query.get('token'):
        return query['token'][0]

    for name, value in scope.get('headers', []):
        if name == b'authorization':
            parts = value.decode().split()
            if len(parts) == 2 and parts[0].lower() == 'bearer':
                return parts[1]
    return None


@database_sync_to_async
def get_user_for_token(raw_token):
    try:
        token = AccessToken(raw_token)
    except TokenError as e:
        logger.info('Websocket token rejected: %s', e)
        return AnonymousUser()

    user_id = token.get(api_settings.USER_ID_CLAIM)
    try:
        return User.objects.get(id=user_id, is_active=True)
    except User.DoesNotExist:
        return AnonymousUser()


class JWTAuthMiddleware(BaseMiddleware):
    """Populate scope['user'] from the access token."""

    async def __call__(self, scope, receive, send):
        scope = dict(scope)
        raw_token = _token_from_scope(scope)
        scope['user'] = await get_user_for_token(raw_token) if raw_token else AnonymousUser()
        return await super().__call__(scope, receive, send)
