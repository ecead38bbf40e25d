"""
Symmetric encryption of stored secrets (AI API keys, mailbox passwords).

Uses Fernet with a key derived from ENCRYPTION_KEY, falling back to SECRET_KEY.
"""

import base64
import hashlib

from cryptography.fernet import Fernet, InvalidToken
from django.conf import settings
from rest_framework.exceptions import APIException


class SecretDecryptionError(APIException):
    status_code = 400
    default_detail = 'Zapisany sekret jest uszkodzony. Skonfiguruj go ponownie.'
    default_code = 'secret_decryption_failed'


def _fernet() -> Fernet:
    source = settings.ENCRYPTION_KEY or settings.SECRET_KEY
    key = base64.urlsafe_b64encode(hashlib.sha256(source.encode('utf-8')).digest())
    return Fernet(key)


def encrypt_secret(value: str) -> str:
    """Encrypt a plain text secret. Empty values are stored as ''."""
    if not value:
        return ''
    return _fernet().encrypt(value.encode('utf-8')).decode('ascii')


def decrypt_secret(token: str) -> str:
    """
    Decrypt a value produced by encrypt_secret.

    Raises:
        SecretDecryptionError: If the token was tampered with or the key changed
    """
    if not token:
        return ''
    try:
        return _fernet().decrypt(token.encode('ascii')).decode('utf-8')
    except (InvalidToken, ValueError):
        raise SecretDecryptionError()
