"""
Email configuration storage.

A configuration is owned by one of three scopes:

    user          - the requesting user
    company       - the requesting user's company
    system-admin  - the system company (administrators)
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import PermissionDenied

from apps.accounts.models import User
from apps.common.encryption import decrypt_secret, encrypt_secret
from apps.companies.tenancy import get_system_company
from apps.email_config.models import EmailConfiguration

from .exceptions import EmailConfigExistsError, EmailConfigNotFoundError

logger = logging.getLogger(__name__)

SCOPE_USER = 'user'
SCOPE_COMPANY = 'company'
SCOPE_SYSTEM = 'system-admin'

SECRET_FIELDS = ('smtp_password', 'imap_password')


def owner_lookup(*, scope: str, user: User) -> dict:
    """Filter kwargs selecting the configuration owner for the scope."""
    if scope == SCOPE_USER:
        return {'user_id': user.id}
    if scope == SCOPE_SYSTEM:
        return {'company_id': get_system_company().id}
    if not user.company_id:
        raise PermissionDenied('Użytkownik nie jest przypisany do firmy')
    return {'company_id': user.company_id}


def get_config(*, scope: str, user: User) -> EmailConfiguration:
    """
    Raises:
        EmailConfigNotFoundError: Scope has no configuration
    """
    try:
        return EmailConfiguration.objects.get(**owner_lookup(scope=scope, user=user))
    except EmailConfiguration.DoesNotExist:
        raise EmailConfigNotFoundError()


@transaction.atomic
def create_config(*, scope: str, user: User, data: dict) -> EmailConfiguration:
    """
    Raises:
        EmailConfigExistsError: Scope already has a configuration
    """
    lookup = owner_lookup(scope=scope, user=user)
    if EmailConfiguration.objects.filter(**lookup).exists():
        raise EmailConfigExistsError()

    data = dict(data)
    for field in SECRET_FIELDS:
        data[field] = encrypt_secret(data.get(field, ''))

    config = EmailConfiguration.objects.create(**lookup, **data)
    logger.info('Email configuration %s created (%s)', config.id, scope)
    return config


@transaction.atomic
def update_config(*, scope: str, user: User, data: dict) -> EmailConfiguration:
    """Update the configuration. Passwords are replaced only when provided."""
    config = get_config(scope=scope, user=user)
    for key, value in data.items():
        if key in SECRET_FIELDS:
            if not value:
                continue
            value = encrypt_secret(value)
        setattr(config, key, value)
    config.save()
    return config


@transaction.atomic
def delete_config(*, scope: str, user: User) -> None:
    config = get_config(scope=scope, user=user)
    logger.info('Email configuration %s deleted (%s)', config.id, scope)
    config.delete()


def decrypted(config: EmailConfiguration) -> dict:
    """Plain connection settings of a configuration."""
    return {
        'display_name': config.display_name,
        'smtp_host': config.smtp_host,
        'smtp_port': config.smtp_port,
        'smtp_secure': config.smtp_secure,
        'smtp_user': config.smtp_user,
        'smtp_password': decrypt_secret(config.smtp_password),
        'imap_host': config.imap_host,
        'imap_port': config.imap_port,
        'imap_tls': config.imap_tls,
        'imap_user': config.imap_user,
        'imap_password': decrypt_secret(config.imap_password),
    }


def get_decrypted_company_config(company_id: UUID) -> Optional[dict]:
    """Active company configuration with decrypted passwords, or None."""
    config = EmailConfiguration.objects.filter(company_id=company_id, is_active=True).first()
    if config is None:
        return None
    return decrypted(config)
