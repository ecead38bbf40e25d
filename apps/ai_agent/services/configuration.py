"""Global AI configuration (one row, owned by the system company)."""

import logging
from typing import Optional

from django.db import transaction

from apps.accounts.models import User
from apps.ai_agent.models import AIConfiguration
from apps.common.encryption import decrypt_secret, encrypt_secret
from apps.companies.tenancy import get_system_company

from .exceptions import AIConfigExistsError, AIConfigNotFoundError, AINotConfiguredError

logger = logging.getLogger(__name__)


def get_configuration() -> Optional[AIConfiguration]:
    return AIConfiguration.objects.filter(company=get_system_company()).first()


def require_configuration() -> AIConfiguration:
    """
    Raises:
        AINotConfiguredError: No configuration or no API key
    """
    config = get_configuration()
    if config is None or not config.api_key:
        raise AINotConfiguredError()
    return config


def get_api_key(config: AIConfiguration) -> str:
    return decrypt_secret(config.api_key)


@transaction.atomic
def create_configuration(*, user: User, data: dict) -> AIConfiguration:
    """
    Raises:
        AIConfigExistsError: Configuration already created
    """
    if get_configuration() is not None:
        raise AIConfigExistsError()

    data = dict(data)
    api_key = data.pop('api_key', '')
    config = AIConfiguration.objects.create(
        company=get_system_company(),
        api_key=encrypt_secret(api_key),
        created_by=user,
        updated_by=user,
        **data
    )
    logger.info('AI configuration created by %s (%s/%s)', user.id, config.provider, config.model)
    return config


@transaction.atomic
def update_configuration(*, user: User, data: dict) -> AIConfiguration:
    """
    Raises:
        AIConfigNotFoundError: Nothing to update
    """
    config = get_configuration()
    if config is None:
        raise AIConfigNotFoundError()

    data = dict(data)
    if data.get('api_key'):
        config.api_key = encrypt_secret(data.pop('api_key'))
    data.pop('api_key', None)

    for key, value in data.items():
        setattr(config, key, value)
    config.updated_by = user
    config.save()
    logger.info('AI configuration updated by %s', user.id)
    return config
