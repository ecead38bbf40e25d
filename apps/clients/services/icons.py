"""Client icons: company-defined badges attached to clients."""

import logging
from typing import Iterable, List
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.clients.models import ClientIcon, ClientIconAssignment, IconType

from .client_management import get_client
from .exceptions import DuplicateIconNameError, IconNotFoundError, InvalidIconError

logger = logging.getLogger(__name__)


def list_icons(*, company_id: UUID) -> QuerySet:
    return ClientIcon.objects.filter(company_id=company_id, is_active=True).order_by('name')


def get_icon(*, company_id: UUID, icon_id: UUID) -> ClientIcon:
    try:
        return ClientIcon.objects.get(id=icon_id, company_id=company_id, is_active=True)
    except ClientIcon.DoesNotExist:
        raise IconNotFoundError()


def _validate_icon(company_id: UUID, name: str, icon_type: str, icon_value: str, exclude_id=None):
    if icon_type in (IconType.LUCIDE, IconType.EMOJI) and not icon_value:
        raise InvalidIconError()

    duplicates = ClientIcon.objects.filter(company_id=company_id, name__iexact=name, is_active=True)
    if exclude_id:
        duplicates = duplicates.exclude(id=exclude_id)
    if duplicates.exists():
        raise DuplicateIconNameError()


@transaction.atomic
def create_icon(*, user: User, company_id: UUID, data: dict) -> ClientIcon:
    """
    Raises:
        InvalidIconError: lucide/emoji icon without a value
        DuplicateIconNameError: Active icon with the same name exists
    """
    icon_type = data.get('icon_type', IconType.LUCIDE)
    _validate_icon(company_id, data['name'], icon_type, data.get('icon_value', ''))
    return ClientIcon.objects.create(company_id=company_id, created_by=user, **data)


@transaction.atomic
def update_icon(*, company_id: UUID, icon_id: UUID, data: dict) -> ClientIcon:
    icon = get_icon(company_id=company_id, icon_id=icon_id)
    for key, value in data.items():
        setattr(icon, key, value)
    _validate_icon(company_id, icon.name, icon.icon_type, icon.icon_value, exclude_id=icon.id)
    icon.save()
    return icon


@transaction.atomic
def deactivate_icon(*, company_id: UUID, icon_id: UUID) -> None:
    icon = get_icon(company_id=company_id, icon_id=icon_id)
    icon.is_active = False
    icon.save(update_fields=['is_active', 'updated_at'])


def get_client_icons(*, company_id: UUID, client_id: UUID) -> List[ClientIcon]:
    client = get_client(company_id=company_id, client_id=client_id)
    return list(
        ClientIcon.objects
        .filter(assignments__client=client, is_active=True)
        .order_by('name')
    )


@transaction.atomic
def assign_icon(*, company_id: UUID, client_id: UUID, icon_id: UUID) -> ClientIconAssignment:
    """Attach an icon to a client. Assigning twice returns the existing assignment."""
    client = get_client(company_id=company_id, client_id=client_id)
    icon = get_icon(company_id=company_id, icon_id=icon_id)
    assignment, _ = ClientIconAssignment.objects.get_or_create(client=client, icon=icon)
    return assignment


@transaction.atomic
def unassign_icon(*, company_id: UUID, client_id: UUID, icon_id: UUID) -> None:
    client = get_client(company_id=company_id, client_id=client_id)
    deleted, _ = ClientIconAssignment.objects.filter(client=client, icon_id=icon_id).delete()
    if not deleted:
        raise IconNotFoundError('Ikona nie jest przypisana do klienta.')


@transaction.atomic
def set_client_icons(*, company_id: UUID, client_id: UUID, icon_ids: Iterable[UUID]) -> List[ClientIcon]:
    """Replace all icon assignments of a client."""
    client = get_client(company_id=company_id, client_id=client_id)
    icons = list(ClientIcon.objects.filter(company_id=company_id, is_active=True, id__in=list(icon_ids)))

    ClientIconAssignment.objects.filter(client=client).delete()
    ClientIconAssignment.objects.bulk_create(
        [ClientIconAssignment(client=client, icon=icon) for icon in icons]
    )
    logger.info('Client %s icons set to %d icon(s)', client.id, len(icons))
    return sorted(icons, key=lambda icon: icon.name)
