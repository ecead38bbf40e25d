"""Comments on a settlement. Access follows the settlement itself."""

from uuid import UUID

from django.db.models import QuerySet

from apps.accounts.models import User
from apps.settlements.models import SettlementComment

from .settlement_management import get_settlement


def list_comments(*, user: User, company_id: UUID, settlement_id: UUID) -> QuerySet:
    settlement = get_settlement(user=user, company_id=company_id, settlement_id=settlement_id)
    return settlement.comments.select_related('user').order_by('created_at')


def add_comment(*, user: User, company_id: UUID, settlement_id: UUID, content: str) -> SettlementComment:
    settlement = get_settlement(user=user, company_id=company_id, settlement_id=settlement_id)
    return SettlementComment.objects.create(settlement=settlement, user=user, content=content)
