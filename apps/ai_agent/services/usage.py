"""
Token usage tracking and monthly limits.

Usage is stored per (user, company, day). Limits are monthly, either for the
whole company (user is null) or for one user of the company.
"""

import datetime
import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import F, Sum
from django.utils import timezone
from rest_framework.exceptions import NotFound

from apps.accounts.models import User
from apps.ai_agent.models import TokenLimit, TokenUsage
from apps.common.utils import half_up_percent
from apps.companies.models import Company
from apps.notifications.models import NotificationType
from apps.notifications.services import notify

from .exceptions import LimitTargetError, TokenLimitExceededError

logger = logging.getLogger(__name__)

TOTALS = {
    'total_input_tokens': Sum('total_input_tokens'),
    'total_output_tokens': Sum('total_output_tokens'),
    'total_tokens': Sum('total_tokens'),
    'conversation_count': Sum('conversation_count'),
    'message_count': Sum('message_count'),
}


def _totals(qs) -> dict:
    return {key: value or 0 for key, value in qs.aggregate(**TOTALS).items()}


def _month_start() -> datetime.date:
    return timezone.now().date().replace(day=1)


# =============================================================================
# Tracking
# =============================================================================

@transaction.atomic
def track_usage(*, user: User, company_id: UUID, input_tokens: int = 0, output_tokens: int = 0,
                messages: int = 0, conversations: int = 0) -> None:
    """Add to today's counters, creating the row on first use."""
    usage, _ = TokenUsage.objects.get_or_create(user=user, company_id=company_id, date=timezone.now().date())
    TokenUsage.objects.filter(id=usage.id).update(
        total_input_tokens=F('total_input_tokens') + input_tokens,
        total_output_tokens=F('total_output_tokens') + output_tokens,
        total_tokens=F('total_tokens') + input_tokens + output_tokens,
        message_count=F('message_count') + messages,
        conversation_count=F('conversation_count') + conversations,
    )


def monthly_usage(*, company_id: UUID, user: Optional[User] = None) -> int:
    qs = TokenUsage.objects.filter(company_id=company_id, date__gte=_month_start())
    if user is not None:
        qs = qs.filter(user=user)
    return qs.aggregate(total=Sum('total_tokens'))['total'] or 0


# =============================================================================
# Reports
# =============================================================================

def get_my_usage(*, user: User, company_id: UUID, days: int = 30) -> dict:
    since = timezone.now().date() - datetime.timedelta(days=days - 1)
    qs = TokenUsage.objects.filter(user=user, company_id=company_id, date__gte=since).order_by('date')
    return {
        'days': days,
        'totals': _totals(qs),
        'daily': list(qs.values(
            'date', 'total_input_tokens', 'total_output_tokens', 'total_tokens',
            'conversation_count', 'message_count',
        )),
    }


def get_company_usage(*, company_id: UUID) -> dict:
    qs = TokenUsage.objects.filter(company_id=company_id)
    users = (
        qs.values('user_id', 'user__email', 'user__first_name', 'user__last_name')
        .annotate(**TOTALS)
        .order_by('-total_tokens')
    )
    return {
        'totals': _totals(qs),
        'users': [
            {
                'user_id': row['user_id'],
                'email': row['user__email'],
                'first_name': row['user__first_name'],
                'last_name': row['user__last_name'],
                **{key: row[key] or 0 for key in TOTALS},
            }
            for row in users
        ],
    }


def get_all_usage() -> list:
    rows = (
        TokenUsage.objects
        .values('company_id', 'company__name')
        .annotate(**TOTALS)
        .order_by('-total_tokens')
    )
    return [
        {
            'company_id': row['company_id'],
            'company_name': row['company__name'],
            **{key: row[key] or 0 for key in TOTALS},
        }
        for row in rows
    ]


# =============================================================================
# Limits
# =============================================================================

def describe_limit(limit: Optional[TokenLimit], current_usage: int) -> Optional[dict]:
    """Limit with its current usage, or None when no limit is set."""
    if limit is None:
        return None
    percentage = half_up_percent(current_usage, limit.monthly_limit)
    exceeded = current_usage >= limit.monthly_limit
    return {
        'id': limit.id,
        'monthly_limit': limit.monthly_limit,
        'warning_threshold_percentage': limit.warning_threshold_percentage,
        'notify_on_warning': limit.notify_on_warning,
        'notify_on_exceeded': limit.notify_on_exceeded,
        'current_usage': current_usage,
        'usage_percentage': percentage,
        'is_exceeded': exceeded,
        'is_warning': not exceeded and percentage >= limit.warning_threshold_percentage,
    }


def _user_limit(user: User, company_id: UUID) -> Optional[TokenLimit]:
    return TokenLimit.objects.filter(company_id=company_id, user=user).first()


def _company_limit(company_id: UUID) -> Optional[TokenLimit]:
    return TokenLimit.objects.filter(company_id=company_id, user__isnull=True).first()


def get_my_limits(*, user: User, company_id: UUID) -> dict:
    return {
        'user_limit': describe_limit(_user_limit(user, company_id), monthly_usage(company_id=company_id, user=user)),
        'company_limit': describe_limit(_company_limit(company_id), monthly_usage(company_id=company_id)),
    }


def check_limit(*, user: User, company_id: UUID) -> None:
    """
    Raises:
        TokenLimitExceededError: The user's or the company's monthly usage reached its limit
    """
    user_limit = _user_limit(user, company_id)
    if user_limit and monthly_usage(company_id=company_id, user=user) >= user_limit.monthly_limit:
        raise TokenLimitExceededError()

    company_limit = _company_limit(company_id)
    if company_limit and monthly_usage(company_id=company_id) >= company_limit.monthly_limit:
        raise TokenLimitExceededError('Przekroczono miesięczny limit tokenów firmy')


def notify_thresholds(*, user: User, company_id: UUID, before: int, after: int) -> None:
    """Tell the user when this request pushed their own limit past the warning level or the limit."""
    limit = _user_limit(user, company_id)
    if limit is None:
        return

    warning_level = limit.monthly_limit * limit.warning_threshold_percentage / 100
    if limit.notify_on_exceeded and before < limit.monthly_limit <= after:
        title, message = 'Limit tokenów AI wyczerpany', 'Wykorzystano cały miesięczny limit tokenów AI.'
    elif limit.notify_on_warning and before < warning_level <= after < limit.monthly_limit:
        title = 'Zbliżasz się do limitu tokenów AI'
        message = f'Wykorzystano {half_up_percent(after, limit.monthly_limit)}% miesięcznego limitu tokenów AI.'
    else:
        return

    notify(
        company_id=company_id,
        recipients=[user],
        type=NotificationType.SYSTEM,
        title=title,
        message=message,
        data={'monthly_limit': limit.monthly_limit, 'current_usage': after},
    )


def _save_limit(*, company_id: UUID, user: Optional[User], set_by: User, data: dict) -> TokenLimit:
    limit, _ = TokenLimit.objects.update_or_create(
        company_id=company_id,
        user=user,
        defaults={**data, 'set_by': set_by},
    )
    return limit


@transaction.atomic
def set_company_limit(*, admin: User, company_id: UUID, data: dict) -> TokenLimit:
    company = Company.objects.filter(id=company_id, is_system_company=False).first()
    if company is None:
        raise NotFound('Firma nie została znaleziona')
    limit = _save_limit(company_id=company.id, user=None, set_by=admin, data=data)
    logger.info('Company %s token limit set to %d by %s', company.id, limit.monthly_limit, admin.id)
    return limit


@transaction.atomic
def set_user_limit(*, owner: User, user_id: UUID, data: dict) -> TokenLimit:
    """
    Raises:
        LimitTargetError: The user does not belong to the owner's company
    """
    target = User.objects.filter(id=user_id, company_id=owner.company_id).first()
    if target is None or owner.company_id is None:
        raise LimitTargetError()
    limit = _save_limit(company_id=owner.company_id, user=target, set_by=owner, data=data)
    logger.info('User %s token limit set to %d by %s', target.id, limit.monthly_limit, owner.id)
    return limit
