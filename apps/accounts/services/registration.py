"""User registration service."""

import logging
from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.accounts.models import UserRole
from apps.companies.models import Company

from .exceptions import EmailAlreadyExistsError, UserRegistrationError

User = get_user_model()
logger = logging.getLogger(__name__)

# ADMIN accounts are created by other admins only
SELF_REGISTRATION_ROLES = (UserRole.COMPANY_OWNER, UserRole.EMPLOYEE)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role: str = UserRole.EMPLOYEE,
    company_id: Optional[UUID] = None
) -> User:
    """
    Register a new user attached to an existing company.

    Args:
        email: User's email address (compared case-insensitively)
        password: Plain password (will be hashed)
        first_name: First name
        last_name: Last name
        role: COMPANY_OWNER or EMPLOYEE
        company_id: Company the user joins

    Returns:
        Created User instance

    Raises:
        EmailAlreadyExistsError: If the email is already registered
        UserRegistrationError: If role or company are invalid
    """
    email = User.objects.normalize_email(email)

    if User.objects.filter(email__iexact=email).exists():
        raise EmailAlreadyExistsError('Użytkownik o tym adresie email już istnieje')

    if role not in SELF_REGISTRATION_ROLES:
        raise UserRegistrationError('Nie można zarejestrować konta z tą rolą')

    if not company_id:
        raise UserRegistrationError('Firma jest wymagana dla tej roli')

    company = Company.objects.filter(id=company_id, is_active=True, is_system_company=False).first()
    if company is None:
        raise UserRegistrationError('Firma nie została znaleziona')

    user = User.objects.create_user(
        email=email,
        password=password,
        first_name=first_name,
        last_name=last_name,
        role=role,
        company=company,
    )
    logger.info('Registered user %s (%s) in company %s', user.id, role, company.id)
    return user
