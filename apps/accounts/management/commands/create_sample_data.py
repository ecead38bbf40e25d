"""
Management command to create demo data for local development.

Creates the system company with an administrator, one accounting office
with its owner and an employee, enables every module for the office and
adds a few clients. Running it again only fills in what is missing.

Usage:
    python manage.py create_sample_data
    python manage.py create_sample_data --no-clients
"""

from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User, UserRole
from apps.clients.models import Client, EmploymentType, TaxScheme, VatStatus, ZusStatus
from apps.companies.models import Company, SYSTEM_COMPANY_NAME
from apps.modules.models import (
    AI_AGENT,
    CLIENTS,
    DEFAULT_MODULES,
    SETTLEMENTS,
    TIME_TRACKING,
    CompanyModuleAccess,
    Module,
    UserModulePermission,
)

DEMO_COMPANY_NAME = 'Biuro Rachunkowe Demo'

EMPLOYEE_MODULES = [CLIENTS, TIME_TRACKING, SETTLEMENTS, AI_AGENT]

DEMO_CLIENTS = [
    {
        'name': 'Kowalski Usługi Budowlane',
        'nip': '5260250274',
        'email': 'biuro@kowalski-budowa.pl',
        'employment_type': EmploymentType.DG,
        'vat_status': VatStatus.VAT_MONTHLY,
        'tax_scheme': TaxScheme.PIT_19,
        'zus_status': ZusStatus.FULL,
    },
    {
        'name': 'Nowak Design',
        'nip': '1234563218',
        'email': 'anna@nowakdesign.pl',
        'employment_type': EmploymentType.DG_ETAT,
        'vat_status': VatStatus.VAT_QUARTERLY,
        'tax_scheme': TaxScheme.LUMP_SUM,
        'zus_status': ZusStatus.PREFERENTIAL,
    },
    {
        'name': 'Wiśniewska Gabinet Fizjoterapii',
        'nip': '7251801126',
        'email': 'kontakt@fizjo-wisniewska.pl',
        'employment_type': EmploymentType.DG,
        'vat_status': VatStatus.NO,
        'tax_scheme': TaxScheme.GENERAL,
        'zus_status': ZusStatus.FULL,
    },
]


class Command(BaseCommand):
    help = 'Create demo companies, users, module access and clients'

    def add_arguments(self, parser):
        parser.add_argument(
            '--no-clients',
            action='store_true',
            help='Skip creating demo clients',
        )

    def _user(self, email, password, **fields):
        user = User.objects.filter(email__iexact=email).first()
        if user is not None:
            self.stdout.write(f'  = {email} already exists')
            return user
        user = User.objects.create_user(email=email.lower(), password=password, **fields)
        self.stdout.write(f'  + {email} ({user.role})')
        return user

    @transaction.atomic
    def handle(self, *args, **options):
        modules = {
            slug: Module.objects.get_or_create(slug=slug, defaults={'name': name, 'description': description})[0]
            for slug, name, description in DEFAULT_MODULES
        }

        system_company, _ = Company.objects.get_or_create(
            is_system_company=True,
            defaults={'name': SYSTEM_COMPANY_NAME},
        )
        self.stdout.write('\nUsers:')
        admin = self._user(
            settings.SEED_ADMIN_EMAIL,
            settings.SEED_ADMIN_PASSWORD,
            first_name='Admin',
            last_name='Systemowy',
            role=UserRole.ADMIN,
            company=system_company,
            is_staff=True,
        )
        if system_company.owner_id is None:
            system_company.owner = admin
            system_company.save(update_fields=['owner'])

        company, _ = Company.objects.get_or_create(name=DEMO_COMPANY_NAME, is_system_company=False)
        owner = self._user(
            settings.SEED_OWNER_EMAIL,
            settings.SEED_OWNER_PASSWORD,
            first_name='Katarzyna',
            last_name='Właścicielka',
            role=UserRole.COMPANY_OWNER,
            company=company,
        )
        if company.owner_id is None:
            company.owner = owner
            company.save(update_fields=['owner'])

        employee = self._user(
            settings.SEED_EMPLOYEE_EMAIL,
            settings.SEED_EMPLOYEE_PASSWORD,
            first_name='Tomasz',
            last_name='Księgowy',
            role=UserRole.EMPLOYEE,
            company=company,
        )

        for module in modules.values():
            CompanyModuleAccess.objects.update_or_create(
                company=company, module=module, defaults={'is_enabled': True}
            )
        for slug in EMPLOYEE_MODULES:
            UserModulePermission.objects.get_or_create(
                user=employee,
                module=modules[slug],
                defaults={'permissions': ['read', 'write'], 'granted_by': owner},
            )
        self.stdout.write(f'\nModules enabled for {company.name}: {len(modules)}')

        if not options['no_clients']:
            created = 0
            for data in DEMO_CLIENTS:
                _, was_created = Client.objects.get_or_create(
                    company=company,
                    nip=data['nip'],
                    defaults={**data, 'created_by': owner},
                )
                created += was_created
            self.stdout.write(f'Clients created: {created}')

        self.stdout.write(self.style.SUCCESS('\nDemo data ready.'))
