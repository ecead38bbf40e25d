from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid


class UserRole(models.TextChoices):
    ADMIN = 'ADMIN', 'Administrator'
    COMPANY_OWNER = 'COMPANY_OWNER', 'Właściciel firmy'
    EMPLOYEE = 'EMPLOYEE', 'Pracownik'


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def normalize_email(self, email):
        return (email or '').strip().lower()

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', UserRole.ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        if 'company' not in extra_fields and 'company_id' not in extra_fields:
            from apps.companies.models import Company
            extra_fields['company'] = Company.objects.filter(is_system_company=True).first()

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Office user. The role decides what data of the company they can see."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)

    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.EMPLOYEE
    )
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='users'
    )

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['role'], name='users_role_idx'),
            models.Index(fields=['company', 'role'], name='users_company_role_idx'),
            models.Index(fields=['created_at'], name='users_created_idx'),
        ]

    def __str__(self):
        return self.email

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN

    @property
    def is_company_owner(self):
        return self.role == UserRole.COMPANY_OWNER

    @property
    def is_employee(self):
        return self.role == UserRole.EMPLOYEE

    @property
    def can_view_all(self):
        """Owners and admins see every record of the company, employees only their own."""
        return self.role in (UserRole.COMPANY_OWNER, UserRole.ADMIN)

    def get_full_name(self):
        full_name = f'{self.first_name} {self.last_name}'.strip()
        return full_name or self.email
