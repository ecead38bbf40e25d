"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    EmailAlreadyExistsError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidRefreshTokenError,
    IncorrectPasswordError,
)
from .registration import register_user
from .authentication import authenticate_user, refresh_tokens, change_password

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'EmailAlreadyExistsError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidRefreshTokenError',
    'IncorrectPasswordError',
    # Services
    'register_user',
    'authenticate_user',
    'refresh_tokens',
    'change_password',
]
