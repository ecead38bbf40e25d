"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class EmailAlreadyExistsError(AccountsServiceError):
    """Raised when the email is taken (case-insensitive)."""
    pass


class UserRegistrationError(AccountsServiceError):
    """Raised when registration data is inconsistent (role, company)."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class InvalidRefreshTokenError(AccountsServiceError):
    """Raised when a refresh token is invalid, expired or signed with another secret."""
    pass


class IncorrectPasswordError(AccountsServiceError):
    """Raised when the current password does not match."""
    pass
