"""Services for email configuration."""

from .exceptions import (
    EmailConfigNotFoundError,
    EmailConfigExistsError,
    EmailDeliveryError,
    MailboxError,
)
from .configuration import (
    SCOPE_COMPANY,
    SCOPE_SYSTEM,
    SCOPE_USER,
    create_config,
    decrypted,
    delete_config,
    get_config,
    get_decrypted_company_config,
    update_config,
)
from .transport import (
    check_imap,
    check_smtp,
    describe_error,
    fetch_inbox,
    send_email,
)
from .notifications import send_company_email

__all__ = [
    # Exceptions
    'EmailConfigNotFoundError',
    'EmailConfigExistsError',
    'EmailDeliveryError',
    'MailboxError',
    # Configuration
    'SCOPE_COMPANY',
    'SCOPE_SYSTEM',
    'SCOPE_USER',
    'create_config',
    'decrypted',
    'delete_config',
    'get_config',
    'get_decrypted_company_config',
    'update_config',
    # Transport
    'check_imap',
    'check_smtp',
    'describe_error',
    'fetch_inbox',
    'send_email',
    'send_company_email',
]
