"""
SMTP and IMAP transport.

Sending goes through Django's mail framework with the SMTP backend
(EMAIL_CONFIG_BACKEND), reading uses imaplib and the email package.
Low level errors are reported with Polish messages that do not leak
server details.
"""

import email
import errno
import imaplib
import logging
import smtplib
import socket
import ssl
from email.policy import default as default_policy
from email.utils import formataddr, parsedate_to_datetime
from typing import List, Optional

from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection

from .exceptions import EmailDeliveryError, MailboxError

logger = logging.getLogger(__name__)

ERROR_MESSAGES = {
    'refused': 'Nie można połączyć się z serwerem email',
    'timeout': 'Przekroczono limit czasu połączenia',
    'auth': 'Błąd uwierzytelniania - sprawdź dane logowania',
    'not_found': 'Nie znaleziono serwera email',
    'reset': 'Połączenie zostało przerwane',
    'unreachable': 'Serwer email jest nieosiągalny',
    'certificate': 'Nie można zweryfikować certyfikatu serwera',
    'network': 'Błąd połączenia sieciowego',
}


def describe_error(exc: Exception) -> str:
    """Map a connection exception to a user facing message."""
    if isinstance(exc, smtplib.SMTPAuthenticationError):
        return ERROR_MESSAGES['auth']
    if isinstance(exc, imaplib.IMAP4.error):
        return ERROR_MESSAGES['auth']
    if isinstance(exc, socket.gaierror):
        return ERROR_MESSAGES['not_found']
    if isinstance(exc, (socket.timeout, TimeoutError)):
        return ERROR_MESSAGES['timeout']
    if isinstance(exc, ConnectionRefusedError):
        return ERROR_MESSAGES['refused']
    if isinstance(exc, ConnectionResetError):
        return ERROR_MESSAGES['reset']
    if isinstance(exc, ssl.SSLCertVerificationError):
        return ERROR_MESSAGES['certificate']
    if isinstance(exc, OSError) and exc.errno in (errno.ENETUNREACH, errno.EHOSTUNREACH):
        return ERROR_MESSAGES['unreachable']
    return ERROR_MESSAGES['network']


# =============================================================================
# SMTP
# =============================================================================

def smtp_connection(config: dict):
    """
    Django email backend bound to the configuration.

    smtp_secure selects implicit TLS (usually port 465); otherwise STARTTLS
    is used on the submission port 587 and plain SMTP elsewhere.
    """
    secure = bool(config.get('smtp_secure'))
    return get_connection(
        settings.EMAIL_CONFIG_BACKEND,
        host=config['smtp_host'],
        port=config['smtp_port'],
        username=config['smtp_user'],
        password=config['smtp_password'],
        use_ssl=secure,
        use_tls=not secure and config['smtp_port'] == 587,
        timeout=settings.EMAIL_CONNECTION_TIMEOUT,
        fail_silently=False,
    )


def send_email(config: dict, *, to: List[str], subject: str, text: str = '', html: Optional[str] = None) -> None:
    """
    Send one message using the configuration.

    Raises:
        EmailDeliveryError: SMTP or network failure
    """
    sender = formataddr((config.get('display_name') or '', config['smtp_user']))
    message = EmailMultiAlternatives(
        subject=subject,
        body=text or '',
        from_email=sender,
        to=to,
        connection=smtp_connection(config),
    )
    if html:
        message.attach_alternative(html, 'text/html')

    try:
        message.send()
    except (smtplib.SMTPException, OSError) as e:
        logger.warning('Sending email via %s failed: %s', config['smtp_host'], e)
        raise EmailDeliveryError(describe_error(e))


def check_smtp(config: dict) -> dict:
    """Open and close an SMTP session. Returns {success, message}."""
    connection = smtp_connection(config)
    try:
        connection.open()
        connection.close()
    except (smtplib.SMTPException, OSError) as e:
        logger.info('SMTP test for %s failed: %s', config['smtp_host'], e)
        return {'success': False, 'message': describe_error(e)}
    return {'success': True, 'message': 'Połączenie SMTP działa poprawnie'}


# =============================================================================
# IMAP
# =============================================================================

def imap_connection(config: dict):
    timeout = settings.EMAIL_CONNECTION_TIMEOUT
    if config.get('imap_tls'):
        client = imaplib.IMAP4_SSL(config['imap_host'], config['imap_port'], timeout=timeout)
    else:
        client = imaplib.IMAP4(config['imap_host'], config['imap_port'], timeout=timeout)
    try:
        client.login(config['imap_user'], config['imap_password'])
    except (imaplib.IMAP4.error, OSError):
        client.shutdown()
        raise
    return client


def _part_text(part) -> str:
    try:
        return part.get_content()
    except (LookupError, UnicodeError):
        # Unknown or lying charset
        payload = part.get_payload(decode=True) or b''
        return payload.decode('utf-8', 'replace')


def _body_parts(message):
    text_part = message.get_body(preferencelist=('plain',))
    html_part = message.get_body(preferencelist=('html',))
    text = _part_text(text_part) if text_part is not None else ''
    html = _part_text(html_part) if html_part is not None else None
    return text, html


def parse_message(raw: bytes, uid: str = '') -> dict:
    message = email.message_from_bytes(raw, policy=default_policy)
    text, html = _body_parts(message)

    date = None
    if message['date']:
        try:
            date = parsedate_to_datetime(str(message['date'])).isoformat()
        except (TypeError, ValueError):
            date = None

    return {
        'uid': uid,
        'from': str(message['from'] or ''),
        'to': str(message['to'] or ''),
        'subject': str(message['subject'] or ''),
        'date': date,
        'text': text,
        'html': html,
    }


def fetch_inbox(config: dict, limit: int = 20) -> List[dict]:
    """
    Latest ``limit`` messages of INBOX, newest first.

    Raises:
        MailboxError: IMAP or network failure
    """
    try:
        client = imap_connection(config)
    except (imaplib.IMAP4.error, OSError) as e:
        logger.warning('IMAP login to %s failed: %s', config['imap_host'], e)
        raise MailboxError(describe_error(e))

    try:
        client.select('INBOX', readonly=True)
        _, data = client.search(None, 'ALL')
        ids = data[0].split() if data and data[0] else []

        messages = []
        for message_id in reversed(ids[-limit:]):
            _, parts = client.fetch(message_id, '(RFC822)')
            for part in parts:
                if isinstance(part, tuple):
                    messages.append(parse_message(part[1], uid=message_id.decode()))
        return messages
    except (imaplib.IMAP4.error, OSError) as e:
        logger.warning('Reading INBOX on %s failed: %s', config['imap_host'], e)
        raise MailboxError(describe_error(e))
    finally:
        try:
            client.logout()
        except (imaplib.IMAP4.error, OSError) as e:
            logger.debug('IMAP logout from %s failed: %s', config['imap_host'], e)


def check_imap(config: dict) -> dict:
    """Log in and out of the IMAP server. Returns {success, message}."""
    try:
        client = imap_connection(config)
        client.logout()
    except (imaplib.IMAP4.error, OSError) as e:
        logger.info('IMAP test for %s failed: %s', config['imap_host'], e)
        return {'success': False, 'message': describe_error(e)}
    return {'success': True, 'message': 'Połączenie IMAP działa poprawnie'}
