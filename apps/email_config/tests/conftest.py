import imaplib

import pytest

from apps.common.encryption import encrypt_secret
from apps.email_config.models import EmailConfiguration

RAW_MESSAGE = (
    b'From: Jan Klient <jan@example.com>\r\n'
    b'To: biuro@firma.pl\r\n'
    b'Subject: Faktura {id}\r\n'
    b'Date: Mon, 06 Oct 2025 10:00:00 +0200\r\n'
    b'Content-Type: text/plain; charset=utf-8\r\n'
    b'\r\n'
    b'W zalaczniku faktura.\r\n'
)


class FakeImap:
    """Minimal IMAP4_SSL stand-in serving two messages."""

    def __init__(self, host, port, timeout=None):
        self.host = host

    def login(self, user, password):
        if password != 'imap-secret':
            raise imaplib.IMAP4.error('AUTHENTICATIONFAILED')

    def select(self, mailbox, readonly=False):
        return 'OK', [b'2']

    def search(self, charset, criterion):
        return 'OK', [b'1 2']

    def fetch(self, message_id, parts):
        raw = RAW_MESSAGE.replace(b'{id}', message_id)
        return 'OK', [(message_id + b' (RFC822 {%d}' % len(raw), raw), b')']

    def logout(self):
        return 'BYE', [b'']

    def shutdown(self):
        pass


@pytest.fixture
def fake_imap(monkeypatch):
    monkeypatch.setattr(imaplib, 'IMAP4_SSL', FakeImap)
    return FakeImap


@pytest.fixture
def config_payload():
    return {
        'display_name': 'Biuro Test',
        'smtp_host': 'smtp.firma.pl',
        'smtp_port': 465,
        'smtp_secure': True,
        'smtp_user': 'biuro@firma.pl',
        'smtp_password': 'smtp-secret',
        'imap_host': 'imap.firma.pl',
        'imap_port': 993,
        'imap_tls': True,
        'imap_user': 'biuro@firma.pl',
        'imap_password': 'imap-secret',
    }


@pytest.fixture
def company_config(company, config_payload):
    data = dict(config_payload)
    data['smtp_password'] = encrypt_secret(data['smtp_password'])
    data['imap_password'] = encrypt_secret(data['imap_password'])
    return EmailConfiguration.objects.create(company=company, **data)
