"""System emails sent on behalf of a company."""

import logging
from typing import List
from uuid import UUID

from rest_framework.exceptions import APIException

from .configuration import get_decrypted_company_config
from .transport import send_email

logger = logging.getLogger(__name__)


def send_company_email(*, company_id: UUID, to: List[str], subject: str, text: str) -> bool:
    """
    Send an email through the company mailbox.

    Best effort: a missing configuration or a delivery failure is logged and
    reported as False so the calling operation is not affected.
    """
    try:
        config = get_decrypted_company_config(company_id)
    except APIException as e:
        logger.warning('Company %s email configuration unusable: %s', company_id, e)
        return False

    if config is None:
        logger.info('Company %s has no email configuration, skipping "%s"', company_id, subject)
        return False

    try:
        send_email(config, to=to, subject=subject, text=text)
    except APIException as e:
        logger.warning('Email "%s" for company %s not sent: %s', subject, company_id, e)
        return False
    return True
