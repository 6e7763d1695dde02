"""
Brevo Mailer

Sends transactional email through the Brevo REST API: builds the
/v3/smtp/email request from a message and its envelope, and translates
the response into a message id or an error.

Usage:
    from brevo_mailer import create_email_service

    service = create_email_service({'brevo_key': 'xkeysib-...'})
    response = service.send_email(
        to='Bob <bob@example.com>',
        from_email='alice@example.com',
        subject='Hello',
        body='Hello Bob!'
    )
"""

from brevo_mailer.exceptions import TransportError, HttpTransportError, AddressEncodingError
from brevo_mailer.mime import Address, Email, EmailAttachment, Envelope, Headers, SentMessage
from brevo_mailer.providers.email_adapter import EmailAdapter, EmailResponse
from brevo_mailer.providers.brevo_adapter import BrevoAdapter
from brevo_mailer.providers.email_service import (
    EmailService,
    create_email_service,
    create_email_service_from_dsn,
)

__all__ = [
    'Address',
    'AddressEncodingError',
    'BrevoAdapter',
    'Email',
    'EmailAdapter',
    'EmailAttachment',
    'EmailResponse',
    'EmailService',
    'Envelope',
    'Headers',
    'HttpTransportError',
    'SentMessage',
    'TransportError',
    'create_email_service',
    'create_email_service_from_dsn',
]
