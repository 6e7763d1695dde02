"""
Brevo Email Adapter Implementation

Concrete implementation of the EmailAdapter for the Brevo transactional
email API (https://api.brevo.com/v3/smtp/email).
"""

from typing import Optional
import requests
from brevo_mailer.exceptions import HttpTransportError
from brevo_mailer.mime import Email, Envelope, SentMessage
from brevo_mailer.providers.email_adapter import EmailAdapter
from brevo_mailer.providers.brevo_payload import build_payload
from brevo_mailer.providers.brevo_response import parse_response
from brevo_mailer.utils.addressing import format_endpoint
from brevo_mailer import logger


class BrevoAdapter(EmailAdapter):
    """Brevo implementation of the EmailAdapter interface."""

    SCHEME = 'brevo+api'
    DEFAULT_HOST = 'api.brevo.com'
    SEND_PATH = '/v3/smtp/email'

    def __init__(
        self,
        api_key: str,
        session: Optional[requests.Session] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        timeout: int = 30
    ):
        self.api_key = api_key
        self.session = session or requests.Session()
        self.host = host
        self.port = port
        self.timeout = timeout

    def get_provider_name(self) -> str:
        return "Brevo"

    def set_host(self, host: Optional[str]) -> 'BrevoAdapter':
        self.host = host
        return self

    def set_port(self, port: Optional[int]) -> 'BrevoAdapter':
        self.port = port
        return self

    def get_endpoint(self) -> str:
        """Host and optional port the API is reached on."""
        host = self.host or self.DEFAULT_HOST
        return f'{host}:{self.port}' if self.port else host

    def __str__(self):
        return format_endpoint(self.host or self.DEFAULT_HOST, self.port, scheme=self.SCHEME)

    def send(self, email: Email, envelope: Optional[Envelope] = None) -> SentMessage:
        """
        Send email via Brevo API.

        Args:
            email: Message to send
            envelope: Optional envelope; derived from the message if omitted

        Returns:
            SentMessage with the Brevo message id

        Raises:
            AddressEncodingError: If an address domain cannot be ASCII encoded
            HttpTransportError: If Brevo rejects the message or cannot be reached
        """
        envelope = envelope or Envelope.create(email)

        # Build before touching the network so encoding errors fail fast
        payload = build_payload(email, envelope)

        url = f'https://{self.get_endpoint()}{self.SEND_PATH}'
        headers = {
            'api-key': self.api_key,
            'Accept': '*/*'
        }

        logger.debug(
            'Sending email via Brevo',
            endpoint=str(self),
            recipients=len(payload['to']) + len(payload.get('cc', [])) + len(payload.get('bcc', []))
        )

        try:
            response = self.session.post(
                url,
                json=payload,
                headers=headers,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error('Brevo API request failed', err=e, endpoint=str(self))
            raise HttpTransportError('Could not reach the remote Brevo server.') from e

        result = parse_response(response)
        if not result.success:
            raise HttpTransportError(result.error, status_code=result.status_code, response=response)

        logger.debug('Brevo accepted email', message_id=result.message_id)

        return SentMessage(original=email, envelope=envelope, message_id=result.message_id)
