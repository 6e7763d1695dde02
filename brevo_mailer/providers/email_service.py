"""
Email Service - Factory and Facade

This module provides a simple interface for sending emails without
knowing which adapter is being used. It handles adapter selection
and provides a clean API for the rest of the application.
"""

from typing import Dict, Any, Optional, List, Union
from urllib.parse import urlsplit, unquote
from brevo_mailer.exceptions import (
    TransportError,
    InvalidArgumentError,
    UnsupportedSchemeError,
    IncompleteDsnError,
)
from brevo_mailer.mime import Address, Email, EmailAttachment, Envelope, Headers
from brevo_mailer.providers.email_adapter import EmailAdapter, EmailResponse
from brevo_mailer.providers.brevo_adapter import BrevoAdapter
from brevo_mailer import logger


AddressLike = Union[Address, str]


class EmailService:
    """
    Email service wrapping an adapter with a unified interface.

    This is the main class that business logic should use to send emails.
    Transport errors are caught, logged and returned as failed responses.
    """

    # Registry of available adapters
    ADAPTERS = {
        'brevo': BrevoAdapter
    }

    def __init__(self, adapter: EmailAdapter):
        """
        Initialize email service with an adapter.

        Args:
            adapter: Configured EmailAdapter instance
        """
        self.adapter = adapter

    def send(self, email: Email, envelope: Optional[Envelope] = None) -> EmailResponse:
        """
        Send a prepared message.

        Args:
            email: Message to send
            envelope: Optional envelope overriding the message's From/To

        Returns:
            EmailResponse with send result
        """
        provider = self.adapter.get_provider_name()
        to = [str(a) for a in email.to]

        logger.info(f'Sending email via {provider}', to=to, subject=email.subject)

        try:
            sent = self.adapter.send(email, envelope)
        except TransportError as e:
            logger.error(f'Email send failed via {provider}', err=e, to=to)
            return EmailResponse(
                success=False,
                error=str(e),
                status_code=getattr(e, 'status_code', None),
                raw_response=getattr(e, 'response', None)
            )
        except ValueError as e:
            # Message could not be turned into an envelope
            logger.error(f'Invalid email for {provider}', err=e, to=to)
            return EmailResponse(success=False, error=str(e))

        logger.info(
            f'Email sent successfully via {provider}',
            message_id=sent.message_id,
            to=to
        )

        return EmailResponse(success=True, message_id=sent.message_id)

    def send_email(
        self,
        to: Union[AddressLike, List[AddressLike]],
        subject: str,
        body: Optional[str] = None,
        from_email: Optional[AddressLike] = None,
        html_body: Optional[str] = None,
        reply_to: Optional[AddressLike] = None,
        cc: Optional[List[AddressLike]] = None,
        bcc: Optional[List[AddressLike]] = None,
        attachments: Optional[List[EmailAttachment]] = None,
        tags: Optional[List[str]] = None,
        template_id: Optional[int] = None,
        params: Optional[Dict[str, Any]] = None,
        metadata: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> EmailResponse:
        """
        Send an email built from keyword arguments.

        Args:
            to: Recipient address or list of addresses
            subject: Email subject
            body: Plain text email body
            from_email: Sender address
            html_body: Optional HTML body
            reply_to: Optional reply-to address
            cc: Optional CC recipients
            bcc: Optional BCC recipients
            attachments: Optional list of email attachments
            tags: Optional provider tags
            template_id: Optional Brevo template id
            params: Optional template parameters
            metadata: Optional opaque key/value data forwarded to Brevo
            headers: Optional custom headers

        Returns:
            EmailResponse with send result
        """
        message_headers = Headers()
        for tag in tags or []:
            message_headers.add_tag(tag)
        for key, value in (metadata or {}).items():
            message_headers.add_metadata(key, value)
        if template_id is not None:
            message_headers.add_text_header('templateId', template_id)
        if params:
            message_headers.add_parameterized_header('params', 'params', params)
        for name, value in (headers or {}).items():
            message_headers.add_text_header(name, value)

        try:
            email = Email(
                from_addresses=Address.create_many([from_email] if from_email else []),
                to=Address.create_many(to if isinstance(to, list) else [to]),
                subject=subject,
                text_body=body,
                html_body=html_body,
                cc=Address.create_many(cc),
                bcc=Address.create_many(bcc),
                reply_to=Address.create_many([reply_to] if reply_to else []),
                attachments=list(attachments or []),
                headers=message_headers
            )
        except ValueError as e:
            logger.error('Invalid email address', err=e)
            return EmailResponse(success=False, error=str(e))

        return self.send(email)

    @classmethod
    def register_adapter(cls, provider: str, adapter_class: type):
        """
        Register a new email adapter.

        This allows adding custom adapters at runtime.

        Args:
            provider: Provider name (e.g., 'custom_provider')
            adapter_class: Class that implements EmailAdapter
        """
        if not issubclass(adapter_class, EmailAdapter):
            raise TypeError(f'{adapter_class} must implement EmailAdapter')

        cls.ADAPTERS[provider.lower()] = adapter_class
        logger.info(f'Registered email adapter: {provider}')


def _get_adapter_class(provider: str) -> type:
    adapter_class = EmailService.ADAPTERS.get(provider.lower())
    if not adapter_class:
        available = ', '.join(EmailService.ADAPTERS.keys())
        raise InvalidArgumentError(
            f'Unsupported email provider: {provider}. '
            f'Available providers: {available}'
        )
    return adapter_class


def create_email_service(config: Dict[str, Any]) -> EmailService:
    """
    Factory function to create EmailService from configuration.

    Args:
        config: Mapping with 'brevo_key' and optionally 'email_provider',
            'brevo_host', 'brevo_port', 'timeout'

    Returns:
        EmailService instance configured with the selected provider

    Raises:
        InvalidArgumentError: If the provider is unknown or the key is missing

    Example:
        >>> config = {'brevo_key': 'xkeysib-xxx'}
        >>> service = create_email_service(config)
        >>> response = service.send_email(to='user@example.com', ...)
    """
    provider = config.get('email_provider') or 'brevo'
    adapter_class = _get_adapter_class(provider)

    api_key = config.get('brevo_key')
    if not api_key:
        raise InvalidArgumentError('Missing Brevo API key in config')

    adapter = adapter_class(
        api_key,
        host=config.get('brevo_host'),
        port=config.get('brevo_port'),
        timeout=config.get('timeout') or 30
    )

    logger.debug('Created email service', provider=provider, endpoint=str(adapter))

    return EmailService(adapter)


def create_email_service_from_dsn(dsn: str) -> EmailService:
    """
    Create an EmailService from a DSN such as "brevo+api://KEY@default".

    The host "default" selects the provider's default API host.

    Args:
        dsn: Transport DSN

    Returns:
        EmailService instance

    Raises:
        UnsupportedSchemeError: If the scheme is not brevo+api
        IncompleteDsnError: If the API key is missing
    """
    parts = urlsplit(dsn)
    if parts.scheme != BrevoAdapter.SCHEME:
        raise UnsupportedSchemeError(
            f'The "{parts.scheme}" scheme is not supported; supported scheme is: "{BrevoAdapter.SCHEME}".'
        )

    api_key = unquote(parts.username) if parts.username else None
    if not api_key:
        raise IncompleteDsnError('The Brevo DSN must contain the API key as user.')

    host = parts.hostname
    return create_email_service({
        'email_provider': 'brevo',
        'brevo_key': api_key,
        'brevo_host': None if host in (None, 'default') else host,
        'brevo_port': parts.port
    })
