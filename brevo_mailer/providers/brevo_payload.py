"""
Brevo request payload

Turns an Email and its Envelope into the JSON body of
POST /v3/smtp/email. Kept free of any I/O so it can be tested on its own.
"""

import base64
from typing import Dict, Any, List, Callable
from brevo_mailer.mime import Email, Envelope, Address, EmailAttachment, Header, HeaderKind
from brevo_mailer.utils.addressing import format_address


# Headers already expressed by dedicated payload fields, or owned by the HTTP layer
HEADERS_TO_BYPASS = frozenset([
    'from', 'sender', 'to', 'cc', 'bcc', 'subject', 'reply-to', 'content-type', 'accept', 'api-key'
])

METADATA_HEADER_PREFIX = 'X-Mailin-'


def _add_tag(payload: Dict[str, Any], header: Header) -> None:
    payload.setdefault('tags', []).append(header.value)


def _add_metadata(payload: Dict[str, Any], header: Header) -> None:
    key = header.key[:1].upper() + header.key[1:]
    payload.setdefault('headers', {})[METADATA_HEADER_PREFIX + key] = header.value


def _add_template_id(payload: Dict[str, Any], header: Header) -> None:
    payload['templateId'] = int(header.value)


def _add_params(payload: Dict[str, Any], header: Header) -> None:
    payload['params'] = dict(header.parameters)


def _add_custom_header(payload: Dict[str, Any], header: Header) -> None:
    payload.setdefault('headers', {})[header.name] = header.value


# Lowercased header name -> handler
NAMED_HEADER_HANDLERS: Dict[str, Callable[[Dict[str, Any], Header], None]] = {
    'templateid': _add_template_id,
}

# Handlers that only apply to a given header kind and name
KIND_NAMED_HEADER_HANDLERS: Dict[tuple, Callable[[Dict[str, Any], Header], None]] = {
    (HeaderKind.PARAMETERIZED, 'params'): _add_params,
}

KIND_HEADER_HANDLERS: Dict[HeaderKind, Callable[[Dict[str, Any], Header], None]] = {
    HeaderKind.TAG: _add_tag,
    HeaderKind.METADATA: _add_metadata,
}


def _resolve_handler(header: Header) -> Callable[[Dict[str, Any], Header], None]:
    name = header.name.lower()
    return (
        KIND_HEADER_HANDLERS.get(header.kind)
        or KIND_NAMED_HEADER_HANDLERS.get((header.kind, name))
        or NAMED_HEADER_HANDLERS.get(name)
        or _add_custom_header
    )


def format_addresses(addresses: List[Address]) -> List[Dict[str, str]]:
    return [format_address(a) for a in addresses]


def prepare_attachments(attachments: List[EmailAttachment]) -> List[Dict[str, str]]:
    """Base64 encode attachments into Brevo's {"content", "name"} form."""
    return [
        {
            'content': base64.b64encode(attachment.content).decode('ascii'),
            'name': attachment.filename or ''
        }
        for attachment in attachments
    ]


def prepare_headers_and_tags(email: Email) -> Dict[str, Any]:
    """
    Map message headers onto payload fields.

    Tags, metadata, templateId and params get dedicated fields; every other
    header is forwarded verbatim in the "headers" mapping.

    Args:
        email: Message whose headers are mapped

    Returns:
        Dict with any of "headers", "tags", "templateId" and "params"
    """
    result: Dict[str, Any] = {}
    for header in email.headers:
        if header.name.lower() in HEADERS_TO_BYPASS:
            continue
        _resolve_handler(header)(result, header)
    return result


def get_recipients(email: Email, envelope: Envelope) -> List[Address]:
    """Envelope recipients minus those already sent as Cc or Bcc."""
    copied = {a.email.lower() for a in [*email.cc, *email.bcc]}
    return [r for r in envelope.recipients if r.email.lower() not in copied]


def build_payload(email: Email, envelope: Envelope) -> Dict[str, Any]:
    """
    Build the JSON body for the Brevo transactional email endpoint.

    Args:
        email: Message to send
        envelope: Transport-level sender and recipients

    Returns:
        Payload dict ready to be JSON encoded

    Raises:
        AddressEncodingError: If a domain cannot be converted to ASCII
    """
    payload: Dict[str, Any] = {
        'sender': format_address(envelope.sender),
        'to': format_addresses(get_recipients(email, envelope)),
        'subject': email.subject,
    }

    if email.attachments:
        payload['attachment'] = prepare_attachments(email.attachments)

    if email.reply_to:
        payload['replyTo'] = format_address(email.reply_to[0])

    if email.cc:
        payload['cc'] = format_addresses(email.cc)

    if email.bcc:
        payload['bcc'] = format_addresses(email.bcc)

    if email.text_body:
        payload['textContent'] = email.text_body

    if email.html_body:
        payload['htmlContent'] = email.html_body

    payload.update(prepare_headers_and_tags(email))

    return payload
