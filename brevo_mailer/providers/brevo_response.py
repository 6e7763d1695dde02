"""
Brevo response translation

Interprets the status code and JSON body returned by /v3/smtp/email.
"""

from typing import Any
import requests
from brevo_mailer.providers.email_adapter import EmailResponse


ERROR_TEMPLATE = 'Unable to send an email: {message} (code {status_code}).'


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def translate_response(status_code: int, body: Any) -> EmailResponse:
    """
    Translate a decoded Brevo response into an EmailResponse.

    Args:
        status_code: HTTP status code
        body: Decoded JSON body

    Returns:
        Successful EmailResponse with the provider message id, or a failed
        one whose error follows ERROR_TEMPLATE
    """
    data = body if isinstance(body, dict) else {}

    if _is_success(status_code):
        message_id = data.get('messageId')
        if not message_id:
            return EmailResponse(
                success=False,
                error=ERROR_TEMPLATE.format(
                    message='malformed response, missing "messageId"',
                    status_code=status_code
                ),
                status_code=status_code,
                raw_response=body
            )

        return EmailResponse(
            success=True,
            message_id=message_id,
            status_code=status_code,
            raw_response=body
        )

    error_message = data.get('message') or 'Unknown error'
    return EmailResponse(
        success=False,
        error=ERROR_TEMPLATE.format(message=error_message, status_code=status_code),
        status_code=status_code,
        raw_response=body
    )


def parse_response(response: requests.Response) -> EmailResponse:
    """
    Decode a requests.Response and translate it.

    A body that is not JSON is reported verbatim as the error message.
    """
    try:
        body = response.json() if response.text else {}
    except ValueError:
        return EmailResponse(
            success=False,
            error=ERROR_TEMPLATE.format(message=response.text, status_code=response.status_code),
            status_code=response.status_code,
            raw_response=response.text
        )

    return translate_response(response.status_code, body)
