"""
Address Utilities

Helpers shared by the transport: ACE encoding of internationalized domain
names and the endpoint descriptor used in logs and string representations.
"""

from typing import Optional, Dict
import idna
from brevo_mailer.exceptions import AddressEncodingError
from brevo_mailer.mime import Address


DEFAULT_PORTS = {
    'https': 443,
    'http': 80,
    'brevo+api': 443,
}


def encode_domain(domain: str) -> str:
    """
    Convert a domain to its ASCII Compatible Encoding.

    Args:
        domain: Domain name, possibly with non-ASCII labels

    Returns:
        Punycode form of the domain, unchanged if it is already ASCII

    Raises:
        AddressEncodingError: If the domain is not a valid IDN
    """
    if domain.isascii():
        return domain

    try:
        return idna.encode(domain, uts46=True).decode('ascii')
    except idna.IDNAError as e:
        raise AddressEncodingError(f'Unable to encode domain "{domain}": {e}') from e


def encode_address(address: Address) -> str:
    """Mailbox with an ACE domain; the local part stays UTF-8."""
    return f'{address.local_part}@{encode_domain(address.domain)}'


def format_address(address: Address) -> Dict[str, str]:
    """
    Format an address the way the Brevo API expects it.

    Args:
        address: Address to format

    Returns:
        Dict with "email" and, when a display name exists, "name"
    """
    formatted = {'email': encode_address(address)}
    if address.name:
        formatted['name'] = address.name
    return formatted


def format_endpoint(host: str, port: Optional[int] = None, scheme: str = 'https', default_port: Optional[int] = None) -> str:
    """
    Build a "<scheme>://<host>[:<port>]" descriptor.

    The port is left out when unset or when it is the scheme's default.

    Args:
        host: Host name
        port: Optional port
        scheme: Scheme prefix
        default_port: Port considered implicit; looked up from the scheme if omitted

    Returns:
        Endpoint descriptor string
    """
    if default_port is None:
        default_port = DEFAULT_PORTS.get(scheme)

    if port is None or port == default_port:
        return f'{scheme}://{host}'

    return f'{scheme}://{host}:{port}'
