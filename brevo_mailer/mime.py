"""
Email message model

Plain data objects describing a message before it is handed to a transport:
addresses, typed headers, attachments, the message itself and its envelope.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, List, Union, Iterator


_NAMED_ADDRESS = re.compile(r'^\s*"?(?P<name>[^"<]*?)"?\s*<(?P<email>[^>]+)>\s*$')


@dataclass(frozen=True)
class Address:
    """A mailbox with an optional display name."""
    email: str
    name: str = ''

    def __post_init__(self):
        if self.email.count('@') != 1 or self.email.startswith('@') or self.email.endswith('@'):
            raise ValueError(f'Invalid email address: "{self.email}"')

    @property
    def local_part(self) -> str:
        return self.email.rsplit('@', 1)[0]

    @property
    def domain(self) -> str:
        return self.email.rsplit('@', 1)[1]

    @classmethod
    def create(cls, value: Union['Address', str]) -> 'Address':
        """
        Build an Address from a string or return an existing one.

        Args:
            value: Address instance, "user@example.com" or "Name <user@example.com>"

        Returns:
            Address instance
        """
        if isinstance(value, Address):
            return value

        match = _NAMED_ADDRESS.match(value)
        if match:
            return cls(email=match.group('email').strip(), name=match.group('name').strip())

        return cls(email=value.strip())

    @classmethod
    def create_many(cls, values: Optional[List[Union['Address', str]]]) -> List['Address']:
        return [cls.create(v) for v in values or []]

    def __str__(self):
        return f'{self.name} <{self.email}>' if self.name else self.email


class HeaderKind(Enum):
    TEXT = 'text'
    TAG = 'tag'
    METADATA = 'metadata'
    PARAMETERIZED = 'parameterized'


@dataclass(frozen=True)
class TextHeader:
    name: str
    value: str
    kind: HeaderKind = field(default=HeaderKind.TEXT, init=False)


@dataclass(frozen=True)
class TagHeader:
    """Provider tag used to group messages in statistics."""
    value: str
    name: str = field(default='X-Tag', init=False)
    kind: HeaderKind = field(default=HeaderKind.TAG, init=False)


@dataclass(frozen=True)
class MetadataHeader:
    """Opaque key/value data forwarded to the provider as-is."""
    key: str
    value: str
    kind: HeaderKind = field(default=HeaderKind.METADATA, init=False)

    @property
    def name(self) -> str:
        return f'X-Metadata-{self.key}'


@dataclass(frozen=True)
class ParameterizedHeader:
    name: str
    value: str
    parameters: Dict[str, str] = field(default_factory=dict)
    kind: HeaderKind = field(default=HeaderKind.PARAMETERIZED, init=False)


Header = Union[TextHeader, TagHeader, MetadataHeader, ParameterizedHeader]


class Headers:
    """Ordered header collection; names are matched case-insensitively."""

    def __init__(self, *headers: Header):
        self._headers: List[Header] = list(headers)

    def add(self, header: Header) -> 'Headers':
        self._headers.append(header)
        return self

    def add_text_header(self, name: str, value) -> 'Headers':
        return self.add(TextHeader(name, str(value)))

    def add_parameterized_header(self, name: str, value: str, parameters: Dict[str, str]) -> 'Headers':
        return self.add(ParameterizedHeader(name, value, dict(parameters)))

    def add_tag(self, tag: str) -> 'Headers':
        return self.add(TagHeader(tag))

    def add_metadata(self, key: str, value: str) -> 'Headers':
        return self.add(MetadataHeader(key, value))

    def get(self, name: str) -> Optional[Header]:
        for header in self._headers:
            if header.name.lower() == name.lower():
                return header
        return None

    def get_all(self, name: str) -> List[Header]:
        return [h for h in self._headers if h.name.lower() == name.lower()]

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def __iter__(self) -> Iterator[Header]:
        return iter(list(self._headers))

    def __len__(self):
        return len(self._headers)


@dataclass
class EmailAttachment:
    """File attached to a message."""
    filename: str
    content: bytes
    content_type: str = 'application/octet-stream'
    inline: bool = False


@dataclass
class Email:
    """A message as composed by the application."""
    from_addresses: List[Address] = field(default_factory=list)
    to: List[Address] = field(default_factory=list)
    subject: Optional[str] = None
    text_body: Optional[str] = None
    html_body: Optional[str] = None
    cc: List[Address] = field(default_factory=list)
    bcc: List[Address] = field(default_factory=list)
    reply_to: List[Address] = field(default_factory=list)
    sender: Optional[Address] = None
    attachments: List[EmailAttachment] = field(default_factory=list)
    headers: Headers = field(default_factory=Headers)


@dataclass(frozen=True)
class Envelope:
    """
    Transport-level sender and recipients.

    These may differ from the From/To shown in the message, e.g. when
    bounces have to go to a dedicated mailbox.
    """
    sender: Address
    recipients: List[Address]

    def __post_init__(self):
        if not self.recipients:
            raise ValueError('An envelope must have at least one recipient.')

    @classmethod
    def create(cls, email: Email) -> 'Envelope':
        """
        Derive the envelope from the message headers.

        Args:
            email: Message to derive sender and recipients from

        Returns:
            Envelope instance

        Raises:
            ValueError: If the message has no sender or no recipients
        """
        sender = email.sender or (email.from_addresses[0] if email.from_addresses else None)
        if sender is None:
            raise ValueError('Unable to determine the sender of the message.')

        recipients = [*email.to, *email.cc, *email.bcc]
        if not recipients:
            raise ValueError('An email must have a "To", "Cc", or "Bcc" header.')

        return cls(sender=sender, recipients=recipients)


@dataclass
class SentMessage:
    """A message accepted by the provider."""
    original: Email
    envelope: Envelope
    message_id: Optional[str] = None
