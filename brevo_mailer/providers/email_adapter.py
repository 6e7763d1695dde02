"""
Email Adapter Pattern - Interface and Result Type

This module defines the contract (interface) that email providers implement,
and the response format handed back to application code.
"""

from abc import ABC, abstractmethod
from typing import Optional, Any
from dataclasses import dataclass
from brevo_mailer.mime import Email, Envelope, SentMessage


@dataclass
class EmailResponse:
    """Standard response format from email providers."""
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None
    status_code: Optional[int] = None
    raw_response: Optional[Any] = None


class EmailAdapter(ABC):
    """
    Abstract base class (interface) for email providers.

    Any email provider implementation must extend this class
    and implement the send method.
    """

    @abstractmethod
    def send(self, email: Email, envelope: Optional[Envelope] = None) -> SentMessage:
        """
        Send an email using the provider's API.

        Args:
            email: Message to send
            envelope: Transport-level sender/recipients; derived from the message if omitted

        Returns:
            SentMessage carrying the provider message id

        Raises:
            TransportError: If the provider rejects the message or cannot be reached
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the name of this email provider."""
        pass
