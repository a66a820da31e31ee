"""Outbound channel ports.

Every ``send``/``emit`` returns a result dict with ``message_id``,
``status`` (``"sent"`` or ``"failed"``) and, on failure, ``error``.
Callers inspect the status rather than catching exceptions.
"""

from abc import ABC, abstractmethod

from notifications.document.port import RenderedDocument


class RealtimePort(ABC):
    """Broadcast bus for connected storefront clients."""

    @abstractmethod
    def emit(self, event_name: str, payload: dict) -> dict: ...


class SMSPort(ABC):
    @abstractmethod
    def send(self, to: str, body: str, sender: str | None = None) -> dict: ...


class PushPort(ABC):
    @abstractmethod
    def send(self, device_token: str, title: str, body: str, data: dict | None = None) -> dict:
        """Deliver to a single device; ``data`` travels as the silent payload."""
        ...


class EmailPort(ABC):
    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
        attachments: list[RenderedDocument] | None = None,
        sender: str | None = None,
    ) -> dict:
        """Send one message. ``attachments`` are rendered documents, attached in order."""
        ...
