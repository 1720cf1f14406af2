"""
File: app/errors.py

Project: ISP Admin Dashboard

Purpose:
Failure taxonomy for notification dispatch.

Every failure raised inside the notification core is a NotificationError.
The dispatcher and the ticket notifier catch these at their boundary and
turn them into a NotificationResult; they never reach the caller as
exceptions.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class NotificationErrorKind(str, Enum):
    CLIENT_NOT_FOUND = "client_not_found"
    MISSING_PHONE = "missing_phone"
    INVALID_MESSAGE = "invalid_message"
    CHANNEL_ERROR = "channel_error"
    TICKET_UNAVAILABLE = "ticket_unavailable"
    UNLINKED_TICKET = "unlinked_ticket"
    UNEXPECTED = "unexpected"


class NotificationError(Exception):
    kind: NotificationErrorKind = NotificationErrorKind.UNEXPECTED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientNotFound(NotificationError):
    """No client row matched the id, or the store lookup failed."""

    kind = NotificationErrorKind.CLIENT_NOT_FOUND

    def __init__(self, message: str = "Client not found") -> None:
        super().__init__(message)


class MissingPhone(NotificationError):
    kind = NotificationErrorKind.MISSING_PHONE

    def __init__(self, message: str = "Client has no phone number") -> None:
        super().__init__(message)


class InvalidMessage(NotificationError):
    kind = NotificationErrorKind.INVALID_MESSAGE

    def __init__(self, message: str = "Message cannot be empty") -> None:
        super().__init__(message)


class ChannelError(NotificationError):
    """
    The outbound channel rejected the message or the transport failed.

    status_code is the provider HTTP status when one was received.
    """

    kind = NotificationErrorKind.CHANNEL_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TicketUnavailable(NotificationError):
    """Ticket missing or its client join failed. The two are not told apart."""

    kind = NotificationErrorKind.TICKET_UNAVAILABLE

    def __init__(self, message: str = "Ticket not available") -> None:
        super().__init__(message)


class UnlinkedTicket(NotificationError):
    kind = NotificationErrorKind.UNLINKED_TICKET

    def __init__(self, message: str = "Ticket has no associated client") -> None:
        super().__init__(message)
