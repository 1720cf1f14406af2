"""
ISP Admin Dashboard
Outbound delivery abstraction

This module defines a stable SendGateway interface and strongly-typed
request/receipt objects for outbound delivery.

Guardrails:
- One gateway per process, chosen at startup from configuration.
- A gateway performs at most one provider call per send_text().
- Provider rejections and transport failures come back as a FAILED receipt,
  never as an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Protocol


class SendStatus(str, Enum):
    DRY_RUN = "dry_run"
    SENT = "sent"
    FAILED = "failed"


@dataclass(frozen=True)
class OutboundSendRequest:
    """
    Represents an attempt to deliver one text message.

    - to_number is the phone exactly as stored on the client record;
      each gateway formats it for its own provider
    - body_text is the message text to deliver
    - client_id is kept for log traceability only
    """
    to_number: str
    body_text: str
    client_id: Optional[str] = None


@dataclass(frozen=True)
class OutboundSendReceipt:
    """
    Result of a delivery attempt (or simulated attempt).
    """
    status: SendStatus
    provider_message_id: Optional[str]
    detail: str
    created_at_utc: datetime
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.status in (SendStatus.SENT, SendStatus.DRY_RUN)

    @staticmethod
    def now(
        status: SendStatus,
        detail: str,
        provider_message_id: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> "OutboundSendReceipt":
        return OutboundSendReceipt(
            status=status,
            provider_message_id=provider_message_id,
            detail=detail,
            created_at_utc=datetime.now(timezone.utc),
            status_code=status_code,
        )


class SendGateway(Protocol):
    """
    Abstract gateway for outbound delivery.
    """
    def send_text(self, req: OutboundSendRequest) -> OutboundSendReceipt:
        """
        Deliver a WhatsApp text message (or simulate it, depending on gateway).
        Must not throw in normal cases.
        """
        ...
