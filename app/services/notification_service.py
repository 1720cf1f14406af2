"""
File: app/services/notification_service.py

Project: ISP Admin Dashboard

Purpose:
Notification dispatcher: send one text message to one client through the
configured outbound gateway.

Flow per call:
1. validate message
2. resolve client (store read)
3. check phone
4. one gateway send
5. map receipt to NotificationResult

Design rules:
- Never raises: every failure becomes NotificationResult(success=False)
- No retry, no dedup: each call sends again
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import logging

from app.errors import (
    ChannelError,
    InvalidMessage,
    MissingPhone,
    NotificationError,
    NotificationErrorKind,
)
from app.outbound.gateway import OutboundSendRequest, SendGateway
from app.outbound.phone import digits_only
from app.services.client_resolver import ClientResolver

logger = logging.getLogger("notification_service")


@dataclass(frozen=True)
class NotificationResult:
    success: bool
    recipient: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[NotificationErrorKind] = None
    timestamp: Optional[datetime] = None

    @staticmethod
    def sent(recipient: str) -> "NotificationResult":
        return NotificationResult(
            success=True,
            recipient=recipient,
            timestamp=datetime.now(timezone.utc),
        )

    @staticmethod
    def failed(error: NotificationError) -> "NotificationResult":
        return NotificationResult(
            success=False,
            error=error.message,
            error_kind=error.kind,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "recipient": self.recipient,
            "error": self.error,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }


class NotificationDispatcher:
    def __init__(self, resolver: ClientResolver, gateway: SendGateway) -> None:
        self._resolver = resolver
        self._gateway = gateway

    def send_client_notification(self, client_id: str, message: str) -> NotificationResult:
        try:
            return self._dispatch(client_id, message)
        except NotificationError as e:
            logger.info("Notification to client %s failed (%s): %s", client_id, e.kind.value, e.message)
            return NotificationResult.failed(e)
        except Exception:
            logger.exception("Unexpected failure notifying client %s", client_id)
            return NotificationResult(
                success=False,
                error="Unexpected notification failure",
                error_kind=NotificationErrorKind.UNEXPECTED,
            )

    def _dispatch(self, client_id: str, message: str) -> NotificationResult:
        if not message or not message.strip():
            raise InvalidMessage()

        contact = self._resolver.resolve(client_id)

        phone = (contact.phone or "").strip()
        if not digits_only(phone):
            raise MissingPhone()

        receipt = self._gateway.send_text(
            OutboundSendRequest(to_number=phone, body_text=message, client_id=contact.id)
        )
        if not receipt.ok:
            raise ChannelError(receipt.detail, status_code=receipt.status_code)

        logger.info("Notification sent to client %s (%s)", contact.id, receipt.status.value)
        return NotificationResult.sent(recipient=contact.name)
