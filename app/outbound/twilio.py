"""
File: app/outbound/twilio.py
Path: app/outbound/twilio.py

Project: ISP Admin Dashboard

Purpose:
Twilio Programmable Messaging channel (WhatsApp transport).
- TwilioMessagingClient: thin REST client for the Messages resource
- TwilioSendGateway: SendGateway adapter, "whatsapp:" prefixed raw phone
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

import requests

from app.outbound.gateway import OutboundSendReceipt, OutboundSendRequest, SendGateway, SendStatus
from app.outbound.phone import whatsapp_address
from app.outbound.settings import TwilioSettings

logger = logging.getLogger("outbound.twilio")


@dataclass(frozen=True)
class TwilioSendResult:
    ok: bool
    status_code: int
    response_json: Dict[str, Any]

    @property
    def error_message(self) -> Optional[str]:
        message = self.response_json.get("message")
        return str(message) if message else None

    @property
    def sid(self) -> Optional[str]:
        return self.response_json.get("sid")


class TwilioMessagingClient:
    def __init__(
        self,
        settings: TwilioSettings,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
    ) -> None:
        self._settings = settings
        self._session = session or requests.Session()
        self._timeout = timeout

    def create_message(self, *, from_: str, to: str, body: str) -> TwilioSendResult:
        resp = self._session.post(
            self._settings.messages_url,
            data={"From": from_, "To": to, "Body": body},
            auth=(self._settings.account_sid, self._settings.auth_token),
            timeout=self._timeout,
        )

        try:
            data = resp.json()
        except ValueError:
            data = {"raw_text": resp.text}
        if not isinstance(data, dict):
            data = {"raw": data}

        return TwilioSendResult(
            ok=200 <= resp.status_code < 300,
            status_code=resp.status_code,
            response_json=data,
        )


class TwilioSendGateway(SendGateway):
    def __init__(self, client: TwilioMessagingClient, from_number: str) -> None:
        self._client = client
        self._from = whatsapp_address(from_number)

    def send_text(self, req: OutboundSendRequest) -> OutboundSendReceipt:
        to = whatsapp_address(req.to_number)

        try:
            result = self._client.create_message(from_=self._from, to=to, body=req.body_text)
        except requests.RequestException as e:
            logger.warning("Twilio transport failure to %s: %s", to, e)
            return OutboundSendReceipt.now(
                status=SendStatus.FAILED,
                detail="Failed to reach Twilio API",
            )

        if not result.ok:
            detail = result.error_message or f"Twilio API error (HTTP {result.status_code})"
            logger.warning("Twilio rejected message to %s: %s", to, detail)
            return OutboundSendReceipt.now(
                status=SendStatus.FAILED,
                detail=detail,
                status_code=result.status_code,
            )

        return OutboundSendReceipt.now(
            status=SendStatus.SENT,
            detail=f"sent to {to}",
            provider_message_id=result.sid,
            status_code=result.status_code,
        )
