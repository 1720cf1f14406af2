"""
File: app/outbound/meta.py
Path: app/outbound/meta.py

Project: ISP Admin Dashboard

Purpose:
Meta WhatsApp Cloud (Graph) API channel.
- MetaWhatsAppClient: thin HTTP client for session (free text) messages
- MetaSendGateway: SendGateway adapter, digits-only recipient
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

import requests

from app.outbound.gateway import OutboundSendReceipt, OutboundSendRequest, SendGateway, SendStatus
from app.outbound.phone import digits_only
from app.outbound.settings import MetaWhatsAppSettings

logger = logging.getLogger("outbound.meta")


class MetaWhatsAppError(RuntimeError):
    pass


@dataclass(frozen=True)
class MetaSendResult:
    ok: bool
    status_code: int
    response_json: Dict[str, Any]

    @property
    def error_message(self) -> Optional[str]:
        error = self.response_json.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        return None

    @property
    def provider_message_id(self) -> Optional[str]:
        messages = self.response_json.get("messages")
        if isinstance(messages, list) and messages and isinstance(messages[0], dict):
            return messages[0].get("id")
        return None


class MetaWhatsAppClient:
    def __init__(
        self,
        settings: MetaWhatsAppSettings,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
    ) -> None:
        self._settings = settings
        self._session = session or requests.Session()
        self._timeout = timeout

    # ---------------------------------------------------------
    # SESSION MESSAGE (free text)
    # ---------------------------------------------------------
    def send_session_message(self, *, to_msisdn: str, text: str) -> MetaSendResult:
        if not text:
            raise MetaWhatsAppError("Session message text cannot be empty")
        if not to_msisdn.isdigit():
            raise MetaWhatsAppError("Recipient must be digits only")

        payload = {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": to_msisdn,
            "type": "text",
            "text": {"body": text},
        }

        headers = {
            "Authorization": f"Bearer {self._settings.access_token}",
            "Content-Type": "application/json",
        }

        resp = self._session.post(
            self._settings.messages_url,
            json=payload,
            headers=headers,
            timeout=self._timeout,
        )

        try:
            data = resp.json()
        except ValueError:
            data = {"raw_text": resp.text}
        if not isinstance(data, dict):
            data = {"raw": data}

        return MetaSendResult(
            ok=200 <= resp.status_code < 300,
            status_code=resp.status_code,
            response_json=data,
        )


class MetaSendGateway(SendGateway):
    def __init__(self, client: MetaWhatsAppClient) -> None:
        self._client = client

    def send_text(self, req: OutboundSendRequest) -> OutboundSendReceipt:
        to_msisdn = digits_only(req.to_number)

        try:
            result = self._client.send_session_message(to_msisdn=to_msisdn, text=req.body_text)
        except MetaWhatsAppError as e:
            return OutboundSendReceipt.now(status=SendStatus.FAILED, detail=str(e))
        except requests.RequestException as e:
            logger.warning("Meta WhatsApp transport failure to %s: %s", to_msisdn, e)
            return OutboundSendReceipt.now(
                status=SendStatus.FAILED,
                detail="Failed to reach WhatsApp Graph API",
            )

        if not result.ok:
            detail = result.error_message or f"WhatsApp Graph API error (HTTP {result.status_code})"
            logger.warning("Meta WhatsApp rejected message to %s: %s", to_msisdn, detail)
            return OutboundSendReceipt.now(
                status=SendStatus.FAILED,
                detail=detail,
                status_code=result.status_code,
            )

        return OutboundSendReceipt.now(
            status=SendStatus.SENT,
            detail=f"sent to {to_msisdn}",
            provider_message_id=result.provider_message_id,
            status_code=result.status_code,
        )
