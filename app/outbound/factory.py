"""
File: app/outbound/factory.py
Path: app/outbound/factory.py

Project: ISP Admin Dashboard

Purpose:
- Provide a single place to construct the outbound gateway
- Exactly one channel per process, picked from OutboundDeliverySettings

Design rules:
- No business logic here
- Only construction / wiring
- Called once from create_app(); the result is injected, never global
"""

from __future__ import annotations

from typing import Optional

import requests

from app.outbound.dry_run import DryRunSendGateway
from app.outbound.gateway import SendGateway
from app.outbound.meta import MetaSendGateway, MetaWhatsAppClient
from app.outbound.settings import (
    MODE_DRY_RUN,
    MODE_META,
    MODE_TWILIO,
    OutboundDeliverySettings,
)
from app.outbound.twilio import TwilioMessagingClient, TwilioSendGateway


def build_send_gateway(
    settings: OutboundDeliverySettings,
    session: Optional[requests.Session] = None,
) -> SendGateway:
    if settings.mode == MODE_DRY_RUN:
        return DryRunSendGateway()

    if settings.mode == MODE_TWILIO:
        if settings.twilio is None:
            raise RuntimeError("Twilio mode selected but Twilio settings are missing")
        client = TwilioMessagingClient(
            settings=settings.twilio,
            session=session,
            timeout=settings.timeout_seconds,
        )
        return TwilioSendGateway(client, from_number=settings.twilio.from_number)

    if settings.mode == MODE_META:
        if settings.meta is None:
            raise RuntimeError("Meta mode selected but Meta WhatsApp settings are missing")
        client = MetaWhatsAppClient(
            settings=settings.meta,
            session=session,
            timeout=settings.timeout_seconds,
        )
        return MetaSendGateway(client)

    raise RuntimeError(f"Unsupported outbound mode: {settings.mode!r}")
