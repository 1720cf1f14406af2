"""
ISP Admin Dashboard
Outbound delivery abstraction - DRY-RUN gateway

This gateway never sends anything.
It simply returns a receipt that indicates a simulated send.
"""

from __future__ import annotations

import logging

from .gateway import SendGateway, OutboundSendRequest, OutboundSendReceipt, SendStatus

logger = logging.getLogger("outbound.dry_run")


class DryRunSendGateway(SendGateway):
    def send_text(self, req: OutboundSendRequest) -> OutboundSendReceipt:
        # No side effects. Never raises. Never calls external services.
        detail = (
            "DRY_RUN: outbound delivery simulated (not sent). "
            f"to={req.to_number} client_id={req.client_id}"
        )
        logger.info(detail)
        return OutboundSendReceipt.now(status=SendStatus.DRY_RUN, detail=detail, provider_message_id=None)
