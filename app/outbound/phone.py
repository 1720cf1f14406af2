"""
Phone formatting helpers shared by the outbound gateways.
"""

from __future__ import annotations

import re

WHATSAPP_SCHEME = "whatsapp:"


def digits_only(raw: str | None) -> str:
    """
    Strip every non-digit: "+504 9999-9999" -> "5049999999".
    """
    return re.sub(r"\D", "", raw or "")


def whatsapp_address(raw: str) -> str:
    # Twilio routes on the scheme prefix; the number itself is passed as stored.
    if raw.startswith(WHATSAPP_SCHEME):
        return raw
    return f"{WHATSAPP_SCHEME}{raw}"
