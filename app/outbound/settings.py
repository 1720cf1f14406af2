"""
app/outbound/settings.py
ISP Admin Dashboard
Outbound Settings

Purpose:
- Centralised outbound channel configuration.
- Keep secrets out of code via environment variables.

Channel selection (OUTBOUND_MODE):
- auto (default): whichever credential set is provisioned
    - TWILIO_ACCOUNT_SID + TWILIO_AUTH_TOKEN      -> twilio
    - META_WA_ACCESS_TOKEN + META_WA_PHONE_NUMBER_ID -> meta
  Both or neither is a configuration error.
- twilio / meta: force that channel (its credentials become required)
- dry_run: never send

Optional:
- TWILIO_WHATSAPP_FROM (defaults to the Twilio sandbox number)
- TWILIO_API_BASE_URL, META_API_BASE_URL, META_WA_API_VERSION
- OUTBOUND_TIMEOUT_SECONDS (defaults to 30)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

MODE_AUTO = "auto"
MODE_TWILIO = "twilio"
MODE_META = "meta"
MODE_DRY_RUN = "dry_run"

VALID_MODES = (MODE_AUTO, MODE_TWILIO, MODE_META, MODE_DRY_RUN)

DEFAULT_TWILIO_WHATSAPP_FROM = "+14155238886"


def _require_env(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise RuntimeError(
            f"Missing required environment variable: {name}. "
            f"Set it in your .env / hosting dashboard / shell before running."
        )
    return value


def _has_env(*names: str) -> bool:
    return all(os.getenv(name, "").strip() for name in names)


@dataclass(frozen=True)
class TwilioSettings:
    account_sid: str
    auth_token: str
    from_number: str = DEFAULT_TWILIO_WHATSAPP_FROM
    api_base_url: str = "https://api.twilio.com"

    @property
    def messages_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/2010-04-01/Accounts/{self.account_sid}/Messages.json"


@dataclass(frozen=True)
class MetaWhatsAppSettings:
    api_version: str
    access_token: str
    phone_number_id: str
    api_base_url: str = "https://graph.facebook.com"

    @property
    def base_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/{self.api_version}"

    @property
    def messages_url(self) -> str:
        return f"{self.base_url}/{self.phone_number_id}/messages"


@dataclass(frozen=True)
class OutboundDeliverySettings:
    mode: str
    timeout_seconds: float = 30.0
    twilio: Optional[TwilioSettings] = None
    meta: Optional[MetaWhatsAppSettings] = None


def load_twilio_settings() -> TwilioSettings:
    return TwilioSettings(
        account_sid=_require_env("TWILIO_ACCOUNT_SID"),
        auth_token=_require_env("TWILIO_AUTH_TOKEN"),
        from_number=os.getenv("TWILIO_WHATSAPP_FROM", DEFAULT_TWILIO_WHATSAPP_FROM).strip(),
        api_base_url=os.getenv("TWILIO_API_BASE_URL", "https://api.twilio.com").strip(),
    )


def load_meta_settings() -> MetaWhatsAppSettings:
    return MetaWhatsAppSettings(
        api_version=os.getenv("META_WA_API_VERSION", "v20.0").strip(),
        access_token=_require_env("META_WA_ACCESS_TOKEN"),
        phone_number_id=_require_env("META_WA_PHONE_NUMBER_ID"),
        api_base_url=os.getenv("META_API_BASE_URL", "https://graph.facebook.com").strip(),
    )


def resolve_mode(requested: str) -> str:
    """
    Turn the configured mode into a concrete channel.
    'auto' picks by provisioned credentials and refuses ambiguity.
    """
    mode = (requested or MODE_AUTO).strip().lower()
    if mode not in VALID_MODES:
        raise RuntimeError(
            f"Invalid OUTBOUND_MODE: {requested!r}. Expected one of {', '.join(VALID_MODES)}."
        )
    if mode != MODE_AUTO:
        return mode

    has_twilio = _has_env("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN")
    has_meta = _has_env("META_WA_ACCESS_TOKEN", "META_WA_PHONE_NUMBER_ID")

    if has_twilio and has_meta:
        raise RuntimeError(
            "Both Twilio and Meta WhatsApp credentials are set. "
            "Provision only one channel or set OUTBOUND_MODE explicitly."
        )
    if has_twilio:
        return MODE_TWILIO
    if has_meta:
        return MODE_META
    raise RuntimeError(
        "No outbound channel credentials found. "
        "Set Twilio or Meta WhatsApp credentials, or OUTBOUND_MODE=dry_run."
    )


def load_outbound_settings() -> OutboundDeliverySettings:
    mode = resolve_mode(os.getenv("OUTBOUND_MODE", MODE_AUTO))
    try:
        timeout_seconds = float(os.getenv("OUTBOUND_TIMEOUT_SECONDS", "30"))
    except ValueError:
        raise RuntimeError("OUTBOUND_TIMEOUT_SECONDS must be a number") from None
    if timeout_seconds <= 0:
        raise RuntimeError("OUTBOUND_TIMEOUT_SECONDS must be > 0")

    return OutboundDeliverySettings(
        mode=mode,
        timeout_seconds=timeout_seconds,
        twilio=load_twilio_settings() if mode == MODE_TWILIO else None,
        meta=load_meta_settings() if mode == MODE_META else None,
    )
