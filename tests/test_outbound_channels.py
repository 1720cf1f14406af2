from __future__ import annotations

from unittest import mock

import pytest
import requests

from app.outbound.dry_run import DryRunSendGateway
from app.outbound.gateway import OutboundSendRequest, SendStatus
from app.outbound.meta import MetaSendGateway, MetaWhatsAppClient
from app.outbound.phone import digits_only, whatsapp_address
from app.outbound.settings import MetaWhatsAppSettings, TwilioSettings
from app.outbound.twilio import TwilioMessagingClient, TwilioSendGateway


def make_response(status_code: int, payload) -> mock.Mock:
    response = mock.Mock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = str(payload)
    return response


@pytest.fixture()
def session():
    return mock.Mock(spec=requests.Session)


@pytest.fixture()
def meta_gateway(session):
    settings = MetaWhatsAppSettings(
        api_version="v20.0",
        access_token="EAAG-token",
        phone_number_id="1234567890",
    )
    return MetaSendGateway(MetaWhatsAppClient(settings=settings, session=session, timeout=5))


@pytest.fixture()
def twilio_gateway(session):
    settings = TwilioSettings(account_sid="AC123", auth_token="token-xyz")
    client = TwilioMessagingClient(settings=settings, session=session, timeout=5)
    return TwilioSendGateway(client, from_number=settings.from_number)


def test_digits_only_strips_formatting():
    assert digits_only("+504 9999-9999") == "50499999999"
    assert digits_only(None) == ""


def test_whatsapp_address_does_not_double_prefix():
    assert whatsapp_address("+50499999999") == "whatsapp:+50499999999"
    assert whatsapp_address("whatsapp:+50499999999") == "whatsapp:+50499999999"


class TestMetaGateway:
    def test_posts_digits_only_recipient(self, meta_gateway, session):
        session.post.return_value = make_response(
            200, {"messaging_product": "whatsapp", "messages": [{"id": "wamid.ABC"}]}
        )

        receipt = meta_gateway.send_text(
            OutboundSendRequest(to_number="+504 9999-9999", body_text="Hola Ana")
        )

        assert receipt.status == SendStatus.SENT
        assert receipt.ok
        assert receipt.provider_message_id == "wamid.ABC"
        args, kwargs = session.post.call_args
        assert args[0] == "https://graph.facebook.com/v20.0/1234567890/messages"
        assert kwargs["headers"]["Authorization"] == "Bearer EAAG-token"
        assert kwargs["timeout"] == 5
        assert kwargs["json"] == {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": "50499999999",
            "type": "text",
            "text": {"body": "Hola Ana"},
        }

    def test_provider_error_message_is_surfaced(self, meta_gateway, session):
        session.post.return_value = make_response(
            400, {"error": {"message": "(#100) Invalid parameter", "code": 100}}
        )

        receipt = meta_gateway.send_text(OutboundSendRequest(to_number="50499999999", body_text="x"))

        assert receipt.status == SendStatus.FAILED
        assert receipt.detail == "(#100) Invalid parameter"
        assert receipt.status_code == 400

    def test_error_without_body_gets_generic_detail(self, meta_gateway, session):
        response = make_response(502, None)
        response.json.side_effect = ValueError("no json")
        response.text = "Bad Gateway"
        session.post.return_value = response

        receipt = meta_gateway.send_text(OutboundSendRequest(to_number="50499999999", body_text="x"))

        assert receipt.status == SendStatus.FAILED
        assert "HTTP 502" in receipt.detail

    def test_transport_failure_is_a_failed_receipt(self, meta_gateway, session):
        session.post.side_effect = requests.ConnectionError("connection refused")

        receipt = meta_gateway.send_text(OutboundSendRequest(to_number="50499999999", body_text="x"))

        assert receipt.status == SendStatus.FAILED
        assert receipt.detail == "Failed to reach WhatsApp Graph API"

    def test_phone_without_digits_is_rejected_before_posting(self, meta_gateway, session):
        receipt = meta_gateway.send_text(OutboundSendRequest(to_number="n/a", body_text="x"))

        assert receipt.status == SendStatus.FAILED
        session.post.assert_not_called()


class TestTwilioGateway:
    def test_posts_whatsapp_prefixed_raw_phone(self, twilio_gateway, session):
        session.post.return_value = make_response(201, {"sid": "SM123", "status": "queued"})

        receipt = twilio_gateway.send_text(
            OutboundSendRequest(to_number="+504 9999-9999", body_text="Hola Ana")
        )

        assert receipt.status == SendStatus.SENT
        assert receipt.provider_message_id == "SM123"
        args, kwargs = session.post.call_args
        assert args[0] == "https://api.twilio.com/2010-04-01/Accounts/AC123/Messages.json"
        assert kwargs["auth"] == ("AC123", "token-xyz")
        assert kwargs["data"] == {
            "From": "whatsapp:+14155238886",
            "To": "whatsapp:+504 9999-9999",
            "Body": "Hola Ana",
        }

    def test_provider_error_message_is_surfaced(self, twilio_gateway, session):
        session.post.return_value = make_response(
            400, {"code": 21211, "message": "The 'To' number is not a valid phone number."}
        )

        receipt = twilio_gateway.send_text(OutboundSendRequest(to_number="+504", body_text="x"))

        assert receipt.status == SendStatus.FAILED
        assert receipt.detail == "The 'To' number is not a valid phone number."
        assert receipt.status_code == 400

    def test_transport_failure_is_a_failed_receipt(self, twilio_gateway, session):
        session.post.side_effect = requests.Timeout("read timed out")

        receipt = twilio_gateway.send_text(OutboundSendRequest(to_number="+50499999999", body_text="x"))

        assert receipt.status == SendStatus.FAILED
        assert receipt.detail == "Failed to reach Twilio API"


def test_dry_run_never_sends():
    receipt = DryRunSendGateway().send_text(OutboundSendRequest(to_number="+50499999999", body_text="x"))

    assert receipt.status == SendStatus.DRY_RUN
    assert receipt.ok
    assert receipt.provider_message_id is None
