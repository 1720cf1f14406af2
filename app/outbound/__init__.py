# app/outbound/__init__.py
from .gateway import SendGateway, OutboundSendRequest, OutboundSendReceipt, SendStatus
from .dry_run import DryRunSendGateway
from .meta import MetaSendGateway, MetaWhatsAppClient
from .twilio import TwilioSendGateway, TwilioMessagingClient
from .settings import OutboundDeliverySettings, load_outbound_settings
from .factory import build_send_gateway
