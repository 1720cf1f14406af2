"""
File: app/deps.py

Project: ISP Admin Dashboard

Purpose:
FastAPI dependencies that assemble the notification services per request.

The gateway and the status phrase are built once in create_app() and read
from app.state; the DB session is per request.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.db import get_db
from app.outbound.gateway import SendGateway
from app.services.client_resolver import ClientResolver
from app.services.notification_service import NotificationDispatcher
from app.services.ticket_notifier import TicketUpdateNotifier


def get_send_gateway(request: Request) -> SendGateway:
    return request.app.state.send_gateway


def get_dispatcher(
    db: Session = Depends(get_db),
    gateway: SendGateway = Depends(get_send_gateway),
) -> NotificationDispatcher:
    return NotificationDispatcher(ClientResolver(db), gateway)


def get_ticket_notifier(
    request: Request,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> TicketUpdateNotifier:
    return TicketUpdateNotifier(
        db,
        dispatcher,
        status_phrase=request.app.state.settings.ticket_status_phrase,
    )
