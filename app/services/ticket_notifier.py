"""
File: app/services/ticket_notifier.py

Project: ISP Admin Dashboard

Purpose:
Tell a client that their support ticket changed status.

Responsibilities:
- Read the ticket with its client's name
- Compose the status-change message
- Hand it to the NotificationDispatcher and return its result as-is

Not responsible for:
- Validating the status transition (the caller decides what is legal)
- Writing the status (the caller commits it before calling here)
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import DEFAULT_STATUS_PHRASE
from app.errors import NotificationError, TicketUnavailable, UnlinkedTicket
from app.models import Client, SupportTicket
from app.services.notification_service import NotificationDispatcher, NotificationResult

logger = logging.getLogger("ticket_notifier")


def compose_ticket_message(
    *,
    client_name: str,
    issue: str,
    status: str,
    phrase: str = DEFAULT_STATUS_PHRASE,
) -> str:
    return f'Hola {client_name}, el estado de tu ticket "{issue}" {phrase}: {status}.'

class TicketUpdateNotifier:
    def __init__(
        self,
        db: Session,
        dispatcher: NotificationDispatcher,
        status_phrase: str = DEFAULT_STATUS_PHRASE,
    ) -> None:
        self._db = db
        self._dispatcher = dispatcher
        self._status_phrase = status_phrase

    def notify_ticket_update(self, ticket_id: str, new_status: str) -> NotificationResult:
        try:
            client_id, client_name, issue = self._load_ticket(ticket_id)
        except NotificationError as e:
            logger.info("Ticket %s not notified (%s): %s", ticket_id, e.kind.value, e.message)
            return NotificationResult.failed(e)

        message = compose_ticket_message(
            client_name=client_name,
            issue=issue,
            status=new_status,
            phrase=self._status_phrase,
        )
        return self._dispatcher.send_client_notification(client_id, message)

    def _load_ticket(self, ticket_id: str) -> tuple[str, str, str]:
        try:
            row = (
                self._db.query(
                    SupportTicket.issue,
                    SupportTicket.client_id,
                    Client.name.label("client_name"),
                )
                .outerjoin(Client, Client.id == SupportTicket.client_id)
                .filter(SupportTicket.id == ticket_id)
                .one_or_none()
            )
        except SQLAlchemyError:
            logger.exception("Ticket lookup failed for %s", ticket_id)
            raise TicketUnavailable()

        if row is None:
            raise TicketUnavailable()

        if row.client_id is None:
            raise UnlinkedTicket()

        # client_id set but no client row joined
        if row.client_name is None:
            raise TicketUnavailable()

        return row.client_id, row.client_name, row.issue
