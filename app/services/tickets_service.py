"""
File: app/services/tickets_service.py
Project: ISP Admin Dashboard

Purpose:
Ticket status writes.

Design rules:
- Single-row update, committed immediately
- No messaging; notification is the caller's next step
- No transition rules: any enumerated status is accepted
"""

from datetime import datetime, timezone

from sqlalchemy.orm import Session

from app.models import SupportTicket, TicketStatus


def update_ticket_status(
    db: Session,
    *,
    ticket_id: str,
    status: TicketStatus,
) -> SupportTicket | None:
    """
    Sets the ticket status.

    Returns:
        SupportTicket -> updated and committed
        None          -> ticket did not exist
    """
    ticket = (
        db.query(SupportTicket)
        .filter(SupportTicket.id == ticket_id)
        .one_or_none()
    )

    if not ticket:
        return None

    ticket.status = status
    ticket.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(ticket)
    return ticket
