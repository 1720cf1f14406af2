"""
File: app/admin/routes.py

Project: ISP Admin Dashboard

Purpose:
Admin dashboard endpoints (the UI action layer).

Endpoints:
- GET  /admin/clients?search=
- POST /admin/clients
- GET  /admin/installers
- GET  /admin/tickets
- GET  /admin/summary
- POST /admin/clients/{client_id}/notify
- POST /admin/tickets/{ticket_id}/status
- POST /admin/tickets/{ticket_id}/notify

Design rules:
- Read-only by default
- Writes are limited to client creation and the ticket status update
- Notification is best-effort: it runs after the status commit and a failed
  send never rolls the status back
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr, Field, field_validator
from sqlalchemy import case, func, or_
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps import get_dispatcher, get_ticket_notifier
from app.models import Client, ClientStatus, Installer, SupportTicket, TicketStatus
from app.services.notification_service import NotificationDispatcher
from app.services.ticket_notifier import TicketUpdateNotifier
from app.services.tickets_service import update_ticket_status

router = APIRouter(prefix="/admin", tags=["admin"])


class ClientCreateBody(BaseModel):
    name: str = Field(min_length=3)
    email: Optional[EmailStr] = None
    phone: str = Field(min_length=7)
    address: str = Field(min_length=5)
    plan: str = Field(min_length=1)
    contract_number: str = Field(min_length=1)
    ip_mac: Optional[str] = None
    monthly_amount: Decimal = Field(ge=0)
    due_date: int = Field(ge=1, le=31)
    status: ClientStatus = ClientStatus.ACTIVE

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class NotifyClientBody(BaseModel):
    message: str = Field(min_length=1)


class TicketStatusBody(BaseModel):
    status: TicketStatus
    notify: bool = True


class NotifyTicketBody(BaseModel):
    status: TicketStatus


def _label(value) -> Optional[str]:
    return value.value if value is not None else None


# -------------------------------------------------------------------
# Clients
# -------------------------------------------------------------------
def _client_row(r: Client) -> dict:
    return {
        "id": r.id,
        "name": r.name,
        "phone": r.phone,
        "email": r.email,
        "address": r.address,
        "plan": r.plan,
        "contract_number": r.contract_number,
        "ip_mac": r.ip_mac,
        "monthly_amount": float(r.monthly_amount) if r.monthly_amount is not None else None,
        "due_date": r.due_date,
        "status": _label(r.status),
    }


@router.get("/clients")
def list_clients(search: Optional[str] = None, db: Session = Depends(get_db)):
    query = db.query(Client)

    term = (search or "").strip()
    if term:
        pattern = f"%{term}%"
        query = query.filter(or_(Client.name.ilike(pattern), Client.address.ilike(pattern)))

    # newest first; name breaks ties between rows created in the same instant
    rows = query.order_by(Client.created_at.desc(), Client.name.asc()).all()

    return [_client_row(r) for r in rows]


@router.post("/clients", status_code=201)
def create_client(body: ClientCreateBody, db: Session = Depends(get_db)):
    client = Client(**body.model_dump())
    db.add(client)
    db.commit()
    db.refresh(client)

    return _client_row(client)


# -------------------------------------------------------------------
# Installers
# -------------------------------------------------------------------
@router.get("/installers")
def list_installers(db: Session = Depends(get_db)):
    rows = db.query(Installer).order_by(Installer.name.asc()).all()

    return [
        {
            "id": r.id,
            "name": r.name,
            "phone": r.phone,
            "email": r.email,
            "status": _label(r.status),
        }
        for r in rows
    ]


# -------------------------------------------------------------------
# Tickets (newest first, with client name/address)
# -------------------------------------------------------------------
@router.get("/tickets")
def list_tickets(db: Session = Depends(get_db)):
    rows = (
        db.query(
            SupportTicket.id,
            SupportTicket.issue,
            SupportTicket.status,
            SupportTicket.priority,
            SupportTicket.client_id,
            SupportTicket.created_at,
            Client.name.label("client_name"),
            Client.address.label("client_address"),
        )
        .outerjoin(Client, Client.id == SupportTicket.client_id)
        .order_by(SupportTicket.created_at.desc())
        .all()
    )

    return [
        {
            "id": r.id,
            "issue": r.issue,
            "status": _label(r.status),
            "priority": _label(r.priority),
            "client_id": r.client_id,
            "client_name": r.client_name,
            "client_address": r.client_address,
            "created_at": r.created_at,
        }
        for r in rows
    ]


# -------------------------------------------------------------------
# Dashboard summary
# -------------------------------------------------------------------
@router.get("/summary")
def dashboard_summary(db: Session = Depends(get_db)):
    counts = dict(
        db.query(Client.status, func.count(Client.id))
        .group_by(Client.status)
        .all()
    )

    revenue = (
        db.query(
            func.sum(
                case(
                    (Client.status == ClientStatus.ACTIVE, func.coalesce(Client.monthly_amount, 0)),
                    else_=0,
                )
            )
        ).scalar()
        or 0
    )

    return {
        "active": counts.get(ClientStatus.ACTIVE, 0),
        "overdue": counts.get(ClientStatus.OVERDUE, 0),
        "cut_off": counts.get(ClientStatus.CUT_OFF, 0),
        "estimated_revenue": float(revenue),
    }


# -------------------------------------------------------------------
# Notifications
# -------------------------------------------------------------------
@router.post("/clients/{client_id}/notify")
def notify_client(
    client_id: str,
    body: NotifyClientBody,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    return dispatcher.send_client_notification(client_id, body.message).to_dict()


@router.post("/tickets/{ticket_id}/notify")
def notify_ticket(
    ticket_id: str,
    body: NotifyTicketBody,
    notifier: TicketUpdateNotifier = Depends(get_ticket_notifier),
):
    return notifier.notify_ticket_update(ticket_id, body.status.value).to_dict()


# -------------------------------------------------------------------
# Ticket status change (controlled write, then best-effort notify)
# -------------------------------------------------------------------
@router.post("/tickets/{ticket_id}/status")
def change_ticket_status(
    ticket_id: str,
    body: TicketStatusBody,
    db: Session = Depends(get_db),
    notifier: TicketUpdateNotifier = Depends(get_ticket_notifier),
):
    ticket = update_ticket_status(db, ticket_id=ticket_id, status=body.status)
    if not ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")

    notification = None
    if body.notify:
        notification = notifier.notify_ticket_update(ticket_id, body.status.value).to_dict()

    return {
        "ticket_id": ticket_id,
        "status": body.status.value,
        "notification": notification,
    }
