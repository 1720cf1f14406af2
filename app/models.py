"""
File: app/models.py

Project: ISP Admin Dashboard

Purpose:
SQLAlchemy ORM models for the dashboard data owned by the hosted database:
clients, installers and support tickets.

Design principles:
- Tables map 1:1 with the hosted schema
- No business logic in models
- Relationships kept minimal and explicit
- Enumerated values are stored as their Spanish labels
"""

from __future__ import annotations

import enum
import uuid

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    Text,
    func,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


# ---------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------
class ClientStatus(str, enum.Enum):
    ACTIVE = "Activo"
    OVERDUE = "En Mora"
    CUT_OFF = "Cortado"


class InstallerStatus(str, enum.Enum):
    AVAILABLE = "Disponible"
    ON_ROUTE = "En Ruta"
    OUT_OF_SERVICE = "Fuera de Servicio"


class TicketStatus(str, enum.Enum):
    OPEN = "Abierto"
    IN_PROGRESS = "En Proceso"
    CLOSED = "Cerrado"


class TicketPriority(str, enum.Enum):
    LOW = "Baja"
    MEDIUM = "Media"
    HIGH = "Alta"


def _labels(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


# ---------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------
class Client(Base):
    __tablename__ = "clients"

    id = Column(Text, primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    phone = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    address = Column(Text, nullable=False, default="")
    plan = Column(Text, nullable=False, default="")
    contract_number = Column(Text, nullable=True)
    ip_mac = Column(Text, nullable=True)
    monthly_amount = Column(Numeric(10, 2), nullable=True)
    due_date = Column(Integer, nullable=True)
    status = Column(
        Enum(
            ClientStatus,
            name="client_status",
            values_callable=_labels,
        ),
        nullable=True,
        default=ClientStatus.ACTIVE,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())


# ---------------------------------------------------------------------
# Installer
# ---------------------------------------------------------------------
class Installer(Base):
    __tablename__ = "installers"

    id = Column(Text, primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    phone = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    status = Column(
        Enum(
            InstallerStatus,
            name="installer_status",
            values_callable=_labels,
        ),
        nullable=True,
        default=InstallerStatus.AVAILABLE,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())


# ---------------------------------------------------------------------
# Support ticket
# ---------------------------------------------------------------------
class SupportTicket(Base):
    __tablename__ = "support_tickets"

    id = Column(Text, primary_key=True, default=_new_id)
    issue = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        Enum(
            TicketStatus,
            name="ticket_status",
            values_callable=_labels,
        ),
        nullable=True,
        default=TicketStatus.OPEN,
    )
    priority = Column(
        Enum(
            TicketPriority,
            name="ticket_priority",
            values_callable=_labels,
        ),
        nullable=True,
        default=TicketPriority.MEDIUM,
    )
    client_id = Column(Text, ForeignKey("clients.id"), nullable=True)
    assigned_installer_id = Column(Text, ForeignKey("installers.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    client = relationship("Client")
    assigned_installer = relationship("Installer")
