from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import AppSettings
from app.main import create_app
from app.models import (
    Base,
    Client,
    ClientStatus,
    Installer,
    InstallerStatus,
    SupportTicket,
    TicketPriority,
    TicketStatus,
)
from app.outbound.gateway import OutboundSendReceipt, OutboundSendRequest, SendStatus
from app.services.client_resolver import ClientResolver
from app.services.notification_service import NotificationDispatcher
from app.services.ticket_notifier import TicketUpdateNotifier


class RecordingGateway:
    """In-memory SendGateway that records every request it is given."""

    mode = "recording"

    def __init__(self, status: SendStatus = SendStatus.SENT, detail: str = "sent") -> None:
        self.status = status
        self.detail = detail
        self.requests: list[OutboundSendRequest] = []

    def send_text(self, req: OutboundSendRequest) -> OutboundSendReceipt:
        self.requests.append(req)
        status_code = 200 if self.status == SendStatus.SENT else 400
        return OutboundSendReceipt.now(status=self.status, detail=self.detail, status_code=status_code)


# DATABASE SETUP (SQLite in-memory)
@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def seeded(db):
    ana = Client(
        id="client-ana",
        name="Ana",
        phone="+504 9999-9999",
        email="ana@example.com",
        address="Col. Palmira, Tegucigalpa",
        plan="20 Mbps",
        monthly_amount=Decimal("30.00"),
        due_date=5,
        status=ClientStatus.ACTIVE,
    )
    luis = Client(
        id="client-luis",
        name="Luis",
        phone=None,
        address="Barrio Abajo",
        plan="10 Mbps",
        monthly_amount=Decimal("25.00"),
        status=ClientStatus.OVERDUE,
    )
    marta = Client(
        id="client-marta",
        name="Marta",
        phone="  ",
        address="Centro",
        plan="50 Mbps",
        monthly_amount=Decimal("45.50"),
        status=ClientStatus.ACTIVE,
    )
    pedro = Client(
        id="client-pedro",
        name="Pedro",
        phone="+504 8888-0000",
        address="Kennedy",
        plan="10 Mbps",
        monthly_amount=Decimal("20.00"),
        status=ClientStatus.CUT_OFF,
    )
    installer = Installer(
        id="inst-1",
        name="Carlos",
        phone="+504 7777-1111",
        status=InstallerStatus.AVAILABLE,
    )
    t1 = SupportTicket(
        id="T1",
        issue="Sin señal",
        status=TicketStatus.OPEN,
        priority=TicketPriority.HIGH,
        client_id="client-ana",
        assigned_installer_id="inst-1",
    )
    t2 = SupportTicket(
        id="T2",
        issue="Router dañado",
        status=TicketStatus.OPEN,
        priority=TicketPriority.LOW,
        client_id=None,
    )
    t3 = SupportTicket(
        id="T3",
        issue="Lentitud",
        status=TicketStatus.IN_PROGRESS,
        priority=TicketPriority.MEDIUM,
        client_id="client-luis",
    )
    db.add_all([ana, luis, marta, pedro, installer])
    db.flush()
    db.add_all([t1, t2, t3])
    db.commit()
    return db


@pytest.fixture()
def gateway():
    return RecordingGateway()


@pytest.fixture()
def dispatcher(seeded, gateway):
    return NotificationDispatcher(ClientResolver(seeded), gateway)


@pytest.fixture()
def notifier(seeded, dispatcher):
    return TicketUpdateNotifier(seeded, dispatcher)


@pytest.fixture()
def client(engine, seeded, gateway):
    app = create_app(
        AppSettings(database_url="sqlite://"),
        engine=engine,
        send_gateway=gateway,
    )
    with TestClient(app) as test_client:
        yield test_client
