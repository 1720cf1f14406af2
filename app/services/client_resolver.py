"""
File: app/services/client_resolver.py
Project: ISP Admin Dashboard

Purpose:
Turn a client id into contact details right before a dispatch.

Design rules:
- One read per call, no caching
- No messaging
- Store errors are logged and reported as ClientNotFound
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import ClientNotFound
from app.models import Client

logger = logging.getLogger("client_resolver")


@dataclass(frozen=True)
class ClientContact:
    id: str
    name: str
    phone: Optional[str]
    email: Optional[str] = None


class ClientResolver:
    def __init__(self, db: Session) -> None:
        self._db = db

    def resolve(self, client_id: str) -> ClientContact:
        if not client_id:
            raise ClientNotFound()

        try:
            row = (
                self._db.query(Client.id, Client.name, Client.phone, Client.email)
                .filter(Client.id == client_id)
                .one_or_none()
            )
        except SQLAlchemyError:
            logger.exception("Client lookup failed for %s", client_id)
            raise ClientNotFound()

        if row is None:
            raise ClientNotFound()

        return ClientContact(id=row.id, name=row.name, phone=row.phone, email=row.email)
