"""
File: app/main.py

Project: ISP Admin Dashboard

Purpose:
Application entry point.
Responsible only for:
- Loading configuration
- Building the DB engine/session factory and the outbound gateway ONCE
- FastAPI app creation and router registration

Design principles:
- No business logic in this file
- No module-level clients: everything is built in create_app() and placed
  on app.state for the dependencies in app.deps

Run:
    uvicorn app.main:create_app --factory
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from app.admin.routes import router as admin_router
from app.config import AppSettings, load_app_settings
from app.db import build_engine, build_session_factory
from app.health import router as health_router
from app.outbound.factory import build_send_gateway
from app.outbound.gateway import SendGateway
from app.outbound.settings import MODE_DRY_RUN, load_outbound_settings

logger = logging.getLogger("main")


def create_app(
    settings: Optional[AppSettings] = None,
    *,
    engine: Optional[Engine] = None,
    send_gateway: Optional[SendGateway] = None,
) -> FastAPI:
    settings = settings or load_app_settings()
    logging.basicConfig(level=settings.log_level)

    engine = engine or build_engine(settings.database_url)

    if send_gateway is None:
        outbound_settings = load_outbound_settings()
        send_gateway = build_send_gateway(outbound_settings)
        outbound_mode = outbound_settings.mode
    else:
        outbound_mode = getattr(send_gateway, "mode", type(send_gateway).__name__)

    if outbound_mode == MODE_DRY_RUN:
        logger.warning("Outbound mode is dry_run: no messages will be delivered")
    logger.info("Outbound channel: %s", outbound_mode)

    app = FastAPI(title="ISP Admin Dashboard")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.send_gateway = send_gateway
    app.state.outbound_mode = outbound_mode

    # -------------------------------------------------------------------
    # Admin dashboard + notification actions
    # -------------------------------------------------------------------
    app.include_router(admin_router)

    # -------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------
    app.include_router(health_router)

    return app
