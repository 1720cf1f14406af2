"""
ISP Admin Dashboard
Database module (single-file)

Provides:
- build_engine() / build_session_factory() used once at app start
- get_db() generator for FastAPI dependency injection
- test_db_connection() for the health endpoint

No engine is created at import time; create_app() owns construction.
"""

from __future__ import annotations

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from fastapi import Request


# ---- Engine + Session ----
def build_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )


def get_db(request: Request):
    """
    FastAPI dependency:
    - opens a DB session from the app's session factory
    - yields it to the request handler
    - always closes it afterwards
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def test_db_connection(engine: Engine) -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
