"""
Health check endpoints
Used by the hosting platform + ops
"""

from fastapi import APIRouter, Request
from sqlalchemy.exc import SQLAlchemyError

from app.db import test_db_connection

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health_check(request: Request):
    return {"status": "healthy", "outbound_mode": request.app.state.outbound_mode}


@router.get("/db")
def db_health_check(request: Request):
    try:
        test_db_connection(request.app.state.engine)
        return {"database": "healthy"}
    except SQLAlchemyError as e:
        return {"database": "unhealthy", "error": str(e)}
