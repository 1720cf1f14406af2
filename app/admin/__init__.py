"""
File: app/admin/__init__.py

Project: ISP Admin Dashboard

Purpose:
Admin package: dashboard reads, ticket status updates and client
notifications.

Design rules:
- Thin HTTP layer, business flow lives in app.services
- Notification outcomes are returned as data, never raised
"""

from .routes import router as admin_router
