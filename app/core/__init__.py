"""Shared infrastructure for the analytics backend.

Settings, the async database session, structured logging with request
correlation, and the error types rendered as problem details.
"""

from app.core.config import Settings, get_settings
from app.core.database import Base, get_db
from app.core.exceptions import DatabaseError, MarketplaceError
from app.core.logging import get_logger, request_id_ctx

__all__ = [
    "Base",
    "DatabaseError",
    "MarketplaceError",
    "Settings",
    "get_db",
    "get_logger",
    "get_settings",
    "request_id_ctx",
]
