# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Database engine: process-wide SQLAlchemy connection pool.

The engine is built on first use rather than at import, so importing the app
never opens a socket. It lives until ``dispose_engine()`` or process exit.
"""
import threading
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from waitlist.core.config import settings
from waitlist.core.logging import get_logger

logger = get_logger(__name__)

_engine: Optional[Engine] = None
_lock = threading.Lock()


def get_engine() -> Engine:
    """Return the shared engine, creating it on the first call."""
    global _engine
    if _engine is None:
        with _lock:
            if _engine is None:
                _engine = create_engine(
                    settings.DATABASE_URL,
                    pool_pre_ping=True,
                    pool_size=settings.DB_POOL_SIZE,
                    max_overflow=settings.DB_MAX_OVERFLOW,
                    pool_recycle=settings.DB_POOL_RECYCLE,
                )
                logger.info("Connection pool created size=%d overflow=%d",
                            settings.DB_POOL_SIZE, settings.DB_MAX_OVERFLOW)
    return _engine


def dispose_engine() -> None:
    global _engine
    with _lock:
        if _engine is not None:
            _engine.dispose()
            _engine = None
            logger.info("Shutting down, connection pool disposed")
