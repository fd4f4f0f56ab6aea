import logging
import threading
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from ..core.config import settings
from . import models  # noqa: F401  registers the tables on SQLModel.metadata

logger = logging.getLogger(__name__)


def build_engine(db_url: str, echo: bool = False) -> Engine:
    engine_kwargs: Dict[str, Any] = {}
    if db_url.startswith("sqlite"):
        engine_kwargs.update({
            "connect_args": {"check_same_thread": False}
        })
    else:
        engine_kwargs.update({
            "pool_pre_ping": True,
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "pool_recycle": settings.DB_POOL_RECYCLE,
        })
    return create_engine(db_url, echo=echo, **engine_kwargs)


engine = build_engine(settings.database_url, echo=settings.DEBUG)


class DatabaseReadiness:
    """Explicit lifecycle for the store: one-time schema setup, liveness probe, teardown."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._lock = threading.Lock()
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def ensure_schema(self) -> None:
        if self._initialized:
            return
        with self._lock:
            if self._initialized:
                return
            SQLModel.metadata.create_all(self.engine)
            self._initialized = True
            logger.info("Database schema ready")

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False

    def status(self) -> Dict[str, Any]:
        try:
            return {"available": self.ping(), "initialized": self._initialized}
        except Exception as e:
            return {"available": False, "initialized": False, "error": str(e)}

    def teardown(self) -> None:
        self.engine.dispose()
        self._initialized = False
        logger.info("Database pool closed")


_readiness: Optional[DatabaseReadiness] = None


def get_readiness() -> DatabaseReadiness:
    global _readiness
    if _readiness is None:
        _readiness = DatabaseReadiness(engine)
    return _readiness