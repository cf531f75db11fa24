"""
Base class for the calendar services.

Holds the session and its UnitOfWork, a logger named after the service,
and the call timing used by ``service_operation``.
"""

import logging
import time
from typing import Optional, Dict, Any
from sqlalchemy import text
from sqlalchemy.orm import Session

from aicalendar.repositories.unit_of_work import UnitOfWork
from aicalendar.services.error_handling import ServiceError

# Operations slower than this are logged as warnings
SLOW_OPERATION_MS = 2000


class BaseService:
    """
    Common plumbing for services.

    Subclasses reach the repositories through ``self.uow`` and log through
    ``self.logger``.
    """

    def __init__(self, db: Session, service_name: Optional[str] = None):
        if db is None:
            raise ServiceError("Database session not available", error_code="NO_DB_SESSION")
        self.db = db
        self.uow = UnitOfWork(db)
        self.service_name = service_name or self.__class__.__name__
        self.logger = logging.getLogger(self.service_name)

    # ========================================================================
    # Timing
    # ========================================================================

    def _log_call(self, operation: str, duration_ms: int, outcome: str):
        if duration_ms > SLOW_OPERATION_MS:
            self.logger.warning(f"Slow operation: {operation} took {duration_ms}ms ({outcome})")
        else:
            self.logger.debug(f"{operation} {outcome} in {duration_ms}ms")

    def _timed_operation(self, operation_name: str) -> "TimedOperation":
        return TimedOperation(self, operation_name)

    # ========================================================================
    # Health
    # ========================================================================

    def health_check(self) -> Dict[str, Any]:
        """
        Check that the session can reach the database.

        Returns:
            Dictionary with status, service name and database state
        """
        try:
            self.db.execute(text("SELECT 1"))
            database = "connected"
        except Exception as e:
            self.logger.error(f"Health check failed: {e}")
            database = "unavailable"

        return {
            "status": "healthy" if database == "connected" else "unhealthy",
            "service": self.service_name,
            "database": database,
        }


class TimedOperation:
    """Times one operation call and logs its outcome on exit."""

    def __init__(self, service: BaseService, operation_name: str):
        self.service = service
        self.operation_name = operation_name
        self.rejected = False
        self.failed = False
        self._started = 0.0

    @property
    def outcome(self) -> str:
        if self.failed:
            return "failed"
        return "rejected" if self.rejected else "ok"

    def __enter__(self):
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.failed = True
        duration_ms = int((time.perf_counter() - self._started) * 1000)
        self.service._log_call(self.operation_name, duration_ms, self.outcome)
        return False
