"""
Engine and session plumbing for the calendar store.

The engine is built once per process, after waiting for the database to
accept connections. Request handlers get a session through ``get_db``.
"""

import time
from functools import lru_cache
from typing import Generator, Dict, Any
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool
import logging

from aicalendar.core.config import get_settings
from aicalendar.core.exceptions import DatabaseException

logger = logging.getLogger('CORE_DATABASE')

# Seconds to wait between connection attempts at startup
RETRY_DELAYS = (1, 2, 3, 5, 8)


def _engine_options(url: str) -> Dict[str, Any]:
    settings = get_settings()
    options: Dict[str, Any] = {'echo': settings.db_echo}
    if make_url(url).get_backend_name() == "sqlite":
        # Sessions may be used from FastAPI's threadpool
        options['connect_args'] = {'check_same_thread': False}
        return options

    options.update(
        poolclass=QueuePool,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=settings.db_pool_pre_ping,
    )
    return options


@lru_cache()
def get_engine() -> Engine:
    """
    Engine for the configured database.

    Raises:
        DatabaseException: If the database is still unreachable after every retry
    """
    settings = get_settings()
    url = settings.get_database_url()
    engine = create_engine(url, **_engine_options(url))
    logger.info(f"Connecting to {settings.get_safe_database_url()}")

    attempts = len(RETRY_DELAYS)
    for attempt, delay in enumerate(RETRY_DELAYS, start=1):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info(f"Calendar database reachable (attempt {attempt})")
            return engine
        except OperationalError as e:
            logger.warning(f"Calendar database unreachable (attempt {attempt}/{attempts}): {e}")
            if attempt < attempts:
                time.sleep(delay)

    engine.dispose()
    raise DatabaseException(f"Could not connect to the calendar database after {attempts} attempts")


@lru_cache()
def get_session_factory() -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency yielding one session per request.

    Example:
        @router.get("/events")
        async def list_events(service: EventService = Depends(get_event_service)):
            ...
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine = None) -> None:
    """
    Create the users, events and event_participants tables if missing.

    Args:
        engine: Engine to create tables on (defaults to the application engine)
    """
    from aicalendar.models import Base

    Base.metadata.create_all(bind=engine or get_engine())
    logger.info(f"Calendar tables ensured: {sorted(Base.metadata.tables)}")
