from sqlalchemy.orm import Session
from fastapi import Depends, HTTPException, Request, status

from aicalendar.core.database import get_db
from aicalendar.core.config import get_settings, Settings
import logging

logger = logging.getLogger('CORE_DEPENDENCIES')


# ============================================================================
# Configuration Dependencies
# ============================================================================

def get_settings_dependency() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration
    """
    return get_settings()


# ============================================================================
# Database Dependencies
# ============================================================================

def get_db_session(db: Session = Depends(get_db)) -> Session:
    """
    Get database session for dependency injection.

    Returns:
        Session: SQLAlchemy database session
    """
    return db


# ============================================================================
# Identity Dependencies
# ============================================================================

def get_current_user_id(
    request: Request,
    settings: Settings = Depends(get_settings_dependency)
) -> str:
    """
    Caller identity, as verified upstream and forwarded in a request header.

    Raises:
        HTTPException: 401 if the header is missing or blank
    """
    user_id = (request.headers.get(settings.user_id_header) or "").strip()
    if not user_id:
        logger.warning(f"Request to {request.url.path} without {settings.user_id_header} header")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Caller identity missing")
    return user_id


# ============================================================================
# Service Dependencies
# ============================================================================

def get_user_service(db: Session = Depends(get_db)):
    """
    Get UserService instance.

    Args:
        db: Database session (automatically injected)

    Returns:
        UserService: User directory operations
    """
    from aicalendar.services.user_service import UserService
    return UserService(db)


def get_event_service(db: Session = Depends(get_db)):
    """
    Get EventService instance.

    Args:
        db: Database session (automatically injected)

    Returns:
        EventService: Event lifecycle operations

    Example:
        @router.get("/events/{event_id}")
        def get_event(
            event_id: str,
            service: EventService = Depends(get_event_service)
        ):
            return service.get_event(event_id, user_id)
    """
    from aicalendar.services.event_service import EventService
    return EventService(db)


def get_participant_service(db: Session = Depends(get_db)):
    """
    Get ParticipantService instance.

    Args:
        db: Database session (automatically injected)

    Returns:
        ParticipantService: Participant lifecycle operations
    """
    from aicalendar.services.participant_service import ParticipantService
    return ParticipantService(db)


def get_slot_finding_service(db: Session = Depends(get_db)):
    """
    Get SlotFindingService instance.

    Args:
        db: Database session (automatically injected)

    Returns:
        SlotFindingService: Common free-time search
    """
    from aicalendar.services.slot_finding_service import SlotFindingService
    return SlotFindingService(db)
