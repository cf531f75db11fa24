from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from aicalendar.core.dependencies import get_db_session
from aicalendar.schemas.common import HealthCheckResponse
from aicalendar.services.user_service import UserService
import logging

logger = logging.getLogger("HEALTH_API_LOGGER")

health_api_router = APIRouter(prefix="/health", tags=["health"])


@health_api_router.get("", response_model=HealthCheckResponse)
async def health_status(response: Response, db: Session = Depends(get_db_session)):
    """
    Report whether the calendar store is reachable. Answers 503 when it is not.
    """
    check = UserService(db).health_check()
    if check["status"] != "healthy":
        logger.warning(f"Health check degraded: database {check['database']}")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthCheckResponse(**check)
