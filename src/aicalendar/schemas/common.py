"""
Shared response schemas: the error body and the health report.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from aicalendar.core.timeutils import utcnow


class ErrorResponse(BaseModel):
    """Body returned for unexpected server-side errors."""
    error: str
    detail: Optional[str] = None
    error_code: Optional[str] = None
    success: bool = False
    timestamp: datetime = Field(default_factory=utcnow)


class HealthCheckResponse(BaseModel):
    """Database reachability as seen by the probing service."""
    status: str
    service: str
    database: str
    timestamp: datetime = Field(default_factory=utcnow)
