"""
Calendar Events API
"""

from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from aicalendar.api.errors import unwrap_or_raise
from aicalendar.core.dependencies import get_current_user_id, get_event_service
from aicalendar.core.timeutils import to_utc_naive
from aicalendar.schemas.calendar import (
    CreateEventRequest,
    UpdateEventRequest,
    EventResponse,
    EventListResponse,
)
from aicalendar.services.event_service import EventService


router = APIRouter(
    prefix="/events",
    tags=["Calendar"]
)


@router.get("", response_model=EventListResponse)
async def list_events(
    start_period_utc: Optional[datetime] = Query(None, alias="startPeriodUtc"),
    end_period_utc: Optional[datetime] = Query(None, alias="endPeriodUtc"),
    current_user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service)
):
    if (start_period_utc is None) != (end_period_utc is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="If providing a period, both startPeriodUtc and endPeriodUtc must be supplied."
        )
    if start_period_utc is not None and to_utc_naive(end_period_utc) <= to_utc_naive(start_period_utc):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="endPeriodUtc must be after startPeriodUtc."
        )

    events = unwrap_or_raise(service.list_events_for_user(current_user_id, start_period_utc, end_period_utc))
    return EventListResponse(events=events, total_count=len(events))


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service)
):
    return unwrap_or_raise(service.get_event(event_id, current_user_id))


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    request: CreateEventRequest,
    current_user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service)
):
    result = service.create_event(
        title=request.title,
        start_time_utc=request.start_time_utc,
        end_time_utc=request.end_time_utc,
        owner_user_id=current_user_id,
        description=request.description,
        time_zone_id=request.time_zone_id,
        invited_user_ids=request.participant_user_ids,
    )
    return unwrap_or_raise(result)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    request: UpdateEventRequest,
    current_user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service)
):
    updates = request.model_dump(exclude_unset=True)
    return unwrap_or_raise(service.update_event(event_id, updates, current_user_id))


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service)
):
    unwrap_or_raise(service.delete_event(event_id, current_user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
