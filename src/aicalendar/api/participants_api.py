"""
Event Participants API
"""

from typing import List
from fastapi import APIRouter, Depends, Response, status

from aicalendar.api.errors import unwrap_or_raise
from aicalendar.core.dependencies import get_current_user_id, get_participant_service
from aicalendar.schemas.calendar import (
    AddParticipantRequest,
    UpdateParticipantStatusRequest,
    EventParticipantResponse,
)
from aicalendar.services.error_handling import Notice
from aicalendar.services.participant_service import ParticipantService


router = APIRouter(
    prefix="/events/{event_id}/participants",
    tags=["Participants"]
)


@router.get("", response_model=List[EventParticipantResponse])
async def list_participants(
    event_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: ParticipantService = Depends(get_participant_service)
):
    return unwrap_or_raise(service.list_participants(event_id, current_user_id))


@router.get("/{user_id}", response_model=EventParticipantResponse)
async def get_participant(
    event_id: str,
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: ParticipantService = Depends(get_participant_service)
):
    return unwrap_or_raise(service.get_participant(event_id, user_id, current_user_id))


@router.post("", response_model=EventParticipantResponse, status_code=status.HTTP_201_CREATED)
async def add_participant(
    event_id: str,
    request: AddParticipantRequest,
    response: Response,
    current_user_id: str = Depends(get_current_user_id),
    service: ParticipantService = Depends(get_participant_service)
):
    result = service.add_participant(event_id, request.user_id, current_user_id)
    participant = unwrap_or_raise(result)
    if result.notice is Notice.CONFLICT:
        # Already a participant: nothing was created
        response.status_code = status.HTTP_200_OK
    return participant


@router.put("/{user_id}", response_model=EventParticipantResponse)
async def update_participant_status(
    event_id: str,
    user_id: str,
    request: UpdateParticipantStatusRequest,
    current_user_id: str = Depends(get_current_user_id),
    service: ParticipantService = Depends(get_participant_service)
):
    return unwrap_or_raise(service.update_participant_status(event_id, user_id, request.status, current_user_id))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_participant(
    event_id: str,
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: ParticipantService = Depends(get_participant_service)
):
    unwrap_or_raise(service.remove_participant(event_id, user_id, current_user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
