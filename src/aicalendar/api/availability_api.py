"""
Availability API
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status

from aicalendar.api.errors import unwrap_or_raise
from aicalendar.core.dependencies import get_current_user_id, get_slot_finding_service
from aicalendar.schemas.availability import FindSlotsRequest, AvailableSlotListResponse
from aicalendar.services.slot_finding_service import SlotFindingService

logger = logging.getLogger("AVAILABILITY_API")


router = APIRouter(
    prefix="/slots",
    tags=["Availability"]
)


@router.post("/find", response_model=AvailableSlotListResponse)
async def find_available_slots(
    request: FindSlotsRequest,
    current_user_id: str = Depends(get_current_user_id),
    service: SlotFindingService = Depends(get_slot_finding_service)
):
    if request.search_window_end_utc <= request.search_window_start_utc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search window end must be after start."
        )

    logger.info(
        f"Finding available slots for {len(request.participant_user_ids)} users, "
        f"duration {request.meeting_duration_minutes} mins, "
        f"window {request.search_window_start_utc} to {request.search_window_end_utc}"
    )
    slots = unwrap_or_raise(service.find_available_slots(
        request.participant_user_ids,
        request.search_window_start_utc,
        request.search_window_end_utc,
        request.meeting_duration_minutes,
    ))
    return AvailableSlotListResponse(slots=slots, total_count=len(slots))
