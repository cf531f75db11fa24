"""
Slot finding service.

Finds the free time common to a group of users within a search window.
Only Accepted and Tentative participations make a user busy; invitations
that are unanswered or declined leave the time open.
"""

from datetime import datetime, timedelta
from typing import List, Sequence, Set
from sqlalchemy.orm import Session

from aicalendar.core.timeutils import to_utc_naive
from aicalendar.models.enums import BUSY_STATUSES
from aicalendar.schemas.availability import AvailableSlotResponse
from aicalendar.services.availability_algorithm import TimeRange, find_free_gaps, merge_intervals
from aicalendar.services.base_service import BaseService
from aicalendar.services.error_handling import service_operation


class SlotFindingService(BaseService):
    """Common free-time search across participants' calendars."""

    def __init__(self, db: Session):
        super().__init__(db)

    def collect_busy_ranges(
        self,
        participant_user_ids: Sequence[str],
        window_start: datetime,
        window_end: datetime
    ) -> List[TimeRange]:
        """Busy ranges of every participant that overlap the window, sorted by start."""
        event_ids: Set[str] = set()
        for user_id in dict.fromkeys(participant_user_ids):
            event_ids.update(self.uow.participants.event_ids_for_user(user_id, BUSY_STATUSES))

        if not event_ids:
            self.logger.info("find_available_slots: no busy participations for the given users")
            return []

        events = self.uow.events.find_overlapping(event_ids, window_start, window_end)
        return sorted(TimeRange(event.start_time_utc, event.end_time_utc) for event in events)

    @service_operation
    def find_available_slots(
        self,
        participant_user_ids: Sequence[str],
        search_window_start_utc: datetime,
        search_window_end_utc: datetime,
        meeting_duration_minutes: int
    ) -> List[AvailableSlotResponse]:
        """
        Free slots of at least the meeting duration shared by all participants.

        An inverted window or a non-positive duration yields no slots.
        """
        window_start = to_utc_naive(search_window_start_utc)
        window_end = to_utc_naive(search_window_end_utc)
        if window_end <= window_start:
            self.logger.warning("find_available_slots: search window end is not after start")
            return []
        if meeting_duration_minutes <= 0:
            self.logger.warning("find_available_slots: meeting duration must be positive")
            return []

        busy = self.collect_busy_ranges(participant_user_ids, window_start, window_end)
        merged = merge_intervals(busy)
        self.logger.info(f"find_available_slots: merged {len(busy)} busy range(s) into {len(merged)}")

        gaps = find_free_gaps(window_start, window_end, merged, timedelta(minutes=meeting_duration_minutes))
        self.logger.info(f"find_available_slots: found {len(gaps)} free range(s)")

        return [
            AvailableSlotResponse(
                start_time_utc=gap.start_utc,
                end_time_utc=gap.end_utc,
                duration_minutes=gap.duration.total_seconds() / 60,
            )
            for gap in gaps
        ]
