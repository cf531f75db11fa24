"""
Interval algebra for availability search.

Pure functions over UTC time ranges: collapse busy ranges into a minimal
covering set, then walk a search window to find the gaps between them.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Sequence


@dataclass(frozen=True, order=True)
class TimeRange:
    """Closed range [start_utc, end_utc]; ordered by start, then end."""

    start_utc: datetime
    end_utc: datetime

    def __post_init__(self):
        if self.start_utc > self.end_utc:
            raise ValueError("start_utc cannot be after end_utc")

    @property
    def duration(self) -> timedelta:
        return self.end_utc - self.start_utc


def merge_intervals(sorted_ranges: Sequence[TimeRange]) -> List[TimeRange]:
    """
    Merge overlapping or touching ranges.

    Args:
        sorted_ranges: Ranges sorted ascending by start time

    Returns:
        Minimal, non-overlapping, ascending list of ranges
    """
    if not sorted_ranges:
        return []

    merged: List[TimeRange] = []
    current = sorted_ranges[0]

    for nxt in sorted_ranges[1:]:
        # Touching counts as overlap
        if nxt.start_utc <= current.end_utc:
            if nxt.end_utc > current.end_utc:
                current = TimeRange(current.start_utc, nxt.end_utc)
        else:
            merged.append(current)
            current = nxt

    merged.append(current)
    return merged


def find_free_gaps(
    window_start: datetime,
    window_end: datetime,
    merged_busy: Sequence[TimeRange],
    min_duration: timedelta
) -> List[TimeRange]:
    """
    Find the free gaps of at least `min_duration` inside a search window.

    Args:
        window_start: Start of the search window
        window_end: End of the search window
        merged_busy: Output of merge_intervals; may extend past the window
        min_duration: Shortest gap worth returning

    Returns:
        Ascending list of free ranges inside the window
    """
    if window_end <= window_start:
        return []

    gaps: List[TimeRange] = []
    cursor = window_start

    for busy in merged_busy:
        if busy.start_utc > cursor:
            gap_end = min(busy.start_utc, window_end)
            if gap_end - cursor >= min_duration:
                gaps.append(TimeRange(cursor, gap_end))

        cursor = max(cursor, min(busy.end_utc, window_end))
        if cursor >= window_end:
            break

    if cursor < window_end and window_end - cursor >= min_duration:
        gaps.append(TimeRange(cursor, window_end))

    return gaps
