"""Tests for aicalendar/services/availability_algorithm.py

The interval algebra behind the free-time search:
- TimeRange construction and ordering
- Merging overlapping and touching busy ranges
- Walking a search window to find gaps long enough for a meeting
"""

from datetime import datetime, timedelta

import pytest

from aicalendar.services.availability_algorithm import TimeRange, find_free_gaps, merge_intervals


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 1, 6, hour, minute)


def rng(start: tuple, end: tuple) -> TimeRange:
    return TimeRange(at(*start), at(*end))


# ─────────────────────────────────────────────────────────────────────────────
# TimeRange
# ─────────────────────────────────────────────────────────────────────────────


class TestTimeRange:
    """Tests for the TimeRange value type."""

    def test_rejects_start_after_end(self):
        """Should refuse an inverted range."""
        with pytest.raises(ValueError):
            TimeRange(at(11), at(10))

    def test_allows_zero_length(self):
        """A range may start and end at the same instant."""
        assert TimeRange(at(10), at(10)).duration == timedelta(0)

    def test_orders_by_start_then_end(self):
        """Sorting uses start first, then end."""
        ranges = [rng((10,), (12,)), rng((9,), (11,)), rng((10,), (11,))]

        assert sorted(ranges) == [rng((9,), (11,)), rng((10,), (11,)), rng((10,), (12,))]

    def test_equality_by_value(self):
        assert rng((9,), (10,)) == rng((9,), (10,))


# ─────────────────────────────────────────────────────────────────────────────
# merge_intervals
# ─────────────────────────────────────────────────────────────────────────────


class TestMergeIntervals:
    """Tests for collapsing busy ranges."""

    def test_empty_input(self):
        assert merge_intervals([]) == []

    def test_single_range_unchanged(self):
        assert merge_intervals([rng((9,), (10,))]) == [rng((9,), (10,))]

    def test_merges_overlapping(self):
        """Overlapping ranges collapse into one."""
        merged = merge_intervals([rng((9,), (10,)), rng((9, 30), (11,))])

        assert merged == [rng((9,), (11,))]

    def test_merges_touching(self):
        """A range starting exactly where the previous ends is merged."""
        merged = merge_intervals([rng((9,), (10,)), rng((10,), (11,))])

        assert merged == [rng((9,), (11,))]

    def test_keeps_disjoint_ranges(self):
        merged = merge_intervals([rng((9,), (10,)), rng((10, 1), (11,))])

        assert merged == [rng((9,), (10,)), rng((10, 1), (11,))]

    def test_contained_range_absorbed(self):
        """A range inside another does not shrink it."""
        merged = merge_intervals([rng((9,), (12,)), rng((10,), (11,))])

        assert merged == [rng((9,), (12,))]

    def test_chain_of_overlaps(self):
        merged = merge_intervals([
            rng((8,), (9,)),
            rng((8, 30), (10,)),
            rng((9, 45), (10, 15)),
            rng((13,), (14,)),
        ])

        assert merged == [rng((8,), (10, 15)), rng((13,), (14,))]

    def test_output_is_disjoint_and_ascending(self):
        merged = merge_intervals(sorted([
            rng((14,), (15,)),
            rng((9,), (10,)),
            rng((9, 30), (9, 45)),
            rng((11,), (12,)),
        ]))

        for earlier, later in zip(merged, merged[1:]):
            assert earlier.end_utc < later.start_utc

    def test_overlap_then_touch_collapses_to_one(self):
        merged = merge_intervals([rng((9,), (10,)), rng((9, 30), (11,)), rng((11,), (11, 15))])

        assert merged == [rng((9,), (11, 15))]

    @pytest.mark.parametrize("ranges", [
        [rng((9,), (10,)), rng((9, 30), (11,)), rng((11,), (11, 15))],
        [rng((9,), (12,)), rng((10,), (11,))],
        [rng((9,), (10,)), rng((10,), (11,))],
        [rng((8,), (9,)), rng((8, 30), (10,)), rng((13,), (14,))],
    ])
    def test_covered_duration_never_exceeds_inputs(self, ranges):
        merged = merge_intervals(ranges)

        covered = sum((r.duration for r in merged), timedelta(0))
        assert covered <= sum((r.duration for r in ranges), timedelta(0))

    def test_covered_duration_preserved_for_disjoint_inputs(self):
        ranges = [rng((9,), (10,)), rng((10, 30), (11,)), rng((13,), (14, 45))]

        merged = merge_intervals(ranges)

        assert merged == ranges
        assert sum((r.duration for r in merged), timedelta(0)) == timedelta(hours=3, minutes=15)


# ─────────────────────────────────────────────────────────────────────────────
# find_free_gaps
# ─────────────────────────────────────────────────────────────────────────────


class TestFindFreeGaps:
    """Tests for finding free gaps in a search window."""

    def test_no_busy_returns_whole_window(self):
        gaps = find_free_gaps(at(9), at(17), [], timedelta(minutes=30))

        assert gaps == [rng((9,), (17,))]

    def test_whole_window_too_short(self):
        """Nothing is returned when the window is shorter than the meeting."""
        gaps = find_free_gaps(at(9), at(9, 20), [], timedelta(minutes=30))

        assert gaps == []

    def test_inverted_window(self):
        assert find_free_gaps(at(12), at(9), [], timedelta(minutes=30)) == []

    def test_empty_window(self):
        assert find_free_gaps(at(9), at(9), [], timedelta(minutes=30)) == []

    def test_gaps_around_busy_range(self):
        gaps = find_free_gaps(at(9), at(12), [rng((10,), (10, 30))], timedelta(minutes=30))

        assert gaps == [rng((9,), (10,)), rng((10, 30), (12,))]

    def test_short_leading_gap_dropped(self):
        """A 60 minute gap before the busy range is too short for 90 minutes."""
        gaps = find_free_gaps(at(9), at(12), [rng((10,), (10, 30))], timedelta(minutes=90))

        assert gaps == [rng((10, 30), (12,))]

    def test_gap_exactly_min_duration_kept(self):
        gaps = find_free_gaps(at(9), at(11), [rng((9, 30), (11,))], timedelta(minutes=30))

        assert gaps == [rng((9,), (9, 30))]

    def test_busy_covers_window(self):
        gaps = find_free_gaps(at(9), at(12), [rng((8,), (13,))], timedelta(minutes=5))

        assert gaps == []

    def test_busy_before_window_clamped(self):
        """A busy range starting before the window moves the cursor to its end."""
        gaps = find_free_gaps(at(9), at(12), [rng((8,), (10,))], timedelta(minutes=30))

        assert gaps == [rng((10,), (12,))]

    def test_busy_after_window_ignored(self):
        gaps = find_free_gaps(at(9), at(12), [rng((13,), (14,))], timedelta(minutes=30))

        assert gaps == [rng((9,), (12,))]

    def test_busy_running_past_window_end(self):
        gaps = find_free_gaps(at(9), at(12), [rng((11,), (13,))], timedelta(minutes=30))

        assert gaps == [rng((9,), (11,))]

    def test_multiple_busy_ranges(self):
        busy = [rng((9, 30), (10,)), rng((11,), (11, 15)), rng((15,), (16,))]

        gaps = find_free_gaps(at(9), at(17), busy, timedelta(minutes=45))

        assert gaps == [rng((10,), (11,)), rng((11, 15), (15,)), rng((16,), (17,))]

    def test_gaps_never_overlap_busy(self):
        busy = merge_intervals([rng((9, 10), (9, 50)), rng((10, 20), (11,)), rng((13,), (13, 5))])

        gaps = find_free_gaps(at(9), at(14), busy, timedelta(minutes=10))

        for gap in gaps:
            assert gap.duration >= timedelta(minutes=10)
            assert at(9) <= gap.start_utc and gap.end_utc <= at(14)
            for b in busy:
                assert gap.end_utc <= b.start_utc or gap.start_utc >= b.end_utc
