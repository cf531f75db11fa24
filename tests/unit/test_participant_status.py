"""Tests for aicalendar/models/enums.py

Participant statuses arrive as free text from callers and must decode
case-insensitively into exactly one of four members.
"""

import pytest

from aicalendar.core.exceptions import InvalidStatusException, ValidationException
from aicalendar.models.enums import BUSY_STATUSES, ParticipantStatus


class TestParse:
    """Tests for ParticipantStatus.parse."""

    @pytest.mark.parametrize("text,expected", [
        ("Accepted", ParticipantStatus.ACCEPTED),
        ("accepted", ParticipantStatus.ACCEPTED),
        ("DECLINED", ParticipantStatus.DECLINED),
        ("  tentative ", ParticipantStatus.TENTATIVE),
        ("invited", ParticipantStatus.INVITED),
    ])
    def test_parses_any_casing(self, text, expected):
        assert ParticipantStatus.parse(text) is expected

    def test_passes_member_through(self):
        assert ParticipantStatus.parse(ParticipantStatus.DECLINED) is ParticipantStatus.DECLINED

    @pytest.mark.parametrize("text", ["maybe", "", "Accept", None, 1])
    def test_rejects_unknown(self, text):
        with pytest.raises(InvalidStatusException):
            ParticipantStatus.parse(text)

    def test_invalid_status_is_a_validation_error(self):
        with pytest.raises(ValidationException):
            ParticipantStatus.parse("busy")


class TestBusyStatuses:
    """Only Accepted and Tentative block time."""

    def test_busy_members(self):
        assert BUSY_STATUSES == {ParticipantStatus.ACCEPTED, ParticipantStatus.TENTATIVE}
