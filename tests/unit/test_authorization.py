"""Tests for aicalendar/services/authorization.py

Permission checks derived from the caller id and the stored event:
- Owner and participants may view
- Only the owner mutates the event and invites others
- Participants answer and leave for themselves; the owner stays Accepted
"""

import pytest

from aicalendar.core.exceptions import (
    ForbiddenException,
    OwnerCannotLeaveException,
    OwnerStatusFixedException,
)
from aicalendar.models.calendar import Event, EventParticipant
from aicalendar.models.enums import ParticipantStatus
from aicalendar.services import authorization


@pytest.fixture
def event():
    return Event(id="event-1", title="Planning", owner_user_id="owner")


@pytest.fixture
def participants():
    return [
        EventParticipant(event_id="event-1", user_id="owner", status=ParticipantStatus.ACCEPTED),
        EventParticipant(event_id="event-1", user_id="guest", status=ParticipantStatus.DECLINED),
    ]


class TestCanView:
    def test_owner(self, event):
        assert authorization.can_view(event, [], "owner")

    def test_participant_in_any_status(self, event, participants):
        assert authorization.can_view(event, participants, "guest")

    def test_stranger(self, event, participants):
        assert not authorization.can_view(event, participants, "stranger")


class TestRequireOwner:
    def test_owner_passes(self, event):
        authorization.require_owner(event, "owner", "update this event")

    def test_other_user_forbidden(self, event):
        with pytest.raises(ForbiddenException) as exc_info:
            authorization.require_owner(event, "guest", "update this event")

        assert "update this event" in exc_info.value.message


class TestAuthorizeStatusChange:
    def test_participant_changes_own(self, event):
        authorization.authorize_status_change(event, "guest", "guest", ParticipantStatus.TENTATIVE)

    def test_owner_changes_any(self, event):
        authorization.authorize_status_change(event, "guest", "owner", ParticipantStatus.DECLINED)

    def test_participant_cannot_change_other(self, event):
        with pytest.raises(ForbiddenException):
            authorization.authorize_status_change(event, "other", "guest", ParticipantStatus.ACCEPTED)

    def test_owner_status_fixed(self, event):
        with pytest.raises(OwnerStatusFixedException):
            authorization.authorize_status_change(event, "owner", "owner", ParticipantStatus.DECLINED)

    def test_owner_may_reaffirm_accepted(self, event):
        authorization.authorize_status_change(event, "owner", "owner", ParticipantStatus.ACCEPTED)

    def test_permission_checked_before_owner_pin(self, event):
        """A stranger touching the owner's record gets Forbidden, not OwnerStatusFixed."""
        with pytest.raises(ForbiddenException):
            authorization.authorize_status_change(event, "owner", "guest", ParticipantStatus.DECLINED)


class TestAuthorizeRemoval:
    def test_participant_removes_self(self, event):
        authorization.authorize_removal(event, "guest", "guest")

    def test_owner_removes_other(self, event):
        authorization.authorize_removal(event, "guest", "owner")

    def test_owner_cannot_leave(self, event):
        with pytest.raises(OwnerCannotLeaveException):
            authorization.authorize_removal(event, "owner", "owner")

    def test_participant_cannot_remove_other(self, event):
        with pytest.raises(ForbiddenException):
            authorization.authorize_removal(event, "other", "guest")

    def test_participant_cannot_remove_owner(self, event):
        with pytest.raises(ForbiddenException):
            authorization.authorize_removal(event, "owner", "guest")
