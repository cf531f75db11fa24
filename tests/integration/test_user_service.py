"""Integration tests for the user directory service.

Registration, lookup, self-service updates and deletion against an
in-memory SQLite database.
"""

from aicalendar.services.error_handling import FailureKind, Notice
from aicalendar.services.user_service import UNKNOWN_USER, UserService


class TestCreateUser:
    def test_creates_user(self, db_session):
        result = UserService(db_session).create_user(
            username="erin", email="erin@example.com", first_name="Erin", last_name="Lee"
        )

        assert result.ok
        assert result.value.id
        assert result.value.username == "erin"
        assert result.value.first_name == "Erin"

    def test_duplicate_username(self, db_session, alice):
        result = UserService(db_session).create_user(username="alice", email="other@example.com")

        assert result.failure.kind is FailureKind.CONFLICT

    def test_duplicate_email(self, db_session, alice):
        result = UserService(db_session).create_user(username="alicia", email="alice@example.com")

        assert result.failure.kind is FailureKind.CONFLICT


class TestLookups:
    def test_get_user(self, db_session, bob):
        result = UserService(db_session).get_user(bob.id)

        assert result.value.username == "bob"

    def test_get_missing_user(self, db_session):
        result = UserService(db_session).get_user("missing")

        assert result.failure.kind is FailureKind.NOT_FOUND

    def test_list_users(self, db_session, users):
        listed = UserService(db_session).list_users().value

        assert {u.username for u in listed} == {"alice", "bob", "carol", "dave"}

    def test_resolve_display_name(self, db_session, carol):
        service = UserService(db_session)

        assert service.resolve_display_name(carol.id) == "carol"
        assert service.resolve_display_name("ghost") == UNKNOWN_USER

    def test_display_names_skip_unknown(self, db_session, alice, bob):
        names = UserService(db_session).display_names([alice.id, bob.id, "ghost"])

        assert names == {alice.id: "alice", bob.id: "bob"}
        assert names.get("ghost", UNKNOWN_USER) == UNKNOWN_USER


class TestUpdateUser:
    def test_updates_own_profile(self, db_session, alice):
        result = UserService(db_session).update_user(
            alice.id, {"first_name": "Alice", "email": "a@example.com"}, alice.id
        )

        assert result.ok
        assert result.notice is None
        assert result.value.first_name == "Alice"
        assert result.value.email == "a@example.com"

    def test_cannot_update_other_user(self, db_session, alice, bob):
        result = UserService(db_session).update_user(bob.id, {"first_name": "Bobby"}, alice.id)

        assert result.failure.kind is FailureKind.FORBIDDEN

    def test_same_values_no_effective_change(self, db_session, alice):
        result = UserService(db_session).update_user(alice.id, {"email": "alice@example.com"}, alice.id)

        assert result.ok
        assert result.notice is Notice.NO_EFFECTIVE_CHANGE

    def test_username_not_updatable(self, db_session, alice):
        result = UserService(db_session).update_user(alice.id, {"username": "alicia"}, alice.id)

        assert result.notice is Notice.NO_EFFECTIVE_CHANGE
        assert result.value.username == "alice"

    def test_email_taken(self, db_session, alice, bob):
        result = UserService(db_session).update_user(alice.id, {"email": "bob@example.com"}, alice.id)

        assert result.failure.kind is FailureKind.CONFLICT


class TestDeleteUser:
    def test_deletes_other_user(self, db_session, alice, bob):
        service = UserService(db_session)

        assert service.delete_user(bob.id, alice.id).ok
        assert service.get_user(bob.id).failure.kind is FailureKind.NOT_FOUND

    def test_cannot_delete_self(self, db_session, alice):
        result = UserService(db_session).delete_user(alice.id, alice.id)

        assert result.failure.kind is FailureKind.FORBIDDEN

    def test_delete_missing(self, db_session, alice):
        result = UserService(db_session).delete_user("missing", alice.id)

        assert result.failure.kind is FailureKind.NOT_FOUND


def test_health_check(db_session):
    check = UserService(db_session).health_check()

    assert check["status"] == "healthy"
    assert check["database"] == "connected"
