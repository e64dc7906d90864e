# tests/services/test_identity.py
"""Tests for signup, login and account self-service."""

from __future__ import annotations

import pytest

from threadboard.core.errors import Conflict, Forbidden, InvalidCredentials, NotFound, ValidationError
from threadboard.core.security import verify_password
from threadboard.models.user import AVATAR_PLACEHOLDER_URL
from threadboard.services import identity
from tests.conftest import DEFAULT_PASSWORD


class TestSignup:
    """Account registration rules."""

    def test_signup_creates_regular_account(self, db_session) -> None:
        user = identity.signup(db_session, "carol@example.com", "carol", "s3cretpw")

        assert user.id
        assert user.username == "carol"
        assert user.display_name == "carol"
        assert user.avatar_url == AVATAR_PLACEHOLDER_URL.format(initial="C")
        assert user.is_admin is False
        assert user.is_owner is False

    def test_password_is_stored_salted(self, db_session) -> None:
        first = identity.signup(db_session, "a1@example.com", "a1", "same-password")
        second = identity.signup(db_session, "a2@example.com", "a2", "same-password")

        assert first.password_hash != "same-password"
        assert first.password_hash != second.password_hash
        assert verify_password("same-password", first.password_hash)

    def test_duplicate_email_conflicts(self, db_session, test_user) -> None:
        with pytest.raises(Conflict):
            identity.signup(db_session, test_user.email, "someone_else", "s3cretpw")

    def test_duplicate_username_conflicts(self, db_session, test_user) -> None:
        with pytest.raises(Conflict):
            identity.signup(db_session, "fresh@example.com", test_user.username, "s3cretpw")

    @pytest.mark.parametrize("username", ["deleted_user", "deleted_user_placeholder"])
    def test_reserved_usernames_rejected(self, db_session, username) -> None:
        with pytest.raises(Conflict):
            identity.signup(db_session, "ghost@example.com", username, "s3cretpw")

    @pytest.mark.parametrize(
        ("email", "username", "password", "display_name"),
        [
            ("not-an-email", "dave", "s3cretpw", None),
            ("dave@example.com", "", "s3cretpw", None),
            ("dave@example.com", "dave", "short", None),
            ("dave@example.com", "dave", "s3cretpw", "D"),
            ("dave@example.com", "dave", "s3cretpw", "x" * 51),
        ],
    )
    def test_invalid_input_rejected(
        self, db_session, email, username, password, display_name
    ) -> None:
        with pytest.raises(ValidationError):
            identity.signup(db_session, email, username, password, display_name)
        with pytest.raises(NotFound):
            identity.get_user_by_username(db_session, "dave")


class TestAuthenticate:
    """Login behaviour."""

    def test_valid_credentials(self, db_session, test_user) -> None:
        user = identity.authenticate(db_session, test_user.email, DEFAULT_PASSWORD)
        assert user.id == test_user.id

    def test_unknown_email_and_wrong_password_look_the_same(self, db_session, test_user) -> None:
        with pytest.raises(InvalidCredentials) as wrong_password:
            identity.authenticate(db_session, test_user.email, "not-the-password")
        with pytest.raises(InvalidCredentials) as unknown_email:
            identity.authenticate(db_session, "nobody@example.com", DEFAULT_PASSWORD)

        assert wrong_password.value.message == unknown_email.value.message


class TestCredentialChanges:
    """Password and email changes require the current password."""

    def test_change_password(self, db_session, test_user) -> None:
        identity.change_password(db_session, test_user.id, DEFAULT_PASSWORD, "brand-new-pw")

        assert identity.authenticate(db_session, test_user.email, "brand-new-pw").id == test_user.id
        with pytest.raises(InvalidCredentials):
            identity.authenticate(db_session, test_user.email, DEFAULT_PASSWORD)

    def test_change_password_wrong_current(self, db_session, test_user) -> None:
        with pytest.raises(InvalidCredentials):
            identity.change_password(db_session, test_user.id, "wrong", "brand-new-pw")

    def test_change_password_too_short(self, db_session, test_user) -> None:
        with pytest.raises(ValidationError):
            identity.change_password(db_session, test_user.id, DEFAULT_PASSWORD, "abc")

    def test_change_email(self, db_session, test_user) -> None:
        user = identity.change_email(
            db_session, test_user.id, "alice.new@example.com", DEFAULT_PASSWORD
        )
        assert user.email == "alice.new@example.com"

    def test_change_email_to_own_address_is_allowed(self, db_session, test_user) -> None:
        user = identity.change_email(db_session, test_user.id, test_user.email, DEFAULT_PASSWORD)
        assert user.email == "alice@example.com"

    def test_change_email_taken(self, db_session, test_user, other_user) -> None:
        with pytest.raises(Conflict):
            identity.change_email(db_session, test_user.id, other_user.email, DEFAULT_PASSWORD)

    def test_change_email_wrong_password(self, db_session, test_user) -> None:
        with pytest.raises(InvalidCredentials):
            identity.change_email(db_session, test_user.id, "x@example.com", "wrong")


class TestProfile:
    """Profile lookups and partial updates."""

    def test_update_display_name_only(self, db_session, test_user) -> None:
        avatar = test_user.avatar_url
        user = identity.update_profile(db_session, test_user.id, display_name="Alice Liddell")

        assert user.display_name == "Alice Liddell"
        assert user.avatar_url == avatar

    def test_blank_avatar_resets_to_placeholder(self, db_session, test_user) -> None:
        identity.update_profile(db_session, test_user.id, avatar_url="https://img.example/a.png")
        user = identity.update_profile(db_session, test_user.id, avatar_url="  ")

        assert user.avatar_url == AVATAR_PLACEHOLDER_URL.format(initial="A")

    def test_update_unknown_user(self, db_session) -> None:
        with pytest.raises(NotFound):
            identity.update_profile(db_session, "missing", display_name="Nobody")

    def test_profile_lists_follow_edges(self, db_session, test_user, other_user) -> None:
        from threadboard.services import social

        social.follow(db_session, test_user.id, other_user.id)
        profile = identity.to_profile_out(db_session, test_user)

        assert profile.follower_ids == [other_user.id]
        assert profile.following_ids == []


class TestDeleteOwnAccount:
    """Self-service deletion."""

    def test_delete_own_account(self, db_session, test_user) -> None:
        user_id = test_user.id
        identity.delete_own_account(db_session, user_id, DEFAULT_PASSWORD)

        with pytest.raises(NotFound):
            identity.get_user(db_session, user_id)

    def test_wrong_password_keeps_account(self, db_session, test_user) -> None:
        with pytest.raises(InvalidCredentials):
            identity.delete_own_account(db_session, test_user.id, "wrong")
        assert identity.get_user(db_session, test_user.id).id == test_user.id

    def test_owner_cannot_delete_self(self, db_session, owner_user) -> None:
        with pytest.raises(Forbidden):
            identity.delete_own_account(db_session, owner_user.id, DEFAULT_PASSWORD)
