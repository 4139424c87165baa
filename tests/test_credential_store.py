"""Tests for user and OTP persistence."""

import uuid
from datetime import datetime, timedelta

import pytest
from sqlalchemy.orm import Session

from marketplace.config import Settings
from marketplace.exceptions import ConflictError
from marketplace.models.otp_token import OtpToken
from marketplace.services.credential_store import CredentialStore
from marketplace.services.jwt import JWTService
from marketplace.services.registration import RegistrationFlow


class TestUsers:
    """Tests for user rows."""

    def test_create_user_inactive(self, store: CredentialStore):
        """New users start inactive with a generated UUID."""
        user = store.create_user(" Ann ", "Smith", " A@X.com ", "$2b$hash")
        assert isinstance(user.id, uuid.UUID)
        assert user.active is False
        assert user.email == "a@x.com"
        assert user.first_name == "Ann"
        assert user.created_at is not None

    def test_unique_email_enforced_by_store(self, store: CredentialStore):
        """A second insert with the same email is a conflict even without a pre-check."""
        store.create_user("Ann", "Smith", "a@x.com", "h1")
        with pytest.raises(ConflictError):
            store.create_user("Ann", "Other", "a@x.com", "h2")
        # the session is still usable after the rollback
        assert store.email_exists("a@x.com")

    def test_activate_user(self, store: CredentialStore):
        store.create_user("Ann", "Smith", "a@x.com", "h")
        assert store.activate_user("A@x.com") is True
        assert store.get_user_by_email("a@x.com").active is True

    def test_activate_unknown_user(self, store: CredentialStore):
        assert store.activate_user("nobody@x.com") is False

    def test_update_password(self, store: CredentialStore):
        user = store.create_user("Ann", "Smith", "a@x.com", "old")
        assert store.update_password(user.id, "new") is True
        assert store.get_user_by_email("a@x.com").password == "new"

    def test_update_password_unknown_user(self, store: CredentialStore):
        assert store.update_password(uuid.uuid4(), "new") is False


class TestOtpTokens:
    """Tests for OTP rows."""

    def test_create_otp(self, store: CredentialStore):
        """OTPs are six digits and expire after the configured window."""
        user = store.create_user("Ann", "Smith", "a@x.com", "h")
        token = store.create_otp(user.id)
        assert len(token.otp) == 6 and token.otp.isdigit()
        assert token.expires_at - token.created_at == timedelta(minutes=15)

    def test_find_valid_otp(self, store: CredentialStore):
        user = store.create_user("Ann", "Smith", "a@x.com", "h")
        token = store.create_otp(user.id)
        assert store.find_valid_otp(user.id, token.otp) is not None
        assert store.find_valid_otp(uuid.uuid4(), token.otp) is None

    def test_expired_otp_not_found(self, store: CredentialStore, db_session: Session):
        user = store.create_user("Ann", "Smith", "a@x.com", "h")
        token = store.create_otp(user.id)
        db_session.query(OtpToken).filter(OtpToken.id == token.id).update(
            {OtpToken.expires_at: datetime.utcnow() - timedelta(seconds=1)}
        )
        db_session.commit()
        assert store.find_valid_otp(user.id, token.otp) is None

    def test_otp_survives_lookup(self, store: CredentialStore):
        """Looking up an OTP does not consume it."""
        user = store.create_user("Ann", "Smith", "a@x.com", "h")
        token = store.create_otp(user.id)
        assert store.find_valid_otp(user.id, token.otp) is not None
        assert store.find_valid_otp(user.id, token.otp) is not None


class _RacingStore(CredentialStore):
    """Store whose pre-check misses a concurrent insert."""

    def email_exists(self, email: str) -> bool:
        return False


class TestDuplicateSignupRace:
    """The database, not the pre-check, decides uniqueness."""

    def test_signup_conflict_from_store(self, db_session: Session, fast_hasher, sender):
        settings = Settings(JWT_SECRET_KEY="race-secret")
        store = _RacingStore(db_session)
        flow = RegistrationFlow(store, fast_hasher, JWTService(settings), sender, settings)

        flow.signup("Ann", "Smith", "a@x.com", "pw")
        with pytest.raises(ConflictError):
            flow.signup("Ann", "Smith", "a@x.com", "pw")
        assert len(sender.messages) == 1
