"""User and OTP persistence used by the auth flows."""

import logging
import secrets
import uuid
from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from marketplace.exceptions import ConflictError
from marketplace.models.otp_token import OtpToken
from marketplace.models.user import User

logger = logging.getLogger("marketplace")

OTP_DIGITS = 6


def normalize_email(email: str) -> str:
    return email.strip().lower()


class CredentialStore:
    """Reads and writes User and OtpToken rows through one DB session.

    Every write is a single statement followed by a commit; nothing here
    spans a transaction across calls.
    """

    def __init__(self, db: Session, otp_expire_minutes: int = 15) -> None:
        self.db = db
        self.otp_expire_minutes = otp_expire_minutes

    def get_user_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def email_exists(self, email: str) -> bool:
        return self.get_user_by_email(email) is not None

    def create_user(self, first_name: str, last_name: str, email: str, password_hash: str) -> User:
        """Insert an inactive user.

        The unique index on email is the real guard against duplicates; a
        concurrent signup that slipped past the caller's pre-check ends up
        here as a ConflictError.
        """
        user = User(
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email=normalize_email(email),
            password=password_hash,
            active=False,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Duplicate email rejected by the database: %s", user.email)
            raise ConflictError() from e
        self.db.refresh(user)
        return user

    def activate_user(self, email: str) -> bool:
        """Mark the user with this email active. Returns False if no row matched."""
        updated = (
            self.db.query(User)
            .filter(User.email == normalize_email(email))
            .update({User.active: True}, synchronize_session="fetch")
        )
        self.db.commit()
        return updated > 0

    def update_password(self, user_id: uuid.UUID, password_hash: str) -> bool:
        """Replace a user's password hash. Returns False if no row matched."""
        updated = (
            self.db.query(User)
            .filter(User.id == user_id)
            .update({User.password: password_hash}, synchronize_session="fetch")
        )
        self.db.commit()
        return updated > 0

    def create_otp(self, user_id: uuid.UUID) -> OtpToken:
        """Issue a new OTP for the user, expiring after otp_expire_minutes."""
        now = datetime.utcnow()
        token = OtpToken(
            user_id=user_id,
            otp=f"{secrets.randbelow(10**OTP_DIGITS):0{OTP_DIGITS}d}",
            created_at=now,
            expires_at=now + timedelta(minutes=self.otp_expire_minutes),
        )
        self.db.add(token)
        self.db.commit()
        self.db.refresh(token)
        return token

    def find_valid_otp(self, user_id: uuid.UUID, otp: str) -> OtpToken | None:
        """Find an unexpired OTP with this value owned by this user."""
        return (
            self.db.query(OtpToken)
            .filter(
                OtpToken.user_id == user_id,
                OtpToken.otp == otp,
                OtpToken.expires_at > datetime.utcnow(),
            )
            .first()
        )
