"""Password reset via one-time password."""

import logging
import uuid

from marketplace.exceptions import InvalidCredentialsError, NotFoundError
from marketplace.services.credential_store import CredentialStore
from marketplace.services.jwt import JWTService
from marketplace.services.notification import NotificationSender
from marketplace.services.password import PasswordHasher

logger = logging.getLogger("marketplace")

RESET_SUBJECT = "Reset your password"


class ResetFlow:
    """Issues reset OTPs, exchanges them for session tokens, and sets new passwords."""

    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        tokens: JWTService,
        sender: NotificationSender,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        self.sender = sender

    def request_reset(self, email: str) -> str:
        """Create an OTP for the user, email it, and return it."""
        user = self.store.get_user_by_email(email)
        if not user:
            raise NotFoundError("User not found", status_code=401)

        otp_token = self.store.create_otp(user.id)
        logger.info("Password reset requested for user %s", user.id)

        body = (
            "You requested to reset your password.\n"
            f"Otp: {otp_token.otp}\n\n"
            "If you did not request this, please ignore this email."
        )
        self.sender.send(user.email, RESET_SUBJECT, body)

        return otp_token.otp

    def verify_otp(self, email: str, otp: str) -> str:
        """Exchange a valid OTP for a session token.

        The OTP is left in place and keeps working until it expires.
        """
        user = self.store.get_user_by_email(email)
        if not user or not self.store.find_valid_otp(user.id, otp):
            raise InvalidCredentialsError()

        logger.info("OTP login for user %s", user.id)
        return self.tokens.create_token(user.id, user.email)

    def update_password(self, user_id: uuid.UUID, password: str) -> str:
        password_hash = self.hasher.hash(password)
        if not self.store.update_password(user_id, password_hash):
            raise NotFoundError("User not found")
        logger.info("Password updated for user %s", user_id)
        return "Password updated successfully"
