"""Signup and email confirmation."""

import logging
from dataclasses import dataclass

from marketplace.config import Settings
from marketplace.exceptions import ConfirmationError, ConflictError, InvalidTokenError
from marketplace.services.credential_store import CredentialStore
from marketplace.services.jwt import JWTService
from marketplace.services.notification import NotificationSender
from marketplace.services.password import PasswordHasher

logger = logging.getLogger("marketplace")

CONFIRMATION_SUBJECT = "Confirm your registration"


@dataclass
class SignupResult:
    message: str
    token: str


class RegistrationFlow:
    """Moves an account from unregistered to pending, and pending to active."""

    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        tokens: JWTService,
        sender: NotificationSender,
        settings: Settings,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        self.sender = sender
        self.registration_url = settings.EMAIL_REGISTRATION_URL.rstrip("/")

    def signup(self, first_name: str, last_name: str, email: str, password: str) -> SignupResult:
        """Create an inactive user and mail them a confirmation link.

        The returned token is usable right away, before confirmation. If the
        email cannot be sent the user row stays behind in the pending state
        and NotificationError propagates to the caller.
        """
        if self.store.email_exists(email):
            raise ConflictError()

        password_hash = self.hasher.hash(password)
        user = self.store.create_user(first_name, last_name, email, password_hash)
        logger.info("Registered user %s (pending confirmation)", user.id)

        token = self.tokens.create_token(user.id, user.email)
        body = (
            "Please confirm your registration by clicking the following link:\n"
            f"{self.registration_url}/{token}"
        )
        self.sender.send(user.email, CONFIRMATION_SUBJECT, body)

        return SignupResult(message="Registration successful", token=token)

    def confirm(self, token: str) -> str:
        """Activate the account named by the token's email claim."""
        try:
            claims = self.tokens.decode(token)
        except InvalidTokenError as e:
            logger.warning("Confirmation attempted with an invalid token")
            raise ConfirmationError() from e

        if self.store.activate_user(claims.email):
            logger.info("Confirmed user %s", claims.sub)
        else:
            logger.warning("Confirmation token for %s matched no user", claims.sub)
        return "Email successfully confirmed!"
