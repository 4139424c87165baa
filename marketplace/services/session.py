"""Login, logout and token refresh."""

import logging

from marketplace.exceptions import EmailNotConfirmedError, InvalidCredentialsError
from marketplace.services.credential_store import CredentialStore
from marketplace.services.jwt import JWTService
from marketplace.services.password import PasswordHasher

logger = logging.getLogger("marketplace")


class SessionFlow:
    """Issues session tokens. Sessions are stateless; nothing is stored server-side."""

    def __init__(self, store: CredentialStore, hasher: PasswordHasher, tokens: JWTService) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    def login(self, email: str, password: str) -> str:
        """Authenticate a user by email and password and return a fresh token.

        An unconfirmed account is rejected before the password is checked.
        """
        user = self.store.get_user_by_email(email)
        if not user:
            raise InvalidCredentialsError()

        if not user.active:
            raise EmailNotConfirmedError()

        if not self.hasher.verify(password, user.password):
            logger.warning("Failed login for user %s", user.id)
            raise InvalidCredentialsError()

        return self.tokens.create_token(user.id, user.email)

    @staticmethod
    def logout() -> str:
        return "Logged out (token should be removed on client)"

    def refresh(self, token: str) -> str:
        """Reissue a still-valid token with a new expiry. Expired tokens are rejected."""
        claims = self.tokens.decode(token)
        return self.tokens.create_token(claims.sub, claims.email)
