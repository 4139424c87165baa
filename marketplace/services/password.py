"""Password hashing service."""

import logging

import bcrypt

from marketplace.exceptions import MalformedHashError, PasswordTooLongError

logger = logging.getLogger("marketplace")

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Bcrypt password hashing utility."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password with a fresh salt.

        The result encodes cost, salt and digest together, so it is all that
        needs to be stored.
        """
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise PasswordTooLongError()
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, password: str, stored_hash: str) -> bool:
        """Check a password against a stored hash.

        Returns False for a wrong password. Raises MalformedHashError only if
        ``stored_hash`` is not a bcrypt hash at all.
        """
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, stored_hash.encode("utf-8"))
        except ValueError as e:
            logger.error("Password verification failed on a malformed hash: %s", e)
            raise MalformedHashError() from e


_password_hasher: PasswordHasher | None = None


def get_password_hasher() -> PasswordHasher:
    """Get singleton password hasher instance."""
    global _password_hasher
    if _password_hasher is None:
        _password_hasher = PasswordHasher()
    return _password_hasher
