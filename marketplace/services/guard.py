"""Bearer token authentication, independent of the web framework."""

from marketplace.exceptions import MissingTokenError
from marketplace.services.jwt import Claims, JWTService

BEARER_PREFIX = "Bearer "


class AuthenticationGuard:
    """Turns an Authorization header value into verified claims. No I/O."""

    def __init__(self, tokens: JWTService) -> None:
        self.tokens = tokens

    def authenticate(self, authorization: str | None) -> Claims:
        """Return the caller's claims or raise an AuthError."""
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise MissingTokenError()
        return self.tokens.decode(authorization[len(BEARER_PREFIX) :])
