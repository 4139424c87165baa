"""JWT Token Service."""

import calendar
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta

from jose import JWTError, jwt

from marketplace.config import Settings, get_settings
from marketplace.exceptions import InvalidTokenError


@dataclass(frozen=True)
class Claims:
    """Session token payload."""

    sub: uuid.UUID
    email: str
    exp: int


class JWTService:
    """Handles JWT token creation and validation."""

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.expire_days = settings.TOKEN_EXPIRE_DAYS

    def new_claims(self, user_id: uuid.UUID, email: str) -> Claims:
        """Build claims for a fresh session expiring TOKEN_EXPIRE_DAYS from now."""
        expire = datetime.utcnow() + timedelta(days=self.expire_days)
        return Claims(sub=user_id, email=email, exp=calendar.timegm(expire.utctimetuple()))

    def issue(self, claims: Claims) -> str:
        """Sign the given claims."""
        payload = {
            "sub": str(claims.sub),
            "email": claims.email,
            "exp": claims.exp,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def create_token(self, user_id: uuid.UUID, email: str) -> str:
        """Create a JWT token for the given user."""
        return self.issue(self.new_claims(user_id, email))

    def decode(self, token: str) -> Claims:
        """Decode and validate a JWT token. Raises InvalidTokenError if invalid or expired."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            return Claims(
                sub=uuid.UUID(payload["sub"]),
                email=payload["email"],
                exp=int(payload["exp"]),
            )
        except (JWTError, KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError() from e


_jwt_service: JWTService | None = None


def get_jwt_service() -> JWTService:
    """Get singleton JWT service instance."""
    global _jwt_service
    if _jwt_service is None:
        _jwt_service = JWTService()
    return _jwt_service
