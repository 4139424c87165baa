"""FastAPI dependencies: authentication and flow wiring."""

import uuid
from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from marketplace.config import Settings, get_settings
from marketplace.database import get_db
from marketplace.services.credential_store import CredentialStore
from marketplace.services.guard import AuthenticationGuard
from marketplace.services.jwt import get_jwt_service
from marketplace.services.notification import NotificationSender, get_notification_sender
from marketplace.services.password import get_password_hasher
from marketplace.services.registration import RegistrationFlow
from marketplace.services.reset import ResetFlow
from marketplace.services.session import SessionFlow


@dataclass
class CurrentUser:
    """Authenticated user context."""

    user_id: uuid.UUID
    email: str


def get_current_user(request: Request) -> CurrentUser:
    """Validate the Bearer token in the Authorization header. Raises 401 if missing or invalid."""
    guard = AuthenticationGuard(get_jwt_service())
    claims = guard.authenticate(request.headers.get("Authorization"))
    return CurrentUser(user_id=claims.sub, email=claims.email)


def get_credential_store(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> CredentialStore:
    return CredentialStore(db, otp_expire_minutes=settings.OTP_EXPIRE_MINUTES)


def get_registration_flow(
    store: CredentialStore = Depends(get_credential_store),
    sender: NotificationSender = Depends(get_notification_sender),
    settings: Settings = Depends(get_settings),
) -> RegistrationFlow:
    return RegistrationFlow(store, get_password_hasher(), get_jwt_service(), sender, settings)


def get_session_flow(store: CredentialStore = Depends(get_credential_store)) -> SessionFlow:
    return SessionFlow(store, get_password_hasher(), get_jwt_service())


def get_reset_flow(
    store: CredentialStore = Depends(get_credential_store),
    sender: NotificationSender = Depends(get_notification_sender),
) -> ResetFlow:
    return ResetFlow(store, get_password_hasher(), get_jwt_service(), sender)
