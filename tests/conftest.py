"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("EMAIL_BACKEND", "console")
os.environ.setdefault("EMAIL_REGISTRATION_URL", "https://market.test/api/v1/auth/confirm")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from marketplace.database import Base, enable_sqlite_foreign_keys, get_db
from marketplace.exceptions import NotificationError
from marketplace.models.otp_token import OtpToken  # noqa: F401
from marketplace.models.user import User  # noqa: F401
from marketplace.models.user_role import Buyer, Seller, UserCategory  # noqa: F401
from marketplace.services import password as password_module
from marketplace.services.credential_store import CredentialStore
from marketplace.services.jwt import get_jwt_service
from marketplace.services.notification import get_notification_sender
from marketplace.services.password import PasswordHasher


class RecordingSender:
    """Notification sender that keeps messages in memory, or fails on demand."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str, str]] = []
        self.fail = False

    def send(self, to: str, subject: str, body: str) -> None:
        if self.fail:
            raise NotificationError()
        self.messages.append((to, subject, body))


@pytest.fixture(autouse=True)
def fast_hasher():
    """Use the minimum bcrypt cost so tests stay quick."""
    password_module._password_hasher = PasswordHasher(rounds=4)
    yield password_module._password_hasher
    password_module._password_hasher = None


@pytest.fixture(name="db_session")
def db_session_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="sender")
def sender_fixture():
    return RecordingSender()


@pytest.fixture(name="store")
def store_fixture(db_session: Session):
    return CredentialStore(db_session, otp_expire_minutes=15)


@pytest.fixture(name="client")
def client_fixture(db_session: Session, sender: RecordingSender):
    """Create a test client with overridden DB and email dependencies."""
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notification_sender] = lambda: sender
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _create_user(store: CredentialStore, hasher: PasswordHasher, email: str, password: str, active: bool) -> dict:
    user = store.create_user("Test", "User", email, hasher.hash(password))
    if active:
        store.activate_user(email)
    token = get_jwt_service().create_token(user.id, user.email)
    return {"user_id": user.id, "email": user.email, "password": password, "token": token}


@pytest.fixture(name="test_user")
def test_user_fixture(store: CredentialStore, fast_hasher: PasswordHasher):
    """Create a confirmed user and return its data with a session token."""
    return _create_user(store, fast_hasher, "test@example.com", "password123", active=True)


@pytest.fixture(name="pending_user")
def pending_user_fixture(store: CredentialStore, fast_hasher: PasswordHasher):
    """Create a user who has not followed the confirmation link yet."""
    return _create_user(store, fast_hasher, "pending@example.com", "password123", active=False)
