"""Pytest fixtures for ContactFlow.

Provides reusable test fixtures for:
- Database session on an in-memory SQLite database (tables per test)
- In-memory record store, recording mail gateway and controllable clock
- ContactService wired to the fakes
- FastAPI TestClient with database and mail gateway overridden

Usage:
    def test_submit(client, mail_gateway):
        response = client.post("/api/send-email", json={...})
        assert response.status_code == 200
        assert len(mail_gateway.verification_emails) == 1
"""

import os
import sys
from datetime import timedelta
from pathlib import Path
from typing import Generator

# Set environment variables BEFORE any application imports so the cached
# settings and the module-level engine pick them up
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["EMAIL_TO"] = "admin@test.com"
os.environ["FRONTEND_URL"] = "https://frontend.test"
os.environ["LOG_JSON"] = "false"
os.environ["ENVIRONMENT"] = "test"

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from models import Base
from database import get_db as database_get_db
from contact.dependencies import get_mail_gateway, get_token_issuer
from domain.contact.service import ContactService
from domain.contact.tokens import TokenIssuer
from fixtures.contact_fakes import InMemoryContactStore, MutableClock, RecordingMailGateway

ADMIN_EMAIL = "admin@test.com"
FRONTEND_URL = "https://frontend.test"

# A single shared connection keeps the in-memory database alive for the test
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test.

    Creates all tables before the test and drops them after.
    """
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def clock() -> MutableClock:
    return MutableClock()


@pytest.fixture
def token_issuer(clock: MutableClock) -> TokenIssuer:
    return TokenIssuer(ttl=timedelta(hours=24), clock=clock)


@pytest.fixture
def store() -> InMemoryContactStore:
    return InMemoryContactStore()


@pytest.fixture
def mail_gateway() -> RecordingMailGateway:
    return RecordingMailGateway()


@pytest.fixture
def contact_service(store, mail_gateway, token_issuer, clock) -> ContactService:
    """ContactService wired to in-memory fakes and a fixed clock."""
    return ContactService(
        store=store,
        mailer=mail_gateway,
        token_issuer=token_issuer,
        admin_email=ADMIN_EMAIL,
        frontend_url=FRONTEND_URL,
        clock=clock,
    )


@pytest.fixture(scope="function")
def client(db_session: Session, mail_gateway: RecordingMailGateway):
    """Create a test client backed by the test database and recording mailer.

    Tokens use the real clock so expiry is checked against wall time.
    """
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[database_get_db] = override_get_db
    app.dependency_overrides[get_mail_gateway] = lambda: mail_gateway
    app.dependency_overrides[get_token_issuer] = lambda: TokenIssuer(ttl=timedelta(hours=24))

    yield TestClient(app)

    app.dependency_overrides.clear()
