# tests/conftest.py
from __future__ import annotations

from typing import Callable, Dict

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  (populate Base.metadata)
from app.db.base import Base
from app.db.session import enable_sqlite_foreign_keys, get_db
from app.deps.http import get_http_client
from app.main import app
from app.models.auth import User, UserRole, UserStatus
from app.security.jwt import create_access_token

# One in-memory database shared by every connection of the test run
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(_schema) -> Session:
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def _override_get_db(db: Session):
    """Endpoints share the test's session so fixtures and requests see the same rows."""
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_db, None)
        app.dependency_overrides.pop(get_http_client, None)


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def mock_http() -> Callable[[Callable[[httpx.Request], httpx.Response]], list]:
    """
    Route outbound httpx calls of the app to `handler`. Returns the list of
    requests seen so tests can assert on them.
    """
    def _install(handler):
        seen: list = []

        def _record(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        def _client():
            with httpx.Client(transport=httpx.MockTransport(_record)) as c:
                yield c

        app.dependency_overrides[get_http_client] = _client
        return seen

    return _install


def _mk_user(db: Session, email: str, role: UserRole, status: UserStatus = UserStatus.active) -> User:
    # hash is never checked by token-based tests; login tests set a real one
    u = User(email=email, full_name=email.split("@")[0], role=role, status=status, hashed_password="!")
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


@pytest.fixture
def admin_user(db: Session) -> User:
    return _mk_user(db, "admin@piodurand.gov.ph", UserRole.admin)


@pytest.fixture
def editor_user(db: Session) -> User:
    return _mk_user(db, "editor@piodurand.gov.ph", UserRole.editor)


def _bearer(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def admin_headers(admin_user: User) -> Dict[str, str]:
    return _bearer(admin_user)


@pytest.fixture
def editor_headers(editor_user: User) -> Dict[str, str]:
    return _bearer(editor_user)
