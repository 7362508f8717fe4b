# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
# Cheapest Argon2id parameters libsodium accepts; keeps the suite fast.
os.environ.setdefault("PASSWORD_HASH_OPSLIMIT", "1")
os.environ.setdefault("PASSWORD_HASH_MEMLIMIT", "8192")
os.environ.setdefault("TRANSACTION_RETRY_BACKOFF_SECONDS", "0.001")

from squadboard.core.security import create_access_token
from squadboard.db.session import Base
from squadboard.db.session import get_db as app_get_session
from squadboard.main import app as fastapi_app
from squadboard.models import Account, Post
from squadboard.services.identity import IdentityStore
from squadboard.services.posts import PostBoard

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "hunter22"


class FakeClock:
    """Manually advanced UTC clock for time-dependent services."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Ensure each test sees a clean database since services commit.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture()
def file_sessions(tmp_path: Path) -> Iterator[sessionmaker[Session]]:
    """Session factory over a file-backed database so sessions use separate connections."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'board.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    finally:
        engine.dispose()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


def register_account(
    db: Session,
    handle: str,
    display_name: str | None = None,
    password: str = TEST_PASSWORD,
) -> Account:
    """Register an account through the identity store."""
    return IdentityStore(db).register(handle, password, display_name or handle.title())


def bearer(account: Account | str) -> dict[str, str]:
    """Return authorization headers for an account or handle."""
    handle = account if isinstance(account, str) else account.handle
    return {"Authorization": f"Bearer {create_access_token(handle)}"}


@pytest.fixture()
def auth_headers() -> Callable[[Account | str], dict[str, str]]:
    """Return a helper building bearer headers for an account or handle."""
    return bearer


@pytest.fixture()
def make_account(db_session: Session) -> Callable[..., Account]:
    def _make(handle: str, display_name: str | None = None) -> Account:
        return register_account(db_session, handle, display_name)

    return _make


@pytest.fixture()
def alice(make_account: Callable[..., Account]) -> Account:
    """Primary test account."""
    return make_account("alice001", "Alice")


@pytest.fixture()
def bob(make_account: Callable[..., Account]) -> Account:
    """Secondary test account."""
    return make_account("bob00001", "Bob")


@pytest.fixture()
def admin(make_account: Callable[..., Account]) -> Account:
    """Account holding the reserved administrator handle."""
    return make_account("admin", "Moderator")


@pytest.fixture()
def alice_post(db_session: Session, alice: Account) -> Post:
    """A post authored by alice."""
    return PostBoard(db_session).create_post(alice, "Looking for a duo partner", "Evenings only")
