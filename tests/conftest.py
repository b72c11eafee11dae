# tests/conftest.py
from __future__ import annotations

import os
import uuid
from collections.abc import Callable, Generator, Iterator
from datetime import datetime

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tunein_stage.core.security import create_access_token
from tunein_stage.db.session import Base
from tunein_stage.db.session import get_db as app_get_session
from tunein_stage.db.time import utcnow
from tunein_stage.main import app as fastapi_app
from tunein_stage.models import Club, ClubMembership, Post, Profile, User
from tunein_stage.services.club_service import seed_default_clubs

TEST_DB_URL = "sqlite://"


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
        session.rollback()
        session.close()

        # Each test starts from an empty database even though services commit.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


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
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users, optionally with a profile."""

    def _make_user(username: str | None = None, email: str | None = None) -> User:
        user = User(email=email)
        db_session.add(user)
        db_session.flush()
        if username is not None:
            db_session.add(Profile(user_id=user.id, username=username))
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Primary test user with a profile."""
    return make_user("test_user", "test@example.com")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Secondary test user with a profile."""
    return make_user("other_user", "other@example.com")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return {"Authorization": f"Bearer {create_access_token(test_user.id)}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture()
def clubs(db_session: Session) -> dict[str, Club]:
    """Seed the default clubs and return them keyed by slug."""
    seed_default_clubs(db_session)
    return {club.slug: club for club in db_session.query(Club).all()}


@pytest.fixture()
def tech_club(clubs: dict[str, Club]) -> Club:
    return clubs["tech"]


@pytest.fixture()
def membership(db_session: Session, test_user: User, tech_club: Club) -> ClubMembership:
    """Make the primary test user a member of the tech club."""
    membership = ClubMembership(user_id=test_user.id, club_id=tech_club.id)
    db_session.add(membership)
    db_session.commit()
    return membership


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory that inserts posts directly, bypassing membership rules."""

    def _make_post(
        club: Club,
        author: User,
        title: str = "Test post",
        content: str | None = "Test post content",
        score: int = 0,
        created_at: datetime | None = None,
    ) -> Post:
        post = Post(
            id=uuid.uuid4(),
            club_id=club.id,
            user_id=author.id,
            title=title,
            content=content,
            score=score,
            created_at=created_at or utcnow(),
        )
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def test_post(make_post: Callable[..., Post], tech_club: Club, test_user: User) -> Post:
    """A baseline post in the tech club authored by the primary user."""
    return make_post(tech_club, test_user)
