"""Shared helpers for tests: in-memory database and principals."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.models import Base
from app.schemas.principal import Principal


def memory_session_factory() -> sessionmaker:
    """
    Session factory over one shared in-memory SQLite connection.

    StaticPool keeps a single connection so the schema is visible to every thread
    TestClient uses for request handling.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": "test-secret-not-for-production",
        "AUTO_CREATE_SCHEMA": True,
        "SEED_DEMO_DATA": True,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def principal(*authorities: str, username: str = "someone", **flags: bool) -> Principal:
    return Principal(
        username=username,
        password_hash="not-a-real-hash",
        authorities=frozenset(authorities),
        **flags,
    )
