from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings

settings = get_settings()

DATABASE_URL = settings.database_url


def build_engine(url: str) -> Engine:
    """
    In-memory SQLite needs a single shared connection, otherwise every
    pooled connection would see its own empty database.
    """
    if url.startswith("sqlite") and ":memory:" in url:
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            future=True,
        )
    return create_engine(url, pool_pre_ping=True, future=True)


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
)


def init_db(bind: Engine = engine) -> None:
    # FORCE model registration
    import app.models  # noqa: F401
    from app.db.base import Base

    Base.metadata.create_all(bind=bind)


async def get_db():
    # async so that session work stays on the event loop thread; with the
    # shared in-memory connection, sessions must never overlap across threads
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
