"""Database connection module."""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ..config.config import settings
from ..models.database import Base


def create_db_engine(database_url: Optional[str] = None) -> Engine:
    """
    Create a database engine.

    In-memory SQLite shares one connection so every session sees the same data.

    Args:
        database_url: Connection URL, defaults to ``settings.database_url``

    Returns:
        Engine: SQLAlchemy engine
    """
    url = database_url or settings.database_url
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, pool_pre_ping=True, **kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to ``engine``."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=engine)
