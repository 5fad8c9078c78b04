"""
database.py — SQLAlchemy wiring: engine and session factories, the
declarative Base, the per-request session dependency and table creation.
"""

import os
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from taskboard.config import DATABASE_URL

logger = logging.getLogger(__name__)

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")

Base = declarative_base()


def make_engine(url: str = DATABASE_URL) -> Engine:
    """Build an engine with the connection settings the URL's backend needs."""
    if url in IN_MEMORY_URLS:
        # One shared connection, otherwise each session gets its own empty database.
        return create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    if url.startswith("sqlite"):
        # Request sessions run on FastAPI's threadpool.
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,
        pool_pre_ping=True,
    )


def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(autoflush=False, bind=bind)


def create_tables(bind: Engine) -> None:
    # Import all models so they register with Base.metadata
    import taskboard.models  # noqa: F401

    Base.metadata.create_all(bind=bind)


engine = make_engine()
SessionLocal = make_session_factory(engine)


def get_db():
    """FastAPI dependency — yields a database session and closes it after use."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create the local data/ directory for the default SQLite file, then all tables."""
    if DATABASE_URL.startswith("sqlite:///./"):
        os.makedirs("data", exist_ok=True)
    create_tables(engine)
    logger.info("Database initialized (%s)", engine.url.render_as_string(hide_password=True))
