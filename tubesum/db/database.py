"""
Engine, session factory and table creation for tubesum.

PostgreSQL with the pgvector extension is the production target; SQLite is
accepted for local runs and tests.
"""

from typing import Generator
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from tubesum.config import config

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """Engine for ``database_url``; SQLite connections may cross threads."""
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(database_url, pool_pre_ping=True)


engine = build_engine(config.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DBSession = Session


def init_db() -> None:
    """Create all tables, enabling pgvector first on PostgreSQL."""
    from tubesum.db.models import Video, Summary, EmbeddingChunk  # noqa: F401

    if engine.dialect.name == "postgresql":
        with engine.begin() as conn:
            conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))

    Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session for FastAPI routes."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
