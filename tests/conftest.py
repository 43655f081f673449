"""
Configuration for pytest tests.
"""

import os
import tempfile

# Must be set before tubesum.config is imported
_test_data_dir = tempfile.mkdtemp(prefix="tubesum_test_data_")
os.environ["DATA_DIR"] = _test_data_dir
os.environ["DATABASE_URL"] = f"sqlite:///{_test_data_dir}/test.db"
os.environ["ENVIRONMENT"] = "development"
os.environ.setdefault("OPENAI_API_KEY", "test_openai_key")
os.environ.setdefault("GROQ_API_KEY", "test_groq_key")
os.environ.setdefault("GOOGLE_API_KEY", "test_google_key")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test_supabase_key")
os.environ.pop("REDIS_URL", None)

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tubesum.db.database import Base
from tubesum.db import models  # noqa: F401  registers the tables
from tubesum.utils.caching import clear_memory_cache


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Remove the test data directory after the session."""
    yield

    import shutil
    shutil.rmtree(_test_data_dir, ignore_errors=True)


@pytest.fixture(autouse=True)
def empty_page_cache():
    """Start every test with an empty page cache."""
    clear_memory_cache()
    yield
    clear_memory_cache()


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Database session bound to the in-memory engine."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def test_video_id():
    """Return a test YouTube video id."""
    return "V3TUEeB0kW0"


@pytest.fixture(scope="session")
def test_video_url(test_video_id):
    """Return a test YouTube video URL."""
    return f"https://www.youtube.com/watch?v={test_video_id}&t=42s"


@pytest.fixture
def stored_video(db_session, test_video_id):
    """A video with a stored transcript but no summary."""
    from tubesum.db.models import Video

    video = Video(
        videoid=test_video_id,
        videotitle="Nuclear Fusion Explained",
        transcript="Fusion powers the sun. Hydrogen nuclei combine into helium.",
    )
    db_session.add(video)
    db_session.commit()
    return video
