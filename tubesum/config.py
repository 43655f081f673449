"""
Configuration settings for the tubesum application.

Values come from the environment (a ``.env`` file is loaded first). The
active class is chosen by ``ENVIRONMENT``: ``production`` or ``development``.
"""

import os
from pathlib import Path
from typing import List
from dotenv import load_dotenv


load_dotenv()


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


class Config:
    """Settings shared by every environment."""

    APP_NAME = "YouTube Video Summarizer"
    APP_VERSION = "0.2.0"

    BASE_DIR = Path(__file__).resolve().parent.parent.absolute()
    DATA_DIR = Path(os.getenv("DATA_DIR", BASE_DIR / "data"))

    # Model provider credentials
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
    GROQ_API_KEY = os.getenv("GROQ_API_KEY")
    GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")

    # Audio staging bucket
    SUPABASE_URL = os.getenv("SUPABASE_URL")
    SUPABASE_KEY = os.getenv("SUPABASE_KEY")
    AUDIO_BUCKET = os.getenv("AUDIO_BUCKET", "audios")
    MAX_AUDIO_SIZE_MB = 25

    # Persistence and page cache
    DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR}/tubesum.db")
    REDIS_URL = os.getenv("REDIS_URL")
    PAGE_CACHE_TTL = _env_int("PAGE_CACHE_TTL", 3600)

    # pytubefix client used for title/author lookups
    VIDEO_INFO_CLIENT = os.getenv("VIDEO_INFO_CLIENT", "IOS")

    TRANSCRIPTION_PROVIDER = os.getenv("TRANSCRIPTION_PROVIDER", "openai").lower()
    TRANSCRIPTION_MODEL = "whisper-1"
    GROQ_TRANSCRIPTION_MODEL = "whisper-large-v3-turbo"

    DEFAULT_SUMMARY_MODEL = os.getenv("DEFAULT_SUMMARY_MODEL", "gpt-3.5-turbo")
    SUMMARY_ENCODING = "gpt2"
    SUMMARY_CHUNK_SIZE = 500
    SUMMARY_CHUNK_OVERLAP = 0
    TEMPERATURE = 0

    EMBEDDING_MODEL = "text-embedding-ada-002"
    EMBEDDING_DIMENSIONS = 1536
    EMBEDDING_CHUNK_SIZE = 250

    @classmethod
    def missing_settings(cls) -> List[str]:
        """Names of unset settings that some pipeline stage cannot run without."""
        required = {
            "OPENAI_API_KEY": cls.OPENAI_API_KEY,
            "SUPABASE_URL": cls.SUPABASE_URL,
            "SUPABASE_KEY": cls.SUPABASE_KEY,
        }
        if cls.TRANSCRIPTION_PROVIDER == "groq":
            required["GROQ_API_KEY"] = cls.GROQ_API_KEY
        return [name for name, value in required.items() if not value]

    @classmethod
    def initialize(cls):
        """Create the data directory and warn about missing credentials."""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)

        for name in cls.missing_settings():
            print(f"WARNING: {name} is not set. Add it to the .env file or the environment.")


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    LOG_LEVEL = "INFO"


def get_config():
    """Get the configuration class for ``ENVIRONMENT``."""
    if os.getenv("ENVIRONMENT", "development").lower() == "production":
        return ProductionConfig
    return DevelopmentConfig


config = get_config()
config.initialize()
