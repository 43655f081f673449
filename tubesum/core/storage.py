"""
Supabase object storage for downloaded audio.
"""

from functools import lru_cache

from supabase import Client, create_client

from tubesum.config import config
from tubesum.utils.errors import ExternalApiError


def audio_path(video_id: str) -> str:
    """Object key of a video's audio file."""
    return f"{video_id}.mp3"


@lru_cache(maxsize=1)
def get_storage_client() -> Client:
    """Get the shared Supabase client."""
    if not config.SUPABASE_URL or not config.SUPABASE_KEY:
        raise ExternalApiError("Supabase is not configured. Set SUPABASE_URL and SUPABASE_KEY.")
    return create_client(config.SUPABASE_URL, config.SUPABASE_KEY)


def upload_file(path: str, data: bytes, content_type: str = "audio/mpeg") -> None:
    """Upload bytes to the audio bucket, replacing an object left by an earlier attempt."""
    client = get_storage_client()
    try:
        client.storage.from_(config.AUDIO_BUCKET).upload(
            path=path,
            file=data,
            file_options={"content-type": content_type, "upsert": "true"},
        )
    except Exception as e:
        raise ExternalApiError(f"Upload of {path} failed: {e}") from e


def download_file(path: str) -> bytes:
    """Download an object from the audio bucket."""
    client = get_storage_client()
    try:
        data = client.storage.from_(config.AUDIO_BUCKET).download(path)
    except Exception as e:
        raise ExternalApiError(f"Download of {path} failed: {e}") from e

    if not data:
        raise ExternalApiError(f"Couldn't download the audio file {path}.")
    return data
