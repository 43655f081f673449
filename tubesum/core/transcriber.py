"""
Module for transcribing staged audio with a Whisper speech-to-text API.
"""

import asyncio
from functools import lru_cache
from typing import Optional

from groq import AsyncGroq
from openai import AsyncOpenAI

from tubesum.config import config
from tubesum.core import storage
from tubesum.core.audio import upload_audio
from tubesum.core.video_resolver import parse_video_id
from tubesum.utils.errors import TranscriptionError, TubesumError
from tubesum.utils.logger import logging


@lru_cache(maxsize=2)
def get_transcription_client(provider: str):
    """Get the shared async client of a transcription provider."""
    if provider == "groq":
        return AsyncGroq(api_key=config.GROQ_API_KEY)
    if provider == "openai":
        return AsyncOpenAI(api_key=config.OPENAI_API_KEY)
    raise TranscriptionError(f"Unknown transcription provider: {provider}")


def transcription_model(provider: str) -> str:
    if provider == "groq":
        return config.GROQ_TRANSCRIPTION_MODEL
    return config.TRANSCRIPTION_MODEL


async def request_transcription(filename: str, audio: bytes) -> str:
    """
    Send audio to the transcription API and return the plain text.

    Word-level timestamps are requested with the verbose JSON format; only
    the ``text`` field is kept.
    """
    provider = config.TRANSCRIPTION_PROVIDER
    client = get_transcription_client(provider)

    try:
        transcription = await client.audio.transcriptions.create(
            file=(filename, audio, "audio/mpeg"),
            model=transcription_model(provider),
            timestamp_granularities=["word"],
            response_format="verbose_json",
        )
    except Exception as e:
        raise TranscriptionError(f"Transcription request for {filename} failed: {e}") from e

    text = getattr(transcription, "text", None)
    if not text:
        raise TranscriptionError(f"Transcription of {filename} returned no text")
    return text


async def speech_to_text(video_id: str) -> Optional[str]:
    """
    Transcribe the staged audio of a video.

    Returns:
        The transcript text, or None on failure
    """
    filename = storage.audio_path(video_id)
    try:
        audio = await asyncio.to_thread(storage.download_file, filename)
        logging.info(f"Transcribing {filename} ({len(audio)} bytes)")
        return await request_transcription(filename, audio)
    except TubesumError as e:
        logging.error(f"Error transcribing {video_id}: {e}")
        return None


async def transcribe_video(link: str) -> Optional[str]:
    """Stage the audio of a video and transcribe it. None on failure."""
    try:
        video_id = parse_video_id(link)
    except TubesumError as e:
        logging.error(str(e))
        return None

    # download and upload block on network I/O
    if not await asyncio.to_thread(upload_audio, link):
        return None

    return await speech_to_text(video_id)
