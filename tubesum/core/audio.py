"""
Download the audio track of a YouTube video and stage it in object storage.
"""

import io
from typing import Tuple

from pytubefix import YouTube

from tubesum.config import config
from tubesum.core import storage
from tubesum.utils.errors import OversizeAssetError, TranscriptionError, TubesumError
from tubesum.utils.logger import logging


def download_audio(link: str) -> Tuple[str, bytes]:
    """
    Download the lowest quality audio-only stream of a video into memory.

    Returns:
        Tuple of (video id, audio bytes)

    Raises:
        TranscriptionError: if the video has no audio stream or the download fails
    """
    try:
        yt = YouTube(link)
        audio_stream = yt.streams.filter(only_audio=True).order_by("abr").first()
    except Exception as e:
        raise TranscriptionError(f"Couldn't read streams of {link}: {e}") from e

    if audio_stream is None:
        raise TranscriptionError("No audio format found for the provided youtube video.")

    logging.info(f"Downloading audio ({audio_stream.abr}) of {yt.video_id}")
    buffer = io.BytesIO()
    try:
        audio_stream.stream_to_buffer(buffer)
    except Exception as e:
        raise TranscriptionError(f"Audio download of {yt.video_id} failed: {e}") from e

    return yt.video_id, buffer.getvalue()


def check_audio_size(audio: bytes) -> None:
    """Raise OversizeAssetError when audio exceeds the transcription upload limit."""
    if len(audio) / (1024 * 1024) > config.MAX_AUDIO_SIZE_MB:
        raise OversizeAssetError(len(audio), config.MAX_AUDIO_SIZE_MB)


def upload_audio(link: str) -> bool:
    """
    Download a video's audio and upload it as ``<videoId>.mp3``.

    Returns:
        True when the audio was uploaded, False on any failure
    """
    try:
        video_id, audio = download_audio(link)
        check_audio_size(audio)
        storage.upload_file(storage.audio_path(video_id), audio)
        logging.info(f"Uploaded {len(audio)} bytes of audio for {video_id}")
        return True
    except TubesumError as e:
        logging.error(f"Error uploading audio for {link}: {e}")
        return False
