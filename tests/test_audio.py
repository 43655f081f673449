"""
Tests for downloading and staging audio.
"""

import pytest
from unittest.mock import patch, MagicMock

from tubesum.core.audio import check_audio_size, download_audio, upload_audio
from tubesum.utils.errors import ExternalApiError, OversizeAssetError, TranscriptionError

MB = 1024 * 1024


@pytest.fixture
def mock_youtube():
    """Fixture to mock the YouTube class with a single audio stream."""
    with patch('tubesum.core.audio.YouTube') as mock_yt:
        mock_yt_instance = mock_yt.return_value
        mock_yt_instance.video_id = "test123"

        mock_audio_stream = MagicMock()
        mock_audio_stream.abr = "48kbps"
        mock_audio_stream.stream_to_buffer.side_effect = lambda buffer: buffer.write(b"audio bytes")
        mock_yt_instance.streams.filter.return_value.order_by.return_value.first.return_value = mock_audio_stream

        yield mock_yt


@pytest.fixture
def mock_storage():
    with patch('tubesum.core.audio.storage.upload_file') as mock_upload:
        yield mock_upload


def test_download_audio_picks_lowest_audio_only_stream(mock_youtube):
    video_id, audio = download_audio("https://www.youtube.com/watch?v=test123")

    streams = mock_youtube.return_value.streams
    streams.filter.assert_called_once_with(only_audio=True)
    streams.filter.return_value.order_by.assert_called_once_with("abr")
    assert video_id == "test123"
    assert audio == b"audio bytes"


def test_download_audio_without_audio_stream(mock_youtube):
    streams = mock_youtube.return_value.streams
    streams.filter.return_value.order_by.return_value.first.return_value = None

    with pytest.raises(TranscriptionError):
        download_audio("https://www.youtube.com/watch?v=test123")


def test_check_audio_size():
    check_audio_size(b"x" * (25 * MB))

    with pytest.raises(OversizeAssetError):
        check_audio_size(b"x" * (25 * MB + 1))


def test_upload_audio(mock_youtube, mock_storage):
    assert upload_audio("https://www.youtube.com/watch?v=test123") is True
    mock_storage.assert_called_once_with("test123.mp3", b"audio bytes")


def test_upload_audio_rejects_oversize_audio(mock_storage):
    """Audio over 25MB is never sent to storage."""
    with patch('tubesum.core.audio.download_audio', return_value=("test123", b"x" * (26 * MB))):
        assert upload_audio("https://www.youtube.com/watch?v=test123") is False

    mock_storage.assert_not_called()


def test_upload_audio_storage_failure(mock_youtube, mock_storage):
    mock_storage.side_effect = ExternalApiError("bucket not found")

    assert upload_audio("https://www.youtube.com/watch?v=test123") is False


def test_upload_audio_download_failure(mock_youtube, mock_storage):
    mock_youtube.side_effect = RuntimeError("age restricted")

    assert upload_audio("https://www.youtube.com/watch?v=test123") is False
    mock_storage.assert_not_called()
