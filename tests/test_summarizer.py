"""
Tests for the transcript summarizer module.
"""

import asyncio
import pytest
from unittest.mock import patch, MagicMock, AsyncMock

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from tubesum.core.summarizer import (
    build_messages,
    chunk_transcript,
    get_text_splitter,
    summarize_transcript,
)
from tubesum.models.schemas import SummaryModel


@pytest.fixture
def mock_langchain_model():
    """Fixture to mock the langchain chat model."""
    with patch('tubesum.core.summarizer.init_chat_model') as mock_init_model:
        mock_model = MagicMock()
        mock_model.ainvoke = AsyncMock(
            return_value=AIMessage(content="This is a summarized transcript of the video.")
        )
        mock_init_model.return_value = mock_model

        yield mock_init_model


@pytest.fixture
def long_transcript():
    """A transcript well above one 500 token chunk."""
    return " ".join(f"Sentence number {i} talks about plasma confinement." for i in range(400))


@pytest.fixture
def mock_chunks():
    """Fixture to mock the transcript splitter."""
    with patch('tubesum.core.summarizer.chunk_transcript') as mock_chunk:
        mock_chunk.side_effect = lambda transcript: [transcript]
        yield mock_chunk


def test_summary_model_providers():
    assert SummaryModel.GPT_35_TURBO.provider == "openai"
    assert SummaryModel.GPT_4O.provider == "openai"
    assert SummaryModel.GEMINI_FLASH.provider == "google_genai"
    assert SummaryModel.LLAMA3_70B.provider == "groq"
    assert SummaryModel.MIXTRAL_8X7B.provider == "groq"


def test_text_splitter_configuration():
    """Chunks are 500 gpt2 tokens without overlap."""
    get_text_splitter.cache_clear()
    try:
        with patch('tubesum.core.summarizer.TokenTextSplitter') as mock_splitter:
            get_text_splitter()
        mock_splitter.assert_called_once_with(encoding_name="gpt2", chunk_size=500, chunk_overlap=0)
    finally:
        get_text_splitter.cache_clear()


def test_chunk_transcript_splits_long_text(long_transcript):
    chunks = chunk_transcript(long_transcript)

    assert len(chunks) > 1
    assert "".join(chunks) == long_transcript


def test_chunk_transcript_short_text():
    assert chunk_transcript("This is a short test transcript.") == ["This is a short test transcript."]


def test_build_messages():
    messages = build_messages(["first {part}", "second part"], "Test Video", "Test Author")

    assert isinstance(messages[0], SystemMessage)
    assert "English" in messages[0].content
    assert '"Test Video"' in messages[0].content
    assert [m.content for m in messages[1:]] == ["first {part}", "second part"]
    assert all(isinstance(m, HumanMessage) for m in messages[1:])


@pytest.mark.parametrize("model, provider", [
    ("gpt-3.5-turbo", "openai"),
    ("gpt-4o", "openai"),
    ("gemini-1.5-flash", "google_genai"),
    ("llama3-70b-8192", "groq"),
    ("mixtral-8x7b-32768", "groq"),
])
def test_summarize_routes_to_backend(mock_langchain_model, mock_chunks, model, provider):
    summary = asyncio.run(summarize_transcript("A short transcript.", model, "Test Video", "Test Author"))

    assert summary == "This is a summarized transcript of the video."
    kwargs = mock_langchain_model.call_args.kwargs
    assert kwargs["model"] == model
    assert kwargs["model_provider"] == provider
    assert kwargs["temperature"] == 0


def test_summarize_long_transcript_sends_one_turn_per_chunk(mock_langchain_model, mock_chunks, long_transcript):
    """Every chunk becomes its own human turn in a single request."""
    chunks = ["first chunk", "second chunk", "third chunk"]
    mock_chunks.side_effect = None
    mock_chunks.return_value = chunks

    asyncio.run(summarize_transcript(long_transcript, SummaryModel.LLAMA3_70B))

    mock_chunks.assert_called_once_with(long_transcript)
    mock_model = mock_langchain_model.return_value
    mock_model.ainvoke.assert_awaited_once()
    messages = mock_model.ainvoke.call_args.args[0]

    assert len(messages) == 4
    assert isinstance(messages[0], SystemMessage)
    assert [m.content for m in messages[1:]] == chunks


def test_summarize_backend_error_returns_none(mock_langchain_model, mock_chunks):
    mock_langchain_model.return_value.ainvoke.side_effect = RuntimeError("rate limited")

    assert asyncio.run(summarize_transcript("A transcript.", "gpt-4o")) is None


def test_summarize_client_creation_error_returns_none(mock_langchain_model, mock_chunks):
    mock_langchain_model.side_effect = ImportError("langchain_groq is not installed")

    assert asyncio.run(summarize_transcript("A transcript.", "mixtral-8x7b-32768")) is None


def test_summarize_empty_response_returns_none(mock_langchain_model, mock_chunks):
    mock_langchain_model.return_value.ainvoke.return_value = AIMessage(content="")

    assert asyncio.run(summarize_transcript("A transcript.", "gpt-4o")) is None


def test_summarize_unknown_model(mock_langchain_model):
    assert asyncio.run(summarize_transcript("A transcript.", "gpt-2")) is None
    mock_langchain_model.assert_not_called()


def test_summarize_multipart_content(mock_langchain_model, mock_chunks):
    mock_langchain_model.return_value.ainvoke.return_value = AIMessage(
        content=[{"type": "text", "text": "Part one. "}, {"type": "text", "text": "Part two."}]
    )

    assert asyncio.run(summarize_transcript("A transcript.", "gemini-1.5-flash")) == "Part one. Part two."
