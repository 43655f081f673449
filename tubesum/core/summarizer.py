"""
Module for summarizing transcripts using LLM models.
"""

from functools import lru_cache
from typing import List, Optional, Union

from langchain.chat_models import init_chat_model
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_text_splitters import TokenTextSplitter

from tubesum.config import config
from tubesum.core.prompts import summary_system_prompt
from tubesum.models.schemas import SummaryModel
from tubesum.utils.logger import logging


@lru_cache(maxsize=1)
def get_text_splitter() -> TokenTextSplitter:
    """Splitter producing the transcript chunks sent to the chat model."""
    return TokenTextSplitter(
        encoding_name=config.SUMMARY_ENCODING,
        chunk_size=config.SUMMARY_CHUNK_SIZE,
        chunk_overlap=config.SUMMARY_CHUNK_OVERLAP,
    )


def chunk_transcript(transcript: str) -> List[str]:
    """Split a transcript into token-bounded chunks."""
    return get_text_splitter().split_text(transcript)


def build_messages(chunks: List[str], video_title: str = "", video_author: str = "") -> List[BaseMessage]:
    """
    Build the conversation sent to the chat model.

    One system instruction followed by one human turn per transcript chunk.
    """
    return [
        SystemMessage(content=summary_system_prompt(video_title, video_author)),
        *[HumanMessage(content=chunk) for chunk in chunks],
    ]


def _chat_model(model: SummaryModel, **credentials):
    """Build the non-streaming chat model for ``model``."""
    return init_chat_model(
        model=model.value,
        model_provider=model.provider,
        temperature=config.TEMPERATURE,
        **{key: value for key, value in credentials.items() if value},
    )


async def _run_summary(llm, transcript: str, model: SummaryModel, video_title: str, video_author: str) -> Optional[str]:
    """Send every chunk in a single request. None on any backend error."""
    try:
        chunks = chunk_transcript(transcript)
        logging.info(f"Summarizing {len(chunks)} transcript chunks with {model.value}")

        messages = build_messages(chunks, video_title, video_author)
        res = await llm.ainvoke(messages)

        if not res or not res.content:
            raise ValueError("An Error Occurred while Summarizing the transcript.")

        return res.content if isinstance(res.content, str) else _join_content(res.content)
    except Exception as e:
        logging.error(f"Error summarizing with {model.value}: {e}")
        return None


def _join_content(content: list) -> str:
    """Flatten multi-part message content into plain text."""
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


async def summarize_with_gpt(transcript: str, model: SummaryModel, video_title: str = "", video_author: str = "") -> Optional[str]:
    """Summarize with an OpenAI chat model."""
    try:
        llm = _chat_model(model, api_key=config.OPENAI_API_KEY)
    except Exception as e:
        logging.error(f"Couldn't create OpenAI client for {model.value}: {e}")
        return None
    return await _run_summary(llm, transcript, model, video_title, video_author)


async def summarize_with_groq(transcript: str, model: SummaryModel, video_title: str = "", video_author: str = "") -> Optional[str]:
    """Summarize with a model hosted on Groq."""
    try:
        llm = _chat_model(model, api_key=config.GROQ_API_KEY)
    except Exception as e:
        logging.error(f"Couldn't create Groq client for {model.value}: {e}")
        return None
    return await _run_summary(llm, transcript, model, video_title, video_author)


async def summarize_with_gemini(transcript: str, model: SummaryModel, video_title: str = "", video_author: str = "") -> Optional[str]:
    """Summarize with a Google Gemini model."""
    try:
        llm = _chat_model(model, google_api_key=config.GOOGLE_API_KEY)
    except Exception as e:
        logging.error(f"Couldn't create Gemini client for {model.value}: {e}")
        return None
    return await _run_summary(llm, transcript, model, video_title, video_author)


BACKENDS = {
    "openai": summarize_with_gpt,
    "groq": summarize_with_groq,
    "google_genai": summarize_with_gemini,
}


async def summarize_transcript(
    transcript: str,
    model: Union[SummaryModel, str],
    video_title: str = "",
    video_author: str = "",
) -> Optional[str]:
    """
    Summarize a transcript with the chosen model.

    Args:
        transcript: Full transcript text to summarize
        model: One of the SummaryModel ids
        video_title: Title of the video, used as prompt context
        video_author: Channel of the video, used as prompt context

    Returns:
        Summary text, or None if the summary is unavailable
    """
    try:
        model = SummaryModel(model)
    except ValueError:
        logging.error(f"Unsupported summary model: {model}")
        return None

    backend = BACKENDS[model.provider]
    return await backend(transcript, model, video_title, video_author)
