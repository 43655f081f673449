"""
Data models for the tubesum application.
"""
import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel


class SummaryModel(str, Enum):
    """Chat models a summary can be generated with."""
    GEMINI_FLASH = "gemini-1.5-flash"
    GPT_35_TURBO = "gpt-3.5-turbo"
    GPT_4O = "gpt-4o"
    LLAMA3_70B = "llama3-70b-8192"
    MIXTRAL_8X7B = "mixtral-8x7b-32768"

    @property
    def provider(self) -> str:
        """LangChain provider name of the backend serving this model."""
        if self in (SummaryModel.GPT_35_TURBO, SummaryModel.GPT_4O):
            return "openai"
        if self is SummaryModel.GEMINI_FLASH:
            return "google_genai"
        return "groq"


class TranscriptState(str, Enum):
    """What is already stored for a video."""
    SUMMARIZED = "summarized"
    TRANSCRIBED = "transcribed"
    MISSING = "missing"


class StoredTranscript(BaseModel):
    """Result of the transcript/summary lookup for one video."""
    state: TranscriptState
    transcript: Optional[str] = None
    summary: Optional[str] = None

    @classmethod
    def from_row(cls, transcript: Optional[str], summary: Optional[str]) -> "StoredTranscript":
        if transcript and summary:
            state = TranscriptState.SUMMARIZED
        elif transcript:
            state = TranscriptState.TRANSCRIBED
        else:
            state = TranscriptState.MISSING
        return cls(state=state, transcript=transcript, summary=summary)


class VideoInfo(BaseModel):
    """Metadata of a resolved YouTube video."""
    video_id: str
    title: str
    author: str


class SubmissionResult(BaseModel):
    """Outcome of submitting a video link."""
    video_id: str
    video_title: str
    video_author: str
    summary: Optional[str] = None
    transcript: str


class RegenerateResult(BaseModel):
    """Everything needed to summarize a stored video again."""
    video_id: str
    transcript: str
    video_title: str
    video_author: str


class TranscriptChunk(BaseModel):
    """A stored transcript chunk returned by similarity search."""
    video_id: str
    content: str
    distance: Optional[float] = None


class VideoSummary(BaseModel):
    """Model for storing video summary information."""
    video_id: str
    title: str
    summary: Optional[str] = None
    created_at: Optional[datetime.datetime] = None

    model_config = {"from_attributes": True}
