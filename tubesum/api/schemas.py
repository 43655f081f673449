import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from tubesum.config import config
from tubesum.core.video_resolver import extract_video_id, is_youtube_url
from tubesum.models.schemas import SummaryModel


class VideoSubmissionForm(BaseModel):
    """Form submitted with a YouTube link."""
    link: str

    @field_validator('link')
    def validate_youtube_link(cls, v):
        if not is_youtube_url(v):
            raise ValueError('URL must be a valid YouTube URL')
        if not extract_video_id(v):
            raise ValueError('URL must contain a video id (the "v" parameter)')
        return v


class SummarizeRequest(VideoSubmissionForm):
    """Submit a link and summarize it in one request."""
    model: SummaryModel = SummaryModel(config.DEFAULT_SUMMARY_MODEL)


class RegenerateForm(BaseModel):
    """Form asking for a fresh summary of a stored video."""
    videoid: str = Field(..., min_length=1, max_length=20, pattern=r"^[0-9A-Za-z_-]+$")
    model: SummaryModel = SummaryModel(config.DEFAULT_SUMMARY_MODEL)


class SummaryResponse(BaseModel):
    """Model for summary responses."""
    video_id: str
    title: str
    author: Optional[str] = None
    summary: Optional[str] = None
    transcript_available: bool = True
    cached: bool = False
    created_at: Optional[datetime.datetime] = None


class SearchRequest(BaseModel):
    """Search the stored transcript chunks of one video."""
    video_id: str
    query: str = Field(..., min_length=1)
    limit: int = Field(5, ge=1, le=50)


class SearchResponse(BaseModel):
    video_id: str
    chunks: List[str] = []
