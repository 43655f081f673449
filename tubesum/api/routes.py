"""
API routes for tubesum.
"""

from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Path, Query

from tubesum.api.schemas import (
    RegenerateForm,
    SearchRequest,
    SearchResponse,
    SummarizeRequest,
    SummaryResponse,
    VideoSubmissionForm,
)
from tubesum.core.embedder import search_transcript
from tubesum.core.pipeline import (
    embed_in_background,
    handle_initial_form_submit,
    regenerate_summary,
    summarize_video,
)
from tubesum.core.video_resolver import extract_video_id
from tubesum.db import crud
from tubesum.db.database import DBSession, get_db
from tubesum.models.schemas import SubmissionResult
from tubesum.utils.caching import cache_get, cache_set, page_key
from tubesum.utils.logger import logging

router = APIRouter(prefix="/api/v1", tags=["youtube"])

MAX_SUMMARIES_PAGE = 200


def _summary_response(result: SubmissionResult, cached: bool = False) -> SummaryResponse:
    return SummaryResponse(
        video_id=result.video_id,
        title=result.video_title,
        author=result.video_author,
        summary=result.summary,
        transcript_available=bool(result.transcript),
        cached=cached,
    )


@router.post("/videos", response_model=SubmissionResult)
async def submit_video(form: VideoSubmissionForm, db: DBSession = Depends(get_db)):
    """
    Resolve a YouTube link and acquire its transcript.

    - Stored transcripts and summaries are returned as they are
    - Videos seen for the first time are transcribed
    """
    result = await handle_initial_form_submit(db, form)
    if result is None:
        raise HTTPException(status_code=502, detail="Couldn't process the video.")
    return result


@router.post("/summarize", response_model=SummaryResponse)
async def summarize(
    request: SummarizeRequest,
    background_tasks: BackgroundTasks,
    db: DBSession = Depends(get_db),
):
    """
    Summarize a YouTube video by URL.

    A stored summary is returned as is. Otherwise the transcript is
    summarized and stored, and the transcript is embedded in the background.
    """
    had_summary = crud.get_stored_transcript(db, extract_video_id(request.link)).summary is not None

    result = await summarize_video(db, request)
    if result is None:
        raise HTTPException(status_code=502, detail="Couldn't summarize the video.")

    background_tasks.add_task(embed_in_background, result.video_id, result.transcript)
    return _summary_response(result, cached=had_summary)


@router.post("/regenerate", response_model=SummaryResponse)
async def regenerate(form: RegenerateForm, db: DBSession = Depends(get_db)):
    """Generate a new summary from the stored transcript of a video."""
    if not crud.get_transcript(db, form.videoid):
        raise HTTPException(status_code=404, detail="Couldn't find the transcription of this video.")

    result = await regenerate_summary(db, form)
    if result is None:
        raise HTTPException(status_code=502, detail="Couldn't regenerate the summary.")
    return _summary_response(result)


@router.get("/summaries", response_model=List[SummaryResponse])
async def get_summaries(
    limit: int = Query(50, ge=1, le=MAX_SUMMARIES_PAGE),
    db: DBSession = Depends(get_db),
):
    """
    List summarized videos, newest first.

    The cached page always holds the longest listing; ``limit`` only slices it.
    """
    key = page_key("/summaries")
    cached_page = cache_get(key)
    if cached_page is not None:
        return [SummaryResponse(**item, cached=True) for item in cached_page[:limit]]

    summaries = crud.list_summaries(db, limit=MAX_SUMMARIES_PAGE)
    page = [
        SummaryResponse(video_id=s.video_id, title=s.title, summary=s.summary, created_at=s.created_at)
        for s in summaries
    ]
    cache_set(key, [item.model_dump(mode="json", exclude={"cached"}) for item in page])
    return page[:limit]


@router.get("/summaries/{video_id}", response_model=SummaryResponse)
async def get_summary(
    video_id: str = Path(..., description="YouTube video ID"),
    db: DBSession = Depends(get_db),
):
    """Get the summary for a processed video by ID."""
    key = page_key(f"/{video_id}")
    cached_page = cache_get(key)
    if cached_page is not None:
        return SummaryResponse(**cached_page, cached=True)

    stored = crud.get_summary_page(db, video_id)
    logging.debug(f"Stored summary page: {stored}")
    if stored is None:
        raise HTTPException(status_code=404, detail="Video not found or not yet processed")

    page = SummaryResponse(
        video_id=stored.video_id,
        title=stored.title,
        summary=stored.summary,
        created_at=stored.created_at,
    )
    cache_set(key, page.model_dump(mode="json", exclude={"cached"}))
    return page


@router.post("/search", response_model=SearchResponse)
async def search(search_request: SearchRequest, db: DBSession = Depends(get_db)):
    """Search the embedded transcript of a video."""
    chunks = await search_transcript(
        db, search_request.video_id, search_request.query, search_request.limit
    )
    return SearchResponse(video_id=search_request.video_id, chunks=[c.content for c in chunks])
