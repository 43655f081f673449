"""
Orchestration of the submit, summarize and regenerate flows.

Each flow is a chain of single-attempt external calls. Any failure is
logged and reported to the caller as ``None``/``False``.
"""

import traceback
from typing import Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tubesum.api.schemas import RegenerateForm, SummarizeRequest, VideoSubmissionForm
from tubesum.core.embedder import embed_transcript
from tubesum.core.summarizer import summarize_transcript
from tubesum.core.transcriber import transcribe_video
from tubesum.core.video_resolver import parse_video_id, resolve_video
from tubesum.db import crud
from tubesum.db.database import SessionLocal
from tubesum.models.schemas import (
    RegenerateResult,
    SubmissionResult,
    TranscriptState,
)
from tubesum.utils.errors import NotFoundError, TranscriptionError
from tubesum.utils.logger import logging


async def handle_initial_form_submit(db: Session, form: VideoSubmissionForm) -> Optional[SubmissionResult]:
    """
    Resolve a submitted link and acquire its transcript.

    A stored transcript (and summary) is reused; only a video with nothing
    stored is transcribed, and its transcript is stored right away.
    """
    try:
        video_id = parse_video_id(form.link)
        video_info = await resolve_video(video_id)
        stored = crud.get_stored_transcript(db, video_id)

        if stored.state is TranscriptState.SUMMARIZED:
            summary, transcript = stored.summary, stored.transcript
        elif stored.state is TranscriptState.TRANSCRIBED:
            summary, transcript = None, stored.transcript
        else:
            summary, transcript = None, await transcribe_video(form.link)
            if not transcript:
                raise TranscriptionError("Couldn't transcribe the Video.")
            if not crud.insert_video(db, video_id, video_info.title, transcript):
                logging.warning(f"Transcript of {video_id} could not be stored, it will be stored with its summary")

        return SubmissionResult(
            video_id=video_id,
            video_title=video_info.title,
            video_author=video_info.author,
            summary=summary,
            transcript=transcript,
        )
    except Exception as e:
        logging.error(f"Error handling submission of {form.link}: {e}")
        logging.error(traceback.format_exc())
        return None


async def handle_regenerate_summary(db: Session, form: RegenerateForm) -> Union[RegenerateResult, bool]:
    """Collect metadata and the stored transcript of a video to summarize it again."""
    try:
        transcript = crud.get_transcript(db, form.videoid)
        if not transcript:
            raise NotFoundError("Couldn't find the transcription of this video.")

        video_info = await resolve_video(form.videoid)

        return RegenerateResult(
            video_id=form.videoid,
            transcript=transcript,
            video_title=video_info.title,
            video_author=video_info.author,
        )
    except Exception as e:
        logging.error(f"Error preparing regeneration of {form.videoid}: {e}")
        return False


async def summarize_video(db: Session, request: SummarizeRequest) -> Optional[SubmissionResult]:
    """Submit a link, summarize its transcript and persist both."""
    submission = await handle_initial_form_submit(db, request)
    if submission is None:
        return None
    if submission.summary:
        logging.info(f"Using stored summary for video {submission.video_id}")
        return submission

    if not crud.insert_video(db, submission.video_id, submission.video_title, submission.transcript):
        return None

    summary = await summarize_transcript(
        submission.transcript,
        request.model,
        submission.video_title,
        submission.video_author,
    )
    if summary is None:
        return None
    if crud.insert_summary(db, submission.video_id, summary) is None:
        return None

    return submission.model_copy(update={"summary": summary})


async def regenerate_summary(db: Session, form: RegenerateForm) -> Optional[SubmissionResult]:
    """Summarize a stored transcript again and replace the stored summary."""
    data = await handle_regenerate_summary(db, form)
    if not data:
        return None

    summary = await summarize_transcript(data.transcript, form.model, data.video_title, data.video_author)
    if summary is None:
        return None

    if not crud.update_summary(db, data.video_id, summary):
        if crud.insert_summary(db, data.video_id, summary) is None:
            return None

    return SubmissionResult(
        video_id=data.video_id,
        video_title=data.video_title,
        video_author=data.video_author,
        summary=summary,
        transcript=data.transcript,
    )


async def embed_in_background(video_id: str, transcript: str) -> bool:
    """Embed a transcript with its own session, once per video."""
    db = SessionLocal()
    try:
        if crud.has_embeddings(db, video_id):
            logging.debug(f"Embeddings already stored for video {video_id}")
            return True
        return await embed_transcript(db, video_id, transcript)
    except SQLAlchemyError as e:
        logging.error(f"Error embedding video {video_id} in the background: {e}")
        return False
    finally:
        db.close()
