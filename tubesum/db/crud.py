"""
CRUD operations for the tubesum database.

Every operation here is a component boundary: database errors are rolled
back, logged and turned into a ``None``/``False`` sentinel instead of being
raised to the caller.
"""

from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tubesum.db.models import Video, Summary, EmbeddingChunk
from tubesum.models.schemas import StoredTranscript, TranscriptChunk, VideoSummary
from tubesum.utils.caching import revalidate_path
from tubesum.utils.logger import logging


def get_video(db: Session, video_id: str) -> Optional[Video]:
    """Get a video by ID."""
    return db.get(Video, video_id)


def insert_video(db: Session, video_id: str, title: str, transcript: str) -> bool:
    """
    Store a video with its transcript.

    An existing transcript is never replaced; a row without one gets it filled in.
    """
    try:
        video = get_video(db, video_id)
        if video is None:
            db.add(Video(videoid=video_id, videotitle=title, transcript=transcript))
            db.commit()
        elif not video.transcript:
            video.transcript = transcript
            db.commit()
        return True
    except IntegrityError:
        # inserted concurrently by another request
        db.rollback()
        return True
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error storing video {video_id}: {e}")
        return False


def insert_summary(db: Session, video_id: str, summary: str) -> Optional[str]:
    """
    Create the summary for a video.

    Returns the video id on success. A summary is only accepted for a video
    whose transcript is already stored.
    """
    try:
        video = get_video(db, video_id)
        if video is None or not video.transcript:
            logging.error(f"Refusing to store a summary for {video_id}: no stored transcript")
            return None

        db.add(Summary(videoid=video_id, summary=summary))
        db.commit()
        return video_id
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error storing summary for {video_id}: {e}")
        return None
    finally:
        revalidate_path("/")
        revalidate_path("/summaries")
        revalidate_path(f"/{video_id}")


def update_summary(db: Session, video_id: str, summary: str) -> bool:
    """Replace the stored summary of a video. False when no summary row exists."""
    try:
        updated = (
            db.query(Summary)
            .filter(Summary.videoid == video_id)
            .update({Summary.summary: summary}, synchronize_session=False)
        )
        db.commit()
        if not updated:
            logging.warning(f"No summary stored for {video_id}, nothing to update")
        return bool(updated)
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error updating summary for {video_id}: {e}")
        return False
    finally:
        revalidate_path("/")
        revalidate_path("/summaries")
        revalidate_path(f"/{video_id}")


def get_stored_transcript(db: Session, video_id: str) -> StoredTranscript:
    """Look up the transcript and summary of a video with a single outer join."""
    row = (
        db.query(Video.transcript, Summary.summary)
        .outerjoin(Summary, Video.videoid == Summary.videoid)
        .filter(Video.videoid == video_id)
        .first()
    )
    if row is None:
        return StoredTranscript.from_row(None, None)
    return StoredTranscript.from_row(row.transcript, row.summary)


def get_transcript(db: Session, video_id: str) -> Optional[str]:
    """Get the stored transcript of a video, if any."""
    row = db.query(Video.transcript).filter(Video.videoid == video_id).first()
    return row.transcript if row else None


def insert_embeddings(
    db: Session,
    video_id: str,
    chunks: Sequence[str],
    vectors: Sequence[Sequence[float]],
) -> bool:
    """
    Store one embedding row per transcript chunk, numbered in transcript order.

    When another writer already stored the chunk set of this video the
    unique (videoid, chunk_index) constraint rejects the batch and the
    stored set is kept.
    """
    if len(chunks) != len(vectors):
        logging.error(
            f"Got {len(vectors)} embeddings for {len(chunks)} chunks of video {video_id}"
        )
        return False

    try:
        db.add_all([
            EmbeddingChunk(videoid=video_id, chunk_index=index, embedding=list(vector), content=chunk)
            for index, (chunk, vector) in enumerate(zip(chunks, vectors))
        ])
        db.commit()
        return True
    except IntegrityError as e:
        db.rollback()
        if has_embeddings(db, video_id):
            logging.info(f"Embeddings of {video_id} were stored concurrently, keeping them")
            return True
        logging.error(f"Error storing embeddings for {video_id}: {e}")
        return False
    except (SQLAlchemyError, ValueError) as e:
        db.rollback()
        logging.error(f"Error storing embeddings for {video_id}: {e}")
        return False


def has_embeddings(db: Session, video_id: str) -> bool:
    """Whether any embedding rows are stored for a video."""
    return db.query(EmbeddingChunk.id).filter(EmbeddingChunk.videoid == video_id).first() is not None


def find_similar_chunks(
    db: Session, video_id: str, vector: Sequence[float], limit: int = 5
) -> List[TranscriptChunk]:
    """Nearest stored chunks of a video by cosine distance."""
    distance = EmbeddingChunk.embedding.cosine_distance(list(vector))
    rows = (
        db.query(EmbeddingChunk.videoid, EmbeddingChunk.content, distance.label("distance"))
        .filter(EmbeddingChunk.videoid == video_id)
        .order_by(distance)
        .limit(limit)
        .all()
    )
    return [
        TranscriptChunk(video_id=row.videoid, content=row.content, distance=row.distance)
        for row in rows
    ]


def get_summary_page(db: Session, video_id: str) -> Optional[VideoSummary]:
    """Read model behind the ``/<videoId>`` page."""
    row = (
        db.query(Video.videoid, Video.videotitle, Summary.summary, Summary.updated_at)
        .outerjoin(Summary, Video.videoid == Summary.videoid)
        .filter(Video.videoid == video_id)
        .first()
    )
    if row is None:
        return None
    return VideoSummary(
        video_id=row.videoid,
        title=row.videotitle,
        summary=row.summary,
        created_at=row.updated_at,
    )


def list_summaries(db: Session, limit: int = 50) -> List[VideoSummary]:
    """Most recently summarized videos, newest first."""
    rows = (
        db.query(Video.videoid, Video.videotitle, Summary.summary, Summary.updated_at)
        .join(Summary, Video.videoid == Summary.videoid)
        .order_by(Summary.updated_at.desc())
        .limit(limit)
        .all()
    )
    return [
        VideoSummary(
            video_id=row.videoid,
            title=row.videotitle,
            summary=row.summary,
            created_at=row.updated_at,
        )
        for row in rows
    ]
