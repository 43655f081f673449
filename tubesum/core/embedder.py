"""
Embed transcripts for retrieval.
"""

from functools import lru_cache
from typing import List

from langchain_openai import OpenAIEmbeddings
from langchain_text_splitters import TokenTextSplitter
from sqlalchemy.orm import Session

from tubesum.config import config
from tubesum.db import crud
from tubesum.models.schemas import TranscriptChunk
from tubesum.utils.logger import logging


@lru_cache(maxsize=1)
def get_embedding_model() -> OpenAIEmbeddings:
    """Get the shared embedding model."""
    kwargs = {"api_key": config.OPENAI_API_KEY} if config.OPENAI_API_KEY else {}
    return OpenAIEmbeddings(model=config.EMBEDDING_MODEL, **kwargs)


def split_for_embedding(transcript: str) -> List[str]:
    """Split a transcript into the chunks that get embedded."""
    text_splitter = TokenTextSplitter(chunk_size=config.EMBEDDING_CHUNK_SIZE)
    return text_splitter.split_text(transcript)


async def embed_transcript(db: Session, video_id: str, transcript: str) -> bool:
    """
    Embed every chunk of a transcript and store chunk/vector rows.

    Args:
        db: Database session
        video_id: YouTube video ID
        transcript: Full transcript text

    Returns:
        True when all rows were stored, False otherwise
    """
    try:
        chunks = split_for_embedding(transcript)
        if not chunks:
            raise ValueError("Transcript produced no chunks to embed.")

        vectors = await get_embedding_model().aembed_documents(chunks)
        if not vectors:
            raise ValueError("An unknown error occurred while generating the embedding.")
    except Exception as e:
        logging.error(f"Error embedding transcript of {video_id}: {e}")
        return False

    stored = crud.insert_embeddings(db, video_id, chunks, vectors)
    if stored:
        logging.info(f"Stored {len(chunks)} embeddings for video {video_id}")
    return stored


async def search_transcript(db: Session, video_id: str, query: str, limit: int = 5) -> List[TranscriptChunk]:
    """Find the stored transcript chunks of a video closest to ``query``."""
    try:
        vector = await get_embedding_model().aembed_query(query)
        return crud.find_similar_chunks(db, video_id, vector, limit)
    except Exception as e:
        logging.error(f"Error searching transcript of {video_id}: {e}")
        return []
