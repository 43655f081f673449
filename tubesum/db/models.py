"""
SQLAlchemy models for the tubesum database.
"""

import datetime
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from pgvector.sqlalchemy import Vector

from tubesum.config import config
from tubesum.db.database import Base


class Video(Base):
    """A YouTube video and, once acquired, its transcript."""
    __tablename__ = "videos"

    videoid = Column(String(20), primary_key=True)  # YouTube video ID
    videotitle = Column(String(255), nullable=False)
    transcript = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    # Relationships
    summary = relationship("Summary", back_populates="video", uselist=False, cascade="all, delete-orphan")
    embeddings = relationship("EmbeddingChunk", back_populates="video", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Video(videoid='{self.videoid}', videotitle='{self.videotitle}')>"


class Summary(Base):
    """At most one summary per video."""
    __tablename__ = "summaries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    videoid = Column(String(20), ForeignKey("videos.videoid", ondelete="CASCADE"), unique=True, nullable=False)
    summary = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    # Relationships
    video = relationship("Video", back_populates="summary")

    def __repr__(self):
        return f"<Summary(id={self.id}, videoid='{self.videoid}')>"


class EmbeddingChunk(Base):
    """A transcript chunk and its embedding vector."""
    __tablename__ = "embeddings"
    __table_args__ = (
        # a transcript is embedded once; a second chunk set for the same video is rejected
        UniqueConstraint("videoid", "chunk_index", name="uq_embeddings_video_chunk"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    videoid = Column(String(20), ForeignKey("videos.videoid", ondelete="CASCADE"), nullable=False, index=True)
    chunk_index = Column(Integer, nullable=False)
    embedding = Column(Vector(config.EMBEDDING_DIMENSIONS), nullable=False)
    content = Column(Text, nullable=False)

    # Relationships
    video = relationship("Video", back_populates="embeddings")

    def __repr__(self):
        return f"<EmbeddingChunk(id={self.id}, videoid='{self.videoid}')>"
