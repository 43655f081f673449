"""
YouTube Video Summarization Application.

Submit a YouTube link, transcribe its audio, summarize the transcript with
one of several LLM backends and store everything for later retrieval.
"""

from tubesum.config import config

__version__ = config.APP_VERSION
