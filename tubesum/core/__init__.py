"""
Core functionality of tubesum.

This package contains modules for resolving YouTube links, acquiring
transcripts, summarizing and embedding them.
"""
