"""
Page render cache for the tubesum API.

GET routes store their rendered JSON under ``page:<path>``. Writes to a
summary call ``revalidate_path`` for every page that shows it, so the next
read renders from the database again. Redis is used when ``REDIS_URL`` is
configured; otherwise pages live in this process until their TTL runs out.
"""

import json
import time
from typing import Any, Dict, Optional, Tuple

import redis

from tubesum.config import config
from tubesum.utils.logger import logging

PAGE_PREFIX = "page"

_redis_client: Optional[redis.Redis] = None

# key -> (expiry timestamp, serialized page)
_memory_pages: Dict[str, Tuple[float, str]] = {}


def setup_redis_cache(redis_url: str) -> bool:
    """Point the page cache at Redis. False leaves the in-process store active."""
    global _redis_client

    try:
        client = redis.from_url(redis_url)
        client.ping()
    except (redis.RedisError, ValueError) as e:
        logging.error(f"Redis at {redis_url} unreachable, caching pages in memory: {e}")
        _redis_client = None
        return False

    _redis_client = client
    logging.info("Page cache backed by Redis")
    return True


def is_redis_available() -> bool:
    return _redis_client is not None


def page_key(path: str) -> str:
    """Cache key for a rendered page path such as ``/summaries``."""
    return f"{PAGE_PREFIX}:{path}"


def cache_set(key: str, value: Any, expires: int = config.PAGE_CACHE_TTL) -> bool:
    """Store a JSON-serializable page render for ``expires`` seconds."""
    try:
        payload = json.dumps(value)
    except (TypeError, ValueError) as e:
        logging.error(f"Page {key} is not JSON serializable: {e}")
        return False

    if _redis_client is not None:
        try:
            return bool(_redis_client.setex(key, expires, payload))
        except redis.RedisError as e:
            logging.error(f"Redis write of {key} failed: {e}")

    _memory_pages[key] = (time.time() + expires, payload)
    return True


def cache_get(key: str) -> Optional[Any]:
    """Cached page render, or None when missing or expired."""
    if _redis_client is not None:
        try:
            payload = _redis_client.get(key)
            if payload:
                return json.loads(payload)
        except redis.RedisError as e:
            logging.error(f"Redis read of {key} failed: {e}")

    entry = _memory_pages.get(key)
    if entry is None:
        return None

    expires_at, payload = entry
    if expires_at <= time.time():
        del _memory_pages[key]
        return None
    return json.loads(payload)


def cache_delete(key: str) -> bool:
    """Drop a page render from every store. True when something was removed."""
    removed = _memory_pages.pop(key, None) is not None

    if _redis_client is not None:
        try:
            removed = bool(_redis_client.delete(key)) or removed
        except redis.RedisError as e:
            logging.error(f"Redis delete of {key} failed: {e}")

    return removed


def revalidate_path(path: str) -> None:
    """Force the next request for ``path`` to render from the database."""
    if cache_delete(page_key(path)):
        logging.debug(f"Revalidated cached page {path}")


def clear_memory_cache() -> None:
    _memory_pages.clear()
