"""Cache for materialized locale exports.

Entries are keyed by (locale, normalized contexts, version). When the
version counter advances, old entries are simply never asked for again and
expire through their TTL; nothing is evicted actively.

Redis is used when REDIS_URL is configured. Without it, entries live in a
per-process dictionary guarded by a lock. A failing backend never fails an
export: reads degrade to a miss and writes are skipped.
"""

import hashlib
import json
import logging
import threading
import time
from flask import current_app
from redis.exceptions import RedisError
from translation_hub.services.redis_client import get_redis

logger = logging.getLogger(__name__)

EXPORT_PREFIX = "export:"
DEFAULT_TTL = 1800  # 30 minutes

# cache_key -> (payload, expires_at)
_local_cache = {}
_local_lock = threading.Lock()


def normalize_contexts(contexts) -> list[str] | None:
    """Turn a context filter into a canonical, sorted list (None = all).

    Accepts a comma-separated string or an iterable of strings.
    """
    if contexts is None:
        return None
    if isinstance(contexts, str):
        contexts = contexts.split(',')
    cleaned = sorted({c.strip() for c in contexts if c and c.strip()})
    return cleaned or None


def build_cache_key(locale: str, contexts: list[str] | None, version: int) -> str:
    """Cache key for an export; `contexts` must already be normalized."""
    if contexts:
        digest = hashlib.md5(json.dumps(contexts).encode('utf-8')).hexdigest()
    else:
        digest = 'all'
    return f"{EXPORT_PREFIX}{locale}:v:{version}:{digest}"


def _ttl() -> int:
    try:
        return int(current_app.config.get('EXPORT_CACHE_TTL', DEFAULT_TTL))
    except RuntimeError:
        # Outside an application context
        return DEFAULT_TTL


def get_cached_export(locale: str, contexts: list[str] | None, version: int) -> list | None:
    """Return the cached export or None on a miss (or backend failure)."""
    cache_key = build_cache_key(locale, contexts, version)
    r = get_redis()

    if r is None:
        with _local_lock:
            item = _local_cache.get(cache_key)
            if item is None:
                return None
            payload, expires_at = item
            if time.time() > expires_at:
                del _local_cache[cache_key]
                return None
            return payload

    try:
        raw = r.get(cache_key)
    except RedisError as e:
        logger.warning(f"Export cache read failed for {cache_key}: {e}")
        return None
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning(f"Discarding unreadable export cache entry {cache_key}")
        return None


def store_export(locale: str, contexts: list[str] | None, version: int, payload: list) -> bool:
    """Store an export for TTL seconds. Returns False if it was not cached."""
    cache_key = build_cache_key(locale, contexts, version)
    ttl = _ttl()
    r = get_redis()

    if r is None:
        with _local_lock:
            _purge_expired_locked()
            _local_cache[cache_key] = (payload, time.time() + ttl)
        return True

    try:
        r.setex(cache_key, ttl, json.dumps(payload))
        return True
    except RedisError as e:
        logger.warning(f"Export cache write failed for {cache_key}: {e}")
        return False


def _purge_expired_locked():
    now = time.time()
    expired = [k for k, (_, expires_at) in _local_cache.items() if now > expires_at]
    for k in expired:
        del _local_cache[k]


def clear_local_cache():
    """Empty the in-process cache."""
    with _local_lock:
        _local_cache.clear()
