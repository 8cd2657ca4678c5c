# tasks/prioritization/cache.py

import fnmatch
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from django.conf import settings
from django.core.cache import caches

from .records import Selector

logger = logging.getLogger(__name__)

# Analysis results live inside the "tasks:" namespace so that the
# post-apply invalidation of "tasks:*" also drops them.
KEY_PREFIX = "tasks:priority"
DEFAULT_TTL = 60 * 60

INVALIDATION_PATTERNS = ("tasks:*", "dashboard:*")


def build_cache_key(selector: Selector) -> str:
    """
    Deterministic key for a selector.

    Task ids are already canonical and sorted on the selector, so the same set
    of ids always produces the same key whatever order the caller sent.
    """
    project_part = selector.project_id or "all"
    tasks_part = ",".join(selector.task_ids) or "all"
    return f"{KEY_PREFIX}:{project_part}:{tasks_part}"


class PriorityCacheStore(Protocol):
    """Capability the orchestrator needs from a cache backend."""

    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any, ttl: int) -> None:
        ...

    def invalidate(self, *patterns: str) -> None:
        ...


class DjangoPriorityCache:
    """
    Cache store backed by Django's cache framework.

    Wildcard invalidation needs django-redis (``delete_pattern``). Backends
    without pattern support are cleared entirely, which only costs
    recomputation since the cache is advisory.

    Backend failures are logged and reported as a miss; they never fail a
    prioritization request.
    """

    def __init__(self, cache_alias: str = "default"):
        self.cache_alias = cache_alias

    @property
    def backend(self):
        return caches[self.cache_alias]

    def get(self, key: str) -> Optional[Any]:
        try:
            value = self.backend.get(key)
        except Exception as e:
            logger.error(f"Priority cache retrieval failure for {key}: {e}")
            return None
        if value is not None:
            logger.debug(f"Priority cache hit: {key}")
        return value

    def set(self, key: str, value: Any, ttl: int) -> None:
        try:
            self.backend.set(key, value, timeout=ttl)
        except Exception as e:
            logger.error(f"Priority cache persistence failure for {key}: {e}")

    def invalidate(self, *patterns: str) -> None:
        """Drops every key matching any of ``patterns``; at most one clear() without pattern support."""
        backend = self.backend
        try:
            delete_pattern = getattr(backend, "delete_pattern", None)
            if delete_pattern is not None:
                for pattern in patterns:
                    delete_pattern(pattern)
            elif patterns:
                logger.warning(
                    f"Cache backend {type(backend).__name__} has no pattern support; "
                    f"clearing it to invalidate {', '.join(patterns)}"
                )
                backend.clear()
        except Exception as e:
            logger.error(f"Priority cache invalidation failure for {patterns}: {e}")


class InMemoryPriorityCache:
    """
    Process-local store with TTL and glob-style invalidation.

    Used by tests and single-process deployments.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl: int) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl)

    def invalidate(self, *patterns: str) -> None:
        with self._lock:
            for pattern in patterns:
                for key in fnmatch.filter(list(self._entries), pattern):
                    del self._entries[key]

    def keys(self):
        with self._lock:
            return sorted(self._entries)


def get_cache_ttl() -> int:
    return int(getattr(settings, "PRIORITY_CACHE_TTL", DEFAULT_TTL))
