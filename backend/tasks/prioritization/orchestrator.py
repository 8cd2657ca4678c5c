# tasks/prioritization/orchestrator.py

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Union

from django.apps import apps
from django.conf import settings
from django.utils import timezone

from .cache import (
    INVALIDATION_PATTERNS,
    DjangoPriorityCache,
    PriorityCacheStore,
    build_cache_key,
    get_cache_ttl,
)
from .exceptions import (
    ComputeError,
    InputError,
    PersistenceError,
    PrioritizationError,
    UpstreamFetchError,
)
from .planner import plan_updates
from .ranking import rank_scores, summarize
from .records import MODE_ANALYZE, MODE_APPLY, MODES, PriorityScore, Selector
from .scoring import score_tasks

# Configure logging for pipeline auditing
logger = logging.getLogger(__name__)

DEFAULT_WORKING_SET_WARN_SIZE = 500

SelectorInput = Union[Selector, Dict[str, Any], None]


class PriorityOrchestrator:
    """
    The central coordination layer for task prioritization.

    analyze: serve from cache when possible, otherwise fetch, score, rank and
    cache. apply: always recompute, then persist confident disagreements and
    invalidate dependent caches once the write has succeeded.

    Every call is stateless; the injected cache is the only thing that
    outlives it. Nothing is retried here.
    """

    def __init__(
        self,
        repository=None,
        cache: Optional[PriorityCacheStore] = None,
        clock: Optional[Callable[[], Any]] = None,
    ):
        self.repository = (
            repository if repository is not None
            else apps.get_app_config("tasks").task_repository
        )
        self.cache = cache if cache is not None else DjangoPriorityCache()
        self.clock = clock or timezone.now
        self.cache_ttl = get_cache_ttl()
        self.warn_size = int(
            getattr(settings, "PRIORITY_WORKING_SET_WARN_SIZE", DEFAULT_WORKING_SET_WARN_SIZE)
        )

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def analyze_or_apply(self, selector: SelectorInput, mode: str = MODE_ANALYZE) -> Dict[str, Any]:
        """
        Runs a prioritization request.

        Raises:
            InputError: invalid selector or mode (nothing fetched).
            UpstreamFetchError: the working set could not be loaded.
            PersistenceError: the apply write failed (caches left untouched).
        """
        parsed = self._parse_selector(selector)
        if mode not in MODES:
            raise InputError(f"Unknown mode {mode!r}; expected one of {', '.join(MODES)}.")

        started = time.monotonic()
        logger.info(
            f"Prioritization request: mode={mode} project={parsed.project_id or 'all'} "
            f"task_ids={len(parsed.task_ids)}"
        )

        if mode == MODE_APPLY:
            result = self._apply(parsed)
        else:
            result = self._analyze(parsed)

        summary = result["summary"]
        logger.info(
            f"Prioritization completed: mode={mode} tasks={summary['totalTasks']} "
            f"high={summary['highPriority']} cached={result['cached']} "
            f"duration_ms={int((time.monotonic() - started) * 1000)}"
        )
        return result

    def get_cached_result(self, selector: SelectorInput) -> Dict[str, Any]:
        """
        Read-only lookup. Never computes: a miss is reported as such.
        """
        parsed = self._parse_selector(selector)
        scores = self._read_cache(build_cache_key(parsed))
        if scores is None:
            return {
                "message": "No cached results found",
                "results": [],
                "cached": False,
            }
        return {
            "message": "Cached prioritization results",
            "results": [score.render() for score in scores],
            "cached": True,
        }

    # ------------------------------------------------------------------
    # Modes
    # ------------------------------------------------------------------

    def _analyze(self, selector: Selector) -> Dict[str, Any]:
        cache_key = build_cache_key(selector)
        cached_scores = self._read_cache(cache_key)
        if cached_scores is not None:
            logger.info(f"Prioritization served from cache: {cache_key}")
            return self._build_result(cached_scores, MODE_ANALYZE, cached=True)

        logger.info(f"Prioritization cache miss: {cache_key}")
        scores = self._compute(selector)
        self.cache.set(cache_key, [score.to_cache() for score in scores], self.cache_ttl)
        return self._build_result(scores, MODE_ANALYZE, cached=False)

    def _apply(self, selector: Selector) -> Dict[str, Any]:
        scores = self._compute(selector)
        batch = plan_updates(scores)

        applied = 0
        if not batch.is_empty:
            try:
                applied = self.repository.bulk_update_priorities(batch)
            except PrioritizationError:
                raise
            except Exception as e:
                logger.exception(f"Priority write failed: {e}")
                raise PersistenceError("Could not persist task priorities.") from e

            # Only reached once the write is confirmed.
            self.cache.invalidate(*INVALIDATION_PATTERNS)

            logger.info(
                f"Prioritization applied: updated={applied} planned={len(batch)} "
                f"analyzed={len(scores)}"
            )
        else:
            logger.info("Prioritization apply: no confident changes, nothing written")

        return self._build_result(scores, MODE_APPLY, cached=False, applied=applied)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _parse_selector(self, selector: SelectorInput) -> Selector:
        if isinstance(selector, Selector):
            return selector
        return Selector.from_payload(selector)

    def _compute(self, selector: Selector) -> List[PriorityScore]:
        try:
            tasks = self.repository.fetch_working_set(selector)
        except PrioritizationError:
            raise
        except Exception as e:
            logger.exception(f"Working set fetch failed: {e}")
            raise UpstreamFetchError("Could not load tasks for prioritization.") from e

        if len(tasks) > self.warn_size:
            logger.warning(
                f"Scoring {len(tasks)} tasks in one request; cross-task rules are "
                f"quadratic, narrow the selector to keep latency down"
            )

        try:
            scores = score_tasks(tasks, self.clock())
        except Exception as e:
            logger.exception(f"Scoring failed: {e}")
            raise ComputeError("Could not score tasks.") from e

        return rank_scores(scores)

    def _read_cache(self, cache_key: str) -> Optional[List[PriorityScore]]:
        cached = self.cache.get(cache_key)
        if cached is None:
            return None
        try:
            return [PriorityScore.from_cache(item) for item in cached]
        except (KeyError, TypeError, AttributeError) as e:
            # Unreadable entry: recompute rather than serve it.
            logger.warning(f"Discarding malformed cache entry {cache_key}: {e}")
            return None

    def _build_result(
        self,
        scores: List[PriorityScore],
        mode: str,
        cached: bool,
        applied: int = 0,
    ) -> Dict[str, Any]:
        summary = summarize(scores)
        summary["appliedChanges"] = applied

        if not scores:
            message = "No tasks found for prioritization"
        elif mode == MODE_APPLY:
            message = "Task prioritization analysis completed and applied"
        elif cached:
            message = "Task prioritization analysis completed (cached)"
        else:
            message = "Task prioritization analysis completed"

        return {
            "message": message,
            "mode": mode,
            "results": [score.render() for score in scores],
            "summary": summary,
            "cached": cached,
            "analysisDate": timezone.now().isoformat(),
        }
