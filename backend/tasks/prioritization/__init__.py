# tasks/prioritization/__init__.py
"""
Prioritization Engine Package
=============================

Scores production tasks, suggests a priority tier for each and, on request,
writes confident disagreements back to the task table.

Modules:
--------
- records: Value objects (TaskRecord, PriorityScore, Selector)
- scoring: Deterministic eight-rule scoring engine
- ranking: Ordering and summary counts
- planner: Selection of tasks whose priority should be rewritten
- cache: Cache capability (Django cache framework or in-memory)
- orchestrator: Request coordination (analyze / apply / cached read)
- celery_tasks: Background apply via Celery
- exceptions: Error taxonomy

Result contract:
----------------
    {
        "message": str,
        "mode": "analyze" | "apply",
        "results": [
            {
                "taskId": str,
                "currentPriority": str,
                "suggestedPriority": str,
                "score": int,
                "reasoning": [str, ...],
                "confidence": float
            }
        ],
        "summary": {
            "totalTasks", "highPriority", "mediumPriority", "lowPriority",
            "changesRecommended", "highConfidenceChanges", "appliedChanges"
        },
        "cached": bool,
        "analysisDate": str
    }

Usage:
------
    from tasks.prioritization import PriorityOrchestrator

    orchestrator = PriorityOrchestrator()
    result = orchestrator.analyze_or_apply({"projectId": project_id}, "analyze")
"""

from .cache import DjangoPriorityCache, InMemoryPriorityCache, build_cache_key
from .exceptions import (
    ComputeError,
    InputError,
    PersistenceError,
    PrioritizationError,
    UpstreamFetchError,
)
from .orchestrator import PriorityOrchestrator
from .planner import APPLY_CONFIDENCE_THRESHOLD, BulkUpdateBatch, PriorityUpdate, plan_updates
from .ranking import REPORTING_CONFIDENCE_THRESHOLD, rank_scores, summarize
from .records import (
    MODE_ANALYZE,
    MODE_APPLY,
    AssigneeRecord,
    PriorityScore,
    ProjectRecord,
    ReasonEntry,
    Selector,
    TaskRecord,
)
from .scoring import score_task, score_tasks

__all__ = [
    # Core classes
    "PriorityOrchestrator",
    "DjangoPriorityCache",
    "InMemoryPriorityCache",
    # Records
    "AssigneeRecord",
    "ProjectRecord",
    "TaskRecord",
    "PriorityScore",
    "ReasonEntry",
    "Selector",
    "BulkUpdateBatch",
    "PriorityUpdate",
    # Functions
    "build_cache_key",
    "plan_updates",
    "rank_scores",
    "score_task",
    "score_tasks",
    "summarize",
    # Errors
    "PrioritizationError",
    "InputError",
    "UpstreamFetchError",
    "ComputeError",
    "PersistenceError",
    # Constants
    "APPLY_CONFIDENCE_THRESHOLD",
    "REPORTING_CONFIDENCE_THRESHOLD",
    "MODE_ANALYZE",
    "MODE_APPLY",
]
