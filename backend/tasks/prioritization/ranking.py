# tasks/prioritization/ranking.py

from typing import Dict, List, Sequence

from .records import PRIORITY_HIGH, PRIORITY_LOW, PRIORITY_MEDIUM, PriorityScore

# Reporting only; the apply gate lives in planner.APPLY_CONFIDENCE_THRESHOLD.
REPORTING_CONFIDENCE_THRESHOLD = 0.8


def rank_scores(scores: Sequence[PriorityScore]) -> List[PriorityScore]:
    """
    Orders scores from highest to lowest.

    Equal scores keep the order in which the repository returned the tasks:
    the fetch position is an explicit secondary key rather than a side effect
    of sort stability.
    """
    indexed = list(enumerate(scores))
    indexed.sort(key=lambda item: (-item[1].score, item[0]))
    return [score for _, score in indexed]


def summarize(scores: Sequence[PriorityScore]) -> Dict[str, int]:
    changes = [s for s in scores if s.is_change]
    return {
        "totalTasks": len(scores),
        "highPriority": sum(1 for s in scores if s.suggested_priority == PRIORITY_HIGH),
        "mediumPriority": sum(1 for s in scores if s.suggested_priority == PRIORITY_MEDIUM),
        "lowPriority": sum(1 for s in scores if s.suggested_priority == PRIORITY_LOW),
        "changesRecommended": len(changes),
        "highConfidenceChanges": sum(
            1 for s in changes if s.confidence >= REPORTING_CONFIDENCE_THRESHOLD
        ),
    }
