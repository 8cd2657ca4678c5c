# tasks/prioritization/planner.py
"""
Turns scored tasks into the minimal set of priority writes.

Only tasks whose suggested tier differs from the stored one, with enough
confidence, are selected. Every operation touches the ``priority`` field of a
single task and nothing else, so concurrent edits to other fields survive.
Because a successful write makes ``current == suggested``, planning again over
a fresh score set selects nothing.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from .records import PriorityScore

# Gate for persisting a change. Deliberately lower than the reporting
# threshold in ranking.REPORTING_CONFIDENCE_THRESHOLD.
APPLY_CONFIDENCE_THRESHOLD = 0.7


@dataclass(frozen=True)
class PriorityUpdate:
    task_id: str
    priority: str


@dataclass
class BulkUpdateBatch:
    operations: List[PriorityUpdate] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.operations)

    @property
    def is_empty(self) -> bool:
        return not self.operations

    @property
    def task_ids(self) -> List[str]:
        return [op.task_id for op in self.operations]


def should_apply(score: PriorityScore) -> bool:
    return score.is_change and score.confidence >= APPLY_CONFIDENCE_THRESHOLD


def plan_updates(scores: Sequence[PriorityScore]) -> BulkUpdateBatch:
    """Builds one update per selected task, in ranking order."""
    return BulkUpdateBatch(
        operations=[
            PriorityUpdate(task_id=score.task_id, priority=score.suggested_priority)
            for score in scores
            if should_apply(score)
        ]
    )
