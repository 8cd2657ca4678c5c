# tasks/prioritization/records.py
"""
Value objects exchanged between the repository and the prioritization engine.

The engine never sees ORM instances: the repository flattens each Task row
(joined with its project and assignee) into an immutable ``TaskRecord``.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from .exceptions import InputError

DateLike = Union[datetime, date, str, None]

PRIORITY_LOW = "low"
PRIORITY_MEDIUM = "medium"
PRIORITY_HIGH = "high"

STATUS_TODO = "todo"
STATUS_IN_PROGRESS = "in_progress"
STATUS_REVIEW = "review"
STATUS_COMPLETED = "completed"

ACTIVE_STATUSES = (STATUS_TODO, STATUS_IN_PROGRESS, STATUS_REVIEW)

MODE_ANALYZE = "analyze"
MODE_APPLY = "apply"
MODES = (MODE_ANALYZE, MODE_APPLY)


@dataclass(frozen=True)
class AssigneeRecord:
    id: str
    name: str
    role: str


@dataclass(frozen=True)
class ProjectRecord:
    id: str
    name: str
    status: str
    budget: Any
    end_date: DateLike


@dataclass(frozen=True)
class TaskRecord:
    id: str
    title: str
    status: str
    priority: str
    due_date: DateLike
    project: ProjectRecord
    assignee: Optional[AssigneeRecord] = None
    start_date: DateLike = None
    estimated_hours: Any = 0
    actual_hours: Any = 0


@dataclass(frozen=True)
class ReasonEntry:
    """One triggered scoring rule; ``detail`` is the human readable part."""

    rule: str
    detail: str

    def render(self) -> str:
        return self.detail


@dataclass
class PriorityScore:
    task_id: str
    current_priority: str
    suggested_priority: str
    score: int
    confidence: float
    reasoning: List[ReasonEntry] = field(default_factory=list)

    @property
    def is_change(self) -> bool:
        return self.suggested_priority != self.current_priority

    def to_cache(self) -> Dict[str, Any]:
        """Plain-dict form that keeps reasoning structured."""
        return {
            "task_id": self.task_id,
            "current_priority": self.current_priority,
            "suggested_priority": self.suggested_priority,
            "score": self.score,
            "confidence": self.confidence,
            "reasoning": [{"rule": r.rule, "detail": r.detail} for r in self.reasoning],
        }

    @classmethod
    def from_cache(cls, data: Dict[str, Any]) -> "PriorityScore":
        return cls(
            task_id=data["task_id"],
            current_priority=data["current_priority"],
            suggested_priority=data["suggested_priority"],
            score=data["score"],
            confidence=data["confidence"],
            reasoning=[ReasonEntry(r["rule"], r["detail"]) for r in data.get("reasoning", [])],
        )

    def render(self) -> Dict[str, Any]:
        """Output-boundary representation, reasoning flattened to text."""
        return {
            "taskId": self.task_id,
            "currentPriority": self.current_priority,
            "suggestedPriority": self.suggested_priority,
            "score": self.score,
            "reasoning": [entry.render() for entry in self.reasoning],
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class Selector:
    """
    Which tasks a prioritization request covers.

    Neither field set means "every non-completed task".
    """

    project_id: Optional[str] = None
    task_ids: Tuple[str, ...] = ()

    @property
    def is_default(self) -> bool:
        return self.project_id is None and not self.task_ids

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]) -> "Selector":
        """
        Validates a ``{"projectId": ..., "taskIds": [...]}`` mapping.

        Raises:
            InputError: unknown keys, wrong types or malformed identifiers.
        """
        if payload is None:
            return cls()
        if not isinstance(payload, dict):
            raise InputError("Selector must be an object with 'projectId' and/or 'taskIds'.")

        unknown = set(payload) - {"projectId", "taskIds"}
        if unknown:
            raise InputError(f"Unknown selector field(s): {', '.join(sorted(unknown))}.")

        project_id = payload.get("projectId")
        if project_id in (None, ""):
            project_id = None
        elif not isinstance(project_id, str):
            raise InputError("'projectId' must be a string.")
        else:
            project_id = _canonical_id(project_id, "projectId")

        task_ids = payload.get("taskIds")
        if task_ids is None:
            task_ids = []
        if isinstance(task_ids, str) or not isinstance(task_ids, (list, tuple)):
            raise InputError("'taskIds' must be a list of strings.")
        canonical = set()
        for task_id in task_ids:
            if not isinstance(task_id, str):
                raise InputError("'taskIds' must be a list of strings.")
            canonical.add(_canonical_id(task_id, "taskIds"))

        return cls(project_id=project_id, task_ids=tuple(sorted(canonical)))


def _canonical_id(value: str, field_name: str) -> str:
    try:
        return str(uuid.UUID(value.strip()))
    except (ValueError, AttributeError):
        raise InputError(f"'{field_name}' contains a malformed identifier: {value!r}.") from None
