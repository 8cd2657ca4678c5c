# tasks/tests/helpers.py
"""Builders shared by the prioritization tests."""

from __future__ import annotations

import dataclasses
import datetime
import threading
import uuid
from typing import List, Optional

from tasks.prioritization.planner import BulkUpdateBatch
from tasks.prioritization.records import (
    ACTIVE_STATUSES,
    AssigneeRecord,
    ProjectRecord,
    Selector,
    TaskRecord,
)

# Fixed reference: January 15, 2024 at noon UTC
FIXED_NOW = datetime.datetime(2024, 1, 15, 12, 0, 0, tzinfo=datetime.timezone.utc)


def rid(n: int) -> str:
    """Deterministic UUID string, as the repository hands them out."""
    return str(uuid.UUID(int=n))


def make_assignee(n: int = 1, role: str = "crew_member") -> AssigneeRecord:
    return AssigneeRecord(id=rid(1000 + n), name=f"Crew {n}", role=role)


def make_project(
    n: int = 1,
    budget=0,
    ends_in: Optional[datetime.timedelta] = datetime.timedelta(days=90),
    now: datetime.datetime = FIXED_NOW,
) -> ProjectRecord:
    return ProjectRecord(
        id=rid(2000 + n),
        name=f"Production {n}",
        status="active",
        budget=budget,
        end_date=(now + ends_in) if ends_in is not None else None,
    )


def make_task(
    n: int = 1,
    *,
    due_in: Optional[datetime.timedelta] = datetime.timedelta(days=30),
    starts_in: Optional[datetime.timedelta] = None,
    status: str = "todo",
    priority: str = "medium",
    estimated_hours=5,
    project: Optional[ProjectRecord] = None,
    assignee: Optional[AssigneeRecord] = None,
    now: datetime.datetime = FIXED_NOW,
    **overrides,
) -> TaskRecord:
    task = TaskRecord(
        id=rid(n),
        title=f"Task {n}",
        status=status,
        priority=priority,
        due_date=(now + due_in) if due_in is not None else None,
        start_date=(now + starts_in) if starts_in is not None else None,
        estimated_hours=estimated_hours,
        actual_hours=0,
        project=project or make_project(),
        assignee=assignee,
    )
    return dataclasses.replace(task, **overrides) if overrides else task


class InMemoryTaskRepository:
    """
    Repository stand-in keeping TaskRecords in a list (fetch order = list order).
    """

    def __init__(self, tasks: List[TaskRecord]):
        self.tasks = list(tasks)
        self.fetch_calls = 0
        self.write_calls = 0
        self.fail_fetch: Optional[Exception] = None
        self.fail_write: Optional[Exception] = None
        self._lock = threading.Lock()

    def fetch_working_set(self, selector: Selector) -> List[TaskRecord]:
        with self._lock:
            self.fetch_calls += 1
            if self.fail_fetch is not None:
                raise self.fail_fetch
            selected = []
            for task in self.tasks:
                if selector.project_id and task.project.id != selector.project_id:
                    continue
                if selector.task_ids and task.id not in selector.task_ids:
                    continue
                if selector.is_default and task.status not in ACTIVE_STATUSES:
                    continue
                selected.append(task)
            return selected

    def bulk_update_priorities(self, batch: BulkUpdateBatch) -> int:
        with self._lock:
            self.write_calls += 1
            if self.fail_write is not None:
                raise self.fail_write
            wanted = {op.task_id: op.priority for op in batch.operations}
            updated = 0
            for index, task in enumerate(self.tasks):
                if task.id in wanted:
                    self.tasks[index] = dataclasses.replace(task, priority=wanted[task.id])
                    updated += 1
            return updated

    def get(self, task_id: str) -> TaskRecord:
        return next(task for task in self.tasks if task.id == task_id)
