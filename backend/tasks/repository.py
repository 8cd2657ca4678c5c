# tasks/repository.py
"""
Read/write contract between the Task table and the prioritization engine.
"""

import logging
from typing import List, Protocol

from django.db import DatabaseError, transaction

from .models import Task
from .prioritization.exceptions import PersistenceError, UpstreamFetchError
from .prioritization.planner import BulkUpdateBatch
from .prioritization.records import (
    ACTIVE_STATUSES,
    AssigneeRecord,
    ProjectRecord,
    Selector,
    TaskRecord,
)

logger = logging.getLogger(__name__)


class TaskRepository(Protocol):

    def fetch_working_set(self, selector: Selector) -> List[TaskRecord]:
        ...

    def bulk_update_priorities(self, batch: BulkUpdateBatch) -> int:
        ...


def to_record(task: Task) -> TaskRecord:
    """Flattens a Task row (with project and assignee loaded) into a TaskRecord."""
    project = task.project
    assignee = task.assignee
    return TaskRecord(
        id=str(task.id),
        title=task.title,
        status=task.status,
        priority=task.priority,
        due_date=task.due_date,
        start_date=task.start_date,
        estimated_hours=task.estimated_hours,
        actual_hours=task.actual_hours,
        assignee=AssigneeRecord(
            id=str(assignee.pk),
            name=assignee.display_name,
            role=assignee.role,
        ) if assignee is not None else None,
        project=ProjectRecord(
            id=str(project.pk),
            name=project.name,
            status=project.status,
            budget=project.budget,
            end_date=project.end_date,
        ),
    )


class DjangoTaskRepository:
    """
    ORM-backed repository. Created once by ``TasksConfig.ready()``.
    """

    def fetch_working_set(self, selector: Selector) -> List[TaskRecord]:
        """
        Loads the tasks covered by ``selector``, oldest first.

        An explicit project or id selection includes completed tasks; the
        default selection only covers open ones.
        """
        queryset = Task.objects.select_related('project', 'assignee')
        if selector.project_id:
            queryset = queryset.filter(project_id=selector.project_id)
        if selector.task_ids:
            queryset = queryset.filter(id__in=list(selector.task_ids))
        if selector.is_default:
            queryset = queryset.filter(status__in=ACTIVE_STATUSES)

        try:
            rows = list(queryset.order_by('created_at', 'id'))
        except DatabaseError as e:
            logger.exception(f"Working set fetch failed for {selector}: {e}")
            raise UpstreamFetchError("Could not load tasks for prioritization.") from e

        return [to_record(row) for row in rows]

    def bulk_update_priorities(self, batch: BulkUpdateBatch) -> int:
        """
        Writes the ``priority`` column of every task in ``batch``.

        Runs in one transaction: either every row is updated or none is.
        Returns the number of rows changed.
        """
        if batch.is_empty:
            return 0

        try:
            with transaction.atomic():
                updated = 0
                for operation in batch.operations:
                    updated += Task.objects.filter(id=operation.task_id).update(
                        priority=operation.priority
                    )
        except DatabaseError as e:
            logger.exception(f"Bulk priority update of {len(batch)} task(s) failed: {e}")
            raise PersistenceError("Could not persist task priorities.") from e

        return updated
