# tasks/prioritization/scoring.py
"""
Deterministic priority scoring.

Each task is scored against the whole working set: eight additive rules turn
deadlines, effort, project weight and crew workload into an integer score,
which maps onto a priority tier with a confidence value.

Rules 4 (dependency fan-out) and 7 (assignee workload) scan the full working
set for every task, so a request costs O(n^2). Fine for a few hundred tasks;
larger sets should be narrowed with a selector.
"""

import math
from datetime import date, datetime, time, timezone
from typing import List, Optional, Sequence, Tuple

from django.utils.dateparse import parse_date, parse_datetime

from .records import (
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_REVIEW,
    DateLike,
    PriorityScore,
    ReasonEntry,
    TaskRecord,
)

SECONDS_PER_DAY = 24 * 60 * 60

# (max days until due, points, reason)
DUE_DATE_BUCKETS = (
    (1, 40, "Due within 24 hours - critical urgency"),
    (3, 30, "Due within 3 days - high urgency"),
    (7, 20, "Due within a week - moderate urgency"),
    (14, 10, "Due within 2 weeks - low urgency"),
)

PROJECT_DEADLINE_BUCKETS = (
    (7, 25, "Project deadline approaching - high impact"),
    (14, 15, "Project deadline within 2 weeks - moderate impact"),
    (30, 10, "Project deadline within a month - low impact"),
)

# (hours strictly above, points, reason)
COMPLEXITY_BUCKETS = (
    (40, 20, "High complexity task - requires early attention"),
    (20, 15, "Medium complexity task"),
    (8, 10, "Standard complexity task"),
)

BUDGET_BUCKETS = (
    (50000, 10, "High-budget project - business critical"),
    (20000, 7, "Medium-budget project - important"),
    (10000, 5, "Standard budget project"),
)

STATUS_POINTS = {
    STATUS_IN_PROGRESS: (10, "Already in progress - maintain momentum"),
    STATUS_REVIEW: (8, "In review - close to completion"),
}

OVERDUE_POINTS = 50

HIGH_TIER_MIN_SCORE = 70
MEDIUM_TIER_MIN_SCORE = 40

BASE_CONFIDENCE = {
    PRIORITY_HIGH: 0.9,
    PRIORITY_MEDIUM: 0.8,
    PRIORITY_LOW: 0.7,
}
CONFIDENCE_PENALTY = 0.1


def to_datetime(value: DateLike) -> Optional[datetime]:
    """
    Coerces a datetime, date or ISO-8601 string to an aware datetime.

    Naive values are read as UTC. Returns None for anything unparsable.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        try:
            parsed = parse_datetime(value.strip())
            if parsed is None:
                day = parse_date(value.strip())
                parsed = datetime.combine(day, time.min) if day else None
        except ValueError:
            parsed = None
        if parsed is None:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_number(value) -> Optional[float]:
    """Float value of ``value``, or None when it is missing or not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def days_until(target: DateLike, now: datetime) -> Optional[int]:
    """Whole days from ``now`` to ``target``, rounded up. Negative when past."""
    moment = to_datetime(target)
    reference = to_datetime(now)
    if moment is None or reference is None:
        return None
    return math.ceil((moment - reference).total_seconds() / SECONDS_PER_DAY)


def tier_for_score(score: int) -> Tuple[str, float]:
    """Maps a score to ``(tier, base confidence)``."""
    if score >= HIGH_TIER_MIN_SCORE:
        tier = PRIORITY_HIGH
    elif score >= MEDIUM_TIER_MIN_SCORE:
        tier = PRIORITY_MEDIUM
    else:
        tier = PRIORITY_LOW
    return tier, BASE_CONFIDENCE[tier]


def _bucket_at_most(value: Optional[float], buckets) -> Tuple[int, Optional[str]]:
    if value is None:
        return 0, None
    for limit, points, reason in buckets:
        if value <= limit:
            return points, reason
    return 0, None


def _bucket_above(value: Optional[float], buckets) -> Tuple[int, Optional[str]]:
    if value is None:
        return 0, None
    for limit, points, reason in buckets:
        if value > limit:
            return points, reason
    return 0, None


def _count_dependents(task: TaskRecord, all_tasks: Sequence[TaskRecord]) -> int:
    """Tasks of the same project that start on or before this task is due."""
    due = to_datetime(task.due_date)
    if due is None:
        return 0
    count = 0
    for other in all_tasks:
        if other.project.id != task.project.id:
            continue
        start = to_datetime(other.start_date)
        if start is not None and start <= due:
            count += 1
    return count


def _count_open_assignments(task: TaskRecord, all_tasks: Sequence[TaskRecord]) -> Optional[int]:
    if task.assignee is None:
        return None
    return sum(
        1
        for other in all_tasks
        if other.assignee is not None
        and other.assignee.id == task.assignee.id
        and other.status != STATUS_COMPLETED
    )


def score_task(task: TaskRecord, all_tasks: Sequence[TaskRecord], now: datetime) -> PriorityScore:
    """
    Computes the priority score of ``task`` within its working set.

    Pure: inputs are never mutated and no rule raises on malformed data, a
    field that cannot be read simply contributes nothing.
    """
    score = 0
    reasoning: List[ReasonEntry] = []

    def add(rule: str, points: int, reason: Optional[str]) -> None:
        nonlocal score
        if reason is None:
            return
        score += points
        reasoning.append(ReasonEntry(rule, reason))

    # 1. Due date urgency
    days_until_due = days_until(task.due_date, now)
    add("due_date", *_bucket_at_most(days_until_due, DUE_DATE_BUCKETS))

    # 2. Project deadline impact
    project_days = days_until(task.project.end_date, now)
    add("project_deadline", *_bucket_at_most(project_days, PROJECT_DEADLINE_BUCKETS))

    # 3. Complexity
    estimated_hours = to_number(task.estimated_hours)
    add("complexity", *_bucket_above(estimated_hours, COMPLEXITY_BUCKETS))

    # 4. Dependency fan-out
    dependents = _count_dependents(task, all_tasks)
    if dependents > 3:
        add("dependencies", 15, "Multiple tasks depend on this - blocking others")
    elif dependents > 1:
        add("dependencies", 10, "Some tasks depend on this")

    # 5. Project budget
    add("budget", *_bucket_above(to_number(task.project.budget), BUDGET_BUCKETS))

    # 6. Status momentum
    points, reason = STATUS_POINTS.get(task.status, (0, None))
    add("status", points, reason)

    # 7. Assignee workload
    open_assignments = _count_open_assignments(task, all_tasks)
    if open_assignments is not None:
        if open_assignments <= 2:
            add("workload", 10, "Assignee has light workload - can focus")
        elif open_assignments <= 5:
            add("workload", 5, "Assignee has moderate workload")
        else:
            add("workload", 0, "Assignee has heavy workload - may need support")

    # 8. Overdue, stacked on top of the rule 1 bucket
    if days_until_due is not None and days_until_due < 0:
        add(
            "overdue",
            OVERDUE_POINTS,
            f"OVERDUE by {abs(days_until_due)} days - immediate attention required",
        )

    suggested, confidence = tier_for_score(score)

    # Data quality. Not clamped; the lowest reachable value is 0.7 - 0.2 = 0.5.
    if estimated_hours == 0:
        confidence -= CONFIDENCE_PENALTY
        reasoning.append(ReasonEntry("data_quality", "No time estimate - confidence reduced"))
    if not task.start_date:
        confidence -= CONFIDENCE_PENALTY
        reasoning.append(ReasonEntry("data_quality", "No start date - confidence reduced"))

    return PriorityScore(
        task_id=task.id,
        current_priority=task.priority,
        suggested_priority=suggested,
        score=int(round(score)),
        confidence=round(confidence, 2),
        reasoning=reasoning,
    )


def score_tasks(tasks: Sequence[TaskRecord], now: datetime) -> List[PriorityScore]:
    """Scores every task of the working set, preserving fetch order."""
    return [score_task(task, tasks, now) for task in tasks]
