"""
Service layer for reports app.

Read-only aggregation of a user's task state. Nothing here writes to the
database or sends email; the daily digest job hands the result to the
notifications app.

Services:
- build_task_digest: Counts plus due-today / overdue / upcoming task lists
- get_user_task_stats: Counts only
"""

from dataclasses import asdict, dataclass, field
from datetime import date, timedelta
from typing import List, Optional

from django.conf import settings
from django.db.models import Count, Q

from apps.tasks.models import Task
from apps.tasks.services import (
    get_overdue_tasks, get_tasks_due_today, get_user_tasks_due_between
)

NO_DUE_DATE = 'N/A'


@dataclass
class TaskSummary:
    """One task line in a digest."""

    task_id: int
    title: str
    priority: str
    due_date: str
    days_until_deadline: Optional[int] = None

    @classmethod
    def from_task(cls, task, today):
        return cls(
            task_id=task.pk,
            title=task.title,
            priority=task.priority,
            due_date=task.due_date.isoformat() if task.due_date else NO_DUE_DATE,
            days_until_deadline=task.days_until_deadline(today),
        )


@dataclass
class TaskDigest:
    """Snapshot of one user's tasks on a given day."""

    user_name: str
    user_email: str
    date: date
    total_tasks: int = 0
    completed_tasks: int = 0
    pending_tasks: int = 0
    overdue_tasks: int = 0
    todays_tasks: List[TaskSummary] = field(default_factory=list)
    overdue_tasks_list: List[TaskSummary] = field(default_factory=list)
    upcoming_tasks: List[TaskSummary] = field(default_factory=list)

    def as_payload(self):
        """JSON-serialisable dict, also used as the digest notification payload."""
        payload = asdict(self)
        payload['date'] = self.date.isoformat()
        payload['recipient_email'] = self.user_email
        payload['recipient_name'] = self.user_name
        return payload


def get_user_task_stats(user, today):
    """
    Task counts for a user.

    Args:
        user: Task owner
        today: Calendar day used for the overdue count

    Returns:
        dict with total, completed, pending and overdue
    """
    counts = Task.objects.filter(user=user).aggregate(
        total=Count('id'),
        completed=Count('id', filter=Q(status=Task.Status.COMPLETED)),
    )
    total = counts['total'] or 0
    completed = counts['completed'] or 0

    return {
        'total': total,
        'completed': completed,
        'pending': total - completed,
        'overdue': get_overdue_tasks(today, user=user).count(),
    }


def build_task_digest(user, today):
    """
    Build the daily digest for a user.

    Buckets:
    - due today: due_date == today, not completed
    - overdue: due_date < today, not completed
    - upcoming: due_date from tomorrow through DIGEST_UPCOMING_DAYS ahead,
      any status

    Args:
        user: Task owner
        today: Calendar day the digest describes

    Returns:
        TaskDigest
    """
    upcoming_days = getattr(settings, 'DIGEST_UPCOMING_DAYS', 7)
    stats = get_user_task_stats(user, today)

    todays = get_tasks_due_today(today, user=user)
    overdue = get_overdue_tasks(today, user=user)
    upcoming = get_user_tasks_due_between(
        user,
        today + timedelta(days=1),
        today + timedelta(days=upcoming_days),
    )

    return TaskDigest(
        user_name=user.get_full_name(),
        user_email=user.email,
        date=today,
        total_tasks=stats['total'],
        completed_tasks=stats['completed'],
        pending_tasks=stats['pending'],
        overdue_tasks=stats['overdue'],
        todays_tasks=[TaskSummary.from_task(task, today) for task in todays],
        overdue_tasks_list=[TaskSummary.from_task(task, today) for task in overdue],
        upcoming_tasks=[TaskSummary.from_task(task, today) for task in upcoming],
    )
