"""
Service layer for tasks app.

All business logic for task operations is centralized here.
This enables reuse from the JSON views and the scheduled jobs.

Services:
- create_task: Create new task (manual, non-recurring)
- update_task: Update editable task fields
- change_status: Change task status (user action)
- delete_task: Delete a task
- sweep_overdue_tasks: Mark past-due tasks as OVERDUE (scheduled job)

Query helpers cover the task store lookups used by the jobs and the digest.
"""

import logging

from django.utils import timezone
from django.db import DatabaseError, transaction
from django.db.models import Case, IntegerField, Value, When
from django.core.exceptions import ValidationError

from apps.notifications.services import (
    NotificationKind, notify, status_payload, task_payload
)
from .models import Task

logger = logging.getLogger(__name__)

# Statuses a user may set directly. OVERDUE is reserved for the sweeper.
MANUAL_STATUSES = [
    Task.Status.TODO,
    Task.Status.IN_PROGRESS,
    Task.Status.COMPLETED,
]

PRIORITY_RANK = Case(
    When(priority=Task.Priority.CRITICAL, then=Value(4)),
    When(priority=Task.Priority.HIGH, then=Value(3)),
    When(priority=Task.Priority.MEDIUM, then=Value(2)),
    When(priority=Task.Priority.LOW, then=Value(1)),
    default=Value(0),
    output_field=IntegerField(),
)


def create_task(
    user,
    title: str,
    description: str = '',
    priority: str = 'medium',
    due_date=None,
    category: str = '',
):
    """
    Central manual task creation function.

    Args:
        user: Owner of the task (required)
        title: Task title (required)
        description: Task description (optional)
        priority: low/medium/high/critical (default: medium)
        due_date: Date the task is due (optional)
        category: Free-text category (optional)

    Returns:
        Created Task instance

    Raises:
        ValidationError: If required fields are missing or invalid
    """
    if not title or not title.strip():
        raise ValidationError("Task title is required.")

    if not user:
        raise ValidationError("User is required.")

    if not user.is_active:
        raise ValidationError("Cannot create a task for an inactive user.")

    if priority not in Task.Priority.values:
        raise ValidationError(f"Invalid priority: {priority}")

    with transaction.atomic():
        task = Task.objects.create(
            user=user,
            title=title.strip(),
            description=description.strip() if description else '',
            priority=priority,
            due_date=due_date,
            category=category.strip() if category else '',
            status=Task.Status.TODO,
            is_recurring=False,
            recurrence_type=Task.RecurrenceType.NONE,
        )

        transaction.on_commit(
            lambda: notify(NotificationKind.TASK_CREATED, task_payload(task))
        )

    logger.info('Task created successfully with ID: %s', task.pk)
    return task


def update_task(task, **kwargs):
    """
    Update task fields.

    Editable fields: title, description, priority, due_date, category.
    Moving the due date forward does not revert an OVERDUE status; the user
    changes the status explicitly for that.

    Returns:
        Updated Task instance

    Raises:
        ValidationError: If validation fails
    """
    editable_fields = ['title', 'description', 'priority', 'due_date', 'category']
    changed = []

    for field in editable_fields:
        if field not in kwargs:
            continue
        new_value = kwargs[field]

        if field == 'title':
            if not new_value or not new_value.strip():
                raise ValidationError("Task title cannot be empty.")
            new_value = new_value.strip()

        elif field in ('description', 'category'):
            new_value = new_value.strip() if new_value else ''

        elif field == 'priority':
            if new_value not in Task.Priority.values:
                raise ValidationError(f"Invalid priority: {new_value}")

        if getattr(task, field) != new_value:
            setattr(task, field, new_value)
            changed.append(field)

    if changed:
        task.save(update_fields=changed + ['updated_at'])
        logger.info('Task updated: %s fields=%s', task.pk, changed)

    return task


def change_status(task, new_status, now=None):
    """
    Change task status on behalf of its owner.

    - COMPLETED sets completed_at (an OVERDUE task can be completed too)
    - Leaving COMPLETED clears completed_at
    - OVERDUE cannot be set by hand

    Args:
        task: Task instance
        new_status: Target status
        now: Completion timestamp (default: timezone.now())

    Returns:
        Updated Task instance

    Raises:
        ValidationError: If the status is not a manual status
    """
    if new_status not in MANUAL_STATUSES:
        raise ValidationError(
            f"Cannot change status to '{dict(Task.Status.choices).get(new_status, new_status)}'."
        )

    old_status = task.status
    if old_status == new_status:
        return task

    with transaction.atomic():
        task.status = new_status

        if new_status == Task.Status.COMPLETED:
            task.completed_at = now or timezone.now()
        else:
            task.completed_at = None

        task.save(update_fields=['status', 'completed_at', 'updated_at'])

        transaction.on_commit(
            lambda: notify(NotificationKind.STATUS_CHANGED, status_payload(task, old_status))
        )

    logger.info('Task %s status updated from %s to %s', task.pk, old_status, new_status)
    return task


def delete_task(task):
    """Delete a task."""
    task_id = task.pk
    task.delete()
    logger.info('Task deleted: %s', task_id)


# =============================================================================
# Overdue Sweeper
# =============================================================================

def mark_task_overdue(task, today):
    """
    Move one task to OVERDUE if it still qualifies.

    The write is conditional on the row as stored, so a task completed
    after the sweep read it stays COMPLETED.

    Returns:
        bool: True if the task was updated
    """
    updated = Task.objects.filter(
        pk=task.pk,
        due_date__lt=today,
    ).exclude(
        status__in=[Task.Status.COMPLETED, Task.Status.OVERDUE]
    ).update(
        status=Task.Status.OVERDUE,
        updated_at=timezone.now(),
    )
    return updated == 1


def sweep_overdue_tasks(today):
    """
    Mark tasks past their due date as OVERDUE.

    Selects tasks with due_date < today and status != COMPLETED; tasks already
    OVERDUE are not written again. A storage error on one task is logged and
    the sweep continues with the rest.

    Args:
        today: Calendar day the sweep runs for

    Returns:
        int: Number of tasks moved to OVERDUE
    """
    marked = 0
    failed = 0

    overdue_tasks = get_overdue_tasks(today).exclude(status=Task.Status.OVERDUE)

    for task in overdue_tasks:
        try:
            with transaction.atomic():
                updated = mark_task_overdue(task, today)
        except DatabaseError:
            logger.exception('Failed to mark task %s as overdue', task.pk)
            failed += 1
            continue

        if not updated:
            logger.debug('Task %s changed during the sweep; left as is', task.pk)
            continue

        marked += 1
        logger.warning('Task marked as overdue: %s (Due: %s)', task.title, task.due_date)

    if failed:
        logger.error('Overdue sweep could not update %s task(s)', failed)

    return marked


# =============================================================================
# Query Helpers
# =============================================================================

def get_task(task_id, user=None):
    """
    Fetch a task by id, optionally scoped to its owner.

    Raises:
        Task.DoesNotExist: If no such task (for this user)
    """
    queryset = Task.objects.select_related('user', 'template')
    if user is not None:
        queryset = queryset.filter(user=user)
    return queryset.get(pk=task_id)


def get_user_tasks(user):
    """All tasks owned by a user, newest first."""
    return Task.objects.filter(user=user).select_related('template')


def get_user_pending_tasks(user):
    """Non-completed tasks ordered by priority (critical first), then due date."""
    return (
        Task.objects.filter(user=user)
        .exclude(status=Task.Status.COMPLETED)
        .annotate(priority_rank=PRIORITY_RANK)
        .order_by('-priority_rank', 'due_date', 'id')
    )


def get_overdue_tasks(today, user=None):
    """Tasks with due_date before today that are not completed."""
    queryset = Task.objects.filter(
        due_date__lt=today,
    ).exclude(status=Task.Status.COMPLETED).select_related('user')
    if user is not None:
        queryset = queryset.filter(user=user)
    return queryset.order_by('due_date', 'id')


def get_tasks_due_today(today, user=None):
    """Non-completed tasks due today."""
    queryset = Task.objects.filter(
        due_date=today,
    ).exclude(status=Task.Status.COMPLETED).select_related('user')
    if user is not None:
        queryset = queryset.filter(user=user)
    return queryset.order_by('id')


def get_user_tasks_due_between(user, start, end):
    """A user's tasks with start <= due_date <= end (any status)."""
    return Task.objects.filter(
        user=user,
        due_date__gte=start,
        due_date__lte=end,
    ).order_by('due_date', 'id')


def get_tasks_needing_reminders():
    """Candidates for the reminder check: reminder unsent, not completed, with a due date."""
    return Task.objects.filter(
        reminder_sent=False,
        due_date__isnull=False,
    ).exclude(status=Task.Status.COMPLETED).select_related('user').order_by('due_date', 'id')
