"""
Deadline reminders.

A task gets at most one reminder. The reminder_sent flag is claimed with a
conditional UPDATE before the notification is queued, so two overlapping
reminder runs cannot both send for the same task.

Window:
- CRITICAL priority: 2 days or less before the deadline
- Other priorities: 1 day or less before the deadline
- Already overdue tasks qualify as well (escalation)
"""

import logging

from django.db import DatabaseError

from apps.tasks.models import Task
from apps.tasks.services import get_tasks_needing_reminders
from .services import NotificationKind, notify, task_payload

logger = logging.getLogger(__name__)

CRITICAL_REMINDER_DAYS = 2
DEFAULT_REMINDER_DAYS = 1


def should_send_reminder(task, today):
    """
    Check if a reminder is due for a task.

    Args:
        task: Task instance
        today: Calendar day of the check

    Returns:
        bool
    """
    if task.reminder_sent:
        return False

    if task.status == Task.Status.COMPLETED:
        return False

    if task.due_date is None:
        return False

    days_until = (task.due_date - today).days

    if task.priority == Task.Priority.CRITICAL:
        return days_until <= CRITICAL_REMINDER_DAYS
    return days_until <= DEFAULT_REMINDER_DAYS


def claim_reminder(task):
    """
    Atomically mark a task's reminder as sent.

    Returns:
        bool: True if this call flipped the flag, False if someone else did
    """
    claimed = Task.objects.filter(
        pk=task.pk,
        reminder_sent=False,
    ).update(reminder_sent=True)

    if claimed:
        task.reminder_sent = True
    return claimed == 1


def send_task_reminders(today):
    """
    Queue reminders for every eligible task.

    Args:
        today: Calendar day of the check

    Returns:
        int: Number of reminders dispatched
    """
    sent = 0
    failed = 0

    for task in get_tasks_needing_reminders():
        if not should_send_reminder(task, today):
            continue

        try:
            claimed = claim_reminder(task)
        except DatabaseError:
            logger.exception('Could not claim reminder for task %s', task.pk)
            failed += 1
            continue

        if not claimed:
            logger.debug('Reminder for task %s already claimed', task.pk)
            continue

        notify(NotificationKind.REMINDER, task_payload(task, today))
        sent += 1
        logger.info('Reminder queued for task %s (%s)', task.pk, task.user.email)

    if failed:
        logger.error('Reminder check could not claim %s task(s)', failed)

    return sent
