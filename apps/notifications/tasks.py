"""
Scheduled tasks for notifications app.

Entry points run by the Django-Q2 cluster (see setup_schedules):
- Recurring task generation: daily, weekly, monthly (06:00)
- Overdue sweep (hourly)
- Deadline reminders (every 2 hours)
- Daily digest emails (08:00)

Each job reads the clock once and passes `today`/`now` down to the
services. A job logs a summary line and returns a count; it never raises
to the scheduler.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.utils import timezone

from apps.recurring.generation import (
    run_daily_generation, run_monthly_generation, run_weekly_generation
)
from apps.reports.services import build_task_digest
from apps.tasks.services import sweep_overdue_tasks
from .reminders import send_task_reminders
from .services import NotificationKind, notify

logger = logging.getLogger(__name__)

User = get_user_model()


# =============================================================================
# Recurring Task Generation
# =============================================================================

def generate_daily_tasks():
    """Scheduled job: generate tasks from daily templates."""
    return run_daily_generation(timezone.localdate(), timezone.now()).generated


def generate_weekly_tasks():
    """Scheduled job: generate tasks from weekly templates due today."""
    return run_weekly_generation(timezone.localdate(), timezone.now()).generated


def generate_monthly_tasks():
    """Scheduled job: generate tasks from monthly templates due today."""
    return run_monthly_generation(timezone.localdate(), timezone.now()).generated


# =============================================================================
# Deadline Tracking
# =============================================================================

def update_overdue_tasks():
    """
    Scheduled job to run hourly.

    Marks non-completed tasks past their due date as OVERDUE.

    Returns:
        int: Number of tasks marked overdue
    """
    today = timezone.localdate()
    logger.info('Checking for overdue tasks (%s)...', today)

    try:
        count = sweep_overdue_tasks(today)
    except DatabaseError:
        logger.exception('Overdue check failed')
        return 0

    logger.info('Overdue check completed. Marked %s tasks as overdue', count)
    return count


def check_task_reminders():
    """
    Scheduled job to run every 2 hours.

    Sends one reminder per task once its deadline is close:
    2 days ahead for CRITICAL tasks, 1 day ahead otherwise.

    Returns:
        int: Number of reminders sent
    """
    today = timezone.localdate()
    logger.info('Checking for tasks needing reminders (%s)...', today)

    try:
        count = send_task_reminders(today)
    except DatabaseError:
        logger.exception('Reminder check failed')
        return 0

    logger.info('Reminder check completed. Sent %s reminders', count)
    return count


# =============================================================================
# Daily Digest
# =============================================================================

def send_daily_digests():
    """
    Scheduled job to run daily at 8:00 AM.

    Sends the task digest to every active user with email_digest_enabled.
    A failure for one user is logged and the remaining users still get
    their digest.

    Returns:
        int: Number of digests sent
    """
    today = timezone.localdate()
    logger.info('Running daily digest job (%s)...', today)

    try:
        users = list(User.objects.filter(is_active=True, email_digest_enabled=True))
    except DatabaseError:
        logger.exception('Could not load digest recipients')
        return 0

    sent = 0
    for user in users:
        try:
            digest = build_task_digest(user, today)
        except DatabaseError:
            logger.exception('Failed to build digest for user: %s', user.email)
            continue

        if notify(NotificationKind.DIGEST, digest.as_payload()):
            sent += 1

    logger.info('Daily digest job completed. Sent %s digests', sent)
    return sent
