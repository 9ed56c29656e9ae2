"""
Service layer for notifications app.

Email notifications for task lifecycle events. Sending is fire-and-forget:
callers use notify(), which hands delivery to a Django-Q2 worker as an
independent task. A delivery failure is logged and never rolls back the
task/template change that triggered it, and it is never retried here.

Kinds:
- task_created: a task was created manually or generated from a template
- status_changed: a user changed a task's status
- reminder: a task's deadline is close (or already passed)
- digest: daily task summary for one user
"""

import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.db import models
from django.template.loader import render_to_string
from django.utils import timezone
from django_q.tasks import async_task

logger = logging.getLogger(__name__)


class NotificationKind(models.TextChoices):
    TASK_CREATED = 'task_created', 'Task Created'
    STATUS_CHANGED = 'status_changed', 'Status Changed'
    REMINDER = 'reminder', 'Reminder'
    DIGEST = 'digest', 'Digest'


# =============================================================================
# Dispatch
# =============================================================================

def notify(kind, payload):
    """
    Queue a notification for background delivery.

    Args:
        kind: NotificationKind value
        payload: JSON-serialisable dict (see task_payload, status_payload,
            TaskDigest.as_payload)

    Returns:
        bool: True if the notification was queued
    """
    kind = str(kind)
    try:
        async_task(
            'apps.notifications.services.deliver_notification',
            kind,
            payload,
            group=f'notification:{kind}',
        )
        return True
    except Exception:
        logger.exception(
            'Failed to queue %s notification for %s',
            kind, payload.get('recipient_email')
        )
        return False


def deliver_notification(kind, payload):
    """
    Render and send one notification email.

    Runs inside a Django-Q2 worker (or inline when the cluster is in sync mode).

    Args:
        kind: NotificationKind value
        payload: dict built by one of the payload helpers

    Returns:
        bool: True if the email was sent
    """
    try:
        kind = NotificationKind(kind)
    except ValueError:
        logger.error('Unknown notification kind: %s', kind)
        return False

    recipient = payload.get('recipient_email')
    if not recipient:
        logger.warning('Dropping %s notification without a recipient', kind)
        return False

    context = dict(payload)
    context.update({
        'site_url': getattr(settings, 'SITE_URL', 'http://localhost:8000'),
    })

    try:
        subject = build_subject(kind, payload)
        text_content = render_to_string(f'notifications/emails/{kind.value}.txt', context)
        html_content = render_to_string(f'notifications/emails/{kind.value}.html', context)

        email = EmailMultiAlternatives(
            subject=subject,
            body=text_content,
            from_email=getattr(settings, 'DEFAULT_FROM_EMAIL', 'noreply@taskmanagement.com'),
            to=[recipient],
        )
        email.attach_alternative(html_content, 'text/html')
        email.send()
    except Exception:
        logger.exception('Failed to send %s email to %s', kind, recipient)
        return False

    logger.info('%s email sent to %s', kind.label, recipient)
    return True


# =============================================================================
# Message Builders
# =============================================================================

def build_subject(kind, payload):
    """Email subject line for a notification."""
    title = payload.get('title', '')

    if kind == NotificationKind.TASK_CREATED:
        return f'New Task Assigned: {title}'
    if kind == NotificationKind.STATUS_CHANGED:
        return f'Task Status Updated: {title}'
    if kind == NotificationKind.REMINDER:
        prefix = 'URGENT: ' if payload.get('priority') == 'critical' else ''
        return f'{prefix}Task Reminder: {title}'
    if kind == NotificationKind.DIGEST:
        return f"Daily Task Digest - {payload.get('date', '')}"
    return title


def reminder_urgency(days_until):
    """
    Wording for how close a deadline is.

    0 → "DUE TODAY!", 1 → "due tomorrow", N → "due in N days",
    negative → "OVERDUE by N days".
    """
    if days_until is None:
        return 'has no due date'
    if days_until < 0:
        overdue = -days_until
        return f"OVERDUE by {overdue} day{'s' if overdue != 1 else ''}"
    if days_until == 0:
        return 'DUE TODAY!'
    if days_until == 1:
        return 'due tomorrow'
    return f'due in {days_until} days'


def task_payload(task, today=None):
    """
    Notification payload describing one task and its owner.

    Args:
        task: Task instance (user is accessed)
        today: date used for days_until_deadline (default: local today)

    Returns:
        dict
    """
    today = today or timezone.localdate()
    days_until = task.days_until_deadline(today)

    return {
        'task_id': task.pk,
        'title': task.title,
        'description': task.description or '',
        'category': task.category or '',
        'priority': task.priority,
        'priority_display': task.get_priority_display(),
        'status': task.status,
        'status_display': task.get_status_display(),
        'due_date': task.due_date.isoformat() if task.due_date else None,
        'days_until_deadline': days_until,
        'urgency': reminder_urgency(days_until),
        'is_recurring': task.is_recurring,
        'recipient_email': task.user.email,
        'recipient_name': task.user.get_full_name(),
    }


def status_payload(task, old_status):
    """Payload for a status change, including the previous status."""
    payload = task_payload(task)
    payload.update({
        'old_status': old_status,
        'old_status_display': task.Status(old_status).label if old_status else '',
        'is_completed': task.is_completed,
    })
    return payload
