"""
Test data helpers shared by the test modules.
"""

import itertools
from datetime import date, datetime, time

from django.utils import timezone

from apps.accounts.models import User
from apps.recurring.models import TaskTemplate
from apps.tasks.models import Task

_sequence = itertools.count(1)


def make_user(email=None, **extra):
    """Create an active user with a unique email."""
    n = next(_sequence)
    extra.setdefault('first_name', 'Test')
    extra.setdefault('last_name', f'User{n}')
    return User.objects.create_user(
        email=email or f'user{n}@example.com',
        password='testpass123',
        **extra
    )


def make_task(user, title='Task', **fields):
    """Create a task directly (no service, no notification)."""
    fields.setdefault('status', Task.Status.TODO)
    fields.setdefault('priority', Task.Priority.MEDIUM)
    return Task.objects.create(user=user, title=title, **fields)


def make_template(user, title='Template', recurrence_type=TaskTemplate.RecurrenceType.DAILY, **fields):
    """Create an active template directly."""
    fields.setdefault('days_to_complete', 1)
    return TaskTemplate.objects.create(
        user=user,
        title=title,
        recurrence_type=recurrence_type,
        **fields
    )


def aware(day, hour=6, minute=0):
    """Timezone-aware datetime on `day` in the current time zone."""
    return timezone.make_aware(datetime.combine(day, time(hour, minute)))


# Fixed calendar used across tests
WEDNESDAY = date(2026, 3, 4)
APRIL_30 = date(2026, 4, 30)
