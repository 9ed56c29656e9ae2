"""
Recurrence rules.

Each recurrence kind is a small immutable rule with a single pure method,
fires_on(day), so firing logic can be tested without touching the database.

    rule_for(template).fires_on(date(2026, 3, 4))

Rules:
- NoRecurrence: never fires
- Daily: fires every day
- Weekly: fires when the ISO weekday (1=Monday..7=Sunday) matches
- Monthly: fires when the day of month matches; a day missing from the
  month (e.g. 31 in April) is skipped, with no rollover or catch-up

A weekly rule without a weekday or a monthly rule without a day never fires.
"""

from dataclasses import dataclass
from typing import Optional

from django.utils import timezone

from apps.tasks.models import Task


@dataclass(frozen=True)
class NoRecurrence:
    kind = Task.RecurrenceType.NONE

    def fires_on(self, day):
        return False


@dataclass(frozen=True)
class Daily:
    kind = Task.RecurrenceType.DAILY

    def fires_on(self, day):
        return True


@dataclass(frozen=True)
class Weekly:
    day_of_week: Optional[int] = None

    kind = Task.RecurrenceType.WEEKLY

    def fires_on(self, day):
        if self.day_of_week is None:
            return False
        return day.isoweekday() == self.day_of_week


@dataclass(frozen=True)
class Monthly:
    day_of_month: Optional[int] = None

    kind = Task.RecurrenceType.MONTHLY

    def fires_on(self, day):
        if self.day_of_month is None:
            return False
        return day.day == self.day_of_month


def rule_for(template):
    """
    Build the recurrence rule for a template.

    Args:
        template: TaskTemplate (or anything with recurrence_type,
            day_of_week and day_of_month attributes)

    Returns:
        NoRecurrence, Daily, Weekly or Monthly
    """
    kind = template.recurrence_type

    if kind == Task.RecurrenceType.DAILY:
        return Daily()
    if kind == Task.RecurrenceType.WEEKLY:
        return Weekly(day_of_week=template.day_of_week)
    if kind == Task.RecurrenceType.MONTHLY:
        return Monthly(day_of_month=template.day_of_month)
    return NoRecurrence()


def was_generated_on(template, day):
    """Check if the template's last generation falls on the given calendar day."""
    if template.last_generated is None:
        return False
    return timezone.localtime(template.last_generated).date() == day
