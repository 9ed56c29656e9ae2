"""
Recurring task generation engine.

For every active template of one recurrence kind, decide whether `today`
is a firing day and, if so, create exactly one Task from it.

Dedup guard (one task per template per calendar day):
1. Fast path: skip when template.last_generated falls on `today`.
2. Ledger: a GenerationRecord(template, today) row is inserted in the same
   transaction as the task. Its unique constraint rejects a second
   generation for the same day, including one from a concurrent run.

Each template is generated in its own transaction. A storage error rolls
back that template only; the run logs it, counts it and moves on. Runs
never raise.

`today` and `now` are always passed in by the caller (see
apps.notifications.tasks), never read from the clock here.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta

from django.db import DatabaseError, IntegrityError, transaction

from apps.notifications.services import NotificationKind, notify, task_payload
from apps.tasks.models import Task
from .models import GenerationRecord
from .rules import rule_for, was_generated_on
from .services import get_active_templates

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of one generation run."""

    kind: str
    day: date
    generated: int = 0
    not_due: int = 0
    skipped: int = 0
    failed: int = 0
    task_ids: list = field(default_factory=list)

    @property
    def processed(self):
        return self.generated + self.not_due + self.skipped + self.failed


def run_daily_generation(today, now):
    """Generate today's task for every active daily template."""
    return run_generation(Task.RecurrenceType.DAILY, today, now)


def run_weekly_generation(today, now):
    """Generate tasks for active weekly templates whose weekday is today."""
    return run_generation(Task.RecurrenceType.WEEKLY, today, now)


def run_monthly_generation(today, now):
    """Generate tasks for active monthly templates whose day of month is today."""
    return run_generation(Task.RecurrenceType.MONTHLY, today, now)


def run_generation(kind, today, now):
    """
    Run one generation pass over the active templates of a recurrence kind.

    Args:
        kind: Task.RecurrenceType value
        today: Calendar day being generated for
        now: Aware datetime stamped on created tasks and last_generated

    Returns:
        GenerationResult
    """
    result = GenerationResult(kind=kind, day=today)
    logger.info('Running %s task generation for %s...', kind, today)

    try:
        templates = list(get_active_templates(kind))
    except DatabaseError:
        logger.exception('Could not load active %s templates', kind)
        return result

    for template in templates:
        if not rule_for(template).fires_on(today):
            result.not_due += 1
            continue

        if was_generated_on(template, today):
            logger.debug('Task already generated today for template: %s', template.pk)
            result.skipped += 1
            continue

        try:
            task = generate_task_from_template(template, today, now)
        except DatabaseError:
            logger.exception('Failed to generate task from template %s', template.pk)
            result.failed += 1
            continue

        if task is None:
            logger.debug('Generation ledger already has template %s on %s', template.pk, today)
            result.skipped += 1
            continue

        result.generated += 1
        result.task_ids.append(task.pk)

    logger.info(
        '%s task generation completed. Generated %s tasks '
        '(templates=%s, not due=%s, skipped=%s, failed=%s)',
        kind.capitalize(), result.generated, len(templates),
        result.not_due, result.skipped, result.failed
    )
    return result


def generate_task_from_template(template, today, now):
    """
    Create one task from a template and record the generation.

    The new task copies title, description, priority, category and
    recurrence type from the template, starts as TODO and is due
    `days_to_complete` calendar days after `today`.

    Args:
        template: TaskTemplate instance
        today: Generation day (ledger key and due date base)
        now: Timestamp for task.created_at and template.last_generated

    Returns:
        Created Task, or None if the template already generated on `today`

    Raises:
        DatabaseError: If the task or template cannot be saved; nothing from
            this template is persisted in that case
    """
    with transaction.atomic():
        try:
            with transaction.atomic():
                record = GenerationRecord.objects.create(
                    template=template,
                    generation_date=today,
                )
        except IntegrityError:
            return None

        task = Task.objects.create(
            user=template.user,
            title=template.title,
            description=template.description,
            priority=template.priority,
            category=template.category,
            status=Task.Status.TODO,
            created_at=now,
            is_recurring=True,
            recurrence_type=template.recurrence_type,
            template=template,
            due_date=today + timedelta(days=template.days_to_complete),
        )

        record.task = task
        record.save(update_fields=['task'])

        template.last_generated = now
        template.save(update_fields=['last_generated', 'updated_at'])

        transaction.on_commit(
            lambda: notify(NotificationKind.TASK_CREATED, task_payload(task, today))
        )

    logger.info(
        'Task generated from template %s for %s: task=%s due=%s',
        template.pk, template.user.email, task.pk, task.due_date
    )
    return task
