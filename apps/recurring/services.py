"""
Service layer for recurring app.

Template management and template store queries. Schedule parameters are
validated here, when a template is created or updated; the generation
engine trusts stored templates and does not validate them again.

Services:
- create_template: Create a recurring template for a user
- update_template: Update template fields
- toggle_template_status: Activate/deactivate without deleting
- delete_template: Delete template (generated tasks are kept)
- get_template / get_user_templates / get_active_templates: Queries
"""

import logging

from django.db import transaction
from django.core.exceptions import ValidationError

from .models import TaskTemplate

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = [
    'title', 'description', 'priority', 'recurrence_type', 'category',
    'day_of_week', 'day_of_month', 'days_to_complete',
    'schedule_time', 'cron_expression',
]


def validate_schedule(recurrence_type, day_of_week=None, day_of_month=None, days_to_complete=1):
    """
    Validate recurrence parameters.

    Raises:
        ValidationError: If any parameter is out of range or a weekly/monthly
            template is missing its day
    """
    if recurrence_type not in TaskTemplate.RecurrenceType.values:
        raise ValidationError(f"Invalid recurrence type: {recurrence_type}")

    if day_of_week is not None and not 1 <= day_of_week <= 7:
        raise ValidationError("Day of week must be between 1 (Monday) and 7 (Sunday).")

    if day_of_month is not None and not 1 <= day_of_month <= 31:
        raise ValidationError("Day of month must be between 1 and 31.")

    if days_to_complete is None or days_to_complete < 1:
        raise ValidationError("Days to complete must be at least 1.")

    if recurrence_type == TaskTemplate.RecurrenceType.WEEKLY and day_of_week is None:
        raise ValidationError("Weekly templates require a day of week.")

    if recurrence_type == TaskTemplate.RecurrenceType.MONTHLY and day_of_month is None:
        raise ValidationError("Monthly templates require a day of month.")


def create_template(
    user,
    title: str,
    recurrence_type: str,
    description: str = '',
    priority: str = 'medium',
    category: str = '',
    day_of_week=None,
    day_of_month=None,
    days_to_complete: int = 1,
    schedule_time=None,
    cron_expression: str = '',
):
    """
    Create a new recurring task template. New templates are active.

    Args:
        user: Owner of the template and of every generated task
        title: Task title (required)
        recurrence_type: none/daily/weekly/monthly
        description: Task description (optional)
        priority: low/medium/high/critical (default: medium)
        category: Free-text category copied onto generated tasks
        day_of_week: 1-7, required for weekly
        day_of_month: 1-31, required for monthly
        days_to_complete: Due date offset in calendar days (>= 1)
        schedule_time: Preferred time of day (informational)
        cron_expression: Advanced schedule (informational)

    Returns:
        Created TaskTemplate instance

    Raises:
        ValidationError: If required fields are missing or invalid
    """
    if not title or not title.strip():
        raise ValidationError("Template title is required.")

    if not user:
        raise ValidationError("User is required.")

    if priority not in TaskTemplate.Priority.values:
        raise ValidationError(f"Invalid priority: {priority}")

    validate_schedule(recurrence_type, day_of_week, day_of_month, days_to_complete)

    template = TaskTemplate.objects.create(
        user=user,
        title=title.strip(),
        description=description.strip() if description else '',
        priority=priority,
        recurrence_type=recurrence_type,
        category=category.strip() if category else '',
        day_of_week=day_of_week,
        day_of_month=day_of_month,
        days_to_complete=days_to_complete,
        schedule_time=schedule_time,
        cron_expression=cron_expression or '',
        is_active=True,
    )

    logger.info(
        'Template created id=%s title=%r kind=%s user=%s',
        template.pk, template.title, template.recurrence_type, user.email
    )
    return template


def update_template(template, **kwargs):
    """
    Update template fields.

    Only fields in EDITABLE_FIELDS are applied; the merged schedule is
    validated as a whole before saving.

    Returns:
        Updated TaskTemplate instance

    Raises:
        ValidationError: If validation fails
    """
    changes = {
        field: kwargs[field] for field in EDITABLE_FIELDS if field in kwargs
    }

    if 'title' in changes:
        if not changes['title'] or not changes['title'].strip():
            raise ValidationError("Template title cannot be empty.")
        changes['title'] = changes['title'].strip()

    if 'description' in changes:
        changes['description'] = changes['description'].strip() if changes['description'] else ''

    if 'category' in changes:
        changes['category'] = changes['category'].strip() if changes['category'] else ''

    if 'cron_expression' in changes:
        changes['cron_expression'] = changes['cron_expression'] or ''

    if 'priority' in changes and changes['priority'] not in TaskTemplate.Priority.values:
        raise ValidationError(f"Invalid priority: {changes['priority']}")

    validate_schedule(
        changes.get('recurrence_type', template.recurrence_type),
        changes.get('day_of_week', template.day_of_week),
        changes.get('day_of_month', template.day_of_month),
        changes.get('days_to_complete', template.days_to_complete),
    )

    with transaction.atomic():
        for field, value in changes.items():
            setattr(template, field, value)
        template.save()

    logger.info('Template updated id=%s fields=%s', template.pk, sorted(changes))
    return template


def toggle_template_status(template):
    """Flip is_active. Inactive templates are ignored by the generation engine."""
    template.is_active = not template.is_active
    template.save(update_fields=['is_active', 'updated_at'])
    logger.info('Template %s is now %s', template.pk, 'active' if template.is_active else 'inactive')
    return template


def delete_template(template):
    """
    Delete a template.

    Tasks generated from it are kept; their template reference is cleared.
    """
    template_id = template.pk
    template.delete()
    logger.info('Template deleted: %s', template_id)


# =============================================================================
# Query Helpers
# =============================================================================

def get_template(template_id, user=None):
    """
    Fetch a template by id, optionally scoped to its owner.

    Raises:
        TaskTemplate.DoesNotExist: If no such template (for this user)
    """
    queryset = TaskTemplate.objects.all()
    if user is not None:
        queryset = queryset.filter(user=user)
    return queryset.get(pk=template_id)


def get_user_templates(user):
    """All templates owned by a user."""
    return TaskTemplate.objects.filter(user=user).order_by('id')


def get_active_templates(kind=None, user=None):
    """
    Active templates, in stable retrieval order (by id).

    Args:
        kind: Optional recurrence type filter
        user: Optional owner filter
    """
    queryset = TaskTemplate.objects.filter(is_active=True).select_related('user')
    if kind is not None:
        queryset = queryset.filter(recurrence_type=kind)
    if user is not None:
        queryset = queryset.filter(user=user)
    return queryset.order_by('id')
