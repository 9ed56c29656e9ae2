"""
Recurring task models.

Models:
- TaskTemplate: A recurrence rule bound to one user. The generation engine
  expands active templates into Task instances on their firing days.
- GenerationRecord: Ledger of (template, calendar day) generations. The
  unique constraint is what guarantees one task per template per day.
"""

from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator

from apps.tasks.models import Task


class TaskTemplate(models.Model):
    """
    Recurring task template.

    Examples:
    - Daily reporting duty: recurrence_type=daily
    - Weekly status meeting notes every Wednesday: recurrence_type=weekly, day_of_week=3
    - Monthly material data update on the 15th: recurrence_type=monthly, day_of_month=15

    Templates are disabled with is_active=False, never deleted on disable.
    """

    RecurrenceType = Task.RecurrenceType
    Priority = Task.Priority

    # Core fields
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=100, blank=True)
    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM,
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='task_templates',
        help_text='User who receives the generated tasks'
    )

    # Schedule
    recurrence_type = models.CharField(
        max_length=10,
        choices=RecurrenceType.choices,
        db_index=True,
    )
    day_of_week = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(7)],
        help_text='Weekly only: 1=Monday ... 7=Sunday'
    )
    day_of_month = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(31)],
        help_text='Monthly only: 1-31 (skipped in months without that day)'
    )
    days_to_complete = models.PositiveSmallIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
        help_text='Generated task is due this many calendar days after generation'
    )
    schedule_time = models.TimeField(
        null=True,
        blank=True,
        help_text='Preferred time of day (informational)'
    )
    cron_expression = models.CharField(
        max_length=100,
        blank=True,
        help_text='Advanced schedule (informational)'
    )

    # State
    is_active = models.BooleanField(default=True, db_index=True)
    last_generated = models.DateTimeField(
        null=True,
        blank=True,
        help_text='When the last task was generated from this template'
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'task template'
        verbose_name_plural = 'task templates'
        ordering = ['id']
        indexes = [
            models.Index(fields=['is_active', 'recurrence_type'], name='template_active_kind_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.get_recurrence_type_display()})"

    @property
    def schedule_display(self):
        """Human-readable schedule, e.g. 'Weekly on Wednesday'."""
        if self.recurrence_type == self.RecurrenceType.WEEKLY and self.day_of_week:
            day_names = ['Monday', 'Tuesday', 'Wednesday', 'Thursday',
                         'Friday', 'Saturday', 'Sunday']
            return f"Weekly on {day_names[self.day_of_week - 1]}"
        if self.recurrence_type == self.RecurrenceType.MONTHLY and self.day_of_month:
            return f"Monthly on day {self.day_of_month}"
        return self.get_recurrence_type_display()


class GenerationRecord(models.Model):
    """
    One row per template per calendar day on which a task was generated.

    Inserted inside the same transaction as the generated task, so a second
    run on the same day (even a concurrent one) hits the unique constraint
    instead of creating a duplicate task.
    """

    template = models.ForeignKey(
        TaskTemplate,
        on_delete=models.CASCADE,
        related_name='generations',
    )
    generation_date = models.DateField(db_index=True)
    task = models.ForeignKey(
        Task,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'generation record'
        verbose_name_plural = 'generation records'
        ordering = ['-generation_date', 'template_id']
        constraints = [
            models.UniqueConstraint(
                fields=['template', 'generation_date'],
                name='unique_template_generation_date',
            ),
        ]

    def __str__(self):
        return f"{self.template_id} @ {self.generation_date}"
