"""
Task management models.

Models:
- Task: A concrete work item owned by one user, created manually or
  generated from a recurring template (apps.recurring.TaskTemplate).
"""

from django.db import models
from django.conf import settings
from django.utils import timezone


class Task(models.Model):
    """
    Main Task model.

    Status workflow:
    - todo → in_progress → completed (explicit user action)
    - todo / in_progress → overdue (overdue sweeper, once due_date has passed)
    - overdue → completed (explicit user action)

    The sweeper never moves a task out of OVERDUE; only the user does.
    """

    class Status(models.TextChoices):
        TODO = 'todo', 'To Do'
        IN_PROGRESS = 'in_progress', 'In Progress'
        COMPLETED = 'completed', 'Completed'
        OVERDUE = 'overdue', 'Overdue'

    class Priority(models.TextChoices):
        LOW = 'low', 'Low'
        MEDIUM = 'medium', 'Medium'
        HIGH = 'high', 'High'
        CRITICAL = 'critical', 'Critical'

    class RecurrenceType(models.TextChoices):
        NONE = 'none', 'None'
        DAILY = 'daily', 'Daily'
        WEEKLY = 'weekly', 'Weekly'
        MONTHLY = 'monthly', 'Monthly'

    # Core fields
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    category = models.CharField(
        max_length=100,
        blank=True,
        help_text='e.g. Material Data Update, Daily Reporting, Documentation'
    )

    # Relationships
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='tasks',
        help_text='User who owns this task'
    )
    template = models.ForeignKey(
        'recurring.TaskTemplate',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='tasks',
        help_text='Template this task was generated from (lineage only)'
    )

    # Task classification
    status = models.CharField(
        max_length=15,
        choices=Status.choices,
        default=Status.TODO,
        db_index=True,
    )
    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM,
        db_index=True,
    )
    is_recurring = models.BooleanField(default=False)
    recurrence_type = models.CharField(
        max_length=10,
        choices=RecurrenceType.choices,
        default=RecurrenceType.NONE,
    )

    # Deadline
    due_date = models.DateField(
        null=True,
        blank=True,
        db_index=True,
        help_text='Calendar day the task is due'
    )

    # Timestamps
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    # Notification tracking
    reminder_sent = models.BooleanField(
        default=False,
        help_text='Deadline reminder sent (never reset)'
    )

    class Meta:
        verbose_name = 'task'
        verbose_name_plural = 'tasks'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'status'], name='task_user_status_idx'),
            models.Index(fields=['due_date', 'status'], name='task_due_status_idx'),
            models.Index(fields=['reminder_sent', 'status'], name='task_reminder_status_idx'),
        ]

    def __str__(self):
        return f"#{self.pk}: {self.title}"

    # ==========================================================================
    # Deadline Helpers
    # ==========================================================================

    def days_until_deadline(self, today=None):
        """
        Whole calendar days from today to the due date.

        Negative once the task is past due, None when there is no due date.
        """
        if self.due_date is None:
            return None
        today = today or timezone.localdate()
        return (self.due_date - today).days

    def is_overdue(self, today=None):
        """Check if task is past its due date and not completed."""
        if self.due_date is None or self.status == self.Status.COMPLETED:
            return False
        today = today or timezone.localdate()
        return self.due_date < today

    @property
    def is_completed(self):
        return self.status == self.Status.COMPLETED
