"""
Forms for tasks app.

Includes:
- TaskForm: Validate task create/edit payloads
- TaskStatusForm: Change task status

The forms only validate input; the views pass cleaned_data to
apps.tasks.services, which performs the write.
"""

from django import forms
from django.core.exceptions import ValidationError

from .models import Task
from .services import MANUAL_STATUSES


class TaskForm(forms.ModelForm):
    """Form for creating and editing tasks."""

    class Meta:
        model = Task
        fields = ['title', 'description', 'priority', 'due_date', 'category']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        # Default priority when the field is left out
        self.fields['priority'].required = False
        self.fields['due_date'].help_text = 'Leave empty for tasks without a due date'

    def clean_title(self):
        """Validate title is not blank."""
        title = (self.cleaned_data.get('title') or '').strip()
        if not title:
            raise ValidationError("Task title is required.")
        return title

    def clean_priority(self):
        return self.cleaned_data.get('priority') or Task.Priority.MEDIUM


class TaskStatusForm(forms.Form):
    """
    Form for changing task status.

    OVERDUE is not offered: only the overdue sweep sets it.
    """

    status = forms.ChoiceField(
        choices=[
            (value, label) for value, label in Task.Status.choices
            if value in MANUAL_STATUSES
        ],
        label='Status',
    )

    def __init__(self, *args, task=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.task = task

    def clean_status(self):
        """Reject a no-op change."""
        new_status = self.cleaned_data.get('status')

        if self.task and new_status == self.task.status:
            raise ValidationError(
                f"Task is already {self.task.get_status_display()}."
            )

        return new_status
