"""
Forms for recurring app.

TemplateForm validates field-level input (types, ranges). Rules that span
fields, such as a weekly template needing a weekday, are checked by
apps.recurring.services.validate_schedule.
"""

from django import forms
from django.core.exceptions import ValidationError

from .models import TaskTemplate


class TemplateForm(forms.ModelForm):
    """Form for creating and editing recurring task templates."""

    class Meta:
        model = TaskTemplate
        fields = [
            'title', 'description', 'priority', 'category', 'recurrence_type',
            'day_of_week', 'day_of_month', 'days_to_complete',
            'schedule_time', 'cron_expression',
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.fields['priority'].required = False
        self.fields['days_to_complete'].required = False
        self.fields['day_of_week'].help_text = '1 = Monday ... 7 = Sunday'

    def clean_title(self):
        """Validate title is not blank."""
        title = (self.cleaned_data.get('title') or '').strip()
        if not title:
            raise ValidationError("Template title is required.")
        return title

    def clean_priority(self):
        return self.cleaned_data.get('priority') or TaskTemplate.Priority.MEDIUM

    def clean_days_to_complete(self):
        days = self.cleaned_data.get('days_to_complete')
        return 1 if days is None else days
