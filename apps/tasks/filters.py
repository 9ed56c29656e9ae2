"""
Task filters using django-filter.

Provides filtering for the task list endpoint:
- Status filter (multi-select)
- Priority filter (multi-select)
- Category (case-insensitive exact)
- Due date range (due_from / due_to)
- Recurring vs. manual tasks
- Search (title, description)
"""

import django_filters
from django.db.models import Q

from .models import Task


class TaskFilter(django_filters.FilterSet):
    """
    Task filter for the list endpoint.

    Usage in views:
        filterset = TaskFilter(request.GET, queryset=queryset)
        tasks = filterset.qs
    """

    search = django_filters.CharFilter(method='filter_search', label='Search')

    status = django_filters.MultipleChoiceFilter(
        choices=Task.Status.choices,
        label='Status'
    )

    priority = django_filters.MultipleChoiceFilter(
        choices=Task.Priority.choices,
        label='Priority'
    )

    category = django_filters.CharFilter(
        field_name='category',
        lookup_expr='iexact',
        label='Category'
    )

    due_from = django_filters.DateFilter(
        field_name='due_date',
        lookup_expr='gte',
        label='Due From'
    )

    due_to = django_filters.DateFilter(
        field_name='due_date',
        lookup_expr='lte',
        label='Due To'
    )

    is_recurring = django_filters.BooleanFilter(label='Recurring')

    template = django_filters.NumberFilter(field_name='template_id', label='Template')

    class Meta:
        model = Task
        fields = ['status', 'priority', 'category', 'is_recurring']

    def filter_search(self, queryset, name, value):
        """
        Search across title and description.
        Case-insensitive partial matching.
        """
        if not value:
            return queryset

        return queryset.filter(
            Q(title__icontains=value) |
            Q(description__icontains=value)
        )
