"""
Admin configuration for tasks app.
"""

from django.contrib import admin
from django.utils.html import format_html
from .models import Task

STATUS_COLORS = {
    'todo': '#FFA500',         # Orange
    'in_progress': '#3498db',  # Blue
    'completed': '#27ae60',    # Green
    'overdue': '#e74c3c',      # Red
}

PRIORITY_COLORS = {
    'low': '#95a5a6',
    'medium': '#3498db',
    'high': '#e67e22',
    'critical': '#e74c3c',
}


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    """Admin for Task model."""

    list_display = (
        'id', 'title', 'user', 'status_display', 'priority_display',
        'due_date', 'category', 'is_recurring', 'reminder_sent', 'created_at'
    )
    list_filter = (
        'status', 'priority', 'is_recurring', 'recurrence_type',
        'reminder_sent', 'created_at', 'due_date'
    )
    search_fields = ('title', 'description', 'category', 'user__email')
    ordering = ('-created_at',)
    date_hierarchy = 'created_at'
    raw_id_fields = ('user', 'template')

    readonly_fields = ('created_at', 'updated_at', 'completed_at')

    fieldsets = (
        (None, {
            'fields': ('title', 'description', 'category', 'user')
        }),
        ('Status & Priority', {
            'fields': ('status', 'priority', 'due_date')
        }),
        ('Recurrence', {
            'fields': ('is_recurring', 'recurrence_type', 'template'),
            'classes': ('collapse',),
        }),
        ('Tracking', {
            'fields': ('reminder_sent',),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'completed_at'),
            'classes': ('collapse',),
        }),
    )

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related('user', 'template')

    def status_display(self, obj):
        """Display status with color coding."""
        color = STATUS_COLORS.get(obj.status, '#000')
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color, obj.get_status_display()
        )
    status_display.short_description = 'Status'
    status_display.admin_order_field = 'status'

    def priority_display(self, obj):
        """Display priority with color coding."""
        color = PRIORITY_COLORS.get(obj.priority, '#000')
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color, obj.get_priority_display()
        )
    priority_display.short_description = 'Priority'
    priority_display.admin_order_field = 'priority'
