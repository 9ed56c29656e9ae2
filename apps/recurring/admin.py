"""
Admin configuration for recurring app.
"""

from django.contrib import admin
from django.utils.html import format_html
from .models import TaskTemplate, GenerationRecord


class GenerationRecordInline(admin.TabularInline):
    """Inline admin for the generation ledger on template detail."""
    model = GenerationRecord
    extra = 0
    readonly_fields = ('generation_date', 'task', 'created_at')
    can_delete = False
    ordering = ('-generation_date',)

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(TaskTemplate)
class TaskTemplateAdmin(admin.ModelAdmin):
    """Admin for TaskTemplate model."""

    list_display = (
        'title', 'user', 'recurrence_type', 'schedule_display', 'priority',
        'days_to_complete', 'active_display', 'last_generated'
    )
    list_filter = ('recurrence_type', 'is_active', 'priority')
    search_fields = ('title', 'description', 'category', 'user__email')
    ordering = ('id',)
    raw_id_fields = ('user',)
    actions = ['activate_templates', 'deactivate_templates']

    readonly_fields = ('last_generated', 'created_at', 'updated_at')

    fieldsets = (
        (None, {
            'fields': ('title', 'description', 'category', 'priority', 'user')
        }),
        ('Schedule', {
            'fields': (
                'recurrence_type', 'day_of_week', 'day_of_month',
                'days_to_complete', 'schedule_time', 'cron_expression'
            )
        }),
        ('State', {
            'fields': ('is_active', 'last_generated'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    inlines = [GenerationRecordInline]

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related('user')

    def active_display(self, obj):
        """Display active flag with color coding."""
        if obj.is_active:
            return format_html('<span style="color: #27ae60; font-weight: bold;">{}</span>', 'Active')
        return format_html('<span style="color: #95a5a6;">{}</span>', 'Inactive')
    active_display.short_description = 'Active'
    active_display.admin_order_field = 'is_active'

    @admin.action(description='Activate selected templates')
    def activate_templates(self, request, queryset):
        updated = queryset.update(is_active=True)
        self.message_user(request, f'{updated} template(s) activated.')

    @admin.action(description='Deactivate selected templates')
    def deactivate_templates(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f'{updated} template(s) deactivated.')


@admin.register(GenerationRecord)
class GenerationRecordAdmin(admin.ModelAdmin):
    """Read-only admin for the generation ledger."""

    list_display = ('template', 'generation_date', 'task', 'created_at')
    list_filter = ('generation_date',)
    search_fields = ('template__title',)
    ordering = ('-generation_date',)
    date_hierarchy = 'generation_date'

    readonly_fields = ('template', 'generation_date', 'task', 'created_at')

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
