"""
Admin configuration for accounts app.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _
from django.utils.html import format_html

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Custom User admin with email authentication and digest preferences.
    """

    list_display = (
        'email', 'full_name_display', 'department', 'designation',
        'is_active_display', 'digest_display', 'created_at'
    )
    list_filter = ('is_active', 'is_staff', 'email_digest_enabled', 'department')
    search_fields = ('email', 'first_name', 'last_name', 'employee_id')
    ordering = ('first_name', 'last_name')
    list_per_page = 25

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        (_('Personal Info'), {'fields': ('first_name', 'last_name')}),
        (_('Organization'), {'fields': ('department', 'designation', 'employee_id')}),
        (_('Notifications'), {'fields': ('email_digest_enabled',)}),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        (_('Important dates'), {
            'fields': ('last_login', 'created_at', 'updated_at'),
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': (
                'email', 'first_name', 'last_name',
                'password1', 'password2', 'department', 'designation'
            ),
        }),
    )

    readonly_fields = ('created_at', 'updated_at', 'last_login')

    actions = ['enable_digest', 'disable_digest']

    def full_name_display(self, obj):
        """Display full name."""
        return obj.get_full_name() or '-'
    full_name_display.short_description = 'Name'
    full_name_display.admin_order_field = 'first_name'

    def is_active_display(self, obj):
        """Display active status with color coding."""
        if obj.is_active:
            return format_html('<span style="color: {};">{}</span>', '#27ae60', 'Active')
        return format_html('<span style="color: {};">{}</span>', '#95a5a6', 'Inactive')
    is_active_display.short_description = 'Status'
    is_active_display.admin_order_field = 'is_active'

    def digest_display(self, obj):
        """Show whether the daily digest is enabled."""
        return 'Yes' if obj.email_digest_enabled else 'No'
    digest_display.short_description = 'Daily digest'
    digest_display.admin_order_field = 'email_digest_enabled'

    @admin.action(description='Enable daily digest for selected users')
    def enable_digest(self, request, queryset):
        updated = queryset.update(email_digest_enabled=True)
        self.message_user(request, f'Daily digest enabled for {updated} user(s).')

    @admin.action(description='Disable daily digest for selected users')
    def disable_digest(self, request, queryset):
        updated = queryset.update(email_digest_enabled=False)
        self.message_user(request, f'Daily digest disabled for {updated} user(s).')
