"""
URL configuration for task_manager project.
"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings

urlpatterns = [
    path('admin/', admin.site.urls),

    # JSON API
    path('api/auth/', include('apps.accounts.urls', namespace='accounts')),
    path('api/tasks/', include('apps.tasks.urls', namespace='tasks')),
    path('api/templates/', include('apps.recurring.urls', namespace='recurring')),
    path('api/reports/', include('apps.reports.urls', namespace='reports')),
]

if settings.DEBUG and 'debug_toolbar' in settings.INSTALLED_APPS:
    import debug_toolbar
    urlpatterns = [
        path('__debug__/', include(debug_toolbar.urls)),
    ] + urlpatterns

# Admin site customization
admin.site.site_header = 'Task Manager Administration'
admin.site.site_title = 'Task Manager Admin'
admin.site.index_title = 'Welcome to Task Manager Admin'
