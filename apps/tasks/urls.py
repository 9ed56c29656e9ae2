"""
URL configuration for tasks app.

Includes:
- Task list with filters (GET) and task creation (POST)
- Pending / overdue / due-today lists
- Task detail and update
- Status changes
- Delete
"""

from django.urls import path
from . import views

app_name = 'tasks'

urlpatterns = [
    # Task List (filtered) and create
    path('', views.task_list, name='task_list'),

    # Focused lists
    path('pending/', views.pending_tasks, name='pending_tasks'),
    path('overdue/', views.overdue_tasks, name='overdue_tasks'),
    path('due-today/', views.due_today_tasks, name='due_today_tasks'),

    # Task CRUD
    path('<int:pk>/', views.task_detail, name='task_detail'),
    path('<int:pk>/delete/', views.task_delete, name='task_delete'),

    # Status changes
    path('<int:pk>/status/', views.task_status_change, name='task_status_change'),
]
