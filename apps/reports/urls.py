"""
URL configuration for reports app.
"""

from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    path('stats/', views.task_stats, name='task_stats'),
    path('digest/', views.task_digest, name='task_digest'),
]
