"""
URL configuration for recurring app.

Mounted at /api/templates/.
"""

from django.urls import path
from . import views

app_name = 'recurring'

urlpatterns = [
    path('', views.template_list, name='template_list'),
    path('active/', views.active_templates, name='active_templates'),
    path('<int:pk>/', views.template_detail, name='template_detail'),
    path('<int:pk>/toggle/', views.template_toggle, name='template_toggle'),
    path('<int:pk>/delete/', views.template_delete, name='template_delete'),
]
