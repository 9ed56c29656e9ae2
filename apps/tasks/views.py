"""
Views for tasks app.

JSON endpoints for the requesting user's own tasks:
- Task list with filtering and pagination
- Pending / overdue / due-today lists
- Task CRUD operations
- Status changes

Another user's task answers 404.
"""

from django.shortcuts import get_object_or_404
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_http_methods, require_POST
from django.core.exceptions import ValidationError
from django.core.paginator import Paginator, EmptyPage, PageNotAnInteger
from django.forms.models import model_to_dict
from django.utils import timezone

from .models import Task
from .forms import TaskForm, TaskStatusForm
from .services import (
    create_task, update_task, change_status, delete_task,
    get_user_tasks, get_user_pending_tasks, get_overdue_tasks, get_tasks_due_today
)
from .filters import TaskFilter

PAGE_SIZE = 20


# =============================================================================
# Serialisation
# =============================================================================

def serialize_task(task, today=None):
    """Task as a JSON-ready dict."""
    today = today or timezone.localdate()
    return {
        'id': task.pk,
        'title': task.title,
        'description': task.description,
        'category': task.category,
        'status': task.status,
        'status_display': task.get_status_display(),
        'priority': task.priority,
        'priority_display': task.get_priority_display(),
        'due_date': task.due_date.isoformat() if task.due_date else None,
        'days_until_deadline': task.days_until_deadline(today),
        'is_recurring': task.is_recurring,
        'recurrence_type': task.recurrence_type,
        'template_id': task.template_id,
        'reminder_sent': task.reminder_sent,
        'created_at': task.created_at.isoformat() if task.created_at else None,
        'updated_at': task.updated_at.isoformat() if task.updated_at else None,
        'completed_at': task.completed_at.isoformat() if task.completed_at else None,
    }


def task_list_response(tasks):
    today = timezone.localdate()
    return JsonResponse({
        'count': len(tasks),
        'results': [serialize_task(task, today) for task in tasks],
    })


def validation_error_response(error):
    return JsonResponse({'error': ' '.join(error.messages)}, status=400)


# =============================================================================
# Task List Views
# =============================================================================

@login_required
@require_http_methods(["GET", "POST"])
def task_list(request):
    """
    GET: own tasks, filtered with TaskFilter, 20 per page.
    POST: create a task.
    """
    if request.method == 'POST':
        return task_create(request)

    queryset = get_user_tasks(request.user)

    task_filter = TaskFilter(request.GET, queryset=queryset)
    if not task_filter.is_valid():
        return JsonResponse({'errors': task_filter.errors.get_json_data()}, status=400)

    paginator = Paginator(task_filter.qs, PAGE_SIZE)
    page = request.GET.get('page', 1)

    try:
        tasks = paginator.page(page)
    except PageNotAnInteger:
        tasks = paginator.page(1)
    except EmptyPage:
        tasks = paginator.page(paginator.num_pages)

    today = timezone.localdate()
    return JsonResponse({
        'count': paginator.count,
        'page': tasks.number,
        'num_pages': paginator.num_pages,
        'results': [serialize_task(task, today) for task in tasks],
    })


@login_required
@require_GET
def pending_tasks(request):
    """Own non-completed tasks, highest priority first."""
    return task_list_response(list(get_user_pending_tasks(request.user)))


@login_required
@require_GET
def overdue_tasks(request):
    """Own tasks past their due date and not completed."""
    today = timezone.localdate()
    return task_list_response(list(get_overdue_tasks(today, user=request.user)))


@login_required
@require_GET
def due_today_tasks(request):
    """Own non-completed tasks due today."""
    today = timezone.localdate()
    return task_list_response(list(get_tasks_due_today(today, user=request.user)))


# =============================================================================
# Task CRUD Views
# =============================================================================

def task_create(request):
    """Create a new task for the requesting user."""
    form = TaskForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'errors': form.errors.get_json_data()}, status=400)

    try:
        task = create_task(
            user=request.user,
            title=form.cleaned_data['title'],
            description=form.cleaned_data.get('description', ''),
            priority=form.cleaned_data.get('priority') or Task.Priority.MEDIUM,
            due_date=form.cleaned_data.get('due_date'),
            category=form.cleaned_data.get('category', ''),
        )
    except ValidationError as e:
        return validation_error_response(e)

    return JsonResponse(serialize_task(task), status=201)


@login_required
@require_http_methods(["GET", "POST"])
def task_detail(request, pk):
    """
    GET: task details.
    POST: update title, description, priority, due date or category.
    Fields left out of the POST keep their current values.
    """
    task = get_object_or_404(Task, pk=pk, user=request.user)

    if request.method == 'GET':
        return JsonResponse(serialize_task(task))

    data = model_to_dict(task, fields=TaskForm.Meta.fields)
    data.update(request.POST.dict())

    form = TaskForm(data)
    if not form.is_valid():
        return JsonResponse({'errors': form.errors.get_json_data()}, status=400)

    try:
        task = update_task(task, **form.cleaned_data)
    except ValidationError as e:
        return validation_error_response(e)

    return JsonResponse(serialize_task(task))


@login_required
@require_POST
def task_status_change(request, pk):
    """Change task status (todo / in_progress / completed)."""
    task = get_object_or_404(Task, pk=pk, user=request.user)

    form = TaskStatusForm(request.POST, task=task)
    if not form.is_valid():
        return JsonResponse({'errors': form.errors.get_json_data()}, status=400)

    try:
        task = change_status(task, form.cleaned_data['status'])
    except ValidationError as e:
        return validation_error_response(e)

    return JsonResponse(serialize_task(task))


@login_required
@require_POST
def task_delete(request, pk):
    """Delete a task."""
    task = get_object_or_404(Task, pk=pk, user=request.user)
    delete_task(task)
    return JsonResponse({'deleted': pk})
