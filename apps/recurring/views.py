"""
Views for recurring app.

JSON endpoints for the requesting user's own recurring task templates.
Another user's template answers 404.
"""

from django.shortcuts import get_object_or_404
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_http_methods, require_POST
from django.core.exceptions import ValidationError
from django.forms.models import model_to_dict

from .models import TaskTemplate
from .forms import TemplateForm
from .services import (
    create_template, update_template, toggle_template_status, delete_template,
    get_user_templates, get_active_templates
)


def serialize_template(template):
    """Template as a JSON-ready dict."""
    return {
        'id': template.pk,
        'title': template.title,
        'description': template.description,
        'category': template.category,
        'priority': template.priority,
        'recurrence_type': template.recurrence_type,
        'day_of_week': template.day_of_week,
        'day_of_month': template.day_of_month,
        'days_to_complete': template.days_to_complete,
        'schedule_time': template.schedule_time.isoformat() if template.schedule_time else None,
        'cron_expression': template.cron_expression,
        'schedule_display': template.schedule_display,
        'is_active': template.is_active,
        'last_generated': template.last_generated.isoformat() if template.last_generated else None,
        'created_at': template.created_at.isoformat() if template.created_at else None,
    }


def template_list_response(templates):
    return JsonResponse({
        'count': len(templates),
        'results': [serialize_template(template) for template in templates],
    })


def validation_error_response(error):
    return JsonResponse({'error': ' '.join(error.messages)}, status=400)


# =============================================================================
# Template List Views
# =============================================================================

@login_required
@require_http_methods(["GET", "POST"])
def template_list(request):
    """
    GET: own templates.
    POST: create a template.
    """
    if request.method == 'GET':
        return template_list_response(list(get_user_templates(request.user)))

    form = TemplateForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'errors': form.errors.get_json_data()}, status=400)

    try:
        template = create_template(user=request.user, **form.cleaned_data)
    except ValidationError as e:
        return validation_error_response(e)

    return JsonResponse(serialize_template(template), status=201)


@login_required
@require_GET
def active_templates(request):
    """Own active templates."""
    return template_list_response(list(get_active_templates(user=request.user)))


# =============================================================================
# Template CRUD Views
# =============================================================================

@login_required
@require_http_methods(["GET", "POST"])
def template_detail(request, pk):
    """
    GET: template details.
    POST: update the template. Fields left out keep their current values.
    """
    template = get_object_or_404(TaskTemplate, pk=pk, user=request.user)

    if request.method == 'GET':
        return JsonResponse(serialize_template(template))

    data = model_to_dict(template, fields=TemplateForm.Meta.fields)
    data = {key: value for key, value in data.items() if value is not None}
    data.update(request.POST.dict())

    form = TemplateForm(data)
    if not form.is_valid():
        return JsonResponse({'errors': form.errors.get_json_data()}, status=400)

    try:
        template = update_template(template, **form.cleaned_data)
    except ValidationError as e:
        return validation_error_response(e)

    return JsonResponse(serialize_template(template))


@login_required
@require_POST
def template_toggle(request, pk):
    """Activate or deactivate a template."""
    template = get_object_or_404(TaskTemplate, pk=pk, user=request.user)
    template = toggle_template_status(template)
    return JsonResponse(serialize_template(template))


@login_required
@require_POST
def template_delete(request, pk):
    """Delete a template. Tasks already generated from it are kept."""
    template = get_object_or_404(TaskTemplate, pk=pk, user=request.user)
    delete_template(template)
    return JsonResponse({'deleted': pk})
