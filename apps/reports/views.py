"""
Views for reports app.

Read-only JSON snapshots of the requesting user's task state.
"""

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

from .services import build_task_digest, get_user_task_stats


@login_required
@require_GET
def task_stats(request):
    """Task counts: total, completed, pending, overdue."""
    today = timezone.localdate()
    return JsonResponse(get_user_task_stats(request.user, today))


@login_required
@require_GET
def task_digest(request):
    """
    Today's digest for the requesting user.

    Same content as the daily digest email; nothing is sent.
    """
    today = timezone.localdate()
    return JsonResponse(build_task_digest(request.user, today).as_payload())
