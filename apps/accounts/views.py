"""
Views for accounts app.

Includes:
- Authentication views (login, logout)
- Profile view (digest opt-in)

The rest of the API uses the Django session these views establish.
"""

import logging

from django.contrib.auth import login, logout, authenticate
from django.contrib.auth.decorators import login_required
from django.forms.models import model_to_dict
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods, require_POST

from .forms import LoginForm, ProfileForm

logger = logging.getLogger(__name__)


def serialize_user(user):
    return {
        'id': user.pk,
        'email': user.email,
        'full_name': user.get_full_name(),
        'first_name': user.first_name,
        'last_name': user.last_name,
        'department': user.department,
        'designation': user.designation,
        'email_digest_enabled': user.email_digest_enabled,
    }


# =============================================================================
# Authentication Views
# =============================================================================

@require_POST
def login_view(request):
    """Log in with email and password."""
    form = LoginForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'errors': form.errors.get_json_data()}, status=400)

    user = authenticate(
        request,
        username=form.cleaned_data['email'],
        password=form.cleaned_data['password'],
    )
    if user is None:
        logger.warning('Failed login attempt for %s', form.cleaned_data['email'])
        return JsonResponse({'error': 'Invalid email or password.'}, status=401)

    login(request, user)
    logger.info('User logged in: %s', user.email)
    return JsonResponse(serialize_user(user))


@require_POST
def logout_view(request):
    """Log out the current user."""
    logout(request)
    return JsonResponse({'logged_out': True})


# =============================================================================
# Profile
# =============================================================================

@login_required
@require_http_methods(["GET", "POST"])
def profile_view(request):
    """
    GET: own profile.
    POST: update name, designation or email_digest_enabled. Fields left out
    keep their current values.
    """
    user = request.user

    if request.method == 'POST':
        data = model_to_dict(user, fields=ProfileForm.Meta.fields)
        data.update(request.POST.dict())

        form = ProfileForm(data, instance=user)
        if not form.is_valid():
            return JsonResponse({'errors': form.errors.get_json_data()}, status=400)

        user = form.save()
        logger.info('Profile updated: %s', user.email)

    return JsonResponse(serialize_user(user))
