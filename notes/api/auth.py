"""
Access control for the notes API.

Callers are either a logged-in staff user (the notes panel and the admin) or
a script presenting ``Authorization: Bearer <NOTES_API_TOKEN>``. Token calls
run as the first superuser, or the first staff user when there is none.
"""

import logging
from functools import wraps

from django.conf import settings
from django.contrib.auth import get_user_model
from django.http import JsonResponse
from django.utils.crypto import constant_time_compare

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def _token_user(request):
    header = request.headers.get("Authorization", "")
    if not header.startswith(BEARER_PREFIX):
        return None

    expected = getattr(settings, "NOTES_API_TOKEN", None)
    if not expected or not constant_time_compare(header[len(BEARER_PREFIX):], expected):
        logger.warning("Rejected notes API call with an invalid bearer token")
        return None

    staff = get_user_model().objects.filter(is_staff=True, is_active=True)
    return staff.filter(is_superuser=True).first() or staff.first()


def api_auth_required(view_func):
    """
    Let the view run only for staff callers; sets ``request.api_user``.

    Answers 401 when no caller can be identified and 403 for non-staff users.
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        user = request.user if request.user.is_authenticated else _token_user(request)

        if user is None:
            return JsonResponse({"error": "Authentication required"}, status=401)
        if not user.is_staff:
            return JsonResponse({"error": "Staff permission required"}, status=403)

        request.api_user = user
        return view_func(request, *args, **kwargs)

    return wrapper
