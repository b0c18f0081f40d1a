"""Shared-password gate for the admin area, backed by a signed cookie."""
from __future__ import annotations

import logging
from functools import wraps
from typing import Callable

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.crypto import constant_time_compare

logger = logging.getLogger(__name__)

COOKIE_SALT = 'wildlight.admin'


def check_password(candidate: object) -> bool:
    """Compare a submitted password with the configured one in constant time."""
    expected = settings.WILDLIGHT_ADMIN_PASSWORD or ''
    return constant_time_compare(str(candidate or ''), str(expected))


def is_authenticated(request: HttpRequest) -> bool:
    value = request.get_signed_cookie(
        settings.WILDLIGHT_ADMIN_COOKIE,
        default=None,
        salt=COOKIE_SALT,
        max_age=settings.WILDLIGHT_ADMIN_COOKIE_MAX_AGE,
    )
    return value == '1'


def grant(response: HttpResponse) -> None:
    response.set_signed_cookie(
        settings.WILDLIGHT_ADMIN_COOKIE,
        '1',
        salt=COOKIE_SALT,
        max_age=settings.WILDLIGHT_ADMIN_COOKIE_MAX_AGE,
        httponly=True,
        samesite='Lax',
        secure=settings.WILDLIGHT_ADMIN_COOKIE_SECURE,
    )


def revoke(response: HttpResponse) -> None:
    response.delete_cookie(settings.WILDLIGHT_ADMIN_COOKIE, samesite='Lax')


def admin_required(view: Callable[..., HttpResponse]) -> Callable[..., HttpResponse]:
    """Reject requests without a valid admin cookie with a JSON 401."""

    @wraps(view)
    def wrapper(request: HttpRequest, *args, **kwargs) -> HttpResponse:
        if not is_authenticated(request):
            return JsonResponse({"error": "Authentication required.", "code": "unauthorized"}, status=401)
        return view(request, *args, **kwargs)

    return wrapper
