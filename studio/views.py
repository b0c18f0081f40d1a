"""Admin API: login/logout, photo upload, profile editing and print requests."""
import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from common import store
from common.api import APIError, request_payload

from .auth import admin_required, check_password, grant, is_authenticated, revoke
from .forms import PhotoUploadForm, ProfileForm, first_error
from .services import create_photo, list_print_requests, update_profile

logger = logging.getLogger(__name__)


@require_GET
def me_api(request: HttpRequest) -> JsonResponse:
    return JsonResponse({"authenticated": is_authenticated(request)})


@csrf_exempt
@require_POST
def login_api(request: HttpRequest) -> JsonResponse:
    try:
        payload = request_payload(request)
    except APIError as e:
        return e.to_response()

    if not check_password(payload.get("password")):
        logger.warning("Rejected admin login from %s", request.META.get("REMOTE_ADDR", "?"))
        return JsonResponse({"error": "Invalid password.", "code": "invalid_password"}, status=401)

    response = JsonResponse({"ok": True})
    grant(response)
    return response


@csrf_exempt
@require_POST
def logout_api(request: HttpRequest) -> JsonResponse:
    response = JsonResponse({"ok": True})
    revoke(response)
    return response


@admin_required
def upload_photo(request: HttpRequest) -> JsonResponse:
    """Create a photo from a multipart upload. Routed through the photos collection view."""
    if "photo" not in request.FILES:
        return JsonResponse({"error": "Photo file is required.", "code": "missing_file"}, status=400)

    form = PhotoUploadForm.from_request(request)
    if not form.is_valid():
        return JsonResponse({"error": first_error(form), "code": "invalid_upload"}, status=400)

    try:
        photo = create_photo(form.cleaned_data, form.cleaned_data["photo"])
    except Exception as e:
        logger.exception("Upload failed")
        return JsonResponse({"error": str(e) or "Upload failed.", "code": "internal_error"}, status=500)

    return JsonResponse(photo.to_dict(), status=201)


@admin_required
def _update_profile(request: HttpRequest) -> JsonResponse:
    form = ProfileForm.from_request(request)
    if not form.is_valid():
        return JsonResponse({"error": first_error(form), "code": "invalid_profile"}, status=400)

    try:
        profile = update_profile(form.cleaned_data, form.cleaned_data.get("profile_photo"))
    except Exception as e:
        logger.exception("Profile update failed")
        return JsonResponse({"error": str(e) or "Profile update failed.", "code": "internal_error"}, status=500)

    return JsonResponse(profile.to_dict())


@csrf_exempt
@require_http_methods(["GET", "POST"])
def profile_api(request: HttpRequest) -> JsonResponse:
    """Public profile; POST edits it (admin only)."""
    if request.method == "POST":
        return _update_profile(request)
    return JsonResponse(store.load_profile().to_dict())


@require_GET
@admin_required
def print_requests_api(request: HttpRequest) -> JsonResponse:
    return JsonResponse(list_print_requests(), safe=False)
