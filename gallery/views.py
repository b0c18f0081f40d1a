"""Public gallery API: timeline, photo listings, likes and print requests."""
import logging

from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST
from django.views.static import serve as static_serve

from common import store
from common.api import APIError, request_payload
from likes.identity import visitor_hash
from likes.ledger import claim_like, viewer_has_liked
from studio.views import upload_photo

from .services import compute_timeline, filter_photos, get_photo, load_photos, request_print

logger = logging.getLogger(__name__)


@require_GET
def seasons_api(request: HttpRequest) -> JsonResponse:
    """Every season from the start of the archive to now, newest first."""
    timeline = compute_timeline(load_photos(), timezone.localdate())
    return JsonResponse([summary.to_dict() for summary in timeline], safe=False)


@csrf_exempt
@require_http_methods(["GET", "POST"])
def photos_api(request: HttpRequest) -> JsonResponse:
    """List photos, optionally filtered by ``season`` and ``year``; POST uploads (admin only)."""
    if request.method == "POST":
        return upload_photo(request)

    photos = filter_photos(load_photos(), request.GET.get("season"), request.GET.get("year"))
    ledger = store.load_like_ledger()
    viewer = visitor_hash(request)
    payload = [photo.to_dict(liked_by_viewer=viewer_has_liked(ledger, photo.id, viewer)) for photo in photos]
    return JsonResponse(payload, safe=False)


@require_GET
def photo_api(request: HttpRequest, photo_id: str) -> JsonResponse:
    try:
        photo = get_photo(photo_id)
    except APIError as e:
        return e.to_response()

    liked = viewer_has_liked(store.load_like_ledger(), photo.id, visitor_hash(request))
    return JsonResponse(photo.to_dict(liked_by_viewer=liked))


@csrf_exempt
@require_POST
def like_api(request: HttpRequest, photo_id: str) -> JsonResponse:
    """Like a photo once per visitor."""
    try:
        result = claim_like(photo_id, visitor_hash(request))
    except APIError as e:
        return e.to_response()
    except Exception as e:
        logger.exception("Unexpected error liking photo %s", photo_id)
        return JsonResponse({"error": "Unable to record like.", "code": "internal_error", "detail": str(e)}, status=500)

    return JsonResponse({"likes": result.likes, "liked": True, "accepted": result.accepted})


@csrf_exempt
@require_POST
def request_print_api(request: HttpRequest, photo_id: str) -> JsonResponse:
    try:
        request_print(photo_id, request_payload(request))
    except APIError as e:
        logger.info("Rejected print request for %s: %s", photo_id, e.detail or e.code)
        return e.to_response()
    except Exception as e:
        logger.exception("Unexpected error storing print request for %s", photo_id)
        return JsonResponse({"error": "Unable to save request.", "code": "internal_error", "detail": str(e)}, status=500)

    return JsonResponse({"ok": True})


@require_GET
def uploaded_file(request: HttpRequest, path: str):
    """Serve uploaded images directly from disk. This is intended for self-hosted use."""
    return static_serve(request, path, document_root=store.uploads_root())
