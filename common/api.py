from __future__ import annotations

import json
import logging
from typing import Any

from django.http import JsonResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Raised when API helper processing should translate to an HTTP error."""

    def __init__(self, code: str, status: int = 400, detail: str | None = None) -> None:
        self.code = code
        self.status = status
        self.detail = detail
        message = detail or code
        super().__init__(message)

    def to_response(self) -> JsonResponse:
        return JsonResponse({"error": self.detail or self.code, "code": self.code}, status=self.status)


def parse_json_body(body: bytes) -> dict[str, Any]:
    """Decode a JSON object from raw request bytes; an empty body is an empty object."""

    if not body:
        return {}

    try:
        decoded = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        logger.debug("Failed to decode request body: %s", exc)
        raise APIError("invalid_json", 400, "Request body must be valid JSON.") from exc

    if not decoded.strip():
        return {}

    try:
        data = json.loads(decoded)
    except json.JSONDecodeError as exc:
        logger.debug("Failed to parse request body %r: %s", decoded, exc)
        raise APIError("invalid_json", 400, "Request body must be valid JSON.") from exc

    if not isinstance(data, dict):
        raise APIError("invalid_json", 400, "Request body must be a JSON object.")

    return data


def request_payload(request) -> dict[str, Any]:
    """Return the JSON body of a request, or its form fields for form posts."""

    content_type = request.content_type or ""
    if content_type.startswith("multipart/") or content_type == "application/x-www-form-urlencoded":
        return request.POST.dict()
    return parse_json_body(request.body)


def not_found(detail: str = "Photo not found.") -> APIError:
    return APIError("not_found", 404, detail)
