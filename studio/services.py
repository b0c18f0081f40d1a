"""Admin-side writes: uploads, profile edits and the print request inbox."""
from __future__ import annotations

import logging
import os
import secrets
import time
from typing import Any

from django.core.files.uploadedfile import UploadedFile

from common import store
from common.models import Photo, Profile
from common.utils import utc_now_iso
from wildlight.utils.files import safe_remove, safe_rename

logger = logging.getLogger(__name__)

UPLOAD_EXTS = frozenset({'.jpg', '.jpeg', '.png', '.webp', '.gif'})
UPLOAD_URL_PREFIX = '/uploads/'


def upload_filename(original_name: str | None) -> str:
    """Return a collision-resistant stored name keeping a whitelisted extension."""
    ext = os.path.splitext(original_name or '')[1].lower()
    if ext not in UPLOAD_EXTS:
        ext = '.jpg'
    return f"{int(time.time() * 1000)}-{secrets.token_hex(5)}{ext}"


def save_upload(upload: UploadedFile) -> str:
    """Write an uploaded image into the upload directory and return its public URL."""
    root = store.uploads_root()
    root.mkdir(parents=True, exist_ok=True)
    name = upload_filename(upload.name)
    partial = root / f".{name}.part"
    try:
        with open(partial, 'wb') as handle:
            for chunk in upload.chunks():
                handle.write(chunk)
        safe_rename(partial, root / name)
    except OSError:
        safe_remove(partial)
        raise
    logger.debug("Stored upload %s as %s", upload.name, name)
    return f"{UPLOAD_URL_PREFIX}{name}"


def create_photo(cleaned: dict[str, Any], upload: UploadedFile) -> Photo:
    """Store an uploaded photo and put its record at the front of the gallery.

    Raises ``CorruptDocumentError`` without storing anything when the
    existing photo document cannot be read back.
    """
    with store.locked():
        records = store.load_photo_records(strict=True)
        record = {
            'id': store.new_id(),
            'title': cleaned['title'],
            'season': cleaned['season'],
            'year': cleaned['year'],
            'dateTaken': cleaned.get('date_taken', ''),
            'location': cleaned.get('location', ''),
            'blurb': cleaned.get('blurb', ''),
            'likes': 0,
            'imageUrl': save_upload(upload),
            'createdAt': utc_now_iso(),
        }
        records.insert(0, record)
        store.save_photo_records(records)

    logger.info("Uploaded photo %s (%s %s)", record['id'], record['season'], record['year'])
    return Photo.from_record(record)


def update_profile(cleaned: dict[str, Any], upload: UploadedFile | None = None) -> Profile:
    """Apply profile edits; blank name or bio fall back to the defaults."""
    with store.locked():
        current = store.load_profile()
        image_url = save_upload(upload) if upload else current.image_url
        profile = Profile.from_record(
            {
                'displayName': cleaned.get('display_name', ''),
                'about': cleaned.get('about', ''),
                'imageUrl': image_url,
                'updatedAt': utc_now_iso(),
            }
        )
        store.save_profile(profile)

    logger.info("Profile updated (photo %s)", 'replaced' if upload else 'unchanged')
    return profile


def list_print_requests() -> list[dict[str, Any]]:
    """Stored print requests, newest first."""
    return list(reversed(store.load_print_requests()))
