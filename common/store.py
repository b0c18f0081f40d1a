"""Flat-file JSON store for photos, like claims, the profile and print requests.

Every document is read and written whole. Read-modify-write cycles take
:func:`locked` so that requests served by one process never interleave.
"""
from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from wildlight.utils.files import read_json, write_json

from .models import LikeLedger, PrintRequest, Profile
from .utils import utc_now_iso

logger = logging.getLogger(__name__)

PHOTOS_FILE = 'photos.json'
LIKES_FILE = 'likes.json'
PROFILE_FILE = 'profile.json'
PRINT_REQUESTS_FILE = 'print-requests.json'

_store_lock = threading.RLock()

SEED_PHOTOS: list[dict[str, Any]] = [
    {
        'title': 'Fox at First Frost',
        'season': 'winter',
        'year': 2025,
        'dateTaken': '2025-01-16',
        'location': 'Northern Forest Edge',
        'blurb': (
            'A red fox paused as dawn snow settled over the grassline. '
            'The scene felt almost monochrome except for its coat.'
        ),
        'likes': 14,
        'imageUrl': 'https://images.unsplash.com/photo-1516934024742-b461fba47600?auto=format&fit=crop&w=1200&q=80',
    },
    {
        'title': 'Heron at Meltwater',
        'season': 'spring',
        'year': 2024,
        'dateTaken': '2024-04-03',
        'location': 'Lowland Marsh',
        'blurb': (
            'The marsh had just opened after a long winter. '
            'The heron stood perfectly still while wind moved only the reeds.'
        ),
        'likes': 22,
        'imageUrl': 'https://images.unsplash.com/photo-1520808663317-647b476a81b9?auto=format&fit=crop&w=1200&q=80',
    },
    {
        'title': 'Elk in Evening Dust',
        'season': 'summer',
        'year': 2024,
        'dateTaken': '2024-07-19',
        'location': 'High Basin Trail',
        'blurb': 'Backlit dust gave the valley a bronze haze. The elk moved through it in slow, deliberate steps.',
        'likes': 31,
        'imageUrl': 'https://images.unsplash.com/photo-1536514498073-50e69d39c6cf?auto=format&fit=crop&w=1200&q=80',
    },
    {
        'title': 'Owlet in Birch Hollow',
        'season': 'autumn',
        'year': 2023,
        'dateTaken': '2023-10-09',
        'location': 'Birch Creek Reserve',
        'blurb': 'Leaves were already copper, and the owlet watched from a split trunk as light broke through fog.',
        'likes': 19,
        'imageUrl': 'https://images.unsplash.com/photo-1552728089-57bdde30beb3?auto=format&fit=crop&w=1200&q=80',
    },
]


def data_root() -> Path:
    """Return the directory holding the JSON documents."""
    return Path(settings.WILDLIGHT_DATA_DIR)


def uploads_root() -> Path:
    """Return the directory holding uploaded images."""
    return Path(settings.WILDLIGHT_UPLOAD_DIR)


@contextmanager
def locked() -> Iterator[None]:
    """Serialise a read-modify-write cycle against the store."""
    with _store_lock:
        yield


def new_id() -> str:
    return str(uuid.uuid4())


def ensure_store() -> None:
    """Create the store directories and seed documents that do not exist yet."""
    root = data_root()
    try:
        root.mkdir(parents=True, exist_ok=True)
        uploads_root().mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ImproperlyConfigured(f"Unable to create wildlight store directories: {exc}") from exc

    with locked():
        photos_path = root / PHOTOS_FILE
        if not photos_path.exists():
            created_at = utc_now_iso()
            seeded = [{'id': new_id(), **record, 'createdAt': created_at} for record in SEED_PHOTOS]
            write_json(photos_path, seeded)
            logger.info("Seeded %s with %d sample photos", photos_path, len(seeded))

        requests_path = root / PRINT_REQUESTS_FILE
        if not requests_path.exists():
            write_json(requests_path, [])


class CorruptDocumentError(Exception):
    """A stored document exists but cannot be safely rewritten."""


def load_photo_records(*, strict: bool = False) -> list[dict[str, Any]]:
    """Return the stored photo records in store order; malformed entries are skipped.

    Write paths pass *strict* so that an unreadable or malformed document
    raises ``CorruptDocumentError`` instead of being replaced.
    """
    path = data_root() / PHOTOS_FILE
    try:
        raw = read_json(path, [], strict=strict)
    except (OSError, ValueError) as exc:
        raise CorruptDocumentError(f"Photo document {path} is unreadable: {exc}") from exc

    if not isinstance(raw, list):
        if strict:
            raise CorruptDocumentError(f"Photo document {path} is not a list")
        logger.warning("Photo document is not a list; treating it as empty")
        return []
    records = [record for record in raw if isinstance(record, dict)]
    if strict and len(records) != len(raw):
        raise CorruptDocumentError(f"Photo document {path} holds non-record entries")
    return records


def save_photo_records(records: list[dict[str, Any]]) -> None:
    write_json(data_root() / PHOTOS_FILE, records)


def load_like_ledger() -> LikeLedger:
    return LikeLedger.from_record(read_json(data_root() / LIKES_FILE, {}))


def save_like_ledger(ledger: LikeLedger) -> None:
    write_json(data_root() / LIKES_FILE, ledger.to_dict())


def load_profile() -> Profile:
    return Profile.from_record(read_json(data_root() / PROFILE_FILE, None))


def save_profile(profile: Profile) -> None:
    write_json(data_root() / PROFILE_FILE, profile.to_dict())


def load_print_requests() -> list[dict[str, Any]]:
    raw = read_json(data_root() / PRINT_REQUESTS_FILE, [])
    if not isinstance(raw, list):
        logger.warning("Print request document is not a list; treating it as empty")
        return []
    return [record for record in raw if isinstance(record, dict)]


def append_print_request(request: PrintRequest) -> None:
    with locked():
        records = load_print_requests()
        records.append(request.to_dict())
        write_json(data_root() / PRINT_REQUESTS_FILE, records)


def find_photo_record(records: list[dict[str, Any]], photo_id: str) -> int:
    """Index of the record with *photo_id*, or -1."""
    for index, record in enumerate(records):
        if str(record.get('id') or '') == photo_id:
            return index
    return -1
