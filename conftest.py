"""Shared test fixtures."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from common import store


def make_record(
    photo_id: str,
    season: Any = 'spring',
    year: Any = 2024,
    *,
    likes: int = 0,
    date_taken: str = '',
    created_at: str = '2024-01-01T00:00:00.000Z',
    image_url: str | None = None,
    title: str | None = None,
) -> dict[str, Any]:
    """Build a stored photo record with sensible defaults."""
    return {
        'id': photo_id,
        'title': title or f'Photo {photo_id}',
        'season': season,
        'year': year,
        'dateTaken': date_taken,
        'location': '',
        'blurb': '',
        'likes': likes,
        'imageUrl': f'https://example.com/{photo_id}.jpg' if image_url is None else image_url,
        'createdAt': created_at,
    }


@pytest.fixture()
def data_dir(tmp_path: Path, settings) -> Path:
    """Point the store at an empty temp directory."""
    settings.WILDLIGHT_DATA_DIR = tmp_path / 'data'
    settings.WILDLIGHT_UPLOAD_DIR = tmp_path / 'uploads'
    settings.WILDLIGHT_DATA_DIR.mkdir()
    settings.WILDLIGHT_UPLOAD_DIR.mkdir()
    return settings.WILDLIGHT_DATA_DIR


@pytest.fixture()
def photo_store(data_dir: Path) -> Callable[..., list[dict[str, Any]]]:
    """Write the given records as the photo document and return them."""

    def write(*records: dict[str, Any]) -> list[dict[str, Any]]:
        store.save_photo_records(list(records))
        return list(records)

    return write
