"""Gallery-specific service functions."""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable

from common import store
from common.api import APIError, not_found
from common.models import Photo, PrintRequest, SeasonSummary
from common.utils import (
    clip,
    next_bucket,
    normalize_season,
    parse_year,
    season_for_date,
    season_progress,
    utc_now_iso,
)
from likes.ledger import apply_like_reset

logger = logging.getLogger(__name__)

TIMELINE_START: tuple[str, int] = ('spring', 2023)


def prepare_store() -> None:
    """Create and seed the store, then apply the one-time like reset."""
    store.ensure_store()
    apply_like_reset()


def load_photos() -> list[Photo]:
    return [Photo.from_record(record) for record in store.load_photo_records()]


def newest_first(photos: Iterable[Photo]) -> list[Photo]:
    """Sort by date taken (falling back to creation time), newest first; ties keep store order."""
    return sorted(photos, key=lambda photo: photo.recency, reverse=True)


def compute_timeline(photos: Iterable[Photo], today: date) -> list[SeasonSummary]:
    """Build the season timeline from spring 2023 to the current or latest-photo season.

    Every season in between is present, with a count of its photos and the
    image of its most recent photo as cover. The result is newest first.
    """
    valid = [photo for photo in photos if photo.is_valid]

    latest: tuple[str, int] | None = None
    if valid:
        newest = max(valid, key=lambda photo: photo.progress)
        latest = (newest.season, newest.year)

    start_season, start_year = TIMELINE_START
    now_season, now_year = season_for_date(today)
    end_season, end_year = now_season, now_year
    if latest is not None and season_progress(latest[1], latest[0]) > season_progress(now_year, now_season):
        end_season, end_year = latest
    if season_progress(end_year, end_season) < season_progress(start_year, start_season):
        end_season, end_year = start_season, start_year

    summaries: dict[tuple[str, int], SeasonSummary] = {}
    season, year = start_season, start_year
    end_progress = season_progress(end_year, end_season)
    while season_progress(year, season) <= end_progress:
        summaries[(season, year)] = SeasonSummary(season=season, year=year)
        season, year = next_bucket(season, year)

    for photo in newest_first(valid):
        summary = summaries.get(photo.bucket)
        if summary is None:
            continue
        summary.count += 1
        if not summary.cover_image and photo.image_url:
            summary.cover_image = photo.image_url

    return sorted(summaries.values(), key=lambda summary: summary.progress, reverse=True)


def filter_photos(photos: Iterable[Photo], season: str | None = None, year: Any = None) -> list[Photo]:
    """Filter by season (case-insensitive) and year, newest first.

    Blank or unparseable filters are ignored.
    """
    season_filter = normalize_season(season)
    year_filter = parse_year(year)

    selected = list(photos)
    if season_filter:
        selected = [photo for photo in selected if photo.season == season_filter]
    if year_filter is not None:
        selected = [photo for photo in selected if photo.year == year_filter]
    return newest_first(selected)


def get_photo(photo_id: str) -> Photo:
    for photo in load_photos():
        if photo.id == photo_id:
            return photo
    raise not_found()


def request_print(photo_id: str, payload: dict[str, Any]) -> PrintRequest:
    """Validate and store a print request for an existing photo."""
    photo = get_photo(photo_id)

    name = clip(payload.get('name'), 80)
    email = clip(payload.get('email'), 120)
    if not name or not email:
        raise APIError('missing_fields', 400, 'Name and email are required.')

    request = PrintRequest(
        id=store.new_id(),
        photo_id=photo.id,
        photo_title=photo.title,
        name=name,
        email=email,
        note=clip(payload.get('note'), 800),
        created_at=utc_now_iso(),
    )
    store.append_print_request(request)
    logger.info("Print request %s stored for photo %s", request.id, photo.id)
    return request
