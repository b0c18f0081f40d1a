"""Shared data models for the gallery, likes and studio apps.

Records are stored on disk with the camelCase keys the browser client
reads; these dataclasses are the Python-side view of them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .utils import (
    ALLOWED_SEASONS,
    SEASON_LABELS,
    normalize_season,
    parse_year,
    safe_timestamp,
    season_progress,
)


@dataclass(slots=True, frozen=True)
class Photo:
    """A gallery photo as read from ``photos.json``."""

    id: str
    title: str
    season: str
    year: int | None
    date_taken: str = ''
    location: str = ''
    blurb: str = ''
    likes: int = 0
    image_url: str = ''
    created_at: str = ''

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Photo:
        """Build a Photo from a stored record without rejecting odd values."""
        try:
            likes = max(0, int(record.get('likes') or 0))
        except (TypeError, ValueError, OverflowError):
            likes = 0
        return cls(
            id=str(record.get('id') or ''),
            title=str(record.get('title') or ''),
            season=normalize_season(record.get('season')),
            year=parse_year(record.get('year')),
            date_taken=str(record.get('dateTaken') or ''),
            location=str(record.get('location') or ''),
            blurb=str(record.get('blurb') or ''),
            likes=likes,
            image_url=str(record.get('imageUrl') or '').strip(),
            created_at=str(record.get('createdAt') or ''),
        )

    @property
    def is_valid(self) -> bool:
        """True when the photo can be placed in a season bucket."""
        return self.season in ALLOWED_SEASONS and self.year is not None

    @property
    def bucket(self) -> tuple[str, int | None]:
        return self.season, self.year

    @property
    def progress(self) -> float:
        return season_progress(self.year, self.season)

    @property
    def recency(self) -> float:
        """Sort key for newest-first listings: date taken, else creation time."""
        return safe_timestamp(self.date_taken or self.created_at)

    def to_dict(self, *, liked_by_viewer: bool | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {
            'id': self.id,
            'title': self.title,
            'season': self.season,
            'year': self.year,
            'dateTaken': self.date_taken,
            'location': self.location,
            'blurb': self.blurb,
            'likes': self.likes,
            'imageUrl': self.image_url,
            'createdAt': self.created_at,
        }
        if liked_by_viewer is not None:
            payload['likedByViewer'] = liked_by_viewer
        return payload


@dataclass(slots=True)
class SeasonSummary:
    """One bucket of the timeline."""

    season: str
    year: int
    count: int = 0
    cover_image: str = ''

    @property
    def progress(self) -> float:
        return season_progress(self.year, self.season)

    def to_dict(self) -> dict[str, Any]:
        return {
            'season': self.season,
            'seasonLabel': SEASON_LABELS.get(self.season, self.season.title()),
            'year': self.year,
            'count': self.count,
            'coverImage': self.cover_image,
        }


@dataclass(slots=True, frozen=True)
class LikeResult:
    """Outcome of a like claim."""

    accepted: bool
    likes: int


@dataclass(slots=True, frozen=True)
class Profile:
    """The photographer profile shown on the timeline page."""

    display_name: str = 'Wildlight Photographer'
    about: str = 'A seasonal visual archive built around light, habitat, and patient observation.'
    image_url: str = ''
    updated_at: str = ''

    @classmethod
    def from_record(cls, record: Any) -> Profile:
        if not isinstance(record, dict):
            return cls()
        defaults = cls()
        return cls(
            display_name=str(record.get('displayName') or defaults.display_name),
            about=str(record.get('about') or defaults.about),
            image_url=str(record.get('imageUrl') or ''),
            updated_at=str(record.get('updatedAt') or ''),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            'displayName': self.display_name,
            'about': self.about,
            'imageUrl': self.image_url,
            'updatedAt': self.updated_at,
        }


@dataclass(slots=True)
class LikeLedger:
    """Claim sets per photo plus the one-time migration flags."""

    claims: dict[str, set[str]] = field(default_factory=dict)
    migrations: dict[str, bool] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Any) -> LikeLedger:
        if not isinstance(record, dict):
            return cls()
        claims: dict[str, set[str]] = {}
        raw_claims = record.get('claims')
        if isinstance(raw_claims, dict):
            for photo_id, hashes in raw_claims.items():
                if isinstance(hashes, list):
                    claims[str(photo_id)] = {str(h) for h in hashes if isinstance(h, str) and h}
        migrations: dict[str, bool] = {}
        raw_migrations = record.get('migrations')
        if isinstance(raw_migrations, dict):
            migrations = {str(name): bool(done) for name, done in raw_migrations.items()}
        return cls(claims=claims, migrations=migrations)

    def to_dict(self) -> dict[str, Any]:
        return {
            'claims': {photo_id: sorted(hashes) for photo_id, hashes in self.claims.items() if hashes},
            'migrations': dict(self.migrations),
        }

    def copy(self) -> LikeLedger:
        return LikeLedger(
            claims={photo_id: set(hashes) for photo_id, hashes in self.claims.items()},
            migrations=dict(self.migrations),
        )


@dataclass(slots=True, frozen=True)
class PrintRequest:
    id: str
    photo_id: str
    photo_title: str
    name: str
    email: str
    note: str
    created_at: str

    def to_dict(self) -> dict[str, str]:
        return {
            'id': self.id,
            'photoId': self.photo_id,
            'photoTitle': self.photo_title,
            'name': self.name,
            'email': self.email,
            'note': self.note,
            'createdAt': self.created_at,
        }
