"""Idempotent like bookkeeping.

Each photo keeps the set of visitor hashes that have already liked it in
``likes.json``; the visible count lives on the photo record. A claim is
accepted at most once per visitor and photo, and only an accepted claim
moves the count.
"""
from __future__ import annotations

import logging
from typing import Any

from common import store
from common.api import not_found
from common.models import LikeLedger, LikeResult

logger = logging.getLogger(__name__)

LIKE_RESET_MIGRATION = 'reset_likes_v1'


def _stored_likes(record: dict[str, Any]) -> int:
    try:
        return max(0, int(record.get('likes') or 0))
    except (TypeError, ValueError, OverflowError):
        return 0


def record_claim(
    ledger: LikeLedger,
    records: list[dict[str, Any]],
    photo_id: str,
    visitor_hash: str,
) -> LikeResult:
    """Apply a like claim to in-memory documents.

    Mutates *ledger* and the matching entry of *records* only when the claim
    is new. Raises ``APIError`` (404) for an unknown photo before touching
    either document.
    """
    index = store.find_photo_record(records, photo_id)
    if index == -1:
        raise not_found()

    record = records[index]
    current = _stored_likes(record)
    claimed = ledger.claims.get(photo_id, set())
    if visitor_hash in claimed:
        return LikeResult(accepted=False, likes=current)

    ledger.claims[photo_id] = claimed | {visitor_hash}
    record['likes'] = current + 1
    return LikeResult(accepted=True, likes=current + 1)


def claim_like(photo_id: str, visitor_hash: str) -> LikeResult:
    """Record a like for *photo_id* by *visitor_hash* and persist it.

    The ledger is written first and rolled back if the photo document
    cannot be written, so a claim and its count update land together.
    """
    with store.locked():
        records = store.load_photo_records(strict=True)
        ledger = store.load_like_ledger()
        previous = ledger.copy()

        result = record_claim(ledger, records, photo_id, visitor_hash)
        if not result.accepted:
            return result

        store.save_like_ledger(ledger)
        try:
            store.save_photo_records(records)
        except OSError:
            logger.exception("Failed to save like count for %s; restoring claims", photo_id)
            store.save_like_ledger(previous)
            raise

    logger.debug("Accepted like for %s (now %d)", photo_id, result.likes)
    return result


def viewer_has_liked(ledger: LikeLedger, photo_id: str, visitor_hash: str) -> bool:
    return visitor_hash in ledger.claims.get(photo_id, ())


def apply_like_reset() -> bool:
    """Zero every like count and clear all claims, once per store.

    Returns True when the reset ran. The flag is checked after taking the
    store lock, so overlapping startups perform the reset at most once.
    """
    with store.locked():
        ledger = store.load_like_ledger()
        if ledger.migrations.get(LIKE_RESET_MIGRATION):
            logger.debug("Like reset already applied")
            return False

        try:
            records = store.load_photo_records(strict=True)
        except store.CorruptDocumentError as exc:
            logger.error("Skipping like reset, photo document needs repair: %s", exc)
            return False
        for record in records:
            record['likes'] = 0
        store.save_photo_records(records)

        ledger.claims.clear()
        ledger.migrations[LIKE_RESET_MIGRATION] = True
        store.save_like_ledger(ledger)

    logger.warning("Reset like counts on %d photo(s); claims now tracked per visitor", len(records))
    return True
