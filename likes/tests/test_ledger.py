from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from conftest import make_record

from common import store
from common.api import APIError
from common.models import LikeLedger
from likes import ledger as ledger_module
from likes.ledger import (
	LIKE_RESET_MIGRATION,
	apply_like_reset,
	claim_like,
	record_claim,
	viewer_has_liked,
)


def stored_likes(photo_id: str) -> int:
	for record in store.load_photo_records():
		if record['id'] == photo_id:
			return record['likes']
	raise AssertionError(f'{photo_id} missing')


def test_record_claim_is_idempotent_per_visitor() -> None:
	ledger = LikeLedger()
	records = [make_record('p', likes=0)]

	first = record_claim(ledger, records, 'p', 'visitor-a')
	again = record_claim(ledger, records, 'p', 'visitor-a')
	other = record_claim(ledger, records, 'p', 'visitor-b')

	assert (first.accepted, first.likes) == (True, 1)
	assert (again.accepted, again.likes) == (False, 1)
	assert (other.accepted, other.likes) == (True, 2)
	assert ledger.claims == {'p': {'visitor-a', 'visitor-b'}}
	assert records[0]['likes'] == 2


def test_record_claim_builds_on_existing_count() -> None:
	ledger = LikeLedger()
	records = [make_record('p', likes=7)]

	result = record_claim(ledger, records, 'p', 'visitor-a')

	assert result.likes == 8


def test_record_claim_unknown_photo_touches_nothing() -> None:
	ledger = LikeLedger()
	records = [make_record('p', likes=3)]

	with pytest.raises(APIError) as excinfo:
		record_claim(ledger, records, 'missing', 'visitor-a')

	assert excinfo.value.status == 404
	assert ledger.claims == {}
	assert records[0]['likes'] == 3


def test_claim_like_persists_claim_and_count(photo_store, data_dir: Path) -> None:
	photo_store(make_record('p'), make_record('q', likes=5))

	assert claim_like('p', 'visitor-a').accepted is True
	assert claim_like('p', 'visitor-a').accepted is False
	result = claim_like('p', 'visitor-b')

	assert result.likes == 2
	assert stored_likes('p') == 2
	assert stored_likes('q') == 5
	assert store.load_like_ledger().claims == {'p': {'visitor-a', 'visitor-b'}}


def test_claim_like_unknown_photo_writes_nothing(photo_store, data_dir: Path) -> None:
	photo_store(make_record('p'))
	before = (data_dir / store.PHOTOS_FILE).read_text()

	with pytest.raises(APIError):
		claim_like('nope', 'visitor-a')

	assert (data_dir / store.PHOTOS_FILE).read_text() == before
	assert not (data_dir / store.LIKES_FILE).exists()


def test_claim_like_restores_claims_when_count_write_fails(
	photo_store, data_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
	photo_store(make_record('p', likes=4))
	claim_like('p', 'visitor-a')

	def boom(_records) -> None:
		raise OSError('disk full')

	monkeypatch.setattr(ledger_module.store, 'save_photo_records', boom)

	with pytest.raises(OSError):
		claim_like('p', 'visitor-b')

	assert store.load_like_ledger().claims == {'p': {'visitor-a'}}
	assert stored_likes('p') == 5


def test_viewer_has_liked() -> None:
	ledger = LikeLedger(claims={'p': {'visitor-a'}})

	assert viewer_has_liked(ledger, 'p', 'visitor-a') is True
	assert viewer_has_liked(ledger, 'p', 'visitor-b') is False
	assert viewer_has_liked(ledger, 'other', 'visitor-a') is False


def test_like_reset_runs_once_across_startups(photo_store, data_dir: Path) -> None:
	photo_store(make_record('p', likes=14), make_record('q', likes=22))
	store.save_like_ledger(LikeLedger(claims={'p': {'legacy'}}))

	assert apply_like_reset() is True
	assert stored_likes('p') == 0
	assert stored_likes('q') == 0
	assert store.load_like_ledger().claims == {}

	claim_like('p', 'visitor-a')

	assert apply_like_reset() is False
	assert stored_likes('p') == 1
	assert store.load_like_ledger().claims == {'p': {'visitor-a'}}


def test_like_reset_sets_permanent_flag(photo_store, data_dir: Path) -> None:
	photo_store(make_record('p', likes=3))

	apply_like_reset()

	on_disk = json.loads((data_dir / store.LIKES_FILE).read_text())
	assert on_disk['migrations'] == {LIKE_RESET_MIGRATION: True}


def test_like_reset_skipped_when_flag_present(photo_store, data_dir: Path) -> None:
	photo_store(make_record('p', likes=9))
	store.save_like_ledger(LikeLedger(migrations={LIKE_RESET_MIGRATION: True}))

	assert apply_like_reset() is False
	assert stored_likes('p') == 9


def test_record_claim_treats_non_finite_count_as_zero() -> None:
	ledger = LikeLedger()
	records = [make_record('p', likes=float('inf'))]

	assert record_claim(ledger, records, 'p', 'visitor-a').likes == 1


def test_like_reset_leaves_damaged_photo_document_alone(data_dir: Path) -> None:
	damaged = '[{"id": "a", "likes": 3},]'
	(data_dir / store.PHOTOS_FILE).write_text(damaged)

	assert apply_like_reset() is False

	assert (data_dir / store.PHOTOS_FILE).read_text() == damaged
	assert LIKE_RESET_MIGRATION not in store.load_like_ledger().migrations


def test_like_reset_runs_once_under_concurrent_startups(photo_store, data_dir: Path) -> None:
	photo_store(make_record('p', likes=14), make_record('q', likes=22))
	results: list[bool] = []
	start = threading.Barrier(8)
	finished = threading.Event()

	def startup() -> None:
		start.wait()
		results.append(apply_like_reset())
		finished.set()

	threads = [threading.Thread(target=startup) for _ in range(8)]
	for thread in threads:
		thread.start()
	# Any finished call means the reset has been decided
	assert finished.wait(timeout=10)
	claim_like('p', 'visitor-a')
	for thread in threads:
		thread.join()

	assert results.count(True) == 1
	assert len(results) == 8
	assert stored_likes('p') == 1
	assert store.load_like_ledger().claims == {'p': {'visitor-a'}}
