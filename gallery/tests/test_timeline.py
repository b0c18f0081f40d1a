from __future__ import annotations

from datetime import date

import pytest

from conftest import make_record

from common.models import Photo
from common.utils import season_progress
from gallery.services import compute_timeline


def photos(*records) -> list[Photo]:
	return [Photo.from_record(record) for record in records]


def buckets(timeline) -> list[tuple[str, int, int]]:
	return [(summary.season, summary.year, summary.count) for summary in timeline]


def test_counts_and_fills_gaps_back_to_spring_2023() -> None:
	timeline = compute_timeline(
		photos(
			make_record('a', 'spring', 2024),
			make_record('b', 'spring', 2024),
			make_record('c', 'winter', 2023),
		),
		date(2024, 5, 1),
	)

	assert buckets(timeline) == [
		('spring', 2024, 2),
		('winter', 2023, 1),
		('autumn', 2023, 0),
		('summer', 2023, 0),
		('spring', 2023, 0),
	]


def test_empty_gallery_at_start_yields_single_bucket() -> None:
	timeline = compute_timeline([], date(2023, 4, 10))

	assert buckets(timeline) == [('spring', 2023, 0)]
	assert timeline[0].cover_image == ''


def test_today_before_start_is_clamped() -> None:
	timeline = compute_timeline([], date(2021, 7, 1))

	assert buckets(timeline) == [('spring', 2023, 0)]


def test_future_photo_extends_the_timeline() -> None:
	timeline = compute_timeline(photos(make_record('x', 'summer', 2026)), date(2025, 10, 1))

	assert (timeline[0].season, timeline[0].year, timeline[0].count) == ('summer', 2026, 1)
	assert (timeline[1].season, timeline[1].year) == ('spring', 2026)


def test_winter_months_use_calendar_year() -> None:
	january = compute_timeline([], date(2024, 1, 15))
	december = compute_timeline([], date(2023, 12, 15))

	assert (january[0].season, january[0].year) == ('winter', 2024)
	assert (december[0].season, december[0].year) == ('winter', 2023)


def test_invalid_photos_are_ignored() -> None:
	timeline = compute_timeline(
		photos(
			make_record('ok', 'Summer', '2023'),
			make_record('bad-season', 'monsoon', 2023),
			make_record('bad-year', 'summer', 'soon'),
			make_record('no-year', 'summer', None),
		),
		date(2023, 8, 1),
	)

	assert buckets(timeline) == [('summer', 2023, 1), ('spring', 2023, 0)]


def test_cover_is_most_recent_photo_with_an_image() -> None:
	timeline = compute_timeline(
		photos(
			make_record('old', 'autumn', 2023, date_taken='2023-09-02', image_url='/uploads/old.jpg'),
			make_record('blank', 'autumn', 2023, date_taken='2023-11-20', image_url=''),
			make_record('new', 'autumn', 2023, date_taken='2023-10-30', image_url='/uploads/new.jpg'),
		),
		date(2023, 11, 25),
	)

	autumn = timeline[0]
	assert (autumn.season, autumn.count) == ('autumn', 3)
	assert autumn.cover_image == '/uploads/new.jpg'


def test_created_at_is_used_when_date_taken_missing() -> None:
	timeline = compute_timeline(
		photos(
			make_record('earlier', 'spring', 2023, created_at='2023-03-01T10:00:00.000Z', image_url='/a.jpg'),
			make_record('later', 'spring', 2023, created_at='2023-04-01T10:00:00.000Z', image_url='/b.jpg'),
			make_record('garbled', 'spring', 2023, date_taken='not a date', image_url='/c.jpg'),
		),
		date(2023, 4, 10),
	)

	assert timeline[0].count == 3
	assert timeline[0].cover_image == '/b.jpg'


def test_wire_format() -> None:
	timeline = compute_timeline(photos(make_record('a', 'autumn', 2023)), date(2023, 10, 1))

	assert timeline[0].to_dict() == {
		'season': 'autumn',
		'seasonLabel': 'Autumn',
		'year': 2023,
		'count': 1,
		'coverImage': 'https://example.com/a.jpg',
	}


@pytest.mark.parametrize(
	'today',
	[date(2023, 3, 1), date(2023, 12, 31), date(2024, 2, 29), date(2025, 6, 15), date(2030, 11, 30)],
)
def test_timeline_is_gapless_and_strictly_descending(today: date) -> None:
	gallery = photos(
		make_record('a', 'winter', 2023),
		make_record('b', 'summer', 2027),
		make_record('c', 'spring', 2019),
		make_record('d', 'autumn', 2024),
	)

	timeline = compute_timeline(gallery, today)
	progress = [season_progress(summary.year, summary.season) for summary in timeline]

	assert progress[-1] == season_progress(2023, 'spring')
	assert all(a - b == 1 for a, b in zip(progress, progress[1:]))
	assert progress[0] >= season_progress(2027, 'summer')
	assert sum(summary.count for summary in timeline) == 3


def test_out_of_range_years_do_not_stretch_the_timeline() -> None:
	timeline = compute_timeline(
		photos(
			make_record('far', 'spring', 1_000_000),
			make_record('huge', 'spring', '1e308'),
			make_record('ancient', 'spring', 1066),
			make_record('ok', 'spring', 2023),
		),
		date(2023, 4, 1),
	)

	assert buckets(timeline) == [('spring', 2023, 1)]
