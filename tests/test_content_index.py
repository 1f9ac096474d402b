"""
Tests for content index construction and the process-wide index lifecycle.
"""

import pytest

from ampere_search.content_index import (
	ContentIndex,
	build_index,
	get_content_index,
	init_content_index,
	make_content_id,
)
from ampere_search.data_loader import DEMO_CONTENT
from ampere_search.exceptions import IndexBuildError


def test_ids_are_platform_plus_normalized_title():
	assert make_content_id("netflix", "The Queen's Gambit") == "netflix_thequeensgambit"
	assert make_content_id("primevideo", "The Lord of the Rings: Rings of Power") == "primevideo_thelordoftheringsringsofpower"
	assert make_content_id("disneyplus", "Inside Out 2") == "disneyplus_insideout2"


def test_build_follows_table_then_row_order(source):
	items = build_index(source)
	assert [i.id for i in items[:3]] == ["netflix_batman", "netflix_batmanreturns", "netflix_thebatman"]
	assert items[-1].platform_id == "indieflix"
	assert items[-1].year is None
	assert len(items) == sum(len(rows) for rows in source.values())


def test_build_is_idempotent():
	first = build_index(DEMO_CONTENT)
	second = build_index(DEMO_CONTENT)
	assert first == second
	assert [i.id for i in first] == [i.id for i in second]


def test_demo_ids_are_unique():
	items = build_index()
	assert len({i.id for i in items}) == len(items) == 22


def test_duplicate_ids_are_rejected():
	# Both titles normalize to "belair"
	table = {"peacock": [
		{"title": "Bel-Air", "genre": "Basic", "type": "series"},
		{"title": "Bel Air", "genre": "Basic", "type": "series"},
	]}
	with pytest.raises(IndexBuildError, match="peacock_belair"):
		build_index(table)


def test_same_title_on_two_platforms_is_fine():
	table = {
		"netflix": [{"title": "Loki", "genre": "Basic", "type": "series"}],
		"disneyplus": [{"title": "Loki", "genre": "Basic", "type": "series"}],
	}
	assert [i.id for i in build_index(table)] == ["netflix_loki", "disneyplus_loki"]


def test_index_iterates_in_build_order(index):
	assert len(index) == 8
	assert [i.id for i in index][4] == "hulu_thebear"
	assert list(index) == list(index.items)


def test_items_are_immutable(index):
	item = next(i for i in index if i.id == "max_succession")
	with pytest.raises(Exception):
		item.title = "Something Else"


def test_init_runs_once(source):
	first = init_content_index(source)
	second = init_content_index(DEMO_CONTENT)
	assert first is second
	assert first.items[0].id == "netflix_batman"
	assert get_content_index() is first


def test_get_builds_demo_index_when_uninitialized():
	idx = get_content_index()
	assert isinstance(idx, ContentIndex)
	assert "netflix_strangerthings" in {i.id for i in idx}


@pytest.mark.parametrize("row, message", [
	({"title": "", "genre": "Basic", "type": "movie"}, "title"),
	({"title": "   ", "genre": "Basic", "type": "movie"}, "title"),
	({"genre": "Basic", "type": "movie"}, "title"),
	({"title": "Loki", "genre": "Basic", "type": "film"}, "type"),
	({"title": "Loki", "genre": "Basic"}, "type"),
	({"title": "Loki", "genre": "Basic", "type": "series", "year": -5}, "year"),
	({"title": "Loki", "genre": "Basic", "type": "series", "year": 0}, "year"),
	({"title": "Loki", "genre": "Basic", "type": "series", "year": "2021"}, "year"),
	({"title": "Loki", "genre": "Basic", "type": "series", "year": True}, "year"),
	({"title": "Loki", "genre": None, "type": "series"}, "genre"),
	({"title": "Loki", "genre": 7, "type": "series"}, "genre"),
])
def test_malformed_rows_are_rejected(row, message):
	table = {"netflix": [{"title": "Batman", "genre": "Basic", "type": "movie"}, row]}
	with pytest.raises(IndexBuildError, match=rf"Row 1 of 'netflix': {message}"):
		build_index(table)


def test_missing_genre_defaults_to_empty_and_year_is_optional():
	items = build_index({"netflix": [{"title": "Loki", "type": "series"}]})
	assert items[0].genre == ""
	assert items[0].year is None
