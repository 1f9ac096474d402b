"""
Tests for the index validation script's platform checks and reports.
"""

from ampere_search.content_index import build_index
from scripts.build_index import catalog_coverage, genre_shelves, unknown_platforms


def test_unknown_platforms_with_label_hints(catalog):
	items = build_index({
		"netflix": [{"title": "Loki", "genre": "Basic", "type": "series"}],
		"Prime Video": [{"title": "Reacher", "genre": "Basic", "type": "series"}],
		"indieflix": [{"title": "Night Owls", "genre": "Arthouse", "type": "movie"}],
	})
	unknown, hints = unknown_platforms(items, catalog)
	assert unknown == ["Prime Video", "indieflix"]
	assert hints == {"Prime Video": "primevideo"}


def test_all_known_platforms(catalog):
	items = build_index({"hulu": [{"title": "The Bear", "genre": "Basic", "type": "series"}]})
	assert unknown_platforms(items, catalog) == ([], {})


def test_genre_shelves_only_lists_indexed_platforms(source, catalog):
	shelves = genre_shelves(build_index(source), catalog)
	assert list(shelves) == ["Arthouse", "Basic", "Kids", "Movies", "Premium"]
	assert shelves["Basic"] == ["netflix", "hulu", "max"]
	assert shelves["Movies"] == ["netflix", "hulu", "max"]
	assert shelves["Kids"] == []


def test_catalog_coverage_ignores_unknown_platforms(source, catalog):
	covered, total = catalog_coverage(build_index(source), catalog)
	assert covered == 3
	assert total == len(catalog.all_ids) == len(catalog)
