"""
Shared fixtures: a small synthetic corpus and the components built over it.
"""

import pytest

from ampere_search.catalog import PlatformCatalog
from ampere_search.content_index import ContentIndex, reset_content_index
from ampere_search.intent_parser import IntentParser
from ampere_search.search_engine import SearchEngine


SYNTHETIC_SOURCE = {
	"netflix": [
		{"title": "Batman", "genre": "Movies", "type": "movie", "year": 1989},
		{"title": "Batman Returns", "genre": "Movies", "type": "movie", "year": 1992},
		{"title": "The Batman", "genre": "Movies", "type": "movie", "year": 2022},
		{"title": "Stranger Things", "genre": "Basic", "type": "series", "year": 2016},
	],
	"hulu": [
		{"title": "The Bear", "genre": "Basic", "type": "series", "year": 2022},
		{"title": "Batman Beyond", "genre": "Kids", "type": "series", "year": 1999},
	],
	"max": [
		{"title": "Succession", "genre": "Premium", "type": "series", "year": 2018},
	],
	# not in the platform catalog
	"indieflix": [
		{"title": "Night Owls", "genre": "Arthouse", "type": "movie"},
	],
}


@pytest.fixture
def source():
	return SYNTHETIC_SOURCE


@pytest.fixture
def catalog():
	return PlatformCatalog()


@pytest.fixture
def index(source):
	return ContentIndex.from_source(source)


@pytest.fixture
def engine(index, catalog):
	return SearchEngine(index, catalog=catalog)


@pytest.fixture
def parser(catalog):
	return IntentParser(catalog)


@pytest.fixture(autouse=True)
def fresh_global_index():
	"""Every test starts without a process-wide index."""
	reset_content_index()
	yield
	reset_content_index()
