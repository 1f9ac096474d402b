"""
Tests for match scoring.
"""

import pytest

from ampere_search.models import ContentItem
from ampere_search.ranking import Ranker


ITEM = ContentItem(id="hulu_thebear", title="The Bear", platform_id="hulu", genre="Basic", type="series", year=2022)


def test_exact_prefix_and_plain_scores():
	ranker = Ranker()
	assert ranker.score(ITEM, "the bear") == pytest.approx(1.0)
	assert ranker.score(ITEM, "the b") == pytest.approx(0.8)
	assert ranker.score(ITEM, "bear") == pytest.approx(0.5)


def test_no_query_is_flat_base():
	assert Ranker().score(ITEM, "") == pytest.approx(0.5)


def test_score_is_capped():
	ranker = Ranker(base_score=0.9)
	assert ranker.score(ITEM, "the bear") == 1.0
