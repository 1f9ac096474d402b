"""
Build and validate the content index.

This script:
1) Loads the content source (CONTENT_SOURCE_PATH, or the built-in demo table)
2) Builds the index, failing on duplicate content ids or malformed rows
3) Checks every platform id against the platform catalog
4) Logs per-platform, per-genre and per-type counts, plus catalog coverage

Usage:
    python -m scripts.build_index

Run it after editing a source file; the API builds the same index at startup.
"""

import time  # measure step timings
from collections import Counter  # per-field counts
from typing import Dict, List, Sequence, Tuple  # type annotations

from loguru import logger  # console logging

from ampere_search.catalog import PlatformCatalog  # platform id validation
from ampere_search.config import get_settings  # configured source path
from ampere_search.content_index import build_index  # corpus builder
from ampere_search.data_loader import DataLoader  # source table loading
from ampere_search.models import ContentItem  # corpus record


def unknown_platforms(items: Sequence[ContentItem], catalog: PlatformCatalog) -> Tuple[List[str], Dict[str, str]]:
	"""
	Platform ids the catalog does not know, sorted.
	Also maps each one that is really a label ("Prime Video") to the id it should be.
	"""
	unknown = sorted({i.platform_id for i in items if catalog.platform_by_id(i.platform_id) is None})
	hints = {}
	for pid in unknown:
		suggested = catalog.platform_id_from_label(pid)
		if suggested:
			hints[pid] = suggested
	return unknown, hints


def genre_shelves(items: Sequence[ContentItem], catalog: PlatformCatalog) -> Dict[str, List[str]]:
	"""For each content genre, the indexed platforms the catalog also shelves under it."""
	indexed = {i.platform_id for i in items}
	shelves = {}
	for genre in sorted({i.genre for i in items if i.genre}):
		shelves[genre] = [pid for pid in catalog.platforms_for_genre(genre) if pid in indexed]
	return shelves


def catalog_coverage(items: Sequence[ContentItem], catalog: PlatformCatalog) -> Tuple[int, int]:
	"""(catalog platforms with at least one title, catalog size)."""
	indexed = {i.platform_id for i in items}
	all_ids = catalog.platforms_for_genre("All")
	return sum(1 for pid in all_ids if pid in indexed), len(all_ids)


def main():
	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Build Content Index")
	logger.info("=" * 60)

	# 1) Load source
	settings = get_settings()  # env-driven settings
	logger.info("[1/3] Loading content source...")
	source = DataLoader().load_source(settings.CONTENT_SOURCE_PATH)  # table
	logger.info(f"[OK] {sum(len(rows) for rows in source.values())} rows across {len(source)} platforms")

	# 2) Build index
	logger.info("[2/3] Building index...")
	t0 = time.time()  # start timer
	items = build_index(source)  # raises IndexBuildError on duplicate ids or bad rows
	logger.info(f"[OK] Index built with {len(items)} items in {(time.time() - t0) * 1000:.2f} ms")

	# 3) Validate platforms and report
	logger.info("[3/3] Validating platforms...")
	catalog = PlatformCatalog()  # default catalog
	unknown, hints = unknown_platforms(items, catalog)
	if unknown:
		logger.warning(f"Platforms missing from catalog (labels will fall back to ids): {unknown}")
		for pid, suggested in hints.items():
			logger.warning(f"  '{pid}' is a platform label; key it as '{suggested}'")
	else:
		logger.info("[OK] All platforms known to the catalog")

	covered, total = catalog_coverage(items, catalog)
	logger.info(f"Catalog coverage: {covered}/{total} platforms have content")

	for title, counts in (
		("platform", Counter(catalog.label_for(i.platform_id) for i in items)),
		("genre", Counter(i.genre for i in items)),
		("type", Counter(i.type for i in items)),
	):
		logger.info(f"By {title}:")
		for key, n in counts.most_common():
			logger.info(f"  {key}: {n}")

	logger.info("Indexed platforms shelved under each genre:")
	for genre, pids in genre_shelves(items, catalog).items():
		logger.info(f"  {genre}: {', '.join(pids) or '-'}")

	# Footer
	logger.info("=" * 60)


if __name__ == '__main__':
	main()  # invoke builder
