"""
Search engine module.
Filters the content index, scores what survives, and returns a ranked, truncated page.
"""

import time  # wall-clock timing for searchTimeMs
from typing import Iterable, List, Optional  # type annotations for clarity

# Import project modules for data structures and components
from .catalog import PlatformCatalog  # platform labels
from .content_index import ContentIndex  # corpus
from .exceptions import MissingQueryError  # input validation
from .models import ScoredResult, SearchOutcome  # result containers
from .ranking import Ranker  # match scoring

# Import loguru for console logging
from loguru import logger  # simple structured logger


DEFAULT_LIMIT = 20
MIN_LIMIT = 1
MAX_LIMIT = 50


def clamp_limit(limit: Optional[int], default: int = DEFAULT_LIMIT, max_limit: int = MAX_LIMIT) -> int:
	"""Clamp a requested page size into [1, max_limit]; None means default."""
	if limit is None:
		limit = default
	return max(MIN_LIMIT, min(max_limit, int(limit)))


class SearchEngine:
	"""
	Federated search over the in-memory content index.
	Stateless per call: the index and catalog are only read.
	"""
	def __init__(
		self,
		index: ContentIndex,  # corpus to search
		catalog: Optional[PlatformCatalog] = None,  # label lookups
		ranker: Optional[Ranker] = None,  # match scoring
		default_limit: int = DEFAULT_LIMIT,  # page size when unspecified
		max_limit: int = MAX_LIMIT,  # hard page size ceiling
	):
		self.index = index  # keep corpus reference
		self.catalog = catalog or PlatformCatalog()  # default catalog
		self.ranker = ranker or Ranker()  # ranker instance
		self.default_limit = default_limit
		self.max_limit = max_limit
		logger.info(f"[Engine] Ready over {len(index)} items (default_limit={default_limit}, max_limit={max_limit})")

	def search(
		self,
		query: Optional[str] = "",
		platform_filter: Optional[Iterable[str]] = None,
		genre_filter: Optional[str] = None,
		type_filter: Optional[str] = None,
		limit: Optional[int] = None,
	) -> SearchOutcome:
		"""Filter, score, sort and truncate. Raises MissingQueryError when nothing constrains the search."""
		q = (query or "").strip()  # normalize spaces
		platforms = {p for p in (platform_filter or ()) if p}  # drop empty ids
		genre = genre_filter or ""
		content_type = type_filter or ""

		# Nothing to search for: reject before touching the index
		if not q and not platforms and not genre:
			logger.debug("[Engine] Rejected search with no query, platforms or genre")
			raise MissingQueryError()

		limit = clamp_limit(limit, default=self.default_limit, max_limit=self.max_limit)  # page size
		start = time.perf_counter()  # start timer
		q_lower = q.lower()  # case-insensitive matching
		genre_lower = genre.lower()

		results: List[ScoredResult] = []  # accumulator
		for item in self.index:  # single pass, index order
			# Text match on title, platform id, or genre
			if q_lower and not (
				q_lower in item.title.lower()
				or q_lower in item.platform_id
				or q_lower in item.genre.lower()
			):
				continue

			# Platform filter (membership)
			if platforms and item.platform_id not in platforms:
				continue

			# Genre filter (case-insensitive equality)
			if genre and item.genre.lower() != genre_lower:
				continue

			# Type filter (exact)
			if content_type and item.type != content_type:
				continue

			score = self.ranker.score(item, q_lower)  # match score
			logger.debug(f"[Engine] Candidate kept | item={item.id} | score={score:.2f}")
			results.append(ScoredResult(item=item, match_score=score, platform=self.catalog.label_for(item.platform_id)))

		# list.sort is stable, so equal scores keep index order
		results.sort(key=lambda r: r.match_score, reverse=True)  # sort
		total = len(results)  # before truncation
		elapsed_ms = (time.perf_counter() - start) * 1000  # compute ms

		logger.info(f"[Engine] q='{q}' platforms={sorted(platforms)} genre='{genre}' type='{content_type}' | returning {min(limit, total)} of {total} in {elapsed_ms:.2f} ms")
		return SearchOutcome(results=results[:limit], total_count=total, search_time_ms=elapsed_ms)
