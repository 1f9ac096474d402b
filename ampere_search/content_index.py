"""
Content index module.
Builds the immutable corpus the search engine reads, and owns the one process-wide instance.
"""

import threading  # one-time initialization guard
from typing import Dict, Iterator, Optional, Tuple  # type annotations

from loguru import logger  # console logging

from .catalog import normalize_key  # id normalization
from .data_loader import DEMO_CONTENT, SourceTable  # default source table
from .exceptions import IndexBuildError  # duplicate ids, malformed rows
from .models import CONTENT_TYPES, ContentItem  # corpus record


def make_content_id(platform_id: str, title: str) -> str:
	return f"{platform_id}_{normalize_key(title)}"


def _check_row(platform_id: str, pos: int, row: Dict) -> None:
	"""Reject rows that would yield an item the engine cannot filter or score."""
	where = f"Row {pos} of '{platform_id}'"
	title = row.get("title")
	if not isinstance(title, str) or not title.strip():
		raise IndexBuildError(f"{where}: title must be a non-empty string, got {title!r}")
	if row.get("type") not in CONTENT_TYPES:
		raise IndexBuildError(f"{where}: type must be one of {CONTENT_TYPES}, got {row.get('type')!r}")
	year = row.get("year")
	if year is not None and (isinstance(year, bool) or not isinstance(year, int) or year <= 0):
		raise IndexBuildError(f"{where}: year must be a positive integer, got {year!r}")
	if not isinstance(row.get("genre", ""), str):
		raise IndexBuildError(f"{where}: genre must be a string, got {row.get('genre')!r}")


def build_index(source: Optional[SourceTable] = None) -> Tuple[ContentItem, ...]:
	"""
	Turn a source table into ContentItems, in table order then row order.
	Pure: the same table always yields the same sequence.
	"""
	table = DEMO_CONTENT if source is None else source
	items = []
	seen: Dict[str, str] = {}  # id -> title that produced it
	for platform_id, rows in table.items():
		for pos, row in enumerate(rows):
			_check_row(platform_id, pos, row)
			title = row["title"]
			item_id = make_content_id(platform_id, title)
			if item_id in seen:
				raise IndexBuildError(
					f"Duplicate content id '{item_id}' from titles '{seen[item_id]}' and '{title}'"
				)
			seen[item_id] = title
			items.append(ContentItem(
				id=item_id,
				title=title,
				platform_id=platform_id,
				genre=row.get("genre", ""),
				type=row["type"],
				year=row.get("year"),
			))
	logger.debug(f"[Index] Built {len(items)} items from {len(table)} platforms")
	return tuple(items)


class ContentIndex:
	"""Read-only view over a built corpus."""

	def __init__(self, items: Tuple[ContentItem, ...]):
		self._items = tuple(items)

	@classmethod
	def from_source(cls, source: Optional[SourceTable] = None) -> "ContentIndex":
		return cls(build_index(source))

	@property
	def items(self) -> Tuple[ContentItem, ...]:
		return self._items

	def __len__(self) -> int:
		return len(self._items)

	def __iter__(self) -> Iterator[ContentItem]:
		return iter(self._items)


# Process-wide index; created by init_content_index() and never replaced until reset
_INDEX: Optional[ContentIndex] = None
_INDEX_LOCK = threading.Lock()


def init_content_index(source: Optional[SourceTable] = None) -> ContentIndex:
	"""
	Build the process-wide index on first call and return it.
	Later calls return the existing index and ignore source.
	"""
	global _INDEX
	with _INDEX_LOCK:
		if _INDEX is None:
			_INDEX = ContentIndex.from_source(source)
			logger.info(f"[Index] Content index ready with {len(_INDEX)} items")
		return _INDEX


def get_content_index() -> ContentIndex:
	"""Return the process-wide index, building it from the demo table if nobody initialized it."""
	if _INDEX is not None:
		return _INDEX
	return init_content_index()


def reset_content_index() -> None:
	"""Forget the process-wide index so the next init builds a fresh one (tests, reloads)."""
	global _INDEX
	with _INDEX_LOCK:
		_INDEX = None
