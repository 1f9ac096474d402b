"""
Data models for the Ampere search service.
Defines the core data structures shared by the index, the search engine and the intent parser.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass  # auto-generates __init__, __repr__, etc.
# Enum gives the intent parser a closed set of actions
from enum import Enum  # enumerated action kinds
# Import typing helpers for precise and self-documenting types
from typing import List, Optional  # lists and optional values


# Content types the index accepts
CONTENT_TYPES = ("movie", "series")


@dataclass(frozen=True)
class Platform:
	"""
	A streaming service in the platform catalog.
	Only id and label are needed by search; the rest feeds catalog lookups.
	"""
	id: str  # canonical platform id (e.g., "netflix")
	label: str  # display name (e.g., "Netflix")
	kind: Optional[str] = None  # streaming, sports, kids, livetv, gaming or niche
	genres: tuple = ()  # catalog genre keys this platform belongs to
	note: Optional[str] = None  # free-form hint, also searchable


@dataclass(frozen=True)
class ContentItem:
	"""
	One piece of watchable content on one platform.
	Items are built once at startup and never mutated afterwards.
	"""
	id: str  # platform id + "_" + normalized title, unique across the index
	title: str  # display title, non-empty
	platform_id: str  # references a Platform.id
	genre: str  # free-text category label (e.g., "Basic", "Premium", "Kids")
	type: str  # one of CONTENT_TYPES
	year: Optional[int] = None  # release year when known


@dataclass
class ScoredResult:
	"""A ContentItem as seen by a single search request."""
	item: ContentItem  # matched item
	match_score: float  # relevance in [0, 1]
	platform: str  # resolved platform label (falls back to the raw id)


@dataclass
class SearchOutcome:
	"""Everything one search produces."""
	results: List[ScoredResult]  # ranked and truncated to the limit
	total_count: int  # matches before truncation
	search_time_ms: float  # elapsed wall-clock time, observability only


class IntentAction(str, Enum):
	SEARCH = "search"
	LAUNCH = "launch"
	PLAY = "play"
	POWER = "power"
	NAVIGATE = "navigate"
	VOLUME = "volume"
	UNKNOWN = "unknown"


@dataclass
class ParsedIntent:
	"""
	Structured meaning of a voice/text command.
	target carries a platform id or a device argument; query carries free text.
	"""
	action: IntentAction  # what the user wants to do
	target: Optional[str] = None  # e.g., "netflix", "on", "up"
	query: Optional[str] = None  # e.g., "batman"

	def to_dict(self) -> dict:
		"""Serialize without the empty fields."""
		out = {"action": self.action.value}
		if self.target is not None:
			out["target"] = self.target
		if self.query is not None:
			out["query"] = self.query
		return out
