"""
Content source loading module.
Supplies the per-platform title table the content index is built from,
either the built-in demo table or a JSON file with the same shape.
"""

# Standard libs for JSON parsing, typing, and paths
import json  # read the JSON source table
from typing import Dict, List, Optional  # type hints
from pathlib import Path  # filesystem-safe paths

# Content types accepted in a source row
from .models import CONTENT_TYPES  # allowed "type" values

# Console logging
from loguru import logger  # console logger


# A source table maps platform id -> list of rows {title, genre, type, year}
SourceTable = Dict[str, List[Dict]]


# Demo corpus: a handful of well-known titles per platform
DEMO_CONTENT: SourceTable = {
	"netflix": [
		{"title": "Stranger Things", "genre": "Basic", "type": "series", "year": 2016},
		{"title": "Wednesday", "genre": "Basic", "type": "series", "year": 2022},
		{"title": "Glass Onion", "genre": "Movies", "type": "movie", "year": 2022},
		{"title": "The Queen's Gambit", "genre": "Basic", "type": "series", "year": 2020},
		{"title": "Squid Game", "genre": "Basic", "type": "series", "year": 2021},
	],
	"disneyplus": [
		{"title": "The Mandalorian", "genre": "Basic", "type": "series", "year": 2019},
		{"title": "Loki", "genre": "Basic", "type": "series", "year": 2021},
		{"title": "Inside Out 2", "genre": "Kids", "type": "movie", "year": 2024},
	],
	"hulu": [
		{"title": "The Bear", "genre": "Basic", "type": "series", "year": 2022},
		{"title": "Only Murders in the Building", "genre": "Basic", "type": "series", "year": 2021},
	],
	"max": [
		{"title": "The Last of Us", "genre": "Premium", "type": "series", "year": 2023},
		{"title": "House of the Dragon", "genre": "Premium", "type": "series", "year": 2022},
		{"title": "Succession", "genre": "Premium", "type": "series", "year": 2018},
	],
	"primevideo": [
		{"title": "The Boys", "genre": "Premium", "type": "series", "year": 2019},
		{"title": "Reacher", "genre": "Basic", "type": "series", "year": 2022},
		{"title": "The Lord of the Rings: Rings of Power", "genre": "Premium", "type": "series", "year": 2022},
	],
	"appletv": [
		{"title": "Ted Lasso", "genre": "Premium", "type": "series", "year": 2020},
		{"title": "Severance", "genre": "Premium", "type": "series", "year": 2022},
	],
	"peacock": [
		{"title": "Poker Face", "genre": "Basic", "type": "series", "year": 2023},
		{"title": "Bel-Air", "genre": "Basic", "type": "series", "year": 2022},
	],
	"paramountplus": [
		{"title": "Yellowjackets", "genre": "Basic", "type": "series", "year": 2021},
		{"title": "Star Trek: Strange New Worlds", "genre": "Basic", "type": "series", "year": 2022},
	],
}


class DataLoader:
	"""
	Handles loading and validating content source tables.
	"""

	def load_source(self, filepath: Optional[str] = None) -> SourceTable:
		"""Return the table at filepath when given, otherwise the built-in demo table."""
		if not filepath:  # nothing configured
			logger.info("[DataLoader] Using built-in demo content table")  # log choice
			return DEMO_CONTENT  # default corpus
		return self.load_source_from_json(filepath)  # file-backed corpus

	def load_source_from_json(self, filepath: str) -> SourceTable:
		"""
		Load a source table from a JSON object keyed by platform id.
		Rows that fail validation are skipped with a warning.
		"""
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"Content source file not found: {filepath}")

		logger.info(f"[DataLoader] Loading content source from {filepath}...")  # log action

		with open(filepath, 'r', encoding='utf-8') as f:
			raw = json.load(f)  # whole table at once; corpora are small

		if not isinstance(raw, dict):  # top level must map platform -> rows
			raise ValueError(f"Content source must be a JSON object keyed by platform id: {filepath}")

		table: SourceTable = {}  # accumulator, keeps file order
		kept = 0  # rows accepted
		for platform_id, rows in raw.items():  # each platform block
			if not isinstance(rows, list):  # malformed block
				logger.warning(f"[DataLoader] Skipping platform '{platform_id}': rows must be a list")
				continue  # move on
			clean = []  # validated rows for this platform
			for pos, row in enumerate(rows, 1):  # keep position for diagnostics
				try:
					clean.append(self._parse_row(row))  # validate + normalize
				except (TypeError, ValueError) as e:
					logger.warning(f"[DataLoader] Skipping row {pos} of '{platform_id}': {e}")  # bad row
					continue  # move on
			table[str(platform_id)] = clean  # store platform block
			kept += len(clean)  # count

		logger.info(f"[DataLoader] Loaded {kept} titles across {len(table)} platforms.")  # summary
		return table  # return table

	def _parse_row(self, row: Dict) -> Dict:
		"""
		Convert a raw row into a clean {title, genre, type, year} dict.
		Raises ValueError for rows the index cannot use.
		"""
		if not isinstance(row, dict):  # rows are objects
			raise TypeError("row must be an object")

		title = str(row.get('title') or '').strip()  # display title
		if not title:
			raise ValueError("title is required")

		content_type = str(row.get('type') or '').strip()  # movie / series
		if content_type not in CONTENT_TYPES:
			raise ValueError(f"type must be one of {CONTENT_TYPES}, got '{content_type}'")

		year = row.get('year')  # optional
		if year is not None:
			year = int(year)  # numeric strings are fine
			if year <= 0:
				raise ValueError(f"year must be positive, got {year}")

		return {
			'title': title,
			'genre': str(row.get('genre') or '').strip(),  # free-text label
			'type': content_type,
			'year': year,
		}
