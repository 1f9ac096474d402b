"""
Intent parsing module.
Classifies a free-text voice/remote command into a structured ParsedIntent.
Rules are tried in a fixed order and the first match wins; unrecognized
commands fall back to a platform-name lookup and then to "unknown".
"""

import re  # rule patterns
from typing import Callable, List, Optional, Tuple  # type annotations

from loguru import logger  # console logging

from .catalog import PlatformCatalog  # platform name resolution
from .models import IntentAction, ParsedIntent  # structured result


# (name, matcher, builder): matcher runs on the lowercased command, builder gets the match, the trimmed command and its lowercased copy
Rule = Tuple[str, Callable[[str], Optional["re.Match"]], Callable[["re.Match", str, str], ParsedIntent]]


class IntentParser:
	"""
	Rule-based command classifier.
	Patterns run against the lowercased command; extracted text is cut from the
	original command using the same span, so "Search Batman" keeps "Batman".
	"""

	# Pre-compiled patterns, listed in evaluation order
	RE_SEARCH = re.compile(r"^(search|find|look for)\s+")  # search batman
	RE_LAUNCH = re.compile(r"^(switch to|open|launch|go to)\s+")  # switch to netflix
	RE_PLAY = re.compile(r"^(play|resume|watch)\s+")  # play the bear
	RE_POWER = re.compile(r"power\s*(on|off)")  # power on, tv power off
	RE_NAVIGATE = re.compile(r"home|live|favs|favorites|search")  # whole-string screens
	RE_VOLUME = re.compile(r"^(volume|vol)\s*(up|down|mute|\d+(?:\.\d+)?)")  # volume up, vol 30

	def __init__(self, catalog: Optional[PlatformCatalog] = None):
		self.catalog = catalog or PlatformCatalog()
		self.rules: List[Rule] = [
			("search", self.RE_SEARCH.match, self._build_search),
			("launch", self.RE_LAUNCH.match, self._build_launch),
			("play", self.RE_PLAY.match, self._build_play),
			("power", self.RE_POWER.search, self._build_power),
			("navigate", self.RE_NAVIGATE.fullmatch, self._build_navigate),
			("volume", self.RE_VOLUME.match, self._build_volume),
		]

	def parse(self, command: str) -> ParsedIntent:
		"""Main entry: never raises; anything unrecognized is UNKNOWN."""
		original = (command or "").strip()
		lowered = original.lower()
		logger.debug(f"[Intent] Input command: '{command}' -> normalized: '{lowered}'")

		for name, matcher, build in self.rules:
			m = matcher(lowered)
			if m:
				intent = build(m, original, lowered)
				logger.debug(f"[Intent] Rule '{name}' matched -> {intent.to_dict()}")
				return intent

		return self._fallback(original)

	def _remainder(self, m: "re.Match", original: str, lowered: str) -> str:
		# Lowercasing can change length for a few non-ASCII characters; the span is only valid when it didn't
		source = original if len(original) == len(lowered) else lowered
		return source[m.end():].strip()

	def _build_search(self, m, original, lowered) -> ParsedIntent:
		return ParsedIntent(action=IntentAction.SEARCH, query=self._remainder(m, original, lowered))

	def _build_launch(self, m, original, lowered) -> ParsedIntent:
		target = self._remainder(m, original, lowered)
		platform_id = self._resolve_platform(target)
		return ParsedIntent(action=IntentAction.LAUNCH, target=platform_id or target)

	def _build_play(self, m, original, lowered) -> ParsedIntent:
		return ParsedIntent(action=IntentAction.PLAY, query=self._remainder(m, original, lowered))

	def _build_power(self, m, original, lowered) -> ParsedIntent:
		state = "on" if m.group(1) == "on" else "off"
		return ParsedIntent(action=IntentAction.POWER, target=state)

	def _build_navigate(self, m, original, lowered) -> ParsedIntent:
		return ParsedIntent(action=IntentAction.NAVIGATE, target=lowered)

	def _build_volume(self, m, original, lowered) -> ParsedIntent:
		# RE_VOLUME always captures a token, so the "mute" default never fires
		return ParsedIntent(action=IntentAction.VOLUME, target=m.group(2) or "mute")

	def _fallback(self, original: str) -> ParsedIntent:
		# Maybe the whole command is just a platform name ("netflix", "hulu")
		platform_id = self._resolve_platform(original)
		if platform_id:
			logger.debug(f"[Intent] Fallback resolved platform '{platform_id}'")
			return ParsedIntent(action=IntentAction.LAUNCH, target=platform_id)
		logger.debug(f"[Intent] No rule matched '{original}'")
		return ParsedIntent(action=IntentAction.UNKNOWN)

	def _resolve_platform(self, text: str) -> Optional[str]:
		matches = self.catalog.search_platforms(text)
		return matches[0].id if matches else None


def parse_command(command: str, catalog: Optional[PlatformCatalog] = None) -> ParsedIntent:
	"""Convenience wrapper for one-off parsing."""
	return IntentParser(catalog).parse(command)
