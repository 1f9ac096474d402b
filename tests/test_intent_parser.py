"""
Tests for the voice/text command classifier.
"""

import pytest

from ampere_search.intent_parser import parse_command
from ampere_search.models import IntentAction, ParsedIntent


@pytest.mark.parametrize("command, expected", [
	("search batman", {"action": "search", "query": "batman"}),
	("find the bear", {"action": "search", "query": "the bear"}),
	("look for   succession ", {"action": "search", "query": "succession"}),
	("switch to netflix", {"action": "launch", "target": "netflix"}),
	("open Hulu", {"action": "launch", "target": "hulu"}),
	("go to disney", {"action": "launch", "target": "disneyplus"}),
	("play stranger things", {"action": "play", "query": "stranger things"}),
	("resume Loki", {"action": "play", "query": "Loki"}),
	("power on", {"action": "power", "target": "on"}),
	("tv power off", {"action": "power", "target": "off"}),
	("poweroff", {"action": "power", "target": "off"}),
	("home", {"action": "navigate", "target": "home"}),
	("  FAVORITES ", {"action": "navigate", "target": "favorites"}),
	("search", {"action": "navigate", "target": "search"}),
	("volume up", {"action": "volume", "target": "up"}),
	("vol down", {"action": "volume", "target": "down"}),
	("Volume MUTE", {"action": "volume", "target": "mute"}),
	("volume 25", {"action": "volume", "target": "25"}),
	("vol 7.5", {"action": "volume", "target": "7.5"}),
	("netflix", {"action": "launch", "target": "netflix"}),
	("xyzzy nonsense", {"action": "unknown"}),
])
def test_examples(parser, command, expected):
	assert parser.parse(command).to_dict() == expected


def test_extracted_text_keeps_original_case(parser):
	assert parser.parse("Search The Batman").query == "The Batman"
	assert parser.parse("Launch Zzqx Box").target == "Zzqx Box"


def test_unresolved_launch_keeps_raw_target(parser):
	intent = parser.parse("open zzqx")
	assert intent.action is IntentAction.LAUNCH
	assert intent.target == "zzqx"


def test_first_rule_wins(parser):
	# play beats navigate
	assert parser.parse("play home").to_dict() == {"action": "play", "query": "home"}
	# search beats power
	assert parser.parse("search power on").to_dict() == {"action": "search", "query": "power on"}
	# launch beats the platform fallback
	assert parser.parse("open power on").action is IntentAction.LAUNCH


@pytest.mark.parametrize("command", ["", "   ", None])
def test_empty_is_unknown(parser, command):
	assert parser.parse(command) == ParsedIntent(action=IntentAction.UNKNOWN)


def test_module_level_helper():
	assert parse_command("switch to netflix").to_dict() == {"action": "launch", "target": "netflix"}
