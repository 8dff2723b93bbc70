"""Free-text query dispatch for the natural_query tool.

Maps a sentence onto one structured operation using ordered regex checks.
The first pattern that matches wins; text matching nothing becomes a
plain ``search`` carrying the original input.
"""

import re
from typing import Callable

from config import MAX_IDENTIFIER
from models import DispatchResult, Operation

_FLAGS = re.IGNORECASE | re.ASCII
_QUOTES = "\"'“”"

MATCH_ID = re.compile(r"(?:match|game)\s+(?:id\s+)?(\d+)", _FLAGS)
PLAYER_NAME = re.compile(
    rf"(?:player|user)\s+(?:named\s+)?[{_QUOTES}]([^{_QUOTES}]+)[{_QUOTES}]", _FLAGS
)
RECENT_MATCHES = re.compile(
    r"recent\s+matches?\s+(?:for\s+)?(?:player\s+)?(?:id\s+)?(\d+)", _FLAGS
)
PLAYER_HEROES = re.compile(
    r"heroes?\s+(?:for\s+)?(?:player\s+)?(?:id\s+)?(\d+)"
    r"|(?:player|user)\s+(?:id\s+)?(\d+)\s+heroes?",
    _FLAGS,
)
PLAYER_ID = re.compile(r"(?:player|user)\s+(?:id\s+)?(\d+)", _FLAGS)


def parse_identifier(digits: str) -> int | None:
    """Parse a captured digit run, or None if it is not a usable upstream id."""
    value = int(digits, 10)
    if 0 < value <= MAX_IDENTIFIER:
        return value
    return None


def _first_identifier(pattern: re.Pattern, text: str) -> int | None:
    for m in pattern.finditer(text):
        digits = next((g for g in m.groups() if g is not None), None)
        if digits is None:
            continue
        value = parse_identifier(digits)
        if value is not None:
            return value
    return None


def _match_id(text: str) -> DispatchResult | None:
    match_id = _first_identifier(MATCH_ID, text)
    if match_id is None:
        return None
    return DispatchResult(operation=Operation.GET_MATCH, parameters={"match_id": match_id})


def _player_name(text: str) -> DispatchResult | None:
    m = PLAYER_NAME.search(text)
    if not m:
        return None
    return DispatchResult(operation=Operation.SEARCH_PLAYERS, parameters={"query": m.group(1)})


def _recent_matches(text: str) -> DispatchResult | None:
    account_id = _first_identifier(RECENT_MATCHES, text)
    if account_id is None:
        return None
    return DispatchResult(
        operation=Operation.GET_PLAYER_RECENT_MATCHES,
        parameters={"account_id": account_id},
    )


def _player_heroes(text: str) -> DispatchResult | None:
    account_id = _first_identifier(PLAYER_HEROES, text)
    if account_id is None:
        return None
    return DispatchResult(
        operation=Operation.GET_PLAYER_HEROES,
        parameters={"account_id": account_id},
    )


def _player_id(text: str) -> DispatchResult | None:
    account_id = _first_identifier(PLAYER_ID, text)
    if account_id is None:
        return None
    return DispatchResult(operation=Operation.GET_PLAYER, parameters={"account_id": account_id})


# Order matters: several patterns can match the same sentence
MATCHERS: list[Callable[[str], DispatchResult | None]] = [
    _match_id,
    _player_name,
    _recent_matches,
    _player_heroes,
    _player_id,
]


def parse_query(text: str) -> DispatchResult:
    for matcher in MATCHERS:
        result = matcher(text)
        if result is not None:
            return result
    return DispatchResult(operation=Operation.SEARCH, parameters={"query": text})
