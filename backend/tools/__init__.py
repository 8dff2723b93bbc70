"""Tool registry mapping tool names to their argument model and implementation."""

from typing import Awaitable, Callable, NamedTuple

from pydantic import BaseModel

from models import AccountArgs, MatchArgs, NoArgs, PlayerMatchesArgs, QueryArgs
from tools.definitions import TOOL_DEFINITIONS
from tools.natural_query import natural_query
from tools.opendota_heroes import get_heroes
from tools.opendota_matches import get_match, get_pro_matches
from tools.opendota_players import (
    get_player,
    get_player_heroes,
    get_player_matches,
    get_player_recent_matches,
    search_players,
)


class ToolSpec(NamedTuple):
    args: type[BaseModel]
    handler: Callable[..., Awaitable[str]]


TOOL_REGISTRY: dict[str, ToolSpec] = {
    "get_match": ToolSpec(MatchArgs, get_match),
    "get_player": ToolSpec(AccountArgs, get_player),
    "get_player_matches": ToolSpec(PlayerMatchesArgs, get_player_matches),
    "get_player_recent_matches": ToolSpec(AccountArgs, get_player_recent_matches),
    "get_player_heroes": ToolSpec(AccountArgs, get_player_heroes),
    "search_players": ToolSpec(QueryArgs, search_players),
    "get_heroes": ToolSpec(NoArgs, get_heroes),
    "get_pro_matches": ToolSpec(NoArgs, get_pro_matches),
    "natural_query": ToolSpec(QueryArgs, natural_query),
}

__all__ = ["TOOL_DEFINITIONS", "TOOL_REGISTRY", "ToolSpec"]
