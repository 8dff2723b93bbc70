from __future__ import annotations
from enum import Enum
from typing import Any
from pydantic import BaseModel, ConfigDict, Field

from config import DEFAULT_MATCH_LIMIT


# --- Upstream entities ---
# Known fields are typed; anything else the API sends is kept as an extra.

class MatchPlayer(BaseModel):
    model_config = ConfigDict(extra="allow")

    account_id: int | None = None  # None for anonymous players
    hero_id: int
    player_slot: int
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    personaname: str | None = None


class Match(BaseModel):
    model_config = ConfigDict(extra="allow")

    match_id: int
    duration: int
    start_time: int
    radiant_win: bool
    players: list[MatchPlayer] = Field(default_factory=list)


class PlayerProfile(BaseModel):
    model_config = ConfigDict(extra="allow")

    personaname: str | None = None
    name: str | None = None


class PlayerData(BaseModel):
    model_config = ConfigDict(extra="allow")

    account_id: int | None = None
    profile: PlayerProfile | None = None


class Hero(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    localized_name: str
    primary_attr: str
    attack_type: str
    roles: list[str] = Field(default_factory=list)


# --- Natural-language dispatch ---

class Operation(str, Enum):
    GET_MATCH = "get_match"
    GET_PLAYER = "get_player"
    SEARCH_PLAYERS = "search_players"
    GET_PLAYER_RECENT_MATCHES = "get_player_recent_matches"
    GET_PLAYER_HEROES = "get_player_heroes"
    SEARCH = "search"


class DispatchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    operation: Operation
    parameters: dict[str, Any]


# --- Tool arguments ---
# Strict so that "123" or 1.5 is rejected where an integer id is expected.

class _ToolArgs(BaseModel):
    model_config = ConfigDict(strict=True)


class NoArgs(_ToolArgs):
    pass


class MatchArgs(_ToolArgs):
    match_id: int


class AccountArgs(_ToolArgs):
    account_id: int


class PlayerMatchesArgs(_ToolArgs):
    account_id: int
    limit: int = DEFAULT_MATCH_LIMIT
    hero_id: int | None = None
    game_mode: int | None = None
    lobby_type: int | None = None


class QueryArgs(_ToolArgs):
    query: str


# --- Tool responses ---

class ErrorInfo(BaseModel):
    kind: str
    message: str
    code: str
    status_code: int
    detail: Any = None


class ToolResponse(BaseModel):
    text: str
    is_error: bool = False
    error: ErrorInfo | None = None
