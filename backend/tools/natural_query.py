"""natural_query tool: free text -> one OpenDota call, with a readable label."""

from typing import Any

from pydantic import ValidationError

from dispatcher import parse_query
from models import Match, Operation, PlayerData
from opendota import OpenDotaClient
from utils import format_duration, to_json_text


def _match_label(match_id: int, data: Any) -> str:
    try:
        match = Match.model_validate(data)
    except ValidationError:
        return f"Match {match_id} information:"
    winner = "Radiant" if match.radiant_win else "Dire"
    return f"Match {match_id} information ({format_duration(match.duration)}, {winner} victory):"


def _player_label(account_id: int, data: Any) -> str:
    try:
        player = PlayerData.model_validate(data)
    except ValidationError:
        return f"Player {account_id} information:"
    name = player.profile.personaname if player.profile else None
    if name:
        return f"Player {account_id} ({name}) information:"
    return f"Player {account_id} information:"


def _labelled(label: str, data: Any) -> str:
    return f"{label}\n\n{to_json_text(data)}"


async def natural_query(client: OpenDotaClient, query: str) -> str:
    """Interpret a free-text question and run the matching lookup."""
    parsed = parse_query(query)
    params = parsed.parameters

    if parsed.operation == Operation.GET_MATCH:
        match_id = params["match_id"]
        data = await client.get_match(match_id)
        return _labelled(_match_label(match_id, data), data)

    if parsed.operation == Operation.GET_PLAYER:
        account_id = params["account_id"]
        data = await client.get_player(account_id)
        return _labelled(_player_label(account_id, data), data)

    if parsed.operation == Operation.SEARCH_PLAYERS:
        data = await client.search_players(params["query"])
        return _labelled(f'Search results for "{params["query"]}":', data)

    if parsed.operation == Operation.GET_PLAYER_RECENT_MATCHES:
        account_id = params["account_id"]
        data = await client.get_player_recent_matches(account_id)
        return _labelled(f"Recent matches for player {account_id}:", data)

    if parsed.operation == Operation.GET_PLAYER_HEROES:
        account_id = params["account_id"]
        data = await client.get_player_heroes(account_id)
        return _labelled(f"Hero statistics for player {account_id}:", data)

    # Operation.SEARCH: nothing recognisable, no upstream call
    return (
        f'I couldn\'t understand your query: "{query}". '
        "Please try asking about specific matches, players, or use one of the available tools."
    )
