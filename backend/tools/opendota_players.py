"""Tools for OpenDota player profiles, match history, and search."""

from opendota import OpenDotaClient
from utils import to_json_text


async def get_player(client: OpenDotaClient, account_id: int) -> str:
    """Get profile information for a player."""
    return to_json_text(await client.get_player(account_id))


async def get_player_matches(
    client: OpenDotaClient,
    account_id: int,
    limit: int | None = None,
    hero_id: int | None = None,
    game_mode: int | None = None,
    lobby_type: int | None = None,
) -> str:
    """Get match history for a player, optionally filtered."""
    matches = await client.get_player_matches(
        account_id,
        limit=limit,
        hero_id=hero_id,
        game_mode=game_mode,
        lobby_type=lobby_type,
    )
    return to_json_text(matches)


async def get_player_recent_matches(client: OpenDotaClient, account_id: int) -> str:
    return to_json_text(await client.get_player_recent_matches(account_id))


async def get_player_heroes(client: OpenDotaClient, account_id: int) -> str:
    return to_json_text(await client.get_player_heroes(account_id))


async def search_players(client: OpenDotaClient, query: str) -> str:
    """Search for players by persona name."""
    return to_json_text(await client.search_players(query))
