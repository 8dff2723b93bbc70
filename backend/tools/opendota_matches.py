"""Tools for OpenDota match lookups."""

from opendota import OpenDotaClient
from utils import to_json_text


async def get_match(client: OpenDotaClient, match_id: int) -> str:
    """Get full details for one match."""
    return to_json_text(await client.get_match(match_id))


async def get_pro_matches(client: OpenDotaClient) -> str:
    """Get recent professional matches."""
    return to_json_text(await client.get_pro_matches())
