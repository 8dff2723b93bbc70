"""Tool for the OpenDota hero list."""

from opendota import OpenDotaClient
from utils import to_json_text


async def get_heroes(client: OpenDotaClient) -> str:
    return to_json_text(await client.get_heroes())
