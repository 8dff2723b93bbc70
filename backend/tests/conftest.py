"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path
from typing import Any, Awaitable, Callable
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

# Modules live flat in backend/
sys.path.insert(0, str(Path(__file__).parent.parent))

from logger import ServerLogger  # noqa: E402
from opendota import OpenDotaClient  # noqa: E402


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: test talks to the live OpenDota API"
    )


class Upstream:
    """Local stand-in for the OpenDota API.

    Routes are registered per test; every request is recorded so tests can
    assert on path, query string and headers.
    """

    def __init__(self):
        self.routes: dict[str, Callable[[web.Request], Awaitable[web.StreamResponse]]] = {}
        self.requests: list[dict[str, Any]] = []
        self.base_url = ""

    def json(self, path: str, payload: Any, status: int = 200):
        async def handler(_request: web.Request) -> web.StreamResponse:
            return web.json_response(payload, status=status)
        self.routes[path] = handler

    def text(self, path: str, body: str, status: int = 200):
        async def handler(_request: web.Request) -> web.StreamResponse:
            return web.Response(text=body, status=status)
        self.routes[path] = handler

    def handler(self, path: str, fn: Callable[[web.Request], Awaitable[web.StreamResponse]]):
        self.routes[path] = fn

    async def dispatch(self, request: web.Request) -> web.StreamResponse:
        self.requests.append({
            "path": request.path,
            "query": dict(request.query),
            "headers": dict(request.headers),
        })
        fn = self.routes.get(request.path)
        if fn is None:
            return web.json_response({"error": "Not Found"}, status=404)
        return await fn(request)


@pytest_asyncio.fixture
async def upstream():
    stub = Upstream()
    app = web.Application()
    app.router.add_route("GET", "/{tail:.*}", stub.dispatch)
    server = TestServer(app)
    await server.start_server()
    stub.base_url = str(server.make_url("/api"))
    yield stub
    await server.close()


@pytest.fixture
def mock_logger():
    return MagicMock(spec=ServerLogger)


@pytest_asyncio.fixture
async def client(upstream, mock_logger):
    c = OpenDotaClient(
        mock_logger,
        base_url=upstream.base_url,
        timeout_ms=2000,
        api_key=None,
        user_agent="opendota-tests/1.0",
    )
    yield c
    await c.close()


@pytest.fixture
def hero_list():
    return [
        {
            "id": 1,
            "name": "npc_dota_hero_antimage",
            "localized_name": "Anti-Mage",
            "primary_attr": "agi",
            "attack_type": "Melee",
            "roles": ["Carry", "Escape", "Nuker"],
            "legs": 2,
        },
        {
            "id": 2,
            "name": "npc_dota_hero_axe",
            "localized_name": "Axe",
            "primary_attr": "str",
            "attack_type": "Melee",
            "roles": ["Initiator", "Durable", "Disabler", "Carry"],
            "legs": 2,
        },
    ]


@pytest.fixture
def match_payload():
    return {
        "match_id": 7234567890,
        "duration": 2100,
        "start_time": 1690000000,
        "radiant_win": True,
        "game_mode": 22,
        "players": [
            {
                "account_id": 86745912,
                "hero_id": 1,
                "player_slot": 0,
                "kills": 12,
                "deaths": 2,
                "assists": 8,
                "personaname": "Arteezy",
                "gold_per_min": 710,
            },
            {
                "account_id": None,
                "hero_id": 2,
                "player_slot": 128,
                "kills": 3,
                "deaths": 9,
                "assists": 4,
            },
        ],
    }
