"""Tests for the OpenDota API client against a local upstream stub."""

import asyncio
import socket
from unittest.mock import MagicMock

import aiohttp
import pytest
from aiohttp import web

from errors import ErrorKind, ServiceError
from opendota import OpenDotaClient


@pytest.mark.asyncio
async def test_get_heroes_returns_upstream_payload_unchanged(client, upstream, hero_list):
    upstream.json("/api/heroes", hero_list)

    heroes = await client.get_heroes()

    assert heroes == hero_list
    # Fields outside the Hero shape survive
    assert heroes[0]["legs"] == 2


@pytest.mark.asyncio
async def test_get_match_uses_match_path(client, upstream, match_payload):
    upstream.json("/api/matches/7234567890", match_payload)

    match = await client.get_match(7234567890)

    assert match == match_payload
    assert upstream.requests[-1]["path"] == "/api/matches/7234567890"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, args, path",
    [
        ("get_player", (86745912,), "/api/players/86745912"),
        ("get_player_recent_matches", (86745912,), "/api/players/86745912/recentMatches"),
        ("get_player_heroes", (86745912,), "/api/players/86745912/heroes"),
        ("get_pro_matches", (), "/api/proMatches"),
        ("get_public_matches", (), "/api/publicMatches"),
    ],
)
async def test_resource_paths(client, upstream, method, args, path):
    upstream.json(path, [{"ok": True}])

    result = await getattr(client, method)(*args)

    assert result == [{"ok": True}]
    assert upstream.requests[-1]["path"] == path


@pytest.mark.asyncio
async def test_get_player_matches_sends_only_given_filters(client, upstream):
    upstream.json("/api/players/5/matches", [])

    await client.get_player_matches(5, limit=10, hero_id=1)

    assert upstream.requests[-1]["query"] == {"limit": "10", "hero_id": "1"}


@pytest.mark.asyncio
async def test_search_players_sends_query(client, upstream):
    upstream.json("/api/search", [{"account_id": 1, "personaname": "Miracle-"}])

    result = await client.search_players("Miracle")

    assert result[0]["personaname"] == "Miracle-"
    assert upstream.requests[-1]["query"] == {"q": "Miracle"}


@pytest.mark.asyncio
async def test_user_agent_header_sent(client, upstream):
    upstream.json("/api/heroes", [])

    await client.get_heroes()

    assert upstream.requests[-1]["headers"]["User-Agent"] == "opendota-tests/1.0"


@pytest.mark.asyncio
async def test_api_key_appended_when_configured(upstream, mock_logger):
    upstream.json("/api/search", [])
    async with OpenDotaClient(mock_logger, base_url=upstream.base_url, api_key="secret") as c:
        await c.search_players("abc")

    assert upstream.requests[-1]["query"] == {"q": "abc", "api_key": "secret"}


@pytest.mark.asyncio
async def test_no_api_key_when_not_configured(client, upstream):
    upstream.json("/api/heroes", [])

    await client.get_heroes()

    assert "api_key" not in upstream.requests[-1]["query"]


@pytest.mark.asyncio
async def test_not_found_raises_api_error_with_body(client, upstream):
    upstream.json("/api/matches/1", {"error": "not found"}, status=404)

    with pytest.raises(ServiceError) as exc_info:
        await client.get_match(1)

    error = exc_info.value
    assert error.kind is ErrorKind.API
    assert error.status_code == 404
    assert error.code == "API_ERROR"
    assert error.detail["response"] == {"error": "not found"}


@pytest.mark.asyncio
async def test_server_error_keeps_text_body(client, upstream):
    upstream.text("/api/heroes", "upstream exploded", status=502)

    with pytest.raises(ServiceError) as exc_info:
        await client.get_heroes()

    assert exc_info.value.kind is ErrorKind.API
    assert exc_info.value.status_code == 502
    assert exc_info.value.detail["response"] == "upstream exploded"


@pytest.mark.asyncio
async def test_non_json_success_returns_text(client, upstream, mock_logger):
    upstream.text("/api/heroes", "<html>maintenance</html>")

    body = await client.get_heroes()

    assert body == "<html>maintenance</html>"
    assert mock_logger.log_api_call.call_args.kwargs == {}


@pytest.mark.asyncio
async def test_empty_success_body_is_none(client, upstream):
    upstream.text("/api/proMatches", "")

    assert await client.get_pro_matches() is None


@pytest.mark.asyncio
async def test_slow_upstream_raises_timeout(upstream, mock_logger):
    async def slow(_request):
        await asyncio.sleep(1)
        return web.json_response([])

    upstream.handler("/api/heroes", slow)

    async with OpenDotaClient(mock_logger, base_url=upstream.base_url, timeout_ms=50) as c:
        with pytest.raises(ServiceError) as exc_info:
            await c.get_heroes()

    error = exc_info.value
    assert error.kind is ErrorKind.TIMEOUT
    assert error.status_code == 408
    assert "50ms" in error.message


@pytest.mark.asyncio
async def test_client_error_mentioning_timeout_is_timeout(client, mock_logger, monkeypatch):
    session = MagicMock()
    session.get.side_effect = aiohttp.ClientError("Connection timeout to host")
    monkeypatch.setattr(client, "_get_session", lambda: session)

    with pytest.raises(ServiceError) as exc_info:
        await client.get_heroes()

    error = exc_info.value
    assert error.kind is ErrorKind.TIMEOUT
    assert error.status_code == 408
    assert error.code == "TIMEOUT_ERROR"
    assert error.detail["code"] == "ClientError"
    assert mock_logger.log_api_call.call_args.kwargs["error"] is error


@pytest.mark.asyncio
async def test_connection_refused_is_api_error(mock_logger):
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]

    async with OpenDotaClient(mock_logger, base_url=f"http://127.0.0.1:{port}/api") as c:
        with pytest.raises(ServiceError) as exc_info:
            await c.get_heroes()

    error = exc_info.value
    assert error.kind is ErrorKind.API
    assert error.status_code == 500
    assert error.detail["response"] is None


@pytest.mark.asyncio
async def test_successful_call_logged_once(client, upstream, mock_logger):
    upstream.json("/api/heroes", [])

    await client.get_heroes()

    mock_logger.log_api_call.assert_called_once()
    method, url, status, duration = mock_logger.log_api_call.call_args.args
    assert method == "GET"
    assert url == f"{upstream.base_url}/heroes"
    assert status == 200
    assert duration >= 0
    assert mock_logger.log_api_call.call_args.kwargs == {}


@pytest.mark.asyncio
async def test_failed_call_logged_with_error(client, upstream, mock_logger):
    upstream.json("/api/players/9", {"error": "not found"}, status=404)

    with pytest.raises(ServiceError):
        await client.get_player(9)

    mock_logger.log_api_call.assert_called_once()
    assert mock_logger.log_api_call.call_args.args[2] == 404
    assert mock_logger.log_api_call.call_args.kwargs["error"].kind is ErrorKind.API


@pytest.mark.asyncio
async def test_no_retry_on_failure(client, upstream):
    upstream.json("/api/heroes", {"error": "rate limited"}, status=429)

    with pytest.raises(ServiceError):
        await client.get_heroes()

    assert len(upstream.requests) == 1
