"""Async client for the OpenDota REST API."""

import asyncio
import time
from typing import Any

import aiohttp

from config import OPENDOTA_API_KEY, OPENDOTA_BASE_URL, OPENDOTA_TIMEOUT_MS, USER_AGENT
from errors import ServiceError
from logger import ServerLogger
from utils import clean_params, elapsed_ms, read_body


class OpenDotaClient:
    """One method per upstream resource, all funnelled through ``_request``.

    Responses are returned exactly as the API sent them. Failures are raised
    as ``ServiceError`` (kind TIMEOUT or API) and never retried.
    """

    def __init__(
        self,
        logger: ServerLogger,
        base_url: str = OPENDOTA_BASE_URL,
        timeout_ms: int = OPENDOTA_TIMEOUT_MS,
        api_key: str | None = OPENDOTA_API_KEY,
        user_agent: str = USER_AGENT,
    ):
        self.log = logger
        self.base_url = base_url.rstrip("/")
        self.timeout_ms = timeout_ms
        self.api_key = api_key or None
        self.user_agent = user_agent
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "OpenDotaClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": self.user_agent},
                timeout=aiohttp.ClientTimeout(total=self.timeout_ms / 1000),
            )
        return self._session

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _request(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url}{endpoint}"
        query = clean_params(params)
        if self.api_key:
            query["api_key"] = self.api_key

        self.log.debug(
            "Starting OpenDota API request",
            type="api_request_start",
            method="GET",
            url=url,
            params={k: v for k, v in query.items() if k != "api_key"},
        )

        session = self._get_session()
        status: int | None = None
        start = time.perf_counter()
        try:
            async with session.get(url, params=query) as resp:
                status = resp.status
                body = await read_body(resp)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            error = self._classify(e, status)
            self.log.log_api_call("GET", url, status, elapsed_ms(start), error=error)
            raise error from e

        duration = elapsed_ms(start)

        if not 200 <= status < 300:
            error = ServiceError.api(
                f"OpenDota API request failed with status {status}",
                status,
                {"code": "HTTP_ERROR", "response": body},
            )
            self.log.log_api_call("GET", url, status, duration, error=error)
            raise error

        self.log.log_api_call("GET", url, status, duration)
        return body

    def _classify(self, exc: BaseException, status: int | None) -> ServiceError:
        if isinstance(exc, asyncio.TimeoutError) or "timeout" in str(exc).lower():
            return ServiceError.timeout(
                f"OpenDota API request timed out after {self.timeout_ms}ms",
                {"code": exc.__class__.__name__, "timeout_ms": self.timeout_ms},
            )
        return ServiceError.api(
            f"OpenDota API request failed: {str(exc) or exc.__class__.__name__}",
            status,
            {"code": exc.__class__.__name__, "response": None},
        )

    # --- Matches ---

    async def get_match(self, match_id: int) -> dict:
        return await self._request(f"/matches/{match_id}")

    async def get_pro_matches(self) -> list[dict]:
        return await self._request("/proMatches")

    async def get_public_matches(self) -> list[dict]:
        return await self._request("/publicMatches")

    # --- Players ---

    async def get_player(self, account_id: int) -> dict:
        return await self._request(f"/players/{account_id}")

    async def get_player_matches(
        self,
        account_id: int,
        limit: int | None = None,
        hero_id: int | None = None,
        game_mode: int | None = None,
        lobby_type: int | None = None,
    ) -> list[dict]:
        params = {
            "limit": limit,
            "hero_id": hero_id,
            "game_mode": game_mode,
            "lobby_type": lobby_type,
        }
        return await self._request(f"/players/{account_id}/matches", params)

    async def get_player_recent_matches(self, account_id: int) -> list[dict]:
        return await self._request(f"/players/{account_id}/recentMatches")

    async def get_player_heroes(self, account_id: int) -> list[dict]:
        return await self._request(f"/players/{account_id}/heroes")

    async def search_players(self, query: str) -> list[dict]:
        return await self._request("/search", {"q": query})

    # --- Heroes ---

    async def get_heroes(self) -> list[dict]:
        return await self._request("/heroes")
