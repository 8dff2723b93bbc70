import json
import time
from typing import Any

import aiohttp


def to_json_text(data: Any) -> str:
    """Pretty-print an upstream payload for a text tool response."""
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def elapsed_ms(start: float) -> float:
    """Milliseconds since ``start`` (a ``time.perf_counter()`` reading)."""
    return (time.perf_counter() - start) * 1000


def clean_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Drop unset query parameters; aiohttp rejects None and bool values."""
    cleaned = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = str(value).lower()
        cleaned[key] = value
    return cleaned


async def read_body(resp: aiohttp.ClientResponse) -> Any:
    """Read a response body, decoding JSON when possible.

    Non-JSON bodies come back as text, an empty body as ``None``.
    """
    text = await resp.text(errors="replace")
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


def format_duration(seconds: int) -> str:
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"
