import os
from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


# --- Server identity ---
SERVER_NAME = "opendota-mcp-server"
SERVER_VERSION = "1.0.0"

# --- Upstream API ---
OPENDOTA_API_KEY = os.getenv("OPENDOTA_API_KEY", "")
OPENDOTA_BASE_URL = os.getenv("OPENDOTA_BASE_URL", "https://api.opendota.com/api")
OPENDOTA_TIMEOUT_MS = _int_env("OPENDOTA_TIMEOUT", 30000)
USER_AGENT = os.getenv("USER_AGENT", f"OpenDota-MCP-Server/{SERVER_VERSION}")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", "./logs")

# --- Runtime mode ---
# "development" adds error details to tool responses and pretty-prints logs
ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()

# --- Limits ---
DEFAULT_MATCH_LIMIT = 20
# Upstream ids are signed 64-bit integers
MAX_IDENTIFIER = 2**63 - 1


def is_development(environment: str | None = None) -> bool:
    return (environment or ENVIRONMENT) == "development"
