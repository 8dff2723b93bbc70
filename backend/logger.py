"""
Structured logging for the MCP server.

Built on loguru. One ``ServerLogger`` is created at process start and handed
to the client and router; ``close()`` flushes and detaches its sinks at
shutdown. Sinks always write to stderr or files, since stdout carries the
MCP stdio transport.
"""

import json
import sys
from pathlib import Path
from typing import Any, Callable

from loguru import logger as _loguru

from config import SERVER_NAME, SERVER_VERSION
from errors import ServiceError

_CONTEXT_KEYS = {"service", "version", "environment", "_fields"}

_PRETTY_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def _pretty_format(record: dict) -> str:
    fields = {k: v for k, v in record["extra"].items() if k not in _CONTEXT_KEYS}
    record["extra"]["_fields"] = json.dumps(fields, default=str) if fields else ""
    return _PRETTY_FORMAT + " <dim>{extra[_fields]}</dim>\n{exception}"


def describe_error(error: BaseException | None) -> dict[str, Any] | None:
    """Flatten an exception into a JSON-friendly dict for log records."""
    if error is None:
        return None
    if isinstance(error, ServiceError):
        return error.to_info().model_dump(mode="json")
    return {"type": error.__class__.__name__, "message": str(error)}


class ServerLogger:
    """Process-wide structured logger with an explicit lifecycle."""

    def __init__(
        self,
        level: str = "INFO",
        environment: str = "development",
        log_dir: str | None = None,
        service_name: str = SERVER_NAME,
        version: str = SERVER_VERSION,
        sink: Callable[[Any], None] | None = None,
    ):
        self.level = level.upper()
        self.environment = environment
        self.log_dir = log_dir
        self.service_name = service_name
        self._sink_ids: list[int] = []
        self._closed = False
        self._log = _loguru.bind(
            service=service_name,
            version=version,
            environment=environment,
        )

        if sink is not None:
            # Caller-supplied sink (tests, embedding); leave global handlers alone
            self._sink_ids.append(
                _loguru.add(sink, level=self.level, serialize=self.json_logs)
            )
        else:
            self._configure()

    @property
    def json_logs(self) -> bool:
        return self.environment != "development"

    def _configure(self):
        log_path = None
        if self.json_logs and self.log_dir:
            # Fail before touching the global handlers
            log_path = Path(self.log_dir)
            log_path.mkdir(parents=True, exist_ok=True)

        _loguru.remove()

        if self.json_logs:
            self._sink_ids.append(
                _loguru.add(sys.stderr, level=self.level, serialize=True)
            )
        else:
            self._sink_ids.append(
                _loguru.add(sys.stderr, level=self.level, format=_pretty_format, colorize=True)
            )

        if log_path is not None:
            self._sink_ids.append(
                _loguru.add(
                    str(log_path / f"{self.service_name}.log"),
                    level=self.level,
                    rotation="100 MB",
                    retention="30 days",
                    serialize=True,
                )
            )

    def close(self):
        """Flush pending records and detach the sinks this logger added."""
        if self._closed:
            return
        self._closed = True
        _loguru.complete()
        for sink_id in self._sink_ids:
            try:
                _loguru.remove(sink_id)
            except ValueError:
                # Already removed by someone else
                pass
        self._sink_ids.clear()

    # --- Level passthroughs ---

    def _emit(self, level: str, message: str, fields: dict[str, Any]):
        self._log.bind(**fields).opt(depth=2).log(level, message)

    def debug(self, message: str, **fields: Any):
        self._emit("DEBUG", message, fields)

    def info(self, message: str, **fields: Any):
        self._emit("INFO", message, fields)

    def warning(self, message: str, **fields: Any):
        self._emit("WARNING", message, fields)

    def error(self, message: str, **fields: Any):
        self._emit("ERROR", message, fields)

    def critical(self, message: str, **fields: Any):
        self._emit("CRITICAL", message, fields)

    # --- Structured events ---

    def log_api_call(
        self,
        method: str,
        url: str,
        status_code: int | None,
        duration_ms: float,
        error: BaseException | None = None,
    ):
        fields = {
            "type": "api_call",
            "method": method,
            "url": url,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
        }
        if error is not None:
            self._emit("ERROR", "API call failed", {**fields, "error": describe_error(error)})
        else:
            self._emit("INFO", "API call completed", fields)

    def log_tool_start(self, tool_name: str, arguments: Any):
        self._emit(
            "DEBUG",
            f"Starting tool execution: {tool_name}",
            {"type": "tool_request_start", "tool_name": tool_name, "arguments": arguments},
        )

    def log_tool_execution(
        self,
        tool_name: str,
        arguments: Any,
        duration_ms: float,
        success: bool,
        error: BaseException | None = None,
    ):
        fields = {
            "type": "tool_execution",
            "tool_name": tool_name,
            "arguments": arguments,
            "duration_ms": round(duration_ms, 2),
            "success": success,
        }
        if success:
            self._emit("INFO", f"Tool '{tool_name}' executed successfully", fields)
        else:
            self._emit(
                "ERROR",
                f"Tool '{tool_name}' execution failed",
                {**fields, "error": describe_error(error)},
            )

    def log_server_start(self, transport: str, version: str = SERVER_VERSION):
        self._emit(
            "INFO",
            "MCP server started",
            {"type": "server_start", "transport": transport, "version": version},
        )

    def log_server_stop(self, reason: str | None = None):
        self._emit("INFO", "MCP server stopped", {"type": "server_stop", "reason": reason})
