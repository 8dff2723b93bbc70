"""Tool invocation: argument validation, dispatch to handlers, error envelopes."""

import json
import time
from typing import Any

from mcp.types import Tool
from pydantic import ValidationError

from config import ENVIRONMENT, is_development
from errors import ServiceError
from logger import ServerLogger
from models import ToolResponse
from opendota import OpenDotaClient
from tools import TOOL_DEFINITIONS, TOOL_REGISTRY
from utils import elapsed_ms


class ToolRouter:
    """Single entry point from MCP tool calls to the OpenDota client.

    ``call_tool`` never raises for tool-level failures: every error is logged
    and returned as a ``ToolResponse`` with ``is_error`` set.
    """

    def __init__(
        self,
        client: OpenDotaClient,
        logger: ServerLogger,
        environment: str = ENVIRONMENT,
    ):
        self.client = client
        self.log = logger
        self.environment = environment

    def list_tools(self) -> list[Tool]:
        return [Tool(**definition) for definition in TOOL_DEFINITIONS]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> ToolResponse:
        arguments = arguments if arguments is not None else {}
        start = time.perf_counter()
        self.log.log_tool_start(name, arguments)

        try:
            text = await self._execute(name, arguments)
        except Exception as e:
            error = ServiceError.wrap(e)
            self.log.log_tool_execution(name, arguments, elapsed_ms(start), success=False, error=error)
            return self._error_response(error)

        self.log.log_tool_execution(name, arguments, elapsed_ms(start), success=True)
        return ToolResponse(text=text)

    async def _execute(self, name: str, arguments: dict[str, Any]) -> str:
        spec = TOOL_REGISTRY.get(name)
        if spec is None:
            raise ValueError(f"Unknown tool: {name}")

        try:
            args = spec.args.model_validate(arguments)
        except ValidationError as e:
            raise ServiceError.validation(
                "Invalid tool arguments",
                json.loads(e.json(include_url=False)),
            ) from e

        return await spec.handler(self.client, **args.model_dump())

    def _error_response(self, error: ServiceError) -> ToolResponse:
        text = f"Error: {error.message}"
        if is_development(self.environment) and error.detail is not None:
            text += f"\n\nDetails: {json.dumps(error.detail, indent=2, default=str)}"
        return ToolResponse(text=text, is_error=True, error=error.to_info())
