"""MCP server entry point (stdio transport)."""

import asyncio
import signal
import sys
from contextlib import asynccontextmanager

from mcp.server.stdio import stdio_server

import config
from logger import ServerLogger
from opendota import OpenDotaClient
from router import ToolRouter
from server import build_server

STOP_SIGNALS = (signal.SIGTERM, signal.SIGINT)


@asynccontextmanager
async def lifespan(logger: ServerLogger):
    # Startup: one client for the whole process
    client = OpenDotaClient(
        logger,
        base_url=config.OPENDOTA_BASE_URL,
        timeout_ms=config.OPENDOTA_TIMEOUT_MS,
        api_key=config.OPENDOTA_API_KEY,
        user_agent=config.USER_AGENT,
    )
    try:
        yield ToolRouter(client, logger, environment=config.ENVIRONMENT)
    finally:
        # Shutdown: close HTTP session
        await client.close()


async def run(logger: ServerLogger):
    async with lifespan(logger) as router:
        server = build_server(router)
        async with stdio_server() as (read_stream, write_stream):
            logger.log_server_start(transport="stdio", version=config.SERVER_VERSION)
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )


async def serve(logger: ServerLogger) -> str:
    """Run the server until stdin closes or a stop signal arrives.

    Returns the stop reason. SIGTERM and SIGINT cancel the serving task so the
    lifespan shutdown still runs before this returns.
    """
    loop = asyncio.get_running_loop()
    task = asyncio.create_task(run(logger))
    received: list[str] = []

    def on_signal(sig: signal.Signals):
        received.append(sig.name)
        task.cancel()

    installed = []
    for sig in STOP_SIGNALS:
        try:
            loop.add_signal_handler(sig, on_signal, sig)
        except (NotImplementedError, RuntimeError):
            # No loop signal support (Windows, or not the main thread)
            continue
        installed.append(sig)

    try:
        await task
    except asyncio.CancelledError:
        if not received:
            raise
        logger.info("Stop signal received", signal=received[0])
        return received[0]
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)
    return "stdin closed"


def main() -> int:
    try:
        logger = ServerLogger(
            level=config.LOG_LEVEL,
            environment=config.ENVIRONMENT,
            log_dir=config.LOG_DIR,
        )
    except (OSError, ValueError) as e:
        # Logging is not up yet; stdout belongs to the transport
        print(f"Failed to initialise logging: {e!r}", file=sys.stderr)
        return 1

    reason = "stdin closed"
    try:
        reason = asyncio.run(serve(logger))
    except KeyboardInterrupt:
        reason = "interrupted"
    except Exception as e:
        reason = "fatal error"
        logger.critical("Failed to run MCP server", error=repr(e))
        return 1
    finally:
        logger.log_server_stop(reason)
        logger.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
