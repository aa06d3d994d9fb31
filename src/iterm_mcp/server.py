"""MCP server for iTerm2 terminals."""

import argparse
import asyncio

from mcp.server import Server
from mcp.server.stdio import stdio_server

from .config import ServerConfig
from .log import configure_logging, get_logger
from .manager import TerminalManager
from .tools import register_tools

logger = get_logger(__name__)


async def run_server(config: ServerConfig) -> None:
    """Run the MCP server."""
    server = Server("iterm-mcp")
    manager = TerminalManager(config)

    register_tools(server, manager)
    logger.info("server_starting", osascript=config.osascript, max_wait=config.max_wait)

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main() -> None:
    """CLI entry point."""
    defaults = ServerConfig()
    parser = argparse.ArgumentParser(
        description="MCP server for iTerm2 terminals",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=defaults.poll_interval,
        help="Seconds between checks of whether a command is still running",
    )
    parser.add_argument(
        "--max-wait",
        type=float,
        default=defaults.max_wait,
        help="Maximum seconds to wait for a command to finish",
    )
    parser.add_argument(
        "--osascript",
        type=str,
        default=defaults.osascript,
        help="AppleScript interpreter to run",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=defaults.log_level,
        help="Log level for messages written to stderr",
    )

    args = parser.parse_args()

    config = ServerConfig(
        osascript=args.osascript,
        poll_interval=args.poll_interval,
        max_wait=args.max_wait,
        log_level=args.log_level,
    )
    configure_logging(config.log_level)

    asyncio.run(run_server(config))


if __name__ == "__main__":
    main()
