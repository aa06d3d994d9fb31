"""MCP tool definitions for iTerm2 terminals."""

from mcp.server import Server
from mcp.types import Tool, TextContent

from .errors import ITermError
from .log import get_logger
from .manager import TerminalManager

logger = get_logger(__name__)

SESSION_ID_SCHEMA = {
    "type": "string",
    "description": "The session ID to target. Use 'active' for the current session, or a specific session ID from list_terminals. Defaults to 'active'.",
}


def register_tools(server: Server, manager: TerminalManager) -> None:
    """Register all terminal tools with the MCP server."""

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(
                name="list_terminals",
                description="Lists all iTerm terminal sessions with their unique IDs, names, working directories and last commands",
                inputSchema={
                    "type": "object",
                    "properties": {},
                },
            ),
            Tool(
                name="create_terminal",
                description="Creates a new iTerm terminal tab and returns its session ID",
                inputSchema={
                    "type": "object",
                    "properties": {},
                },
            ),
            Tool(
                name="write_to_terminal",
                description="Writes text to an iTerm terminal - often used to run a command in the terminal",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "command": {
                            "type": "string",
                            "description": "The command to run or text to write to the terminal",
                        },
                        "sessionId": SESSION_ID_SCHEMA,
                    },
                    "required": ["command"],
                },
            ),
            Tool(
                name="read_terminal_output",
                description="Reads the output from an iTerm terminal",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "linesOfOutput": {
                            "type": "integer",
                            "description": "The number of lines of output to read.",
                        },
                        "sessionId": SESSION_ID_SCHEMA,
                    },
                    "required": ["linesOfOutput"],
                },
            ),
            Tool(
                name="send_control_character",
                description="Sends a control character to an iTerm terminal (e.g., Control-C, or special sequences like ']' for telnet escape)",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "letter": {
                            "type": "string",
                            "description": "The letter corresponding to the control character (e.g., 'C' for Control-C, ']' for telnet escape, 'ESC' for escape)",
                        },
                        "sessionId": SESSION_ID_SCHEMA,
                    },
                    "required": ["letter"],
                },
            ),
            Tool(
                name="search_terminal_output",
                description="Searches the terminal output for lines matching a query string and returns matching lines with their line numbers",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "query": {
                            "type": "string",
                            "description": "The search query string to find in terminal output",
                        },
                        "sessionId": SESSION_ID_SCHEMA,
                        "maxResults": {
                            "type": "integer",
                            "description": "Maximum number of matching lines to return. Defaults to 50.",
                        },
                    },
                    "required": ["query"],
                },
            ),
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:
        arguments = arguments or {}
        try:
            if name == "list_terminals":
                return await _list_terminals(manager)
            elif name == "create_terminal":
                return await _create_terminal(manager)
            elif name == "write_to_terminal":
                return await _write_to_terminal(manager, arguments)
            elif name == "read_terminal_output":
                return await _read_terminal_output(manager, arguments)
            elif name == "send_control_character":
                return await _send_control_character(manager, arguments)
            elif name == "search_terminal_output":
                return await _search_terminal_output(manager, arguments)
            else:
                return [TextContent(type="text", text=f"Unknown tool: {name}")]
        except ITermError as e:
            logger.warning("tool_failed", tool=name, error=str(e))
            return [TextContent(type="text", text=f"Error: {e}")]


async def _list_terminals(manager: TerminalManager) -> list[TextContent]:
    terminals = await manager.list_terminals()

    if not terminals:
        return [TextContent(type="text", text="No terminal sessions found")]

    lines = ["Session ID\tTab Name\tWorking Directory\tLast Command"]
    for t in terminals:
        lines.append(f"{t.session_id}\t{t.name}\t{t.cwd}\t{t.last_command}")

    return [TextContent(type="text", text="\n".join(lines))]


async def _create_terminal(manager: TerminalManager) -> list[TextContent]:
    session_id = await manager.create_terminal()

    return [
        TextContent(
            type="text",
            text=f"Created new terminal with session ID: {session_id}",
        )
    ]


async def _write_to_terminal(
    manager: TerminalManager, args: dict
) -> list[TextContent]:
    command = str(args["command"])
    session_id = args.get("sessionId")

    result = await manager.write_to_terminal(command, session_id)
    lines = result.output_line_delta

    text = (
        f"{lines} lines were output after sending the command to the terminal. "
        f"Read the last {lines} lines of terminal contents to orient yourself. "
        "Never assume that the command was executed or that it was successful."
    )
    if not result.completed:
        text = f"[TIMEOUT: Terminal was still processing after {manager.config.max_wait}s]\n{text}"

    return [TextContent(type="text", text=text)]


async def _read_terminal_output(
    manager: TerminalManager, args: dict
) -> list[TextContent]:
    try:
        lines = int(args.get("linesOfOutput") or manager.config.default_read_lines)
    except (TypeError, ValueError):
        lines = manager.config.default_read_lines
    session_id = args.get("sessionId")

    output = await manager.read_terminal_output(lines, session_id)

    return [TextContent(type="text", text=output)]


async def _send_control_character(
    manager: TerminalManager, args: dict
) -> list[TextContent]:
    letter = str(args["letter"])
    session_id = args.get("sessionId")

    await manager.send_control_character(letter, session_id)

    return [
        TextContent(type="text", text=f"Sent control character: Control-{letter.upper()}")
    ]


async def _search_terminal_output(
    manager: TerminalManager, args: dict
) -> list[TextContent]:
    query = str(args["query"])
    session_id = args.get("sessionId")
    try:
        max_results = int(args.get("maxResults") or manager.config.default_max_results)
    except (TypeError, ValueError):
        max_results = manager.config.default_max_results

    matches = await manager.search_terminal_output(query, session_id, max_results)

    if not matches:
        return [TextContent(type="text", text=f'No matches found for "{query}"')]

    return [
        TextContent(
            type="text",
            text=f'Found {len(matches)} match(es) for "{query}":\n\n' + "\n".join(matches),
        )
    ]
