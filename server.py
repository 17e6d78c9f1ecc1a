"""
.NET CLI MCP Server - Main server implementation

This module implements the Model Context Protocol (MCP) server that exposes
information about the local .NET installation (SDKs, runtimes, `dotnet --info`
and the effective SDK for a directory) to MCP clients such as Claude Desktop,
VS Code or any other host speaking MCP over stdio.

The server:
- Registers the read-only dotnet tools from the ``tools`` package
- Routes tool calls to ``BaseTool.execute``, which returns JSON envelopes
- Keeps stdout reserved for JSON-RPC traffic; all logging goes to stderr
  (and optionally a rotating log file)
"""

import asyncio
import logging
import sys
from typing import Any

from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import ServerCapabilities, TextContent, Tool, ToolAnnotations, ToolsCapability

import config
from tools import create_tools
from tools.models import ToolOutput
from utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

SERVER_INSTRUCTIONS = (
    "Answers questions about the .NET SDKs and runtimes installed on this machine by running the "
    "local dotnet CLI. All tools are read-only."
)

# Create the MCP server instance with a unique name identifier
# This name is used by MCP clients to identify and connect to this specific server
server: Server = Server(config.SERVER_NAME, instructions=SERVER_INSTRUCTIONS)

# Tool registry - maps tool names to their implementations
TOOLS = create_tools()


@server.list_tools()
async def handle_list_tools() -> list[Tool]:
    """
    List all available tools with their descriptions and input schemas.

    Called by MCP clients during discovery; the schema for each tool comes
    from ``BaseTool.get_input_schema`` so validation and advertisement
    cannot drift apart.
    """
    logger.debug("MCP client requested tool list")

    tools: list[Tool] = []
    for tool in TOOLS.values():
        annotations = tool.get_annotations()
        tools.append(
            Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.get_input_schema(),
                annotations=ToolAnnotations(**annotations) if annotations else None,
            )
        )

    logger.debug("Returning %d tools to MCP client", len(tools))
    return tools


@server.call_tool()
async def handle_call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """
    Handle incoming tool execution requests from MCP clients.

    Unknown tool names produce an error envelope instead of a protocol error
    so the calling model sees which tools exist.
    """
    logger.info("MCP tool call: %s", name)
    logger.debug("MCP tool arguments: %s", arguments)

    tool = TOOLS.get(name)
    if tool is None:
        available = ", ".join(sorted(TOOLS))
        error_output = ToolOutput(
            status="error",
            content=f"Unknown tool: {name}. Available tools: {available}",
            content_type="text",
            metadata={"error_type": "unknown_tool"},
        )
        return [TextContent(type="text", text=error_output.model_dump_json())]

    result = await tool.execute(arguments or {})
    logger.info("MCP tool %s completed", name)
    return result


async def main() -> None:
    """Configure logging and serve MCP over stdio until the client disconnects."""
    configure_logging("mcp_server.log")

    logger.info("Starting %s v%s", config.SERVER_NAME, config.__version__)
    logger.info("dotnet executable: %s", config.DOTNET_EXECUTABLE)
    logger.info("Available tools: %s", ", ".join(TOOLS))
    logger.info("Listening for MCP protocol messages on stdin/stdout...")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name=config.SERVER_NAME,
                server_version=config.__version__,
                capabilities=ServerCapabilities(tools=ToolsCapability()),
                instructions=SERVER_INSTRUCTIONS,
            ),
        )

    logger.info("MCP server shutting down")


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        # Graceful shutdown on Ctrl+C
        pass
    except Exception:
        logger.critical("MCP server terminated unexpectedly", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
