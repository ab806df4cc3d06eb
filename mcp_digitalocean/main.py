from __future__ import annotations

import logging
import sys
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import anyio
from mcp import types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from pydantic import AnyUrl

from . import __version__
from .config import Settings, get_settings
from .do_client import DigitalOceanClient
from .tools import ToolRegistry, UnknownToolError
from .tools import (
    account_tools,
    database_tools,
    droplet_tools,
    insights_tools,
    marketplace_tools,
    networking_tools,
    region_tools,
    spaces_tools,
)
from .tools.results import ErrorKind, Failure

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-digitalocean"

RegisterFn = Callable[[ToolRegistry, DigitalOceanClient], None]

SERVICES: Dict[str, RegisterFn] = {
    "accounts": account_tools.register_tools,
    "droplets": droplet_tools.register_tools,
    "networking": networking_tools.register_tools,
    "databases": database_tools.register_tools,
    "insights": insights_tools.register_tools,
    "marketplace": marketplace_tools.register_tools,
    "spaces": spaces_tools.register_tools,
}


def build_registry(client: DigitalOceanClient, services: Sequence[str] = ()) -> ToolRegistry:
    """
    Register the requested service groups plus the always-on region tools.

    An empty selection enables every service.
    """
    unknown = [s for s in services if s not in SERVICES]
    if unknown:
        raise ValueError(
            f"Unsupported service(s): {', '.join(unknown)}. "
            f"Supported services are: {', '.join(SERVICES)}"
        )
    if not services:
        logger.warning("No services selected; enabling all of them: %s", ", ".join(SERVICES))
        services = list(SERVICES)

    registry = ToolRegistry()
    for service in services:
        SERVICES[service](registry, client)
    region_tools.register_tools(registry, client)
    registry.seal()
    logger.info(
        "Registered %d tools for services: %s", len(registry.tool_names()), ", ".join(services)
    )
    return registry


def create_server_with_registry(
    settings: Optional[Settings] = None,
    client: Optional[DigitalOceanClient] = None,
) -> Tuple[Server, ToolRegistry]:
    """
    Create the MCP server together with the registry it dispatches to.

    The HTTP transport reuses the registry directly; stdio goes through the
    handlers registered on the server.
    """
    settings = settings or get_settings()
    client = client or DigitalOceanClient(settings)
    registry = build_registry(client, settings.service_list())

    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return registry.list_tools()

    # Internal errors and unknown tools surface as JSON-RPC errors, never as
    # isError results, so the handler is installed without @server.call_tool().
    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        name = request.params.name
        try:
            result = await registry.call_tool(name, request.params.arguments)
        except UnknownToolError as e:
            raise McpError(
                types.ErrorData(code=types.METHOD_NOT_FOUND, message=f"Tool not found: {name}")
            ) from e
        except Exception as e:
            logger.exception("Tool %s failed", name)
            raise McpError(
                types.ErrorData(code=types.INTERNAL_ERROR, message=f"Internal error: {e}")
            ) from e
        return types.ServerResult(result.to_call_tool_result())

    server.request_handlers[types.CallToolRequest] = call_tool

    @server.list_resources()
    async def list_resources() -> List[types.Resource]:
        return registry.list_resources()

    @server.list_resource_templates()
    async def list_resource_templates() -> List[types.ResourceTemplate]:
        return registry.list_resource_templates()

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> Iterable[ReadResourceContents]:
        try:
            result = await registry.read_resource(str(uri))
        except Exception as e:
            logger.exception("Reading resource %s failed", uri)
            raise McpError(
                types.ErrorData(code=types.INTERNAL_ERROR, message=f"Internal error: {e}")
            ) from e
        if isinstance(result, Failure):
            raise McpError(resource_error(result))
        return [ReadResourceContents(content=result.text, mime_type=result.mime_type)]

    return server, registry


def resource_error(failure: Failure) -> types.ErrorData:
    code = types.INVALID_PARAMS if failure.kind == ErrorKind.CALLER_INPUT else types.INTERNAL_ERROR
    return types.ErrorData(code=code, message=failure.message)


def create_server() -> Server:
    """
    Create and configure the MCP server with all selected tools.
    """
    server, _ = create_server_with_registry()
    return server


async def run_stdio(settings: Settings) -> None:
    client = DigitalOceanClient(settings)
    try:
        server, _ = create_server_with_registry(settings, client)
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await client.aclose()


def configure_logging(level: str) -> None:
    # stdout carries the stdio protocol; logs go to stderr.
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """
    Entrypoint for running the MCP server.

    Supports two transport modes:
    - stdio: For direct process-to-process communication (default)
    - http: For HTTP/SSE transport behind reverse proxy
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting %s %s (%s transport)", SERVER_NAME, __version__, settings.transport)

    if settings.transport == "http":
        from .http_server import run_http_server

        anyio.run(run_http_server, settings.server_host, settings.server_port, settings)
    else:
        anyio.run(run_stdio, settings)


if __name__ == "__main__":
    main()
