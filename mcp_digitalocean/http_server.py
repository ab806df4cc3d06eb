from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, StreamingResponse
from mcp import types

from . import __version__
from .config import Settings, get_settings
from .do_client import DigitalOceanClient
from .main import SERVER_NAME, create_server_with_registry
from .tools import ToolRegistry, UnknownToolError
from .tools.results import ErrorKind, Failure

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"

METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
INVALID_REQUEST = -32600
PARSE_ERROR = -32700


def create_http_app(registry: ToolRegistry) -> FastAPI:
    """
    Create FastAPI app that serves the tool registry over HTTP/SSE.

    MCP over HTTP/SSE:
    - Client sends POST requests with JSON-RPC messages in body
    - Server responds with SSE stream containing JSON-RPC responses
    - Each SSE event format: "data: <json-rpc-response>\\n\\n"
    """
    app = FastAPI(
        title="DigitalOcean MCP Server",
        version=__version__,
        description="MCP server exposing DigitalOcean API operations",
    )

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok", "service": SERVER_NAME}

    @app.get("/")
    async def root():
        return {
            "service": SERVER_NAME,
            "version": __version__,
            "protocol": "mcp",
            "transport": "http/sse",
            "endpoints": {
                "health": "/health",
                "mcp_stream": "/mcp/stream",
            },
        }

    @app.post("/mcp/stream")
    async def mcp_stream(request: Request):
        """
        MCP SSE stream endpoint.

        Accepts one JSON-RPC 2.0 request and answers with one SSE event.
        Supported methods: initialize, tools/list, tools/call,
        resources/list, resources/templates/list, resources/read.
        """
        body = await request.body()
        if not body:
            return JSONResponse(_error(None, INVALID_REQUEST, "Empty request body"), status_code=400)
        try:
            message = json.loads(body)
        except json.JSONDecodeError as e:
            return JSONResponse(_error(None, PARSE_ERROR, f"Parse error: {e}"), status_code=400)

        if not isinstance(message, dict) or message.get("jsonrpc") != "2.0":
            message_id = message.get("id") if isinstance(message, dict) else None
            return JSONResponse(
                _error(message_id, INVALID_REQUEST, "Invalid Request: jsonrpc must be '2.0'"),
                status_code=400,
            )

        method = message.get("method")
        message_id = message.get("id")
        params = message.get("params") or {}
        if not method:
            return JSONResponse(
                _error(message_id, INVALID_REQUEST, "Invalid Request: method is required"),
                status_code=400,
            )

        async def generate_sse() -> AsyncIterator[str]:
            response = await handle_mcp_request(registry, method, params, message_id)
            yield f"data: {json.dumps(response)}\n\n"

        return StreamingResponse(
            generate_sse(),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",  # Disable nginx buffering
            },
        )

    return app


async def handle_mcp_request(
    registry: ToolRegistry,
    method: str,
    params: Any,
    message_id: Any,
) -> Dict[str, Any]:
    """
    Answer one JSON-RPC request from the registry.

    Tool failures are part of a successful response (`isError`); only
    protocol problems and internal errors become JSON-RPC errors.
    """
    if not isinstance(params, dict):
        return _error(message_id, INVALID_PARAMS, "Invalid params: params must be an object")

    try:
        if method == "initialize":
            return _result(
                message_id,
                {
                    "protocolVersion": PROTOCOL_VERSION,
                    "capabilities": {
                        "tools": {"listChanged": False},
                        "resources": {"subscribe": False, "listChanged": False},
                    },
                    "serverInfo": {"name": SERVER_NAME, "version": __version__},
                },
            )

        if method == "tools/list":
            tools = registry.list_tools()
            return _result(message_id, {"tools": [_dump(t) for t in tools]})

        if method == "tools/call":
            tool_name = params.get("name")
            if not tool_name:
                return _error(message_id, INVALID_PARAMS, "Invalid params: 'name' is required")
            try:
                result = await registry.call_tool(tool_name, params.get("arguments"))
            except UnknownToolError:
                return _error(message_id, METHOD_NOT_FOUND, f"Tool not found: {tool_name}")
            return _result(message_id, _dump(result.to_call_tool_result()))

        if method == "resources/list":
            resources = registry.list_resources()
            return _result(message_id, {"resources": [_dump(r) for r in resources]})

        if method == "resources/templates/list":
            templates = registry.list_resource_templates()
            return _result(message_id, {"resourceTemplates": [_dump(t) for t in templates]})

        if method == "resources/read":
            uri = params.get("uri")
            if not uri:
                return _error(message_id, INVALID_PARAMS, "Invalid params: 'uri' is required")
            result = await registry.read_resource(uri)
            if isinstance(result, Failure):
                code = INVALID_PARAMS if result.kind == ErrorKind.CALLER_INPUT else INTERNAL_ERROR
                return _error(message_id, code, result.message)
            contents = types.TextResourceContents(uri=uri, mimeType=result.mime_type, text=result.text)
            return _result(message_id, {"contents": [_dump(contents)]})

        return _error(message_id, METHOD_NOT_FOUND, f"Method not found: {method}")

    except Exception as e:
        logger.exception("Error handling MCP method %s", method)
        return _error(message_id, INTERNAL_ERROR, f"Internal error: {e}")


def _dump(model: Any) -> Dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def _result(message_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": message_id, "result": result}


def _error(message_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": message_id, "error": {"code": code, "message": message}}


async def run_http_server(
    host: str = "0.0.0.0",
    port: int = 8000,
    settings: Optional[Settings] = None,
) -> None:
    """Run the HTTP server using uvicorn."""
    import uvicorn

    settings = settings or get_settings()
    client = DigitalOceanClient(settings)
    try:
        _, registry = create_server_with_registry(settings, client)
        app = create_http_app(registry)
        config = uvicorn.Config(
            app,
            host=host,
            port=port,
            log_level="info",
            access_log=True,
        )
        server = uvicorn.Server(config)
        await server.serve()
    finally:
        await client.aclose()
