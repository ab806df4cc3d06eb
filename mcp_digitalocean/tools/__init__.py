"""
Tool registration utilities.

Each `*_tools` module in this package exposes a `register_tools(registry, client)`
function that adds its tools (and resources) to the central registry used by
the MCP server. The registry is filled once at startup, sealed, and only read
afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Union

from mcp import types

from ..do_client import BackendError
from .params import ArgumentError, Param, extract_arguments
from .results import (
    BACKEND_ERROR_MARKER,
    JSON_MIME,
    Failure,
    Success,
    ToolResult,
    backend_error,
    caller_error,
    success,
)
from .router import NoRouteError, ResourceRouter, UriTemplate

logger = logging.getLogger(__name__)


Handler = Callable[[Dict[str, Any]], Awaitable[Any]]


class DuplicateNameError(ValueError):
    """A tool name or resource URI pattern is registered twice."""


class UnknownToolError(KeyError):
    """No tool is registered under the requested name."""


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    handler: Handler
    params: Sequence[Param] = ()
    error_context: str = ""

    def input_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in self.params},
        }
        required = [p.name for p in self.params if p.required]
        if required:
            schema["required"] = required
        return schema

    def to_mcp(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema(),
        )


@dataclass(frozen=True)
class ResourceDefinition:
    """
    A read-only lookup addressed by URI.

    `params` declare how the template's path variables are coerced; a variable
    without a declaration is passed through as a string.
    """

    uri: str
    name: str
    description: str
    handler: Handler
    params: Sequence[Param] = ()
    mime_type: str = JSON_MIME
    error_context: str = ""


@dataclass
class _RegisteredResource:
    definition: ResourceDefinition
    template: UriTemplate
    params: Sequence[Param]


class ToolRegistry:
    """
    In-memory registry mapping MCP tool names and resource URI templates to
    their declarations and handlers.
    """

    def __init__(self) -> None:
        self._tools: Dict[str, ToolDefinition] = {}
        self._resources: Dict[str, _RegisteredResource] = {}
        self._router: ResourceRouter[_RegisteredResource] = ResourceRouter()
        self._sealed = False

    def add_tool(self, tool: ToolDefinition) -> None:
        self._check_open()
        if tool.name in self._tools:
            raise DuplicateNameError(f"Tool '{tool.name}' already registered")
        _check_param_names(tool.name, tool.params)
        self._tools[tool.name] = tool

    def add_resource(self, resource: ResourceDefinition) -> None:
        self._check_open()
        if resource.uri in self._resources:
            raise DuplicateNameError(f"Resource '{resource.uri}' already registered")
        _check_param_names(resource.uri, resource.params)

        template = UriTemplate(resource.uri)
        declared = {p.name for p in resource.params}
        unknown = declared - set(template.variables)
        if unknown:
            raise ValueError(
                f"Resource '{resource.uri}' declares params not in its URI: {sorted(unknown)}"
            )
        params = list(resource.params) + [
            Param(name=v, required=True) for v in template.variables if v not in declared
        ]
        entry = _RegisteredResource(definition=resource, template=template, params=params)
        self._router.add(resource.uri, entry)
        self._resources[resource.uri] = entry

    def seal(self) -> None:
        """Freeze the registry; later registrations raise RuntimeError."""
        self._sealed = True

    def get_tool(self, name: str) -> ToolDefinition:
        if name not in self._tools:
            raise UnknownToolError(f"Unknown tool '{name}'")
        return self._tools[name]

    def tool_names(self) -> List[str]:
        return list(self._tools)

    def list_tools(self) -> List[types.Tool]:
        return [tool.to_mcp() for tool in self._tools.values()]

    def list_resources(self) -> List[types.Resource]:
        return [
            types.Resource(
                uri=entry.definition.uri,
                name=entry.definition.name,
                description=entry.definition.description,
                mimeType=entry.definition.mime_type,
            )
            for entry in self._resources.values()
            if not entry.template.variables
        ]

    def list_resource_templates(self) -> List[types.ResourceTemplate]:
        return [
            types.ResourceTemplate(
                uriTemplate=entry.definition.uri,
                name=entry.definition.name,
                description=entry.definition.description,
                mimeType=entry.definition.mime_type,
            )
            for entry in self._resources.values()
            if entry.template.variables
        ]

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]]) -> ToolResult:
        tool = self.get_tool(name)
        return await _invoke(name, tool.handler, tool.params, tool.error_context, arguments)

    async def read_resource(self, uri: str) -> ToolResult:
        try:
            entry, variables = self._router.route(uri)
        except NoRouteError as e:
            logger.debug("Rejected resource read: %s", e)
            return caller_error(str(e))
        definition = entry.definition
        result = await _invoke(
            uri, definition.handler, entry.params, definition.error_context, variables
        )
        if isinstance(result, Success) and result.mime_type != definition.mime_type:
            result = Success(text=result.text, mime_type=definition.mime_type)
        return result

    def _check_open(self) -> None:
        if self._sealed:
            raise RuntimeError("Registry is sealed; register tools before serving")


def _check_param_names(owner: str, params: Sequence[Param]) -> None:
    seen = set()
    for param in params:
        if param.name in seen:
            raise ValueError(f"'{owner}' declares parameter '{param.name}' twice")
        seen.add(param.name)


def _backend_context(error_context: str) -> str:
    # The marker always leads; a tool may add its own wording after it.
    if not error_context:
        return BACKEND_ERROR_MARKER
    return f"{BACKEND_ERROR_MARKER}: {error_context}"


async def _invoke(
    target: str,
    handler: Handler,
    params: Sequence[Param],
    error_context: str,
    arguments: Optional[Mapping[str, Any]],
) -> ToolResult:
    try:
        args = extract_arguments(arguments, params)
    except ArgumentError as e:
        logger.debug("Rejected input for %s: %s", target, e)
        return caller_error(str(e))

    try:
        result: Union[ToolResult, Any] = await handler(args)
    except BackendError as e:
        logger.warning("Backend call for %s failed: %s", target, e)
        return backend_error(_backend_context(error_context), e)

    if isinstance(result, (Success, Failure)):
        return result
    return success(result)


__all__ = [
    "DuplicateNameError",
    "Handler",
    "ResourceDefinition",
    "ToolDefinition",
    "ToolRegistry",
    "UnknownToolError",
]
