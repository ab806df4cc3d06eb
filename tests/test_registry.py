import json

import anyio
import pytest

from conftest import FakeClient
from mcp_digitalocean.do_client import BackendError
from mcp_digitalocean.main import build_registry
from mcp_digitalocean.tools import (
    DuplicateNameError,
    ResourceDefinition,
    ToolDefinition,
    ToolRegistry,
    UnknownToolError,
)
from mcp_digitalocean.tools.params import Kind, Param
from mcp_digitalocean.tools.results import (
    TEXT_MIME,
    ErrorKind,
    Failure,
    InternalError,
    Success,
    message,
)


async def _echo(args):
    return args


def _sample(param: Param):
    """A value that satisfies `param` on its own."""
    if param.name == "source":
        return {"host": "db.internal", "port": 5432}
    if param.name == "rules_json":
        return [{"type": "ip_addr", "value": "192.168.1.1"}]
    if param.kind == Kind.STRING:
        return "x"
    if param.kind in (Kind.INTEGER, Kind.NUMBER):
        return 1
    if param.kind == Kind.BOOLEAN:
        return True
    if param.kind == Kind.ARRAY:
        return [1] if param.items == Kind.INTEGER else ["x"]
    return {}


def _required_cases():
    registry = build_registry(FakeClient(), [])
    for name in registry.tool_names():
        tool = registry.get_tool(name)
        for param in tool.params:
            if param.required and param.default is None:
                yield name, param.name


def test_duplicate_tool_name_rejected():
    registry = ToolRegistry()
    registry.add_tool(ToolDefinition(name="echo", description="", handler=_echo))
    with pytest.raises(DuplicateNameError):
        registry.add_tool(ToolDefinition(name="echo", description="again", handler=_echo))


def test_duplicate_param_name_rejected():
    registry = ToolRegistry()
    with pytest.raises(ValueError):
        registry.add_tool(
            ToolDefinition(name="echo", description="", handler=_echo, params=[Param("A"), Param("A")])
        )


def test_resource_params_must_be_uri_variables():
    registry = ToolRegistry()
    with pytest.raises(ValueError):
        registry.add_resource(
            ResourceDefinition(
                uri="things://{id}",
                name="Thing",
                description="",
                handler=_echo,
                params=[Param("other")],
            )
        )


def test_sealed_registry_rejects_registration():
    registry = ToolRegistry()
    registry.seal()
    with pytest.raises(RuntimeError):
        registry.add_tool(ToolDefinition(name="echo", description="", handler=_echo))


@pytest.mark.asyncio
async def test_unknown_tool_raises(registry):
    with pytest.raises(UnknownToolError):
        await registry.call_tool("droplet-explode", {})


def test_all_tool_names_unique_and_listed(registry):
    names = registry.tool_names()
    assert len(names) == len(set(names))
    assert [t.name for t in registry.list_tools()] == names
    assert "digitalocean-region-list" in names


def test_input_schema_lists_required_fields(registry):
    schema = registry.get_tool("digitalocean-create-droplet").input_schema()
    assert schema["type"] == "object"
    assert schema["required"] == ["Name", "Size", "ImageID", "Region"]
    assert schema["properties"]["Backup"] == {
        "type": "boolean",
        "description": "Whether to enable backups",
        "default": False,
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("tool_name,missing", list(_required_cases()))
async def test_missing_required_field_never_reaches_backend(fake_client, registry, tool_name, missing):
    tool = registry.get_tool(tool_name)
    arguments = {p.name: _sample(p) for p in tool.params if p.required and p.name != missing}

    result = await registry.call_tool(tool_name, arguments)

    assert isinstance(result, Failure)
    assert result.kind == ErrorKind.CALLER_INPUT
    assert missing.lower() in result.message.lower()
    assert fake_client.call_count == 0


@pytest.mark.asyncio
async def test_wrong_type_is_caller_error(fake_client, registry):
    result = await registry.call_tool("digitalocean-get-droplet", {"ID": "not-a-number"})
    assert result.kind == ErrorKind.CALLER_INPUT
    assert "ID" in result.message
    assert fake_client.call_count == 0


@pytest.mark.asyncio
async def test_malformed_json_text_never_reaches_backend(fake_client, registry):
    result = await registry.call_tool(
        "digitalocean-databases-cluster-update-kafka-config",
        {"id": "c-1", "config_json": "{broken"},
    )
    assert result.kind == ErrorKind.CALLER_INPUT
    assert result.message.startswith("Invalid config_json: ")
    assert fake_client.call_count == 0


@pytest.mark.asyncio
async def test_backend_failure_carries_api_error_marker(fake_client, registry):
    fake_client.fail("GET", "/droplets/42", "GET https://api.digitalocean.com/v2/droplets/42: 404 not found")

    result = await registry.call_tool("digitalocean-get-droplet", {"ID": 42})

    assert result.kind == ErrorKind.BACKEND
    assert result.message == "api error: GET https://api.digitalocean.com/v2/droplets/42: 404 not found"
    call = result.to_call_tool_result()
    assert call.isError is True


@pytest.mark.asyncio
async def test_tool_context_follows_backend_marker(fake_client, registry):
    fake_client.fail("GET", "/1-clicks", "boom")
    result = await registry.call_tool("digitalocean-1-click-list", {})
    assert result.kind == ErrorKind.BACKEND
    assert result.message == "api error: Failed to list 1-click apps: boom"


@pytest.mark.asyncio
async def test_backend_marker_leads_for_every_tool(fake_client, registry):
    fake_client.default = BackendError("boom")
    for name in registry.tool_names():
        tool = registry.get_tool(name)
        arguments = {p.name: _sample(p) for p in tool.params}
        result = await registry.call_tool(name, arguments)
        if result.is_error and result.kind == ErrorKind.BACKEND:
            assert result.message.startswith("api error"), name


@pytest.mark.asyncio
async def test_success_serializes_backend_payload(fake_client, registry):
    fake_client.respond("GET", "/droplets/7", {"id": 7, "name": "web-1"})

    result = await registry.call_tool("digitalocean-get-droplet", {"ID": 7})

    assert isinstance(result, Success)
    assert json.loads(result.text) == {"id": 7, "name": "web-1"}
    assert fake_client.last_call() == ("GET", "/droplets/7", {"key": "droplet"})


@pytest.mark.asyncio
async def test_unserializable_payload_propagates():
    async def broken(args):
        return {"value": object()}

    registry = ToolRegistry()
    registry.add_tool(ToolDefinition(name="broken", description="", handler=broken))
    with pytest.raises(InternalError):
        await registry.call_tool("broken", {})


@pytest.mark.asyncio
async def test_unexpected_exception_propagates():
    async def crash(args):
        raise ZeroDivisionError("oops")

    registry = ToolRegistry()
    registry.add_tool(ToolDefinition(name="crash", description="", handler=crash))
    with pytest.raises(ZeroDivisionError):
        await registry.call_tool("crash", {})


@pytest.mark.asyncio
async def test_handler_envelope_passes_through():
    async def done(args):
        return message("done")

    registry = ToolRegistry()
    registry.add_tool(ToolDefinition(name="done", description="", handler=done))
    result = await registry.call_tool("done", None)
    assert result == Success(text="done", mime_type=TEXT_MIME)


def test_static_resources_and_templates_are_listed_apart(registry):
    static = {str(r.uri) for r in registry.list_resources()}
    templates = {t.uriTemplate for t in registry.list_resource_templates()}

    assert {"regions://all", "sizes://all", "account://current", "images://distribution"} <= static
    assert {"droplets://{id}", "droplets://{id}/actions/{action_id}", "domains://{name}"} <= templates
    assert not static & templates


@pytest.mark.asyncio
async def test_read_resource_routes_to_most_specific(fake_client, registry):
    fake_client.respond("GET", "/droplets/5/actions/9", {"id": 9, "status": "completed"})

    result = await registry.read_resource("droplets://5/actions/9")

    assert result.payload() == {"id": 9, "status": "completed"}
    assert fake_client.last_call() == ("GET", "/droplets/5/actions/9", {"key": "action"})


@pytest.mark.asyncio
async def test_read_resource_unknown_uri(fake_client, registry):
    result = await registry.read_resource("spaceships://all")
    assert result.kind == ErrorKind.CALLER_INPUT
    assert fake_client.call_count == 0


@pytest.mark.asyncio
async def test_read_resource_bad_numeric_variable(fake_client, registry):
    result = await registry.read_resource("droplets://abc")
    assert result.kind == ErrorKind.CALLER_INPUT
    assert fake_client.call_count == 0


@pytest.mark.asyncio
async def test_read_resource_backend_failure(fake_client, registry):
    fake_client.fail("GET", "/firewalls/fw-1")
    result = await registry.read_resource("firewalls://fw-1")
    assert result.kind == ErrorKind.BACKEND
    assert result.message.startswith("api error: ")


@pytest.mark.asyncio
async def test_resource_mime_type_override():
    async def readme(args):
        return message("hello")

    registry = ToolRegistry()
    registry.add_resource(
        ResourceDefinition(
            uri="docs://readme",
            name="Readme",
            description="",
            handler=readme,
            mime_type="text/markdown",
        )
    )
    result = await registry.read_resource("docs://readme")
    assert result == Success(text="hello", mime_type="text/markdown")


@pytest.mark.asyncio
async def test_cancellation_is_not_swallowed():
    async def slow(args):
        await anyio.sleep(10)

    registry = ToolRegistry()
    registry.add_tool(ToolDefinition(name="slow", description="", handler=slow))

    with anyio.move_on_after(0.01) as scope:
        await registry.call_tool("slow", {})
    assert scope.cancelled_caught


@pytest.mark.asyncio
async def test_transport_failure_from_client_is_backend_error():
    async def flaky(args):
        raise BackendError("GET /account: request timed out: read timeout")

    registry = ToolRegistry()
    registry.add_tool(ToolDefinition(name="flaky", description="", handler=flaky))
    result = await registry.call_tool("flaky", {})
    assert result.kind == ErrorKind.BACKEND
    assert "timed out" in result.message
