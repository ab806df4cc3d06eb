import pytest

from mcp_digitalocean.do_client import BackendError
from mcp_digitalocean.models import SlackDetails
from mcp_digitalocean.tools.results import (
    JSON_MIME,
    TEXT_MIME,
    ErrorKind,
    InternalError,
    backend_error,
    caller_error,
    message,
    success,
)


def test_success_is_indented_json_in_field_order():
    result = success({"name": "nyc3", "available": True, "sizes": ["s-1vcpu-1gb"]})
    assert result.mime_type == JSON_MIME
    assert result.text.startswith('{\n  "name": "nyc3"')
    assert result.payload() == {"name": "nyc3", "available": True, "sizes": ["s-1vcpu-1gb"]}


def test_success_serializes_models():
    result = success(SlackDetails(url="https://hooks.slack.com/x", channel="#ops"))
    assert result.payload() == {"url": "https://hooks.slack.com/x", "channel": "#ops"}


def test_success_null_payload():
    assert success(None).text == "null"


def test_unserializable_payload_is_internal_error():
    with pytest.raises(InternalError, match="marshal error"):
        success({"when": object()})
    with pytest.raises(InternalError):
        success({"ratio": float("nan")})


def test_message_is_plain_text():
    result = message("Droplet deleted successfully")
    assert result.mime_type == TEXT_MIME
    assert result.payload() == "Droplet deleted successfully"
    call = result.to_call_tool_result()
    assert call.isError is False
    assert call.content[0].text == "Droplet deleted successfully"


def test_caller_error():
    failure = caller_error("Name is required")
    assert failure.kind == ErrorKind.CALLER_INPUT
    assert failure.is_error
    call = failure.to_call_tool_result()
    assert call.isError is True
    assert call.content[0].text == "Name is required"


def test_backend_error_carries_context():
    err = BackendError("GET https://api/v2/droplets/1: 404 not found", status_code=404)
    failure = backend_error("api error", err)
    assert failure.kind == ErrorKind.BACKEND
    assert failure.message == "api error: GET https://api/v2/droplets/1: 404 not found"

    custom = backend_error("Failed to list 1-click apps", err)
    assert custom.message.startswith("Failed to list 1-click apps: ")
