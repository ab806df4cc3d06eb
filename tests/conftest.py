from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import pytest

from mcp_digitalocean.config import Settings
from mcp_digitalocean.do_client import BackendError
from mcp_digitalocean.main import build_registry


class FakeClient:
    """
    Stands in for DigitalOceanClient: records every call and answers from a
    table of canned responses keyed by (method, path).
    """

    def __init__(self, default: Any = None) -> None:
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []
        self.responses: Dict[Tuple[str, str], Any] = {}
        self.default = {"ok": True} if default is None else default

    def respond(self, method: str, path: str, value: Any) -> None:
        self.responses[(method, path)] = value

    def fail(self, method: str, path: str, message: str = "GET /x: 404 not found") -> None:
        self.responses[(method, path)] = BackendError(message, status_code=404)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def last_call(self) -> Tuple[str, str, Dict[str, Any]]:
        return self.calls[-1]

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        self.calls.append((method, path, kwargs))
        value = self.responses.get((method, path), self.default)
        if isinstance(value, BaseException):
            raise value
        return value

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def aclose(self) -> None:
        pass


def make_settings(**overrides: Any) -> Settings:
    values: Dict[str, Any] = {"api_token": "test-token"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def registry(fake_client: FakeClient):
    return build_registry(fake_client, [])


def options_of(call: Tuple[str, str, Dict[str, Any]]) -> Optional[Any]:
    return call[2].get("options")
