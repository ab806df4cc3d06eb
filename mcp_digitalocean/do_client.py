from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote

import anyio
import httpx

from . import __version__
from .config import Settings

logger = logging.getLogger(__name__)

USER_AGENT = f"mcp-digitalocean/{__version__}"

_RETRY_STATUSES = {429, 500, 502, 503, 504}


class BackendError(Exception):
    """
    A DigitalOcean API call failed.

    Covers error responses, transport failures and timeouts alike; the
    message is surfaced to the caller verbatim.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def api_path(*segments: Any) -> str:
    """
    Join path segments into an API path, percent-encoding each one.

    Caller-supplied IDs may contain "/" or "?"; quoting keeps them inside
    their own segment.
    """
    return "/" + "/".join(quote(str(s), safe="") for s in segments)


@dataclass(frozen=True)
class ListOptions:
    page: Optional[int] = None
    per_page: Optional[int] = None

    def to_params(self) -> Dict[str, int]:
        params: Dict[str, int] = {}
        if self.page is not None:
            params["page"] = self.page
        if self.per_page is not None:
            params["per_page"] = self.per_page
        return params


class DigitalOceanClient:
    """
    Thin async wrapper around the DigitalOcean v2 REST API.

    One instance is created at startup and handed to every tool group, so all
    handlers share a single connection pool. The client knows nothing about
    tools; it performs a request and returns the decoded JSON body or raises
    `BackendError`.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.api_url,
            headers={
                "Authorization": f"Bearer {settings.api_token}",
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": USER_AGENT,
            },
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        options: Optional[ListOptions] = None,
        key: Optional[str] = None,
    ) -> Any:
        """
        Perform one API call.

        `options` is only turned into query parameters when given, so "no
        pagination" reaches the API as the absence of page/per_page. `key`
        unwraps a single field of the response envelope (e.g. "droplet").
        """
        query: Dict[str, Any] = dict(params or {})
        if options is not None:
            query.update(options.to_params())

        attempt = 0
        while True:
            try:
                response = await self._client.request(
                    method,
                    path.lstrip("/"),
                    params=query or None,
                    json=json,
                )
            except httpx.TimeoutException as e:
                raise BackendError(f"{method} {path}: request timed out: {e}") from e
            except httpx.HTTPError as e:
                raise BackendError(f"{method} {path}: {e}") from e

            if response.status_code in _RETRY_STATUSES and attempt < self._settings.retry_max:
                delay = self._retry_delay(response, attempt)
                logger.debug(
                    "Retrying %s %s after %s (status %s, attempt %d)",
                    method,
                    path,
                    delay,
                    response.status_code,
                    attempt + 1,
                )
                attempt += 1
                await anyio.sleep(delay)
                continue
            break

        if response.status_code >= 400:
            raise BackendError(_error_message(response), status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None

        try:
            body = response.json()
        except ValueError as e:
            raise BackendError(f"{method} {response.request.url}: invalid JSON response: {e}") from e

        if key is not None and isinstance(body, dict):
            return body.get(key)
        return body

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

    def _retry_delay(self, response: httpx.Response, attempt: int) -> float:
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            try:
                return min(float(retry_after), self._settings.retry_wait_max)
            except ValueError:
                pass
        return min(self._settings.retry_wait_min * (2**attempt), self._settings.retry_wait_max)

    async def aclose(self) -> None:
        await self._client.aclose()


def _error_message(response: httpx.Response) -> str:
    request = response.request
    detail = response.text
    request_id = ""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        detail = data.get("message") or detail
        request_id = data.get("request_id") or ""

    message = f"{request.method} {request.url}: {response.status_code}"
    if request_id:
        message += f" (request \"{request_id}\")"
    return f"{message} {detail}".rstrip()
