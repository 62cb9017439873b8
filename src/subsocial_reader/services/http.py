"""Shared plumbing for the HTTP collaborators.

Each collaborator owns one lazily created `httpx.AsyncClient` which must be
released with `close()`.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx

from subsocial_reader.core.errors import SubsocialReaderError

HTTP_OK = 200


@dataclass(frozen=True)
class GatewayConfig:
    """Immutable configuration for one HTTP gateway."""

    base_url: str
    timeout_seconds: float


class GatewayClient:
    """Base class holding the HTTP client of a gateway."""

    error_class: type[SubsocialReaderError] = SubsocialReaderError

    def __init__(
        self,
        config: GatewayConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.base_url,
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                )
        return self._client

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request, turning transport failures into `error_class`."""
        client = await self._ensure_client()
        try:
            return await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise self.error_class(f"{method} {path} failed: {exc}") from exc

    async def close(self) -> None:
        """Clean up underlying HTTP client resources."""
        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None
