"""Content stores that load JSON documents from IPFS.

Two transports are supported:

- `IpfsGatewayContentStore` fetches `GET /ipfs/{cid}` from a public gateway, one
  request per CID, concurrently. A CID that fails is logged and left out.
- `OffchainContentStore` asks the Subsocial offchain server for a whole batch
  at once, with either a GET or a POST request.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Literal

import httpx

from subsocial_reader.core.errors import ContentStoreError
from subsocial_reader.core.settings import Settings, settings
from subsocial_reader.services.http import HTTP_OK, GatewayClient, GatewayConfig
from subsocial_reader.services.sources import ContentStore

logger = logging.getLogger(__name__)

HttpRequestMethod = Literal["get", "post"]


def load_ipfs_config(app_settings: Settings | None = None) -> GatewayConfig:
    """Build the IPFS gateway configuration from settings."""
    cfg = app_settings or settings
    return GatewayConfig(
        base_url=cfg.ipfs_gateway_url,
        timeout_seconds=float(cfg.http_timeout_seconds),
    )


def load_offchain_config(app_settings: Settings | None = None) -> GatewayConfig:
    """Build the offchain server configuration from settings."""
    cfg = app_settings or settings
    if not cfg.offchain_url:
        raise ContentStoreError("OFFCHAIN_URL is not configured")
    return GatewayConfig(
        base_url=cfg.offchain_url,
        timeout_seconds=float(cfg.http_timeout_seconds),
    )


def _unique(cids: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(cid for cid in cids if cid))


class IpfsGatewayContentStore(GatewayClient):
    """`ContentStore` reading documents straight from an IPFS HTTP gateway."""

    error_class = ContentStoreError

    def __init__(
        self,
        config: GatewayConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config or load_ipfs_config(), transport=transport)

    async def _fetch_one(self, cid: str) -> Any | None:
        try:
            response = await self._request("GET", f"/ipfs/{cid}")
        except ContentStoreError as exc:
            logger.warning("Failed to load IPFS content %s: %s", cid, exc)
            return None

        if response.status_code != HTTP_OK:
            logger.warning("IPFS gateway responded with %d for %s", response.status_code, cid)
            return None

        try:
            return response.json()
        except ValueError:
            logger.warning("IPFS content %s is not valid JSON", cid)
            return None

    async def get_contents(self, cids: Sequence[str]) -> Mapping[str, Any]:
        """Load every CID concurrently; failed CIDs are absent from the result."""
        unique_cids = _unique(cids)
        if not unique_cids:
            return {}

        documents = await asyncio.gather(*(self._fetch_one(cid) for cid in unique_cids))
        contents = {
            cid: document
            for cid, document in zip(unique_cids, documents)
            if document is not None
        }
        logger.debug("Loaded %d of %d IPFS documents", len(contents), len(unique_cids))
        return contents


class OffchainContentStore(GatewayClient):
    """`ContentStore` reading documents in bulk through the offchain server."""

    error_class = ContentStoreError

    def __init__(
        self,
        config: GatewayConfig | None = None,
        *,
        http_request_method: HttpRequestMethod = "get",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config or load_offchain_config(), transport=transport)
        if http_request_method not in ("get", "post"):
            raise ValueError(f"Unsupported HTTP request method: {http_request_method}")
        self.http_request_method = http_request_method

    async def get_contents(self, cids: Sequence[str]) -> Mapping[str, Any]:
        """Load a batch of CIDs in one request.

        Raises:
            ContentStoreError: If the offchain server is unreachable or fails the request.
        """
        unique_cids = _unique(cids)
        if not unique_cids:
            return {}

        path = "/v1/ipfs/get"
        if self.http_request_method == "post":
            response = await self._request("POST", path, json={"cids": unique_cids})
        else:
            response = await self._request("GET", path, params={"cids": unique_cids})

        if response.status_code != HTTP_OK:
            raise ContentStoreError(
                f"Unexpected offchain response ({response.status_code}) when loading content",
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ContentStoreError("Offchain server returned invalid JSON") from exc
        if not isinstance(payload, Mapping):
            raise ContentStoreError(f"Offchain server returned {type(payload).__name__}")

        requested = set(unique_cids)
        contents = {
            cid: document
            for cid, document in payload.items()
            if cid in requested and document is not None
        }
        logger.debug("Loaded %d of %d documents via offchain", len(contents), len(unique_cids))
        return contents


def build_content_store(app_settings: Settings | None = None) -> ContentStore:
    """Return the content store selected by configuration."""
    cfg = app_settings or settings
    if cfg.uses_offchain:
        return OffchainContentStore(
            load_offchain_config(cfg),
            http_request_method=cfg.content_http_method,
        )
    return IpfsGatewayContentStore(load_ipfs_config(cfg))
