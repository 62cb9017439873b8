"""Chain struct source backed by a JSON read gateway.

The gateway sits in front of a Subsocial node and answers
`POST /v1/{kind}s/by-ids` with body `{"ids": [...]}` by returning a JSON list of
the structs that exist. Node connections and SCALE decoding are the gateway's
concern, not ours.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from subsocial_reader.core.errors import StructSourceError
from subsocial_reader.core.settings import settings
from subsocial_reader.schemas.query import StructKind
from subsocial_reader.services.http import HTTP_OK, GatewayClient, GatewayConfig

logger = logging.getLogger(__name__)


def load_chain_config() -> GatewayConfig:
    """Build configuration object from global settings."""
    return GatewayConfig(
        base_url=settings.chain_gateway_url,
        timeout_seconds=float(settings.http_timeout_seconds),
    )


class ChainGatewayClient(GatewayClient):
    """`StructSource` implementation over HTTP."""

    error_class = StructSourceError

    def __init__(
        self,
        config: GatewayConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config or load_chain_config(), transport=transport)

    async def get_structs(
        self, kind: StructKind, ids: Sequence[str]
    ) -> Mapping[str, Mapping[str, Any]]:
        """Fetch structs of one kind in a single request.

        Args:
            kind: Struct kind to load.
            ids: Ids to look up. Ids the chain does not know are left out of the result.

        Returns:
            Raw struct payloads keyed by id.

        Raises:
            StructSourceError: If the gateway is unreachable or answers with an error.
        """
        if not ids:
            return {}

        kind_name = StructKind(kind).value
        path = f"/v1/{kind_name}s/by-ids"
        response = await self._request("POST", path, json={"ids": list(ids)})
        if response.status_code != HTTP_OK:
            raise StructSourceError(
                f"Unexpected chain gateway response ({response.status_code}) for {path}",
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise StructSourceError(f"Chain gateway returned invalid JSON for {path}") from exc
        if not isinstance(payload, list):
            raise StructSourceError(f"Chain gateway returned {type(payload).__name__} for {path}")

        structs: dict[str, Mapping[str, Any]] = {}
        for item in payload:
            if not isinstance(item, Mapping) or item.get("id") is None:
                logger.warning("Skipping malformed %s struct from chain gateway: %r", kind_name, item)
                continue
            structs[str(item["id"])] = item

        logger.debug("Loaded %d of %d %s structs", len(structs), len(ids), kind_name)
        return structs
