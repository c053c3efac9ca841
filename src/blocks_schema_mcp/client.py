# Blocks Schema MCP Server
# File: client.py
# Version: v4
"""HTTP client for the Blocks schema-definition API.

Implements:

- define_url() for the single endpoint that serves both create and update
- send() which performs the authenticated JSON call and normalizes the body
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional
import json
import logging

import httpx
from httpx import RequestError

from .config import BlocksConfig
from .errors import ApiError

logger = logging.getLogger(__name__)

DEFINE_PATH = "/graphql/v1/schemas/define"


@dataclass
class SchemaClient:
    """Wrapper around the Blocks ``schemas/define`` endpoint."""

    config: BlocksConfig
    transport: Optional[httpx.AsyncBaseTransport] = None

    def define_url(self, api_base_url: str) -> str:
        return f"{api_base_url.rstrip('/')}{DEFINE_PATH}"

    async def send(
        self,
        url: str,
        method: str,
        token: str,
        payload: Dict[str, Any],
        tenant_key: str,
    ) -> Any:
        """Send ``payload`` as JSON and return the parsed response body.

        The body is returned as parsed JSON when possible and as raw text
        otherwise. Non-2xx responses raise ApiError after the parse attempt
        so structured error bodies stay available on the exception.
        """
        headers = {
            "Content-Type": "application/json",
            "x-blocks-key": tenant_key,
            "Authorization": f"Bearer {token}",
        }

        logger.info(
            "Sending schema request: %s %s (Authorization=Bearer [HIDDEN], fields=%d)",
            method,
            url,
            len(payload.get("Fields") or []),
        )

        async with httpx.AsyncClient(
            timeout=float(self.config.http_timeout_seconds),
            verify=self.config.verify_tls,
            transport=self.transport,
        ) as http_client:
            try:
                response = await http_client.request(
                    method,
                    url,
                    content=json.dumps(payload),
                    headers=headers,
                )
            except RequestError as exc:
                raise ApiError(
                    f"Error calling schema API at '{url}': {exc}"
                ) from exc

        status = response.status_code
        body = response.text
        logger.info("Schema endpoint responded with HTTP %s", status)

        try:
            data: Any = json.loads(body)
        except ValueError:
            logger.warning("Schema response is not JSON; returning raw text")
            data = body

        if not response.is_success:
            logger.error("Schema request failed with HTTP %s", status)
            raise ApiError(
                f"HTTP {status}: {body}",
                status_code=status,
                body=body,
                response=data,
            )

        return data
