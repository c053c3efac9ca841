# Blocks Schema MCP Server
# File: auth.py
# Version: v3

"""OAuth password-grant client for obtaining Blocks access tokens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
import json
import logging

import httpx
from httpx import RequestError

from .config import BlocksConfig
from .errors import AuthError
from .models import Credentials

logger = logging.getLogger(__name__)

TOKEN_PATH = "/authentication/v1/OAuth/Token"

# Checked in this order; the first non-empty value wins.
TOKEN_FIELDS = ("access_token", "token", "bearerToken")


@dataclass
class TokenClient:
    """Mints one bearer token per call using the OAuth password grant.

    Tokens are deliberately not cached: every schema operation performs its
    own round trip and discards the token afterwards.
    """

    config: BlocksConfig
    transport: Optional[httpx.AsyncBaseTransport] = None

    def token_url(self, credentials: Credentials) -> str:
        return f"{credentials.api_base_url.rstrip('/')}{TOKEN_PATH}"

    async def acquire_token(self, credentials: Credentials) -> str:
        """Exchange username/secret for a bearer token."""
        url = self.token_url(credentials)

        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "x-blocks-key": credentials.tenant_key,
        }
        form = {
            "grant_type": "password",
            "username": credentials.username,
            "password": credentials.secret,
        }

        logger.info(
            "Requesting access token: POST %s (username=%s, password=[HIDDEN])",
            url,
            credentials.username,
        )

        async with httpx.AsyncClient(
            timeout=float(self.config.http_timeout_seconds),
            verify=self.config.verify_tls,
            transport=self.transport,
        ) as client:
            try:
                response = await client.post(url, data=form, headers=headers)
            except RequestError as exc:
                raise AuthError(f"token endpoint unreachable at '{url}': {exc}") from exc

        status = response.status_code
        body = response.text
        logger.info("Token endpoint responded with HTTP %s", status)

        try:
            data: Any = json.loads(body)
        except ValueError as exc:
            logger.error("Token endpoint returned a non-JSON body (HTTP %s)", status)
            raise AuthError(
                "invalid response format", status_code=status, body=body
            ) from exc

        if not response.is_success:
            logger.error("Token request failed with HTTP %s", status)
            raise AuthError(
                f"Token generation failed: HTTP {status}. Response: {body[:500]}",
                status_code=status,
                body=body,
            )

        token = _extract_token(data)
        if not token:
            available = sorted(data) if isinstance(data, dict) else []
            logger.error("No token found in token response (fields: %s)", available)
            raise AuthError("no token in response", status_code=status, body=None)

        logger.info("Access token obtained (token=[SET])")
        return token


def _extract_token(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    for name in TOKEN_FIELDS:
        value = data.get(name)
        if isinstance(value, str) and value:
            return value
    return None
