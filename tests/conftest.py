# Blocks Schema MCP Server
# File: tests/conftest.py
# Version: v1

"""Shared fakes for the schema tool tests.

Nothing here talks to a real Blocks tenant: both HTTP clients are given an
``httpx.MockTransport`` that records every request it sees.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional, Tuple

import httpx
import pytest

from blocks_schema_mcp.auth import TokenClient
from blocks_schema_mcp.client import SchemaClient
from blocks_schema_mcp.config import BlocksConfig
from blocks_schema_mcp.tools.tasks import SchemaService

BASE_URL = "https://api.blocks.test"
TENANT_KEY = "tenant-key-1"
USERNAME = "svc-user@example.com"
SECRET = "sup3r-s3cret"


class FakeBlocksApi:
    """Answers the token and schemas/define endpoints with canned responses."""

    def __init__(
        self,
        token_response: Tuple[int, Any] = (200, {"access_token": "tok1"}),
        schema_response: Tuple[int, Any] = (200, {"Id": "abc"}),
    ) -> None:
        self.token_response = token_response
        self.schema_response = schema_response
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/authentication/v1/OAuth/Token":
            status, body = self.token_response
        elif request.url.path == "/graphql/v1/schemas/define":
            status, body = self.schema_response
        else:
            return httpx.Response(404, text="not found")

        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body)

    @property
    def token_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/OAuth/Token")]

    @property
    def schema_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/schemas/define")]

    @staticmethod
    def json_body(request: httpx.Request) -> Any:
        return json.loads(request.content.decode("utf-8"))


def make_config(**overrides: Any) -> BlocksConfig:
    values = dict(
        blocks_key=TENANT_KEY,
        username=USERNAME,
        user_key=SECRET,
        api_base_url=BASE_URL,
    )
    values.update(overrides)
    return BlocksConfig(**values)


def make_service(api: FakeBlocksApi, config: Optional[BlocksConfig] = None) -> SchemaService:
    cfg = config or make_config()
    transport = httpx.MockTransport(api.handler)
    return SchemaService(
        config=cfg,
        token_client=TokenClient(config=cfg, transport=transport),
        schema_client=SchemaClient(config=cfg, transport=transport),
    )


@pytest.fixture
def api() -> FakeBlocksApi:
    return FakeBlocksApi()


@pytest.fixture
def blocks_env(monkeypatch):
    """Populate the credential environment variables."""
    monkeypatch.setenv("BLOCKS_KEY", TENANT_KEY)
    monkeypatch.setenv("USERNAME", USERNAME)
    monkeypatch.setenv("USER_KEY", SECRET)
    monkeypatch.setenv("API_BASE_URL", BASE_URL)
