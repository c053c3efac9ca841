# Blocks Schema MCP Server
# File: tools/tasks.py
# Version: v5
#
# NOTE: This module is the single place where we define "business logic"
# that is exposed as MCP tools.  The MCP transport simply calls
# `register_tools(server)` to wire these up.

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from mcp.server.fastmcp.exceptions import ToolError

from .. import __version__
from ..auth import TokenClient
from ..client import SchemaClient
from ..config import BlocksConfig, resolve_credentials
from ..errors import BlocksSchemaError, InternalError, ValidationError
from ..models import (
    CreateSchemaRequest,
    FieldDefinition,
    OperationResult,
    SchemaRequest,
    UpdateSchemaRequest,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument validation
# ---------------------------------------------------------------------------


_REQUIRED_CREATE = ("CollectionName", "SchemaName", "Fields", "ProjectKey")
_REQUIRED_UPDATE = ("ItemId",) + _REQUIRED_CREATE


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _has_expected_type(name: str, value: Any) -> bool:
    if name == "Fields":
        return isinstance(value, list)
    return isinstance(value, str)


def _schema_type(value: Any) -> Any:
    """SchemaType falls back to 1 when absent or not a number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 1
    return value


def _parse_field(index: int, entry: Any) -> FieldDefinition:
    if not isinstance(entry, Mapping):
        raise ValidationError(
            f"Each field must have Name and Type properties (Fields[{index}] is not an object)"
        )

    name = entry.get("Name")
    type_ = entry.get("Type")
    if not (isinstance(name, str) and name.strip()) or not (
        isinstance(type_, str) and type_.strip()
    ):
        raise ValidationError(
            f"Each field must have Name and Type properties (invalid entry at Fields[{index}])"
        )

    is_array = entry.get("IsArray")
    return FieldDefinition(
        name=name,
        type=type_,
        is_array=is_array if isinstance(is_array, bool) else None,
        raw=dict(entry),
    )


def parse_schema_request(arguments: Mapping[str, Any], operation: str) -> SchemaRequest:
    """Validate raw tool arguments into a Create/Update request.

    All missing top-level parameters are reported together, then all
    present-but-mistyped ones; a malformed Fields entry fails on the first
    offender.
    """
    if operation not in ("create", "update"):
        raise ValueError(f"Unknown schema operation: {operation!r}")

    required = _REQUIRED_CREATE if operation == "create" else _REQUIRED_UPDATE
    missing = [name for name in required if _is_missing(arguments.get(name))]
    if missing:
        raise ValidationError(
            f"Missing required parameters: {', '.join(missing)}", missing=missing
        )

    invalid = [name for name in required if not _has_expected_type(name, arguments.get(name))]
    if invalid:
        expected = ", ".join(
            f"{name} (expected {'a list' if name == 'Fields' else 'a string'})"
            for name in invalid
        )
        raise ValidationError(f"Invalid parameter types: {expected}", invalid=invalid)

    fields: List[FieldDefinition] = [
        _parse_field(i, entry) for i, entry in enumerate(arguments["Fields"])
    ]

    common = dict(
        collection_name=arguments["CollectionName"],
        schema_name=arguments["SchemaName"],
        fields=fields,
        project_key=arguments["ProjectKey"],
        schema_type=_schema_type(arguments.get("SchemaType")),
    )

    if operation == "create":
        return CreateSchemaRequest(**common)
    return UpdateSchemaRequest(item_id=arguments["ItemId"], **common)


def format_success_message(request: SchemaRequest, response: Any) -> str:
    verb = "created" if request.operation == "create" else "updated"
    pretty = json.dumps(response, indent=2, ensure_ascii=False, default=str)
    return f'Schema "{request.schema_name}" {verb} successfully!\n\nResponse: {pretty}'


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


@dataclass
class SchemaService:
    """Runs validate -> credentials -> token -> dispatch for one call.

    Holds no per-call state, so concurrent invocations can share an instance.
    """

    config: BlocksConfig
    token_client: TokenClient
    schema_client: SchemaClient
    log: logging.Logger = field(default=logger)

    async def create_schema(self, arguments: Mapping[str, Any]) -> OperationResult:
        return await self._run(arguments, "create")

    async def update_schema(self, arguments: Mapping[str, Any]) -> OperationResult:
        return await self._run(arguments, "update")

    async def _run(self, arguments: Mapping[str, Any], operation: str) -> OperationResult:
        tool_name = f"{operation}_schema"
        provided = sorted(k for k, v in arguments.items() if v is not None)
        self.log.info("%s START (arguments=%s)", tool_name, provided)

        try:
            request = parse_schema_request(arguments, operation)
        except ValidationError as exc:
            self.log.error("%s ERROR invalid parameters: %s", tool_name, exc.message)
            details = {
                name: value
                for name, value in (("missing", exc.missing), ("invalid", exc.invalid))
                if value
            }
            return OperationResult.failure(
                operation, exc.kind, exc.code, exc.message, details=details or None
            )

        try:
            credentials = resolve_credentials(self.config)
            token = await self.token_client.acquire_token(credentials)
            url = self.schema_client.define_url(credentials.api_base_url)
            response = await self.schema_client.send(
                url,
                request.method,
                token,
                request.to_payload(),
                tenant_key=credentials.tenant_key,
            )
        except BlocksSchemaError as exc:
            return self._failure(tool_name, request, exc)
        except Exception as exc:
            self.log.exception("%s unexpected failure", tool_name)
            wrapped = InternalError(str(exc) or exc.__class__.__name__)
            return self._failure(tool_name, request, wrapped)

        self.log.info(
            "%s SUCCESS (schema=%s, collection=%s, fields=%d)",
            tool_name,
            request.schema_name,
            request.collection_name,
            len(request.fields),
        )
        return OperationResult.success(
            operation, format_success_message(request, response), response
        )

    def _failure(
        self, tool_name: str, request: SchemaRequest, exc: BlocksSchemaError
    ) -> OperationResult:
        message = f"Failed to {request.operation} schema: {exc.message}"
        self.log.error(
            "%s ERROR (%s, schema=%s): %s", tool_name, exc.kind, request.schema_name, exc.message
        )

        details: Dict[str, Any] = {}
        for attr in ("missing", "status_code", "body"):
            value = getattr(exc, attr, None)
            if value:
                details[attr] = value
        return OperationResult.failure(
            request.operation, exc.kind, exc.code, message, details=details or None
        )


def _make_service(cfg: Optional[BlocksConfig] = None) -> SchemaService:
    """Create a SchemaService from environment variables.

    Callers should prefer invoking this with *no arguments* so tests can
    monkeypatch it with a no-arg lambda.
    """
    cfg = cfg or BlocksConfig.from_env()
    return SchemaService(
        config=cfg,
        token_client=TokenClient(config=cfg),
        schema_client=SchemaClient(config=cfg),
    )


# ---------------------------------------------------------------------------
# Tool implementations
# ---------------------------------------------------------------------------


async def create_schema(**arguments: Any) -> Dict[str, Any]:
    service = _make_service()
    result = await service.create_schema(arguments)
    return result.to_dict()


async def update_schema(**arguments: Any) -> Dict[str, Any]:
    service = _make_service()
    result = await service.update_schema(arguments)
    return result.to_dict()


def _raise_on_failure(result: Dict[str, Any]) -> Dict[str, Any]:
    """Turn a failed result into a ToolError so MCP callers get isError=True."""
    if result.get("ok"):
        return result

    err = result.get("error") or {}
    text = f"[{err.get('kind')}] (code {err.get('code')}) {err.get('message')}"
    if err.get("details"):
        text += f"\nDetails: {json.dumps(err['details'], ensure_ascii=False, default=str)}"
    raise ToolError(text)


async def server_info() -> Dict[str, Any]:
    """Redacted configuration report; never includes secrets."""
    cfg = BlocksConfig.from_env()
    return {"version": __version__, "config": cfg.describe()}


# ---------------------------------------------------------------------------
# MCP tool registration
# ---------------------------------------------------------------------------


def register_tools(server: Any) -> None:
    """Register MCP tools on an MCP Server-like instance."""
    if server is None or not hasattr(server, "tool"):
        raise ValueError(
            "register_tools(server) expects an MCP Server-like object that exposes a .tool() decorator."
        )

    # Parameters are optional here so missing ones are reported together by
    # parse_schema_request rather than one at a time by the framework.

    @server.tool(name="create_schema", description="Create a new database schema with field definitions.")
    async def mcp_create_schema(
        CollectionName: Optional[str] = None,
        SchemaName: Optional[str] = None,
        Fields: Optional[List[Dict[str, Any]]] = None,
        ProjectKey: Optional[str] = None,
        SchemaType: Any = 1,
    ) -> Dict[str, Any]:
        result = await create_schema(
            CollectionName=CollectionName,
            SchemaName=SchemaName,
            Fields=Fields,
            ProjectKey=ProjectKey,
            SchemaType=SchemaType,
        )
        return _raise_on_failure(result)

    @server.tool(
        name="update_schema",
        description="Update an existing database schema (identified by ItemId) with new field definitions.",
    )
    async def mcp_update_schema(
        ItemId: Optional[str] = None,
        CollectionName: Optional[str] = None,
        SchemaName: Optional[str] = None,
        Fields: Optional[List[Dict[str, Any]]] = None,
        ProjectKey: Optional[str] = None,
        SchemaType: Any = 1,
    ) -> Dict[str, Any]:
        result = await update_schema(
            ItemId=ItemId,
            CollectionName=CollectionName,
            SchemaName=SchemaName,
            Fields=Fields,
            ProjectKey=ProjectKey,
            SchemaType=SchemaType,
        )
        return _raise_on_failure(result)

    @server.tool(
        name="schema_server_info",
        description="Return version and redacted configuration of the schema server (no secrets).",
    )
    async def mcp_server_info() -> Dict[str, Any]:
        return await server_info()
