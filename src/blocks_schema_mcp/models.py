# Blocks Schema MCP Server
# File: models.py
# Version: v2

"""Domain models used by the Blocks Schema MCP server."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class Credentials:
    """Everything needed to talk to a Blocks tenant."""

    tenant_key: str
    username: str
    secret: str = field(repr=False)
    api_base_url: str


@dataclass
class FieldDefinition:
    """One entry of a schema's ``Fields`` list."""

    name: str
    type: str
    is_array: Optional[bool] = None

    # Raw entry as sent by the caller; extra keys are forwarded untouched.
    raw: Optional[Dict[str, Any]] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = dict(self.raw or {})
        payload["Name"] = self.name
        payload["Type"] = self.type
        if self.is_array is not None:
            payload["IsArray"] = self.is_array
        return payload


@dataclass
class CreateSchemaRequest:
    """Validated arguments for ``create_schema``."""

    collection_name: str
    schema_name: str
    fields: List[FieldDefinition]
    project_key: str
    schema_type: Union[int, float] = 1

    operation = "create"
    method = "POST"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "CollectionName": self.collection_name,
            "SchemaName": self.schema_name,
            "SchemaType": self.schema_type,
            "Fields": [f.to_payload() for f in self.fields],
            "ProjectKey": self.project_key,
        }


@dataclass
class UpdateSchemaRequest(CreateSchemaRequest):
    """Validated arguments for ``update_schema``; targets an existing record."""

    item_id: str = ""

    operation = "update"
    method = "PUT"

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"ItemId": self.item_id}
        payload.update(super().to_payload())
        return payload


SchemaRequest = Union[CreateSchemaRequest, UpdateSchemaRequest]


@dataclass
class OperationResult:
    """Outcome of one create/update call."""

    ok: bool
    operation: str
    message: str

    # Raw remote response (parsed JSON or text), success only.
    response: Any = None

    # Failure only.
    error_kind: Optional[str] = None
    code: Optional[int] = None
    details: Optional[Dict[str, Any]] = None

    @classmethod
    def success(cls, operation: str, message: str, response: Any) -> "OperationResult":
        return cls(ok=True, operation=operation, message=message, response=response)

    @classmethod
    def failure(
        cls,
        operation: str,
        error_kind: str,
        code: int,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> "OperationResult":
        return cls(
            ok=False,
            operation=operation,
            message=message,
            error_kind=error_kind,
            code=code,
            details=details,
        )

    def to_dict(self) -> Dict[str, Any]:
        """LLM-friendly shape returned by the MCP tools."""
        if self.ok:
            return {
                "ok": True,
                "operation": self.operation,
                "message": self.message,
                "response": self.response,
            }

        err: Dict[str, Any] = {
            "kind": self.error_kind,
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            err["details"] = self.details
        return {"ok": False, "operation": self.operation, "error": err}
