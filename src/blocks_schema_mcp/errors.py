# Blocks Schema MCP Server
# File: errors.py
# Version: v1

"""Exception taxonomy for the schema operations.

Every component raises one of these; only the orchestrator in
``tools.tasks`` catches them and turns them into an ``OperationResult``.
The ``code`` values are the JSON-RPC codes used by MCP.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS


class BlocksSchemaError(Exception):
    """Base class for all errors raised by this package."""

    kind: str = "internal_error"
    code: int = INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(BlocksSchemaError):
    """A required configuration value is missing."""

    kind = "configuration_error"

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing: List[str] = list(missing)
        super().__init__(
            "Missing required configuration: "
            f"{', '.join(self.missing)}. Set these environment variables "
            "in the MCP server configuration."
        )


class ValidationError(BlocksSchemaError):
    """Caller-supplied arguments are missing or malformed."""

    kind = "invalid_params"
    code = INVALID_PARAMS

    def __init__(
        self,
        message: str,
        missing: Optional[Iterable[str]] = None,
        invalid: Optional[Iterable[str]] = None,
    ) -> None:
        super().__init__(message)
        self.missing: List[str] = list(missing or [])
        # Present but of the wrong type.
        self.invalid: List[str] = list(invalid or [])


class _HttpError(BlocksSchemaError):
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AuthError(_HttpError):
    """Token endpoint unreachable, failed, or returned no usable token."""

    kind = "auth_error"


class ApiError(_HttpError):
    """Schema endpoint unreachable or returned a non-2xx status."""

    kind = "api_error"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        response: Any = None,
    ) -> None:
        super().__init__(message, status_code=status_code, body=body)
        # Parsed error body (JSON object or the raw text).
        self.response = response


class InternalError(BlocksSchemaError):
    """Anything unexpected raised inside the pipeline."""

    kind = "internal_error"
