# Blocks Schema MCP Server
# File: config.py
# Version: v2

"""Configuration loading for the Blocks Schema MCP Server."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urlparse
import os

from .errors import ConfigurationError
from .models import Credentials


def _parse_bool_env(name: str, default: bool = False) -> bool:
    """Parse a boolean-like environment variable.

    Accepts 1/0, true/false, yes/no, on/off (case-insensitive).
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}


def _parse_int_env(
    name: str,
    default: int,
    min_value: int | None = None,
    max_value: int | None = None,
) -> int:
    """Parse an int environment variable with clamping and safe fallback."""
    raw = os.getenv(name)
    if raw is None or not str(raw).strip():
        value = int(default)
    else:
        try:
            value = int(str(raw).strip())
        except ValueError:
            value = int(default)

    if min_value is not None and value < min_value:
        value = min_value
    if max_value is not None and value > max_value:
        value = max_value

    return value


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class BlocksConfig:
    """Process-wide settings, read once at startup.

    The four credential values are kept optional here; whether they are all
    present is decided by :func:`resolve_credentials` at call time.
    """

    blocks_key: str | None
    username: str | None
    user_key: str | None
    api_base_url: str | None

    verify_tls: bool = True
    http_timeout_seconds: int = 30

    log_level: str = "INFO"
    log_file: str | None = None
    log_retention_days: int = 7

    @classmethod
    def from_env(cls) -> "BlocksConfig":
        """Create configuration from environment variables."""
        return cls(
            blocks_key=_clean(os.getenv("BLOCKS_KEY")),
            username=_clean(os.getenv("USERNAME")),
            user_key=_clean(os.getenv("USER_KEY")),
            api_base_url=_clean(os.getenv("API_BASE_URL")),
            verify_tls=_parse_bool_env("BLOCKS_VERIFY_TLS", default=True),
            http_timeout_seconds=_parse_int_env(
                "BLOCKS_HTTP_TIMEOUT_SECONDS", default=30, min_value=1, max_value=600
            ),
            log_level=(_clean(os.getenv("BLOCKS_LOG_LEVEL")) or "INFO").upper(),
            log_file=_clean(os.getenv("BLOCKS_LOG_FILE")),
            log_retention_days=_parse_int_env(
                "BLOCKS_LOG_RETENTION_DAYS", default=7, min_value=0, max_value=365
            ),
        )

    def __repr__(self) -> str:
        return f"BlocksConfig({self.describe()!r})"

    def describe(self) -> Dict[str, Any]:
        """Redacted view of the configuration (no secrets, no tenant key)."""
        host = None
        if self.api_base_url:
            host = urlparse(self.api_base_url).hostname

        def _flag(value: Optional[str]) -> str:
            return "[SET]" if value else "[NOT SET]"

        return {
            "api_base_url": self.api_base_url,
            "host": host,
            "credentials": {
                "BLOCKS_KEY": _flag(self.blocks_key),
                "USERNAME": _flag(self.username),
                "USER_KEY": _flag(self.user_key),
                "API_BASE_URL": _flag(self.api_base_url),
            },
            "verify_tls": self.verify_tls,
            "http_timeout_seconds": self.http_timeout_seconds,
            "logging": {
                "level": self.log_level,
                "file": self.log_file,
                "retention_days": self.log_retention_days,
            },
        }


def resolve_credentials(config: BlocksConfig) -> Credentials:
    """Return the credentials needed for remote access.

    Raises ConfigurationError naming every missing variable, not just the
    first one.
    """
    values = {
        "BLOCKS_KEY": config.blocks_key,
        "USERNAME": config.username,
        "USER_KEY": config.user_key,
        "API_BASE_URL": config.api_base_url,
    }
    missing = [name for name, value in values.items() if not (value and value.strip())]
    if missing:
        raise ConfigurationError(missing)

    return Credentials(
        tenant_key=str(config.blocks_key).strip(),
        username=str(config.username).strip(),
        secret=str(config.user_key).strip(),
        api_base_url=str(config.api_base_url).strip().rstrip("/"),
    )
