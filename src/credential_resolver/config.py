"""Runtime settings for credential-resolver.

Values are read from environment variables prefixed with
``CREDENTIAL_RESOLVER_`` (or passed explicitly), validated by Pydantic::

    CREDENTIAL_RESOLVER_UNIVERSAL_RESOLVER_URL=https://uniresolver.io
    CREDENTIAL_RESOLVER_HTTP_TIMEOUT=10
    CREDENTIAL_RESOLVER_ENABLE_DID_WEB=false
    CREDENTIAL_RESOLVER_TYPES_BUNDLE_PATH=/etc/dock/types.json
    CREDENTIAL_RESOLVER_LOG_LEVEL=DEBUG
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ResolverSettings(BaseSettings):
    """Settings used to build the startup resolver registry and type registry."""

    model_config = SettingsConfigDict(env_prefix="CREDENTIAL_RESOLVER_", extra="ignore")

    universal_resolver_url: Optional[str] = None
    """Universal-resolver base URL; when set, it handles every unregistered DID method."""

    http_timeout: float = Field(default=30.0, gt=0)
    """Total timeout in seconds for each remote resolution request."""

    enable_did_web: bool = True
    """Register the ``did:web`` resolver."""

    types_bundle_path: Optional[Path] = None
    """JSON types bundle; the built-in Dock runtime table is used when unset."""

    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("universal_resolver_url")
    @classmethod
    def strip_empty_url(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


__all__ = ["ResolverSettings"]
