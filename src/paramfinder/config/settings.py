"""
paramfinder configuration settings using Pydantic.

This module provides type-safe configuration management with validation,
environment variable support, and nested configuration structures.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from paramfinder.core.models import AttackSurface


class MinerConfig(BaseModel):
    """
    Live scan configuration read by the requester on every call.

    Fields may be reassigned while a scan runs (for example by an adaptive
    policy turning the cache buster on); assignments are validated.
    """

    model_config = ConfigDict(validate_assignment=True)

    attack_type: AttackSurface = Field(
        default=AttackSurface.QUERY,
        description="Part of the request that receives candidate parameters",
    )
    json_body_path: str | None = Field(
        default=None,
        description="JSON path of the object to inject into (root object if unset)",
    )
    add_cache_buster_parameter: bool = Field(
        default=False,
        description="Always add a cache buster parameter to query/header probes",
    )
    cache_buster_parameter: bool = Field(
        default=False,
        description="Cache buster switched on at runtime by the autopilot",
    )
    update_content_length: bool = Field(
        default=True,
        description="Recompute Content-Length after injection",
    )
    autopilot_enabled: bool = Field(
        default=False,
        description="Pass discovery responses to the autopilot callback",
    )
    debug: bool = Field(
        default=False,
        description="Extensive logging of every outbound probe",
    )

    @field_validator("json_body_path")
    @classmethod
    def blank_path_is_none(cls, v: str | None) -> str | None:
        """Treat an empty or whitespace path as unset."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def cache_buster_enabled(self) -> bool:
        """True when either cache buster toggle is on."""
        return self.add_cache_buster_parameter or self.cache_buster_parameter


class HTTPConfig(BaseModel):
    """Transport configuration for the bundled httpx client."""

    timeout: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Request timeout in seconds",
    )
    verify_ssl: bool = Field(
        default=False,
        description="Verify TLS certificates of the target",
    )
    follow_redirects: bool = Field(
        default=False,
        description="Follow redirects (off so probes see the raw reaction)",
    )
    proxy: str | None = Field(
        default=None,
        description="Upstream proxy URL, e.g. http://127.0.0.1:8080",
    )
    user_agent: str | None = Field(
        default=None,
        description="User-Agent to add when the request carries none",
    )


class ParamFinderSettings(BaseSettings):
    """
    Main paramfinder configuration.

    Settings are loaded from environment variables with the PARAMFINDER_
    prefix, or from a .env file in the current directory. Nested values use
    a double underscore, e.g. PARAMFINDER_MINER__ATTACK_TYPE=body.
    """

    model_config = SettingsConfigDict(
        env_prefix="PARAMFINDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    miner: MinerConfig = Field(default_factory=MinerConfig)
    http: HTTPConfig = Field(default_factory=HTTPConfig)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level",
    )
