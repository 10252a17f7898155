"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]

SOURCE_TIMEOUT_FRACTION = 0.8


class RokuConfig(BaseModel):
    """Target device and key pacing."""

    device_ip: Optional[str] = Field(
        default=None,
        description="IP address (or host name) of the Roku device.",
    )
    device_name: str = Field(
        default="Roku Device",
        description="Display name of the device.",
    )
    port: int = Field(default=8060, description="ECP port.")
    keypress_delay_ms: int = Field(
        default=100,
        description="Pause after every simulated key press.",
    )
    char_delay_ms: int = Field(
        default=50,
        description="Pause between typed characters.",
    )

    @field_validator("port")
    @classmethod
    def _validate_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError("roku.port must be between 1 and 65535")
        return v

    @field_validator("keypress_delay_ms", "char_delay_ms")
    @classmethod
    def _validate_delay(cls, v: int) -> int:
        if v < 0:
            raise ValueError("delays must be >= 0")
        return v


class ChannelDefinition(BaseModel):
    """One entry of the ``channels`` list.

    ``type`` is matched case-insensitively against the known channel
    names and aliases (``emby``, ``netflix``, ``disney+``, ``hbo max``,
    ``prime video``, ...).  ``config`` carries channel-specific settings,
    e.g. ``serverUrl``/``apiKey``/``userId`` for Emby.
    """

    type: str
    enabled: bool = True
    config: dict[str, Any] = Field(default_factory=dict)


class SearchConfig(BaseModel):
    """Search aggregation settings."""

    default_limit: int = Field(
        default=20,
        description="Result limit when the caller does not pass one.",
    )
    plugin_timeout_seconds: float = Field(
        default=10.0,
        description="Per-plugin search timeout in seconds.",
    )
    source_timeout_seconds: Optional[float] = Field(
        default=None,
        description=(
            "Timeout for each source inside a plugin (web search, every channel). "
            "Must be below plugin_timeout_seconds; derived from it when unset."
        ),
    )
    brave_api_key: Optional[str] = Field(
        default=None,
        description="Brave Search API key. Web search is disabled when unset.",
    )
    brave_max_results: int = Field(
        default=10,
        description="Number of web hits requested from Brave per query.",
    )

    @field_validator("default_limit", "brave_max_results")
    @classmethod
    def _validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("limits must be >= 1")
        return v

    @field_validator("plugin_timeout_seconds")
    @classmethod
    def _validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("search.plugin_timeout_seconds must be > 0")
        return v

    @field_validator("source_timeout_seconds")
    @classmethod
    def _validate_source_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("search.source_timeout_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def _derive_source_timeout(self) -> "SearchConfig":
        # Sources expire before their plugin so a slow one only drops itself.
        if self.source_timeout_seconds is None:
            self.source_timeout_seconds = (
                self.plugin_timeout_seconds * SOURCE_TIMEOUT_FRACTION
            )
        elif self.source_timeout_seconds >= self.plugin_timeout_seconds:
            raise ValueError(
                "search.source_timeout_seconds must be lower than "
                "search.plugin_timeout_seconds"
            )
        return self


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (roku/channels/search/http/logging).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="rokucast", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    roku: RokuConfig = Field(default_factory=RokuConfig)
    channels: list[ChannelDefinition] = Field(default_factory=list)
    search: SearchConfig = Field(default_factory=SearchConfig)

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=10.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Timeout for ECP, Emby and Brave requests.",
    )
    http_user_agent: str = Field(
        default="rokucast/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "roku": self.roku.model_dump(),
            "channels": [c.model_dump() for c in self.channels],
            "search": self.search.model_dump(),
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read ROKUCAST_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - ROKUCAST_ROKU_DEVICE_IP
    - ROKUCAST_BRAVE_API_KEY
    - ROKUCAST_ROKU_KEYPRESS_DELAY_MS / ROKUCAST_ROKU_CHAR_DELAY_MS
    - ROKUCAST_SEARCH_SOURCE_TIMEOUT_SECONDS
    - ROKUCAST_SEARCH_BRAVE_MAX_RESULTS
    - ROKUCAST_LOG_LEVEL
    - ROKUCAST_EMBY_SERVER_URL / ROKUCAST_EMBY_API_KEY / ROKUCAST_EMBY_USER_ID
      (all three together register an Emby channel)
    """

    model_config = SettingsConfigDict(
        env_prefix="ROKUCAST_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    roku_device_ip: Optional[str] = None
    roku_device_name: Optional[str] = None
    roku_port: Optional[int] = None
    roku_keypress_delay_ms: Optional[int] = None
    roku_char_delay_ms: Optional[int] = None

    search_default_limit: Optional[int] = None
    search_plugin_timeout_seconds: Optional[float] = None
    search_source_timeout_seconds: Optional[float] = None
    search_brave_max_results: Optional[int] = None
    brave_api_key: Optional[str] = None

    emby_server_url: Optional[str] = None
    emby_api_key: Optional[str] = None
    emby_user_id: Optional[str] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
