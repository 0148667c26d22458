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

from kisskh.infrastructure.kisskh.feed_extractor import DEFAULT_BLOG_IDS

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


class KissKHConfig(BaseModel):
    """Configuration for the KissKH site, its feed host and subtitles.

    All values configurable via YAML (kisskh section) or ENV vars.
    """

    base_url: str = Field(
        default="https://kisskh.club",
        description="Content site root (no trailing slash).",
    )
    server: str = Field(
        default="02",
        description="Server selector appended to episode page URLs.",
    )
    default_blog_ids: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BLOG_IDS),
        description="Blogger blog IDs tried when a page names none.",
    )
    feed_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout per Blogger feed attempt (seconds).",
    )
    subtitle_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout per subtitle download (seconds).",
    )
    subtitle_concurrency: int = Field(
        default=3,
        description="Max parallel subtitle downloads for one episode.",
    )
    metadata_url: str = Field(
        default="https://v3-cinemeta.strem.io",
        description="Cinemeta base URL for IMDb title lookups.",
    )
    metadata_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout per Cinemeta request (seconds).",
    )
    stream_title: str = Field(
        default="KissKH 720p",
        description="Title shown for the resolved stream in Stremio.",
    )
    subtitle_label: str = Field(
        default="Spanish (KissKH)",
        description="Label shown for every subtitle track.",
    )

    @field_validator("base_url", "metadata_url")
    @classmethod
    def _strip_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator(
        "feed_timeout_seconds", "subtitle_timeout_seconds", "metadata_timeout_seconds"
    )
    @classmethod
    def _validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be > 0")
        return v

    @field_validator("default_blog_ids")
    @classmethod
    def _validate_blog_ids(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("default_blog_ids must not be empty")
        return v


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/logging/kisskh).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="kisskh", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=10.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="HTTP timeout in seconds for page fetches.",
    )
    http_follow_redirects: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "http_follow_redirects",
            AliasPath("http", "follow_redirects"),
        ),
        description="Whether HTTP client follows redirects.",
    )
    http_user_agent: str = Field(
        default="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
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

    # KissKH pipeline (YAML section: kisskh.*)
    kisskh: KissKHConfig = Field(default_factory=KissKHConfig)

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
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "follow_redirects": self.http_follow_redirects,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "kisskh": self.kisskh.model_dump(),
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    load.py creates EnvOverrides() to read KISSKH_* variables, converts them
    to a dict of set values and merges that over YAML/defaults before
    validating AppConfig.

    Supported env var examples (flat, explicit):
    - KISSKH_ENVIRONMENT
    - KISSKH_HTTP_TIMEOUT_SECONDS
    - KISSKH_LOG_LEVEL
    - KISSKH_SITE_URL (sets kisskh.base_url)
    - KISSKH_SERVER, KISSKH_FEED_TIMEOUT_SECONDS and the other kisskh.* fields
    - KISSKH_DEFAULT_BLOG_IDS as a JSON list
    """

    model_config = SettingsConfigDict(
        env_prefix="KISSKH_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_follow_redirects: Optional[bool] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    site_url: Optional[str] = None
    server: Optional[str] = None
    default_blog_ids: Optional[list[str]] = None
    feed_timeout_seconds: Optional[float] = None
    subtitle_timeout_seconds: Optional[float] = None
    subtitle_concurrency: Optional[int] = None
    metadata_url: Optional[str] = None
    metadata_timeout_seconds: Optional[float] = None
    stream_title: Optional[str] = None
    subtitle_label: Optional[str] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
