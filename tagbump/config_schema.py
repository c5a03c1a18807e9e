"""Declarative configuration schema for tagbump."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    PrivateAttr,
    field_validator,
    model_validator,
)

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
MESSAGE_PLACEHOLDERS = {"kind": "patch", "version": "v0.0.1", "previous": "v0.0.0"}


class StrictModel(BaseModel):
    """Closed section: unknown keys and bad assignments are errors."""

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
    )


class AppSettings(StrictModel):
    """Top-level runtime behaviour."""

    debug: bool = Field(
        default=False,
        description="When true, console logging runs at DEBUG level.",
    )


class GitSettings(StrictModel):
    """How the git executable is located and which remote receives tags."""

    executable: str = Field(
        default="git",
        description="Name or path of the git executable.",
        examples=["/usr/bin/git"],
    )
    remote: str = Field(
        default="origin",
        description="Remote that receives the new tag when pushing.",
        examples=["upstream"],
    )
    working_dir: Optional[Path] = Field(
        default=None,
        description="Repository directory; defaults to the current directory.",
    )

    @field_validator("executable", "remote")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("value must not be empty")
        return value

    @field_validator("working_dir", mode="before")
    @classmethod
    def _empty_path_is_unset(cls, value: Any) -> Any:
        if value == "":
            return None
        return value


class TaggingSettings(StrictModel):
    """Annotated tag contents."""

    message_template: str = Field(
        default="Bump {kind} version to {version}",
        description="Annotated tag message; may use {kind}, {version} and {previous}.",
        examples=["Release {version}"],
    )
    target_ref: str = Field(
        default="HEAD",
        description="Ref whose commit the new tag points at.",
        examples=["main"],
    )

    @field_validator("message_template")
    @classmethod
    def _check_placeholders(cls, value: str) -> str:
        try:
            rendered = value.format(**MESSAGE_PLACEHOLDERS)
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(
                "message_template may only reference {kind}, {version} and {previous}"
            ) from exc
        if not rendered.strip():
            raise ValueError("message_template must render a non-empty message")
        return value

    @field_validator("target_ref")
    @classmethod
    def _ref_not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("target_ref must not be empty")
        return value


class LoggingConfig(StrictModel):
    """Logging subsystem configuration."""

    level: str = Field(
        default="INFO",
        description="Minimum log level written to the console and log file.",
        examples=["DEBUG"],
    )
    file_path: Optional[Path] = Field(
        default=None,
        description="Optional rotating log file; console only when unset.",
        examples=["logs/tagbump.log"],
    )
    max_file_size_mb: PositiveInt = Field(
        default=10,
        description="Maximum size per log file before rotation (MiB).",
    )
    retention_days: PositiveInt = Field(
        default=30,
        description="Number of days to keep rotated log files.",
    )
    format: str = Field(
        default="{time:YYYY-MM-DD HH:mm:ss} | {level:<8} | {message}",
        description="Log formatting template understood by loguru.",
    )

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in LOG_LEVELS:
            raise ValueError("level must be one of: " + ", ".join(LOG_LEVELS))
        return normalized

    @field_validator("file_path", mode="before")
    @classmethod
    def _empty_path_is_unset(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @model_validator(mode="after")
    def _resolve_path(self) -> "LoggingConfig":
        if self.file_path is not None and not self.file_path.is_absolute():
            object.__setattr__(self, "file_path", self.file_path.resolve())
        return self


class Config(StrictModel):
    """Complete tagbump configuration model."""

    app: AppSettings = Field(default_factory=AppSettings)
    git: GitSettings = Field(default_factory=GitSettings)
    tagging: TaggingSettings = Field(default_factory=TaggingSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    _metadata: object = PrivateAttr(default=None)


DEFAULT_CONFIG = Config()


__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "LoggingConfig",
]
