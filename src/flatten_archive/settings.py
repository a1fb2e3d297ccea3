from __future__ import annotations

import os

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from flatten_archive.config import DisplayMode
from flatten_archive.github import DEFAULT_CODELOAD_URL, DEFAULT_USER_AGENT

ENV_FILE = find_dotenv(usecwd=True)
ENV_PREFIX = "FLATTEN_ARCHIVE_"


def env_default(name: str, default: str) -> str:
    """Read a setting from the process environment, then the .env file, then `default`."""
    key = f"{ENV_PREFIX}{name}"
    if key in os.environ:
        return os.environ[key]
    values = dotenv_values(ENV_FILE) if ENV_FILE else {}
    return values.get(key) or default


def split_csv(value: str | list[str] | None) -> list[str]:
    """Split comma-separated values, trimming entries and dropping empty ones."""
    if value is None:
        return []
    items = value if isinstance(value, list) else [value]
    return [part.strip() for item in items for part in item.split(",") if part.strip()]


class Settings(BaseModel):
    """Configuration settings for the flatten_archive command line."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    url: str = Field(..., description="GitHub repository URL.")
    output: str = Field(default="", description="Output file; stdout when empty.")
    dir: list[str] = Field(default_factory=list, description="Directory filters.")
    ext: list[str] = Field(default_factory=list, description="Extension filters.")
    mode: DisplayMode = Field(default=DisplayMode.FULL, description="Display mode.")
    branch: str = Field(default="", description="Branch; main then master when empty.")
    file: str = Field(default="", description="Single file to retrieve.")
    log_file: str = Field(default="", description="Log file path.")

    codeload_url: str = Field(
        default_factory=lambda: env_default("CODELOAD_URL", DEFAULT_CODELOAD_URL),
        description="Base URL of the archive service.",
    )
    user_agent: str = Field(
        default_factory=lambda: env_default("USER_AGENT", DEFAULT_USER_AGENT),
        description="User-Agent sent to the archive service.",
    )
    timeout: float = Field(
        default_factory=lambda: env_default("TIMEOUT", "30"),
        gt=0,
        validate_default=True,
        description="HTTP timeout in seconds.",
    )

    @field_validator("dir", mode="before")
    @classmethod
    def _split_dirs(cls, value: str | list[str] | None) -> list[str]:
        return split_csv(value)

    @field_validator("ext", mode="before")
    @classmethod
    def _split_exts(cls, value: str | list[str] | None) -> list[str]:
        return [e.lower().lstrip(".") for e in split_csv(value) if e.lstrip(".")]

    @field_validator("file", "branch", mode="before")
    @classmethod
    def _strip(cls, value: str | None) -> str:
        return (value or "").strip()

    @field_validator("mode", mode="before")
    @classmethod
    def _default_mode(cls, value: str | None) -> str:
        return value or DisplayMode.FULL
