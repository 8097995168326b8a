"""Pydantic-based configuration helpers for the deploy approval bot."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Iterable, List

from pydantic import BaseModel, Field, ValidationError, field_validator

VERSION_MARKER = "v"
DEFAULT_VERSIONS = ("v1.0.0", "v1.1.0", "v1.1.1")


class AppSettings(BaseModel):
    """Settings required to initialise the Slack bot and the deploy runner."""

    bot_token: str = Field(..., alias="SLACK_BOT_TOKEN")
    signing_secret: str = Field(..., alias="SLACK_SIGNING_SECRET")
    deploy_versions: List[str] = Field(list(DEFAULT_VERSIONS), alias="DEPLOY_VERSIONS")
    deploy_duration_seconds: float = Field(10.0, alias="DEPLOY_DURATION_SECONDS")
    port: int = Field(8080, alias="PORT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    @field_validator("deploy_versions", mode="before")
    @classmethod
    def _split_versions(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            value = value.split(",")
        return [item.strip() for item in value if item.strip()]

    @field_validator("deploy_versions")
    @classmethod
    def _validate_versions(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("At least one deploy version must be configured")
        if len(set(value)) != len(value):
            raise ValueError("Deploy versions must be unique")
        for version in value:
            if not version.startswith(VERSION_MARKER):
                raise ValueError(f"Deploy version '{version}' must start with '{VERSION_MARKER}'")
        return value

    @field_validator("deploy_duration_seconds")
    @classmethod
    def _ensure_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Deploy duration must be greater than zero")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


def _format_missing(fields: Iterable[str]) -> str:
    """Return a human-friendly comma-separated list of missing env vars."""

    unique: List[str] = []
    for field in fields:
        if field not in unique:
            unique.append(field)
    return ", ".join(unique)


def load_settings() -> AppSettings:
    """Validate settings from the current environment without caching."""

    try:
        return AppSettings.model_validate(os.environ)
    except ValidationError as exc:
        missing = [str(error["loc"][0]) for error in exc.errors() if error["type"] == "missing"]
        if missing:
            raise RuntimeError(
                "Missing required environment variables: " f"{_format_missing(missing)}"
            ) from exc
        raise RuntimeError(f"Invalid configuration: {exc}") from exc


@lru_cache()
def get_settings() -> AppSettings:
    """Fetch and cache settings from environment variables."""

    return load_settings()
