"""Runtime settings loader combining YAML defaults with environment overrides."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
DEFAULTS_FILE = CONFIG_DIRECTORY / "defaults.yaml"

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class PaginationSettings(BaseModel):
    """Page sizes used by the product listing endpoints."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    latest_products: int = Field(default=12, gt=0)
    page_size: int = Field(default=6, gt=0)
    related_products: int = Field(default=3, gt=0)


class StorefrontSettings(BaseModel):
    """Validated settings shared by the application factory and services."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    secret_key: str = Field(..., min_length=1)
    token_ttl_seconds: int = Field(default=60 * 60 * 24 * 7, gt=0)
    max_photo_bytes: int = Field(default=1_000_000, gt=0)
    allowed_origins: tuple[str, ...] = ()
    database_path: Path | None = None
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return tuple(origin.strip() for origin in value.split(",") if origin.strip())
        return value

    @field_validator("database_path", mode="before")
    @classmethod
    def _expand_database_path(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return Path(value).expanduser()


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def _parse_positive_int(value: str | None, *, env: str) -> int | None:
    if value is None or not value.strip():
        return None
    try:
        parsed = int(value)
    except ValueError:
        logger.warning("Ignoring invalid value for %s: %s", env, value)
        return None
    if parsed <= 0:
        logger.warning("Ignoring non-positive value for %s: %s", env, value)
        return None
    return parsed


def _environment_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}

    secret = environ.get("STOREFRONT_SECRET_KEY")
    if secret:
        overrides["secret_key"] = secret

    origins = environ.get("STOREFRONT_ALLOWED_ORIGINS")
    if origins is not None:
        overrides["allowed_origins"] = origins

    db_path = environ.get("STOREFRONT_DB")
    if db_path:
        overrides["database_path"] = db_path

    for env, field in (
        ("STOREFRONT_TOKEN_TTL", "token_ttl_seconds"),
        ("STOREFRONT_MAX_PHOTO_BYTES", "max_photo_bytes"),
    ):
        parsed = _parse_positive_int(environ.get(env), env=env)
        if parsed is not None:
            overrides[field] = parsed

    return overrides


def load_settings(
    path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> StorefrontSettings:
    """Load settings from ``path`` (or the bundled defaults) and the environment."""

    config_file = path or DEFAULTS_FILE
    if not config_file.exists():
        raise FileNotFoundError(f"Settings file not found: {config_file}")

    raw_settings = _load_yaml(config_file)
    raw_settings.update(_environment_overrides(os.environ if environ is None else environ))

    try:
        return StorefrontSettings.model_validate(raw_settings)
    except ValidationError as error:
        raise ConfigurationError(f"Settings validation failed: {error}") from error


__all__ = [
    "CONFIG_DIRECTORY",
    "ConfigurationError",
    "DEFAULTS_FILE",
    "PaginationSettings",
    "StorefrontSettings",
    "load_settings",
]
