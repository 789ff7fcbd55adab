"""
Pydantic model for validating the ETL configuration file.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..regions import VALID_REGIONS

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000
DEFAULT_BASE_URL = "https://www.avalanche.net.nz/api"
DEFAULT_SITE_URL = "https://www.avalanche.net.nz"
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; TAK-NZ-ETL/1.0)"
DEFAULT_OUTPUT = Path("outputs/avalanche.geojson")

TIMEOUT_ENV_VAR = "AVALANCHE_TIMEOUT"


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


class EtlConfig(BaseModel):
    """
    Top-level configuration for one ETL run.

    Attributes:
        timeout: Per-request timeout in milliseconds (``Timeout`` in the file).
        base_url: Root of the avalanche.net.nz JSON API.
        site_url: Public site used for forecast detail links.
        user_agent: User-Agent header sent with every request.
        regions: Optional subset of the region catalog to process.
        output: Where the file sink writes the FeatureCollection.
        submit_url: When set, POST the collection here instead of writing a file.
    """
    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0, alias="Timeout")
    base_url: str = DEFAULT_BASE_URL
    site_url: str = DEFAULT_SITE_URL
    user_agent: str = DEFAULT_USER_AGENT
    regions: Optional[List[int]] = None
    output: Path = DEFAULT_OUTPUT
    submit_url: Optional[str] = None

    model_config = {
        "extra": "forbid",
        "populate_by_name": True,
    }

    @field_validator("regions")
    @classmethod
    def _check_regions(cls, value: Optional[List[int]]) -> Optional[List[int]]:
        if value is None:
            return None
        unknown = [region for region in value if region not in VALID_REGIONS]
        if unknown:
            raise ValueError(f"unknown region ids {unknown}; valid ids are {list(VALID_REGIONS)}")
        return value

    @field_validator("base_url", "site_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000.0


def load_config(path: Path | str | None = None) -> EtlConfig:
    """
    Load and validate an optional TOML config file into an EtlConfig.

    Without a path, defaults are used. ``AVALANCHE_TIMEOUT`` overrides the
    configured timeout in either case.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    raw_data: Dict[str, Any] = {}
    if path is not None:
        config_path = Path(path).expanduser().resolve()
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")
        try:
            with config_path.open("rb") as handle:
                raw_data = tomllib.load(handle)
        except OSError as exc:
            raise ConfigError(f"Unable to read configuration file: {exc}") from exc
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in configuration file: {exc}") from exc

    raw_data = _apply_env_overrides(dict(raw_data))

    try:
        return EtlConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    override = os.getenv(TIMEOUT_ENV_VAR)
    if override:
        try:
            timeout = int(override)
        except ValueError as exc:
            raise ConfigError(f"{TIMEOUT_ENV_VAR} must be an integer number of milliseconds, got {override!r}") from exc
        data.pop("timeout", None)
        data["Timeout"] = timeout
        logger.debug("Timeout overridden from %s: %d ms", TIMEOUT_ENV_VAR, timeout)
    return data
