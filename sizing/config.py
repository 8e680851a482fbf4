"""Runtime configuration resolved from environment overrides."""

import os
from pathlib import Path

from ingestion.csv_loader import EMBEDDED_CATALOG_PATH

DESIGN_TEMP_ENV_VAR = "LC_DESIGN_TEMP"
CATALOG_ENV_VAR = "LC_CATALOG_PATH"
DEFAULT_DESIGN_TEMP = 17.0


class ConfigurationError(ValueError):
    """Raised when an environment override cannot be used."""


def get_default_design_temp() -> float:
    """Resolve the design temperature default using the env override when set."""
    env_override = os.environ.get(DESIGN_TEMP_ENV_VAR)
    if env_override is None or not env_override.strip():
        return DEFAULT_DESIGN_TEMP
    try:
        return float(env_override)
    except ValueError as exc:
        raise ConfigurationError(
            f"{DESIGN_TEMP_ENV_VAR} must be numeric, got {env_override!r}"
        ) from exc


def get_catalog_path() -> Path:
    """Resolve the catalog CSV path, falling back to the embedded table."""
    env_override = os.environ.get(CATALOG_ENV_VAR)
    if env_override:
        return Path(env_override).expanduser()
    return EMBEDDED_CATALOG_PATH
