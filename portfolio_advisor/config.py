"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      : committed static defaults
  2. ``config/local.toml``        : optional local overrides (gitignored)
  3. ``.env``                     : local secrets and env overrides (gitignored)
  4. Environment variables        : ``PORTFOLIO_ADVISOR_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The scoring engines never read configuration themselves.  CLI commands load
an ``AppConfig`` and pass the relevant values (``top_n``, ``min_score``,
``generated_length``) into the engine functions as plain arguments.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class DataConfig(BaseModel):
    """Locations of input snapshots and report output."""

    model_config = ConfigDict(frozen=True)

    catalog_file: str = "config/catalog/products.json"
    profile_file: str = "config/samples/profile.json"
    holdings_file: str = "config/samples/holdings.json"
    output_dir: str = "data/outputs"


class RecommendationConfig(BaseModel):
    """Ranking parameters for ``recommend_products``."""

    model_config = ConfigDict(frozen=True)

    top_n: int = 5
    min_score: float = 0.30

    @field_validator("top_n")
    @classmethod
    def validate_top_n(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"top_n must be >= 1, got {v}.")
        return v

    @field_validator("min_score")
    @classmethod
    def validate_min_score(cls, v: float) -> float:
        if not 0.0 <= v < 1.0:
            raise ValueError(f"min_score must be in [0.0, 1.0), got {v}.")
        return v


class PasswordConfig(BaseModel):
    """Password generation defaults."""

    model_config = ConfigDict(frozen=True)

    generated_length: int = 12

    @field_validator("generated_length")
    @classmethod
    def validate_length(cls, v: int) -> int:
        if v < 4:
            raise ValueError(f"generated_length must be >= 4, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration; the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    data: DataConfig = DataConfig()
    recommendations: RecommendationConfig = RecommendationConfig()
    password: PasswordConfig = PasswordConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.  When the default file
            is absent, built-in defaults are used.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    raw: dict[str, Any] = {}
    if config_path is None:
        default_path = root / "config" / "default.toml"
        if default_path.exists():
            raw = _read_toml(default_path)
        config_dir = default_path.parent
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                "Pass --config with an existing TOML file or omit it to use defaults."
            )
        raw = _read_toml(config_path)
        config_dir = config_path.parent

    # Also merge local.toml if present (gitignored local overrides)
    local_config_path = config_dir / "local.toml"
    if local_config_path.exists():
        raw = _deep_merge(raw, _read_toml(local_config_path))

    # 3. Apply PORTFOLIO_ADVISOR_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply PORTFOLIO_ADVISOR_* env vars to the raw config dict.

    Supported overrides:
      PORTFOLIO_ADVISOR_CATALOG_FILE → raw["data"]["catalog_file"]
      PORTFOLIO_ADVISOR_TOP_N        → raw["recommendations"]["top_n"]
      PORTFOLIO_ADVISOR_LOG_LEVEL    → raw["logging"]["level"]
      PORTFOLIO_ADVISOR_DEBUG        → raw["debug"]
    """
    if catalog_file := os.environ.get("PORTFOLIO_ADVISOR_CATALOG_FILE"):
        raw.setdefault("data", {})["catalog_file"] = catalog_file

    if top_n := os.environ.get("PORTFOLIO_ADVISOR_TOP_N"):
        raw.setdefault("recommendations", {})["top_n"] = top_n

    if log_level := os.environ.get("PORTFOLIO_ADVISOR_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("PORTFOLIO_ADVISOR_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        data=DataConfig(**raw.get("data", {})),
        recommendations=RecommendationConfig(**raw.get("recommendations", {})),
        password=PasswordConfig(**raw.get("password", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
