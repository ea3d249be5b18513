"""
Tests for portfolio_advisor/config.py.

What we test
------------
  - The committed config/default.toml loads with the documented defaults.
  - An explicit TOML file overrides defaults; omitted sections keep them.
  - local.toml beside the config file is merged on top.
  - PORTFOLIO_ADVISOR_* environment variables override the TOML values.
  - Invalid values raise pydantic.ValidationError.
  - A missing explicit path raises FileNotFoundError.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from portfolio_advisor.config import AppConfig, LoggingConfig, RecommendationConfig, load_config

_ENV_VARS = (
    "PORTFOLIO_ADVISOR_CATALOG_FILE",
    "PORTFOLIO_ADVISOR_TOP_N",
    "PORTFOLIO_ADVISOR_LOG_LEVEL",
    "PORTFOLIO_ADVISOR_DEBUG",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_toml(tmp_path):
    def _write(text: str, name: str = "app.toml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


class TestDefaults:
    def test_default_toml(self):
        config = load_config()
        assert isinstance(config, AppConfig)
        assert config.recommendations.top_n == 5
        assert config.recommendations.min_score == pytest.approx(0.30)
        assert config.password.generated_length == 12
        assert config.data.catalog_file == "config/catalog/products.json"
        assert config.debug is False

    def test_model_defaults_match_toml(self):
        assert load_config() == AppConfig()


class TestTomlLayers:
    def test_explicit_file_overrides(self, write_toml):
        path = write_toml("[recommendations]\ntop_n = 3\n\n[logging]\nlevel = \"debug\"\n")
        config = load_config(path)
        assert config.recommendations.top_n == 3
        assert config.recommendations.min_score == pytest.approx(0.30)
        assert config.logging.level == "DEBUG"
        assert config.password.generated_length == 12

    def test_local_toml_merged(self, write_toml):
        path = write_toml("[recommendations]\ntop_n = 3\nmin_score = 0.5\n")
        write_toml("[recommendations]\ntop_n = 7\n", name="local.toml")
        config = load_config(path)
        assert config.recommendations.top_n == 7
        assert config.recommendations.min_score == pytest.approx(0.5)

    def test_project_debug_flag(self, write_toml):
        assert load_config(write_toml("[project]\ndebug = true\n")).debug is True

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "missing.toml")


class TestEnvOverrides:
    def test_env_wins_over_toml(self, write_toml, monkeypatch):
        path = write_toml("[recommendations]\ntop_n = 3\n")
        monkeypatch.setenv("PORTFOLIO_ADVISOR_TOP_N", "9")
        monkeypatch.setenv("PORTFOLIO_ADVISOR_CATALOG_FILE", "/tmp/catalog.json")
        monkeypatch.setenv("PORTFOLIO_ADVISOR_LOG_LEVEL", "warning")
        monkeypatch.setenv("PORTFOLIO_ADVISOR_DEBUG", "true")
        config = load_config(path)
        assert config.recommendations.top_n == 9
        assert config.data.catalog_file == "/tmp/catalog.json"
        assert config.logging.level == "WARNING"
        assert config.debug is True

    def test_invalid_env_value(self, write_toml, monkeypatch):
        monkeypatch.setenv("PORTFOLIO_ADVISOR_TOP_N", "0")
        with pytest.raises(ValidationError):
            load_config(write_toml(""))


class TestValidation:
    @pytest.mark.parametrize(
        "toml_text",
        [
            "[recommendations]\ntop_n = 0\n",
            "[recommendations]\nmin_score = 1.0\n",
            "[recommendations]\nmin_score = -0.1\n",
            "[password]\ngenerated_length = 3\n",
            "[logging]\nlevel = \"LOUD\"\n",
        ],
    )
    def test_invalid_values(self, write_toml, toml_text):
        with pytest.raises(ValidationError):
            load_config(write_toml(toml_text))

    def test_configs_are_frozen(self):
        config = RecommendationConfig()
        with pytest.raises(ValidationError):
            config.top_n = 10

    def test_level_normalised(self):
        assert LoggingConfig(level="error").level == "ERROR"
