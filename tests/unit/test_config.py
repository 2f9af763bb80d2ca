"""Unit tests for configuration management."""

from pathlib import Path

import pytest
import yaml

from dfa_engine.config import (
    ConfigLoader,
    EngineConfig,
    get_default_config,
    get_engine_config,
    set_engine_config,
)
from dfa_engine.config.defaults import ExecutionParams
from dfa_engine.config.validation import ConfigValidator
from dfa_engine.errors import ConfigurationError


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        config = get_default_config()
        assert config.persistence.default_format == "json"
        assert config.persistence.json_indent == 2
        assert config.persistence.encoding == "utf-8"
        assert config.execution.max_steps == 1000
        assert config.logging.level == "INFO"

    def test_engine_config_defaults_match(self) -> None:
        assert EngineConfig() == get_default_config()


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self, tmp_path: Path) -> None:
        loader = ConfigLoader.create(tmp_path)
        assert loader.config_dir == tmp_path

    def test_merge_config_defaults_only(self, tmp_path: Path) -> None:
        config = ConfigLoader.create(tmp_path).merge_config()

        assert config["persistence"]["default_format"] == "json"
        assert config["execution"]["max_steps"] == 1000

    def test_merge_config_precedence(self, tmp_path: Path) -> None:
        (tmp_path / "dfa.yaml").write_text(yaml.safe_dump({
            "persistence": {"default_format": "yaml", "json_indent": 4},
            "execution": {"max_steps": 50},
        }))
        loader = ConfigLoader.create(tmp_path)

        config = loader.merge_config({"execution": {"max_steps": 5}})

        assert config["persistence"]["default_format"] == "yaml"
        assert config["persistence"]["json_indent"] == 4
        assert config["persistence"]["encoding"] == "utf-8"
        assert config["execution"]["max_steps"] == 5

    def test_empty_config_file(self, tmp_path: Path) -> None:
        (tmp_path / "dfa.yaml").write_text("")

        assert ConfigLoader.create(tmp_path).load() == get_default_config()

    def test_load_builds_dataclasses(self, tmp_path: Path) -> None:
        config = ConfigLoader.create(tmp_path).load({"logging": {"level": "DEBUG"}})

        assert isinstance(config, EngineConfig)
        assert config.logging.level == "DEBUG"
        assert config.execution == ExecutionParams()

    def test_load_rejects_invalid_values(self, tmp_path: Path) -> None:
        loader = ConfigLoader.create(tmp_path)

        with pytest.raises(ConfigurationError) as exc_info:
            loader.load({"execution": {"max_steps": 0}, "logging": {"level": "LOUD"}})

        assert isinstance(exc_info.value, ValueError)
        assert len(exc_info.value.errors) == 2
        assert "max_steps" in exc_info.value.errors[0]
        assert exc_info.value.context["errors"] == exc_info.value.errors
        assert exc_info.value.source == str(tmp_path / "dfa.yaml")

    def test_malformed_config_file(self, tmp_path: Path) -> None:
        (tmp_path / "dfa.yaml").write_text("execution: [max_steps\n")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.create(tmp_path).load()

        assert exc_info.value.source == str(tmp_path / "dfa.yaml")

    def test_non_mapping_config_file(self, tmp_path: Path) -> None:
        (tmp_path / "dfa.yaml").write_text("- execution\n- logging\n")

        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            ConfigLoader.create(tmp_path).load_file()


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_valid_config(self) -> None:
        config = ConfigLoader.create(Path("/nonexistent")).merge_config()
        assert ConfigValidator.validate_config(config) == []

    @pytest.mark.parametrize("params,field", [
        ({"default_format": "xml"}, "default_format"),
        ({"json_indent": -1}, "json_indent"),
        ({"json_indent": True}, "json_indent"),
        ({"encoding": ""}, "encoding"),
    ])
    def test_invalid_persistence_params(self, params, field) -> None:
        errors = ConfigValidator.validate_persistence_params(params)
        assert len(errors) == 1
        assert errors[0].field == field

    def test_null_indent_allowed(self) -> None:
        assert ConfigValidator.validate_persistence_params({"json_indent": None}) == []

    @pytest.mark.parametrize("value", [0, -5, 2.5, True])
    def test_invalid_max_steps(self, value) -> None:
        errors = ConfigValidator.validate_execution_params({"max_steps": value})
        assert [e.field for e in errors] == ["max_steps"]

    def test_invalid_logging_params(self) -> None:
        errors = ConfigValidator.validate_logging_params({"level": "LOUD", "format_json": "no"})
        assert [e.field for e in errors] == ["level", "format_json"]

    def test_unknown_section_and_key(self) -> None:
        errors = ConfigValidator.validate_config({
            "metrics": {},
            "execution": {"max_step": 3},
        })
        assert [e.field for e in errors] == ["metrics", "execution.max_step"]


class TestEngineConfigHolder:
    """Test process-wide configuration."""

    def test_defaults_when_unset(self) -> None:
        assert get_engine_config() == get_default_config()

    def test_set_and_reset(self) -> None:
        custom = EngineConfig(execution=ExecutionParams(max_steps=3))

        set_engine_config(custom)
        assert get_engine_config() is custom

        set_engine_config(None)
        assert get_engine_config() == get_default_config()
