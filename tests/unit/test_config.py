# tests/unit/test_config.py

"""Unit tests for configuration models and loading."""

from pathlib import Path

import pytest

from neko import ConfigurationError, NekoConfig, VerifyScope, load_config


class TestNekoConfig:
    """Tests for the attrs configuration model."""

    def test_defaults(self):
        config = NekoConfig()

        assert config.log_level == "INFO"
        assert config.verify_scope is VerifyScope.SUITE
        assert config.warn_on_only_override is True
        assert config.banner is True
        assert config.numeric_log_level == 20

    def test_string_values_are_converted(self):
        config = NekoConfig(verify_scope="TEST", banner="off")

        assert config.verify_scope is VerifyScope.TEST
        assert config.banner is False

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"log_level": "LOUD"},
            {"verify_scope": "everywhere"},
            {"warn_on_only_override": "sometimes"},
        ],
    )
    def test_invalid_values_are_rejected(self, kwargs):
        with pytest.raises(ValueError):
            NekoConfig(**kwargs)


class TestLoadConfig:
    """Tests for reading configuration from TOML files."""

    def test_missing_file_gives_defaults(self, tmp_path: Path):
        assert load_config(tmp_path / "pyproject.toml") == NekoConfig()
        assert load_config(None) == NekoConfig()

    def test_reads_tool_table_from_pyproject(self, tmp_path: Path):
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            '[project]\nname = "demo"\n\n[tool.neko]\nverify_scope = "test"\nbanner = false\n'
        )

        config = load_config(pyproject)

        assert config.verify_scope is VerifyScope.TEST
        assert config.banner is False

    def test_pyproject_without_table_gives_defaults(self, tmp_path: Path):
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "demo"\n')

        assert load_config(pyproject) == NekoConfig()

    def test_reads_top_level_of_other_files(self, tmp_path: Path):
        config_file = tmp_path / "neko.toml"
        config_file.write_text('log_level = "DEBUG"\n')

        assert load_config(config_file).log_level == "DEBUG"

    def test_invalid_toml(self, tmp_path: Path):
        config_file = tmp_path / "neko.toml"
        config_file.write_text('[invalid toml "missing quote')

        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            load_config(config_file)

    def test_unknown_keys(self, tmp_path: Path):
        config_file = tmp_path / "neko.toml"
        config_file.write_text("parallel = true\n")

        with pytest.raises(ConfigurationError, match="parallel"):
            load_config(config_file)

    def test_invalid_value_names_the_file(self, tmp_path: Path):
        config_file = tmp_path / "neko.toml"
        config_file.write_text('verify_scope = "nowhere"\n')

        with pytest.raises(ConfigurationError) as excinfo:
            load_config(config_file)
        assert str(config_file) in str(excinfo.value)

    def test_numeric_log_level_is_a_configuration_error(self, tmp_path: Path):
        config_file = tmp_path / "neko.toml"
        config_file.write_text("log_level = 10\n")

        with pytest.raises(ConfigurationError, match="log_level must be a level name"):
            load_config(config_file)

    def test_environment_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        config_file = tmp_path / "neko.toml"
        config_file.write_text('verify_scope = "suite"\nlog_level = "INFO"\n')
        monkeypatch.setenv("NEKO_VERIFY_SCOPE", "test")
        monkeypatch.setenv("NEKO_LOG_LEVEL", "warning")

        config = load_config(config_file)

        assert config.verify_scope is VerifyScope.TEST
        assert config.log_level == "warning"
        assert config.numeric_log_level == 30
