"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest

from reference_resolver.config import CONFIG_ENV_VAR
from reference_resolver.config import load_resolution_config
from reference_resolver.config import read_config_file
from reference_resolver.exceptions import ConfigurationError
from reference_resolver.models import ResolutionEnvironment


@pytest.fixture
def write_config(tmp_path):
    """Write YAML text to a config file and return its path."""

    def _write(text: str) -> Path:
        path = tmp_path / "resolver.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def no_env_config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


class TestReadConfigFile:
    """Tests for read_config_file."""

    def test_aliases_and_dashes_are_normalized(self, write_config) -> None:
        """Short names and dashed keys map onto field names."""
        path = write_config(
            "mode: runtime\n"
            "framework-version: v4.5.1\n"
            "include_directories:\n"
            "  - /lib\n"
            "core-library-directory: /core\n"
        )

        assert read_config_file(path) == {
            "environment": "runtime",
            "target_framework_version": "v4.5.1",
            "explicit_include_directories": ["/lib"],
            "core_library_directory": "/core",
        }

    def test_empty_file_is_empty_mapping(self, write_config) -> None:
        """An empty document configures nothing."""
        assert read_config_file(write_config("")) == {}

    def test_missing_file(self, tmp_path) -> None:
        """A missing file is a configuration error."""
        with pytest.raises(ConfigurationError, match="Cannot read"):
            read_config_file(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, write_config) -> None:
        """Malformed YAML is a configuration error."""
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            read_config_file(write_config("mode: [runtime\n"))

    def test_not_a_mapping(self, write_config) -> None:
        """Top-level lists are rejected."""
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            read_config_file(write_config("- /lib\n- /core\n"))

    def test_sinks_cannot_be_configured(self, write_config) -> None:
        """Diagnostic sinks are code, not configuration."""
        with pytest.raises(ConfigurationError, match="log_warning"):
            read_config_file(write_config("log_warning: print\n"))


class TestLoadResolutionConfig:
    """Tests for load_resolution_config."""

    def test_defaults_without_file(self) -> None:
        """No file and no overrides gives the default configuration."""
        config = load_resolution_config()

        assert config.environment is ResolutionEnvironment.COMPILE_TIME_LIKE
        assert config.target_framework_version == "v4.5"
        assert config.explicit_include_directories == ()
        assert config.probe_budget is None

    def test_file_values(self, write_config) -> None:
        """File values populate the model."""
        path = write_config("mode: design-time\nframework_directories: [/fw1, /fw2]\nprobe_budget: 2.5\n")

        config = load_resolution_config(path)

        assert config.environment is ResolutionEnvironment.DESIGN_TIME_LIKE
        assert config.target_framework_directories == ("/fw1", "/fw2")
        assert config.probe_budget == 2.5

    def test_overrides_win(self, write_config) -> None:
        """Keyword overrides replace file values."""
        path = write_config("core_library_directory: /from-file\n")

        config = load_resolution_config(path, core_library_directory="/from-override")

        assert config.core_library_directory == "/from-override"

    def test_none_overrides_are_ignored(self, write_config) -> None:
        """None never clears a file value."""
        path = write_config("implicit_include_directory: /implicit\n")

        config = load_resolution_config(path, implicit_include_directory=None, output_directory=None)

        assert config.implicit_include_directory == "/implicit"
        assert config.output_directory == ""

    def test_sink_overrides_are_accepted(self) -> None:
        """Sinks can be supplied in code."""
        messages = []

        config = load_resolution_config(log_message=messages.append)

        config.log_message("hello")
        assert messages == ["hello"]

    def test_environment_variable(self, write_config, monkeypatch) -> None:
        """REFERENCE_RESOLVER_CONFIG names the default file."""
        path = write_config("output_directory: /out\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert load_resolution_config().output_directory == "/out"

    def test_unknown_key(self, write_config) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ConfigurationError, match="Invalid resolution config"):
            load_resolution_config(write_config("search_everywhere: true\n"))

    def test_invalid_mode(self, write_config) -> None:
        """Only the three environments are accepted."""
        with pytest.raises(ConfigurationError):
            load_resolution_config(write_config("mode: sometimes\n"))

    def test_non_positive_budget(self) -> None:
        """A probe budget must be positive."""
        with pytest.raises(ConfigurationError):
            load_resolution_config(probe_budget=0)
