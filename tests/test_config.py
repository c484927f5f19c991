"""Tests for configuration loading."""

from pathlib import Path

import pytest

from shivanosh.config import CONFIG_ENV_VAR, ShivanoshConfig, load_config
from shivanosh.core.errors import ConfigError


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run each test without env config, from an empty directory and home."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


def write_config(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    return path


class TestDefaults:
    """Test default settings."""

    def test_no_file_gives_defaults(self) -> None:
        """Test that a missing config file is not an error."""
        config = load_config()

        assert config == ShivanoshConfig()
        assert config.extension == ".shivanosh"
        assert config.stop_on_error is True
        assert config.log_level == "WARNING"


class TestResolution:
    """Test config file resolution order."""

    def test_explicit_path(self, tmp_path: Path) -> None:
        """Test loading an explicit file."""
        path = write_config(tmp_path / "custom.toml", '[shivanosh]\nextension = ".myif"\n')

        assert load_config(str(path)).extension == ".myif"

    def test_working_directory_file(self, tmp_path: Path) -> None:
        """Test that shivanosh.toml in the working directory is found."""
        write_config(tmp_path / "shivanosh.toml", "[shivanosh]\nstop_on_error = false\n")

        assert load_config().stop_on_error is False

    def test_env_overrides_explicit(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that SHIVANOSH_CONFIG wins over an explicit path."""
        env_file = write_config(tmp_path / "env.toml", '[shivanosh]\nlog_level = "debug"\n')
        explicit = write_config(tmp_path / "explicit.toml", '[shivanosh]\nlog_level = "error"\n')
        monkeypatch.setenv(CONFIG_ENV_VAR, str(env_file))

        assert load_config(str(explicit)).log_level == "DEBUG"

    def test_explicit_missing(self, tmp_path: Path) -> None:
        """Test that a requested but missing file is an error."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(str(tmp_path / "nope.toml"))

    def test_file_without_section(self, tmp_path: Path) -> None:
        """Test a file with no [shivanosh] table."""
        path = write_config(tmp_path / "other.toml", "[tool]\nname = 'x'\n")

        assert load_config(str(path)) == ShivanoshConfig()


class TestValidation:
    """Test config validation."""

    def test_extension_gets_dot(self) -> None:
        """Test that a bare extension is normalised."""
        assert ShivanoshConfig(extension="myif").extension == ".myif"

    @pytest.mark.parametrize("extension", [".", "", "a/b"])
    def test_bad_extension(self, extension: str) -> None:
        """Test that empty or path-like extensions are rejected."""
        with pytest.raises(ValueError):
            ShivanoshConfig(extension=extension)

    def test_bad_log_level(self) -> None:
        """Test that unknown log levels are rejected."""
        with pytest.raises(ValueError, match="Unsupported log level"):
            ShivanoshConfig(log_level="chatty")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Test that malformed TOML raises ConfigError."""
        path = write_config(tmp_path / "bad.toml", "[shivanosh\n")

        with pytest.raises(ConfigError, match="Failed to parse"):
            load_config(str(path))

    def test_invalid_value(self, tmp_path: Path) -> None:
        """Test that bad values in the file raise ConfigError."""
        path = write_config(tmp_path / "bad.toml", '[shivanosh]\nlog_level = "loud"\n')

        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(str(path))

    def test_section_not_table(self, tmp_path: Path) -> None:
        """Test that a non-table [shivanosh] value is rejected."""
        path = write_config(tmp_path / "bad.toml", 'shivanosh = "yes"\n')

        with pytest.raises(ConfigError, match="must be a table"):
            load_config(str(path))
