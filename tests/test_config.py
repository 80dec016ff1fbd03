"""Tests for configuration loading."""

from pathlib import Path
from unittest.mock import patch

import pytest
from siteshell.config import DEFAULT_COOKIE_MAX_AGE, Config
from siteshell.core.breadcrumbs import DEFAULT_BASE_URL


class TestConfigLoad:
    """Tests for Config.load()."""

    def test__explicit_path__loads_config(self, tmp_path: Path) -> None:
        """Load config from explicit path."""
        config_file = tmp_path / "siteshell.toml"
        config_file.write_text("""
[server]
host = "0.0.0.0"
port = 3000

[site]
base_url = "https://example.com"
navigation_file = "config/navigation.toml"

[theme]
default_theme = "dark"
attribute = "data-color-mode"
storage_key = "site-theme"
enable_transitions = false
enable_system = false
available_themes = ["light", "dark"]
disable_storage = true
cookie_max_age = 3600

[live_reload]
enabled = false
""")

        config = Config.load(config_file)

        assert config.server.host == "0.0.0.0"
        assert config.server.port == 3000
        assert config.site.base_url == "https://example.com"
        assert config.site.navigation_file == tmp_path / "config" / "navigation.toml"
        assert config.theme.theme.default_theme == "dark"
        assert config.theme.theme.attribute == "data-color-mode"
        assert config.theme.theme.storage_key == "site-theme"
        assert config.theme.theme.enable_transitions is False
        assert config.theme.theme.enable_system is False
        assert config.theme.theme.available_themes == ("light", "dark")
        assert config.theme.theme.disable_storage is True
        assert config.theme.cookie_max_age == 3600
        assert config.live_reload.enabled is False
        assert config.config_path == config_file

    def test__minimal_config__uses_defaults(self, tmp_path: Path) -> None:
        """Load empty config with defaults."""
        config_file = tmp_path / "siteshell.toml"
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.server.host == "127.0.0.1"
        assert config.server.port == 8080
        assert config.site.base_url == DEFAULT_BASE_URL
        assert config.site.navigation_file is None
        assert config.theme.theme.default_theme == "system"
        assert config.theme.theme.attribute == "data-theme"
        assert config.theme.cookie_max_age == DEFAULT_COOKIE_MAX_AGE
        assert config.live_reload.enabled is True

    def test__missing_explicit_path__raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Config.load(tmp_path / "missing.toml")

    def test__auto_discover__finds_in_cwd(self, tmp_path: Path) -> None:
        """Discover siteshell.toml in current directory."""
        config_file = tmp_path / "siteshell.toml"
        config_file.write_text("[server]\nport = 9000\n")

        with patch("pathlib.Path.cwd", return_value=tmp_path):
            config = Config.load()

        assert config.server.port == 9000
        assert config.config_path == config_file

    def test__auto_discover__finds_in_parent(self, tmp_path: Path) -> None:
        """Discover siteshell.toml in a parent directory."""
        (tmp_path / "siteshell.toml").write_text("[server]\nport = 9001\n")
        subdir = tmp_path / "a" / "b"
        subdir.mkdir(parents=True)

        with patch("pathlib.Path.cwd", return_value=subdir):
            config = Config.load()

        assert config.server.port == 9001

    def test__no_config__returns_defaults(self, tmp_path: Path) -> None:
        with patch.object(Config, "_discover_config", return_value=None):
            config = Config.load()

        assert config.config_path is None
        assert config.server.port == 8080


class TestConfigValidation:
    """Tests for invalid configuration values."""

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ('server = "x"', "server section must be a dictionary"),
            ('[server]\nhost = 1', "server.host must be a string"),
            ('[server]\nport = "80"', "server.port must be an integer"),
            ("[server]\nport = true", "server.port must be an integer"),
            ('[site]\nbase_url = "example.com"', "absolute http"),
            ("[site]\nnavigation_file = 1", "site.navigation_file must be a string"),
            ('[theme]\ndefault_theme = "sepia"', "theme.default_theme must be one of"),
            ('[theme]\nattribute = ""', "theme.attribute must be a non-empty string"),
            ('[theme]\nstorage_key = ""', "theme.storage_key must be a non-empty string"),
            ('[theme]\nenable_system = "no"', "theme.enable_system must be a boolean"),
            ("[theme]\navailable_themes = []", "theme.available_themes must be a non-empty list"),
            ('[theme]\navailable_themes = ["sepia"]', "theme.available_themes items"),
            ('[theme]\ncookie_max_age = "1y"', "theme.cookie_max_age must be an integer"),
            ('[live_reload]\nenabled = "yes"', "live_reload.enabled must be a boolean"),
        ],
    )
    def test__invalid_value__raises(self, tmp_path: Path, content: str, message: str) -> None:
        config_file = tmp_path / "siteshell.toml"
        config_file.write_text(content)

        with pytest.raises(ValueError, match=message):
            Config.load(config_file)


class TestWithOverrides:
    """Tests for Config.with_overrides()."""

    def test__overrides_applied(self, test_config: Config, tmp_path: Path) -> None:
        other = tmp_path / "other.toml"

        config = test_config.with_overrides(
            host="0.0.0.0",
            port=9000,
            base_url="https://override.example",
            navigation_file=other,
            live_reload_enabled=True,
        )

        assert config.server.host == "0.0.0.0"
        assert config.server.port == 9000
        assert config.site.base_url == "https://override.example"
        assert config.site.navigation_file == other
        assert config.live_reload.enabled is True

    def test__none__keeps_values(self, test_config: Config) -> None:
        config = test_config.with_overrides(port=9000)

        assert config.server.host == test_config.server.host
        assert config.site == test_config.site
        assert config.live_reload == test_config.live_reload

    def test__original_unchanged(self, test_config: Config) -> None:
        test_config.with_overrides(port=9000, live_reload_enabled=True)

        assert test_config.server.port == 8080
        assert test_config.live_reload.enabled is False
