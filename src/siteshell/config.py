"""Configuration management for SiteShell.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from siteshell.core.breadcrumbs import DEFAULT_BASE_URL
from siteshell.core.theme import DEFAULT_ATTRIBUTE, DEFAULT_STORAGE_KEY, ThemeConfig
from siteshell.core.types import THEMES

CONFIG_FILENAME = "siteshell.toml"

# One year
DEFAULT_COOKIE_MAX_AGE = 60 * 60 * 24 * 365


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class SiteConfig:
    """Site configuration."""

    base_url: str = DEFAULT_BASE_URL
    navigation_file: Path | None = None


@dataclass
class ThemeSettings:
    """Theme configuration."""

    theme: ThemeConfig = field(default_factory=ThemeConfig)
    cookie_max_age: int = DEFAULT_COOKIE_MAX_AGE


@dataclass
class LiveReloadConfig:
    """Live reload configuration."""

    enabled: bool = True


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    site: SiteConfig
    theme: ThemeSettings
    live_reload: LiveReloadConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for siteshell.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        """Create config with all defaults."""
        return cls(
            server=ServerConfig(),
            site=SiteConfig(),
            theme=ThemeSettings(),
            live_reload=LiveReloadConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            site=cls._parse_site(data.get("site"), config_dir),
            theme=cls._parse_theme(data.get("theme")),
            live_reload=cls._parse_live_reload(data.get("live_reload")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section."""
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_site(cls, data: object, config_dir: Path) -> SiteConfig:
        """Parse site configuration section.

        Args:
            data: Raw site section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            SiteConfig instance
        """
        if data is None:
            return SiteConfig()

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        base_url = data.get("base_url", DEFAULT_BASE_URL)
        if not isinstance(base_url, str):
            raise ValueError("site.base_url must be a string")
        if not base_url.startswith(("http://", "https://")):
            raise ValueError("site.base_url must be an absolute http(s) URL")

        navigation_file = data.get("navigation_file")
        navigation_path: Path | None = None
        if navigation_file is not None:
            if not isinstance(navigation_file, str):
                raise ValueError("site.navigation_file must be a string")
            navigation_path = config_dir / navigation_file

        return SiteConfig(base_url=base_url, navigation_file=navigation_path)

    @classmethod
    def _parse_theme(cls, data: object) -> ThemeSettings:
        """Parse theme configuration section.

        Args:
            data: Raw theme section data

        Returns:
            ThemeSettings instance
        """
        if data is None:
            return ThemeSettings()

        if not isinstance(data, dict):
            raise ValueError("theme section must be a dictionary")

        default_theme = data.get("default_theme", "system")
        if default_theme not in THEMES:
            raise ValueError(f"theme.default_theme must be one of: {', '.join(THEMES)}")

        attribute = data.get("attribute", DEFAULT_ATTRIBUTE)
        if not isinstance(attribute, str) or not attribute:
            raise ValueError("theme.attribute must be a non-empty string")

        storage_key = data.get("storage_key", DEFAULT_STORAGE_KEY)
        if not isinstance(storage_key, str) or not storage_key:
            raise ValueError("theme.storage_key must be a non-empty string")

        flags: dict[str, bool] = {}
        for name, default in (
            ("enable_transitions", True),
            ("enable_system", True),
            ("disable_storage", False),
        ):
            value = data.get(name, default)
            if not isinstance(value, bool):
                raise ValueError(f"theme.{name} must be a boolean")
            flags[name] = value

        available_raw = data.get("available_themes", list(THEMES))
        if not isinstance(available_raw, list) or not available_raw:
            raise ValueError("theme.available_themes must be a non-empty list")
        for item in available_raw:
            if item not in THEMES:
                raise ValueError(f"theme.available_themes items must be one of: {', '.join(THEMES)}")

        cookie_max_age = data.get("cookie_max_age", DEFAULT_COOKIE_MAX_AGE)
        if not isinstance(cookie_max_age, int) or isinstance(cookie_max_age, bool):
            raise ValueError("theme.cookie_max_age must be an integer")

        theme = ThemeConfig(
            default_theme=default_theme,
            attribute=attribute,
            storage_key=storage_key,
            enable_transitions=flags["enable_transitions"],
            enable_system=flags["enable_system"],
            available_themes=tuple(available_raw),
            disable_storage=flags["disable_storage"],
        )
        return ThemeSettings(theme=theme, cookie_max_age=cookie_max_age)

    @classmethod
    def _parse_live_reload(cls, data: object) -> LiveReloadConfig:
        """Parse live_reload configuration section."""
        if data is None:
            return LiveReloadConfig()

        if not isinstance(data, dict):
            raise ValueError("live_reload section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("live_reload.enabled must be a boolean")

        return LiveReloadConfig(enabled=enabled)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        base_url: str | None = None,
        navigation_file: Path | None = None,
        live_reload_enabled: bool | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            base_url: Override site.base_url
            navigation_file: Override site.navigation_file
            live_reload_enabled: Override live_reload.enabled

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        site = self.site
        if base_url is not None or navigation_file is not None:
            site = replace(
                self.site,
                base_url=base_url if base_url is not None else self.site.base_url,
                navigation_file=(
                    navigation_file if navigation_file is not None else self.site.navigation_file
                ),
            )

        live_reload = self.live_reload
        if live_reload_enabled is not None:
            live_reload = replace(self.live_reload, enabled=live_reload_enabled)

        return replace(self, server=server, site=site, live_reload=live_reload)
