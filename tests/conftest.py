"""Shared test fixtures."""

from pathlib import Path

import pytest
from siteshell.config import Config, LiveReloadConfig, ServerConfig, SiteConfig, ThemeSettings
from siteshell.core.tree import NavigationTree, parse_navigation
from siteshell.server import create_app

NAVIGATION_TOML = """
[[items]]
id = "home"
label = "Home"
href = "/"
visibility = "public"
order = 1

[[items]]
id = "services"
label = "Services"
href = "/services"
visibility = "public"
order = 2

[[items.children]]
id = "tax"
label = "Tax"
href = "/services/tax"
visibility = "public"
order = 1

[[items]]
id = "portal"
label = "Client Portal"
href = "/portal"
visibility = "authenticated"
order = 3

[[items]]
id = "privacy"
label = "Privacy Policy"
href = "/legal/privacy"
position = "secondary"
order = 1
"""


@pytest.fixture
def raw_items() -> list[dict[str, object]]:
    """Raw navigation configuration for home, services/tax and portal."""
    return [
        {"id": "home", "label": "Home", "href": "/", "visibility": "public"},
        {
            "id": "services",
            "label": "Services",
            "href": "/services",
            "visibility": "public",
            "children": [
                {"id": "tax", "label": "Tax", "href": "/services/tax", "visibility": "public"},
            ],
        },
        {
            "id": "portal",
            "label": "Client Portal",
            "href": "/portal",
            "visibility": "authenticated",
        },
    ]


@pytest.fixture
def tree(raw_items: list[dict[str, object]]) -> NavigationTree:
    return parse_navigation(raw_items)


@pytest.fixture
def navigation_file(tmp_path: Path) -> Path:
    """Write a navigation TOML file."""
    path = tmp_path / "navigation.toml"
    path.write_text(NAVIGATION_TOML)
    return path


@pytest.fixture
def test_config(navigation_file: Path) -> Config:
    """Create a test configuration pointing at the navigation fixture file.

    Live reload is disabled so no watcher task runs during API tests.
    """
    return Config(
        server=ServerConfig(),
        site=SiteConfig(base_url="https://example.com", navigation_file=navigation_file),
        theme=ThemeSettings(),
        live_reload=LiveReloadConfig(enabled=False),
    )


@pytest.fixture
def client(test_config: Config, aiohttp_client):
    """Create test client for the app built from the test configuration."""
    return aiohttp_client(create_app(test_config))
