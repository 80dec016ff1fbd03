"""aiohttp server for SiteShell.

Application factory and route registration for the layout shell API.
"""

import logging

from aiohttp import web

from siteshell.api.breadcrumbs import create_breadcrumbs_routes
from siteshell.api.layout import create_layout_routes
from siteshell.api.navigation import create_navigation_routes
from siteshell.api.theme import create_theme_routes
from siteshell.app_keys import config_key, live_reload_key, navigation_key
from siteshell.assets import get_default_navigation_path
from siteshell.config import Config
from siteshell.core.loader import NavigationLoader
from siteshell.live import LiveReloadManager
from siteshell.live.reload import create_live_reload_routes

logger = logging.getLogger(__name__)


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    navigation_file = config.site.navigation_file or get_default_navigation_path()
    navigation = NavigationLoader(navigation_file)

    app[config_key] = config
    app[navigation_key] = navigation

    app.router.add_routes(create_navigation_routes())
    app.router.add_routes(create_breadcrumbs_routes())
    app.router.add_routes(create_layout_routes())
    app.router.add_routes(create_theme_routes())

    # Only a configured navigation file is worth watching
    if config.live_reload.enabled and config.site.navigation_file is not None:
        manager = LiveReloadManager(navigation)
        app[live_reload_key] = manager
        app.router.add_routes(create_live_reload_routes(manager))
        app.on_startup.append(_start_live_reload)
        app.on_cleanup.append(_stop_live_reload)

    return app


async def _start_live_reload(app: web.Application) -> None:
    """Start live reload on application startup."""
    await app[live_reload_key].start()


async def _stop_live_reload(app: web.Application) -> None:
    """Stop live reload on application cleanup."""
    await app[live_reload_key].stop()


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    logger.info("Serving on %s:%d", config.server.host, config.server.port)
    web.run_app(app, host=config.server.host, port=config.server.port, print=None)
