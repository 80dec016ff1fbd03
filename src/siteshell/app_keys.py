"""Application keys for type-safe app configuration access."""

from aiohttp import web

from siteshell.config import Config
from siteshell.core.loader import NavigationLoader
from siteshell.live import LiveReloadManager

config_key = web.AppKey("config", Config)
navigation_key = web.AppKey("navigation", NavigationLoader)
live_reload_key = web.AppKey("live_reload", LiveReloadManager)
