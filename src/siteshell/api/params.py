"""Shared request helpers for API endpoints."""

import logging

from aiohttp import web

from siteshell.app_keys import navigation_key
from siteshell.core.filter import filter_navigation
from siteshell.core.loader import NavigationConfigError
from siteshell.core.tree import NavigationTree

logger = logging.getLogger(__name__)

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def is_authenticated(request: web.Request) -> bool:
    """Read the authentication flag supplied by the auth layer."""
    return request.query.get("authenticated", "").strip().lower() in _TRUTHY


def current_path(request: web.Request) -> str:
    """Read the current route path, defaulting to the home page."""
    path = request.query.get("path", "/").strip()
    return path if path.startswith("/") else f"/{path}"


def visible_tree(request: web.Request) -> NavigationTree:
    """Load the navigation tree filtered for the requesting visitor.

    A broken navigation file yields an empty tree instead of an error so
    that pages still render.
    """
    loader = request.app[navigation_key]
    try:
        tree = loader.load()
    except NavigationConfigError as e:
        logger.error("Navigation unavailable: %s", e)
        tree = NavigationTree()
    return filter_navigation(tree, is_authenticated(request))
