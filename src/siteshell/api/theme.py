"""Theme API endpoints.

The visitor's requested theme is persisted in a cookie. The platform color
scheme and reduced-motion preference arrive as client hints, which every
response asks the browser to send.
"""

import logging

from aiohttp import web

from siteshell.app_keys import config_key
from siteshell.core.theme import RootScope, ThemeController
from siteshell.core.types import SystemPreference

logger = logging.getLogger(__name__)

COLOR_SCHEME_HINT = "Sec-CH-Prefers-Color-Scheme"
REDUCED_MOTION_HINT = "Sec-CH-Prefers-Reduced-Motion"
CLIENT_HINTS = f"{COLOR_SCHEME_HINT}, {REDUCED_MOTION_HINT}"


class CookieStore:
    """Key-value store backed by request cookies.

    Reads come from the request; writes are collected and applied to the
    response with apply().
    """

    def __init__(self, request: web.Request) -> None:
        self._cookies = dict(request.cookies)
        self._pending: dict[str, str | None] = {}

    def get(self, key: str) -> str | None:
        if key in self._pending:
            return self._pending[key]
        return self._cookies.get(key)

    def set(self, key: str, value: str) -> None:
        self._pending[key] = value

    def remove(self, key: str) -> None:
        self._pending[key] = None

    def apply(self, response: web.StreamResponse, max_age: int) -> None:
        """Write pending changes as Set-Cookie headers."""
        for key, value in self._pending.items():
            if value is None:
                response.del_cookie(key, path="/")
            else:
                response.set_cookie(key, value, max_age=max_age, path="/", samesite="Lax")


def create_theme_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/theme", get_theme),
        web.put("/api/theme", put_theme),
        web.delete("/api/theme", delete_theme),
    ]


async def get_theme(request: web.Request) -> web.Response:
    store = CookieStore(request)
    controller = _create_controller(request, store)
    controller.init()
    return _theme_response(request, controller, store)


async def put_theme(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except ValueError:
        return web.json_response({"error": "Invalid JSON body"}, status=400)

    theme = body.get("theme") if isinstance(body, dict) else None

    store = CookieStore(request)
    controller = _create_controller(request, store)
    controller.init()

    available = controller.selectable_themes
    if theme not in available:
        return web.json_response(
            {"error": "Invalid theme", "theme": theme, "available_themes": available},
            status=400,
        )

    controller.set_theme(theme)
    logger.debug("Theme set to %s (%s)", controller.requested, controller.resolved)
    return _theme_response(request, controller, store)


async def delete_theme(request: web.Request) -> web.Response:
    store = CookieStore(request)
    controller = _create_controller(request, store)
    controller.init()
    controller.clear_stored_theme()
    return _theme_response(request, controller, store)


def _create_controller(request: web.Request, store: CookieStore) -> ThemeController:
    config = request.app[config_key]
    return ThemeController(
        store,
        RootScope(),
        config.theme.theme,
        system_preference=_system_preference(request),
        prefers_reduced_motion=_prefers_reduced_motion(request),
    )


def _theme_response(
    request: web.Request,
    controller: ThemeController,
    store: CookieStore,
) -> web.Response:
    config = request.app[config_key]
    root = controller.root

    payload = {
        **controller.state.to_dict(),
        "available_themes": controller.selectable_themes,
        "root": {
            "attributes": root.attributes,
            "classes": sorted(root.classes),
        },
    }
    response = web.json_response(
        payload,
        headers={
            "Accept-CH": CLIENT_HINTS,
            "Vary": CLIENT_HINTS,
            "Cache-Control": "private, no-cache",
        },
    )
    store.apply(response, config.theme.cookie_max_age)
    return response


def _system_preference(request: web.Request) -> SystemPreference:
    value = request.headers.get(COLOR_SCHEME_HINT, "").strip().strip('"').lower()
    return "dark" if value == "dark" else "light"


def _prefers_reduced_motion(request: web.Request) -> bool:
    value = request.headers.get(REDUCED_MOTION_HINT, "").strip().strip('"').lower()
    return value == "reduce"
