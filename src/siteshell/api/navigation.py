"""Navigation API endpoints.

Provides the filtered navigation tree annotated with active state, and the
advisory validation report for the navigation configuration.
"""

from aiohttp import web

from siteshell.api.params import current_path, visible_tree
from siteshell.app_keys import navigation_key
from siteshell.core.loader import NavigationConfigError
from siteshell.core.navigation import build_navigation
from siteshell.core.types import POSITIONS


def create_navigation_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/navigation", get_navigation),
        web.get("/api/navigation/problems", get_navigation_problems),
    ]


async def get_navigation(request: web.Request) -> web.Response:
    position = request.query.get("position")
    if position is not None and position not in POSITIONS:
        return web.json_response(
            {"error": "Invalid position", "position": position},
            status=400,
        )

    tree = visible_tree(request)
    nav_items = build_navigation(tree, current_path(request), position)  # type: ignore[arg-type]
    return web.json_response({"items": [item.to_dict() for item in nav_items]})


async def get_navigation_problems(request: web.Request) -> web.Response:
    loader = request.app[navigation_key]
    try:
        problems = loader.problems
    except NavigationConfigError as e:
        problems = [str(e)]
    return web.json_response({"problems": problems})
