"""Layout API endpoint.

Everything the page shell needs for one path in a single response: header
and footer navigation plus breadcrumbs.
"""

from aiohttp import web

from siteshell.api.breadcrumbs import breadcrumbs_payload
from siteshell.api.params import current_path, is_authenticated, visible_tree
from siteshell.app_keys import config_key
from siteshell.core.breadcrumbs import build_breadcrumbs
from siteshell.core.navigation import build_navigation


def create_layout_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/layout", get_layout),
    ]


async def get_layout(request: web.Request) -> web.Response:
    config = request.app[config_key]
    path = current_path(request)
    tree = visible_tree(request)

    breadcrumbs = build_breadcrumbs(path, tree, base_url=config.site.base_url)

    return web.json_response(
        {
            "path": path,
            "is_authenticated": is_authenticated(request),
            "header": [item.to_dict() for item in build_navigation(tree, path, "primary")],
            "footer": [item.to_dict() for item in build_navigation(tree, path, "secondary")],
            "breadcrumbs": breadcrumbs_payload(breadcrumbs),
        },
    )
