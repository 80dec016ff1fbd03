"""Breadcrumbs API endpoint.

Returns the breadcrumb trail for a path together with its ld+json payload.
"""

from aiohttp import web

from siteshell.api.params import visible_tree
from siteshell.app_keys import config_key
from siteshell.core.breadcrumbs import BreadcrumbPath, build_breadcrumbs


def create_breadcrumbs_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/breadcrumbs", get_breadcrumbs),
        web.get("/api/breadcrumbs/{path:.*}", get_breadcrumbs),
    ]


async def get_breadcrumbs(request: web.Request) -> web.Response:
    path = request.match_info.get("path", "")
    config = request.app[config_key]

    breadcrumbs = build_breadcrumbs(
        f"/{path}",
        visible_tree(request),
        base_url=config.site.base_url,
    )
    return web.json_response(breadcrumbs_payload(breadcrumbs))


def breadcrumbs_payload(breadcrumbs: BreadcrumbPath) -> dict[str, object]:
    """Serialize breadcrumbs; the ld+json string is left out on the home page."""
    payload: dict[str, object] = dict(breadcrumbs.to_dict())
    json_ld = breadcrumbs.json_ld()
    if json_ld is not None:
        payload["json_ld"] = json_ld
    return payload
