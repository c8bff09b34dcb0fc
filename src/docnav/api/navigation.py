"""Navigation API endpoints.

Provides the full navigation tree and per-page navigation data.
"""

from aiohttp import web

from docnav.app_keys import site_key


def create_navigation_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/navigation", get_navigation),
        web.get("/api/navigation/{url:.*}", get_page_navigation),
    ]


async def get_navigation(request: web.Request) -> web.Response:
    site = request.app[site_key]
    return web.json_response({"items": [child.to_dict() for child in site.root.children]})


async def get_page_navigation(request: web.Request) -> web.Response:
    url = request.match_info["url"]
    site = request.app[site_key]

    document = site.get_document(url)
    if document is None or document.node is None:
        return web.json_response(
            {"error": "Page not found", "url": url},
            status=404,
        )

    return web.json_response(site.page_navigation(document))
