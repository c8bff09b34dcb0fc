"""aiohttp server for Docnav.

Application factory and route registration for standalone server mode.
"""

import logging

from aiohttp import web

from docnav.api.navigation import create_navigation_routes
from docnav.app_keys import site_key
from docnav.config import Config
from docnav.core.site import SiteLoader

logger = logging.getLogger(__name__)


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    The site is generated once here; requests only read from it.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    site = SiteLoader(config).load()
    logger.info(f"Serving navigation for {len(site.documents)} documents")

    app[site_key] = site
    app.router.add_routes(create_navigation_routes())

    return app


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    web.run_app(app, host=config.server.host, port=config.server.port)
