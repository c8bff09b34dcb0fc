"""CLI interface for Docnav.

Command-line tool for inspecting and serving documentation navigation.
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from docnav.config import Config
from docnav.core.metadata import MetadataError
from docnav.core.site import Site, SiteLoader
from docnav.core.tree import OrderingError, TreeNode

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover docnav.toml)",
)

source_dir_option = click.option(
    "--source-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Documentation source directory (overrides config)",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Docnav - navigation trees for documentation sites."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@config_option
@source_dir_option
@click.option("--host", default=None, help="Host to bind to (overrides config)")
@click.option("--port", "-p", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--wrappers/--no-wrappers",
    "wrappers_build",
    default=None,
    help="Render links in the wrappers URL namespace (overrides config)",
)
def serve(
    config_path: Path | None,
    source_dir: Path | None,
    host: str | None,
    port: int | None,
    wrappers_build: bool | None,
) -> None:
    """Start the navigation API server."""
    from docnav.server import run_server

    config = Config.load(config_path).with_overrides(
        host=host,
        port=port,
        source_dir=source_dir,
        wrappers_build=wrappers_build,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Source directory: {config.docs.source_dir}")
    if config.navigation.wrappers_build:
        click.echo("Wrappers build: enabled")

    try:
        run_server(config)
    except (OrderingError, MetadataError, ValueError) as e:
        _fail(e)


@cli.command()
@config_option
@source_dir_option
def tree(config_path: Path | None, source_dir: Path | None) -> None:
    """Print the sorted navigation tree."""
    site = _load_site(config_path, source_dir)
    for child in site.root.children:
        _print_node(child)


@cli.command()
@click.argument("url")
@config_option
@source_dir_option
@click.option("--base-url", default=None, help="Base URL for links (overrides config)")
def show(
    url: str,
    config_path: Path | None,
    source_dir: Path | None,
    base_url: str | None,
) -> None:
    """Show breadcrumb, prev/next and menu of the page at URL."""
    site = _load_site(config_path, source_dir, base_url=base_url)

    document = site.get_document(url)
    if document is None or document.node is None:
        click.echo(click.style(f"Error: no page at {url}", fg="red"), err=True)
        sys.exit(1)

    node = document.node
    click.echo(f"Page: {node.title} ({document.path})")
    click.echo(f"Breadcrumb: {site.render_breadcrumb(document)}")
    click.echo(f"Prev: {_describe(node.prev())}")
    click.echo(f"Next: {_describe(node.next())}")
    if document.data.get("needs_canonical"):
        click.echo(f"Canonical: {document.data['canonical_url']}")
    click.echo(f"Menu: {site.render_section_menu(document)}")


@cli.command()
@config_option
@source_dir_option
def check(config_path: Path | None, source_dir: Path | None) -> None:
    """Build the navigation tree and report errors."""
    site = _load_site(config_path, source_dir)
    pages = sum(1 for _ in site.root.iter_documents())
    click.echo(click.style(f"Navigation OK: {pages} pages", fg="green"))


def _load_site(
    config_path: Path | None,
    source_dir: Path | None,
    *,
    base_url: str | None = None,
) -> Site:
    try:
        config = Config.load(config_path).with_overrides(source_dir=source_dir, base_url=base_url)
        return SiteLoader(config).load()
    except (OrderingError, MetadataError, ValueError) as e:
        _fail(e)


def _fail(error: Exception) -> NoReturn:
    click.echo(click.style(f"Error: {error}", fg="red"), err=True)
    sys.exit(1)


def _print_node(node: TreeNode, depth: int = 0) -> None:
    marker = "" if node.is_document else "/"
    suffix = " [version]" if node.is_version_node else ""
    click.echo(f"{'  ' * depth}{node.title}{marker}{suffix}  ({node.url})")
    for child in node.children:
        _print_node(child, depth + 1)


def _describe(node: TreeNode | None) -> str:
    if node is None:
        return "-"
    return f"{node.title} ({node.url})"
