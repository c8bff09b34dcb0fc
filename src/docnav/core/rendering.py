"""HTML rendering entry points for page templates.

Both entry points take the document being rendered and need the `node`
attached to it by tree construction. A document without one is reported
and rendered as an empty fragment, so the rest of the site still builds.
"""

import html
import logging
from dataclasses import dataclass

from docnav.core.documents import Document
from docnav.core.menu import BreadcrumbItem, MenuItem
from docnav.core.tree import DocumentNode

logger = logging.getLogger(__name__)

BREADCRUMB_SEPARATOR = " / "


class NavigationContextError(LookupError):
    """Raised when a document has no navigation node attached."""


@dataclass(frozen=True)
class UrlRewrite:
    """Segment substitution for the alternate ("wrappers") URL namespace."""

    source: str = "components"
    target: str = "wrappers"

    def apply(self, url: str) -> str:
        return url.replace(self.source, self.target, 1)


DEFAULT_REWRITE = UrlRewrite()


def require_node(document: Document) -> DocumentNode:
    """Return the navigation node of a document.

    Raises:
        NavigationContextError: If the document is not part of the tree
    """
    node = document.node
    if node is None:
        raise NavigationContextError(
            f"Document {document.path} ({document.url}) has no navigation node"
        )
    return node


def join_url(base_url: str, url: str) -> str:
    """Join a base URL and a site URL with exactly one slash between them."""
    if not base_url:
        return url
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"


def render_breadcrumb(
    document: Document,
    base_url: str,
    wrappers_build: bool = False,
    *,
    rewrite: UrlRewrite = DEFAULT_REWRITE,
) -> str:
    """Render the breadcrumb trail of a document as anchors.

    Args:
        document: Document being rendered
        base_url: Site base URL prepended to every link
        wrappers_build: Rewrite URLs into the alternate namespace
        rewrite: Segment substitution used when wrappers_build is set

    Returns:
        HTML fragment, empty when the document has no navigation node
    """
    try:
        node = require_node(document)
    except NavigationContextError as e:
        logger.warning(str(e))
        return ""

    return format_breadcrumbs(node.breadcrumbs(), base_url, rewrite if wrappers_build else None)


def render_section_menu(
    document: Document,
    base_url: str,
    current_url: str,
    wrappers_build: bool = False,
    *,
    rewrite: UrlRewrite = DEFAULT_REWRITE,
) -> str:
    """Render the section menu of a document as nested lists.

    Args:
        document: Document being rendered
        base_url: Site base URL prepended to every link
        current_url: URL of the page being rendered, marked active
        wrappers_build: Rewrite URLs into the alternate namespace
        rewrite: Segment substitution used when wrappers_build is set

    Returns:
        HTML fragment, empty when the document has no navigation node
    """
    try:
        node = require_node(document)
    except NavigationContextError as e:
        logger.warning(str(e))
        return ""

    return format_menu(node.section_menu(), base_url, current_url, rewrite if wrappers_build else None)


def format_breadcrumbs(
    crumbs: list[BreadcrumbItem],
    base_url: str,
    rewrite: UrlRewrite | None = None,
) -> str:
    links = [
        _anchor(_href(base_url, crumb.url, rewrite), html.escape(crumb.title))
        for crumb in crumbs
    ]
    return BREADCRUMB_SEPARATOR.join(links)


def format_menu(
    items: list[MenuItem],
    base_url: str,
    current_url: str,
    rewrite: UrlRewrite | None = None,
) -> str:
    out = ["<ul>"]
    for item in items:
        css_classes = [f"tag-{tag}" for tag in item.tags]
        if item.has_children:
            css_classes.append("expanded")

        out.append(f"<li class='{html.escape(' '.join(css_classes))}'>")
        out.append(
            _anchor(
                _href(base_url, item.url, rewrite),
                item.display_title,
                active=item.is_active(current_url),
            )
        )
        if item.has_children:
            out.append(format_menu(item.children, base_url, current_url, rewrite))
        out.append("</li>")
    out.append("</ul>")
    return "".join(out)


def _href(base_url: str, url: str, rewrite: UrlRewrite | None) -> str:
    if rewrite is not None:
        url = rewrite.apply(url)
    return join_url(base_url, url)


def _anchor(href: str, text: str, *, active: bool = False) -> str:
    css = ' class="active"' if active else ""
    return f"<a{css} href='{html.escape(href)}'>{text}</a>"
