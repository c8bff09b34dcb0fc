"""Render-ready projections of tree nodes.

Menu items and breadcrumb items are plain views with no reference back
into the tree, so templates and the JSON API can consume them directly.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypedDict

if TYPE_CHECKING:
    from docnav.core.tree import TreeNode

logger = logging.getLogger(__name__)

EXPANDED_MARKER = " <span class='item-expanded'></span> "


class MenuItemDict(TypedDict, total=False):
    """Dictionary representation of a menu item."""

    title: str
    url: str
    is_document: bool
    tags: list[str]
    collapsed: bool
    children: list[MenuItemDict]


@dataclass(frozen=True)
class BreadcrumbItem:
    """Breadcrumb navigation item."""

    title: str
    url: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"title": self.title, "url": self.url}


@dataclass
class MenuItem:
    """Section menu entry with its already-derived children."""

    title: str
    url: str
    is_document: bool
    children: list[MenuItem] = field(default_factory=list)
    tags: tuple[str, ...] = ()
    collapsed: bool = False

    @classmethod
    def from_node(
        cls,
        node: TreeNode,
        children: list[MenuItem],
        collapsed_title: str | None = None,
    ) -> MenuItem:
        title = node.title or ""
        return cls(
            title=title,
            url=node.url or "",
            is_document=node.is_document,
            children=children,
            tags=node.tags,
            collapsed=collapsed_title is not None and title == collapsed_title,
        )

    @property
    def has_children(self) -> bool:
        """Whether the children are shown; collapsed items hide them."""
        return bool(self.children) and not self.collapsed

    @property
    def prefix(self) -> str:
        if self.is_document or not self.has_children:
            return ""
        return EXPANDED_MARKER

    @property
    def display_title(self) -> str:
        if not self.title:
            logger.warning(f"Page {self.url} has no title")
        return f"{self.prefix} {html.escape(self.title)}"

    def is_active(self, current_url: str) -> bool:
        """Match the current page exactly, or by prefix for collapsed items."""
        if self.is_document and self.url == current_url:
            return True
        return self.collapsed and bool(self.url) and current_url.startswith(self.url)

    def to_dict(self) -> MenuItemDict:
        """Convert to dictionary for JSON serialization."""
        result: MenuItemDict = {
            "title": self.title,
            "url": self.url,
            "is_document": self.is_document,
            "tags": list(self.tags),
            "collapsed": self.collapsed,
        }
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result
