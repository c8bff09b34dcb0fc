"""Navigation tree over a document hierarchy.

The hierarchy is inferred from slash-delimited document paths: every
directory becomes a DirectoryNode, every visible document a DocumentNode
leaf. Nodes are ordered by position, then title, then path.

Directories whose segment looks like a version ("v1.2.3") are overlays:
they are skipped by prev/next, give no breadcrumb entry of their own and
splice their menu into their parent's entry instead of adding a level.

The tree is built and sorted once per generation pass and only read
afterwards, so prev/next are computed from the tree shape on every call.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from docnav.core.documents import Document, DocumentSet
from docnav.core.menu import BreadcrumbItem, MenuItem
from docnav.core.metadata import MetadataProvider, StaticMetadataProvider
from docnav.core.types import DEFAULT_POSITION, VERSION_PATTERN, URLPath

logger = logging.getLogger(__name__)


class OrderingError(Exception):
    """Raised when two nodes cannot be ordered relative to each other."""

    def __init__(self, path: str, other_path: str) -> None:
        super().__init__(f"Comparing the pages {path} and {other_path} failed")
        self.path = path
        self.other_path = other_path


@dataclass(frozen=True)
class TreeSettings:
    """Site-specific conventions used while building and projecting the tree."""

    # Top-level segments whose subtree keeps its authored order
    unsorted_sections: tuple[str, ...] = ("npm",)
    # Menu items with this title render collapsed
    collapsed_title: str = "API"
    # Top-level segment holding packages ("components/<package>/...")
    package_root: str = "components"
    # Directory tag that turns its title into the `component` field
    component_tag: str = "component"


class TreeNode:
    """Base node: a path segment with ordered children.

    Subclasses override the derived properties where the root or a
    document leaf behave differently.
    """

    def __init__(self, segment: str, parent: TreeNode | None) -> None:
        self.segment = segment
        self.parent = parent
        self.children: list[TreeNode] = []
        self.tags: tuple[str, ...] = ()
        self._title: str | None = None
        self._position: int | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"

    @property
    def root(self) -> RootNode:
        return self.parent.root

    @property
    def is_root(self) -> bool:
        return False

    @property
    def is_document(self) -> bool:
        return False

    @property
    def level(self) -> int:
        """Distance from the root."""
        return self.parent.level + 1

    @property
    def path(self) -> str:
        return f"{self.parent.path}/{self.segment}"

    @property
    def title(self) -> str | None:
        return self._title if self._title is not None else self.segment

    @property
    def position(self) -> Any:
        return self._position if self._position is not None else DEFAULT_POSITION

    @property
    def url(self) -> URLPath | None:
        """URL of the first non-version child."""
        navigable = self.non_versioned
        if not navigable:
            return None
        return navigable[0].url

    @property
    def siblings(self) -> list[TreeNode]:
        return self.parent.children

    @property
    def index(self) -> int:
        """Position among siblings."""
        return self.siblings.index(self)

    @property
    def directories(self) -> list[TreeNode]:
        return [child for child in self.children if not child.is_document]

    # Ordering

    def compare(self, other: TreeNode | None) -> int:
        """Compare by position, then title, then path.

        Returns a negative number when this node sorts first. A missing
        `other` always sorts after this node.

        Raises:
            OrderingError: If the nodes' fields cannot be compared
        """
        if other is None:
            return -1

        try:
            if self.position != other.position:
                return _cmp(self.position, other.position)
            if self.title != other.title:
                return _cmp(self.title, other.title)
            return _cmp(self.path, other.path)
        except TypeError as e:
            raise OrderingError(self.path, other.path) from e

    def __lt__(self, other: TreeNode) -> bool:
        return self.compare(other) < 0

    # Construction

    def segment_matches(self, segment: str) -> bool:
        return self.segment == segment

    def find_or_create_child(self, segment: str) -> TreeNode:
        """Return the directory child for a segment, creating it if needed."""
        for child in self.children:
            if child.segment_matches(segment):
                return child

        child = DirectoryNode(segment, self)
        self.children.append(child)
        return child

    def add_document(self, document: Document) -> DocumentNode:
        node = DocumentNode(document, self)
        self.children.append(node)
        return node

    def sort(self) -> None:
        """Sort children recursively, except inside unsorted sections."""
        if self.level == 1 and self.segment in self.root.settings.unsorted_sections:
            logger.debug(f"Keeping authored order of {self.path}")
            return

        self.children.sort()
        for directory in self.directories:
            directory.sort()

    def iter_documents(self) -> Iterator[DocumentNode]:
        """Yield document nodes depth-first in child order."""
        for child in self.children:
            yield from child.iter_documents()

    # Versioning

    @property
    def is_version_node(self) -> bool:
        return VERSION_PATTERN.search(self.segment) is not None

    @property
    def non_versioned(self) -> list[TreeNode]:
        return [child for child in self.children if not child.is_version_node]

    @property
    def is_in_version_tree(self) -> bool:
        return self.is_version_node or self.parent.is_in_version_tree

    # Prev / next

    def first_leaf(self) -> DocumentNode | None:
        """First document reachable without entering version subtrees."""
        if self.is_version_node:
            return None
        for child in self.non_versioned:
            leaf = child.first_leaf()
            if leaf is not None:
                return leaf
        return None

    def last_leaf(self) -> DocumentNode | None:
        """Last document reachable without entering version subtrees."""
        if self.is_version_node:
            return None
        for child in reversed(self.non_versioned):
            leaf = child.last_leaf()
            if leaf is not None:
                return leaf
        return None

    def prev(self) -> DocumentNode | None:
        """Document preceding this node in reading order."""
        if self.is_version_node:
            return None

        navigable = self.parent.non_versioned
        for sibling in reversed(navigable[: navigable.index(self)]):
            leaf = sibling.last_leaf()
            if leaf is not None:
                return leaf

        return self.parent.prev()

    def next(self) -> DocumentNode | None:
        """Document following this node in reading order.

        Top-level sections are separate threads: a level-1 node has no next.
        """
        if self.is_version_node or self.level == 1:
            return None

        navigable = self.parent.non_versioned
        for sibling in navigable[navigable.index(self) + 1 :]:
            leaf = sibling.first_leaf()
            if leaf is not None:
                return leaf

        return self.parent.next()

    # Breadcrumbs

    def breadcrumbs(self, trail: list[BreadcrumbItem] | None = None) -> list[BreadcrumbItem]:
        """Trail of (title, url) from the first level down to this node.

        A version node is presented under its parent's title, linking to the
        version directory, and continues from its grandparent, so the parent
        gets no crumb of its own.
        """
        trail = trail or []

        if self.is_version_node:
            parent = self.parent
            if parent.is_root:
                return trail
            crumb = BreadcrumbItem(title=parent.title or "", url=f"{self.path}/")
            return parent.parent.breadcrumbs([crumb, *trail])

        crumb = BreadcrumbItem(title=self.title or "", url=self.url or "")
        return self.parent.breadcrumbs([crumb, *trail])

    # Section menu

    def climb_menu(self, child: TreeNode, child_menu: list[MenuItem]) -> list[MenuItem]:
        """Wrap the menu built below `child` into this node's level and climb."""
        if child.is_version_node:
            menu = child_menu
        else:
            items = self.non_versioned
            if self.level == 1:
                # the first entry of a top-level section is its landing page
                items = items[1:]
            collapsed_title = self.root.settings.collapsed_title
            menu = [
                MenuItem.from_node(node, child_menu if node is child else [], collapsed_title)
                for node in items
            ]

        return self.parent.climb_menu(self, menu)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {"title": self.title, "path": self.path, "url": self.url}
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


class DirectoryNode(TreeNode):
    """Directory node annotated from the metadata provider."""

    def __init__(self, segment: str, parent: TreeNode) -> None:
        super().__init__(segment, parent)
        meta = self.root.metadata.lookup(self.path)
        if meta is not None:
            self._title = meta.title
            self._position = meta.position
            self.tags = meta.tags


class RootNode(TreeNode):
    """Root of one generation pass; the boundary of every traversal."""

    def __init__(
        self,
        metadata: MetadataProvider | None = None,
        settings: TreeSettings | None = None,
    ) -> None:
        super().__init__("", None)
        self.metadata: MetadataProvider = metadata or StaticMetadataProvider()
        self.settings = settings or TreeSettings()

    @property
    def root(self) -> RootNode:
        return self

    @property
    def is_root(self) -> bool:
        return True

    @property
    def level(self) -> int:
        return 0

    @property
    def path(self) -> str:
        return ""

    @property
    def is_version_node(self) -> bool:
        return False

    @property
    def is_in_version_tree(self) -> bool:
        return False

    def prev(self) -> DocumentNode | None:
        return None

    def next(self) -> DocumentNode | None:
        return None

    def breadcrumbs(self, trail: list[BreadcrumbItem] | None = None) -> list[BreadcrumbItem]:
        return trail or []

    def climb_menu(self, child: TreeNode, child_menu: list[MenuItem]) -> list[MenuItem]:
        return child_menu


class DocumentNode(TreeNode):
    """Leaf wrapping one document.

    Title, position, url and path come from the document itself. Creating
    the node stores it on the document as `data["node"]` and fills in the
    package/component/subsection fields.
    """

    def __init__(self, document: Document, parent: TreeNode) -> None:
        super().__init__(document.path.rsplit("/", 1)[-1], parent)
        self.document = document
        document.data["node"] = self
        self._add_package_info()

    def _add_package_info(self) -> None:
        settings = self.root.settings
        data = self.document.data
        package_root = re.escape(settings.package_root)

        data["is_index"] = re.match(rf"{package_root}/[^/]+/index\.md$", self.path) is not None

        match = re.match(rf"{package_root}/(.*?)/", self.path)
        if match and match.group(1) and not data.get("package"):
            data["package"] = match.group(1).capitalize()

        key = "component" if settings.component_tag in self.parent.tags else "subsection"
        if not data.get(key):
            data[key] = self.parent.title

    @property
    def is_document(self) -> bool:
        return True

    @property
    def is_version_node(self) -> bool:
        return False

    @property
    def path(self) -> str:
        return self.document.path

    @property
    def url(self) -> URLPath:
        return self.document.url

    @property
    def title(self) -> str | None:
        return self.document.title

    @property
    def position(self) -> Any:
        position = self.document.position
        return position if position is not None else DEFAULT_POSITION

    def segment_matches(self, segment: str) -> bool:
        return False

    def iter_documents(self) -> Iterator[DocumentNode]:
        yield self

    def first_leaf(self) -> DocumentNode:
        return self

    def last_leaf(self) -> DocumentNode:
        return self

    def section_menu(self) -> list[MenuItem]:
        """Menu of the section containing this document, expanded along its path."""
        return self.parent.climb_menu(self, [])

    def set_canonical_data(self, documents: DocumentSet) -> bool:
        """Point a versioned document at its unversioned twin, if one exists.

        Returns:
            True if the document was marked as needing a canonical link
        """
        if not self.parent.is_in_version_tree:
            return False

        canonical_url = VERSION_PATTERN.sub("", self.url, count=1).replace("//", "/")
        if not documents.has_url(canonical_url):
            return False

        self.document.data["needs_canonical"] = True
        self.document.data["canonical_url"] = canonical_url
        return True


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)
