"""Site generation pass.

A Site couples the documents of one pass with the navigation tree built
from them, and renders the navigation fragments of individual pages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from docnav.core.builder import build_tree
from docnav.core.documents import Document, DocumentLoader, DocumentSet
from docnav.core.metadata import FileMetadataProvider
from docnav.core.rendering import (
    DEFAULT_REWRITE,
    UrlRewrite,
    render_breadcrumb,
    render_section_menu,
    require_node,
)
from docnav.core.tree import DocumentNode, RootNode

if TYPE_CHECKING:
    from docnav.config import Config


class Site:
    """Documents of one generation pass and their navigation tree."""

    __slots__ = ("_base_url", "_documents", "_rewrite", "_root", "_wrappers_build")

    def __init__(
        self,
        documents: DocumentSet,
        root: RootNode,
        *,
        base_url: str = "",
        wrappers_build: bool = False,
        rewrite: UrlRewrite = DEFAULT_REWRITE,
    ) -> None:
        self._documents = documents
        self._root = root
        self._base_url = base_url
        self._wrappers_build = wrappers_build
        self._rewrite = rewrite

    @property
    def documents(self) -> DocumentSet:
        return self._documents

    @property
    def root(self) -> RootNode:
        return self._root

    def get_document(self, url: str) -> Document | None:
        """Get document by URL, with or without the leading slash."""
        normalized = url if url.startswith("/") else f"/{url}"
        return self._documents.find_by_url(normalized)

    def page_navigation(self, document: Document) -> dict[str, Any]:
        """Collect all navigation data of a document for JSON responses.

        Raises:
            NavigationContextError: If the document is not part of the tree
        """
        node = require_node(document)
        return {
            "breadcrumbs": [crumb.to_dict() for crumb in node.breadcrumbs()],
            "menu": [item.to_dict() for item in node.section_menu()],
            "prev": _link(node.prev()),
            "next": _link(node.next()),
            "canonical_url": document.data.get("canonical_url"),
            "html": {
                "breadcrumb": self.render_breadcrumb(document),
                "menu": self.render_section_menu(document),
            },
        }

    def render_breadcrumb(self, document: Document) -> str:
        return render_breadcrumb(
            document,
            self._base_url,
            self._wrappers_build,
            rewrite=self._rewrite,
        )

    def render_section_menu(self, document: Document) -> str:
        return render_section_menu(
            document,
            self._base_url,
            document.url,
            self._wrappers_build,
            rewrite=self._rewrite,
        )


class SiteLoader:
    """Runs one generation pass from configuration."""

    def __init__(self, config: Config) -> None:
        self._config = config

    def load(self) -> Site:
        """Load documents and build the sorted navigation tree.

        Raises:
            OrderingError: If two siblings cannot be ordered
            MetadataError: If a metadata resource is malformed
        """
        docs = self._config.docs
        navigation = self._config.navigation

        documents = DocumentLoader(docs.source_dir).load()
        metadata = FileMetadataProvider(
            docs.source_dir,
            fallback=navigation.meta,
            path_rewrites=navigation.path_rewrites,
        )
        root = build_tree(documents, metadata, navigation.tree_settings())

        return Site(
            documents,
            root,
            base_url=docs.base_url,
            wrappers_build=navigation.wrappers_build,
            rewrite=navigation.url_rewrite(),
        )


def _link(node: DocumentNode | None) -> dict[str, str] | None:
    if node is None:
        return None
    return {"title": node.title or "", "url": node.url}
