"""Tests for version overlays and canonical links."""

import pytest
from docnav.core.types import VERSION_PATTERN

from tests.factories import build, doc, node_at


class TestVersionPattern:
    """Tests for version segment detection."""

    @pytest.mark.parametrize(
        "segment",
        ["1.2.3", "v1.2.3", "V2.0.0", "0.0.1", "1.2.x", "1.0.0-beta.1", "2.1.0+build.5"],
    )
    def test__version_segments__match(self, segment: str) -> None:
        """Semantic versions, with or without "v", are versions."""
        assert VERSION_PATTERN.search(segment)

    @pytest.mark.parametrize("segment", ["guide", "1.2", "v1", "01.2.3", "components"])
    def test__other_segments__do_not_match(self, segment: str) -> None:
        """Ordinary names and partial versions are not versions."""
        assert VERSION_PATTERN.search(segment) is None


class TestVersionNodes:
    """Tests for version node behavior in the tree."""

    def test__is_version_node(self) -> None:
        """Only the version directory is a version node."""
        root, documents = build(doc("a/v1.2.3/page.md", "Page"))

        a = root.children[0]
        version = a.children[0]

        assert not a.is_version_node
        assert version.is_version_node
        assert not node_at(documents, "a/v1.2.3/page.md").is_version_node

    def test__non_versioned__excludes_versions(self) -> None:
        """Version children are filtered from non_versioned."""
        root, _ = build(
            doc("a/index.md", "Index"),
            doc("a/v1.2.3/page.md", "Page"),
            doc("a/v2.0.0/page.md", "Page"),
        )

        a = root.children[0]

        assert len(a.children) == 3
        assert [child.path for child in a.non_versioned] == ["a/index.md"]

    def test__is_in_version_tree__inherited(self) -> None:
        """Everything under a version node is in the version tree."""
        root, documents = build(doc("a/v1.2.3/deep/page.md", "Page"), doc("a/index.md", "Index"))

        assert node_at(documents, "a/v1.2.3/deep/page.md").is_in_version_tree
        assert not node_at(documents, "a/index.md").is_in_version_tree
        assert not root.children[0].is_in_version_tree

    def test__document_named_like_version__is_not_version_node(self) -> None:
        """Only directories act as version overlays."""
        _, documents = build(doc("changelog/1.2.3.md", "1.2.3"))

        node = node_at(documents, "changelog/1.2.3.md")

        assert not node.is_version_node
        assert not node.is_in_version_tree


class TestCanonical:
    """Tests for canonical link marking."""

    def test__versioned_page_with_twin__marked(self) -> None:
        """A versioned page points at its unversioned equivalent."""
        current = doc("a/page.md", "Page")
        old = doc("a/v1.2.3/page.md", "Page")
        build(doc("a/index.md", "Index"), current, old)

        assert old.data["needs_canonical"] is True
        assert old.data["canonical_url"] == current.url == "/a/page.html"

    def test__versioned_page_without_twin__not_marked(self) -> None:
        """Pages that only exist in a version keep their own URL."""
        old = doc("a/v1.2.3/removed.md", "Removed")
        build(doc("a/index.md", "Index"), old)

        assert "needs_canonical" not in old.data
        assert "canonical_url" not in old.data

    def test__unversioned_page__not_marked(self) -> None:
        """Pages outside version trees are never marked."""
        current = doc("a/page.md", "Page")
        build(current, doc("a/v1.2.3/page.md", "Page"))

        assert "needs_canonical" not in current.data

    def test__version_above_page__marked(self) -> None:
        """A version segment higher up the path is removed too."""
        current = doc("a/button/api.md", "API")
        deep_old = doc("a/v2.0.0/button/api.md", "API")
        build(current, deep_old)

        assert deep_old.data["canonical_url"] == "/a/button/api.html"

    def test__hidden_twin__still_counts(self) -> None:
        """The canonical target is looked up in the full document set."""
        hidden_current = doc("a/page.md", "Page", hidden=True)
        old = doc("a/v1.2.3/page.md", "Page")
        build(doc("a/index.md", "Index"), hidden_current, old)

        assert old.data["canonical_url"] == "/a/page.html"
