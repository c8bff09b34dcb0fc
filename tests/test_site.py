"""Tests for the site generation pass."""

from docnav.config import Config
from docnav.core.site import SiteLoader


def _load(test_config: Config):
    return SiteLoader(test_config).load()


class TestSiteLoader:
    """Tests for SiteLoader.load()."""

    def test__tree_shape__sorted_with_metadata(self, test_config: Config) -> None:
        """Directories take titles and positions from _meta.yml."""
        site = _load(test_config)

        assert [child.title for child in site.root.children] == ["User Guide", "Components"]
        guide, components = site.root.children
        assert [child.title for child in guide.children] == ["Guide", "Install", "Usage"]
        assert [child.title for child in components.children] == ["Components", "Button"]
        button = components.children[1]
        assert button.tags == ("component", "stable")
        assert [child.segment for child in button.children] == ["index.md", "usage.md", "v1.2.3"]

    def test__urls(self, test_config: Config) -> None:
        site = _load(test_config)

        assert [node.url for node in site.root.iter_documents()] == [
            "/guide/",
            "/guide/install.html",
            "/guide/usage.html",
            "/components/",
            "/components/button/",
            "/components/button/usage.html",
            "/components/button/v1.2.3/usage.html",
        ]

    def test__hidden_document__not_in_tree(self, test_config: Config) -> None:
        """Hidden documents are loaded but get no node or directory."""
        site = _load(test_config)

        secret = site.get_document("/drafts/secret.html")
        assert secret is not None
        assert secret.node is None
        assert "drafts" not in [child.segment for child in site.root.children]

    def test__versioned_page__canonical(self, test_config: Config) -> None:
        site = _load(test_config)

        old = site.get_document("/components/button/v1.2.3/usage.html")

        assert old.data["needs_canonical"] is True
        assert old.data["canonical_url"] == "/components/button/usage.html"

    def test__package_info(self, test_config: Config) -> None:
        """Pages under the package root get package and component fields."""
        site = _load(test_config)

        overview = site.get_document("/components/button/")
        landing = site.get_document("/components/")
        install = site.get_document("/guide/install.html")

        assert overview.data["is_index"] is True
        assert overview.data["package"] == "Button"
        assert overview.data["component"] == "Button"
        assert landing.data["is_index"] is False
        assert "package" not in landing.data
        assert landing.data["subsection"] == "Components"
        assert install.data["subsection"] == "User Guide"

    def test__prev_next_across_sections(self, test_config: Config) -> None:
        """The last page of a section has no next; the next section links back."""
        site = _load(test_config)

        usage = site.get_document("/guide/usage.html").node
        landing = site.get_document("/components/").node

        assert usage.next() is None
        assert landing.prev() is usage
        assert landing.next().url == "/components/button/"

    def test__missing_source_dir__empty_site(self, test_config: Config, tmp_path) -> None:
        site = SiteLoader(test_config.with_overrides(source_dir=tmp_path / "missing")).load()

        assert len(site.documents) == 0
        assert site.root.children == []


class TestSite:
    """Tests for Site lookups and page navigation."""

    def test__get_document__leading_slash_optional(self, test_config: Config) -> None:
        site = _load(test_config)

        assert site.get_document("guide/install.html") is site.get_document("/guide/install.html")
        assert site.get_document("/nope.html") is None

    def test__page_navigation(self, test_config: Config) -> None:
        """Page navigation collects crumbs, menu, neighbors and html."""
        site = _load(test_config)
        usage = site.get_document("/components/button/usage.html")

        navigation = site.page_navigation(usage)

        assert navigation["breadcrumbs"] == [
            {"title": "Components", "url": "/components/"},
            {"title": "Button", "url": "/components/button/"},
            {"title": "Usage", "url": "/components/button/usage.html"},
        ]
        assert navigation["prev"] == {"title": "Overview", "url": "/components/button/"}
        assert navigation["next"] is None
        assert navigation["canonical_url"] is None
        assert [item["title"] for item in navigation["menu"]] == ["Button"]
        assert [item["title"] for item in navigation["menu"][0]["children"]] == ["Overview", "Usage"]
        assert navigation["html"]["breadcrumb"].startswith("<a href='/docs/components/'>Components</a>")
        assert "<a class=\"active\" href='/docs/components/button/usage.html'>" in navigation["html"]["menu"]

    def test__page_navigation__version_page(self, test_config: Config) -> None:
        """A version page is presented under its component's title."""
        site = _load(test_config)
        old = site.get_document("/components/button/v1.2.3/usage.html")

        navigation = site.page_navigation(old)

        assert navigation["breadcrumbs"] == [
            {"title": "Components", "url": "/components/"},
            {"title": "Button", "url": "/components/button/v1.2.3/"},
            {"title": "Usage", "url": "/components/button/v1.2.3/usage.html"},
        ]
        assert navigation["prev"] is None
        assert navigation["next"] is None
        assert navigation["canonical_url"] == "/components/button/usage.html"
        assert [item["title"] for item in navigation["menu"][0]["children"]] == ["Usage"]

    def test__render_with_wrappers(self, test_config: Config) -> None:
        """The wrappers build moves links into the alternate namespace."""
        config = test_config.with_overrides(wrappers_build=True)
        site = SiteLoader(config).load()
        usage = site.get_document("/components/button/usage.html")

        assert "href='/docs/wrappers/button/usage.html'" in site.render_breadcrumb(usage)
        assert "href='/docs/wrappers/button/usage.html'" in site.render_section_menu(usage)

    def test__numeric_title__renders(self, test_config: Config) -> None:
        """A year used as a front matter title is rendered as text."""
        changelog = test_config.docs.source_dir / "changelog"
        changelog.mkdir()
        (changelog / "y2024.md").write_text("---\ntitle: 2024\nposition: 1\n---\n")
        (changelog / "y2023.md").write_text("---\ntitle: 2023\nposition: 2\n---\n")
        site = _load(test_config)
        page = site.get_document("/changelog/y2024.html")

        assert site.render_breadcrumb(page).endswith("<a href='/docs/changelog/y2024.html'>2024</a>")
        assert "> 2023</a>" in site.render_section_menu(page)
        assert site.page_navigation(page)["next"] == {"title": "2023", "url": "/changelog/y2023.html"}
