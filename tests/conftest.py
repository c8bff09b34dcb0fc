"""Shared test fixtures."""

from pathlib import Path

import pytest
from docnav.config import Config, DocsConfig, NavigationConfig, ServerConfig


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """Create a documentation source tree with metadata and a version overlay.

    Layout:
        guide/          User Guide (position 1): index, install, usage
        components/     Components (position 2): index, button/
        components/button/
                        Button (component): index, usage, v1.2.3/usage
        drafts/         only a hidden document
    """
    docs = tmp_path / "docs"

    guide = docs / "guide"
    guide.mkdir(parents=True)
    (guide / "_meta.yml").write_text("title: User Guide\nposition: 1\n")
    (guide / "index.md").write_text("---\ntitle: Guide\nposition: 1\n---\n\nWelcome.")
    (guide / "install.md").write_text("---\ntitle: Install\nposition: 2\n---\n\nSteps.")
    (guide / "usage.md").write_text("---\nposition: 3\n---\n\n# Usage\n\nContent.")

    components = docs / "components"
    components.mkdir()
    (components / "_meta.yml").write_text("title: Components\nposition: 2\n")
    (components / "index.md").write_text("---\ntitle: Components\nposition: 1\n---\n")

    button = components / "button"
    button.mkdir()
    (button / "_meta.yml").write_text("title: Button\nposition: 2\ntags: component, stable\n")
    (button / "index.md").write_text("---\ntitle: Overview\nposition: 1\n---\n")
    (button / "usage.md").write_text("---\ntitle: Usage\nposition: 2\n---\n")

    version = button / "v1.2.3"
    version.mkdir()
    (version / "usage.md").write_text("---\ntitle: Usage\nposition: 2\n---\n")

    drafts = docs / "drafts"
    drafts.mkdir()
    (drafts / "secret.md").write_text("---\ntitle: Secret\nhidden: true\n---\n")

    return docs


@pytest.fixture
def test_config(docs_dir: Path) -> Config:
    """Create a test configuration pointing at the sample docs."""
    return Config(
        server=ServerConfig(),
        docs=DocsConfig(source_dir=docs_dir, base_url="/docs"),
        navigation=NavigationConfig(),
    )
