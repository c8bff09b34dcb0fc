"""Documents of one site generation pass.

A document is identified by its source-relative path, addressed by its
site URL, and carries a mutable metadata mapping that the tree writes
derived fields into (including the `node` back-reference).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from docnav.core.types import URLPath

if TYPE_CHECKING:
    from docnav.core.tree import DocumentNode

logger = logging.getLogger(__name__)

FRONT_MATTER_PATTERN = re.compile(r"\A---\s*\n(.*?)\n---\s*(?:\n|\Z)", re.DOTALL)

H1_PATTERN = re.compile(r"^#\s+(.+)$", re.MULTILINE)


@dataclass(eq=False)
class Document:
    """A single document with its metadata mapping."""

    path: str
    url: URLPath
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def title(self) -> str | None:
        return self.data.get("title")

    @property
    def position(self) -> int | None:
        return self.data.get("position")

    @property
    def hidden(self) -> bool:
        return bool(self.data.get("hidden"))

    @property
    def node(self) -> DocumentNode | None:
        """Navigation node attached by tree construction."""
        return self.data.get("node")

    def __repr__(self) -> str:
        return f"Document(path={self.path!r}, url={self.url!r})"


class DocumentSet:
    """Read-only collection of all documents of one generation pass."""

    __slots__ = ("_documents", "_url_index")

    def __init__(self, documents: Iterable[Document]) -> None:
        self._documents = tuple(documents)
        self._url_index = {document.url: document for document in self._documents}

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def find_by_url(self, url: str) -> Document | None:
        """Get document by its site URL."""
        return self._url_index.get(url)

    def has_url(self, url: str) -> bool:
        return url in self._url_index


class DocumentLoader:
    """Loads markdown documents from a source directory.

    Files and directories starting with "." or "_" are skipped. YAML front
    matter becomes the document metadata; the title falls back to the
    first H1 heading and then to the file name.
    """

    def __init__(self, source_dir: Path) -> None:
        self._source_dir = source_dir

    def load(self) -> DocumentSet:
        """Load all documents under the source directory.

        Returns:
            DocumentSet in path order, empty if the directory doesn't exist
        """
        if not self._source_dir.is_dir():
            return DocumentSet([])

        documents = [
            self._load_document(source_path)
            for source_path in sorted(self._source_dir.rglob("*.md"))
            if not self._is_skipped(source_path)
        ]
        logger.debug(f"Loaded {len(documents)} documents from {self._source_dir}")
        return DocumentSet(documents)

    def _is_skipped(self, source_path: Path) -> bool:
        relative = source_path.relative_to(self._source_dir)
        return any(part.startswith((".", "_")) for part in relative.parts)

    def _load_document(self, source_path: Path) -> Document:
        relative = source_path.relative_to(self._source_dir).as_posix()
        content = source_path.read_text(encoding="utf-8")
        data, body = self._split_front_matter(content, relative)

        title = data.get("title")
        if title is not None and not isinstance(title, str):
            # YAML reads "title: 2024" as an int and unquoted dates as dates
            data["title"] = str(title)

        if not data.get("title"):
            data["title"] = _extract_title(body) or _title_from_filename(source_path.stem)

        return Document(path=relative, url=document_url(relative), data=data)

    def _split_front_matter(self, content: str, relative: str) -> tuple[dict[str, Any], str]:
        match = FRONT_MATTER_PATTERN.match(content)
        if not match:
            return {}, content

        body = content[match.end() :]
        try:
            data = yaml.safe_load(match.group(1))
        except yaml.YAMLError as e:
            logger.warning(f"Failed to parse front matter from {relative}: {e}")
            return {}, body

        if not isinstance(data, dict):
            logger.warning(f"Front matter of {relative} is not a mapping, ignoring it")
            return {}, body

        return data, body


def document_url(path: str) -> URLPath:
    """Map a source-relative path to its site URL.

    "index.md" maps to the URL of its directory, other files to ".html".
    """
    stem = path.removesuffix(".md")
    if stem == "index":
        return URLPath("/")
    if stem.endswith("/index"):
        return URLPath(f"/{stem.removesuffix('index')}")
    return URLPath(f"/{stem}.html")


def _extract_title(body: str) -> str | None:
    match = H1_PATTERN.search(body)
    if match:
        return match.group(1).strip()
    return None


def _title_from_filename(stem: str) -> str:
    return stem.replace("-", " ").replace("_", " ").title()
