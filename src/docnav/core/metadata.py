"""Per-directory navigation metadata.

Directories are annotated with an optional title, position and tags. The
tree only consumes `MetadataProvider.lookup()`; where the metadata comes
from is up to the provider.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Protocol

import yaml

logger = logging.getLogger(__name__)

META_FILENAME = "_meta.yml"


class MetadataError(ValueError):
    """Raised when a metadata resource is malformed."""


@dataclass(frozen=True)
class SegmentMeta:
    """Navigation metadata for one directory."""

    title: str | None = None
    position: int | None = None
    tags: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, data: object, source: str) -> SegmentMeta:
        """Build metadata from a raw mapping.

        Args:
            data: Raw mapping (YAML document or TOML table)
            source: Where the mapping came from, used in error messages

        Returns:
            SegmentMeta instance

        Raises:
            MetadataError: If the mapping or one of its fields has the wrong type
        """
        if data is None:
            return cls()

        if not isinstance(data, Mapping):
            raise MetadataError(f"{source}: metadata must be a mapping")

        title = data.get("title")
        if title is not None and not isinstance(title, str):
            raise MetadataError(f"{source}: title must be a string")

        position = data.get("position")
        if position is not None and (isinstance(position, bool) or not isinstance(position, int)):
            raise MetadataError(f"{source}: position must be an integer")

        return cls(title=title, position=position, tags=parse_tags(data.get("tags"), source))


def parse_tags(raw: object, source: str = "tags") -> tuple[str, ...]:
    """Split a comma-separated tag string into unique trimmed tokens.

    A list of strings is accepted as well. Order of first appearance is kept.
    """
    if raw is None:
        return ()

    if isinstance(raw, str):
        items = raw.split(",")
    elif isinstance(raw, list) and all(isinstance(item, str) for item in raw):
        items = raw
    else:
        raise MetadataError(f"{source}: tags must be a comma-separated string")

    return tuple(dict.fromkeys(tag.strip() for tag in items if tag.strip()))


class MetadataProvider(Protocol):
    """Source of per-directory navigation metadata."""

    def lookup(self, path: str) -> SegmentMeta | None:
        """Return metadata for a directory path (e.g., "/a/b"), if any."""
        ...


class StaticMetadataProvider:
    """Metadata held in memory, keyed by directory path."""

    def __init__(self, entries: Mapping[str, SegmentMeta] | None = None) -> None:
        self._entries = {_normalize(path): meta for path, meta in (entries or {}).items()}

    def lookup(self, path: str) -> SegmentMeta | None:
        return self._entries.get(_normalize(path))


class FileMetadataProvider:
    """Reads `_meta.yml` files with a configuration fallback.

    The metadata file of a directory wins. Without one, the directory path
    is rewritten with the configured prefix rewrites and matched against the
    fallback table: an exact key first, then wildcard patterns in order.
    """

    def __init__(
        self,
        source_dir: Path,
        fallback: Mapping[str, Mapping[str, object]] | None = None,
        path_rewrites: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize provider.

        Args:
            source_dir: Root directory of the documentation sources
            fallback: Metadata tables keyed by path or wildcard pattern
            path_rewrites: Prefix replacements applied before fallback matching
        """
        self._source_dir = source_dir
        self._fallback = dict(fallback or {})
        self._path_rewrites = dict(path_rewrites or {})

    def lookup(self, path: str) -> SegmentMeta | None:
        relative = _normalize(path)

        meta_file = self._source_dir / relative / META_FILENAME
        if meta_file.is_file():
            return self._read_meta_file(meta_file)

        return self._lookup_fallback(self._rewrite(relative))

    def _read_meta_file(self, meta_file: Path) -> SegmentMeta:
        logger.debug(f"Reading navigation metadata from {meta_file}")
        try:
            data = yaml.safe_load(meta_file.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise MetadataError(f"{meta_file}: invalid YAML: {e}") from e
        return SegmentMeta.from_mapping(data, str(meta_file))

    def _rewrite(self, relative: str) -> str:
        for prefix, replacement in self._path_rewrites.items():
            if relative.startswith(prefix):
                return replacement + relative[len(prefix) :]
        return relative

    def _lookup_fallback(self, key: str) -> SegmentMeta | None:
        if key in self._fallback:
            return SegmentMeta.from_mapping(self._fallback[key], f"navigation.meta.{key}")

        for pattern, data in self._fallback.items():
            if fnmatchcase(key, pattern):
                return SegmentMeta.from_mapping(data, f"navigation.meta.{pattern}")

        return None


def _normalize(path: str) -> str:
    """Strip surrounding slashes from a directory path."""
    return path.strip("/")
