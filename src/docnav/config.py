"""Configuration management for Docnav.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, TypeVar

from docnav.core.rendering import UrlRewrite
from docnav.core.tree import TreeSettings

CONFIG_FILENAME = "docnav.toml"

T = TypeVar("T")


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class DocsConfig:
    """Documentation configuration."""

    source_dir: Path = field(default_factory=lambda: Path("docs"))
    base_url: str = ""


@dataclass
class NavigationConfig:
    """Navigation tree conventions."""

    unsorted_sections: list[str] = field(default_factory=lambda: ["npm"])
    collapsed_title: str = "API"
    package_root: str = "components"
    component_tag: str = "component"
    wrappers_build: bool = False
    wrappers_source: str = "components"
    wrappers_target: str = "wrappers"
    path_rewrites: dict[str, str] = field(default_factory=dict)
    meta: dict[str, dict[str, object]] = field(default_factory=dict)

    def tree_settings(self) -> TreeSettings:
        return TreeSettings(
            unsorted_sections=tuple(self.unsorted_sections),
            collapsed_title=self.collapsed_title,
            package_root=self.package_root,
            component_tag=self.component_tag,
        )

    def url_rewrite(self) -> UrlRewrite:
        return UrlRewrite(source=self.wrappers_source, target=self.wrappers_target)


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    docs: DocsConfig
    navigation: NavigationConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for docnav.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> Config:
        return cls(
            server=ServerConfig(),
            docs=DocsConfig(),
            navigation=NavigationConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            docs=cls._parse_docs(data.get("docs"), config_dir),
            navigation=cls._parse_navigation(data.get("navigation")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        section = _section(data, "server")
        defaults = ServerConfig()
        return ServerConfig(
            host=_value(section, "server", "host", defaults.host, str),
            port=_value(section, "server", "port", defaults.port, int),
        )

    @classmethod
    def _parse_docs(cls, data: object, config_dir: Path) -> DocsConfig:
        """Parse docs configuration section.

        Args:
            data: Raw docs section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            DocsConfig instance
        """
        section = _section(data, "docs")
        source_dir = _value(section, "docs", "source_dir", "docs", str)
        base_url = _value(section, "docs", "base_url", "", str)
        return DocsConfig(source_dir=config_dir / source_dir, base_url=base_url)

    @classmethod
    def _parse_navigation(cls, data: object) -> NavigationConfig:
        """Parse navigation configuration section.

        Args:
            data: Raw navigation section data

        Returns:
            NavigationConfig instance
        """
        if data is None:
            return NavigationConfig()

        section = _section(data, "navigation")
        defaults = NavigationConfig()

        unsorted_sections = section.get("unsorted_sections", defaults.unsorted_sections)
        if not isinstance(unsorted_sections, list) or not all(
            isinstance(item, str) for item in unsorted_sections
        ):
            raise ValueError("navigation.unsorted_sections must be a list of strings")

        strings = {
            key: _value(section, "navigation", key, getattr(defaults, key), str)
            for key in (
                "collapsed_title",
                "package_root",
                "component_tag",
                "wrappers_source",
                "wrappers_target",
            )
        }

        path_rewrites = section.get("path_rewrites", {})
        if not isinstance(path_rewrites, dict) or not all(
            isinstance(value, str) for value in path_rewrites.values()
        ):
            raise ValueError("navigation.path_rewrites must map strings to strings")

        meta = section.get("meta", {})
        if not isinstance(meta, dict) or not all(isinstance(value, dict) for value in meta.values()):
            raise ValueError("navigation.meta must be a table of tables")

        return NavigationConfig(
            unsorted_sections=unsorted_sections,
            wrappers_build=_value(section, "navigation", "wrappers_build", False, bool),
            path_rewrites=path_rewrites,
            meta=meta,
            **strings,
        )

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        source_dir: Path | None = None,
        base_url: str | None = None,
        wrappers_build: bool | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            source_dir: Override docs.source_dir
            base_url: Override docs.base_url
            wrappers_build: Override navigation.wrappers_build

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        docs = self.docs
        if source_dir is not None or base_url is not None:
            docs = replace(
                self.docs,
                source_dir=source_dir if source_dir is not None else self.docs.source_dir,
                base_url=base_url if base_url is not None else self.docs.base_url,
            )

        navigation = self.navigation
        if wrappers_build is not None:
            navigation = replace(self.navigation, wrappers_build=wrappers_build)

        return replace(self, server=server, docs=docs, navigation=navigation)


_TYPE_NAMES = {str: "a string", int: "an integer", bool: "a boolean"}


def _section(data: object, name: str) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{name} section must be a dictionary")
    return data


def _value(section: dict[str, Any], name: str, key: str, default: T, expected: type[T]) -> T:
    """Get a typed value from a section, rejecting booleans where numbers are expected."""
    value = section.get(key, default)
    if not isinstance(value, expected) or (expected is not bool and isinstance(value, bool)):
        raise ValueError(f"{name}.{key} must be {_TYPE_NAMES[expected]}")
    return value
