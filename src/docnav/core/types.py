"""Core type definitions."""

import re
from typing import NewType

# URL path of a rendered document (e.g., "/guide/", "/domain/page.html")
URLPath = NewType("URLPath", str)

# Semantic-version-like segment, optionally prefixed with "v" (e.g., "v1.2.3", "2.0.x")
VERSION_PATTERN = re.compile(
    r"\bv?(?:0|[1-9][0-9]*)\.(?:0|[1-9][0-9]*)\.(?:X|0|[1-9][0-9]*)"
    r"(?:-[\da-z\-]+(?:\.[\da-z\-]+)*)?"
    r"(?:\+[\da-z\-]+(?:\.[\da-z\-]+)*)?\b",
    re.IGNORECASE,
)

# Position given to nodes without explicit ordering metadata
DEFAULT_POSITION = 10000
