"""Tree construction for one generation pass."""

import logging

from docnav.core.documents import Document, DocumentSet
from docnav.core.metadata import MetadataProvider
from docnav.core.tree import RootNode, TreeSettings

logger = logging.getLogger(__name__)


def build_tree(
    documents: DocumentSet,
    metadata: MetadataProvider | None = None,
    settings: TreeSettings | None = None,
) -> RootNode:
    """Build and sort the navigation tree for a document set.

    Every visible document is stored on its directory node, and gets a
    `node` back-reference in its metadata. Hidden documents are skipped
    and create no directories.

    Args:
        documents: All documents of the generation pass
        metadata: Provider of per-directory metadata (none by default)
        settings: Site conventions (defaults apply when omitted)

    Returns:
        Sorted RootNode

    Raises:
        OrderingError: If two siblings cannot be ordered
        ValueError: If a document has an empty path
    """
    root = RootNode(metadata, settings)

    for document in documents:
        if document.hidden:
            logger.debug(f"Skipping hidden document {document.path}")
            continue
        _insert(root, document)

    root.sort()

    canonical_count = sum(node.set_canonical_data(documents) for node in root.iter_documents())
    logger.info(
        f"Built navigation tree with {len(documents)} documents "
        f"({canonical_count} with canonical links)"
    )
    return root


def _insert(root: RootNode, document: Document) -> None:
    segments = document.path.strip("/").split("/")
    if not all(segments):
        raise ValueError(f"Document path has empty segments: {document.path!r}")

    tree = root
    for segment in segments[:-1]:
        tree = tree.find_or_create_child(segment)
    tree.add_document(document)
