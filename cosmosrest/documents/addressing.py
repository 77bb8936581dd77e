"""
Resource addressing for the document REST API.

Maps database, collection and document identifiers to resource links of the
form ``dbs/{db}/colls/{coll}/docs[/{id}]``. Every identifier is
percent-encoded as a single path segment, so two distinct identifier tuples
never produce the same link.

Author: LocalZure Team
Date: 2025-12-18
"""

from typing import Tuple
from urllib.parse import quote, unquote


def _segment(identifier: str) -> str:
    # Dot-only segments would be removed from the URL path as dot segments
    if identifier in (".", ".."):
        return identifier.replace(".", "%2E")
    return quote(identifier, safe="")


def database_link(database: str) -> str:
    """Return the link of a database."""
    return f"dbs/{_segment(database)}"


def collection_link(database: str, collection: str) -> str:
    """Return the link of a collection inside a database."""
    return f"{database_link(database)}/colls/{_segment(collection)}"


def docs_link(database: str, collection: str) -> str:
    """Return the collection-level documents feed link.

    Used by create and query operations.
    """
    return f"{collection_link(database, collection)}/docs"


def doc_link(database: str, collection: str, document_id: str) -> str:
    """Return the link of a single document.

    Used by get, replace and delete operations.
    """
    return f"{docs_link(database, collection)}/{_segment(document_id)}"


def parse_resource_link(path: str) -> Tuple[str, str]:
    """
    Split a request path into the resource type and resource link.

    A feed path (odd number of segments, e.g. ``dbs/a/colls/b/docs``) is
    addressed through its parent link; an item path (even number of
    segments) is its own link. Segments are decoded, since the service signs
    requests against the raw identifiers.

    Args:
        path: Resource path as produced by the link helpers

    Returns:
        Tuple of (resource_type, resource_link)
    """
    parts = [unquote(p) for p in path.strip("/").split("/") if p]
    if not parts:
        return "", ""

    if len(parts) % 2 == 1:
        return parts[-1], "/".join(parts[:-1])

    return parts[-2], "/".join(parts)
