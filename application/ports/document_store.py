"""
Document Store Interface (Port).

The engine persists everything as nested documents addressed by a
slash-separated path (``users/u1``) and updated through dotted field
paths (``course_progress.c1``). This module defines the narrow contract
plus the pure helpers adapters share to apply field updates.

Field path segments are escaped with ``escape_segment`` so that ids
containing ``.`` never split a path.
"""
import copy
from typing import Any, Dict, List, Optional, Protocol
from urllib.parse import quote, unquote

FIELD_SEPARATOR = "."


def escape_segment(segment: str) -> str:
    """Escape one field path segment."""
    return quote(str(segment), safe="").replace(".", "%2E")


def unescape_segment(segment: str) -> str:
    return unquote(segment)


def field_path(*segments: str) -> str:
    """Join escaped segments into a dotted field path."""
    return FIELD_SEPARATOR.join(escape_segment(s) for s in segments)


def split_field_path(path: str) -> List[str]:
    return [unescape_segment(part) for part in path.split(FIELD_SEPARATOR)]


def get_field(document: Optional[Dict[str, Any]], path: str, default: Any = None) -> Any:
    """Read a dotted field path from a document."""
    current: Any = document
    for key in split_field_path(path):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


def apply_field_updates(
    document: Optional[Dict[str, Any]],
    updates: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Apply dotted-path updates to a document.

    Intermediate maps are created as needed; non-map intermediates are
    replaced. The input document is not mutated.

    Args:
        document: Existing document, or None
        updates: Field path -> new value

    Returns:
        The updated document
    """
    result = copy.deepcopy(document) if document else {}
    for path, value in updates.items():
        keys = split_field_path(path)
        target = result
        for key in keys[:-1]:
            child = target.get(key)
            if not isinstance(child, dict):
                child = {}
                target[key] = child
            target = child
        target[keys[-1]] = copy.deepcopy(value)
    return result


def remove_field(document: Optional[Dict[str, Any]], path: str) -> Dict[str, Any]:
    """Return a copy of ``document`` without the field at ``path``."""
    result = copy.deepcopy(document) if document else {}
    keys = split_field_path(path)
    target: Any = result
    for key in keys[:-1]:
        target = target.get(key) if isinstance(target, dict) else None
        if target is None:
            return result
    if isinstance(target, dict):
        target.pop(keys[-1], None)
    return result


class DocumentStore(Protocol):
    """
    Abstract interface for document persistence.

    Implementations must be safe to call from the event loop; blocking
    clients should be pushed to a worker thread.
    """

    async def get_document(self, path: str) -> Optional[Dict[str, Any]]:
        """
        Get a document by path.

        Args:
            path: Document path, e.g. "users/u1"

        Returns:
            Document data, or None if it does not exist
        """
        ...

    async def update_document(self, path: str, updates: Dict[str, Any]) -> None:
        """
        Merge field updates into a document, creating it when missing.

        Args:
            path: Document path
            updates: Dotted field path -> value
        """
        ...

    async def delete_field(self, path: str, field: str) -> None:
        """Remove one (dotted) field from a document. Missing fields are ignored."""
        ...

    async def append_to_subcollection(self, path: str, record: Dict[str, Any]) -> str:
        """
        Append a record to a subcollection.

        Args:
            path: Subcollection path, e.g. "users/u1/session_history"
            record: Record data

        Returns:
            The generated record id
        """
        ...

    async def list_subcollection(
        self,
        path: str,
        *,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        List subcollection records in insertion order.

        Args:
            path: Subcollection path
            limit: Keep only the most recent ``limit`` records

        Returns:
            Records, oldest first
        """
        ...
