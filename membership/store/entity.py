"""Entity dataclass for the relationship store."""

from dataclasses import dataclass


@dataclass
class Entity:
    """Resolved repository object handle.

    Only the id is required; display metadata may be missing and is
    rendered with placeholders by the listing operations.
    """
    id: str  # Namespace-qualified, e.g. 'islandora:root'
    label: str | None = None
    owner: str | None = None
    last_modified: str | None = None  # ISO 8601
