"""RelationshipStore contract.

A relationship store owns a set of (subject, predicate, object) edges
between entity ids, plus optional display metadata per entity. Every
call is atomic at single-edge granularity; there is no batching.

Backends wrap their native failures in StoreError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .edge import Edge, Predicate
    from .entity import Entity

# Listing contexts. "manage" also requests owner and modification date.
CONTEXT_VIEW = "view"
CONTEXT_MANAGE = "manage"

# Keys of rows returned by query_members
ROW_KEYS = ("object", "title", "owner", "date_modified")


class RelationshipStore(ABC):
    """Abstract edge store used by the membership and query operations."""

    backend: str = "abstract"

    @abstractmethod
    def get_edges(
        self,
        subject: str,
        predicate: "Predicate",
        object: str | None = None,
    ) -> list["Edge"]:
        """Return edges matching subject and predicate, optionally one object."""

    @abstractmethod
    def insert_edge(self, subject: str, predicate: "Predicate", object: str) -> bool:
        """Insert an edge unconditionally. Returns False if the backend already had it."""

    @abstractmethod
    def remove_edge(self, subject: str, predicate: "Predicate", object: str) -> bool:
        """Remove an edge. Returns True if one was removed, False if absent."""

    @abstractmethod
    def query_members(
        self,
        collection_id: str,
        page: int,
        limit: int,
        context: str = CONTEXT_VIEW,
    ) -> tuple[int, list[dict[str, Any]]]:
        """List members of a collection under either membership predicate.

        Args:
            collection_id: Plain entity id of the collection
            page: Zero-based page offset in units of limit
            limit: Maximum rows to return
            context: CONTEXT_VIEW or CONTEXT_MANAGE

        Returns:
            Tuple of (total member count, rows) where rows are dicts with
            ROW_KEYS; absent values are None. Rows are ordered by title
            then object id.
        """

    @abstractmethod
    def put_entity(self, entity: "Entity") -> None:
        """Store display metadata (label, owner, last_modified) for an entity."""

    @abstractmethod
    def get_entity(self, entity_id: str) -> "Entity | None":
        """Return display metadata for an entity, or None if unknown."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return None

    def has_edge(self, subject: str, predicate: "Predicate", object: str) -> bool:
        """Check whether a specific edge exists."""
        return bool(self.get_edges(subject, predicate, object))

    def add_edge(self, subject: str, predicate: "Predicate", object: str) -> bool:
        """Add an edge unless it already exists.

        Returns:
            True if the edge was written, False if it was already present
        """
        if self.has_edge(subject, predicate, object):
            return False
        return self.insert_edge(subject, predicate, object)
