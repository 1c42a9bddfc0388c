"""Collection membership operations.

MEMBERSHIP PREDICATES:
- isMemberOfCollection and isMemberOf both mean "member of"
- Reads union both predicates
- Writes only create isMemberOfCollection edges
- Removal strips both predicates

CONSISTENCY:
add_to_collection is check-then-act against the store. Concurrent
writers can race; exactly-once needs store-side uniqueness (the SQLite
backend has it) or externally serialized writes.

Store failures propagate as StoreError. Nothing here retries.
"""

import logging

from ..store.base import RelationshipStore
from ..store.edge import Predicate
from ..store.entity import Entity
from ..utils import pid
from .entity import entity_id_of

logger = logging.getLogger(__name__)


class MembershipOperations:
    """Membership edge operations between members and collections."""

    def __init__(self, store: RelationshipStore):
        """Initialize membership operations.

        Args:
            store: Relationship store holding membership edges
        """
        self._store = store

    def list_parent_ids(self, subject: str) -> set[str]:
        """List the collections a subject is a member of.

        Args:
            subject: Entity id of the member

        Returns:
            Set of collection ids across both membership predicates.
            Empty ids are dropped. Unknown subjects yield an empty set.
        """
        subject = entity_id_of(subject)
        if not subject:
            return set()

        parents = set()
        for predicate in Predicate.membership():
            for edge in self._store.get_edges(subject, predicate):
                if edge.object:
                    parents.add(edge.object)

        logger.debug("%s has %d parent(s)", subject, len(parents))
        return parents

    def list_other_parent_ids(self, subject: str, excluded: "str | Entity") -> set[str]:
        """List a subject's collections other than one.

        Args:
            subject: Entity id of the member
            excluded: Collection to leave out (id or handle)

        Returns:
            list_parent_ids(subject) without excluded
        """
        parents = self.list_parent_ids(subject)
        parents.discard(entity_id_of(excluded))
        return parents

    def is_member(self, member: str, collection: "str | Entity") -> bool:
        """Check whether member belongs to collection under either predicate."""
        member = entity_id_of(member)
        collection_id = entity_id_of(collection)
        if not member or not collection_id:
            return False
        return any(
            self._store.has_edge(member, predicate, collection_id)
            for predicate in Predicate.membership()
        )

    def add_to_collection(self, member: str, collection: "str | Entity") -> bool:
        """Make member a member of collection.

        Idempotent: an existing isMemberOfCollection edge is left alone.

        Args:
            member: Entity id of the member
            collection: Collection id or handle

        Returns:
            True if an edge was written, False if it already existed

        Raises:
            InvalidArgumentError: If either id is malformed
        """
        member = pid.validate(entity_id_of(member), "member")
        collection_id = pid.validate(entity_id_of(collection), "collection")

        added = self._store.add_edge(member, Predicate.MEMBER_OF_COLLECTION, collection_id)
        if added:
            logger.info("Added %s to collection %s", member, collection_id)
        else:
            logger.debug("%s already in collection %s", member, collection_id)
        return added

    def remove_from_collection(self, member: str, collection: "str | Entity") -> int:
        """Remove member from collection under both membership predicates.

        Removing a non-member is a no-op.

        Args:
            member: Entity id of the member
            collection: Collection id or handle

        Returns:
            Number of edges removed (0, 1 or 2)

        Raises:
            InvalidArgumentError: If either id is malformed
        """
        member = pid.validate(entity_id_of(member), "member")
        collection_id = pid.validate(entity_id_of(collection), "collection")

        removed = 0
        for predicate in Predicate.membership():
            if self._store.remove_edge(member, predicate, collection_id):
                removed += 1

        if removed:
            logger.info("Removed %s from collection %s (%d edge(s))", member, collection_id, removed)
        return removed

    def migrate(self, member: str, source: "str | Entity", target: "str | Entity") -> None:
        """Move member from source collection to target collection.

        The target edge is written before the source edges are removed.

        Raises:
            InvalidArgumentError: If any id is malformed
        """
        source_id = entity_id_of(source)
        target_id = entity_id_of(target)
        self.add_to_collection(member, target_id)
        if source_id != target_id:
            self.remove_from_collection(member, source_id)
