"""Entity registry operations.

Resolves entity ids to Entity handles carrying display metadata. This is
the only place an unresolvable id is an error; membership and listing
operations treat unknown ids as empty results.

IMPORT CONVENTION:
- Repository accesses these through repository.entity property
"""

import logging

from ..exceptions import NotFoundError
from ..host.time import now_iso
from ..store.base import RelationshipStore
from ..store.entity import Entity
from ..utils import pid

logger = logging.getLogger(__name__)


def entity_id_of(ref: "str | Entity") -> str:
    """Normalize a collection reference to a plain entity id.

    Args:
        ref: Entity handle, plain id, or info:fedora/ URI

    Returns:
        Plain entity id
    """
    if isinstance(ref, Entity):
        return ref.id
    return pid.strip_uri(ref) if ref else ref


class EntityOperations:
    """Entity registry operations over a relationship store."""

    def __init__(self, store: RelationshipStore):
        """Initialize entity operations.

        Args:
            store: Relationship store holding entity metadata
        """
        self._store = store

    def register(
        self,
        entity_id: str,
        label: str | None = None,
        owner: str | None = None,
        last_modified: str | None = None,
    ) -> Entity:
        """Record display metadata for an entity.

        Args:
            entity_id: Namespace-qualified id
            label: Optional label
            owner: Optional owner id
            last_modified: ISO 8601 timestamp, defaults to now

        Returns:
            The stored Entity

        Raises:
            InvalidArgumentError: If entity_id is malformed
        """
        entity = Entity(
            id=pid.validate(entity_id, "entity_id"),
            label=label,
            owner=owner,
            last_modified=last_modified or now_iso(),
        )
        self._store.put_entity(entity)
        logger.debug("Registered entity %s", entity.id)
        return entity

    def get_by_id(self, entity_id: str) -> Entity:
        """Get an entity by id.

        Raises:
            NotFoundError: If the store has no metadata for entity_id
        """
        entity = self._store.get_entity(pid.strip_uri(entity_id))
        if entity is None:
            raise NotFoundError(f"Entity not found: {entity_id}", details={"id": entity_id})
        return entity

    def find(self, entity_id: str) -> Entity | None:
        """Get an entity by id, or None if unknown."""
        return self._store.get_entity(pid.strip_uri(entity_id))

    def resolve(self, ref: "str | Entity") -> Entity:
        """Resolve a reference to an Entity handle.

        Handles pass through unchanged; ids are looked up.

        Raises:
            NotFoundError: If ref is an id that does not resolve
        """
        if isinstance(ref, Entity):
            return ref
        return self.get_by_id(ref)

    def label_of(self, entity_id: str) -> str:
        """Label of an entity, or its id when unknown or unlabeled."""
        entity = self.find(entity_id)
        if entity is None or not entity.label:
            return entity_id
        return entity.label
