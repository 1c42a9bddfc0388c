"""Edge dataclass and membership predicates for the relationship store."""

from dataclasses import dataclass
from enum import Enum

RELS_EXT = "info:fedora/fedora-system:def/relations-external#"


class Predicate(str, Enum):
    """Membership predicates.

    Both values mean "subject is a member of the object collection".
    Reads consider every member of this enum; writes only ever use
    MEMBER_OF_COLLECTION.
    """

    MEMBER_OF_COLLECTION = f"{RELS_EXT}isMemberOfCollection"
    MEMBER_OF = f"{RELS_EXT}isMemberOf"

    @classmethod
    def membership(cls) -> tuple["Predicate", ...]:
        """All predicates that assert membership, write predicate first."""
        return (cls.MEMBER_OF_COLLECTION, cls.MEMBER_OF)

    @property
    def local_name(self) -> str:
        """Short name, e.g. 'isMemberOfCollection'."""
        return self.value.rsplit("#", 1)[-1]


@dataclass(frozen=True)
class Edge:
    """Directed, labeled relationship between two entity ids."""
    subject: str  # Plain entity id, e.g. 'islandora:1'
    predicate: Predicate
    object: str  # Plain entity id of the collection
