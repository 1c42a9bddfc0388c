"""Relationship stores for collection membership.

A store owns directed (subject, predicate, object) edges between entity
ids and the display metadata used by member listings.

BACKENDS:
- SqliteRelationshipStore: local SQLite file, must be used as context manager
- GraphRelationshipStore: rdflib Graph (in-memory, Turtle file or SPARQL endpoint)
"""

from .base import CONTEXT_MANAGE, CONTEXT_VIEW, ROW_KEYS, RelationshipStore
from .database import SqliteRelationshipStore, get_sqlite_store
from .edge import Edge, Predicate
from .entity import Entity
from .graph import GraphRelationshipStore

__all__ = [
    "CONTEXT_MANAGE",
    "CONTEXT_VIEW",
    "ROW_KEYS",
    "RelationshipStore",
    "SqliteRelationshipStore",
    "GraphRelationshipStore",
    "get_sqlite_store",
    "Edge",
    "Predicate",
    "Entity",
]
