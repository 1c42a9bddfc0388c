"""
Collection Membership Service

Membership edges, paginated member listings and form option data for
collection objects in a digital repository.
"""

__version__ = "0.1.0"

# Core exports
from membership.core import Repository, create_store, get_repository
from membership.core.entity import EntityOperations, entity_id_of
from membership.core.forms import FormOptions
from membership.core.members import MemberQueryOperations, MemberRow, Page
from membership.core.membership import MembershipOperations

# Store exports
from membership.store import (
    Edge,
    Entity,
    GraphRelationshipStore,
    Predicate,
    RelationshipStore,
    SqliteRelationshipStore,
    get_sqlite_store,
)

# Config exports
from membership.config import Settings

# Exception exports
from membership import exceptions

__all__ = [
    # Core
    "Repository",
    "create_store",
    "get_repository",
    "EntityOperations",
    "entity_id_of",
    "FormOptions",
    "MemberQueryOperations",
    "MemberRow",
    "Page",
    "MembershipOperations",
    # Store
    "Edge",
    "Entity",
    "GraphRelationshipStore",
    "Predicate",
    "RelationshipStore",
    "SqliteRelationshipStore",
    "get_sqlite_store",
    # Config
    "Settings",
    # Exceptions module (access as membership.exceptions.StoreError, etc.)
    "exceptions",
]
