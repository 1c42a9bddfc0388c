"""Repository facade for collection membership.

Repository wraps one relationship store and exposes the operations
through lazily created properties:

    with get_repository(settings) as repo:
        repo.membership.add_to_collection("islandora:5", "islandora:root")
        page = repo.members.list_members("islandora:root", page=1)
        options = repo.forms.member_options("islandora:root")

Settings are passed in explicitly; operations never read ambient
configuration.
"""

import logging
from typing import TYPE_CHECKING

from ..config import Settings
from ..host.environment import get_db_path
from ..host.logs import configure_logging
from ..store.base import RelationshipStore
from ..store.database import SqliteRelationshipStore
from ..store.graph import GraphRelationshipStore

if TYPE_CHECKING:
    from .entity import EntityOperations
    from .forms import FormOptions
    from .members import MemberQueryOperations
    from .membership import MembershipOperations

logger = logging.getLogger(__name__)


class Repository:
    """Relationship store plus membership, listing and form operations.

    Use as a context manager; entering and exiting delegate to the store
    (the SQLite store opens and commits its connection there).
    """

    def __init__(self, store: RelationshipStore, settings: Settings):
        """Initialize the repository.

        Args:
            store: Relationship store backend
            settings: Settings for listings and namespace options
        """
        self.store = store
        self.settings = settings
        self._entity_ops = None
        self._membership_ops = None
        self._member_ops = None
        self._forms = None

    @property
    def entity(self) -> "EntityOperations":
        """Entity registry operations."""
        if self._entity_ops is None:
            from .entity import EntityOperations
            self._entity_ops = EntityOperations(self.store)
        return self._entity_ops

    @property
    def membership(self) -> "MembershipOperations":
        """Membership edge operations."""
        if self._membership_ops is None:
            from .membership import MembershipOperations
            self._membership_ops = MembershipOperations(self.store)
        return self._membership_ops

    @property
    def members(self) -> "MemberQueryOperations":
        """Paginated member listings."""
        if self._member_ops is None:
            from .members import MemberQueryOperations
            self._member_ops = MemberQueryOperations(self.store, self.settings)
        return self._member_ops

    @property
    def forms(self) -> "FormOptions":
        """Form option builders.

        Shares the entity, membership and member operations of this
        repository.
        """
        if self._forms is None:
            from .forms import FormOptions
            self._forms = FormOptions(self.membership, self.members, self.entity, self.settings)
        return self._forms

    def __enter__(self) -> "Repository":
        self.store.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return self.store.__exit__(exc_type, exc_val, exc_tb)


def create_store(settings: Settings) -> RelationshipStore:
    """Create the store backend named by settings.store_backend.

    The path is settings.store_path, or resolved via get_db_path().
    """
    path = settings.store_path or get_db_path(settings.store_backend)
    logger.debug("Using %s store at %s", settings.store_backend, path)
    if settings.store_backend == "rdf":
        return GraphRelationshipStore(path=path)
    return SqliteRelationshipStore(path, init=True)


def get_repository(settings: Settings | None = None) -> Repository:
    """Get a Repository over the configured store.

    Args:
        settings: Settings to use; loaded from the default config if None.
            Their log_level is applied to the package logger.

    Returns:
        Repository (use as context manager)
    """
    settings = settings or Settings()
    configure_logging(settings.log_level)
    return Repository(create_store(settings), settings)
