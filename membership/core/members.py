"""Paginated collection member listings.

Pages are one-based. Page N is the contiguous slice
[(N - 1) * page_size, N * page_size) of the member list ordered by
label then id; total is the full member count on every page.

Display placeholders are applied here so nothing downstream ever sees an
empty label, owner or date. No sanitization is applied.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from ..config import Settings
from ..exceptions import InvalidArgumentError
from ..store.base import CONTEXT_VIEW, RelationshipStore
from ..store.entity import Entity
from .entity import entity_id_of

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"
UNOWNED = "Unowned"
UNKNOWN_DATE = "Unknown"

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of an ordered result set plus the total match count."""
    page: int  # One-based
    page_size: int
    total: int
    items: list[T] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        """Number of pages needed for total at page_size (0 when empty)."""
        return math.ceil(self.total / self.page_size) if self.total else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


@dataclass(frozen=True)
class MemberRow:
    """Member of a collection with display defaults applied."""
    object_id: str
    label: str = UNTITLED
    owner: str = UNOWNED
    last_modified: str = UNKNOWN_DATE

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "MemberRow":
        """Build from a store row (object, title, owner, date_modified).

        Missing keys, None and empty strings all become placeholders.
        """
        return cls(
            object_id=row["object"],
            label=row.get("title") or UNTITLED,
            owner=row.get("owner") or UNOWNED,
            last_modified=row.get("date_modified") or UNKNOWN_DATE,
        )

    @property
    def display_label(self) -> str:
        """Label with the object id appended, e.g. 'Untitled (islandora:5)'."""
        return f"{self.label} ({self.object_id})"


class MemberQueryOperations:
    """Paginated member queries over a relationship store."""

    def __init__(self, store: RelationshipStore, settings: Settings):
        """Initialize member query operations.

        Args:
            store: Relationship store to query
            settings: Settings providing page_size and max_page_size
        """
        self._store = store
        self._settings = settings

    def _page_size(self, page: int, page_size: int | None) -> int:
        """Validate paging arguments and return the effective page size.

        Raises:
            InvalidArgumentError: If page < 1 or page_size < 1
        """
        if page < 1:
            raise InvalidArgumentError(f"Page must be >= 1, got {page}", details={"page": page})
        if page_size is None:
            return self._settings.page_size
        if page_size < 1:
            raise InvalidArgumentError(
                f"Page size must be >= 1, got {page_size}",
                details={"page_size": page_size},
            )
        return min(page_size, self._settings.max_page_size)

    def list_members(
        self,
        collection: "str | Entity",
        page: int = 1,
        page_size: int | None = None,
        context: str = CONTEXT_VIEW,
    ) -> Page[MemberRow]:
        """List one page of a collection's members.

        Args:
            collection: Collection id or handle
            page: One-based page number
            page_size: Rows per page, defaults to settings.page_size and is
                capped at settings.max_page_size
            context: 'view' or 'manage'; manage also fetches owner and date

        Returns:
            Page of MemberRow. An unknown or empty collection gives an
            empty page with total 0.
        """
        size = self._page_size(page, page_size)
        collection_id = entity_id_of(collection)
        if not collection_id:
            return Page(page=page, page_size=size, total=0)

        total, rows = self._store.query_members(collection_id, page - 1, size, context)
        logger.debug(
            "Listed %d of %d member(s) of %s (page %d, context %s)",
            len(rows), total, collection_id, page, context,
        )
        return Page(
            page=page,
            page_size=size,
            total=total,
            items=[MemberRow.from_row(row) for row in rows],
        )

    def list_member_ids(
        self,
        collection: "str | Entity",
        page: int = 1,
        limit: int | None = None,
    ) -> Page[str]:
        """List one page of a collection's member ids, without display metadata."""
        members = self.list_members(collection, page, limit)
        return Page(
            page=members.page,
            page_size=members.page_size,
            total=members.total,
            items=[row.object_id for row in members.items],
        )

    def iter_members(self, collection: "str | Entity", context: str = CONTEXT_VIEW):
        """Yield every member of a collection, page by page."""
        page = 1
        while True:
            members = self.list_members(collection, page, self._settings.max_page_size, context)
            yield from members.items
            if not members.has_next:
                return
            page += 1
