"""Form option data for collection management widgets.

Builds plain dicts for namespace pickers, member select tables and
parent collection lists. Rendering and sanitization belong to the
calling application.
"""

from ..config import Settings
from ..store.base import CONTEXT_MANAGE
from ..store.entity import Entity
from ..utils import pid
from .entity import EntityOperations
from .members import MemberQueryOperations, Page
from .membership import MembershipOperations


class FormOptions:
    """Option builders for collection management forms."""

    def __init__(
        self,
        membership: MembershipOperations,
        members: MemberQueryOperations,
        entities: EntityOperations,
        settings: Settings,
    ):
        self._membership = membership
        self._members = members
        self._entities = entities
        self._settings = settings

    def namespace_options(self, default_namespace: str) -> dict[str, str]:
        """Namespaces a new child object may be created in.

        With namespace restriction enforced, the configured allowed
        namespaces; otherwise only the default namespace.

        Args:
            default_namespace: Namespace or entity id to default to
                ('islandora', 'islandora:' or 'islandora:root')

        Returns:
            Ordered {namespace: namespace} mapping
        """
        if self._settings.namespace_restriction_enforced and self._settings.allowed_namespaces:
            return {ns: ns for ns in self._settings.allowed_namespaces}
        namespace = pid.namespace_of(default_namespace).rstrip(":")
        return {namespace: namespace} if namespace else {}

    def member_table(
        self,
        collection: "str | Entity",
        page: int = 1,
        page_size: int | None = None,
        context: str = CONTEXT_MANAGE,
    ) -> Page[dict]:
        """One page of select-table rows for a collection's members.

        Returns:
            Page whose items are {"id", "label", "owner", "date_modified"}
            dicts; labels carry the object id, e.g. 'Untitled (ns:1)'.
            An empty collection gives a page with no items.
        """
        members = self._members.list_members(collection, page, page_size, context)
        return Page(
            page=members.page,
            page_size=members.page_size,
            total=members.total,
            items=[
                {
                    "id": row.object_id,
                    "label": row.display_label,
                    "owner": row.owner,
                    "date_modified": row.last_modified,
                }
                for row in members.items
            ],
        )

    def member_options(self, collection: "str | Entity") -> dict[str, str]:
        """{member_id: display_label} for every member of a collection."""
        return {
            row.object_id: row.display_label
            for row in self._members.iter_members(collection)
        }

    def parent_options(self, subject: str) -> dict[str, str]:
        """{collection_id: label} for every collection subject belongs to, sorted by id."""
        return self._labelled(self._membership.list_parent_ids(subject))

    def other_parent_options(self, subject: str, excluded: "str | Entity") -> dict[str, str]:
        """Like parent_options, without the excluded collection."""
        return self._labelled(self._membership.list_other_parent_ids(subject, excluded))

    def _labelled(self, ids: set[str]) -> dict[str, str]:
        return {entity_id: self._entities.label_of(entity_id) for entity_id in sorted(ids)}
