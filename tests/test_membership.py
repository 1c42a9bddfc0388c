"""Tests for collection membership operations.

Runs against both the SQLite and rdflib stores through the `repo` fixture.
"""

import pytest

from membership.core import Repository
from membership.exceptions import InvalidArgumentError, StoreError
from membership.store import Entity, Predicate


class TestListParentIds:
    """Tests for list_parent_ids and list_other_parent_ids."""

    def test_no_parents(self, repo):
        """Subject with no membership edges has no parents."""
        assert repo.membership.list_parent_ids("test:orphan") == set()

    def test_unions_both_predicates(self, repo):
        """Parents from isMemberOfCollection and isMemberOf are combined."""
        repo.store.add_edge("test:1", Predicate.MEMBER_OF_COLLECTION, "test:a")
        repo.store.add_edge("test:1", Predicate.MEMBER_OF, "test:b")

        assert repo.membership.list_parent_ids("test:1") == {"test:a", "test:b"}

    def test_deduplicates_across_predicates(self, repo):
        """Same parent under both predicates appears once."""
        repo.store.add_edge("test:1", Predicate.MEMBER_OF_COLLECTION, "test:a")
        repo.store.add_edge("test:1", Predicate.MEMBER_OF, "test:a")

        assert repo.membership.list_parent_ids("test:1") == {"test:a"}

    def test_drops_empty_ids(self, repo):
        """Edges pointing at an empty id are ignored."""
        repo.store.insert_edge("test:1", Predicate.MEMBER_OF, "")
        repo.store.add_edge("test:1", Predicate.MEMBER_OF, "test:a")

        assert repo.membership.list_parent_ids("test:1") == {"test:a"}

    def test_empty_subject_has_no_parents(self, repo):
        assert repo.membership.list_parent_ids("") == set()

    def test_other_parents_excludes_one(self, repo):
        """Other parents are all parents minus the excluded one."""
        for parent in ("test:a", "test:b", "test:c"):
            repo.membership.add_to_collection("test:1", parent)

        others = repo.membership.list_other_parent_ids("test:1", "test:b")

        assert others == repo.membership.list_parent_ids("test:1") - {"test:b"}
        assert others == {"test:a", "test:c"}

    def test_other_parents_accepts_handle(self, repo):
        """Excluded parent may be passed as a resolved Entity."""
        repo.membership.add_to_collection("test:1", "test:a")
        repo.membership.add_to_collection("test:1", "test:b")

        others = repo.membership.list_other_parent_ids("test:1", Entity(id="test:a"))

        assert others == {"test:b"}

    def test_other_parents_when_excluded_is_not_a_parent(self, repo):
        repo.membership.add_to_collection("test:1", "test:a")

        assert repo.membership.list_other_parent_ids("test:1", "test:z") == {"test:a"}


class TestAddToCollection:
    """Tests for add_to_collection."""

    def test_add_creates_member_of_collection_edge(self, repo):
        """Writes always use isMemberOfCollection."""
        assert repo.membership.add_to_collection("test:1", "test:root") is True

        edges = repo.store.get_edges("test:1", Predicate.MEMBER_OF_COLLECTION, "test:root")
        assert len(edges) == 1
        assert repo.store.get_edges("test:1", Predicate.MEMBER_OF) == []

    def test_add_twice_yields_one_edge(self, repo):
        """Adding twice is idempotent."""
        repo.membership.add_to_collection("test:1", "test:root")
        assert repo.membership.add_to_collection("test:1", "test:root") is False

        edges = repo.store.get_edges("test:1", Predicate.MEMBER_OF_COLLECTION, "test:root")
        assert len(edges) == 1

    def test_multi_parenting(self, repo):
        """A subject may belong to several collections."""
        repo.membership.add_to_collection("test:1", "test:a")
        repo.membership.add_to_collection("test:1", "test:b")

        assert repo.membership.list_parent_ids("test:1") == {"test:a", "test:b"}

    def test_accepts_uri_form(self, repo):
        """info:fedora/ URIs are normalized to plain ids."""
        repo.membership.add_to_collection("info:fedora/test:1", "info:fedora/test:root")

        assert repo.membership.list_parent_ids("test:1") == {"test:root"}

    @pytest.mark.parametrize("member,collection", [
        ("", "test:root"),
        ("test:1", ""),
        ("no-namespace", "test:root"),
        ("test:1", "bad id:with space"),
    ])
    def test_invalid_ids_rejected(self, repo, member, collection):
        with pytest.raises(InvalidArgumentError):
            repo.membership.add_to_collection(member, collection)


class TestRemoveFromCollection:
    """Tests for remove_from_collection."""

    def test_remove_after_add_leaves_no_edges(self, repo):
        repo.membership.add_to_collection("test:1", "test:root")

        removed = repo.membership.remove_from_collection("test:1", "test:root")

        assert removed == 1
        for predicate in Predicate.membership():
            assert repo.store.get_edges("test:1", predicate, "test:root") == []

    def test_remove_strips_both_predicates(self, repo):
        repo.store.add_edge("test:1", Predicate.MEMBER_OF_COLLECTION, "test:root")
        repo.store.add_edge("test:1", Predicate.MEMBER_OF, "test:root")

        assert repo.membership.remove_from_collection("test:1", "test:root") == 2
        assert repo.membership.is_member("test:1", "test:root") is False

    def test_remove_keeps_other_collections(self, repo):
        repo.membership.add_to_collection("test:1", "test:a")
        repo.membership.add_to_collection("test:1", "test:b")

        repo.membership.remove_from_collection("test:1", "test:a")

        assert repo.membership.list_parent_ids("test:1") == {"test:b"}

    def test_remove_never_added_is_noop(self, repo):
        """Removing a non-member does not raise."""
        assert repo.membership.remove_from_collection("test:1", "test:root") == 0

    def test_remove_with_entity_handle(self, repo):
        """Collection may be given as a resolved handle."""
        repo.membership.add_to_collection("test:1", "test:root")
        collection = Entity(id="test:root", label="Root")

        assert repo.membership.remove_from_collection("test:1", collection) == 1
        assert repo.membership.list_parent_ids("test:1") == set()

    def test_remove_invalid_member(self, repo):
        with pytest.raises(InvalidArgumentError, match="Empty member"):
            repo.membership.remove_from_collection("", "test:root")


class TestMembershipQueries:
    """Tests for is_member and migrate."""

    def test_is_member_either_predicate(self, repo):
        repo.store.add_edge("test:1", Predicate.MEMBER_OF, "test:root")

        assert repo.membership.is_member("test:1", "test:root") is True
        assert repo.membership.is_member("test:2", "test:root") is False

    def test_migrate_moves_member(self, repo):
        repo.membership.add_to_collection("test:1", "test:a")

        repo.membership.migrate("test:1", "test:a", "test:b")

        assert repo.membership.list_parent_ids("test:1") == {"test:b"}

    def test_migrate_to_same_collection_keeps_membership(self, repo):
        repo.membership.add_to_collection("test:1", "test:a")

        repo.membership.migrate("test:1", "test:a", "test:a")

        assert repo.membership.list_parent_ids("test:1") == {"test:a"}


class TestStoreFailures:
    """Store failures surface as StoreError without retries."""

    def test_store_error_propagates(self, sqlite_store, settings):
        repo = Repository(sqlite_store, settings)
        sqlite_store._get_connection().execute("DROP TABLE edge")

        with pytest.raises(StoreError) as exc_info:
            repo.membership.list_parent_ids("test:1")

        assert exc_info.value.backend == "sqlite"
        assert exc_info.value.operation == "get_edges"
        assert exc_info.value.__cause__ is not None
