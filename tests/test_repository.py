"""Tests for the Repository facade, schema access and logging setup."""

import logging

import pytest

from membership.config import Settings
from membership.core import Repository, create_store, get_repository
from membership.host.logs import configure_logging
from membership.schemas import get_sql_schema
from membership.store import GraphRelationshipStore, SqliteRelationshipStore


class TestGetRepository:
    """Tests for get_repository and create_store."""

    def test_sqlite_backend(self, tmp_path):
        settings = Settings(store_path=tmp_path / "membership.db")

        with get_repository(settings) as repo:
            assert isinstance(repo.store, SqliteRelationshipStore)
            repo.membership.add_to_collection("test:1", "test:root")

        with get_repository(settings) as repo:
            assert repo.membership.list_parent_ids("test:1") == {"test:root"}

    def test_rdf_backend(self, tmp_path):
        settings = Settings(store_backend="rdf", store_path=tmp_path / "membership.ttl")

        with get_repository(settings) as repo:
            assert isinstance(repo.store, GraphRelationshipStore)
            repo.membership.add_to_collection("test:1", "test:root")

        assert (tmp_path / "membership.ttl").exists()
        with get_repository(settings) as repo:
            assert repo.membership.is_member("test:1", "test:root")

    def test_store_path_from_data_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MEMBERSHIP_DATA_DIR", str(tmp_path))

        store = create_store(Settings())

        assert store.db_path == tmp_path / "membership.db"

    def test_applies_log_level(self, tmp_path, monkeypatch):
        """MEMBERSHIP_LOG_LEVEL reaches the package logger."""
        monkeypatch.setenv("MEMBERSHIP_LOG_LEVEL", "debug")
        monkeypatch.setenv("MEMBERSHIP_DB", str(tmp_path / "membership.db"))

        get_repository()

        assert logging.getLogger("membership").level == logging.DEBUG

    def test_operations_are_cached(self, graph_store, settings):
        repo = Repository(graph_store, settings)

        assert repo.membership is repo.membership
        assert repo.members is repo.members
        assert repo.forms is repo.forms


class TestSqlSchema:
    """Tests for get_sql_schema."""

    def test_store_schema(self):
        schema = get_sql_schema("store")

        assert "CREATE TABLE IF NOT EXISTS edge" in schema
        assert "UNIQUE (subject, predicate, object)" in schema

    def test_invalid_schema(self):
        with pytest.raises(ValueError, match="Invalid schema"):
            get_sql_schema("core")


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_level(self):
        logger = configure_logging("debug")

        assert logger.name == "membership"
        assert logger.level == logging.DEBUG

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("chatty")

    def test_mutations_logged(self, repo, caplog):
        with caplog.at_level(logging.INFO, logger="membership"):
            repo.membership.add_to_collection("test:1", "test:root")

        assert "Added test:1 to collection test:root" in caplog.text
