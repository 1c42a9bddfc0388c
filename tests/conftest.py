"""Pytest fixtures for membership tests."""

import logging
import os

import pytest

from membership.config import Settings
from membership.core import Repository
from membership.store import GraphRelationshipStore, SqliteRelationshipStore


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep the developer's config file and MEMBERSHIP_* variables out of tests."""
    for key in list(os.environ.keys()):
        if key.startswith("MEMBERSHIP_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("MEMBERSHIP_CONFIG", str(tmp_path / "missing" / "config.toml"))

    package_logger = logging.getLogger("membership")
    level, handlers = package_logger.level, list(package_logger.handlers)
    yield
    package_logger.setLevel(level)
    package_logger.handlers[:] = handlers


@pytest.fixture
def settings():
    """Standard profile with 10-row pages."""
    return Settings(page_size=10)


@pytest.fixture
def sqlite_store(tmp_path):
    """SQLite store on a temporary file, schema initialized, open for the test."""
    with SqliteRelationshipStore(tmp_path / "membership.db", init=True) as store:
        yield store


@pytest.fixture
def graph_store():
    """In-memory rdflib store."""
    return GraphRelationshipStore()


@pytest.fixture(params=["sqlite", "rdf"])
def store(request, tmp_path):
    """Each test using this fixture runs against both backends."""
    if request.param == "sqlite":
        with SqliteRelationshipStore(tmp_path / "membership.db", init=True) as sqlite_store:
            yield sqlite_store
    else:
        yield GraphRelationshipStore()


@pytest.fixture
def repo(store, settings):
    """Repository over the parametrized store."""
    return Repository(store, settings)


@pytest.fixture
def populated_collection(repo):
    """Collection 'test:root' with 25 labelled members 'Item 01'..'Item 25'."""
    repo.entity.register("test:root", label="Root Collection", owner="admin")
    for n in range(1, 26):
        member = f"test:{n}"
        repo.entity.register(
            member,
            label=f"Item {n:02d}",
            owner="curator",
            last_modified="2025-01-02T03:04:05Z",
        )
        repo.membership.add_to_collection(member, "test:root")
    return "test:root"
