"""SQLite relationship store."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any

from ..exceptions import StoreError
from ..host.time import now_iso
from ..schemas import get_sql_schema
from .base import CONTEXT_MANAGE, CONTEXT_VIEW, RelationshipStore
from .edge import Edge, Predicate
from .entity import Entity
from .query import build_in_clause, build_page_clause, build_where_clause

logger = logging.getLogger(__name__)

MEMBERSHIP_VALUES = [p.value for p in Predicate.membership()]


class SqliteRelationshipStore(RelationshipStore):
    """Relationship store backed by a SQLite database.

    CONNECTION LIFECYCLE:
    - Store MUST be used as context manager (enforced at runtime)
    - __enter__: Marks store as active, creates connection, returns self
    - __exit__: Commits on success, rollbacks on exception, always closes
    - Each edge mutation commits on its own; there is no batching
    - sqlite3 errors surface as StoreError with the original chained
    """

    backend = "sqlite"

    def __init__(self, db_path: str | Path = "membership.db", init: bool = False):
        """Initialize the store.

        Args:
            db_path: Path to SQLite database file, or ':memory:'
            init: If True, create the schema on enter when it is missing
        """
        self.db_path = db_path if db_path == ":memory:" else Path(db_path)
        self._init = init
        self._conn: sqlite3.Connection | None = None
        self._in_context = False

    def _get_connection(self) -> sqlite3.Connection:
        """Get connection, enforcing context manager usage.

        Raises:
            RuntimeError: If the store is not being used as context manager
            StoreError: If the database cannot be opened
        """
        if not self._in_context:
            raise RuntimeError(
                "SqliteRelationshipStore must be used as context manager. "
                "Use: with get_sqlite_store(path) as store: ..."
            )
        if self._conn is None:
            try:
                if isinstance(self.db_path, Path):
                    self.db_path.parent.mkdir(parents=True, exist_ok=True)
                self._conn = sqlite3.connect(str(self.db_path))
                self._conn.row_factory = sqlite3.Row
                self._conn.execute("PRAGMA journal_mode = WAL")
            except sqlite3.Error as e:
                raise StoreError(
                    f"Cannot open store at {self.db_path}: {e}",
                    backend=self.backend,
                    operation="connect",
                ) from e
        return self._conn

    def _execute(self, operation: str, sql: str, params: list | tuple = ()) -> sqlite3.Cursor:
        """Run a statement, translating sqlite3 errors into StoreError."""
        try:
            return self._get_connection().execute(sql, params)
        except sqlite3.IntegrityError:
            raise
        except sqlite3.Error as e:
            raise StoreError(
                f"Store {operation} failed: {e}",
                backend=self.backend,
                operation=operation,
            ) from e

    def close(self):
        """Close database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> SqliteRelationshipStore:
        """Enter context manager.

        Returns:
            self for use in with-statement
        """
        self._in_context = True
        self._get_connection()
        if self._init and self.get_schema_version() is None:
            self.init_schema()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back pending writes."""
        self._in_context = False
        try:
            if self._conn is not None:
                if exc_type is None:
                    self._conn.commit()
                else:
                    self._conn.rollback()
        finally:
            self.close()

    # ==========================================================================
    # INITIALIZATION
    # ==========================================================================

    def init_schema(self):
        """Initialize database schema from the bundled store.sql."""
        conn = self._get_connection()
        try:
            conn.executescript(get_sql_schema("store"))
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(
                f"Schema initialization failed: {e}",
                backend=self.backend,
                operation="init_schema",
            ) from e

    def get_schema_version(self) -> str | None:
        """Get current schema version, or None if the schema is missing."""
        table = self._execute(
            "get_schema_version",
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'",
        ).fetchone()
        if table is None:
            return None
        row = self._execute(
            "get_schema_version",
            "SELECT value FROM _schema_metadata WHERE key = 'version'",
        ).fetchone()
        return row[0] if row else None

    # ==========================================================================
    # EDGE OPERATIONS
    # ==========================================================================

    def get_edges(
        self,
        subject: str,
        predicate: Predicate,
        object: str | None = None,
    ) -> list[Edge]:
        where_clause, params = build_where_clause({
            "subject": subject,
            "predicate": Predicate(predicate).value,
            "object": object,
        })
        rows = self._execute(
            "get_edges",
            f"SELECT subject, predicate, object FROM edge WHERE {where_clause} "
            "ORDER BY created_at, rowid",
            params,
        ).fetchall()
        return [
            Edge(subject=row["subject"], predicate=Predicate(row["predicate"]), object=row["object"])
            for row in rows
        ]

    def insert_edge(self, subject: str, predicate: Predicate, object: str) -> bool:
        try:
            self._execute(
                "insert_edge",
                """INSERT INTO edge (subject, predicate, object, created_at)
                   VALUES (?, ?, ?, ?)""",
                (subject, Predicate(predicate).value, object, now_iso()),
            )
        except sqlite3.IntegrityError:
            # Concurrent writer got there first (UNIQUE on the triple)
            logger.debug(
                "Edge already present: %s %s %s",
                subject, Predicate(predicate).local_name, object,
            )
            return False
        self._commit("insert_edge")
        return True

    def remove_edge(self, subject: str, predicate: Predicate, object: str) -> bool:
        cursor = self._execute(
            "remove_edge",
            "DELETE FROM edge WHERE subject = ? AND predicate = ? AND object = ?",
            (subject, Predicate(predicate).value, object),
        )
        self._commit("remove_edge")
        return cursor.rowcount > 0

    def _commit(self, operation: str):
        try:
            self._get_connection().commit()
        except sqlite3.Error as e:
            raise StoreError(
                f"Store {operation} commit failed: {e}",
                backend=self.backend,
                operation=operation,
            ) from e

    # ==========================================================================
    # MEMBER LISTING
    # ==========================================================================

    def query_members(
        self,
        collection_id: str,
        page: int,
        limit: int,
        context: str = CONTEXT_VIEW,
    ) -> tuple[int, list[dict[str, Any]]]:
        predicate_clause = build_in_clause("predicate", MEMBERSHIP_VALUES)
        where_clause, params = build_where_clause(
            {"object": collection_id, "predicate": MEMBERSHIP_VALUES},
            {"predicate": predicate_clause},
        )

        count = self._execute(
            "query_members",
            f"SELECT COUNT(DISTINCT subject) FROM edge WHERE {where_clause}",
            params,
        ).fetchone()[0]

        page_clause, page_params = build_page_clause(page, limit)
        rows = self._execute(
            "query_members",
            f"""SELECT m.subject AS object, e.label AS title, e.owner AS owner,
                       e.last_modified AS date_modified
                FROM (SELECT DISTINCT subject FROM edge WHERE {where_clause}) m
                LEFT JOIN entity e ON e.id = m.subject
                ORDER BY COALESCE(e.label, ''), m.subject
                {page_clause}""",
            params + page_params,
        ).fetchall()

        manage = context == CONTEXT_MANAGE
        results = []
        for row in rows:
            results.append({
                "object": row["object"],
                "title": row["title"],
                "owner": row["owner"] if manage else None,
                "date_modified": row["date_modified"] if manage else None,
            })
        return count, results

    # ==========================================================================
    # ENTITY METADATA
    # ==========================================================================

    def put_entity(self, entity: Entity) -> None:
        self._execute(
            "put_entity",
            """INSERT INTO entity (id, label, owner, last_modified)
               VALUES (?, ?, ?, ?)
               ON CONFLICT(id) DO UPDATE SET
                   label = excluded.label,
                   owner = excluded.owner,
                   last_modified = excluded.last_modified""",
            (entity.id, entity.label, entity.owner, entity.last_modified),
        )
        self._commit("put_entity")

    def get_entity(self, entity_id: str) -> Entity | None:
        row = self._execute(
            "get_entity",
            "SELECT id, label, owner, last_modified FROM entity WHERE id = ?",
            (entity_id,),
        ).fetchone()
        if row is None:
            return None
        return Entity(
            id=row["id"],
            label=row["label"],
            owner=row["owner"],
            last_modified=row["last_modified"],
        )


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def get_sqlite_store(db_path: str | Path = "membership.db", init: bool = False) -> SqliteRelationshipStore:
    """Get a SQLite relationship store.

    Args:
        db_path: Path to SQLite database file, or ':memory:'
        init: If True, initialize schema on first use inside the context

    Returns:
        SqliteRelationshipStore instance (use as context manager)
    """
    return SqliteRelationshipStore(db_path, init=init)
