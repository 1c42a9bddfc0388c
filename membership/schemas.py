"""Schema access utilities for the membership package.

Provides runtime access to the bundled SQL schema for the SQLite
relationship store.

USAGE:
    >>> from membership.schemas import get_sql_schema
    >>> store_sql = get_sql_schema('store')
"""

from __future__ import annotations

from importlib.resources import files as resource_files
from pathlib import Path

VALID_SCHEMAS = {"store"}


def get_sql_schema(name: str = "store") -> str:
    """Get SQL schema content.

    Args:
        name: Schema name ('store')

    Returns:
        SQL schema content as string

    Raises:
        ValueError: If name is not a known schema
        FileNotFoundError: If schema file not found in bundled or file locations
    """
    if name not in VALID_SCHEMAS:
        raise ValueError(
            f"Invalid schema: {name!r}. Must be one of: {sorted(VALID_SCHEMAS)}"
        )

    # Bundled package first
    schema_file = resource_files("membership") / "schemas" / "sql" / f"{name}.sql"
    if schema_file.is_file():
        return schema_file.read_text(encoding="utf-8")

    # Development checkout
    file_path = Path(__file__).parent / "schemas" / "sql" / f"{name}.sql"
    if file_path.exists():
        return file_path.read_text(encoding="utf-8")

    raise FileNotFoundError(
        f"SQL schema file not found for {name!r}. Searched: {file_path}"
    )
