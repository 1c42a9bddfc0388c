"""Query builders for the SQLite relationship store.

Helpers for clause patterns repeated across store queries. Not an ORM.
"""

from typing import Any


def build_where_clause(
    conditions: dict[str, Any],
    param_map: dict[str, str] | None = None
) -> tuple[str, list[Any]]:
    """Build dynamic WHERE clause from condition dictionary.

    Args:
        conditions: Dictionary of condition names to values.
                    Values that are None are excluded from the clause.
        param_map: Optional mapping from condition names to SQL fragments.
                   If a condition name is in param_map, use its SQL fragment.
                   Otherwise, default to "{key} = ?" format.

    Returns:
        Tuple of (where_clause, params) where:
        - where_clause: SQL WHERE clause (without "WHERE" keyword)
        - params: List of parameter values for placeholders

    Examples:
        >>> build_where_clause({"subject": "islandora:1", "object": None})
        ('subject = ?', ['islandora:1'])

        >>> build_where_clause({"predicate": ["a", "b"]}, {"predicate": "predicate IN (?, ?)"})
        ('predicate IN (?, ?)', ['a', 'b'])

        >>> build_where_clause({"object": None})
        ('1=1', [])
    """
    where_parts = []
    params = []

    for key, value in conditions.items():
        if value is None:
            continue

        if param_map and key in param_map:
            where_parts.append(param_map[key])
        else:
            where_parts.append(f"{key} = ?")

        if isinstance(value, (list, tuple)):
            params.extend(value)
        else:
            params.append(value)

    where_clause = " AND ".join(where_parts) if where_parts else "1=1"
    return where_clause, params


def build_in_clause(column: str, values: list[Any] | tuple[Any, ...]) -> str:
    """Build "column IN (?, ?, ...)" for a list of values.

    Examples:
        >>> build_in_clause("predicate", ["a", "b"])
        'predicate IN (?, ?)'
    """
    placeholders = ", ".join("?" for _ in values)
    return f"{column} IN ({placeholders})"


def build_page_clause(page: int, limit: int) -> tuple[str, list[int]]:
    """Build LIMIT/OFFSET clause for a zero-based page.

    Examples:
        >>> build_page_clause(2, 10)
        ('LIMIT ? OFFSET ?', [10, 20])
    """
    return "LIMIT ? OFFSET ?", [limit, page * limit]
