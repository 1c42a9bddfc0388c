"""Environment variable access and store path resolution.

Path Resolution Order:
1. Explicit store path (MEMBERSHIP_DB)
2. Shared data directory (MEMBERSHIP_DATA_DIR/membership.<ext>)
3. Current directory (./membership.<ext>)
"""

import os
from pathlib import Path

# File extension per store backend
BACKEND_EXTENSIONS = {
    "sqlite": "db",
    "rdf": "ttl",
}


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable.

    Args:
        key: Environment variable name
        default: Default value if not found

    Returns:
        Environment variable value or default
    """
    return os.environ.get(key, default)


def get_db_path(backend: str = "sqlite") -> Path:
    """Resolve the store file path for a backend.

    Args:
        backend: Store backend ('sqlite' or 'rdf')

    Returns:
        Path to the store file

    Raises:
        ValueError: If backend is not 'sqlite' or 'rdf'

    Examples:
        >>> os.environ['MEMBERSHIP_DB'] = '/custom/membership.db'
        >>> get_db_path()
        Path('/custom/membership.db')

        >>> os.environ['MEMBERSHIP_DATA_DIR'] = '/data'
        >>> get_db_path('rdf')
        Path('/data/membership.ttl')
    """
    if backend not in BACKEND_EXTENSIONS:
        raise ValueError(
            f"Invalid backend: {backend}. Must be one of: {sorted(BACKEND_EXTENSIONS)}"
        )

    explicit = get_env("MEMBERSHIP_DB")
    if explicit:
        return Path(explicit)

    filename = f"membership.{BACKEND_EXTENSIONS[backend]}"
    data_dir = get_env("MEMBERSHIP_DATA_DIR")
    if data_dir:
        return Path(data_dir) / filename

    return Path(f"./{filename}")
