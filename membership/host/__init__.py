"""Host interface for the membership package.

Provides abstractions for host platform operations (environment, time,
logging). Keeps ambient lookups out of the membership operations.
"""

from .environment import get_env, get_db_path
from .logs import configure_logging
from .time import now_utc, now_iso

__all__ = [
    "get_env",
    "get_db_path",
    "configure_logging",
    "now_utc",
    "now_iso",
]
