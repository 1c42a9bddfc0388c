"""Entity identifier (PID) helpers.

Entity ids are namespace-qualified: ``namespace:local``. The RDF store
keeps them as ``info:fedora/<id>`` URIs; these helpers convert between
the two forms and validate ids before they reach a store mutation.
"""

import re

from ..exceptions import InvalidArgumentError

URI_PREFIX = "info:fedora/"

# Namespace: letters, digits, '-' and '.'; local part may also use '~', '_'
# and percent-encoded octets.
PID_PATTERN = re.compile(
    r"^[A-Za-z0-9.\-]+:(?:[A-Za-z0-9.\-~_]|%[0-9A-F]{2})+$"
)


def is_valid(pid: str | None) -> bool:
    """Check whether a value is a well-formed entity id."""
    return isinstance(pid, str) and PID_PATTERN.match(pid) is not None


def validate(pid: str | None, name: str = "id") -> str:
    """Return the id unchanged, or raise if it is malformed.

    Args:
        pid: Candidate entity id (plain or info:fedora/ URI form)
        name: Argument name used in the error message

    Returns:
        The plain entity id

    Raises:
        InvalidArgumentError: If pid is empty or not namespace-qualified
    """
    if not pid:
        raise InvalidArgumentError(f"Empty {name}", details={name: pid})
    plain = strip_uri(pid)
    if not is_valid(plain):
        raise InvalidArgumentError(
            f"Malformed {name}: {pid!r}. Expected 'namespace:local'",
            details={name: pid},
        )
    return plain


def namespace_of(pid: str) -> str:
    """Return the namespace part of an entity id ('islandora:1' -> 'islandora')."""
    return strip_uri(pid).split(":", 1)[0]


def to_uri(pid: str) -> str:
    """Add the info:fedora/ prefix if not already present."""
    if pid.startswith(URI_PREFIX):
        return pid
    return f"{URI_PREFIX}{pid}"


def strip_uri(value: str) -> str:
    """Remove the info:fedora/ prefix if present."""
    if value.startswith(URI_PREFIX):
        return value[len(URI_PREFIX):]
    return value
