"""Configuration management for the membership package.

Configuration is loaded from a TOML file and passed explicitly into the
store and operation constructors; no operation reads ambient settings.

Configuration Resolution Order:
1. Environment variables (highest priority)
2. TOML config file
3. Listing profile defaults / built-in defaults

Example config.toml:

    [runtime]
    listing_profile = "standard"
    log_level = "info"

    [listing]
    page_size = 20

    [namespaces]
    restriction_enforced = true
    allowed = ["islandora", "ir"]

    [store]
    backend = "sqlite"
    path = "/var/lib/membership/membership.db"
"""

import os
import sys
import warnings
from pathlib import Path
from typing import Optional, Any

# Python 3.11+ has tomllib in stdlib, otherwise use tomli
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

VALID_BACKENDS = ("sqlite", "rdf")
TRUE_VALUES = ("1", "true", "yes", "on")


def load_toml_config(config_path: Path) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config.toml file

    Returns:
        Dictionary with configuration sections

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is invalid TOML
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path}: {e}") from e


def get_config_path(config_override: Optional[Path] = None) -> Path:
    """Get configuration file path.

    Args:
        config_override: Optional explicit config path

    Returns:
        MEMBERSHIP_CONFIG if set, else ~/.config/membership/config.toml
    """
    if config_override:
        return config_override

    env_path = os.environ.get("MEMBERSHIP_CONFIG")
    if env_path:
        return Path(env_path)

    return Path.home() / ".config/membership/config.toml"


def parse_namespaces(value: str | list[str] | None) -> list[str]:
    """Normalize a namespace list.

    Accepts a TOML list or a space/comma separated string. Trailing ':'
    is stripped so 'islandora:' and 'islandora' are the same namespace.
    Order is preserved and duplicates dropped.
    """
    if not value:
        return []
    if isinstance(value, str):
        value = value.replace(",", " ").split()

    namespaces = []
    for entry in value:
        namespace = entry.strip().rstrip(":")
        if namespace and namespace not in namespaces:
            namespaces.append(namespace)
    return namespaces


class ListingProfile:
    """Listing profile settings.

    Profiles are operator-declared defaults for paginated member listings.
    """

    PROFILES = {
        "compact": {
            "page_size": 10,
            "max_page_size": 50,
            "log_level": "warning",
        },
        "standard": {
            "page_size": 20,
            "max_page_size": 200,
            "log_level": "info",
        },
    }

    @classmethod
    def get_profile(cls, name: str) -> dict[str, Any]:
        """Get listing profile settings.

        Args:
            name: Profile name (compact or standard)

        Returns:
            Dictionary with profile settings

        Raises:
            ValueError: If profile name is unknown
        """
        if name not in cls.PROFILES:
            raise ValueError(
                f"Unknown listing profile: {name}. "
                f"Available: {list(cls.PROFILES.keys())}"
            )
        return cls.PROFILES[name].copy()


class Settings:
    """Membership service settings with TOML configuration support.

    Configuration Loading:
    1. Load from TOML config file (if exists)
    2. Apply listing profile defaults
    3. Apply TOML section values
    4. Apply environment variable overrides
    """

    page_size: int
    max_page_size: int
    log_level: str
    namespace_restriction_enforced: bool
    allowed_namespaces: list[str]
    store_backend: str
    store_path: Optional[Path]

    def __init__(self, config_path: Optional[Path] = None, **overrides: Any):
        """Initialize settings.

        Args:
            config_path: Optional explicit path to config.toml
            **overrides: Attribute values applied last (highest priority),
                e.g. Settings(page_size=5, namespace_restriction_enforced=True)
        """
        self._config: dict[str, Any] = {}

        config_path = get_config_path(config_path)
        if config_path.exists():
            try:
                self._config = load_toml_config(config_path)
            except ValueError as e:
                # Continue with defaults
                warnings.warn(f"Failed to load config from {config_path}: {e}")

        self._apply_config()

        for key, value in overrides.items():
            if key == "allowed_namespaces":
                value = parse_namespaces(value)
            setattr(self, key, value)

        self._validate()

    def _apply_config(self):
        """Apply TOML configuration and environment variables (env var > TOML > default)."""
        runtime_config = self._config.get("runtime", {})
        profile_name = os.environ.get(
            "MEMBERSHIP_LISTING_PROFILE",
            runtime_config.get("listing_profile", "standard")
        )
        for key, value in ListingProfile.get_profile(profile_name).items():
            setattr(self, key, value)

        self.log_level = os.environ.get(
            "MEMBERSHIP_LOG_LEVEL",
            runtime_config.get("log_level", self.log_level)
        )

        # Listing (env var > TOML > profile)
        listing_config = self._config.get("listing", {})
        self.page_size = int(os.environ.get(
            "MEMBERSHIP_PAGE_SIZE",
            listing_config.get("page_size", self.page_size)
        ))
        self.max_page_size = int(listing_config.get("max_page_size", self.max_page_size))

        # Namespace restriction
        namespace_config = self._config.get("namespaces", {})
        restriction_env = os.environ.get("MEMBERSHIP_NAMESPACE_RESTRICTION")
        if restriction_env is not None:
            self.namespace_restriction_enforced = restriction_env.lower() in TRUE_VALUES
        else:
            self.namespace_restriction_enforced = bool(
                namespace_config.get("restriction_enforced", False)
            )
        self.allowed_namespaces = parse_namespaces(os.environ.get(
            "MEMBERSHIP_ALLOWED_NAMESPACES",
            namespace_config.get("allowed")
        ))

        # Store
        store_config = self._config.get("store", {})
        self.store_backend = os.environ.get(
            "MEMBERSHIP_STORE_BACKEND",
            store_config.get("backend", "sqlite")
        )
        store_path = os.environ.get("MEMBERSHIP_DB", store_config.get("path"))
        self.store_path = Path(store_path) if store_path else None

    def _validate(self):
        """Reject settings the operations cannot work with.

        Raises:
            ValueError: If page sizes or backend are invalid
        """
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if self.max_page_size < self.page_size:
            raise ValueError(
                f"max_page_size ({self.max_page_size}) is smaller than "
                f"page_size ({self.page_size})"
            )
        if self.store_backend not in VALID_BACKENDS:
            raise ValueError(
                f"Unknown store backend: {self.store_backend}. "
                f"Available: {list(VALID_BACKENDS)}"
            )
