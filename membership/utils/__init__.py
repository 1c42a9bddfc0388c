"""Utility functions for the membership package.

    from membership.utils import pid
    pid.validate("islandora:root")
    pid.to_uri("islandora:root")  # 'info:fedora/islandora:root'
"""

from . import pid

__all__ = ["pid"]
