"""
SQLite driver selection and per-handle helpers.

No connection pool: one handle is opened per input item by ExecutionSession.
"""

from .dbapi import (
    DriverSelection,
    connect,
    cursor_to_dicts,
    execute,
    is_share_safe,
    load_driver,
    resolve_driver,
)
from .health import health_check

__all__ = [
    "DriverSelection",
    "connect",
    "cursor_to_dicts",
    "execute",
    "health_check",
    "is_share_safe",
    "load_driver",
    "resolve_driver",
]
