"""
ExecutionSession: the single SQLite handle of one input item.

Opened on enter, closed exactly once on exit, whether the item succeeded or
failed. A session (and its handle) is never reused for another item.
"""

import logging
from types import ModuleType
from typing import Any

from sqlite_gateway.core.driver import (
    DriverSelection,
    connect,
    is_share_safe,
    load_driver,
)
from sqlite_gateway.core.errors import ConfigurationError

_log = logging.getLogger(__name__)


class ExecutionSession:
    """Context manager owning one storage handle."""

    def __init__(self, db_path: str, *, driver: DriverSelection) -> None:
        if not db_path:
            raise ConfigurationError("No database path provided.")
        self.db_path = db_path
        self.selection = driver
        self.driver: ModuleType | None = None
        self._conn: Any = None

    @property
    def conn(self) -> Any:
        if self._conn is None:
            raise RuntimeError("ExecutionSession is not open")
        return self._conn

    @property
    def share_safe(self) -> bool:
        return self.driver is not None and is_share_safe(self.driver)

    def open(self) -> "ExecutionSession":
        if self._conn is not None:
            raise RuntimeError("ExecutionSession is already open")
        self.driver = load_driver(self.selection)
        _log.debug(
            "Opening %s (driver=%s %s)",
            self.db_path,
            self.selection.strategy.value,
            self.selection.location or "",
        )
        self._conn = connect(self.db_path, self.driver)
        return self

    def close(self) -> None:
        conn, self._conn = self._conn, None
        if conn is not None:
            conn.close()

    def __enter__(self) -> "ExecutionSession":
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()
