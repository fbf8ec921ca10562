"""
SQLite driver selection and handle helpers.

A driver is any DB-API 2 module exposing connect() with sqlite3's signature.
Selection policy (resolve_driver): custom path > default flag > bundled module.
"""

import importlib
import importlib.machinery
import importlib.util
import logging
import os
import sqlite3
import threading
from types import ModuleType
from typing import Any, NamedTuple

from sqlite_gateway.core.config import settings
from sqlite_gateway.core.errors import ConfigurationError
from sqlite_gateway.models import DriverStrategyEnum

_log = logging.getLogger(__name__)

_custom_drivers: dict[str, ModuleType] = {}
_custom_lock = threading.Lock()


class DriverSelection(NamedTuple):
    strategy: DriverStrategyEnum
    # file path (CUSTOM), module name (BUNDLED) or None (DEFAULT)
    location: str | None = None


def resolve_driver(
    *,
    use_default_driver: bool = False,
    custom_driver_path: str | None = None,
    bundled_driver: str | None = None,
) -> DriverSelection:
    """
    Pick the driver strategy.

    - custom_driver_path set: must exist on disk, else ConfigurationError.
    - use_default_driver: standard library sqlite3.
    - otherwise: bundled_driver (defaults to settings.SQLITE_BUNDLED_DRIVER).
    """
    if custom_driver_path and custom_driver_path.strip():
        path = custom_driver_path.strip()
        if not os.path.exists(path):
            raise ConfigurationError(f"Custom driver file not found at {path}")
        return DriverSelection(DriverStrategyEnum.CUSTOM, path)
    if use_default_driver:
        return DriverSelection(DriverStrategyEnum.DEFAULT)
    return DriverSelection(
        DriverStrategyEnum.BUNDLED, bundled_driver or settings.SQLITE_BUNDLED_DRIVER
    )


def _module_name(key: str) -> str:
    # an extension module only initializes under its own name (PyInit_<name>)
    base = os.path.basename(key)
    if base.endswith(tuple(importlib.machinery.EXTENSION_SUFFIXES)):
        return base.split(".")[0]
    return "sqlite_gateway_driver_" + base.split(".")[0]


def _load_from_path(path: str) -> ModuleType:
    key = os.path.realpath(path)
    with _custom_lock:
        module = _custom_drivers.get(key)
        if module is not None:
            return module
        try:
            spec = importlib.util.spec_from_file_location(_module_name(key), key)
            if spec is None or spec.loader is None:
                raise ConfigurationError(f"Custom driver at {path} is not a loadable module")
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
        except ConfigurationError:
            raise
        except Exception as e:
            _log.warning("Custom driver at %s failed to load: %s", path, e)
            raise ConfigurationError(f"Custom driver at {path} cannot be loaded: {e}") from e
        _custom_drivers[key] = module
        return module


def load_driver(selection: DriverSelection) -> ModuleType:
    """Return the DB-API module for a selection."""
    if selection.strategy == DriverStrategyEnum.DEFAULT:
        return sqlite3
    if selection.strategy == DriverStrategyEnum.CUSTOM:
        module = _load_from_path(selection.location or "")
    else:
        try:
            module = importlib.import_module(selection.location or "sqlite3")
        except ImportError as e:
            raise ConfigurationError(
                f"Bundled driver {selection.location!r} cannot be imported: {e}"
            ) from e
    if not callable(getattr(module, "connect", None)):
        raise ConfigurationError(
            f"Driver {selection.location!r} does not provide connect()"
        )
    return module


def connect(db_path: str, driver: ModuleType) -> Any:
    """
    Open one handle to db_path. Autocommit (isolation_level=None) so every
    statement is applied as it runs; usable from batch worker threads.
    """
    return driver.connect(
        db_path,
        timeout=settings.SQLITE_BUSY_TIMEOUT,
        isolation_level=None,
        check_same_thread=False,
    )


def execute(conn: Any, sql: str, params: dict | list | tuple | None = None) -> Any:
    """Execute one statement and return the cursor. Caller closes it."""
    cur = conn.cursor()
    try:
        if params is not None:
            cur.execute(sql, params)
        else:
            cur.execute(sql)
    except Exception:
        cur.close()
        raise
    return cur


def cursor_to_dicts(cursor: Any) -> list[dict[str, Any]]:
    """Convert cursor result to list of dicts (column name -> value)."""
    desc = cursor.description
    if not desc:
        return []
    names = [d[0] for d in desc]
    return [dict(zip(names, row, strict=True)) for row in cursor.fetchall()]


def is_share_safe(driver: ModuleType) -> bool:
    """True if one handle may run statements from several threads (DB-API threadsafety 3)."""
    return getattr(driver, "threadsafety", 0) >= 3
