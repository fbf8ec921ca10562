"""Tests for core.driver: driver selection policy, loading, handle helpers."""

import sqlite3
from unittest.mock import MagicMock, patch

import pytest

from sqlite_gateway.core.driver import (
    DriverSelection,
    connect,
    cursor_to_dicts,
    execute,
    health_check,
    is_share_safe,
    load_driver,
    resolve_driver,
)
from sqlite_gateway.core.errors import ConfigurationError
from sqlite_gateway.models import DriverStrategyEnum

# --- resolve_driver ---


def test_resolve_custom_wins(tmp_path) -> None:
    path = tmp_path / "driver.py"
    path.write_text("from sqlite3 import *\n")
    sel = resolve_driver(use_default_driver=True, custom_driver_path=str(path))
    assert sel == DriverSelection(DriverStrategyEnum.CUSTOM, str(path))


def test_resolve_custom_missing_raises(tmp_path) -> None:
    missing = str(tmp_path / "nope.so")
    with pytest.raises(ConfigurationError, match="Custom driver file not found"):
        resolve_driver(custom_driver_path=missing)


def test_resolve_blank_custom_is_ignored() -> None:
    sel = resolve_driver(use_default_driver=True, custom_driver_path="  ")
    assert sel.strategy == DriverStrategyEnum.DEFAULT


def test_resolve_default_flag() -> None:
    sel = resolve_driver(use_default_driver=True)
    assert sel == DriverSelection(DriverStrategyEnum.DEFAULT, None)


def test_resolve_bundled_from_settings() -> None:
    with patch("sqlite_gateway.core.driver.dbapi.settings") as m:
        m.SQLITE_BUNDLED_DRIVER = "sqlite3.dbapi2"
        sel = resolve_driver()
    assert sel == DriverSelection(DriverStrategyEnum.BUNDLED, "sqlite3.dbapi2")


def test_resolve_bundled_explicit() -> None:
    sel = resolve_driver(bundled_driver="sqlite3")
    assert sel == DriverSelection(DriverStrategyEnum.BUNDLED, "sqlite3")


# --- load_driver ---


def test_load_default_is_stdlib_sqlite3() -> None:
    assert load_driver(DriverSelection(DriverStrategyEnum.DEFAULT)) is sqlite3


def test_load_bundled_module() -> None:
    driver = load_driver(DriverSelection(DriverStrategyEnum.BUNDLED, "sqlite3.dbapi2"))
    assert callable(driver.connect)


def test_load_bundled_missing_module() -> None:
    with pytest.raises(ConfigurationError, match="cannot be imported"):
        load_driver(DriverSelection(DriverStrategyEnum.BUNDLED, "no_such_sqlite_driver"))


def test_load_custom_from_path(tmp_path) -> None:
    path = tmp_path / "mydriver.py"
    path.write_text("from sqlite3 import *\n")
    driver = load_driver(DriverSelection(DriverStrategyEnum.CUSTOM, str(path)))
    conn = connect(":memory:", driver)
    try:
        cur = execute(conn, "SELECT 2 AS n")
        assert cursor_to_dicts(cur) == [{"n": 2}]
    finally:
        conn.close()
    # loaded once per path
    assert load_driver(DriverSelection(DriverStrategyEnum.CUSTOM, str(path))) is driver


def test_load_custom_without_connect(tmp_path) -> None:
    path = tmp_path / "notadriver.py"
    path.write_text("VALUE = 1\n")
    with pytest.raises(ConfigurationError, match="connect"):
        load_driver(DriverSelection(DriverStrategyEnum.CUSTOM, str(path)))


@pytest.mark.parametrize(
    ("source", "match"),
    [
        ("raise RuntimeError('bad driver')\n", "cannot be loaded: bad driver"),
        ("import no_such_sqlite_backend\n", "cannot be loaded"),
        ("def connect(:\n", "cannot be loaded"),
    ],
)
def test_load_custom_failure_is_configuration_error(tmp_path, source: str, match: str) -> None:
    path = tmp_path / "broken_driver.py"
    path.write_text(source)
    with pytest.raises(ConfigurationError, match=match):
        load_driver(DriverSelection(DriverStrategyEnum.CUSTOM, str(path)))


def test_load_custom_unknown_file_type(tmp_path) -> None:
    path = tmp_path / "driver.txt"
    path.write_text("connect")
    with pytest.raises(ConfigurationError, match="not a loadable module"):
        load_driver(DriverSelection(DriverStrategyEnum.CUSTOM, str(path)))


def test_load_custom_extension_module() -> None:
    native = pytest.importorskip("_sqlite3")
    native_path = getattr(native, "__file__", None)
    if not native_path:
        pytest.skip("_sqlite3 is built into the interpreter")
    driver = load_driver(DriverSelection(DriverStrategyEnum.CUSTOM, native_path))
    conn = connect(":memory:", driver)
    try:
        cur = execute(conn, "SELECT 3 AS n")
        assert cursor_to_dicts(cur) == [{"n": 3}]
    finally:
        conn.close()


# --- connect / execute / cursor_to_dicts ---


def test_connect_is_autocommit(tmp_path) -> None:
    db = str(tmp_path / "a.sqlite")
    conn = connect(db, sqlite3)
    try:
        execute(conn, "CREATE TABLE t (v TEXT)").close()
        execute(conn, "INSERT INTO t (v) VALUES (@v)", {"v": "x"}).close()
    finally:
        conn.close()

    other = sqlite3.connect(db)
    try:
        assert other.execute("SELECT v FROM t").fetchall() == [("x",)]
    finally:
        other.close()


def test_execute_closes_cursor_on_error() -> None:
    conn = MagicMock()
    cur = conn.cursor.return_value
    cur.execute.side_effect = sqlite3.OperationalError("boom")
    with pytest.raises(sqlite3.OperationalError, match="boom"):
        execute(conn, "SELECT nope", {})
    cur.close.assert_called_once()


def test_cursor_to_dicts_no_description() -> None:
    cur = MagicMock()
    cur.description = None
    assert cursor_to_dicts(cur) == []


def test_cursor_to_dicts_rows() -> None:
    cur = MagicMock()
    cur.description = [("id",), ("v",)]
    cur.fetchall.return_value = [(1, "a"), (2, "b")]
    assert cursor_to_dicts(cur) == [{"id": 1, "v": "a"}, {"id": 2, "v": "b"}]


# --- health_check / is_share_safe ---


def test_health_check_ok() -> None:
    assert health_check(sqlite3) is True


def test_health_check_broken_driver() -> None:
    driver = MagicMock()
    driver.connect.side_effect = sqlite3.OperationalError("unable to open")
    assert health_check(driver) is False


def test_is_share_safe() -> None:
    assert is_share_safe(MagicMock(threadsafety=3)) is True
    assert is_share_safe(MagicMock(threadsafety=1)) is False
