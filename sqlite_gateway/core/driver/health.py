"""
Driver health check: open an in-memory database and run SELECT 1.
"""

from types import ModuleType

from .dbapi import connect, execute


def health_check(driver: ModuleType) -> bool:
    """Return True if the driver can open a handle and answer SELECT 1."""
    conn = None
    try:
        conn = connect(":memory:", driver)
        cur = execute(conn, "SELECT 1")
        row = cur.fetchone()
        cur.close()
        return row is not None and row[0] == 1
    except Exception:
        return False
    finally:
        if conn is not None:
            conn.close()
