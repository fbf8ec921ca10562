"""
Run statements against an open SQLite handle.

- run_select: SELECT, split on ';'. One fragment -> list[dict]; several
  fragments -> list[list[dict]], executed concurrently, in fragment order.
  Every fragment must return rows (OperationError otherwise).
- run_mutation: INSERT/UPDATE/DELETE -> {"changes": int, "last_id": int | None}.
- run_script: anything else (CREATE, DROP, ...) -> {"message": ...}.

Each fragment is bound only to the parameters it references (prune_params).
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import nullcontext
from typing import Any, ContextManager

from sqlite_gateway.core.config import settings
from sqlite_gateway.core.driver import cursor_to_dicts, execute
from sqlite_gateway.core.errors import OperationError
from sqlite_gateway.core.params import ParamValue, prune_params

_log = logging.getLogger(__name__)

SCRIPT_OK_MESSAGE = "Query executed successfully."
NO_DATA_MESSAGE = "This statement does not return data"
NO_STATEMENTS_MESSAGE = "The supplied SQL string contains no statements"


def split_statements(sql: str) -> list[str]:
    """
    Split on every ';' and drop blank fragments.

    No quote awareness: a ';' inside a string literal also splits.
    """
    return [s.strip() for s in sql.split(";") if s.strip()]


def _select_rows(
    conn: Any,
    sql: str,
    params: dict[str, ParamValue],
    lock: ContextManager[Any],
) -> list[dict[str, Any]]:
    with lock:
        cur = execute(conn, sql, params)
        try:
            if cur.description is None:
                raise OperationError(NO_DATA_MESSAGE)
            return cursor_to_dicts(cur)
        finally:
            cur.close()


def run_batch(
    conn: Any,
    statements: list[str],
    params: dict[str, ParamValue],
    *,
    share_safe: bool = True,
) -> list[list[dict[str, Any]]]:
    """
    Execute every statement as its own task and join them all.

    Results keep statement order whatever the completion order. The first
    failure in statement order is raised; tasks not yet started are cancelled.
    share_safe=False serializes the tasks on one lock (handle not usable from
    several threads at once).
    """
    lock: ContextManager[Any] = nullcontext() if share_safe else threading.Lock()
    workers = max(1, min(len(statements), settings.SQLITE_BATCH_MAX_WORKERS))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="sqlite-batch") as pool:
        futures: list[Future[list[dict[str, Any]]]] = [
            pool.submit(_select_rows, conn, stmt, prune_params(stmt, params), lock)
            for stmt in statements
        ]
        try:
            return [f.result() for f in futures]
        except Exception:
            for f in futures:
                f.cancel()
            raise


def run_select(
    conn: Any,
    sql: str,
    params: dict[str, ParamValue],
    *,
    share_safe: bool = True,
) -> tuple[list[Any], bool]:
    """
    Run a SELECT (possibly several separated by ';').

    Returns (result, is_batch): rows for one fragment, or one row list per
    fragment when there are several.
    """
    statements = split_statements(sql)
    if len(statements) > 1:
        _log.debug("Running %d SELECT statements as a batch", len(statements))
        return run_batch(conn, statements, params, share_safe=share_safe), True
    if not statements:
        raise OperationError(NO_STATEMENTS_MESSAGE)
    query_args = prune_params(statements[0], params)
    return _select_rows(conn, statements[0], query_args, nullcontext()), False


def run_mutation(
    conn: Any, sql: str, params: dict[str, ParamValue]
) -> dict[str, Any]:
    """Run INSERT/UPDATE/DELETE; report affected rows and last inserted rowid."""
    cur = execute(conn, sql, prune_params(sql, params))
    try:
        changes = cur.rowcount if cur.rowcount is not None and cur.rowcount >= 0 else 0
        return {"changes": changes, "last_id": cur.lastrowid}
    finally:
        cur.close()


def run_script(
    conn: Any, sql: str, params: dict[str, ParamValue]
) -> dict[str, Any]:
    """
    Run arbitrary SQL (may hold several statements) without bound parameters.
    """
    unused = prune_params(sql, params)
    if unused:
        _log.debug("Generic execute does not bind parameters; ignoring %s", sorted(unused))
    conn.executescript(sql)
    return {"message": SCRIPT_OK_MESSAGE}
