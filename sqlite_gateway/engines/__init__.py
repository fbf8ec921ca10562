"""
Engines: SQL statement execution, per-item session and QueryExecutor.
"""

from sqlite_gateway.engines.executor import QueryExecutor
from sqlite_gateway.engines.session import ExecutionSession
from sqlite_gateway.engines.sql import classify, run_select, split_statements

__all__ = [
    "ExecutionSession",
    "QueryExecutor",
    "classify",
    "run_select",
    "split_statements",
]
