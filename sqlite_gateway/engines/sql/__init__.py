"""
SQL engine: statement classification and execution against an open handle.

Exports: classify, split_statements, run_select, run_batch, run_mutation, run_script.
"""

from sqlite_gateway.engines.sql.classifier import classify
from sqlite_gateway.engines.sql.executor import (
    run_batch,
    run_mutation,
    run_script,
    run_select,
    split_statements,
)

__all__ = [
    "classify",
    "run_batch",
    "run_mutation",
    "run_script",
    "run_select",
    "split_statements",
]
