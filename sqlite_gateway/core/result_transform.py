"""
Shape execution outcomes into output items.

SELECT:
- one statement: one item per row, or {array_field_name: rows}
- batch: every row of every statement in order, or {array_field_name: [rows, ...]}
INSERT/UPDATE/DELETE and generic execute: exactly one item holding the outcome.
"""

from __future__ import annotations

from typing import Any

from sqlite_gateway.models import OutputItem, QueryTypeEnum


def _collapse_field(array_field_name: str | None) -> str | None:
    if array_field_name and array_field_name.strip():
        return array_field_name
    return None


def normalize_result(
    result: Any,
    query_type: QueryTypeEnum,
    *,
    is_batch: bool = False,
    array_field_name: str | None = None,
) -> list[OutputItem]:
    """
    Convert one item's outcome into output items.

    - result: list[dict] (SELECT), list[list[dict]] (SELECT batch) or dict.
    - is_batch: result holds one row list per statement.
    - array_field_name: if non-blank, collapse SELECT results into a single item.
    """
    if query_type != QueryTypeEnum.SELECT:
        return [OutputItem(json=result)]

    field = _collapse_field(array_field_name)
    rows = result if isinstance(result, list) else [result]

    if field is not None:
        return [OutputItem(json={field: rows})]

    if is_batch:
        out: list[OutputItem] = []
        for result_rows in rows:
            if isinstance(result_rows, list):
                out.extend(OutputItem(json=row) for row in result_rows)
            else:
                out.append(OutputItem(json=result_rows))
        return out

    return [OutputItem(json=row) for row in rows]
