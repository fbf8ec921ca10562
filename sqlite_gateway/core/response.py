"""
Response envelope for the HTTP host.

format_response wraps output items as { "success", "message", "data" } and
makes every value JSON-safe (SQLite BLOBs come back as base64 text).
"""

import base64
from typing import Any

from sqlite_gateway.core.errors import GatewayError
from sqlite_gateway.models import OutputItem


def make_json_safe(obj: Any) -> Any:
    """Recursively convert SQLite result values to JSON primitives.

    BLOBs (bytes) are base64-encoded so every byte survives the round trip.
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if isinstance(obj, dict):
        return {str(k): make_json_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [make_json_safe(item) for item in obj]
    return str(obj)


def format_response(items: list[OutputItem]) -> dict[str, Any]:
    """Success envelope with data = [{"json": {...}, "paired_item": n | None}, ...]."""
    return {
        "success": True,
        "message": None,
        "data": [make_json_safe(item.to_dict()) for item in items],
    }


def format_error(exc: Exception) -> dict[str, Any]:
    """Failure envelope; item_index is included when the error is tagged."""
    body: dict[str, Any] = {"success": False, "message": str(exc), "data": []}
    if isinstance(exc, GatewayError) and exc.item_index is not None:
        body["item_index"] = exc.item_index
    return body
