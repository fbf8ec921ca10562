"""
Gateway error taxonomy.

- ConfigurationError: bad item/driver configuration; always fatal to the item.
- ParamTypeError: a parameter value the SQLite binding layer cannot accept.
- OperationError: host-level wrapper that tags a foreign error with the item index.
"""

from __future__ import annotations

from typing import Any


class GatewayError(Exception):
    """Base error. ``context`` carries tagging info (e.g. item_index) for the host."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = dict(context or {})

    @property
    def item_index(self) -> int | None:
        return self.context.get("item_index")


class ConfigurationError(GatewayError):
    """Empty db_path/query, missing custom driver file, unsupported param value."""

    pass


class ParamTypeError(ConfigurationError):
    """Raised when a parameter value is outside the bindable value set."""

    pass


class OperationError(GatewayError):
    """Execution failure of one input item, raised to the host."""

    pass


def tag_error(exc: Exception, item_index: int) -> GatewayError:
    """
    Attach item_index to exc for the host.

    Errors that already carry a context only get the index appended; anything
    else is wrapped in OperationError keeping the original message text.
    Callers raise the result ``from exc``.
    """
    if isinstance(exc, GatewayError):
        exc.context["item_index"] = item_index
        return exc
    return OperationError(
        str(exc) or "Unknown error",
        context={"item_index": item_index},
    )
