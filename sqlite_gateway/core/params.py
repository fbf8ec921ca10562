"""
Query parameters: reconcile form variables with the JSON args blob, coerce values
to what SQLite can bind, and prune parameters a statement does not reference.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any, Union

from sqlite_gateway.core.errors import ParamTypeError

_log = logging.getLogger(__name__)

ParamValue = Union[None, bool, int, float, str, bytes]

_SIGILS = ("@", "$")


def clean_param_name(name: str) -> str:
    """Strip one leading @ or $ and surrounding whitespace. '@@a' -> '@a'."""
    s = str(name)
    if s.startswith(_SIGILS):
        s = s[1:]
    return s.strip()


def coerce_param_value(name: str, value: Any) -> ParamValue:
    """
    Return value as a bindable SQLite value.

    None, bool, int, float, str and bytes pass through. dict/list are stored as
    JSON text. Anything else raises ParamTypeError.
    """
    if value is None or isinstance(value, (bool, int, float, str, bytes)):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value)
        except (TypeError, ValueError) as e:
            raise ParamTypeError(f"Parameter '{name}' is not JSON serializable: {e}") from e
    raise ParamTypeError(
        f"Parameter '{name}' has unsupported type: {type(value).__name__}"
    )


def parse_args(args: str | Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Parse the args blob. Invalid JSON or a non-object decodes to {}.
    """
    if args is None:
        return {}
    if isinstance(args, Mapping):
        return dict(args)
    s = str(args).strip() or "{}"
    try:
        out = json.loads(s)
    except json.JSONDecodeError as e:
        _log.warning("Ignoring args: invalid JSON (%s)", e)
        return {}
    if not isinstance(out, dict):
        _log.warning("Ignoring args: JSON is not an object (%s)", type(out).__name__)
        return {}
    return out


def _variable_pair(variable: Any) -> tuple[Any, Any]:
    if isinstance(variable, Mapping):
        return variable.get("name"), variable.get("value")
    if isinstance(variable, tuple):
        return variable[0], variable[1]
    return getattr(variable, "name", None), getattr(variable, "value", None)


def reconcile_params(
    variables: Iterable[Any] | None,
    args: str | Mapping[str, Any] | None,
) -> dict[str, ParamValue]:
    """
    Build the canonical parameter map.

    - variables: ordered QueryVariable / {name, value} / (name, value); blank names skipped.
    - args: JSON object (text or mapping), overlaid on variables. args win on conflict.

    Keys lose one leading @ or $ and are trimmed; keys blank after cleaning are dropped.
    """
    out: dict[str, ParamValue] = {}
    for variable in variables or ():
        name, value = _variable_pair(variable)
        if not name or not str(name).strip():
            continue
        key = clean_param_name(name)
        if key:
            out[key] = coerce_param_value(key, value)

    for name, value in parse_args(args).items():
        key = clean_param_name(name)
        if key:
            out[key] = coerce_param_value(key, value)
    return out


def prune_params(sql: str, params: Mapping[str, ParamValue]) -> dict[str, ParamValue]:
    """
    Keep only params whose key occurs somewhere in sql.

    Plain substring test: 'id' is kept for '... WHERE uid = @uid'. Supplying names
    a statement does not use makes some drivers reject the bind, so over-supply is avoided.
    """
    return {k: v for k, v in params.items() if k in sql}
