"""Parameter validation for tool calls."""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Tuple

from clusters_mcp.errors import InvalidParametersError
from clusters_mcp.tools.base import BOOLEAN, ENUM, OBJECT_ARRAY, STRING, STRING_ARRAY, Param

HEADER_VALUE_REGEX = re.compile(r"[\x20-\x7e]*")


def validate_params(spec: Tuple[Param, ...], params: Mapping[str, Any] | None, *, prefix: str = "") -> Dict[str, Any]:
    """
    Check ``params`` against ``spec`` and return only the declared fields.

    Unknown fields are dropped, an optional field given as ``None`` counts as
    absent. Raises ``InvalidParametersError`` naming the first offending field,
    using ``wallets[0].name`` style paths for nested values.
    """
    if params is None:
        params = {}
    if not isinstance(params, Mapping):
        raise InvalidParametersError(prefix.rstrip(".") or "params", "expected an object")

    cleaned: Dict[str, Any] = {}
    for param in spec:
        field = f"{prefix}{param.name}"
        value = params.get(param.name)
        if value is None:
            if param.required:
                raise InvalidParametersError(field, "required field missing")
            continue
        cleaned[param.name] = _check_value(param, value, field)
    return cleaned


def _check_value(param: Param, value: Any, field: str) -> Any:
    if param.kind == STRING:
        if not isinstance(value, str):
            raise InvalidParametersError(field, "expected a string")
        if param.header and not HEADER_VALUE_REGEX.fullmatch(value):
            raise InvalidParametersError(field, "must be printable ASCII")
        return value
    if param.kind == BOOLEAN:
        # bool only; 0/1 and "true" are rejected.
        if not isinstance(value, bool):
            raise InvalidParametersError(field, "expected a boolean")
        return value
    if param.kind == ENUM:
        if not isinstance(value, str) or value not in param.choices:
            raise InvalidParametersError(field, f"expected one of {', '.join(param.choices)}")
        return value
    if param.kind == STRING_ARRAY:
        if not isinstance(value, list):
            raise InvalidParametersError(field, "expected an array of strings")
        for index, item in enumerate(value):
            if not isinstance(item, str):
                raise InvalidParametersError(f"{field}[{index}]", "expected a string")
        return list(value)
    if param.kind == OBJECT_ARRAY:
        if not isinstance(value, list):
            raise InvalidParametersError(field, "expected an array of objects")
        items = []
        for index, item in enumerate(value):
            item_field = f"{field}[{index}]"
            if not isinstance(item, Mapping):
                raise InvalidParametersError(item_field, "expected an object")
            items.append(validate_params(param.fields, item, prefix=f"{item_field}."))
        return items
    raise InvalidParametersError(field, f"unsupported parameter kind {param.kind}")
