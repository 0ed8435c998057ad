"""
Parameter normalization.

Converts the three supported input shapes into one flat ``NormalizedParams``
map and merges declared defaults:

- a plain key/value mapping (e.g. a parsed JSON body);
- a query-string multi-map (starlette ``QueryParams``, a list of
  ``(key, value)`` pairs, or a raw query string);
- a form-field list (starlette ``FormData`` or a list of ``(name, value)``
  pairs).

Type coercion is not done here; it is type-specific and belongs to the
validator, which runs after the representation is unified.
"""

import json
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import parse_qsl

from starlette.datastructures import ImmutableMultiDict, UploadFile

from tool_protocol.errors import UnsupportedParamsError
from tool_protocol.models import NormalizedParams, ParameterSchema, ToolDefinition


def stringify(value: Any) -> str | None:
    """
    Convert a single parameter value to its string form.

    ``None`` stays ``None`` (absent). Booleans use the lowercase tokens the
    boolean validator accepts; containers become compact JSON, with values
    JSON cannot represent (dates, decimals) written as their ``str()``.

    Raises:
        UnicodeDecodeError: If ``value`` is bytes that are not UTF-8
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"), default=str)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return str(value)


def _from_pairs(pairs: Iterable[tuple[Any, Any]]) -> NormalizedParams:
    result: NormalizedParams = {}
    for key, value in pairs:
        # Uploaded files are not parameters
        if isinstance(value, UploadFile):
            continue
        try:
            result[str(key)] = stringify(value)
        except (UnicodeDecodeError, TypeError, ValueError) as e:
            raise UnsupportedParamsError(f"Unsupported value for parameter '{key}': {e}", key=str(key)) from e
    return result


def normalize_params(raw: Any) -> NormalizedParams:
    """
    Normalize any supported parameter container to a flat string map.

    Repeated keys in multi-maps resolve to the last value. Unknown keys pass
    through unmodified.

    Args:
        raw: Mapping, multi-map, form data, list of pairs, query string or None

    Returns:
        Flat dict of parameter name to string (or None when absent)

    Raises:
        UnsupportedParamsError: If ``raw`` is not a supported container or a
            value cannot be read as text (e.g. non-UTF-8 bytes)
    """
    if raw is None:
        return {}

    # starlette QueryParams / FormData / MultiDict: iterate every item in order
    if isinstance(raw, ImmutableMultiDict):
        return _from_pairs(raw.multi_items())

    if isinstance(raw, Mapping):
        return _from_pairs(raw.items())

    if isinstance(raw, str):
        return _from_pairs(parse_qsl(raw.lstrip("?"), keep_blank_values=True))

    if isinstance(raw, Iterable) and not isinstance(raw, (bytes, bytearray)):
        pairs = list(raw)
        if all(isinstance(item, (tuple, list)) and len(item) == 2 for item in pairs):
            return _from_pairs(pairs)

    raise UnsupportedParamsError(
        f"Unsupported parameter container: {type(raw).__name__}. "
        "Expected a mapping, a query-string multi-map or a form-field list."
    )


def get_default_params(
    definition: ToolDefinition | Iterable[ParameterSchema],
) -> NormalizedParams:
    """Return the declared defaults of a definition as normalized strings."""
    parameters = definition.parameters if isinstance(definition, ToolDefinition) else definition
    return {
        param.name: stringify(param.default)
        for param in parameters
        if param.default is not None
    }


def merge_defaults(
    params: NormalizedParams,
    definition: ToolDefinition | Iterable[ParameterSchema],
) -> NormalizedParams:
    """
    Fill in declared defaults for parameters the caller did not supply.

    A supplied value is never overwritten, even a falsy one such as ``""``,
    ``"0"`` or ``"false"``. A key whose value is ``None`` counts as absent.
    """
    merged = dict(params)
    for name, value in get_default_params(definition).items():
        if merged.get(name) is None:
            merged[name] = value
    return merged
