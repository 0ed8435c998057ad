"""
Validation of tool definitions, parameters and results.

All validators are pure functions returning a list of ``FieldError``s; an
empty list means valid. Errors are collected across every field rather than
stopping at the first one, so a caller fixing several bad fields sees them
all in one round trip.
"""

import base64
import binascii
import json
import math
import re
from collections.abc import Callable, Mapping
from datetime import date, datetime
from typing import Any

from pydantic import AnyUrl, TypeAdapter, ValidationError

from tool_protocol.config import settings
from tool_protocol.errors import UnsupportedParamsError
from tool_protocol.models import (
    TEXT_FIELD_TYPES,
    TOOL_ID_PATTERN,
    FieldErrorCode,
    FieldError,
    FieldType,
    NormalizedParams,
    ParameterSchema,
    ToolDefinition,
    ToolExample,
)
from tool_protocol.normalizer import merge_defaults, normalize_params, stringify

TRUE_TOKENS = frozenset({"true", "1", "yes", "on"})
FALSE_TOKENS = frozenset({"false", "0", "no", "off"})

_TOOL_ID_RE = re.compile(TOOL_ID_PATTERN)
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_COLOR_RE = re.compile(r"^#([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$")
_TIME_PART_RE = re.compile(r"\d[Tt ]\d")
_DATA_URL_RE = re.compile(r"^data:[^;,]*(;[^;,]*)*;base64,", re.IGNORECASE)
_URL_ADAPTER = TypeAdapter(AnyUrl)

_REQUIRED_DEFINITION_STRINGS = ("id", "name", "description", "category", "output_description")


def is_valid_tool_id(tool_id: str) -> bool:
    """Check that a tool id is a lowercase hyphenated slug."""
    return bool(_TOOL_ID_RE.match(tool_id))


def coerce_boolean(value: str | bool | None) -> bool:
    """
    Interpret a boolean parameter value.

    Tool bodies receive strings; this turns the accepted tokens into a bool.
    Anything outside the truthy set (including ``None``) is False.
    """
    if isinstance(value, bool):
        return value
    return value is not None and value.strip().lower() in TRUE_TOKENS


def _preview(value: str) -> str:
    limit = settings.received_preview_length
    return value if len(value) <= limit else f"{value[:limit]}..."


def _error(schema: ParameterSchema, message: str, code: FieldErrorCode, **extra: Any) -> FieldError:
    return FieldError(field=schema.name, message=f"{schema.display_label} {message}", code=code, **extra)


# ─── Type-specific checks ─────────────────────────────────────
# Each check receives a non-empty string value and returns the errors for it.


def _check_text(value: str, schema: ParameterSchema) -> list[FieldError]:
    return []


def _parse_number(value: str) -> float:
    text = value.strip()
    # float() accepts Python digit separators ("1_000"); callers do not
    if "_" in text:
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


def _check_number(value: str, schema: ParameterSchema) -> list[FieldError]:
    number = _parse_number(value)
    if not math.isfinite(number):
        return [_error(schema, "must be a number", FieldErrorCode.TYPE, received=_preview(value))]

    errors = []
    if schema.min is not None and number < schema.min:
        errors.append(_error(
            schema, f"must be at least {schema.min:g}", FieldErrorCode.MIN,
            received=number, expected=schema.min,
        ))
    if schema.max is not None and number > schema.max:
        errors.append(_error(
            schema, f"must be at most {schema.max:g}", FieldErrorCode.MAX,
            received=number, expected=schema.max,
        ))
    return errors


def _check_boolean(value: str, schema: ParameterSchema) -> list[FieldError]:
    if value.strip().lower() in TRUE_TOKENS | FALSE_TOKENS:
        return []
    return [_error(
        schema, "must be a boolean", FieldErrorCode.TYPE,
        received=_preview(value), expected=["true", "false"],
    )]


def _check_select(value: str, schema: ParameterSchema) -> list[FieldError]:
    allowed = [option.value for option in schema.options or ()]
    chosen = [v.strip() for v in value.split(",")] if schema.multiple else [value]
    invalid = [v for v in chosen if v not in allowed]
    if not invalid:
        return []
    return [_error(
        schema, f"must be one of: {', '.join(allowed)}", FieldErrorCode.TYPE,
        received=_preview(value), expected=allowed,
    )]


def _check_json(value: str, schema: ParameterSchema) -> list[FieldError]:
    try:
        json.loads(value)
    except json.JSONDecodeError:
        return [_error(schema, "must be valid JSON", FieldErrorCode.TYPE, received=_preview(value))]
    return []


def _check_file(value: str, schema: ParameterSchema) -> list[FieldError]:
    encoded = _DATA_URL_RE.sub("", value.strip(), count=1)
    encoded = encoded.replace("-", "+").replace("_", "/")
    encoded += "=" * (-len(encoded) % 4)
    try:
        base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return [_error(
            schema, "must be base64-encoded file content", FieldErrorCode.TYPE,
            received=_preview(value),
        )]
    return []


def _check_color(value: str, schema: ParameterSchema) -> list[FieldError]:
    if _COLOR_RE.match(value):
        return []
    return [_error(schema, "must be a valid hex color", FieldErrorCode.PATTERN, received=_preview(value))]


def _check_date(value: str, schema: ParameterSchema) -> list[FieldError]:
    for parse in (date.fromisoformat, datetime.fromisoformat):
        try:
            parse(value)
            return []
        except ValueError:
            continue
    return [_error(schema, "must be a valid date", FieldErrorCode.PATTERN, received=_preview(value))]


def _check_datetime(value: str, schema: ParameterSchema) -> list[FieldError]:
    try:
        # fromisoformat also takes a bare date; a datetime needs its time part
        if not _TIME_PART_RE.search(value):
            raise ValueError(value)
        datetime.fromisoformat(value)
    except ValueError:
        return [_error(
            schema, "must be a valid date and time", FieldErrorCode.PATTERN,
            received=_preview(value),
        )]
    return []


def _check_url(value: str, schema: ParameterSchema) -> list[FieldError]:
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return [_error(schema, "must be a valid URL", FieldErrorCode.PATTERN, received=_preview(value))]
    return []


def _check_email(value: str, schema: ParameterSchema) -> list[FieldError]:
    if _EMAIL_RE.match(value):
        return []
    return [_error(
        schema, "must be a valid email address", FieldErrorCode.PATTERN,
        received=_preview(value),
    )]


TYPE_CHECKS: dict[FieldType, Callable[[str, ParameterSchema], list[FieldError]]] = {
    FieldType.TEXT: _check_text,
    FieldType.TEXTAREA: _check_text,
    FieldType.NUMBER: _check_number,
    FieldType.BOOLEAN: _check_boolean,
    FieldType.SELECT: _check_select,
    FieldType.JSON: _check_json,
    FieldType.FILE: _check_file,
    FieldType.COLOR: _check_color,
    FieldType.DATE: _check_date,
    FieldType.DATETIME: _check_datetime,
    FieldType.URL: _check_url,
    FieldType.EMAIL: _check_email,
}


# ─── Parameter values ─────────────────────────────────────────


def _matches(current: str | None, expected: Any) -> bool:
    # Boolean dependencies compare by meaning, so "1" and "yes" match True
    if isinstance(expected, bool):
        return (
            current is not None
            and current.strip().lower() in TRUE_TOKENS | FALSE_TOKENS
            and coerce_boolean(current) is expected
        )
    return current == stringify(expected)


def is_visible(schema: ParameterSchema, params: NormalizedParams) -> bool:
    """Evaluate a parameter's ``visible_when`` dependency against the current values."""
    condition = schema.visible_when
    if condition is None:
        return True
    current = params.get(condition.field)
    if "equals" in condition.model_fields_set and not _matches(current, condition.equals):
        return False
    if "not_equals" in condition.model_fields_set and _matches(current, condition.not_equals):
        return False
    return True


def validate_parameter_value(
    value: str | None,
    schema: ParameterSchema,
    params: NormalizedParams | None = None,
) -> list[FieldError]:
    """
    Validate one parameter value against its schema.

    A missing required value yields a single ``required`` error and nothing
    else. A hidden field (its ``visible_when`` condition is not met) is never
    required.

    Args:
        value: Normalized value, or None when absent
        schema: Parameter schema
        params: All normalized parameters, used for visibility dependencies

    Returns:
        List of field errors (empty if valid)
    """
    if value is None or value == "":
        if schema.required and is_visible(schema, params or {}):
            return [_error(schema, "is required", FieldErrorCode.REQUIRED)]
        return []

    errors = list(TYPE_CHECKS[schema.type](value, schema))

    if schema.type in TEXT_FIELD_TYPES:
        if schema.min_length is not None and len(value) < schema.min_length:
            errors.append(_error(
                schema, f"must be at least {schema.min_length} characters", FieldErrorCode.MIN_LENGTH,
                received=len(value), expected=schema.min_length,
            ))
        if schema.max_length is not None and len(value) > schema.max_length:
            errors.append(_error(
                schema, f"must be at most {schema.max_length} characters", FieldErrorCode.MAX_LENGTH,
                received=len(value), expected=schema.max_length,
            ))

    # Patterns are compiled once at registration; an invalid one never gets here
    if schema.pattern and not re.search(schema.pattern, value):
        errors.append(FieldError(
            field=schema.name,
            message=schema.pattern_error or f"{schema.display_label} format is invalid",
            code=FieldErrorCode.PATTERN,
            received=_preview(value),
            expected=schema.pattern,
        ))

    return errors


def validate_parameters(params: NormalizedParams, definition: ToolDefinition) -> list[FieldError]:
    """Validate every declared parameter and collect all errors."""
    errors: list[FieldError] = []
    for schema in definition.parameters:
        errors.extend(validate_parameter_value(params.get(schema.name), schema, params))
    return errors


# ─── Definitions ──────────────────────────────────────────────


def _prefixed(prefix: str, errors: list[FieldError]) -> list[FieldError]:
    return [e.model_copy(update={"field": f"{prefix}{e.field}"}) for e in errors]


def _location(loc: tuple[int | str, ...]) -> str:
    path = ""
    for part in loc:
        path += f"[{part}]" if isinstance(part, int) else (f".{part}" if path else str(part))
    return path or "definition"


def _from_pydantic(exc: ValidationError) -> list[FieldError]:
    return [
        FieldError(
            field=_location(err["loc"]),
            message=err["msg"],
            code=FieldErrorCode.REQUIRED if err["type"] == "missing" else FieldErrorCode.TYPE,
            received=err.get("input") if err["type"] != "missing" else None,
        )
        for err in exc.errors(include_url=False)
    ]


def validate_parameter_schema(schema: ParameterSchema) -> list[FieldError]:
    """Check the internal consistency of one parameter schema."""
    errors: list[FieldError] = []

    if not schema.name.strip():
        errors.append(FieldError(field="name", message="Parameter name is required", code=FieldErrorCode.REQUIRED))

    if schema.type is FieldType.SELECT:
        if not schema.options:
            errors.append(FieldError(
                field="options",
                message="Select type requires a non-empty options list",
                code=FieldErrorCode.REQUIRED,
            ))
        else:
            for i, option in enumerate(schema.options):
                if not option.value:
                    errors.append(FieldError(
                        field=f"options[{i}].value",
                        message="Option value is required",
                        code=FieldErrorCode.REQUIRED,
                    ))

    if schema.min is not None and schema.max is not None and schema.min > schema.max:
        errors.append(FieldError(
            field="min", message="Min cannot be greater than max", code=FieldErrorCode.CUSTOM,
            received=schema.min, expected=schema.max,
        ))

    for name in ("min_length", "max_length"):
        length = getattr(schema, name)
        if length is not None and length < 0:
            errors.append(FieldError(field=name, message=f"{name} cannot be negative", code=FieldErrorCode.CUSTOM))
    if (
        schema.min_length is not None
        and schema.max_length is not None
        and schema.min_length > schema.max_length
    ):
        errors.append(FieldError(
            field="min_length", message="Min length cannot be greater than max length",
            code=FieldErrorCode.CUSTOM, received=schema.min_length, expected=schema.max_length,
        ))

    if schema.pattern is not None:
        try:
            re.compile(schema.pattern)
        except re.error as e:
            errors.append(FieldError(
                field="pattern", message=f"Invalid regular expression: {e}",
                code=FieldErrorCode.PATTERN, received=schema.pattern,
            ))

    return errors


def validate_example(example: ToolExample, parameters: tuple[ParameterSchema, ...]) -> list[FieldError]:
    """
    Check a worked example.

    The output must carry a boolean ``success`` discriminator and the input
    must validate against the parameters once defaults are merged.
    """
    errors: list[FieldError] = []

    if not isinstance(example.output.get("success"), bool):
        errors.append(FieldError(
            field="output.success",
            message="Example output must have a boolean success field",
            code=FieldErrorCode.REQUIRED,
        ))

    try:
        normalized = normalize_params(example.input)
    except UnsupportedParamsError as e:
        field = f"input.{e.key}" if e.key else "input"
        errors.append(FieldError(field=field, message=str(e), code=FieldErrorCode.TYPE))
        return errors

    params = merge_defaults(normalized, parameters)
    for schema in parameters:
        errors.extend(_prefixed("input.", validate_parameter_value(params.get(schema.name), schema, params)))

    return errors


def validate_definition(definition: ToolDefinition | Mapping[str, Any]) -> list[FieldError]:
    """
    Validate a tool definition.

    Accepts a ``ToolDefinition`` or a raw mapping. Raw mappings are parsed
    first; shape errors are reported with their path (e.g.
    ``parameters[0].type``) and stop further checks, since the semantic
    checks need a parsed definition.

    Args:
        definition: Definition model or raw mapping

    Returns:
        List of field errors (empty if valid)
    """
    if not isinstance(definition, ToolDefinition):
        if not isinstance(definition, Mapping):
            return [FieldError(
                field="definition", message="Tool definition must be an object", code=FieldErrorCode.TYPE,
            )]
        try:
            definition = ToolDefinition.model_validate(definition)
        except ValidationError as e:
            return _from_pydantic(e)

    errors: list[FieldError] = []

    for name in _REQUIRED_DEFINITION_STRINGS:
        if not getattr(definition, name).strip():
            errors.append(FieldError(
                field=name, message=f"{name} is required and must be a non-empty string",
                code=FieldErrorCode.REQUIRED,
            ))

    if definition.id and not is_valid_tool_id(definition.id):
        errors.append(FieldError(
            field="id",
            message='Tool ID must be lowercase alphanumeric with hyphens (e.g., "json-format")',
            code=FieldErrorCode.PATTERN,
            received=definition.id,
            expected=TOOL_ID_PATTERN,
        ))

    if any(not tag.strip() for tag in definition.tags):
        errors.append(FieldError(field="tags", message="Tags must be non-empty strings", code=FieldErrorCode.TYPE))

    seen: set[str] = set()
    names = {p.name for p in definition.parameters}
    for i, schema in enumerate(definition.parameters):
        errors.extend(_prefixed(f"parameters[{i}].", validate_parameter_schema(schema)))
        if schema.name in seen:
            errors.append(FieldError(
                field=f"parameters[{i}].name",
                message=f"Duplicate parameter name: {schema.name}",
                code=FieldErrorCode.CUSTOM,
                received=schema.name,
            ))
        seen.add(schema.name)
        if schema.visible_when is not None and (
            schema.visible_when.field not in names or schema.visible_when.field == schema.name
        ):
            errors.append(FieldError(
                field=f"parameters[{i}].visible_when.field",
                message=f"Visibility depends on unknown parameter: {schema.visible_when.field}",
                code=FieldErrorCode.CUSTOM,
                received=schema.visible_when.field,
            ))

    # An invalid pattern would make the example check raise, so skip it then
    if not any(e.code is FieldErrorCode.PATTERN and e.field.endswith(".pattern") for e in errors):
        for prefix, example in [("example.", definition.example)] + [
            (f"examples[{i}].", ex) for i, ex in enumerate(definition.examples)
        ]:
            errors.extend(_prefixed(prefix, validate_example(example, definition.parameters)))

    return errors


# ─── Results ──────────────────────────────────────────────────


def validate_result(result: Any) -> list[FieldError]:
    """Check that a raw value has the shape of a tool result."""
    if not isinstance(result, Mapping):
        return [FieldError(field="result", message="Tool result must be an object", code=FieldErrorCode.TYPE)]

    errors = []
    if not isinstance(result.get("success"), bool):
        errors.append(FieldError(
            field="success", message="Result must have a boolean success field", code=FieldErrorCode.REQUIRED,
        ))
    elif result["success"] is False and not isinstance(result.get("error"), str):
        errors.append(FieldError(
            field="error", message="Failed result must have an error message", code=FieldErrorCode.REQUIRED,
        ))
    return errors
