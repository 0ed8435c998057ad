"""JSON formatter tool."""

import json
import time
from typing import Any

from tool_protocol.models import (
    ErrorCode,
    FieldOption,
    FieldType,
    NormalizedParams,
    ParameterSchema,
    ResultMetadata,
    ToolDefinition,
    ToolExample,
    ToolMethod,
    ToolResult,
)
from tool_protocol.services.base import failure, success
from tool_protocol.validators import coerce_boolean

JSON_FORMATTER_DEFINITION = ToolDefinition(
    id="json-formatter",
    name="JSON Formatter",
    description=(
        "Format, validate, and beautify JSON data with customizable indentation. "
        "Supports minification and sorting keys alphabetically."
    ),
    category="formatters",
    tags=("json", "format", "beautify", "validate", "minify"),
    method=ToolMethod.POST,
    parameters=(
        ParameterSchema(
            name="json",
            type=FieldType.TEXTAREA,
            label="JSON Input",
            description="The JSON string to format",
            required=True,
            placeholder='{"name": "example", "value": 123}',
            min_length=1,
            max_length=1_000_000,
        ),
        ParameterSchema(
            name="indent",
            type=FieldType.SELECT,
            label="Indentation",
            description="Number of spaces for indentation",
            default="2",
            options=(
                FieldOption(value="0", label="Minified", description="No whitespace"),
                FieldOption(value="2", label="2 spaces", description="Standard indentation"),
                FieldOption(value="4", label="4 spaces", description="Wide indentation"),
                FieldOption(value="tab", label="Tab", description="Tab character"),
            ),
        ),
        ParameterSchema(
            name="sortKeys",
            type=FieldType.BOOLEAN,
            label="Sort Keys",
            description="Sort object keys alphabetically",
            default=False,
        ),
    ),
    output_description="Formatted JSON string with proper indentation",
    example=ToolExample(
        input={"json": '{"name":"John","age":30,"city":"NYC"}', "indent": "2", "sortKeys": False},
        output={
            "success": True,
            "formatted": '{\n  "name": "John",\n  "age": 30,\n  "city": "NYC"\n}',
            "valid": True,
            "lineCount": 5,
            "characterCount": 50,
        },
        name="Format a simple JSON object with 2-space indentation",
    ),
    version="1.0.0",
    related_tools=("base64-encoder",),
)

_INDENTS: dict[str, int | str | None] = {"0": None, "2": 2, "4": 4, "tab": "\t"}


def _sort_keys(value: Any) -> Any:
    if isinstance(value, list):
        return [_sort_keys(item) for item in value]
    if isinstance(value, dict):
        return {key: _sort_keys(value[key]) for key in sorted(value)}
    return value


def format_json(params: NormalizedParams) -> ToolResult:
    """Pretty-print or minify a JSON document."""
    start = time.perf_counter()
    source = params["json"]

    try:
        parsed = json.loads(source)
    except json.JSONDecodeError as e:
        return failure(f"Invalid JSON: {e}", ErrorCode.INVALID_INPUT)

    if coerce_boolean(params.get("sortKeys")):
        parsed = _sort_keys(parsed)

    indent = _INDENTS.get(params.get("indent") or "2", 2)
    if indent is None:
        formatted = json.dumps(parsed, separators=(",", ":"), ensure_ascii=False)
    else:
        formatted = json.dumps(parsed, indent=indent, ensure_ascii=False)

    return success(
        formatted=formatted,
        valid=True,
        lineCount=formatted.count("\n") + 1,
        characterCount=len(formatted),
        metadata=ResultMetadata(
            execution_time_ms=(time.perf_counter() - start) * 1000,
            input_size=len(source),
            output_size=len(formatted),
        ),
    )
