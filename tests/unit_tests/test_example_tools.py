"""Tests for the bundled example tools."""

import base64
import hashlib
import json

import pytest

from tool_protocol.errors import DuplicateToolError
from tool_protocol.models import ErrorCode, FieldErrorCode
from tool_protocol.primitives import is_valid_uuid
from tool_protocol.services.registry import ToolRegistry
from tool_protocol.services.tools import (
    EXAMPLE_TOOLS,
    EchoUpperTool,
    create_example_registry,
    register_example_tools,
)
from tool_protocol.validators import validate_definition

TOOL_IDS = ["echo-upper", "json-formatter", "base64-encoder", "hash-generator", "uuid-generator"]


@pytest.fixture
def tools(server_primitives) -> ToolRegistry:
    """Registry with every example tool."""
    return create_example_registry(server_primitives)


def test_example_registry_contents(tools) -> None:
    """Test all example tools are registered in order."""
    assert tools.list() == TOOL_IDS


@pytest.mark.parametrize(("definition", "fn"), EXAMPLE_TOOLS, ids=TOOL_IDS)
def test_example_definitions_are_valid(definition, fn) -> None:
    """Test every example definition passes validation."""
    assert validate_definition(definition) == []
    assert callable(fn)


def test_register_example_tools_twice(registry) -> None:
    """Test re-registering the examples is rejected."""
    assert register_example_tools(registry) == len(TOOL_IDS)
    with pytest.raises(DuplicateToolError):
        register_example_tools(registry)


def test_base_tool_id() -> None:
    """Test class-style tools expose their id."""
    assert EchoUpperTool().id == "echo-upper"


# ─── json-formatter ───────────────────────────────────────────


SAMPLE_JSON = '{"name":"John","age":30,"city":"NYC"}'


@pytest.mark.asyncio
async def test_json_formatter_defaults(tools) -> None:
    """Test default two-space formatting."""
    result = await tools.execute("json-formatter", {"json": SAMPLE_JSON})

    assert result.success is True
    assert result.payload["formatted"] == '{\n  "name": "John",\n  "age": 30,\n  "city": "NYC"\n}'
    assert result.payload["valid"] is True
    assert result.payload["lineCount"] == 5
    assert result.payload["characterCount"] == 50
    assert result.metadata.input_size == len(SAMPLE_JSON)
    assert result.metadata.output_size == 50


@pytest.mark.asyncio
async def test_json_formatter_minify_and_sort(tools) -> None:
    """Test minification with sorted keys."""
    result = await tools.execute(
        "json-formatter",
        {"json": '{"b": {"d": 1, "c": 2}, "a": [3]}', "indent": "0", "sortKeys": True},
    )

    assert result.payload["formatted"] == '{"a":[3],"b":{"c":2,"d":1}}'
    assert result.payload["lineCount"] == 1


@pytest.mark.asyncio
async def test_json_formatter_tab(tools) -> None:
    """Test tab indentation."""
    result = await tools.execute("json-formatter", {"json": "[1]", "indent": "tab"})

    assert result.payload["formatted"] == "[\n\t1\n]"


@pytest.mark.asyncio
async def test_json_formatter_invalid_json(tools) -> None:
    """Test malformed JSON is reported by the tool."""
    result = await tools.execute("json-formatter", {"json": "{oops"})

    assert result.success is False
    assert result.error_code is ErrorCode.INVALID_INPUT
    assert result.error.startswith("Invalid JSON")
    assert result.raised is False


@pytest.mark.asyncio
async def test_json_formatter_rejects_unknown_indent(tools) -> None:
    """Test select options are enforced before the tool runs."""
    result = await tools.execute("json-formatter", {"json": "[]", "indent": "3"})

    assert result.error_code is ErrorCode.VALIDATION_ERROR
    assert [e.field for e in result.validation_errors] == ["indent"]


# ─── base64-encoder ───────────────────────────────────────────


@pytest.mark.asyncio
async def test_base64_encode(tools) -> None:
    """Test encoding is the default mode."""
    result = await tools.execute("base64-encoder", {"input": "Hello, World!"})

    assert result.payload == {
        "output": "SGVsbG8sIFdvcmxkIQ==",
        "mode": "encode",
        "inputLength": 13,
        "outputLength": 20,
    }


@pytest.mark.asyncio
async def test_base64_decode_url_safe(tools) -> None:
    """Test URL-safe decoding without padding."""
    encoded = base64.urlsafe_b64encode("héllo?>".encode()).decode().rstrip("=")

    result = await tools.execute("base64-encoder", {"input": encoded, "mode": "decode", "urlSafe": "true"})

    assert result.payload["output"] == "héllo?>"


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["@@@@", "//8="])
async def test_base64_decode_invalid(tools, text) -> None:
    """Test undecodable input is reported by the tool."""
    result = await tools.execute("base64-encoder", {"input": text, "mode": "decode"})

    assert result.error_code is ErrorCode.INVALID_INPUT


# ─── hash-generator ───────────────────────────────────────────


@pytest.mark.asyncio
async def test_hash_generator_defaults(tools) -> None:
    """Test SHA-256 hex is the default."""
    result = await tools.execute("hash-generator", {"input": "hello world"})

    assert result.payload == {
        "hash": hashlib.sha256(b"hello world").hexdigest(),
        "algorithm": "SHA-256",
        "format": "hex",
        "inputLength": 11,
    }
    assert result.metadata.warnings is None


@pytest.mark.asyncio
async def test_hash_generator_base64(tools) -> None:
    """Test base64 output."""
    result = await tools.execute("hash-generator", {"input": "abc", "algorithm": "SHA-512", "format": "base64"})

    assert result.payload["hash"] == base64.b64encode(hashlib.sha512(b"abc").digest()).decode()


@pytest.mark.asyncio
async def test_hash_generator_warns_on_sha1(tools) -> None:
    """Test SHA-1 carries a deprecation warning."""
    result = await tools.execute("hash-generator", {"input": "abc", "algorithm": "SHA-1"})

    assert result.payload["hash"] == hashlib.sha1(b"abc").hexdigest()
    assert len(result.metadata.warnings) == 1
    assert "SHA-1" in result.metadata.warnings[0]


@pytest.mark.asyncio
async def test_hash_generator_rejects_unlisted_algorithm(tools) -> None:
    """Test algorithms outside the options are rejected."""
    result = await tools.execute("hash-generator", {"input": "abc", "algorithm": "MD5"})

    assert result.error_code is ErrorCode.VALIDATION_ERROR


@pytest.mark.asyncio
async def test_hash_generator_same_result_on_both_hosts(use_client_primitives) -> None:
    """Test the same tool body runs on the browser primitives."""
    registry = create_example_registry(use_client_primitives)

    client = await registry.execute("hash-generator", {"input": "hello world"})
    server_hash = hashlib.sha256(b"hello world").hexdigest()

    assert client.payload["hash"] == server_hash
    assert client.metadata.executed_on == "client"
    assert use_client_primitives._crypto.subtle.calls == ["SHA-256"]


# ─── uuid-generator ───────────────────────────────────────────


@pytest.mark.asyncio
async def test_uuid_generator_default(tools) -> None:
    """Test one UUID is generated by default."""
    result = await tools.execute("uuid-generator")

    assert result.payload["count"] == 1
    assert len(result.payload["uuids"]) == 1
    assert is_valid_uuid(result.payload["uuids"][0])


@pytest.mark.asyncio
async def test_uuid_generator_count_and_case(tools) -> None:
    """Test several upper-case UUIDs."""
    result = await tools.execute("uuid-generator", {"count": 3, "uppercase": "yes"})

    uuids = result.payload["uuids"]
    assert len(set(uuids)) == 3
    assert all(u == u.upper() and is_valid_uuid(u) for u in uuids)


@pytest.mark.asyncio
@pytest.mark.parametrize(("count", "code"), [("0", FieldErrorCode.MIN), ("101", FieldErrorCode.MAX)])
async def test_uuid_generator_count_bounds(tools, count, code) -> None:
    """Test the count range is enforced."""
    result = await tools.execute("uuid-generator", {"count": count})

    assert [e.code for e in result.validation_errors] == [code]


@pytest.mark.asyncio
async def test_example_outputs_render(tools) -> None:
    """Test every example tool result serializes to JSON."""
    for definition, _ in EXAMPLE_TOOLS:
        result = await tools.execute(definition.id, definition.example.input)
        assert result.success is True, definition.id
        json.dumps(result.to_dict())
