"""Pytest configuration and fixtures for tool-protocol tests."""

import hashlib
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from tool_protocol import primitives as primitives_module
from tool_protocol.models import FieldType, ParameterSchema, ToolDefinition, ToolExample, ToolMethod
from tool_protocol.primitives import ServerPrimitives, WebCryptoPrimitives, reset_primitives
from tool_protocol.services.defaults import reset_default_registry
from tool_protocol.services.registry import ToolRegistry
from tool_protocol.services.tools import EchoUpperTool


@pytest.fixture(autouse=True)
def reset_process_state() -> Iterator[None]:
    """Drop cached primitives and the default registry around each test."""
    reset_primitives()
    reset_default_registry()
    yield
    reset_primitives()
    reset_default_registry()


class FakeSubtle:
    """Stand-in for ``crypto.subtle``: resolves digests with hashlib."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def digest(self, algorithm: str, data: bytes) -> bytes:
        self.calls.append(algorithm)
        return hashlib.new(algorithm.replace("-", "").lower(), data).digest()


class FakeCrypto:
    """Stand-in for the browser ``crypto`` global."""

    def __init__(self) -> None:
        self.subtle = FakeSubtle()
        self._counter = 0

    def randomUUID(self) -> str:  # noqa: N802 - mirrors the browser API name
        self._counter += 1
        return f"00000000-0000-4000-8000-{self._counter:012d}"


class FakeWebCryptoPrimitives(WebCryptoPrimitives):
    """Browser primitives with the Pyodide buffer conversions bypassed."""

    def _to_js(self, raw: bytes) -> Any:
        return raw

    def _from_js(self, buffer: Any) -> bytes:
        return bytes(buffer)


@pytest.fixture
def server_primitives() -> ServerPrimitives:
    """Server-side primitives."""
    return ServerPrimitives()


@pytest.fixture
def client_primitives() -> FakeWebCryptoPrimitives:
    """Browser-side primitives backed by a fake Web Crypto object."""
    return FakeWebCryptoPrimitives(crypto=FakeCrypto())


@pytest.fixture
def use_client_primitives(
    monkeypatch: pytest.MonkeyPatch,
    client_primitives: FakeWebCryptoPrimitives,
) -> FakeWebCryptoPrimitives:
    """Make the fake browser primitives the process-wide provider."""
    monkeypatch.setattr(primitives_module, "_active", client_primitives)
    return client_primitives


@pytest.fixture
def registry(server_primitives: ServerPrimitives) -> ToolRegistry:
    """Empty registry running on server primitives."""
    return ToolRegistry(server_primitives)


@pytest.fixture
def echo_registry(registry: ToolRegistry) -> ToolRegistry:
    """Registry with the echo-upper tool registered."""
    EchoUpperTool().register(registry)
    return registry


@pytest.fixture
def make_definition() -> Callable[..., ToolDefinition]:
    """
    Factory for small valid definitions.

    Defaults to a single required ``text`` parameter; pass ``parameters``
    and a matching ``example_input`` to build something else.
    """
    def _make(
        tool_id: str = "sample-tool",
        parameters: tuple[ParameterSchema, ...] | None = None,
        example_input: dict[str, Any] | None = None,
        **overrides: Any,
    ) -> ToolDefinition:
        if parameters is None:
            parameters = (ParameterSchema(name="text", type=FieldType.TEXT, required=True),)
            example_input = example_input or {"text": "hi"}
        fields = {
            "id": tool_id,
            "name": "Sample Tool",
            "description": "A tool used in tests",
            "category": "testing",
            "tags": ("test",),
            "method": ToolMethod.GET,
            "parameters": parameters,
            "output_description": "Whatever the tool returns",
            "example": ToolExample(input=example_input or {}, output={"success": True}),
        }
        fields.update(overrides)
        return ToolDefinition(**fields)

    return _make
