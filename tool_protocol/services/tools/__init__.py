"""Example tool implementations."""

from tool_protocol.models import ToolDefinition
from tool_protocol.primitives import HostPrimitives
from tool_protocol.services.base import ToolFunction
from tool_protocol.services.registry import ToolRegistry
from tool_protocol.services.tools.base64_encoder import BASE64_ENCODER_DEFINITION, base64_encode
from tool_protocol.services.tools.echo_upper import EchoUpperTool
from tool_protocol.services.tools.hash_generator import HASH_GENERATOR_DEFINITION, generate_hash
from tool_protocol.services.tools.json_formatter import JSON_FORMATTER_DEFINITION, format_json
from tool_protocol.services.tools.uuid_generator import UuidGeneratorTool

EXAMPLE_TOOLS: list[tuple[ToolDefinition, ToolFunction]] = [
    (EchoUpperTool.definition, EchoUpperTool()),
    (JSON_FORMATTER_DEFINITION, format_json),
    (BASE64_ENCODER_DEFINITION, base64_encode),
    (HASH_GENERATOR_DEFINITION, generate_hash),
    (UuidGeneratorTool.definition, UuidGeneratorTool()),
]


def register_example_tools(registry: ToolRegistry) -> int:
    """
    Register every example tool in ``registry``.

    Returns:
        Count of registered tools

    Raises:
        DuplicateToolError: If an example tool id is already registered
    """
    for definition, fn in EXAMPLE_TOOLS:
        registry.register(definition, fn)
    return len(EXAMPLE_TOOLS)


def create_example_registry(primitives: HostPrimitives | None = None) -> ToolRegistry:
    """Create a registry with all example tools pre-registered."""
    registry = ToolRegistry(primitives)
    register_example_tools(registry)
    return registry


__all__ = [
    "EXAMPLE_TOOLS",
    "EchoUpperTool",
    "UuidGeneratorTool",
    "base64_encode",
    "create_example_registry",
    "format_json",
    "generate_hash",
    "register_example_tools",
]
