"""
Process-wide default registry, for quick starts and scripts only.

Library code always receives an explicit ``ToolRegistry``; nothing in
``tool_protocol`` itself reads this module.
"""

from collections.abc import Mapping
from typing import Any

from tool_protocol.models import ToolDefinition, ToolResult
from tool_protocol.services.base import ToolFunction
from tool_protocol.services.registry import ToolRegistry

_default_registry: ToolRegistry | None = None


def get_default_registry() -> ToolRegistry:
    """Get or create the default registry."""
    global _default_registry
    if _default_registry is None:
        _default_registry = ToolRegistry()
    return _default_registry


def reset_default_registry() -> None:
    """Drop the default registry (useful for testing)."""
    global _default_registry
    _default_registry = None


def register_tool(definition: ToolDefinition | Mapping[str, Any], fn: ToolFunction) -> ToolDefinition:
    """Register a tool in the default registry."""
    return get_default_registry().register(definition, fn)


async def execute_tool(tool_id: str, params: Any = None) -> ToolResult:
    """Execute a tool from the default registry."""
    return await get_default_registry().execute(tool_id, params)
