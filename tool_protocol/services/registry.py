"""Registry for tools: registration, lookup and the execution pipeline."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from tool_protocol.config import settings
from tool_protocol.errors import DefinitionError, DuplicateToolError, UnsupportedParamsError
from tool_protocol.models import (
    PROTOCOL_VERSION,
    ErrorCode,
    FieldError,
    FieldErrorCode,
    ResultMetadata,
    ToolDefinition,
    ToolFailure,
    ToolResult,
)
from tool_protocol.normalizer import merge_defaults, normalize_params
from tool_protocol.primitives import HostPrimitives, get_primitives
from tool_protocol.services.base import ToolFunction, define_tool, invoke
from tool_protocol.validators import validate_parameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RegistryEntry:
    """A registered definition and its implementation."""

    definition: ToolDefinition
    fn: ToolFunction


class ToolRegistry:
    """
    In-memory store of registered tools.

    Registration validates the definition and rejects duplicate ids, so a
    misconfigured tool never reaches a caller. ``execute`` runs the
    normalize -> merge defaults -> validate -> invoke -> stamp pipeline and
    always returns a result; it never raises for unknown tools, bad
    parameters or failing tools.

    The tool map is only written by ``register``; concurrent ``execute``
    calls share no other state and need no locking.

    Args:
        primitives: Host primitives; defaults to the provider probed for this process
    """

    def __init__(self, primitives: HostPrimitives | None = None) -> None:
        self._tools: dict[str, RegistryEntry] = {}
        self._primitives = primitives

    @property
    def primitives(self) -> HostPrimitives:
        """Host primitives used to report where tools execute."""
        if self._primitives is None:
            self._primitives = get_primitives()
        return self._primitives

    def register(self, definition: ToolDefinition | Mapping[str, Any], fn: ToolFunction) -> ToolDefinition:
        """
        Register a tool.

        Args:
            definition: Tool definition (model or raw mapping)
            fn: Implementation, sync or async

        Returns:
            The validated definition

        Raises:
            DefinitionError: If the definition is invalid
            DuplicateToolError: If a tool with the same id is already registered
            TypeError: If ``fn`` is not callable
        """
        try:
            definition = define_tool(definition)
        except DefinitionError as e:
            logger.error(f"Rejected tool definition: {e}")
            raise
        if not callable(fn):
            raise TypeError(f"Implementation for tool '{definition.id}' must be callable")
        if definition.id in self._tools:
            raise DuplicateToolError(definition.id)

        self._tools[definition.id] = RegistryEntry(definition=definition, fn=fn)
        logger.info(f"Registered tool: {definition.id} (category={definition.category})")
        return definition

    def get(self, tool_id: str) -> RegistryEntry | None:
        """
        Get a registered tool by id.

        Returns:
            Registry entry or None if not found
        """
        return self._tools.get(tool_id)

    def has(self, tool_id: str) -> bool:
        """Check if a tool is registered."""
        return tool_id in self._tools

    def list(self) -> list[str]:
        """List registered tool ids in registration order."""
        return list(self._tools)

    def definitions(self) -> list[ToolDefinition]:
        """All registered definitions, for discovery generators."""
        return [entry.definition for entry in self._tools.values()]

    def entries(self) -> list[RegistryEntry]:
        """All registry entries."""
        return list(self._tools.values())

    def get_by_category(self, category: str) -> list[RegistryEntry]:
        """Entries whose definition is in ``category``."""
        return [entry for entry in self._tools.values() if entry.definition.category == category]

    def search_by_tags(self, tags: Iterable[str]) -> list[RegistryEntry]:
        """Entries carrying any of ``tags`` (case-insensitive)."""
        wanted = {tag.lower() for tag in tags}
        return [
            entry
            for entry in self._tools.values()
            if any(tag.lower() in wanted for tag in entry.definition.tags)
        ]

    def clear(self) -> None:
        """Remove all tools (useful for testing)."""
        self._tools.clear()

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._tools

    async def execute(self, tool_id: str, params: Any = None) -> ToolResult:
        """
        Execute a registered tool.

        Args:
            tool_id: Id of the tool to run
            params: Mapping, query-string multi-map, form data or None

        Returns:
            Success or failure result, stamped with execution metadata
        """
        start = time.perf_counter()
        entry = self._tools.get(tool_id)
        if entry is None:
            logger.info(f"Tool not found: {tool_id}")
            result = ToolFailure(error=f"Tool not found: {tool_id}", error_code=ErrorCode.TOOL_NOT_FOUND)
            return self.stamp_metadata(result, tool_id, start)

        try:
            normalized = normalize_params(params)
        except UnsupportedParamsError as e:
            result = ToolFailure(
                error="Validation failed",
                error_code=ErrorCode.VALIDATION_ERROR,
                validation_errors=[FieldError(field=e.key or "params", message=str(e), code=FieldErrorCode.TYPE)],
            )
            return self.stamp_metadata(result, tool_id, start)

        merged = merge_defaults(normalized, entry.definition)
        errors = validate_parameters(merged, entry.definition)
        if errors:
            logger.info(f"Validation failed for tool {tool_id}: {[e.field for e in errors]}")
            result = ToolFailure(
                error="Validation failed",
                error_code=ErrorCode.VALIDATION_ERROR,
                validation_errors=errors,
            )
            return self.stamp_metadata(result, tool_id, start)

        if settings.log_tool_params:
            logger.debug(f"Executing tool: {tool_id} with params: {merged}")
        else:
            logger.debug(f"Executing tool: {tool_id}")

        try:
            result = await invoke(entry.fn, merged)
        except Exception as e:
            # A tool body must not raise; this is a contract violation by the tool author
            logger.exception(f"Tool raised during execution: {tool_id}")
            result = ToolFailure(error=str(e) or type(e).__name__, error_code=ErrorCode.EXECUTION_ERROR)
            result._raised = True
            return self.stamp_metadata(result, tool_id, start)

        if isinstance(result, ToolFailure):
            logger.info(f"Tool reported failure: {tool_id}, error: {result.error}")
            if result.error_code is None:
                result = result.model_copy(update={"error_code": ErrorCode.EXECUTION_ERROR})

        return self.stamp_metadata(result, tool_id, start)

    def stamp_metadata(self, result: ToolResult, tool_id: str, start: float) -> ToolResult:
        """Merge provenance metadata over any metadata the tool supplied."""
        duration_ms = max(0.0, (time.perf_counter() - start) * 1000)
        base = result.metadata or ResultMetadata()
        metadata = base.model_copy(update={
            "tool_id": tool_id,
            "protocol_version": PROTOCOL_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "duration_ms": duration_ms,
            "executed_on": self.primitives.name,
        })
        stamped = result.model_copy(update={"metadata": metadata})
        if isinstance(result, ToolFailure):
            stamped._raised = result._raised
        return stamped
