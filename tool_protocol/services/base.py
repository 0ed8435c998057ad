"""Execution contract: tool function signature, result helpers and base class."""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import ValidationError

from tool_protocol.errors import DefinitionError, InvalidResultError
from tool_protocol.models import (
    ErrorCode,
    NormalizedParams,
    ResultMetadata,
    ToolDefinition,
    ToolFailure,
    ToolResult,
    ToolSuccess,
)
from tool_protocol.validators import validate_definition, validate_result

if TYPE_CHECKING:
    from tool_protocol.services.registry import ToolRegistry

# A tool maps normalized parameters to a result, immediately or deferred
ToolFunction = Callable[[NormalizedParams], ToolResult | Awaitable[ToolResult]]


def success(metadata: ResultMetadata | Mapping[str, Any] | None = None, **payload: Any) -> ToolSuccess:
    """Build a successful result whose payload keys sit at the top level."""
    return ToolSuccess(metadata=metadata, **payload)


def failure(
    error: str,
    error_code: ErrorCode | str | None = None,
    metadata: ResultMetadata | Mapping[str, Any] | None = None,
) -> ToolFailure:
    """Build a failed result."""
    return ToolFailure(error=error, error_code=error_code, metadata=metadata)


def is_success(result: ToolResult) -> bool:
    """Whether ``result`` is a success."""
    return result.success is True


def is_failure(result: ToolResult) -> bool:
    """Whether ``result`` is a failure."""
    return result.success is False


def parse_result(value: Any) -> ToolResult:
    """
    Coerce a tool's return value into a result model.

    Tools may return a result model or a mapping shaped like the output
    contract (``{"success": True, ...}``).

    Raises:
        InvalidResultError: If ``value`` is not result-shaped
    """
    if isinstance(value, (ToolSuccess, ToolFailure)):
        return value

    errors = validate_result(value)
    if errors:
        details = "; ".join(e.message for e in errors)
        raise InvalidResultError(f"Tool returned an invalid result: {details}")

    model = ToolSuccess if value["success"] else ToolFailure
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise InvalidResultError(f"Tool returned an invalid result: {e}") from e


async def invoke(fn: ToolFunction, params: NormalizedParams) -> ToolResult:
    """
    Call a tool function and await its outcome when it is deferred.

    Sync and async tools are indistinguishable to the caller. Exceptions
    from the tool propagate; the registry decides what to do with them.
    """
    outcome = fn(params)
    if inspect.isawaitable(outcome):
        outcome = await outcome
    return parse_result(outcome)


def define_tool(definition: ToolDefinition | Mapping[str, Any]) -> ToolDefinition:
    """
    Validate a definition and return it as a model.

    Raises:
        DefinitionError: If the definition is invalid
    """
    errors = validate_definition(definition)
    if errors:
        tool_id = definition.id if isinstance(definition, ToolDefinition) else definition.get("id")
        raise DefinitionError(tool_id, errors)
    if isinstance(definition, ToolDefinition):
        return definition
    return ToolDefinition.model_validate(definition)


class BaseTool(ABC):
    """
    Base class for class-style tools.

    Subclasses provide a ``definition`` and implement ``run``, which may be a
    plain or an ``async`` method. Instances are ``ToolFunction``s.
    """

    definition: ClassVar[ToolDefinition]

    @property
    def id(self) -> str:
        """Tool id from the definition."""
        return self.definition.id

    @abstractmethod
    def run(self, params: NormalizedParams) -> ToolResult | Awaitable[ToolResult]:
        """
        Execute the tool.

        Args:
            params: Normalized, validated parameters with defaults merged

        Returns:
            Result model (or an awaitable of one); should not raise
        """

    def __call__(self, params: NormalizedParams) -> ToolResult | Awaitable[ToolResult]:
        return self.run(params)

    def register(self, registry: "ToolRegistry") -> ToolDefinition:
        """Register this tool in ``registry``."""
        return registry.register(self.definition, self)
