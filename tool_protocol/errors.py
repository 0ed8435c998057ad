"""Exception hierarchy for tool-protocol.

Exceptions are only raised at registration time or for programming errors.
``ToolRegistry.execute`` never raises them; callers always get a
``ToolFailure`` instead. The hierarchy is:

    ToolProtocolError
    ├── DefinitionError(tool_id, errors)
    │   └── DuplicateToolError(tool_id)
    ├── UnsupportedParamsError(message, key)
    ├── InvalidResultError
    └── UnsupportedAlgorithmError(algorithm, provider)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tool_protocol.models import FieldError


class ToolProtocolError(Exception):
    """Base exception for all tool-protocol errors."""


class DefinitionError(ToolProtocolError, ValueError):
    """A tool definition failed validation."""

    def __init__(self, tool_id: str | None, errors: list[FieldError]) -> None:
        self.tool_id = tool_id
        self.errors = errors
        details = ", ".join(f"{e.field}: {e.message}" for e in errors)
        super().__init__(f"Invalid tool definition for '{tool_id}': {details}")


class DuplicateToolError(DefinitionError):
    """A tool with the same id is already registered."""

    def __init__(self, tool_id: str) -> None:
        self.tool_id = tool_id
        self.errors = []
        ToolProtocolError.__init__(self, f"Tool '{tool_id}' is already registered")


class UnsupportedParamsError(ToolProtocolError, TypeError):
    """Raw parameters are not a supported container, or hold an unreadable value."""

    def __init__(self, message: str, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)


class InvalidResultError(ToolProtocolError, TypeError):
    """A tool returned something that is not a tool result."""


class UnsupportedAlgorithmError(ToolProtocolError, ValueError):
    """The active host primitives cannot compute the requested digest."""

    def __init__(self, algorithm: str, provider: str) -> None:
        self.algorithm = algorithm
        self.provider = provider
        super().__init__(f"Hash algorithm '{algorithm}' is not supported on {provider}")
