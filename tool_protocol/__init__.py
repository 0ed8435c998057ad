"""
Validation, execution and registry runtime for small single-purpose tools.

Typical use::

    registry = ToolRegistry()
    registry.register(definition, fn)
    result = await registry.execute("echo-upper", {"text": "hi"})
"""

from tool_protocol.errors import (
    DefinitionError,
    DuplicateToolError,
    InvalidResultError,
    ToolProtocolError,
    UnsupportedAlgorithmError,
    UnsupportedParamsError,
)
from tool_protocol.models import (
    PROTOCOL_VERSION,
    ErrorCode,
    ExecutionMode,
    FieldError,
    FieldErrorCode,
    FieldOption,
    FieldType,
    NormalizedParams,
    ParameterSchema,
    ResultMetadata,
    ToolDefinition,
    ToolExample,
    ToolFailure,
    ToolMethod,
    ToolResult,
    ToolStatus,
    ToolSuccess,
    VisibleWhen,
)
from tool_protocol.normalizer import get_default_params, merge_defaults, normalize_params
from tool_protocol.primitives import HostPrimitives, get_primitives
from tool_protocol.services.base import (
    BaseTool,
    ToolFunction,
    define_tool,
    failure,
    is_failure,
    is_success,
    success,
)
from tool_protocol.services.batch import (
    BatchRequest,
    BatchResult,
    execute_batch,
    execute_sequential,
    execute_with_timeout,
)
from tool_protocol.services.registry import RegistryEntry, ToolRegistry
from tool_protocol.validators import (
    coerce_boolean,
    validate_definition,
    validate_parameter_value,
    validate_parameters,
    validate_result,
)

__version__ = "0.1.0"

__all__ = [
    "PROTOCOL_VERSION",
    "BaseTool",
    "BatchRequest",
    "BatchResult",
    "DefinitionError",
    "DuplicateToolError",
    "ErrorCode",
    "ExecutionMode",
    "FieldError",
    "FieldErrorCode",
    "FieldOption",
    "FieldType",
    "HostPrimitives",
    "InvalidResultError",
    "NormalizedParams",
    "ParameterSchema",
    "RegistryEntry",
    "ResultMetadata",
    "ToolDefinition",
    "ToolExample",
    "ToolFailure",
    "ToolFunction",
    "ToolMethod",
    "ToolProtocolError",
    "ToolRegistry",
    "ToolResult",
    "ToolStatus",
    "ToolSuccess",
    "UnsupportedAlgorithmError",
    "UnsupportedParamsError",
    "VisibleWhen",
    "coerce_boolean",
    "define_tool",
    "execute_batch",
    "execute_sequential",
    "execute_with_timeout",
    "failure",
    "get_default_params",
    "get_primitives",
    "is_failure",
    "is_success",
    "merge_defaults",
    "normalize_params",
    "success",
    "validate_definition",
    "validate_parameter_value",
    "validate_parameters",
    "validate_result",
]
