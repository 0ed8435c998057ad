"""Pydantic models for tool definitions, parameters and results."""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic.alias_generators import to_camel

PROTOCOL_VERSION = "1.0.0"

TOOL_ID_PATTERN = r"^[a-z0-9]+(-[a-z0-9]+)*$"

# Flat string map handed to every tool implementation
NormalizedParams = dict[str, str | None]


class ProtocolModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─── Parameter schema ─────────────────────────────────────────


class FieldType(str, Enum):
    """Closed set of parameter field types."""

    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SELECT = "select"
    JSON = "json"
    FILE = "file"
    COLOR = "color"
    DATE = "date"
    DATETIME = "datetime"
    URL = "url"
    EMAIL = "email"


TEXT_FIELD_TYPES = frozenset({FieldType.TEXT, FieldType.TEXTAREA})


class FieldOption(ProtocolModel):
    """One choice of a select field."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(description="Value sent in the API call")
    label: str = Field(description="Human-readable label")
    description: str | None = Field(default=None, description="Optional help text")


class VisibleWhen(ProtocolModel):
    """Show a parameter only when another parameter has (or lacks) a value."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(description="Name of the parameter this one depends on")
    equals: Any = Field(default=None, description="Visible when the dependency equals this")
    not_equals: Any = Field(default=None, description="Visible unless the dependency equals this")


class ParameterSchema(ProtocolModel):
    """Declarative description of one tool parameter."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Parameter name used in API calls")
    type: FieldType = Field(description="Field type driving validation and UI")
    required: bool = Field(default=False, description="Whether the parameter must be supplied")
    label: str | None = Field(default=None, description="Human-readable label")
    description: str = Field(default="", description="What the parameter is for")
    placeholder: str | None = None
    default: Any = Field(default=None, description="Value merged in when the caller omits it")

    # Constraints
    min: float | None = Field(default=None, description="Minimum value (number)")
    max: float | None = Field(default=None, description="Maximum value (number)")
    min_length: int | None = Field(default=None, description="Minimum length (text types)")
    max_length: int | None = Field(default=None, description="Maximum length (text types)")
    pattern: str | None = Field(default=None, description="Regex the value must match")
    pattern_error: str | None = Field(default=None, description="Message when pattern fails")
    options: tuple[FieldOption, ...] | None = Field(default=None, description="Choices (select)")
    multiple: bool = Field(default=False, description="Comma-separated multi-select")

    # UI hints
    step: float | None = None
    rows: int | None = None
    hidden: bool = False
    deprecated: bool = False
    deprecation_message: str | None = None
    visible_when: VisibleWhen | None = None

    @property
    def display_label(self) -> str:
        """Label used in error messages."""
        return self.label or self.name


# ─── Tool definition ──────────────────────────────────────────


class ToolMethod(str, Enum):
    """Read-only (GET) or mutating (POST) tool."""

    GET = "GET"
    POST = "POST"


class ExecutionMode(str, Enum):
    """Where a tool is able to run."""

    CLIENT = "client"
    SERVER = "server"
    BOTH = "both"
    HYBRID = "hybrid"


class ToolStatus(str, Enum):
    """Availability of a tool."""

    AVAILABLE = "available"
    BETA = "beta"
    COMING_SOON = "coming-soon"
    DEPRECATED = "deprecated"
    MAINTENANCE = "maintenance"


class ToolExample(ProtocolModel):
    """Worked example: input parameters and the expected output."""

    model_config = ConfigDict(frozen=True)

    input: dict[str, Any] = Field(description="Example input parameters")
    output: dict[str, Any] = Field(description="Expected output, including 'success'")
    name: str | None = Field(default=None, description="What the example demonstrates")


class ToolDefinition(ProtocolModel):
    """
    Identity, parameter schema and worked example of one tool.

    Created once by the tool author, validated at registration and never
    modified afterwards.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique lowercase hyphenated slug")
    name: str = Field(description="Human-readable tool name")
    description: str = Field(description="Tool description for users and LLMs")
    category: str = Field(description="Category for organization")
    tags: tuple[str, ...] = Field(description="Search/discovery tags")
    method: ToolMethod = Field(description="GET (read-only) or POST (mutating)")
    parameters: tuple[ParameterSchema, ...] = Field(description="Parameter schema")
    output_description: str = Field(description="Description of the output format")
    example: ToolExample = Field(description="Worked example")
    examples: tuple[ToolExample, ...] = Field(default=(), description="Additional examples")

    execution_mode: ExecutionMode = ExecutionMode.BOTH
    version: str | None = None
    icon: str | None = None
    related_tools: tuple[str, ...] = ()
    status: ToolStatus = ToolStatus.AVAILABLE
    deprecated: bool = False
    deprecation_message: str | None = None
    replaced_by: str | None = None

    def parameter(self, name: str) -> ParameterSchema | None:
        """Return the parameter schema named ``name``, if declared."""
        for param in self.parameters:
            if param.name == name:
                return param
        return None


# ─── Validation errors ────────────────────────────────────────


class FieldErrorCode(str, Enum):
    """Kind of a single validation failure."""

    REQUIRED = "required"
    TYPE = "type"
    MIN = "min"
    MAX = "max"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    PATTERN = "pattern"
    CUSTOM = "custom"


class FieldError(ProtocolModel):
    """One validation failure on one field."""

    field: str = Field(description="Parameter (or definition path) that failed")
    message: str = Field(description="Human-readable message")
    code: FieldErrorCode = Field(description="Error kind")
    received: Any = Field(default=None, description="Offending value, truncated")
    expected: Any = Field(default=None, description="Constraint that was violated")


# ─── Results ──────────────────────────────────────────────────


class ErrorCode(str, Enum):
    """Closed vocabulary of failure kinds."""

    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    EXECUTION_ERROR = "EXECUTION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_REQUIRED = "MISSING_REQUIRED"
    TIMEOUT = "TIMEOUT"


class ResultMetadata(ProtocolModel):
    """
    Metadata attached to a result.

    Tools may fill the sizing fields; the registry stamps the provenance
    fields (tool_id through executed_on) on every result it returns.
    """

    execution_time_ms: float | None = None
    input_size: int | None = None
    output_size: int | None = None
    warnings: list[str] | None = None

    tool_id: str | None = None
    protocol_version: str | None = None
    timestamp: str | None = None
    duration_ms: float | None = None
    executed_on: Literal["client", "server"] | None = None


class ToolSuccess(ProtocolModel):
    """Successful result. The tool payload lives in extra top-level keys."""

    model_config = ConfigDict(extra="allow")

    success: Literal[True] = True
    metadata: ResultMetadata | None = None

    @property
    def payload(self) -> dict[str, Any]:
        """Tool-specific output fields."""
        return dict(self.model_extra or {})

    def to_dict(self) -> dict[str, Any]:
        """Render the wire shape ``{success: true, ...payload, metadata?}``."""
        data = self.model_dump(by_alias=True, mode="json", exclude={"metadata"})
        if self.metadata is not None:
            data["metadata"] = self.metadata.model_dump(by_alias=True, mode="json", exclude_none=True)
        return data


class ToolFailure(ProtocolModel):
    """Failed result with a message and an error kind."""

    success: Literal[False] = False
    error: str = Field(description="Human-readable error message")
    error_code: ErrorCode | None = Field(default=None, description="Programmatic error kind")
    validation_errors: list[FieldError] | None = None
    metadata: ResultMetadata | None = None

    _raised: bool = PrivateAttr(default=False)

    @property
    def raised(self) -> bool:
        """True when the failure came from an exception escaping the tool body."""
        return self._raised

    def to_dict(self) -> dict[str, Any]:
        """Render the wire shape ``{success: false, error, errorCode?, ...}``."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


ToolResult = ToolSuccess | ToolFailure
