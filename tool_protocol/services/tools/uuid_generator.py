"""UUID generator tool."""

from tool_protocol.models import (
    FieldType,
    NormalizedParams,
    ParameterSchema,
    ToolDefinition,
    ToolExample,
    ToolMethod,
    ToolResult,
)
from tool_protocol.primitives import get_primitives
from tool_protocol.services.base import BaseTool, success
from tool_protocol.validators import coerce_boolean


class UuidGeneratorTool(BaseTool):
    """Generate random v4 UUIDs with the host's random-id primitive."""

    definition = ToolDefinition(
        id="uuid-generator",
        name="UUID Generator",
        description="Generate one or more random version 4 UUIDs.",
        category="generators",
        tags=("uuid", "guid", "random", "id"),
        method=ToolMethod.GET,
        parameters=(
            ParameterSchema(
                name="count",
                type=FieldType.NUMBER,
                label="Count",
                description="How many UUIDs to generate",
                default=1,
                min=1,
                max=100,
                step=1,
            ),
            ParameterSchema(
                name="uppercase",
                type=FieldType.BOOLEAN,
                label="Uppercase",
                description="Return upper-case hex digits",
                default=False,
            ),
        ),
        output_description="List of generated UUID strings",
        example=ToolExample(
            input={"count": 1},
            output={"success": True, "uuids": ["3f2b8c1e-9d4a-4b7e-8f6a-2c1d0e9b8a7f"], "count": 1},
        ),
        version="1.0.0",
    )

    def run(self, params: NormalizedParams) -> ToolResult:
        primitives = get_primitives()
        count = int(float(params.get("count") or 1))
        uuids = [primitives.random_id() for _ in range(count)]
        if coerce_boolean(params.get("uppercase")):
            uuids = [u.upper() for u in uuids]
        return success(uuids=uuids, count=count)
