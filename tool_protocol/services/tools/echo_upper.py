"""Example tool for testing and demonstration."""

from tool_protocol.models import (
    FieldType,
    NormalizedParams,
    ParameterSchema,
    ToolDefinition,
    ToolExample,
    ToolMethod,
    ToolSuccess,
)
from tool_protocol.services.base import BaseTool, success


class EchoUpperTool(BaseTool):
    """
    Example tool that echoes its input in upper case.

    Useful for testing the execution pipeline.
    """

    definition = ToolDefinition(
        id="echo-upper",
        name="Echo Upper",
        description="Echo the input text back in upper case",
        category="example",
        tags=("example", "test", "text"),
        method=ToolMethod.GET,
        parameters=(
            ParameterSchema(
                name="text",
                type=FieldType.TEXT,
                label="Text",
                description="Text to echo",
                required=True,
            ),
        ),
        output_description="The input text in upper case",
        example=ToolExample(
            input={"text": "hi"},
            output={"success": True, "output": "HI"},
            name="Shout a greeting",
        ),
    )

    def run(self, params: NormalizedParams) -> ToolSuccess:
        """
        Upper-case the text.

        Args:
            params: Must contain ``text``

        Returns:
            Success with ``output``
        """
        return success(output=params["text"].upper())
