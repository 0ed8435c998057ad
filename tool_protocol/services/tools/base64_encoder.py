"""
Base64 encoder/decoder tool.

The definition is written as a plain mapping in wire (camelCase) form and
validated with ``define_tool``.
"""

import binascii

from tool_protocol.models import ErrorCode, NormalizedParams, ResultMetadata, ToolResult
from tool_protocol.primitives import get_primitives
from tool_protocol.services.base import define_tool, failure, success
from tool_protocol.validators import coerce_boolean

BASE64_ENCODER_DEFINITION = define_tool({
    "id": "base64-encoder",
    "name": "Base64 Encoder/Decoder",
    "description": (
        "Encode text to Base64 or decode Base64 back to text. "
        "Supports UTF-8 encoding for international characters."
    ),
    "category": "encoders",
    "tags": ["base64", "encode", "decode", "text", "binary"],
    "method": "POST",
    "parameters": [
        {
            "name": "input",
            "type": "textarea",
            "label": "Input",
            "description": "Text to encode or Base64 string to decode",
            "required": True,
            "placeholder": "Hello, World!",
            "minLength": 1,
            "maxLength": 500_000,
        },
        {
            "name": "mode",
            "type": "select",
            "label": "Mode",
            "description": "Operation to perform",
            "default": "encode",
            "options": [
                {"value": "encode", "label": "Encode", "description": "Convert text to Base64"},
                {"value": "decode", "label": "Decode", "description": "Convert Base64 to text"},
            ],
        },
        {
            "name": "urlSafe",
            "type": "boolean",
            "label": "URL Safe",
            "description": "Use URL-safe Base64 variant (replaces +/ with -_)",
            "default": False,
        },
    ],
    "outputDescription": "Encoded Base64 string or decoded text",
    "example": {
        "name": "Encode a simple greeting to Base64",
        "input": {"input": "Hello, World!", "mode": "encode", "urlSafe": False},
        "output": {
            "success": True,
            "output": "SGVsbG8sIFdvcmxkIQ==",
            "mode": "encode",
            "inputLength": 13,
            "outputLength": 20,
        },
    },
    "version": "1.0.0",
    "relatedTools": ["hash-generator"],
})


def base64_encode(params: NormalizedParams) -> ToolResult:
    """Encode or decode Base64 with the host's binary-to-text primitive."""
    primitives = get_primitives()
    text = params["input"]
    mode = params.get("mode") or "encode"
    url_safe = coerce_boolean(params.get("urlSafe"))

    if mode == "encode":
        output = primitives.encode_binary_text(text, url_safe=url_safe)
    else:
        try:
            output = primitives.decode_binary_text(text, url_safe=url_safe).decode("utf-8")
        except (binascii.Error, ValueError) as e:
            return failure(f"Invalid Base64 input: {e}", ErrorCode.INVALID_INPUT)

    return success(
        output=output,
        mode=mode,
        inputLength=len(text),
        outputLength=len(output),
        metadata=ResultMetadata(input_size=len(text), output_size=len(output)),
    )
