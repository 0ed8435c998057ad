"""Hash generator tool (async: digests may suspend on the host)."""

import time

from tool_protocol.models import (
    FieldOption,
    FieldType,
    NormalizedParams,
    ParameterSchema,
    ResultMetadata,
    ToolDefinition,
    ToolExample,
    ToolMethod,
    ToolResult,
)
from tool_protocol.primitives import get_primitives
from tool_protocol.services.base import success

HASH_GENERATOR_DEFINITION = ToolDefinition(
    id="hash-generator",
    name="Hash Generator",
    description=(
        "Generate cryptographic hashes using SHA-1, SHA-256, SHA-384, or SHA-512. "
        "Supports hex and Base64 output formats."
    ),
    category="generators",
    tags=("hash", "sha256", "sha512", "checksum", "crypto"),
    method=ToolMethod.POST,
    parameters=(
        ParameterSchema(
            name="input",
            type=FieldType.TEXTAREA,
            label="Input Text",
            description="Text to hash",
            required=True,
            min_length=1,
            max_length=1_000_000,
        ),
        ParameterSchema(
            name="algorithm",
            type=FieldType.SELECT,
            label="Algorithm",
            description="Hash algorithm to use",
            default="SHA-256",
            options=(
                FieldOption(value="SHA-1", label="SHA-1", description="160-bit (not secure, legacy only)"),
                FieldOption(value="SHA-256", label="SHA-256", description="256-bit (recommended)"),
                FieldOption(value="SHA-384", label="SHA-384", description="384-bit"),
                FieldOption(value="SHA-512", label="SHA-512", description="512-bit (strongest)"),
            ),
        ),
        ParameterSchema(
            name="format",
            type=FieldType.SELECT,
            label="Output Format",
            description="How to format the hash output",
            default="hex",
            options=(
                FieldOption(value="hex", label="Hexadecimal", description="Lowercase hex string"),
                FieldOption(value="base64", label="Base64", description="Base64 encoded string"),
            ),
        ),
    ),
    output_description="Cryptographic hash of the input text",
    example=ToolExample(
        input={"input": "hello world", "algorithm": "SHA-256", "format": "hex"},
        output={
            "success": True,
            "hash": "b94d27b9934d3e08a52e52d7da7dabfac484efe37a5380ee9088f7ace2efcde9",
            "algorithm": "SHA-256",
            "format": "hex",
            "inputLength": 11,
        },
        name='Generate SHA-256 hash of "hello world"',
    ),
    version="1.0.0",
    related_tools=("uuid-generator",),
)


async def generate_hash(params: NormalizedParams) -> ToolResult:
    """Hash the input with the host's digest primitive."""
    start = time.perf_counter()
    primitives = get_primitives()
    text = params["input"]
    algorithm = params.get("algorithm") or "SHA-256"
    output_format = params.get("format") or "hex"

    raw = await primitives.digest(text, algorithm)
    digest = primitives.encode_binary_text(raw) if output_format == "base64" else raw.hex()

    warnings = None
    if algorithm == "SHA-1":
        warnings = ["SHA-1 is deprecated for security purposes. Consider using SHA-256."]

    return success(
        hash=digest,
        algorithm=algorithm,
        format=output_format,
        inputLength=len(text),
        metadata=ResultMetadata(
            execution_time_ms=(time.perf_counter() - start) * 1000,
            input_size=len(text),
            output_size=len(digest),
            warnings=warnings,
        ),
    )
