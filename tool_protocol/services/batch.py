"""
Batch execution over a registry.

``execute_batch`` runs independent requests concurrently and reports each
outcome separately. ``execute_sequential`` runs a dependent chain in order
and stops at the first failure.
"""

import asyncio
import logging
import time
from typing import Any

from pydantic import BaseModel, Field

from tool_protocol.models import ErrorCode, ToolFailure, ToolResult
from tool_protocol.services.registry import ToolRegistry

logger = logging.getLogger(__name__)


class BatchRequest(BaseModel):
    """One tool invocation in a batch."""

    id: str = Field(description="Caller-chosen request id, echoed in the result")
    tool_id: str = Field(description="Registered tool to execute")
    params: Any = Field(default=None, description="Raw parameters in any supported shape")


class BatchResult(BaseModel):
    """Outcome of one batch request."""

    id: str
    tool_id: str
    result: ToolResult

    @property
    def success(self) -> bool:
        """Whether the underlying result succeeded."""
        return self.result.success


async def _run(registry: ToolRegistry, request: BatchRequest) -> BatchResult:
    result = await registry.execute(request.tool_id, request.params)
    return BatchResult(id=request.id, tool_id=request.tool_id, result=result)


async def execute_batch(registry: ToolRegistry, requests: list[BatchRequest]) -> list[BatchResult]:
    """
    Execute all requests concurrently.

    Every request is issued at once, without throttling; callers size their
    batches. Failures stay per item and never cancel the other requests.

    Args:
        registry: Registry to execute against
        requests: Requests to run

    Returns:
        One result per request, in request order
    """
    results = await asyncio.gather(*(_run(registry, request) for request in requests))
    failed = sum(1 for r in results if not r.success)
    logger.debug(f"Batch finished: {len(results)} requests, {failed} failed")
    return list(results)


async def execute_sequential(registry: ToolRegistry, requests: list[BatchRequest]) -> list[BatchResult]:
    """
    Execute requests in order, stopping at the first failure.

    Args:
        registry: Registry to execute against
        requests: Requests to run, in dependency order

    Returns:
        Results produced so far, ending with the failing one if any
    """
    results: list[BatchResult] = []
    for request in requests:
        batch_result = await _run(registry, request)
        results.append(batch_result)
        if not batch_result.success:
            logger.info(
                f"Sequential batch stopped at request {request.id} "
                f"({len(results)}/{len(requests)} executed)"
            )
            break
    return results


async def execute_with_timeout(
    registry: ToolRegistry,
    tool_id: str,
    params: Any = None,
    timeout: float = 30.0,
) -> ToolResult:
    """
    Execute a tool, giving up after ``timeout`` seconds.

    The registry imposes no timeout of its own; this helper races the
    execution against a timer and cancels it when the timer wins.

    Returns:
        The tool's result, or a ``TIMEOUT`` failure stamped with metadata
    """
    start = time.perf_counter()
    try:
        return await asyncio.wait_for(registry.execute(tool_id, params), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"Tool {tool_id} timed out after {timeout}s")
        result = ToolFailure(
            error=f"Operation timed out after {timeout * 1000:.0f}ms",
            error_code=ErrorCode.TIMEOUT,
        )
        return registry.stamp_metadata(result, tool_id, start)
