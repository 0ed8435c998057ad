"""
Dual-environment primitives.

The host is probed once per process and one provider is kept for the rest
of it; tool code never checks the environment itself.
"""

import logging
import sys

from tool_protocol.config import settings
from tool_protocol.primitives.base import (
    HostName,
    HostPrimitives,
    is_valid_uuid,
    normalize_algorithm,
)
from tool_protocol.primitives.client import WebCryptoPrimitives
from tool_protocol.primitives.server import ServerPrimitives

logger = logging.getLogger(__name__)

_active: HostPrimitives | None = None


def detect_environment() -> HostName:
    """Return ``client`` inside a browser (Pyodide/Emscripten), else ``server``."""
    if sys.platform == "emscripten":
        return "client"
    return "server"


def create_primitives(environment: HostName) -> HostPrimitives:
    """Instantiate the provider for ``environment``."""
    if environment == "client":
        return WebCryptoPrimitives()
    return ServerPrimitives()


def get_primitives() -> HostPrimitives:
    """
    Return the process-wide primitives provider.

    The first call probes the host (or honours ``settings.environment``) and
    caches the provider.
    """
    global _active
    if _active is None:
        environment = detect_environment() if settings.environment == "auto" else settings.environment
        _active = create_primitives(environment)
        logger.info(f"Using {_active.name} host primitives: {_active.features()}")
    return _active


def reset_primitives() -> None:
    """Forget the cached provider (useful for testing)."""
    global _active
    _active = None


__all__ = [
    "HostName",
    "HostPrimitives",
    "ServerPrimitives",
    "WebCryptoPrimitives",
    "create_primitives",
    "detect_environment",
    "get_primitives",
    "is_valid_uuid",
    "normalize_algorithm",
    "reset_primitives",
]
