"""
Browser host primitives for Pyodide.

Digests and random ids come from the page's Web Crypto API, reached through
Pyodide's ``js`` bridge. Web Crypto only implements the SHA family, so MD5 is
not available here.
"""

from typing import Any

from tool_protocol.primitives.base import HostPrimitives, to_bytes


class WebCryptoPrimitives(HostPrimitives):
    """
    Primitives backed by ``crypto.subtle`` and ``crypto.randomUUID``.

    Args:
        crypto: The Web Crypto object; defaults to the browser global
    """

    name = "client"
    algorithms = frozenset({"SHA-1", "SHA-256", "SHA-384", "SHA-512"})

    def __init__(self, crypto: Any = None) -> None:
        if crypto is None:
            from js import crypto  # Pyodide bridge to the browser global
        self._crypto = crypto

    def _to_js(self, raw: bytes) -> Any:
        from pyodide.ffi import to_js

        return to_js(raw)

    def _from_js(self, buffer: Any) -> bytes:
        from js import Uint8Array

        return bytes(Uint8Array.new(buffer).to_py())

    async def digest(self, data: str | bytes, algorithm: str = "SHA-256") -> bytes:
        """Hash with ``crypto.subtle.digest``; suspends until the browser resolves it."""
        canonical = self._require(algorithm)
        buffer = await self._crypto.subtle.digest(canonical, self._to_js(to_bytes(data)))
        return self._from_js(buffer)

    def random_id(self) -> str:
        """UUID v4 from ``crypto.randomUUID``."""
        return str(self._crypto.randomUUID())

    def features(self) -> dict[str, bool]:
        """Web APIs available on this page."""
        subtle = getattr(self._crypto, "subtle", None)
        return {
            "web_crypto": subtle is not None,
            "random_uuid": callable(getattr(self._crypto, "randomUUID", None)),
            "md5": False,
        }
