"""Server host primitives backed by hashlib and uuid."""

import asyncio
import hashlib
import uuid

from tool_protocol.primitives.base import HostPrimitives, to_bytes

# Payloads at least this large are hashed off the event loop
OFFLOAD_THRESHOLD_BYTES = 1024 * 1024

_HASHLIB_NAMES = {
    "SHA-1": "sha1",
    "SHA-256": "sha256",
    "SHA-384": "sha384",
    "SHA-512": "sha512",
    "MD5": "md5",
}


class ServerPrimitives(HostPrimitives):
    """Primitives for a regular CPython process."""

    name = "server"
    algorithms = frozenset(_HASHLIB_NAMES)

    async def digest(self, data: str | bytes, algorithm: str = "SHA-256") -> bytes:
        """Hash with hashlib; large payloads are hashed in a worker thread."""
        hashlib_name = _HASHLIB_NAMES[self._require(algorithm)]
        raw = to_bytes(data)
        if len(raw) >= OFFLOAD_THRESHOLD_BYTES:
            return await asyncio.to_thread(self._hash, hashlib_name, raw)
        return self._hash(hashlib_name, raw)

    @staticmethod
    def _hash(hashlib_name: str, raw: bytes) -> bytes:
        return hashlib.new(hashlib_name, raw).digest()

    def random_id(self) -> str:
        """Random UUID v4 from the OS random source."""
        return str(uuid.uuid4())

    def features(self) -> dict[str, bool]:
        """Server capabilities."""
        return {
            "hashlib": True,
            "md5": "md5" in hashlib.algorithms_available,
            "thread_offload": True,
        }
