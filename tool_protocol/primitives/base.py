"""Host primitives interface shared by the server and client providers."""

import base64
import re
from abc import ABC, abstractmethod
from typing import ClassVar, Literal

from tool_protocol.errors import UnsupportedAlgorithmError

HostName = Literal["server", "client"]

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def normalize_algorithm(algorithm: str) -> str:
    """
    Canonicalize a hash algorithm name.

    ``sha256``, ``SHA256`` and ``SHA-256`` all become ``SHA-256``; ``md5``
    becomes ``MD5``.
    """
    name = algorithm.strip().upper().replace("_", "-")
    if name.startswith("SHA") and not name.startswith("SHA-"):
        name = f"SHA-{name[3:]}"
    return name


def to_bytes(data: str | bytes) -> bytes:
    """Encode text as UTF-8; pass bytes through."""
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


def is_valid_uuid(value: str) -> bool:
    """Check for an RFC 4122 UUID (versions 1-5)."""
    return bool(_UUID_RE.match(value))


class HostPrimitives(ABC):
    """
    Hashing, binary-to-text encoding and random-id generation for one host.

    Tool bodies call these instead of host APIs so the same body runs on a
    server interpreter and inside a browser. One provider is chosen per
    process by :func:`tool_protocol.primitives.get_primitives`.
    """

    name: ClassVar[HostName]
    algorithms: ClassVar[frozenset[str]]

    def supports(self, algorithm: str) -> bool:
        """Whether ``digest`` can compute ``algorithm`` on this host."""
        return normalize_algorithm(algorithm) in self.algorithms

    def _require(self, algorithm: str) -> str:
        canonical = normalize_algorithm(algorithm)
        if canonical not in self.algorithms:
            raise UnsupportedAlgorithmError(algorithm, self.name)
        return canonical

    @abstractmethod
    async def digest(self, data: str | bytes, algorithm: str = "SHA-256") -> bytes:
        """
        Compute a message digest.

        Args:
            data: Text (hashed as UTF-8) or bytes
            algorithm: Algorithm name, e.g. ``SHA-256``

        Returns:
            Raw digest bytes

        Raises:
            UnsupportedAlgorithmError: If this host cannot compute ``algorithm``
        """

    async def hex_digest(self, data: str | bytes, algorithm: str = "SHA-256") -> str:
        """Lowercase hexadecimal digest."""
        return (await self.digest(data, algorithm)).hex()

    def encode_binary_text(self, data: str | bytes, *, url_safe: bool = False) -> str:
        """
        Base64-encode bytes (text is encoded as UTF-8 first).

        The URL-safe variant uses ``-`` and ``_`` and drops padding.
        """
        raw = to_bytes(data)
        if url_safe:
            return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")
        return base64.b64encode(raw).decode("ascii")

    def decode_binary_text(self, text: str, *, url_safe: bool = False) -> bytes:
        """
        Decode base64 text, restoring missing padding.

        Raises:
            ValueError: If ``text`` is not valid base64
        """
        normalized = text.strip()
        if url_safe:
            normalized = normalized.replace("-", "+").replace("_", "/")
        normalized += "=" * (-len(normalized) % 4)
        return base64.b64decode(normalized, validate=True)

    @abstractmethod
    def random_id(self) -> str:
        """Random UUID v4 string."""

    @abstractmethod
    def features(self) -> dict[str, bool]:
        """Capabilities detected on this host."""
