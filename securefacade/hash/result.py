"""Outcome of one message digest computation."""

from __future__ import annotations

import hmac
from dataclasses import dataclass

from securefacade.core.errors import InvalidArgumentError
from securefacade.utils.validators import require_bytes


@dataclass(frozen=True, slots=True, eq=False)
class DigestResult:
    """
    Immutable digest output.

    Two results are equal when both the algorithm names and the digest
    bytes match. Bytes are compared in constant time.

    Attributes:
        algorithm: Digest algorithm name the processor was bound to
        bytes: Digest output (owned copy)
    """

    algorithm: str
    bytes: bytes

    def __post_init__(self) -> None:
        if self.algorithm is None:
            raise InvalidArgumentError("algorithm")
        if not isinstance(self.algorithm, str):
            raise TypeError("algorithm must be a string")
        object.__setattr__(self, "bytes", require_bytes(self.bytes, "bytes"))

    @property
    def digest_length(self) -> int:
        return len(self.bytes)

    def hexdigest(self) -> str:
        return self.bytes.hex()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DigestResult):
            return NotImplemented
        return self.algorithm == other.algorithm and hmac.compare_digest(self.bytes, other.bytes)

    def __hash__(self) -> int:
        return hash((self.algorithm, self.bytes))

    def __repr__(self) -> str:
        return f"DigestResult(algorithm={self.algorithm!r}, length={len(self.bytes)})"
