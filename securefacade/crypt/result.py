"""Outcome of one cipher transform."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from securefacade.core.errors import InvalidArgumentError
from securefacade.crypt.direction import Direction
from securefacade.provider.keys import ParameterSpec
from securefacade.utils.validators import require_bytes


@dataclass(frozen=True, slots=True)
class CipherResult:
    """
    Immutable result of a single encrypt or decrypt call.

    Attributes:
        bytes: Complete engine output (owned copy)
        direction: Direction the engine ran in (not part of equality)
        algorithm: Transformation name of the producing processor
        parameters: Parameters in effect, e.g. an IV generated during
            encryption; needed to decrypt, but not part of equality
    """

    bytes: bytes
    direction: Direction = field(compare=False)
    algorithm: str
    parameters: Optional[ParameterSpec] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "bytes", require_bytes(self.bytes, "bytes"))
        if self.direction is None:
            raise InvalidArgumentError("direction")
        if not isinstance(self.direction, Direction):
            raise TypeError("direction must be a Direction")
        if self.algorithm is None:
            raise InvalidArgumentError("algorithm")

    def text(self, encoding: str = "utf-8") -> str:
        """Decode the output, typically a decrypted plaintext."""
        return self.bytes.decode(encoding)

    def __repr__(self) -> str:
        """Safe representation without exposing output bytes."""
        return (
            f"CipherResult(algorithm={self.algorithm!r}, direction={self.direction.name}, "
            f"length={len(self.bytes)})"
        )
