"""
Validation Utilities
====================

Argument checks run before any provider is touched. An absent value is
an :class:`InvalidArgumentError`; a value of the wrong type is a
``TypeError``.
"""

from __future__ import annotations

from typing import Any, TypeVar, Union

from securefacade.core.errors import InvalidArgumentError

T = TypeVar("T")

BytesLike = Union[bytes, bytearray, memoryview]


def require_present(value: T, which: str) -> T:
    """Return ``value`` unchanged, or raise InvalidArgumentError if it is None."""
    if value is None:
        raise InvalidArgumentError(which)
    return value


def require_bytes(value: Any, which: str) -> bytes:
    """
    Validate a bytes-like argument and return an owned ``bytes`` copy.

    Raises:
        InvalidArgumentError: If value is None
        TypeError: If value is not bytes-like
    """
    require_present(value, which)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{which} must be bytes-like, got {type(value).__name__}")


def encode_text(value: Any, which: str, encoding: str = "utf-8") -> bytes:
    """
    Like :func:`require_bytes`, but also accepts ``str`` (encoded with ``encoding``).

    Characters the encoding cannot represent, such as lone surrogates,
    become ``?``.
    """
    require_present(value, which)
    if isinstance(value, str):
        return value.encode(encoding, errors="replace")
    return require_bytes(value, which)
