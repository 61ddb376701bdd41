"""
Facade Error Taxonomy
=====================

Every failure raised by a provider while initializing or finalizing an
engine is collapsed into one of a small, stable set of errors. Callers
decide on retries and user feedback from the error class alone and never
need to know the provider's internal fault hierarchy.

    AlgorithmNotAvailableError   unknown algorithm or malformed parameters
    PaddingFailureError          padding scheme unknown or data badly padded
    BlockSizeFailureError        input length invalid for the cipher
    KeyFailureError              key rejected for algorithm / direction
    DigestUnavailableError       digest algorithm unknown
    InvalidArgumentError         a required input was absent

The underlying provider fault is kept as ``cause`` (and as ``__cause__``
when raised with ``raise ... from``).
"""

from __future__ import annotations

from typing import Optional


class SecurityFacadeError(Exception):
    """Base exception; catch this for any error raised by the facade."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class AlgorithmNotAvailableError(SecurityFacadeError):
    """Raised when the algorithm is unknown or its parameters are malformed."""

    def __init__(self, name: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(
            f"Algorithm={name} is not present or wrong configuration.", cause
        )
        self.name = name


class PaddingFailureError(SecurityFacadeError):
    """Raised when the padding scheme is unknown or the data is badly padded."""

    def __init__(self, cause: Optional[BaseException] = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Padding failure{detail}", cause)


class BlockSizeFailureError(SecurityFacadeError):
    """Raised when the input length does not fit the cipher's block size."""

    def __init__(self, cause: Optional[BaseException] = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Illegal block size{detail}", cause)


class KeyFailureError(SecurityFacadeError):
    """Raised when the key is rejected for the algorithm or direction."""

    def __init__(self, cause: Optional[BaseException] = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Key rejected{detail}", cause)


class DigestUnavailableError(SecurityFacadeError):
    """Raised when no provider offers the requested digest algorithm."""

    def __init__(self, name: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"No message digest algorithm={name} found.", cause)
        self.name = name


class InvalidArgumentError(SecurityFacadeError, ValueError):
    """Raised when a required argument is absent."""

    def __init__(self, which: str) -> None:
        super().__init__(f"{which} must not be None")
        self.which = which


__all__ = [
    "SecurityFacadeError",
    "AlgorithmNotAvailableError",
    "PaddingFailureError",
    "BlockSizeFailureError",
    "KeyFailureError",
    "DigestUnavailableError",
    "InvalidArgumentError",
]
