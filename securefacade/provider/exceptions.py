"""
Provider fault hierarchy.

These are the low-level failures raised by provider engines. They are
deliberately fine-grained; the processors in :mod:`securefacade.crypt`
and :mod:`securefacade.hash` translate them into the facade taxonomy.
"""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for faults raised by a provider."""


class NoSuchAlgorithmError(ProviderError):
    """No registered provider offers the requested algorithm or mode."""


class NoSuchPaddingError(ProviderError):
    """The requested padding scheme is unknown or unusable with the mode."""


class InvalidKeyError(ProviderError):
    """The key does not fit the algorithm or the operating mode."""


class InvalidAlgorithmParameterError(ProviderError):
    """The supplied parameters are of the wrong type or malformed."""


class BadPaddingError(ProviderError):
    """Decrypted data is not correctly padded."""


class AEADBadTagError(BadPaddingError):
    """Authentication tag verification failed."""


class IllegalBlockSizeError(ProviderError):
    """The input length does not match what the cipher can process."""


class EngineStateError(RuntimeError):
    """An engine was used out of order (finalize before init, or reuse)."""
