"""
Key Material and Engine Parameters
==================================

Value types handed to cipher engines:

- ``SecretKey``: raw symmetric key bytes tagged with the algorithm they
  belong to (``AES``, ``DESede``, ``ChaCha20`` ...).
- ``IvParameterSpec``: initialization vector / nonce.
- ``GCMParameterSpec``: tag length in bits plus IV for AES-GCM.
- ``OAEPParameterSpec``: digest choices and optional label for RSA-OAEP.

Asymmetric keys are the ``cryptography`` key objects themselves
(``RSAPublicKey`` / ``RSAPrivateKey``) and certificates are
``cryptography.x509.Certificate`` instances.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Optional, Union

from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509 import Certificate

GCM_DEFAULT_TAG_BITS: Final[int] = 128
GCM_DEFAULT_IV_SIZE: Final[int] = 12


@dataclass(frozen=True, slots=True)
class SecretKey:
    """
    Raw symmetric key.

    Attributes:
        algorithm: Algorithm the key is meant for (matched case-insensitively)
        encoded: Raw key bytes
    """

    algorithm: str
    encoded: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.algorithm, str) or not self.algorithm:
            raise ValueError("Key algorithm must be a non-empty string")
        if not isinstance(self.encoded, (bytes, bytearray, memoryview)):
            raise TypeError("Key bytes must be bytes-like")
        if len(self.encoded) == 0:
            raise ValueError("Key bytes cannot be empty")
        object.__setattr__(self, "encoded", bytes(self.encoded))

    def __repr__(self) -> str:
        """Safe representation without exposing key material."""
        return f"SecretKey(algorithm={self.algorithm!r}, bits={len(self.encoded) * 8})"


@dataclass(frozen=True, slots=True)
class IvParameterSpec:
    """Initialization vector (or nonce) for IV-based modes."""

    iv: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.iv, (bytes, bytearray, memoryview)):
            raise TypeError("IV must be bytes-like")
        object.__setattr__(self, "iv", bytes(self.iv))


@dataclass(frozen=True, slots=True)
class GCMParameterSpec:
    """
    Parameters for Galois/Counter Mode.

    Attributes:
        tag_length: Authentication tag length in bits
        iv: Initialization vector
    """

    tag_length: int
    iv: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.iv, (bytes, bytearray, memoryview)):
            raise TypeError("IV must be bytes-like")
        object.__setattr__(self, "iv", bytes(self.iv))


@dataclass(frozen=True, slots=True)
class OAEPParameterSpec:
    """RSA-OAEP digest selection. Digest names follow the digest registry."""

    digest: str = "SHA-1"
    mgf_digest: str = "SHA-1"
    label: Optional[bytes] = None


ParameterSpec = Union[IvParameterSpec, GCMParameterSpec, OAEPParameterSpec]
AsymmetricKey = Union[rsa.RSAPublicKey, rsa.RSAPrivateKey]
Key = Union[SecretKey, rsa.RSAPublicKey, rsa.RSAPrivateKey]

__all__ = [
    "SecretKey",
    "IvParameterSpec",
    "GCMParameterSpec",
    "OAEPParameterSpec",
    "ParameterSpec",
    "AsymmetricKey",
    "Key",
    "Certificate",
    "GCM_DEFAULT_TAG_BITS",
    "GCM_DEFAULT_IV_SIZE",
]
