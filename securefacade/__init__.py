"""
SecureFacade - A Thin Facade over Pluggable Crypto Providers
============================================================

This package offers one-shot encryption, decryption and message-digest
hashing behind a small, stable surface:

    CipherManager  -> CipherProcessor  -> CipherResult
    DigestManager  -> DigestProcessor  -> DigestResult

Algorithms are discovered from an ordered provider registry; every
provider fault is mapped onto a six-member error taxonomy.

Security Notice:
- No key material is logged
- Engines drop their keys once finalized
- Digest results compare in constant time
"""

import logging

from securefacade.core.config import FacadeConfig
from securefacade.core.entity import Algorithmic
from securefacade.core.errors import (
    AlgorithmNotAvailableError,
    BlockSizeFailureError,
    DigestUnavailableError,
    InvalidArgumentError,
    KeyFailureError,
    PaddingFailureError,
    SecurityFacadeError,
)
from securefacade.core.logging import configure_logging, get_secure_logger
from securefacade.core.manager import SecurityManager
from securefacade.crypt import (
    CipherManager,
    CipherProcessor,
    CipherResult,
    Direction,
    InitParameters,
    KeyMaterial,
)
from securefacade.hash import DigestManager, DigestProcessor, DigestResult
from securefacade.provider.keys import (
    GCMParameterSpec,
    IvParameterSpec,
    OAEPParameterSpec,
    SecretKey,
)

__version__ = "0.1.0"
__author__ = "SecureFacade Team"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CipherManager",
    "CipherProcessor",
    "CipherResult",
    "DigestManager",
    "DigestProcessor",
    "DigestResult",
    "SecurityManager",
    "Algorithmic",
    "Direction",
    "KeyMaterial",
    "InitParameters",
    "SecretKey",
    "IvParameterSpec",
    "GCMParameterSpec",
    "OAEPParameterSpec",
    "SecurityFacadeError",
    "AlgorithmNotAvailableError",
    "PaddingFailureError",
    "BlockSizeFailureError",
    "KeyFailureError",
    "DigestUnavailableError",
    "InvalidArgumentError",
    "FacadeConfig",
    "configure_logging",
    "get_secure_logger",
    "__version__",
]
