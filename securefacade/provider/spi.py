"""
Service provider interfaces implemented by provider engines.

An SPI instance is created fresh for every engine and is single-shot:
it is configured (mode, padding), initialized once and finalized once.
"""

from __future__ import annotations

import random as _random
from abc import ABC, abstractmethod
from typing import Any, Optional

from securefacade.provider.keys import ParameterSpec


class CipherSpi(ABC):
    """Backend half of :class:`securefacade.provider.engine.CipherEngine`."""

    @abstractmethod
    def engine_set_mode(self, mode: str) -> None:
        """Select the mode; raise ``NoSuchAlgorithmError`` if unsupported."""

    @abstractmethod
    def engine_set_padding(self, padding: str) -> None:
        """Select the padding; raise ``NoSuchPaddingError`` if unsupported."""

    @abstractmethod
    def engine_init(
        self,
        opmode: int,
        key: Any,
        params: Optional[ParameterSpec],
        random: _random.Random,
    ) -> None:
        """Install direction, key and optional parameters."""

    @abstractmethod
    def engine_do_final(self, data: bytes) -> bytes:
        """Transform ``data`` in one shot."""

    def engine_get_parameters(self) -> Optional[ParameterSpec]:
        """Parameters in effect after init (e.g. a generated IV)."""
        return None


class DigestSpi(ABC):
    """Backend half of :class:`securefacade.provider.engine.DigestEngine`."""

    @property
    @abstractmethod
    def digest_length(self) -> int:
        """Digest size in bytes."""

    @abstractmethod
    def engine_update(self, data: bytes) -> None:
        """Feed data."""

    @abstractmethod
    def engine_digest(self) -> bytes:
        """Complete the hash and return the digest."""
