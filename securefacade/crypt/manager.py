"""Cipher discovery and processor factory."""

from __future__ import annotations

from typing import Optional

from securefacade.core.config import FacadeConfig
from securefacade.core.manager import SecurityManager
from securefacade.crypt.processor import CipherProcessor
from securefacade.provider.registry import CIPHER, ProviderRegistry


class CipherManager(SecurityManager[CipherProcessor], kind=CIPHER):
    """
    Lists the ``Cipher`` services of the registry and builds processors.

    Names are not checked against the catalog: an unknown transformation
    fails on the first encrypt/decrypt with AlgorithmNotAvailableError.
    """

    def __init__(
        self,
        registry: Optional[ProviderRegistry] = None,
        config: Optional[FacadeConfig] = None,
    ) -> None:
        super().__init__(CIPHER, registry, config)

    def _new_processor(self, name: str) -> CipherProcessor:
        return CipherProcessor(name, self._registry)
