"""Message digest discovery and processor factory."""

from __future__ import annotations

from typing import Optional

from securefacade.core.config import FacadeConfig
from securefacade.core.manager import SecurityManager
from securefacade.hash.processor import DigestProcessor
from securefacade.provider.registry import MESSAGE_DIGEST, ProviderRegistry


class DigestManager(SecurityManager[DigestProcessor], kind=MESSAGE_DIGEST):
    """Lists the ``MessageDigest`` services of the registry and builds processors."""

    def __init__(
        self,
        registry: Optional[ProviderRegistry] = None,
        config: Optional[FacadeConfig] = None,
    ) -> None:
        super().__init__(MESSAGE_DIGEST, registry, config)

    def _new_processor(self, name: str) -> DigestProcessor:
        return DigestProcessor(name, self._registry)
