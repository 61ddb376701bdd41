"""
Digest Processor
================

One-shot hashing with a single message digest algorithm.

The provider service is resolved once, when the processor is created,
so an unknown algorithm fails early. Each :meth:`DigestProcessor.hash`
call then builds a fresh engine from that service; processors keep no
state between calls.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from securefacade.core.errors import DigestUnavailableError
from securefacade.hash.result import DigestResult
from securefacade.provider.engine import DigestEngine
from securefacade.provider.exceptions import NoSuchAlgorithmError
from securefacade.provider.registry import ProviderRegistry, Service
from securefacade.utils.validators import encode_text, require_present

_log = logging.getLogger("securefacade.hash")

HashInput = Union[bytes, bytearray, memoryview, str]


class DigestProcessor:
    """
    Digest facade bound to one algorithm name.

    Usage:
        processor = DigestManager.shared().processor("SHA-256")
        processor.hash("2").hexdigest()
    """

    __slots__ = ("_algorithm", "_service")

    def __init__(self, algorithm: str, registry: Optional[ProviderRegistry] = None) -> None:
        """
        Raises:
            InvalidArgumentError: If ``algorithm`` is None
            DigestUnavailableError: If no provider offers ``algorithm``
        """
        self._algorithm = require_present(algorithm, "algorithm")
        try:
            self._service: Service = DigestEngine.find_service(algorithm, registry)
        except NoSuchAlgorithmError as exc:
            _log.debug("Digest %s unavailable: %s", algorithm, exc)
            raise DigestUnavailableError(algorithm, exc) from exc
        _log.debug("Digest %s resolved via %s", algorithm, self._service.provider_name)

    @property
    def algorithm(self) -> str:
        return self._algorithm

    @property
    def digest_length(self) -> int:
        """Output size in bytes."""
        return DigestEngine.from_service(self._service, self._algorithm).digest_length

    def hash(self, data: HashInput) -> DigestResult:
        """
        Digest ``data`` in one shot.

        Text is UTF-8 encoded before hashing.

        Raises:
            InvalidArgumentError: If ``data`` is None
            TypeError: If ``data`` is neither bytes-like nor text
        """
        payload = encode_text(data, "data")
        engine = DigestEngine.from_service(self._service, self._algorithm)
        return DigestResult(self._algorithm, engine.digest(payload))

    def __repr__(self) -> str:
        return f"DigestProcessor(algorithm={self._algorithm!r})"
