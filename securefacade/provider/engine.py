"""
Cipher and Digest Engines
=========================

Per-call transform objects obtained from the provider registry.

Engine lifecycle:
    CipherEngine:  FRESH -> INITIALIZED -> FINALIZED
    DigestEngine:  FRESH -> FINALIZED

Engines are single-shot: there is no update path and no reset. A
finalized engine drops its SPI so that no key material outlives the
call.

Transformations are written ``"ALG"`` or ``"ALG/MODE/PADDING"``. For
each provider, in preference order, the engine looks for a service
named ``ALG/MODE/PADDING``, then ``ALG/MODE``, ``ALG//PADDING`` and
finally ``ALG``, configuring whatever part the service does not fix.
"""

from __future__ import annotations

import logging
import random as _random
import secrets
from enum import Enum, auto
from typing import Any, Final, Optional

from cryptography import x509

from securefacade.provider.exceptions import (
    EngineStateError,
    InvalidKeyError,
    NoSuchAlgorithmError,
    ProviderError,
)
from securefacade.provider.keys import ParameterSpec
from securefacade.provider.registry import (
    CIPHER,
    MESSAGE_DIGEST,
    ProviderRegistry,
    Service,
    default_registry,
)
from securefacade.provider.spi import CipherSpi, DigestSpi

ENCRYPT_MODE: Final[int] = 1
DECRYPT_MODE: Final[int] = 2

_log = logging.getLogger("securefacade.provider.engine")

_DEFAULT_RANDOM: Final[_random.Random] = secrets.SystemRandom()


class EngineState(Enum):
    """Engine lifecycle states."""
    FRESH = auto()
    INITIALIZED = auto()
    FINALIZED = auto()


def split_transformation(transformation: str) -> tuple[str, Optional[str], Optional[str]]:
    """
    Split a transformation into algorithm, mode and padding.

    Raises:
        NoSuchAlgorithmError: If the string is not ``ALG`` or ``ALG/MODE/PADDING``
    """
    parts = [part.strip() for part in transformation.split("/")]
    if len(parts) == 1 and parts[0]:
        return parts[0], None, None
    if len(parts) == 3 and parts[0] and (parts[1] or parts[2]):
        return parts[0], parts[1] or None, parts[2] or None
    raise NoSuchAlgorithmError(f"Invalid transformation format: {transformation}")


def _candidates(algorithm: str, mode: Optional[str], padding: Optional[str]) -> list[tuple[str, bool, bool]]:
    """Service names to try, with flags telling whether mode/padding must still be set."""
    if mode is None and padding is None:
        return [(algorithm, False, False)]
    candidates = []
    if mode is not None and padding is not None:
        candidates.append((f"{algorithm}/{mode}/{padding}", False, False))
    if mode is not None:
        candidates.append((f"{algorithm}/{mode}", False, padding is not None))
    if padding is not None:
        candidates.append((f"{algorithm}//{padding}", mode is not None, False))
    candidates.append((algorithm, mode is not None, padding is not None))
    return candidates


class CipherEngine:
    """
    Single-shot cipher bound to one transformation.

    Usage:
        engine = CipherEngine.get_instance("AES/CBC/PKCS5Padding")
        engine.init(ENCRYPT_MODE, key, IvParameterSpec(iv))
        ciphertext = engine.do_final(plaintext)
    """

    __slots__ = ("_spi", "_algorithm", "_provider", "_state", "_opmode", "_parameters")

    def __init__(self, spi: CipherSpi, algorithm: str, provider: str) -> None:
        self._spi: Optional[CipherSpi] = spi
        self._algorithm = algorithm
        self._provider = provider
        self._state = EngineState.FRESH
        self._opmode = 0
        self._parameters: Optional[ParameterSpec] = None

    @classmethod
    def get_instance(
        cls,
        transformation: str,
        registry: Optional[ProviderRegistry] = None,
    ) -> CipherEngine:
        """
        Create an engine for ``transformation``.

        Raises:
            NoSuchAlgorithmError: No provider offers the algorithm or mode
            NoSuchPaddingError: The algorithm exists but not with this padding
        """
        algorithm, mode, padding = split_transformation(transformation)
        registry = registry if registry is not None else default_registry()
        failure: Optional[ProviderError] = None

        for provider in registry.providers():
            for name, need_mode, need_padding in _candidates(algorithm, mode, padding):
                service = provider.get_service(CIPHER, name)
                if service is None:
                    continue
                spi: CipherSpi = service.new_instance()
                try:
                    if need_mode:
                        spi.engine_set_mode(mode)  # type: ignore[arg-type]
                    if need_padding:
                        spi.engine_set_padding(padding)  # type: ignore[arg-type]
                except ProviderError as exc:
                    failure = exc
                    continue
                _log.debug("Resolved cipher %s via %s (%s)", transformation, provider.name, name)
                return cls(spi, transformation, provider.name)

        if failure is not None:
            raise failure
        raise NoSuchAlgorithmError(f"Cannot find any provider supporting {transformation}")

    @property
    def algorithm(self) -> str:
        return self._algorithm

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def opmode(self) -> int:
        return self._opmode

    def init(
        self,
        opmode: int,
        key: Any,
        params: Optional[ParameterSpec] = None,
        random: Optional[_random.Random] = None,
    ) -> None:
        """
        Install direction, key and optional parameters / randomness.

        Raises:
            InvalidKeyError: Key unsuitable for this cipher or direction
            InvalidAlgorithmParameterError: Parameters of the wrong kind or shape
        """
        spi = self._require_spi()
        if opmode not in (ENCRYPT_MODE, DECRYPT_MODE):
            raise ValueError(f"Invalid operation mode: {opmode}")
        spi.engine_init(opmode, key, params, random or _DEFAULT_RANDOM)
        self._opmode = opmode
        self._parameters = spi.engine_get_parameters()
        self._state = EngineState.INITIALIZED

    def init_with_certificate(
        self,
        opmode: int,
        certificate: x509.Certificate,
        random: Optional[_random.Random] = None,
    ) -> None:
        """
        Initialize with the public key of ``certificate``.

        A critical KeyUsage extension that does not allow data
        encipherment makes the certificate unusable for ciphers.
        """
        if not isinstance(certificate, x509.Certificate):
            raise InvalidKeyError("Not an X.509 certificate")
        try:
            usage = certificate.extensions.get_extension_for_class(x509.KeyUsage)
        except x509.ExtensionNotFound:
            usage = None
        if usage is not None and usage.critical and not usage.value.data_encipherment:
            raise InvalidKeyError("Wrong key usage")
        self.init(opmode, certificate.public_key(), None, random)

    def get_parameters(self) -> Optional[ParameterSpec]:
        """Parameters in effect after init, including generated IVs."""
        return self._parameters

    def do_final(self, data: bytes) -> bytes:
        """
        Transform ``data`` in one shot and finalize the engine.

        Raises:
            IllegalBlockSizeError: Input length not acceptable
            BadPaddingError: Padding (or authentication tag) invalid
        """
        if self._state is not EngineState.INITIALIZED:
            raise EngineStateError(f"Cipher not initialized (state={self._state.name})")
        spi = self._require_spi()
        try:
            return spi.engine_do_final(bytes(data))
        finally:
            self._spi = None
            self._state = EngineState.FINALIZED

    def _require_spi(self) -> CipherSpi:
        if self._spi is None or self._state is EngineState.FINALIZED:
            raise EngineStateError("Cipher engine already finalized")
        return self._spi

    def __repr__(self) -> str:
        return f"CipherEngine(algorithm={self._algorithm!r}, provider={self._provider!r}, state={self._state.name})"


class DigestEngine:
    """Single-shot message digest."""

    __slots__ = ("_spi", "_algorithm", "_provider", "_state")

    def __init__(self, spi: DigestSpi, algorithm: str, provider: str) -> None:
        self._spi: Optional[DigestSpi] = spi
        self._algorithm = algorithm
        self._provider = provider
        self._state = EngineState.FRESH

    @classmethod
    def get_instance(
        cls,
        algorithm: str,
        registry: Optional[ProviderRegistry] = None,
    ) -> DigestEngine:
        """
        Raises:
            NoSuchAlgorithmError: No provider offers ``algorithm``
        """
        service = cls.find_service(algorithm, registry)
        return cls.from_service(service, algorithm)

    @staticmethod
    def find_service(algorithm: str, registry: Optional[ProviderRegistry] = None) -> Service:
        registry = registry if registry is not None else default_registry()
        service = registry.find_service(MESSAGE_DIGEST, algorithm)
        if service is None:
            raise NoSuchAlgorithmError(f"{algorithm} MessageDigest not available")
        return service

    @classmethod
    def from_service(cls, service: Service, algorithm: str) -> DigestEngine:
        return cls(service.new_instance(), algorithm, service.provider_name)

    @property
    def algorithm(self) -> str:
        return self._algorithm

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def digest_length(self) -> int:
        if self._spi is None:
            raise EngineStateError("Digest engine already finalized")
        return self._spi.digest_length

    def digest(self, data: bytes) -> bytes:
        """Hash ``data`` and finalize the engine."""
        if self._spi is None or self._state is not EngineState.FRESH:
            raise EngineStateError("Digest engine already finalized")
        spi = self._spi
        try:
            spi.engine_update(bytes(data))
            return spi.engine_digest()
        finally:
            self._spi = None
            self._state = EngineState.FINALIZED

    def __repr__(self) -> str:
        return f"DigestEngine(algorithm={self._algorithm!r}, provider={self._provider!r}, state={self._state.name})"
