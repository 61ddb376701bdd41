"""
Cipher Processor
================

One-shot encryption and decryption for a single transformation.

Every entry point funnels into :meth:`CipherProcessor.transform`:

    1. acquire a fresh engine for the transformation
    2. install direction, key material and optional parameters /
       randomness, chosen from a closed table of init strategies
    3. finalize the engine on the whole input
    4. wrap the output in a CipherResult

Provider faults are translated into the facade taxonomy:

    NoSuchAlgorithmError, InvalidAlgorithmParameterError -> AlgorithmNotAvailableError
    NoSuchPaddingError, BadPaddingError                  -> PaddingFailureError
    IllegalBlockSizeError                                -> BlockSizeFailureError
    InvalidKeyError                                      -> KeyFailureError

Usage:
    processor = CipherManager.shared().processor("AES/CBC/PKCS5Padding")
    sealed = processor.encrypt(key, b"attack at dawn")
    opened = processor.decrypt(key, sealed.bytes, params=sealed.parameters)
"""

from __future__ import annotations

import logging
import random as _random
from typing import Any, Callable, Final, Optional

from securefacade.core.errors import (
    AlgorithmNotAvailableError,
    BlockSizeFailureError,
    InvalidArgumentError,
    KeyFailureError,
    PaddingFailureError,
)
from securefacade.crypt.direction import Direction
from securefacade.crypt.material import InitParameters, InitStrategy, KeyKind, KeyMaterial
from securefacade.crypt.result import CipherResult
from securefacade.provider.engine import CipherEngine
from securefacade.provider.exceptions import (
    BadPaddingError,
    IllegalBlockSizeError,
    InvalidAlgorithmParameterError,
    InvalidKeyError,
    NoSuchAlgorithmError,
    NoSuchPaddingError,
)
from securefacade.provider.keys import Certificate, Key, ParameterSpec
from securefacade.provider.registry import ProviderRegistry
from securefacade.utils.validators import require_bytes, require_present

_log = logging.getLogger("securefacade.crypt")

_Initializer = Callable[[CipherEngine, int, Any, InitParameters], None]

_INITIALIZERS: Final[dict[tuple[KeyKind, InitStrategy], _Initializer]] = {
    (KeyKind.KEY, InitStrategy.NONE):
        lambda engine, mode, key, init: engine.init(mode, key),
    (KeyKind.KEY, InitStrategy.RANDOM):
        lambda engine, mode, key, init: engine.init(mode, key, random=init.random),
    (KeyKind.KEY, InitStrategy.PARAMS):
        lambda engine, mode, key, init: engine.init(mode, key, init.params),
    (KeyKind.KEY, InitStrategy.PARAMS_AND_RANDOM):
        lambda engine, mode, key, init: engine.init(mode, key, init.params, init.random),
    (KeyKind.CERTIFICATE, InitStrategy.NONE):
        lambda engine, mode, certificate, init: engine.init_with_certificate(mode, certificate),
    (KeyKind.CERTIFICATE, InitStrategy.RANDOM):
        lambda engine, mode, certificate, init: engine.init_with_certificate(mode, certificate, init.random),
}


def _init_parameters(params: Optional[ParameterSpec], random: Optional[_random.Random]) -> InitParameters:
    return InitParameters(params=params, random=random)


class CipherProcessor:
    """Per-transformation cipher facade. Holds no state between calls."""

    __slots__ = ("_algorithm", "_registry")

    def __init__(self, algorithm: str, registry: Optional[ProviderRegistry] = None) -> None:
        self._algorithm = require_present(algorithm, "algorithm")
        self._registry = registry

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def transform(
        self,
        direction: Direction,
        key_material: KeyMaterial,
        init: Optional[InitParameters],
        data: bytes,
    ) -> CipherResult:
        """
        Run one complete transform.

        Args:
            direction: Encrypt or decrypt
            key_material: Key or certificate
            init: Optional parameters / randomness (None means neither)
            data: Whole input; may be empty

        Returns:
            Fresh CipherResult carrying the complete output

        Raises:
            InvalidArgumentError: A required argument is None, or
                parameters were combined with a certificate
            AlgorithmNotAvailableError: Unknown algorithm or bad parameters
            PaddingFailureError: Unknown padding or badly padded data
            BlockSizeFailureError: Input length does not fit the cipher
            KeyFailureError: Key rejected
        """
        require_present(direction, "direction")
        require_present(key_material, "key_material")
        payload = require_bytes(data, "data")
        init = init or InitParameters.none()

        initializer = _INITIALIZERS.get((key_material.kind, init.strategy))
        if initializer is None:
            raise InvalidArgumentError("params")

        _log.debug("%s %s: %d input bytes", self._algorithm, direction.name, len(payload))
        try:
            engine = CipherEngine.get_instance(self._algorithm, self._registry)
            initializer(engine, direction.mode_id, key_material.value, init)
            output = engine.do_final(payload)
        except (NoSuchAlgorithmError, InvalidAlgorithmParameterError) as exc:
            _log.debug("%s unavailable: %s", self._algorithm, exc)
            raise AlgorithmNotAvailableError(self._algorithm, exc) from exc
        except (NoSuchPaddingError, BadPaddingError) as exc:
            _log.debug("%s padding failure: %s", self._algorithm, exc)
            raise PaddingFailureError(exc) from exc
        except IllegalBlockSizeError as exc:
            _log.debug("%s block size failure: %s", self._algorithm, exc)
            raise BlockSizeFailureError(exc) from exc
        except InvalidKeyError as exc:
            _log.debug("%s key rejected: %s", self._algorithm, exc)
            raise KeyFailureError(exc) from exc

        return CipherResult(output, direction, self._algorithm, engine.get_parameters())

    def encrypt(
        self,
        key: Key,
        data: bytes,
        *,
        params: Optional[ParameterSpec] = None,
        random: Optional[_random.Random] = None,
    ) -> CipherResult:
        """Encrypt ``data`` with a secret or public key."""
        require_present(key, "key")
        return self.transform(Direction.ENCRYPT, KeyMaterial.of_key(key), _init_parameters(params, random), data)

    def decrypt(
        self,
        key: Key,
        data: bytes,
        *,
        params: Optional[ParameterSpec] = None,
        random: Optional[_random.Random] = None,
    ) -> CipherResult:
        """Decrypt ``data`` with a secret or private key."""
        require_present(key, "key")
        return self.transform(Direction.DECRYPT, KeyMaterial.of_key(key), _init_parameters(params, random), data)

    def encrypt_with_certificate(
        self,
        certificate: Certificate,
        data: bytes,
        *,
        random: Optional[_random.Random] = None,
    ) -> CipherResult:
        """Encrypt ``data`` for the public key of ``certificate``."""
        require_present(certificate, "certificate")
        return self.transform(
            Direction.ENCRYPT, KeyMaterial.of_certificate(certificate), _init_parameters(None, random), data
        )

    def decrypt_with_certificate(
        self,
        certificate: Certificate,
        data: bytes,
        *,
        random: Optional[_random.Random] = None,
    ) -> CipherResult:
        """Decrypt ``data`` with the public key of ``certificate``."""
        require_present(certificate, "certificate")
        return self.transform(
            Direction.DECRYPT, KeyMaterial.of_certificate(certificate), _init_parameters(None, random), data
        )

    def __repr__(self) -> str:
        return f"CipherProcessor(algorithm={self._algorithm!r})"
