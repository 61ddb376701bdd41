"""
Key Material and Initialization Variants
========================================

A cipher call is conditioned by two tagged values:

    KeyMaterial      KEY (secret, public or private key) | CERTIFICATE
    InitParameters   NONE | PARAMS | RANDOM | PARAMS_AND_RANDOM

Certificates combine only with NONE and RANDOM. Both values are borrowed
for one call; processors never keep them.
"""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional

from securefacade.core.errors import InvalidArgumentError
from securefacade.provider.keys import Certificate, Key, ParameterSpec


class KeyKind(Enum):
    """Which kind of key material conditions the engine."""
    KEY = auto()
    CERTIFICATE = auto()


class InitStrategy(Enum):
    """Which optional inputs are installed alongside the key."""
    NONE = auto()
    PARAMS = auto()
    RANDOM = auto()
    PARAMS_AND_RANDOM = auto()


@dataclass(frozen=True, slots=True, repr=False)
class KeyMaterial:
    """A key or a certificate, tagged with its kind."""

    kind: KeyKind
    value: Any

    def __post_init__(self) -> None:
        if self.value is None:
            raise InvalidArgumentError("certificate" if self.kind is KeyKind.CERTIFICATE else "key")

    @classmethod
    def of_key(cls, key: Key) -> KeyMaterial:
        return cls(KeyKind.KEY, key)

    @classmethod
    def of_certificate(cls, certificate: Certificate) -> KeyMaterial:
        return cls(KeyKind.CERTIFICATE, certificate)

    def __repr__(self) -> str:
        """Safe representation without exposing key material."""
        return f"KeyMaterial(kind={self.kind.name}, type={type(self.value).__name__})"


@dataclass(frozen=True, slots=True)
class InitParameters:
    """
    Optional engine parameters and randomness source.

    Attributes:
        params: Parameter spec (IV, GCM or OAEP parameters)
        random: Randomness source used for generated IVs / nonces
    """

    params: Optional[ParameterSpec] = None
    random: Optional[_random.Random] = None

    @classmethod
    def none(cls) -> InitParameters:
        return cls()

    @classmethod
    def with_params(cls, params: ParameterSpec) -> InitParameters:
        if params is None:
            raise InvalidArgumentError("params")
        return cls(params=params)

    @classmethod
    def with_random(cls, random: _random.Random) -> InitParameters:
        if random is None:
            raise InvalidArgumentError("random")
        return cls(random=random)

    @classmethod
    def with_params_and_random(cls, params: ParameterSpec, random: _random.Random) -> InitParameters:
        if params is None:
            raise InvalidArgumentError("params")
        if random is None:
            raise InvalidArgumentError("random")
        return cls(params=params, random=random)

    @property
    def strategy(self) -> InitStrategy:
        if self.params is not None and self.random is not None:
            return InitStrategy.PARAMS_AND_RANDOM
        if self.params is not None:
            return InitStrategy.PARAMS
        if self.random is not None:
            return InitStrategy.RANDOM
        return InitStrategy.NONE
