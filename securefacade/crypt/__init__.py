"""Cipher subsystem: manager, processor, result and call variants."""

from securefacade.crypt.direction import Direction
from securefacade.crypt.manager import CipherManager
from securefacade.crypt.material import InitParameters, InitStrategy, KeyKind, KeyMaterial
from securefacade.crypt.processor import CipherProcessor
from securefacade.crypt.result import CipherResult

__all__ = [
    "CipherManager",
    "CipherProcessor",
    "CipherResult",
    "Direction",
    "InitParameters",
    "InitStrategy",
    "KeyKind",
    "KeyMaterial",
]
