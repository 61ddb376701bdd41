"""Cipher operating direction."""

from __future__ import annotations

from enum import Enum

from securefacade.provider.engine import DECRYPT_MODE, ENCRYPT_MODE


class Direction(Enum):
    """Encrypt or decrypt; the value is the engine's operation mode id."""
    ENCRYPT = ENCRYPT_MODE
    DECRYPT = DECRYPT_MODE

    @property
    def mode_id(self) -> int:
        return self.value
