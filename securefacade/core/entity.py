"""Capabilities shared by facade value objects."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Algorithmic(Protocol):
    """Anything that can report which algorithm produced it."""

    @property
    def algorithm(self) -> str: ...
