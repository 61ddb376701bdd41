"""
Security Manager
================

Discovery and factory shape shared by the cipher and digest subsystems.

At construction a manager walks every provider in the registry and
takes a snapshot of the algorithm names advertised for its service
kind. ``processor(name)`` then hands out a fresh processor bound to a
name; cipher managers do not check the name against the snapshot, so
names a provider resolves but does not advertise still work.

Concrete managers register their kind by subclassing::

    class CipherManager(SecurityManager[CipherProcessor], kind="Cipher"):
        ...

    SecurityManager.for_kind("Cipher")   # -> CipherManager()
    CipherManager.shared()               # process-wide instance
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, Optional, TypeVar

from securefacade.core.config import FacadeConfig
from securefacade.core.errors import InvalidArgumentError
from securefacade.provider.registry import ProviderRegistry, default_registry

P = TypeVar("P")
M = TypeVar("M", bound="SecurityManager[Any]")

_log = logging.getLogger("securefacade.manager")


class SecurityManager(ABC, Generic[P]):
    """Catalog snapshot plus processor factory for one service kind."""

    _kinds: ClassVar[dict[str, type[SecurityManager[Any]]]] = {}
    _shared: ClassVar[dict[type, SecurityManager[Any]]] = {}
    _shared_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init_subclass__(cls, kind: str = "", **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if kind:
            SecurityManager._kinds[kind] = cls

    def __init__(
        self,
        kind: str,
        registry: Optional[ProviderRegistry] = None,
        config: Optional[FacadeConfig] = None,
    ) -> None:
        if kind is None:
            raise InvalidArgumentError("kind")
        self._kind = kind
        self._registry = registry if registry is not None else default_registry()
        self._config = config or FacadeConfig.get_instance()
        self._catalog: tuple[str, ...] = tuple(
            self._registry.get_algorithms(kind, deduplicate=self._config.catalog.deduplicate)
        )
        _log.debug("Discovered %d %s algorithms", len(self._catalog), kind)

    @classmethod
    def for_kind(
        cls,
        kind: str,
        registry: Optional[ProviderRegistry] = None,
        config: Optional[FacadeConfig] = None,
    ) -> SecurityManager[Any]:
        """
        Build the manager registered for ``kind``.

        Raises:
            InvalidArgumentError: If ``kind`` is None
            ValueError: If no manager handles ``kind``
        """
        if kind is None:
            raise InvalidArgumentError("kind")
        manager_type = SecurityManager._kinds.get(kind)
        if manager_type is None:
            raise ValueError(
                f"Unknown service kind: {kind}. Available: {sorted(SecurityManager._kinds)}"
            )
        return manager_type(registry=registry, config=config)  # type: ignore[call-arg]

    @classmethod
    def shared(cls: type[M]) -> M:
        """Get or create the process-wide instance of this manager."""
        instance = SecurityManager._shared.get(cls)
        if instance is None:
            with SecurityManager._shared_lock:
                instance = SecurityManager._shared.get(cls)
                if instance is None:
                    instance = cls()  # type: ignore[call-arg]
                    SecurityManager._shared[cls] = instance
        return instance  # type: ignore[return-value]

    @classmethod
    def reset_shared(cls) -> None:
        """Drop shared instances. Use only for testing."""
        with SecurityManager._shared_lock:
            if cls is SecurityManager:
                SecurityManager._shared.clear()
            else:
                SecurityManager._shared.pop(cls, None)

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    def algorithms(self) -> list[str]:
        """Algorithm names found at construction. The list is a fresh copy."""
        return list(self._catalog)

    def processor(self, name: str) -> P:
        """
        Create a processor bound to ``name``.

        Raises:
            InvalidArgumentError: If ``name`` is None
        """
        if name is None:
            raise InvalidArgumentError("name")
        if not isinstance(name, str):
            raise TypeError(f"Algorithm name must be a string, got {type(name).__name__}")
        return self._new_processor(name)

    @abstractmethod
    def _new_processor(self, name: str) -> P:
        """Build the processor for ``name``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self._kind!r}, algorithms={len(self._catalog)})"
