"""
Provider Registry
=================

Process-wide, ordered list of providers. Each provider advertises
*services*: an algorithm implementation for a service kind such as
``"Cipher"`` or ``"MessageDigest"``.

Lookups walk the providers in preference order and match algorithm
names (and aliases) case-insensitively. The registry is read-mostly;
mutation is serialized with a re-entrant lock and readers work on a
snapshot of the provider list.

Usage:
    registry = default_registry()
    registry.get_algorithms("MessageDigest")   # ['MD5', 'SHA-1', ...]
    registry.find_service("Cipher", "aes")     # Service(... 'AES' ...)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Final, Iterator, Optional

CIPHER: Final[str] = "Cipher"
MESSAGE_DIGEST: Final[str] = "MessageDigest"

_log = logging.getLogger("securefacade.provider")


@dataclass(frozen=True, slots=True)
class Service:
    """
    One algorithm implementation offered by a provider.

    Attributes:
        kind: Service kind label ("Cipher", "MessageDigest")
        algorithm: Standard algorithm name as advertised
        factory: Zero-argument callable returning a fresh SPI instance
        aliases: Alternative names resolving to this service
    """

    kind: str
    algorithm: str
    factory: Callable[[], Any] = field(compare=False)
    aliases: tuple[str, ...] = ()
    provider_name: str = ""

    def new_instance(self) -> Any:
        return self.factory()


class Provider:
    """
    Named collection of services.

    Services keep their registration order, which is the order reported
    by :meth:`services` and therefore by catalog discovery.
    """

    __slots__ = ("_name", "_version", "_info", "_services", "_index")

    def __init__(self, name: str, version: str = "1.0", info: str = "") -> None:
        if not name:
            raise ValueError("Provider name cannot be empty")
        self._name = name
        self._version = version
        self._info = info
        self._services: list[Service] = []
        self._index: dict[tuple[str, str], Service] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def version(self) -> str:
        return self._version

    @property
    def info(self) -> str:
        return self._info

    def put_service(
        self,
        kind: str,
        algorithm: str,
        factory: Callable[[], Any],
        aliases: tuple[str, ...] = (),
    ) -> Service:
        """Register (or replace) a service under ``kind``/``algorithm``."""
        service = Service(
            kind=kind,
            algorithm=algorithm,
            factory=factory,
            aliases=tuple(aliases),
            provider_name=self._name,
        )
        key = (kind, algorithm.upper())
        previous = self._index.get(key)
        if previous is not None:
            self._services.remove(previous)
            for alias in previous.aliases:
                alias_key = (kind, alias.upper())
                if self._index.get(alias_key) is previous:
                    del self._index[alias_key]
        self._services.append(service)
        self._index[key] = service
        for alias in service.aliases:
            self._index.setdefault((kind, alias.upper()), service)
        return service

    def get_service(self, kind: str, algorithm: str) -> Optional[Service]:
        return self._index.get((kind, algorithm.upper()))

    def services(self, kind: Optional[str] = None) -> list[Service]:
        if kind is None:
            return list(self._services)
        return [s for s in self._services if s.kind == kind]

    def __repr__(self) -> str:
        return f"Provider(name={self._name!r}, version={self._version!r}, services={len(self._services)})"


class ProviderRegistry:
    """Ordered, thread-safe list of providers (position 1 is preferred)."""

    __slots__ = ("_providers", "_lock")

    def __init__(self, providers: Optional[list[Provider]] = None) -> None:
        self._lock = threading.RLock()
        self._providers: list[Provider] = []
        for provider in providers or []:
            self.add_provider(provider)

    def providers(self) -> list[Provider]:
        with self._lock:
            return list(self._providers)

    def __iter__(self) -> Iterator[Provider]:
        return iter(self.providers())

    def __len__(self) -> int:
        with self._lock:
            return len(self._providers)

    def get_provider(self, name: str) -> Optional[Provider]:
        for provider in self.providers():
            if provider.name == name:
                return provider
        return None

    def insert_provider_at(self, provider: Provider, position: int) -> int:
        """
        Insert ``provider`` at 1-based ``position``.

        Returns:
            The actual 1-based position, or -1 if a provider with the same
            name is already installed.
        """
        with self._lock:
            if any(p.name == provider.name for p in self._providers):
                return -1
            index = max(0, min(position - 1, len(self._providers)))
            self._providers.insert(index, provider)
            _log.debug("Installed provider %s at position %d", provider.name, index + 1)
            return index + 1

    def add_provider(self, provider: Provider) -> int:
        """Append ``provider`` with the lowest preference."""
        with self._lock:
            return self.insert_provider_at(provider, len(self._providers) + 1)

    def remove_provider(self, name: str) -> bool:
        with self._lock:
            for provider in self._providers:
                if provider.name == name:
                    self._providers.remove(provider)
                    _log.debug("Removed provider %s", name)
                    return True
            return False

    def services(self, kind: str) -> list[Service]:
        """All services of ``kind`` across providers, in preference order."""
        return [s for provider in self.providers() for s in provider.services(kind)]

    def get_algorithms(self, kind: str, deduplicate: bool = True) -> list[str]:
        """
        Names of every service of ``kind``, in encounter order.

        Args:
            kind: Service kind label
            deduplicate: Drop case-insensitive repeats across providers

        Returns:
            Ordered list of algorithm names
        """
        names: list[str] = []
        seen: set[str] = set()
        for service in self.services(kind):
            upper = service.algorithm.upper()
            if deduplicate and upper in seen:
                continue
            seen.add(upper)
            names.append(service.algorithm)
        return names

    def find_service(self, kind: str, algorithm: str) -> Optional[Service]:
        """First service of ``kind`` matching ``algorithm`` (or an alias)."""
        for provider in self.providers():
            service = provider.get_service(kind, algorithm)
            if service is not None:
                return service
        return None

    def find_services(self, kind: str, algorithm: str) -> list[Service]:
        """Every matching service, most preferred first."""
        found = []
        for provider in self.providers():
            service = provider.get_service(kind, algorithm)
            if service is not None:
                found.append(service)
        return found


_default_registry: Optional[ProviderRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> ProviderRegistry:
    """
    Get or create the process-wide registry.

    The first call installs the ``OpenSSL`` provider backed by the
    ``cryptography`` package.
    """
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                from securefacade.provider.openssl import OpenSSLProvider

                _default_registry = ProviderRegistry([OpenSSLProvider()])
    return _default_registry


def reset_default_registry() -> None:
    """Drop the process-wide registry. Use only for testing."""
    global _default_registry
    with _default_lock:
        _default_registry = None
