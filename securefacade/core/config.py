"""
Facade Configuration Module
===========================

Provides immutable, environment-aware configuration for the facade.

Features:
- Immutable configuration after initialization
- Environment variable override support (prefixed with SECUREFACADE_)
- Sensitive-looking keys are never read from the environment
- Type-safe configuration access
"""

from __future__ import annotations

import hashlib
import os
import threading
from dataclasses import dataclass
from typing import Any, Final, Optional


_SENSITIVE_KEYS: Final[frozenset[str]] = frozenset({
    "password", "secret", "key", "token", "private", "credential", "salt"
})

_VALID_LEVELS: Final[frozenset[str]] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def _is_sensitive_key(key: str) -> bool:
    """Check if a configuration key might contain sensitive data."""
    key_lower = key.lower()
    return any(sensitive in key_lower for sensitive in _SENSITIVE_KEYS)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Algorithm catalog settings."""

    # Drop names that several providers advertise (case-insensitive).
    deduplicate: bool = True


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Immutable logging configuration."""

    level: str = "WARNING"
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    enable_console: bool = False
    enable_json: bool = False

    def __post_init__(self) -> None:
        """Validate logging settings."""
        if self.level.upper() not in _VALID_LEVELS:
            raise ValueError(f"Invalid log level: {self.level}")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Immutable application configuration."""

    app_name: str = "SecureFacade"
    version: str = "0.1.0"


class FacadeConfig:
    """
    Centralized, immutable configuration with environment override support.

    Usage:
        config = FacadeConfig.load()
        config.catalog.deduplicate
        config.logging.level
    """

    __slots__ = ("_catalog", "_logging", "_app", "_frozen", "_config_hash")

    _instance: Optional[FacadeConfig] = None
    _instance_lock = threading.Lock()

    def __init__(
        self,
        catalog: Optional[CatalogConfig] = None,
        logging: Optional[LoggingConfig] = None,
        app: Optional[AppConfig] = None,
    ) -> None:
        """Initialize configuration. Use FacadeConfig.load() for standard initialization."""
        object.__setattr__(self, "_frozen", False)
        object.__setattr__(self, "_catalog", catalog or CatalogConfig())
        object.__setattr__(self, "_logging", logging or LoggingConfig())
        object.__setattr__(self, "_app", app or AppConfig())
        object.__setattr__(self, "_config_hash", self._compute_hash())
        object.__setattr__(self, "_frozen", True)

    def _compute_hash(self) -> str:
        """Compute a hash of the configuration for integrity checking."""
        config_str = f"{self._catalog}|{self._logging}|{self._app}"
        return hashlib.sha256(config_str.encode()).hexdigest()[:16]

    @property
    def catalog(self) -> CatalogConfig:
        return self._catalog

    @property
    def logging(self) -> LoggingConfig:
        return self._logging

    @property
    def app(self) -> AppConfig:
        return self._app

    @property
    def config_hash(self) -> str:
        """Get configuration integrity hash."""
        return self._config_hash

    @classmethod
    def load(cls, env_prefix: str = "SECUREFACADE") -> FacadeConfig:
        """
        Load configuration with environment variable overrides.

        Environment variables are prefixed with SECUREFACADE_ and use
        double underscores for nested values.

        Examples:
            SECUREFACADE_LOGGING__LEVEL=DEBUG
            SECUREFACADE_LOGGING__ENABLE_CONSOLE=true
            SECUREFACADE_CATALOG__DEDUPLICATE=false

        Args:
            env_prefix: Prefix for environment variables (default: SECUREFACADE)

        Returns:
            Configured FacadeConfig instance
        """
        env_overrides = cls._parse_env_overrides(env_prefix)

        catalog_kwargs: dict[str, Any] = {}
        if "catalog.deduplicate" in env_overrides:
            catalog_kwargs["deduplicate"] = _parse_bool(env_overrides["catalog.deduplicate"])

        logging_kwargs: dict[str, Any] = {}
        if "logging.level" in env_overrides:
            logging_kwargs["level"] = env_overrides["logging.level"].upper()
        if "logging.enable_console" in env_overrides:
            logging_kwargs["enable_console"] = _parse_bool(env_overrides["logging.enable_console"])
        if "logging.enable_json" in env_overrides:
            logging_kwargs["enable_json"] = _parse_bool(env_overrides["logging.enable_json"])

        return cls(
            catalog=CatalogConfig(**catalog_kwargs) if catalog_kwargs else None,
            logging=LoggingConfig(**logging_kwargs) if logging_kwargs else None,
        )

    @staticmethod
    def _parse_env_overrides(prefix: str) -> dict[str, str]:
        """Parse environment variables with the given prefix."""
        overrides: dict[str, str] = {}
        prefix_upper = f"{prefix.upper()}_"

        for key, value in os.environ.items():
            if key.startswith(prefix_upper):
                # SECUREFACADE_SECTION__KEY -> section.key
                config_key = key[len(prefix_upper):].lower().replace("__", ".")
                if _is_sensitive_key(config_key):
                    continue
                overrides[config_key] = value

        return overrides

    @classmethod
    def get_instance(cls) -> FacadeConfig:
        """Get or create the process-wide configuration instance."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the process-wide instance. Use only for testing."""
        with cls._instance_lock:
            cls._instance = None

    def __repr__(self) -> str:
        return f"FacadeConfig(hash={self._config_hash}, app={self._app.app_name})"

    def __setattr__(self, name: str, value: Any) -> None:
        """Prevent modification after initialization."""
        if getattr(self, "_frozen", False):
            raise AttributeError("FacadeConfig is immutable after initialization")
        super().__setattr__(name, value)
