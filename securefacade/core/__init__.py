"""Core configuration, logging, errors and manager base."""

from securefacade.core.config import AppConfig, CatalogConfig, FacadeConfig, LoggingConfig
from securefacade.core.errors import (
    AlgorithmNotAvailableError,
    BlockSizeFailureError,
    DigestUnavailableError,
    InvalidArgumentError,
    KeyFailureError,
    PaddingFailureError,
    SecurityFacadeError,
)
from securefacade.core.logging import configure_logging, get_secure_logger

__all__ = [
    "AppConfig",
    "CatalogConfig",
    "FacadeConfig",
    "LoggingConfig",
    "SecurityFacadeError",
    "AlgorithmNotAvailableError",
    "PaddingFailureError",
    "BlockSizeFailureError",
    "KeyFailureError",
    "DigestUnavailableError",
    "InvalidArgumentError",
    "configure_logging",
    "get_secure_logger",
]
