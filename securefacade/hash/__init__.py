"""Message digest subsystem: manager, processor and result."""

from securefacade.hash.manager import DigestManager
from securefacade.hash.processor import DigestProcessor
from securefacade.hash.result import DigestResult

__all__ = ["DigestManager", "DigestProcessor", "DigestResult"]
