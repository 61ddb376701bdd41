"""Utility modules."""

from securefacade.utils.validators import encode_text, require_bytes, require_present

__all__ = ["encode_text", "require_bytes", "require_present"]
