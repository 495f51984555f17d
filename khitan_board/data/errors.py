"""
Failures of a fetch cycle. Both are recovered by the refresh controller.
"""
from __future__ import annotations

from typing import Optional


class SheetSourceError(Exception):
    """Base class for anything that ends a fetch cycle in the error state."""


class TransportError(SheetSourceError):
    """Network unreachable, or the sheet export answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmptySourceError(SheetSourceError):
    """The body tokenized to zero rows — not even a header."""
