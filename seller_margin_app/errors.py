"""
Exception types.

The calculation functions raise nothing for inputs inside their
preconditions.  Request bodies are checked by the pydantic models in
``schemas.py``; these exceptions cover registry lookups for unknown
platform or overhead preset keys, which the HTTP layer turns into 400
responses.
"""

from __future__ import annotations


class SellerMarginError(Exception):
    """Base class for errors raised by this package."""


class InvalidInputError(SellerMarginError, ValueError):
    """An input names something the engine does not know about."""


class UnknownPlatformError(SellerMarginError, KeyError):
    """No fee template is registered under the requested key."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "unknown platform"
