"""Exception types raised while resolving a redirect chain."""

from __future__ import annotations

from typing import Optional


class ConfigError(ValueError):
    """Raised for invalid runtime parameters."""


class ResolutionError(Exception):
    """Base class for terminal resolution failures.

    ``url`` is the URL being processed when the failure happened and ``hop``
    its zero-based position in the chain, when known.
    """

    def __init__(self, message: str, url: Optional[str] = None, hop: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.hop = hop

    def __str__(self) -> str:
        if self.hop is None:
            return self.message
        return f"hop {self.hop} ({self.url}): {self.message}"


class UnsupportedScheme(ResolutionError):
    pass


class TooManyRedirects(ResolutionError):
    pass


class RequestFailed(ResolutionError):
    """Transport level failure; the httpx error is chained as ``__cause__``."""


class MalformedMetaRedirect(ResolutionError):
    pass


class InvalidURL(ResolutionError):
    pass


class ResolutionTimeout(ResolutionError):
    pass


__all__ = [
    "ConfigError",
    "ResolutionError",
    "UnsupportedScheme",
    "TooManyRedirects",
    "RequestFailed",
    "MalformedMetaRedirect",
    "InvalidURL",
    "ResolutionTimeout",
]
