"""Landing Resolver package."""

from .errors import (
    ConfigError,
    InvalidURL,
    MalformedMetaRedirect,
    RequestFailed,
    ResolutionError,
    ResolutionTimeout,
    TooManyRedirects,
    UnsupportedScheme,
)
from .resolver import RedirectResolver, ResolutionResult, resolve_url

__all__ = [
    "config",
    "logging_utils",
    "errors",
    "cookies",
    "fetcher",
    "meta_refresh",
    "deadline",
    "resolver",
    "RedirectResolver",
    "ResolutionResult",
    "resolve_url",
    "ResolutionError",
    "UnsupportedScheme",
    "TooManyRedirects",
    "RequestFailed",
    "MalformedMetaRedirect",
    "InvalidURL",
    "ResolutionTimeout",
    "ConfigError",
]

__version__ = "0.1.0"
