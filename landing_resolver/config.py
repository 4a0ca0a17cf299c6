"""Configuration utilities for Landing Resolver."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 6.1; WOW64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/41.0.2227.0 Safari/537.36"
)


@dataclass
class Config:
    """Runtime configuration parameters."""

    max_hops: int = 10
    timeout: Optional[float] = 15.0
    request_timeout: float = 10.0
    body_limit: int = 10 * 1024 * 1024
    user_agent: str = DEFAULT_USER_AGENT
    concurrency: int = 5
    verbose: bool = False


def parse_bool(value: str) -> bool:
    return value.lower() in {"1", "true", "yes", "on"}


def validate_timeout(timeout: Optional[float]) -> Optional[float]:
    """Return the overall timeout, or None when the watchdog is disabled."""

    if timeout is None:
        return None
    if timeout < 0:
        raise ConfigError(f"timeout should be greater than zero, got {timeout}")
    if timeout == 0:
        return None
    return float(timeout)


def load_config(env_file: Optional[str] = ".env") -> Config:
    """Load configuration from environment variables and optional .env file."""

    if env_file:
        load_dotenv(env_file, override=False)

    try:
        config = Config(
            max_hops=int(os.getenv("LR_MAX_HOPS", Config.max_hops)),
            timeout=float(os.getenv("LR_TIMEOUT", Config.timeout)),
            request_timeout=float(os.getenv("LR_REQUEST_TIMEOUT", Config.request_timeout)),
            body_limit=int(os.getenv("LR_BODY_LIMIT", Config.body_limit)),
            user_agent=os.getenv("LR_USER_AGENT", Config.user_agent),
            concurrency=int(os.getenv("LR_CONCURRENCY", Config.concurrency)),
            verbose=parse_bool(os.getenv("LR_VERBOSE", str(Config.verbose))),
        )
    except ValueError as exc:
        raise ConfigError(f"invalid configuration value: {exc}") from exc

    validate_timeout(config.timeout)
    if config.body_limit <= 0:
        raise ConfigError("body limit must be positive")
    if config.concurrency < 1:
        raise ConfigError("concurrency must be at least 1")
    return config


__all__ = ["Config", "DEFAULT_USER_AGENT", "load_config", "parse_bool", "validate_timeout"]
