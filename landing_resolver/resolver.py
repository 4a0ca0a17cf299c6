"""Redirect chain resolution."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import httpx

from .config import Config
from .cookies import CookieStore
from .deadline import run_with_deadline
from .errors import InvalidURL, ResolutionError, TooManyRedirects, UnsupportedScheme
from .fetcher import Fetcher
from .meta_refresh import MetaRefreshExtractor

logger = logging.getLogger(__name__)

REDIRECT_STATUSES = {301, 302, 303, 307, 308}
SUPPORTED_SCHEMES = {"http", "https"}


@dataclass
class Hop:
    number: int
    url: str
    final_url: str
    status_code: int
    content_type: str = ""
    next_url: Optional[str] = None


@dataclass
class ResolutionResult:
    start_url: str
    url: Optional[str] = None
    error: Optional[ResolutionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def normalize_start_url(url: str) -> str:
    """Strip user input; scheme checks happen per hop in :func:`check_url`."""

    url = url.strip()
    if not url:
        raise InvalidURL("need url")
    return url


def join_url(base: str, target: str) -> str:
    """Resolve ``target`` relative to the URL that produced it."""

    try:
        return str(httpx.URL(base).join(target.strip()))
    except httpx.InvalidURL as exc:
        raise InvalidURL(f"bad redirect target {target!r}: {exc}", url=base) from exc


def check_url(url: str, hop: int) -> str:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise InvalidURL(f"parse url err: {exc}", url=url, hop=hop) from exc
    if parsed.scheme not in SUPPORTED_SCHEMES:
        raise UnsupportedScheme(f"unsupported url scheme: {parsed.scheme or '(none)'}", url=url, hop=hop)
    if not parsed.host:
        raise InvalidURL("url has no host", url=url, hop=hop)
    return str(parsed)


class RedirectResolver:
    """Follow header and meta refresh redirects to the landing URL.

    Each call to :meth:`resolve` owns its own HTTP client, cookie store and
    hop budget, so one resolver can serve concurrent resolutions.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        extractor: Optional[MetaRefreshExtractor] = None,
    ) -> None:
        self.config = config or Config()
        self.transport = transport
        self.extractor = extractor or MetaRefreshExtractor()

    async def resolve(self, url: str, max_hops: Optional[int] = None, timeout: Optional[float] = None) -> str:
        """Return the final URL for ``url`` or raise a ``ResolutionError``.

        ``timeout`` bounds the whole chain; ``0`` disables it and ``None``
        falls back to the configured value.
        """

        if max_hops is None:
            max_hops = self.config.max_hops
        if timeout is None:
            timeout = self.config.timeout
        return await run_with_deadline(timeout, self._follow(url, max_hops))

    async def resolve_result(
        self, url: str, max_hops: Optional[int] = None, timeout: Optional[float] = None
    ) -> ResolutionResult:
        try:
            final_url = await self.resolve(url, max_hops=max_hops, timeout=timeout)
        except ResolutionError as exc:
            logger.debug("Resolution of %s failed: %s", url, exc)
            return ResolutionResult(start_url=url, error=exc)
        return ResolutionResult(start_url=url, url=final_url)

    async def resolve_many(
        self,
        urls: Sequence[str],
        concurrency: Optional[int] = None,
        max_hops: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> List[ResolutionResult]:
        """Resolve several URLs concurrently, keeping input order."""

        semaphore = asyncio.Semaphore(concurrency or self.config.concurrency)

        async def worker(url: str) -> ResolutionResult:
            async with semaphore:
                return await self.resolve_result(url, max_hops=max_hops, timeout=timeout)

        return list(await asyncio.gather(*(worker(url) for url in urls)))

    async def _follow(self, start_url: str, max_hops: int) -> str:
        if max_hops <= 0:
            raise TooManyRedirects("too many redirects", url=start_url, hop=0)
        current = normalize_start_url(start_url)
        remaining = max_hops
        hop = 0
        cookies = CookieStore()
        logger.debug("Redirects limit: %s", max_hops)
        logger.debug("Target addr: %s", current)

        async with httpx.AsyncClient(
            transport=self.transport,
            timeout=self.config.request_timeout,
            follow_redirects=False,
        ) as client:
            fetcher = Fetcher(client, self.config.user_agent)
            while True:
                logger.debug("New request (hop %s, %s left): %s", hop, remaining, current)
                if remaining <= 0:
                    raise TooManyRedirects("too many redirects", url=current, hop=hop)
                current = check_url(current, hop)
                try:
                    record = await self._step(fetcher, cookies, current, hop)
                except ResolutionError as exc:
                    if exc.hop is None:
                        exc.hop = hop
                    if exc.url is None:
                        exc.url = current
                    raise
                if record.next_url is None:
                    return record.final_url
                remaining -= 1
                hop += 1
                current = record.next_url

    async def _step(self, fetcher: Fetcher, cookies: CookieStore, url: str, hop: int) -> Hop:
        async with fetcher.fetch(url, cookies) as response:
            effective_url = str(response.url)
            cookies.absorb_response(response)
            content_type = response.headers.get("content-type", "").lower()
            record = Hop(
                number=hop,
                url=url,
                final_url=effective_url,
                status_code=response.status_code,
                content_type=content_type,
            )

            if response.status_code in REDIRECT_STATUSES:
                location = response.headers.get("location")
                if location:
                    record.next_url = join_url(effective_url, location)
                    logger.debug("Header redirect %s -> %s", response.status_code, record.next_url)
                else:
                    logger.warning("Redirect status %s without Location at %s", response.status_code, url)
                return record

            if not content_type.startswith("text/html"):
                logger.debug("Not html content-type: %s", content_type or "(none)")
                return record

            body = await fetcher.read_prefix(response, self.config.body_limit)
            logger.debug("Read %s bytes of html from %s", len(body), effective_url)
            # parsing runs in a worker thread so the deadline can still fire
            target = await asyncio.to_thread(self.extractor.extract, body)
            if target is None:
                return record

            record.next_url = join_url(effective_url, target)
            logger.debug("Html meta redirect: %s", record.next_url)
            return record


def resolve_url(
    url: str,
    max_hops: Optional[int] = None,
    timeout: Optional[float] = None,
    config: Optional[Config] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Synchronous wrapper around :meth:`RedirectResolver.resolve`."""

    resolver = RedirectResolver(config=config, transport=transport)
    return asyncio.run(resolver.resolve(url, max_hops=max_hops, timeout=timeout))


__all__ = [
    "Hop",
    "RedirectResolver",
    "ResolutionResult",
    "REDIRECT_STATUSES",
    "check_url",
    "join_url",
    "normalize_start_url",
    "resolve_url",
]
