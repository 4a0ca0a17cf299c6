"""Single-hop HTTP fetching."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx

from .cookies import CookieStore
from .errors import InvalidURL, RequestFailed

logger = logging.getLogger(__name__)

ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


class Fetcher:
    """Issue one GET per call and hand back the unread response.

    Redirects are never followed here; every intermediate response has to
    reach the resolver so it can collect cookies and count hops.
    """

    def __init__(self, client: httpx.AsyncClient, user_agent: str) -> None:
        self.client = client
        self.user_agent = user_agent

    def build_request(self, url: str, cookies: CookieStore) -> httpx.Request:
        try:
            request = httpx.Request(
                "GET",
                url,
                headers={"User-Agent": self.user_agent, "Accept": ACCEPT},
            )
        except httpx.InvalidURL as exc:
            raise InvalidURL(f"invalid url {url!r}: {exc}", url=url) from exc
        cookies.apply(request)
        if "cookie" in request.headers:
            logger.debug("Add cookies: %s", request.headers["cookie"])
        return request

    @asynccontextmanager
    async def fetch(self, url: str, cookies: CookieStore) -> AsyncIterator[httpx.Response]:
        request = self.build_request(url, cookies)
        start = time.perf_counter()
        try:
            response = await self.client.send(request, stream=True, follow_redirects=False)
        except httpx.HTTPError as exc:
            raise RequestFailed(f"request err: {exc}", url=url) from exc
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            "Response code: %s, content-type: %s (%s ms)",
            response.status_code,
            response.headers.get("content-type", ""),
            elapsed_ms,
        )
        try:
            yield response
        finally:
            await response.aclose()

    async def read_prefix(self, response: httpx.Response, limit: int) -> bytes:
        """Read at most ``limit`` bytes of the response body."""

        buffer = bytearray()
        try:
            async for chunk in response.aiter_bytes():
                buffer.extend(chunk)
                if len(buffer) >= limit:
                    logger.debug("Body truncated at %s bytes for %s", limit, response.url)
                    break
        except httpx.HTTPError as exc:
            raise RequestFailed(f"read body err: {exc}", url=str(response.url)) from exc
        return bytes(buffer[:limit])


__all__ = ["Fetcher", "ACCEPT"]
