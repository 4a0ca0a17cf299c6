"""Per-resolution cookie storage."""

from __future__ import annotations

import logging
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Iterable, List, Tuple

import httpx

logger = logging.getLogger(__name__)


class CookieStore:
    """In-memory cookie jar that lives for a single resolution.

    Matching follows the standard library cookie policy with host-only
    cookies kept to their exact host, so only cookies set with a ``Domain``
    attribute reach subdomains.
    """

    def __init__(self) -> None:
        policy = DefaultCookiePolicy(strict_ns_domain=DefaultCookiePolicy.DomainStrictNonDomain)
        self._cookies = httpx.Cookies(CookieJar(policy=policy))

    def __len__(self) -> int:
        return len(self._cookies.jar)

    def absorb_response(self, response: httpx.Response) -> None:
        """Store cookies from ``response``, keyed by the URL that served it."""

        before = len(self)
        self._cookies.extract_cookies(response)
        if len(self) != before:
            logger.debug("Cookie jar now holds %s cookies after %s", len(self), response.request.url)

    def absorb(self, url: str, set_cookie_headers: Iterable[str]) -> None:
        request = httpx.Request("GET", url)
        headers = [("set-cookie", value) for value in set_cookie_headers]
        self.absorb_response(httpx.Response(200, headers=headers, request=request))

    def apply(self, request: httpx.Request) -> None:
        """Set the ``Cookie`` header on ``request`` from matching cookies."""

        self._cookies.set_cookie_header(request)

    def cookies_for(self, url: str) -> List[Tuple[str, str]]:
        request = httpx.Request("GET", url)
        self.apply(request)
        header = request.headers.get("cookie")
        if not header:
            return []
        pairs: List[Tuple[str, str]] = []
        for item in header.split("; "):
            name, _, value = item.partition("=")
            pairs.append((name, value))
        return pairs


__all__ = ["CookieStore"]
