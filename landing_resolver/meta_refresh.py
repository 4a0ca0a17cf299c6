"""HTML meta refresh detection."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional, Union

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from .errors import MalformedMetaRedirect

logger = logging.getLogger(__name__)

QUOTES = "'\""

# Tags are sliced first so each attribute scan stays within one bounded tag.
META_TAG_RE = re.compile(rb"<meta\b[^<>]{0,2048}", re.I)
REFRESH_EQUIV_RE = re.compile(rb"""\bhttp-equiv\s*=\s*(?:["']\s*)?refresh\b""", re.I)
REFRESH_CONTENT_RE = re.compile(
    rb"""\bcontent\s*=\s*(?:["']\s*)?\d*(?:\.\d+)?\s*;\s*url\s*=\s*["']?([^"'\s>]+)""",
    re.I,
)

HtmlInput = Union[bytes, str]


def _as_bytes(html: HtmlInput) -> bytes:
    if isinstance(html, str):
        return html.encode("utf-8")
    return html


def parse_refresh_content(content: str) -> str:
    """Return the target encoded in a refresh ``content`` value.

    The value looks like ``<delay>;url=<target>``. Everything up to the first
    ``=`` after the first ``;`` is discarded, so the ``url`` key is matched in
    any case. A leading quote around the target is removed.
    """

    _, sep, remainder = content.partition(";")
    if not sep:
        raise MalformedMetaRedirect(f"bad html meta redirect: {content!r}")
    _, sep, target = remainder.partition("=")
    if not sep:
        raise MalformedMetaRedirect(f"bad html meta redirect: {content!r}")

    target = target.strip()
    if target and target[0] in QUOTES:
        quote = target[0]
        target = target[1:]
        if target.endswith(quote):
            target = target[:-1]
    target = target.strip()
    if not target:
        raise MalformedMetaRedirect(f"empty html meta redirect target: {content!r}")
    return target


class RefreshStrategy:
    """One way of locating a meta refresh target in a document."""

    name = "base"

    def find(self, html: bytes) -> Optional[str]:
        raise NotImplementedError


class DocumentStrategy(RefreshStrategy):
    """Parse the document and read the first ``meta http-equiv=refresh``."""

    name = "document"

    def __init__(self, features: str = "lxml") -> None:
        self.features = features

    def find(self, html: bytes) -> Optional[str]:
        try:
            soup = BeautifulSoup(html, self.features)
        except ParserRejectedMarkup as exc:
            logger.debug("HTML parser rejected document: %s", exc)
            return None

        for meta in soup.find_all("meta"):
            equiv = meta.get("http-equiv")
            if not equiv or equiv.strip().lower() != "refresh":
                continue
            content = meta.get("content")
            if content is None:
                return None
            return parse_refresh_content(content)
        return None


class PatternStrategy(RefreshStrategy):
    """Scan the raw bytes tag by tag with permissive regular expressions."""

    name = "pattern"

    def find(self, html: bytes) -> Optional[str]:
        for tag in META_TAG_RE.finditer(html):
            chunk = tag.group(0)
            if not REFRESH_EQUIV_RE.search(chunk):
                continue
            match = REFRESH_CONTENT_RE.search(chunk)
            if match:
                target = match.group(1).decode("utf-8", errors="replace")
                return target.lstrip(QUOTES) or None
        return None


class MetaRefreshExtractor:
    """Try each strategy in order and return the first target found."""

    def __init__(self, strategies: Optional[Iterable[RefreshStrategy]] = None) -> None:
        if strategies is None:
            strategies = (DocumentStrategy(), PatternStrategy())
        self.strategies = list(strategies)

    def extract(self, html: HtmlInput) -> Optional[str]:
        data = _as_bytes(html)
        for strategy in self.strategies:
            target = strategy.find(data)
            if target:
                logger.debug("Meta refresh found by %s strategy: %s", strategy.name, target)
                return target
        return None


def find_meta_refresh(html: HtmlInput) -> Optional[str]:
    return MetaRefreshExtractor().extract(html)


__all__ = [
    "MetaRefreshExtractor",
    "RefreshStrategy",
    "DocumentStrategy",
    "PatternStrategy",
    "parse_refresh_content",
    "find_meta_refresh",
]
