"""
URL and slug helpers used when matching products to scraped pages.

All functions are pure string manipulation.  Strings that are not absolute
URLs are never rejected: they fall through unchanged so that matching can
still work on literal values.
"""

from __future__ import annotations

import re
from typing import List, NamedTuple, Optional
from urllib.parse import SplitResult, urlsplit, urlunsplit

_DEFAULT_PORTS = {"http": 80, "https": 443}

# Historical restructurings of the travel section.  Each pair is applied to
# the first occurrence only.
_PATH_REWRITES = (
    ("/nl/golfreizen/", "/nl/"),
    ("/en/golfreizen/", "/en/"),
    ("/golfreizen/", "/"),
    ("/nl/golfreis/", "/nl/"),
    ("/en/golfreis/", "/en/"),
    ("/golfreis/", "/"),
)

_OLD_URL_SEPARATORS = re.compile(r"\s*[\n,;]+\s*|\s{2,}")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")

SLUG_STOP_WORDS = frozenset(
    {
        "golf",
        "of",
        "the",
        "and",
        "tour",
        "tours",
        "short",
        "break",
        "links",
        "experience",
        "test",
    }
)
MIN_TOKEN_LENGTH = 3


class MatchKeys(NamedTuple):
    """The two canonical forms of a URL used as lookup keys."""

    full: str
    no_query: str


def _parse_absolute(value: str) -> Optional[SplitResult]:
    """Split ``value`` into canonical URL parts, or ``None`` if it is not an absolute URL."""
    try:
        parts = urlsplit(value)
        port = parts.port
    except ValueError:
        return None
    if not parts.scheme or not parts.hostname or re.search(r"\s", parts.netloc):
        return None

    scheme = parts.scheme.lower()
    userinfo, _, host = parts.netloc.rpartition("@")
    host = host.lower()
    if port is not None and _DEFAULT_PORTS.get(scheme) == port:
        host = host.rsplit(":", 1)[0]
    netloc = f"{userinfo}@{host}" if userinfo else host
    return SplitResult(scheme, netloc, parts.path or "/", parts.query, "")


def normalize_urlish(value: str) -> str:
    """Trim ``value`` and, when it is an absolute URL, canonicalize it.

    Scheme and host are lower-cased, default ports dropped, an empty path
    becomes ``/`` and the fragment is removed.  The query string is kept.
    JSON-escaped slashes (``\\/``) left over from scraping are unescaped.
    """
    text = (value or "").strip().replace("\\/", "/")
    parts = _parse_absolute(text)
    if parts is None:
        return text
    return urlunsplit(parts)


def normalize_for_match(value: str) -> MatchKeys:
    full = normalize_urlish(value)
    parts = _parse_absolute(full)
    if parts is None:
        return MatchKeys(full, full)
    return MatchKeys(full, urlunsplit(parts._replace(query="")))


def split_old_urls(text: Optional[str]) -> List[str]:
    """Split the free-text ``old_urls`` field into individual URLs.

    Separators are commas, semicolons and newlines (with any surrounding
    whitespace) or runs of two or more whitespace characters.  Empty
    fragments are dropped and the original order is preserved.
    """
    if not text:
        return []
    return [part.strip() for part in _OLD_URL_SEPARATORS.split(text) if part.strip()]


def path_tail(value: str) -> Optional[str]:
    """Return the last non-empty path segment of ``value``."""
    parts = _parse_absolute(value.strip())
    path = parts.path if parts is not None else value
    segments = [seg for seg in path.split("/") if seg]
    return segments[-1] if segments else None


def derive_candidates(old_url: str) -> List[str]:
    """Return the lookup keys worth probing for one legacy URL.

    Both canonical forms of the URL come first, followed by every known
    path rewrite applied to each of them.  Duplicates are removed while
    keeping the first-seen order.
    """
    keys = normalize_for_match(old_url)
    candidates = dict.fromkeys(keys)
    for url in keys:
        for old, new in _PATH_REWRITES:
            candidates.setdefault(url.replace(old, new, 1))
    return list(candidates)


def tokenize_slug(slug: str) -> List[str]:
    """Split the last segment of a product slug into distinctive tokens."""
    cleaned = (slug or "").strip().strip("/")
    segments = [seg for seg in cleaned.split("/") if seg]
    last = segments[-1] if segments else ""
    tokens = [tok for tok in _NON_ALNUM.split(last.lower()) if tok]
    return [tok for tok in tokens if len(tok) >= MIN_TOKEN_LENGTH and tok not in SLUG_STOP_WORDS]
