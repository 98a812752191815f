"""
Ordered cascade of strategies matching a product to a scraped page.

Every strategy is a plain function ``(product, index) -> PageMedia | None``.
:func:`match_product` evaluates :data:`STRATEGIES` in order and the first
one returning a page short-circuits the rest:

``exact``
    Legacy URLs and their known rewrites looked up in the page index.
``tail``
    Pages whose link contains the last path segment of a legacy URL.
``slug_tokens``
    Pages scored by the distinctive tokens of the product slug.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.match import MatchResult
from ..models.page_media import PageMedia, ProductRecord
from ..utils.urls import derive_candidates, normalize_for_match, path_tail, tokenize_slug

PREFERRED_LANGUAGES = ("nl", "en")
LANGUAGE_BONUS = 3
TOKEN_HIT_SCORE = 2


class PageIndex:
    """Pages in scan order plus a lookup table by normalized link.

    Both the full and the query-less form of every link are indexed.  When
    two pages share a key the later one wins.  The index is read-only once
    built.
    """

    def __init__(self, pages: Iterable[PageMedia]) -> None:
        self.pages: Tuple[PageMedia, ...] = tuple(pages)
        by_exact: Dict[str, PageMedia] = {}
        for page in self.pages:
            keys = normalize_for_match(page.link)
            by_exact[keys.full] = page
            by_exact[keys.no_query] = page
        self._by_exact = MappingProxyType(by_exact)

    def __len__(self) -> int:
        return len(self.pages)

    def lookup(self, url: str) -> Optional[PageMedia]:
        return self._by_exact.get(url)


Strategy = Callable[[ProductRecord, PageIndex], Optional[PageMedia]]


def match_exact(product: ProductRecord, index: PageIndex) -> Optional[PageMedia]:
    for old_url in product.legacy_urls():
        for candidate in derive_candidates(old_url):
            page = index.lookup(candidate)
            if page is not None:
                return page
    return None


def prefer_shortest(candidates: Sequence[PageMedia], lang: str) -> PageMedia:
    """Pick the shortest link, restricted to ``/<lang>/`` links when there are any."""
    by_lang = [page for page in candidates if f"/{lang}/" in page.link]
    pool = by_lang or candidates
    return min(pool, key=lambda page: len(page.link))


def match_tail(product: ProductRecord, index: PageIndex) -> Optional[PageMedia]:
    """Match on the last path segment of the legacy URLs.

    Tails are tried in order and the first tail with any hit decides the
    candidate set; hits are never merged across tails.
    """
    tails = dict.fromkeys(tail for tail in map(path_tail, product.legacy_urls()) if tail)
    for tail in tails:
        hits: List[PageMedia] = [
            page
            for page in index.pages
            if f"/{tail}/" in page.link or page.link.endswith(f"/{tail}")
        ]
        if hits:
            return prefer_shortest(hits, "nl")
    return None


def best_token_match(
    pages: Sequence[PageMedia], tokens: Sequence[str], lang: str
) -> Optional[PageMedia]:
    """Return the best scoring page, provided it has at least one token hit.

    A page scores :data:`TOKEN_HIT_SCORE` per token contained in its
    lower-cased link plus :data:`LANGUAGE_BONUS` when the link contains
    ``/<lang>/``.  The first page scanned wins a tie.  When the winner only
    earned the language bonus there is no match.
    """
    if not tokens:
        return None
    best: Optional[PageMedia] = None
    best_score = 0
    best_hits = 0
    for page in pages:
        link = page.link.lower()
        hits = sum(1 for token in tokens if token in link)
        score = hits * TOKEN_HIT_SCORE
        if f"/{lang}/" in link:
            score += LANGUAGE_BONUS
        if score > best_score:
            best_score = score
            best_hits = hits
            best = page
    return best if best_hits else None


def match_slug_tokens(product: ProductRecord, index: PageIndex) -> Optional[PageMedia]:
    if not product.slug:
        return None
    tokens = tokenize_slug(product.slug)
    for lang in PREFERRED_LANGUAGES:
        page = best_token_match(index.pages, tokens, lang)
        if page is not None:
            return page
    return None


STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("exact", match_exact),
    ("tail", match_tail),
    ("slug_tokens", match_slug_tokens),
)


def match_product(
    product: ProductRecord,
    index: PageIndex,
    strategies: Sequence[Tuple[str, Strategy]] = STRATEGIES,
) -> MatchResult:
    for tier, strategy in strategies:
        page = strategy(product, index)
        if page is not None:
            return MatchResult(product=product, page=page, tier=tier)
    return MatchResult(product=product)
