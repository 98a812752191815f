"""
Matching of products to scraped WordPress pages.

The cascade in :mod:`.strategies` is an ordered list of independent tiers;
the first tier returning a page decides the match for a product.
"""

from .strategies import (
    STRATEGIES,
    PageIndex,
    match_exact,
    match_product,
    match_slug_tokens,
    match_tail,
)

__all__ = [
    "STRATEGIES",
    "PageIndex",
    "match_exact",
    "match_product",
    "match_slug_tokens",
    "match_tail",
]
