from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .page_media import PageMedia, ProductRecord


@dataclass
class MatchResult:
    product: ProductRecord
    page: Optional[PageMedia] = None
    # Name of the tier that produced the match: exact, tail or slug_tokens.
    tier: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.page is not None


@dataclass
class MergeStats:
    total: int = 0
    processed: int = 0
    matched: int = 0
    unmatched: int = 0
