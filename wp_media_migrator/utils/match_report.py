"""
Generation of the match report CSV.

The :func:`generate_match_report_csv` helper writes one row per processed
product, linking its legacy URLs to the scraped page whose media was taken.
The file is the audit trail used to double-check heuristic matches by hand.
"""

from __future__ import annotations

import csv
import os
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from ..models.match import MatchResult

HEADER = ["Slug", "OldURLs", "MatchedLink", "Tier", "ImageCount"]


def generate_match_report_csv(
    results: Iterable[MatchResult], out_path: str = "reports/media_match_report.csv"
) -> str:
    """Write the match report for ``results`` and return its path.

    Unmatched products get empty ``MatchedLink`` and ``Tier`` cells and an
    image count of ``0``.  The parent directory is created automatically.
    """
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(HEADER)
        for result in results:
            page = result.page
            writer.writerow(
                [
                    result.product.slug,
                    result.product.old_urls,
                    page.link if page else "",
                    result.tier or "",
                    len(page.images) if page else 0,
                ]
            )
    return out_path
