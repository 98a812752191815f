"""
Typed views over the JSON exports handled by the merge tool.
"""

from .page_media import PageMedia, ProductRecord
from .match import MatchResult, MergeStats

__all__ = ["PageMedia", "ProductRecord", "MatchResult", "MergeStats"]
