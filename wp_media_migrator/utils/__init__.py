"""
Utility helpers used by the media merge tool.

This subpackage exposes the URL/slug string helpers, structured outcome
reporting and the match report CSV generation.
"""

from .urls import (
    MatchKeys,
    derive_candidates,
    normalize_for_match,
    normalize_urlish,
    path_tail,
    split_old_urls,
    tokenize_slug,
)
from .errors import ERRORS, report_error, report_ok
from .match_report import generate_match_report_csv

__all__ = [
    "MatchKeys",
    "derive_candidates",
    "normalize_for_match",
    "normalize_urlish",
    "path_tail",
    "split_old_urls",
    "tokenize_slug",
    "ERRORS",
    "report_error",
    "report_ok",
    "generate_match_report_csv",
]
