"""
Structured reporting of per-product matching outcomes.

Products that cannot be matched are not errors for the run as a whole; they
are outcomes that need manual follow-up.  :func:`report_error` writes one
diagnostic line per such product to standard error and, when a report
directory is configured, appends the same event to a JSON Lines file so the
list can be reviewed after a run.  :func:`report_ok` records successful
matches in a sibling file without any console output.

The ``ERRORS`` dictionary maps event codes to human readable messages.
Codes not present in the dictionary fall back to the code itself.
"""

from __future__ import annotations

import json
import os
import sys
from typing import Any, Dict, Mapping, Optional

ERRORS: Dict[str, str] = {
    "NO_MEDIA_MATCH": "No media match for old_urls",
    "MEDIA_MATCHED": "Media matched from page",
}

UNMATCHED_LOG = "unmatched.jsonl"
MATCHED_LOG = "matched.jsonl"


def _write_jsonl(report_dir: str, filename: str, data: Dict[str, Any]) -> None:
    """Append ``data`` as a JSON object followed by a newline to ``report_dir/filename``."""
    os.makedirs(report_dir, exist_ok=True)
    with open(os.path.join(report_dir, filename), "a", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)
        f.write("\n")


def _entry(code: str, product: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "code": code,
        "message": ERRORS.get(code, code),
        "slug": product.get("slug"),
        "old_urls": product.get("old_urls"),
    }


def report_error(
    code: str,
    product: Mapping[str, Any],
    *,
    detail: Optional[str] = None,
    report_dir: Optional[str] = None,
) -> None:
    """Log a failed outcome for ``product``.

    Parameters
    ----------
    code:
        A key identifying the type of failure.  If ``code`` is present in
        :data:`ERRORS` its value will be used as the message.
    product:
        The raw product record.  Only ``slug`` and ``old_urls`` are referenced.
    detail:
        Optional text appended to the console line after the message.
    report_dir:
        Directory holding the JSON Lines reports.  Nothing is written to disk
        when it is ``None``.
    """
    entry = _entry(code, product)
    if detail is not None:
        entry["detail"] = detail
    line = f"{entry['message']}: {detail}" if detail else entry["message"]
    print(line, file=sys.stderr)
    if report_dir:
        _write_jsonl(report_dir, UNMATCHED_LOG, entry)


def report_ok(
    code: str,
    product: Mapping[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    *,
    report_dir: Optional[str] = None,
) -> None:
    """Record a successful outcome for ``product`` in the matched report."""
    if not report_dir:
        return
    entry = _entry(code, product)
    if extra:
        entry.update(extra)
    _write_jsonl(report_dir, MATCHED_LOG, entry)
