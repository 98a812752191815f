"""
High-level orchestration of the product media merge.

This module defines a :class:`MediaMergeTool` class that ties together the
extractors, the matching cascade and the reporting utilities.  A run reads
the product export and the scraped page media export, attaches the images
of the matched page to each product, writes the enriched products and
prints a one-line summary.

Configuration is supplied via a JSON file path or directly as a dictionary.
All keys are optional:

* ``paths``: ``products_in``, ``pages_in`` and ``out``
* ``migration``: ``limit``, ``report_dir`` and ``match_report_csv``
* ``logging``: ``log_file``
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from wp_media_migrator.extractors.json_extractor import extract_pages, extract_products
from wp_media_migrator.matchers.strategies import PageIndex, match_product
from wp_media_migrator.models import MatchResult, MergeStats, PageMedia, ProductRecord
from wp_media_migrator.utils.errors import report_error, report_ok
from wp_media_migrator.utils.match_report import generate_match_report_csv

DEFAULT_CONFIG_FILE = os.path.join("config", "media_merge_config.json")


class ConfigError(Exception):
    """Raised when the configuration file cannot be used."""


def load_config(path: str) -> Dict[str, Any]:
    """Load the JSON configuration file at ``path``.

    Raises:
        ConfigError: If the file is missing, is not valid JSON or is not an object.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e
    if not isinstance(config, dict):
        raise ConfigError(f"Expected object in {path}")
    return config


def _check_limit(limit: Any) -> Optional[int]:
    if limit is None:
        return None
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise ValueError(f"limit must be a non-negative integer, got {limit!r}")
    return limit


class MediaMergeTool:
    """
    Encapsulates the state and behavior of one merge run: configuration,
    console/file logging, matching and writing of the enriched products.
    Unmatched products are recorded through :mod:`wp_media_migrator.utils.errors`.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, *, config_file: Optional[str] = None) -> None:
        if config_file and os.path.exists(config_file):
            config = load_config(config_file)
        elif config is None:
            config = {}

        for section in ("paths", "migration", "logging"):
            config.setdefault(section, {})
            if not isinstance(config[section], dict):
                raise ConfigError(f"Expected object for '{section}' in configuration, got {config[section]!r}")

        config["paths"].setdefault("products_in", "product-data.json")
        config["paths"].setdefault("pages_in", os.path.join("wp-data", "pages.images.json"))
        config["paths"].setdefault("out", "product-data.with-media.json")

        config["migration"].setdefault("limit", None)
        config["migration"].setdefault("report_dir", None)
        config["migration"].setdefault("match_report_csv", None)

        config["logging"].setdefault("log_file", None)

        try:
            _check_limit(config["migration"]["limit"])
        except ValueError as e:
            raise ConfigError(f"Invalid migration.limit in configuration: {e}") from e
        self.config = config

    def log_message(self, message: str, level: str = "INFO", *, console: bool = True) -> None:
        if console:
            print(f"[{level}] {message}")
        log_file = self.config["logging"].get("log_file")
        if log_file:
            os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
            with open(log_file, "a", encoding="utf-8") as f:
                f.write(f"{level}: {message}\n")

    def merge_products(
        self,
        products: Sequence[Dict[str, Any]],
        pages: Union[PageIndex, Sequence[PageMedia]],
        *,
        limit: Optional[int] = None,
    ) -> Tuple[List[Dict[str, Any]], MergeStats, List[MatchResult]]:
        """
        Attach page media to the first ``limit`` products (all of them when
        ``limit`` is ``None``).  Products past the limit are appended
        unchanged, so the output always has the same length and order as
        ``products``.  Neither the input list nor its records are mutated.

        :param products: Raw product dictionaries.
        :param pages: Scraped pages, or an already built :class:`PageIndex`.
        :param limit: Number of leading products to process.
        :return: The enriched products, the run statistics and one
            :class:`MatchResult` per processed product.
        """
        index = pages if isinstance(pages, PageIndex) else PageIndex(pages)
        limit = _check_limit(limit)
        report_dir = self.config["migration"].get("report_dir")

        to_process = products if limit is None else products[:limit]
        stats = MergeStats(total=len(products), processed=len(to_process))
        enriched: List[Dict[str, Any]] = []
        results: List[MatchResult] = []

        for raw in to_process:
            product = ProductRecord.from_raw(raw)
            result = match_product(product, index)
            results.append(result)

            if result.page is not None:
                enriched.append(product.with_media(result.page))
                stats.matched += 1
                report_ok(
                    "MEDIA_MATCHED",
                    raw,
                    {"link": result.page.link, "tier": result.tier, "images": len(result.page.images)},
                    report_dir=report_dir,
                )
            else:
                enriched.append(product.without_media())
                stats.unmatched += 1
                if product.old_urls:
                    report_error("NO_MEDIA_MATCH", raw, detail=product.old_urls, report_dir=report_dir)

        enriched.extend(products[len(to_process):])
        return enriched, stats, results

    def run(
        self,
        products_in: Optional[str] = None,
        pages_in: Optional[str] = None,
        out: Optional[str] = None,
        *,
        limit: Optional[int] = None,
        match_report_csv: Optional[str] = None,
    ) -> MergeStats:
        """
        Execute a full merge.  Arguments left as ``None`` fall back to the
        configuration.  Relative paths resolve against the current working
        directory.  Both inputs are loaded before anything is written, so
        an :class:`~wp_media_migrator.extractors.InputFileError` leaves no
        output behind.
        """
        paths = self.config["paths"]
        products_in = products_in or paths["products_in"]
        pages_in = pages_in or paths["pages_in"]
        out = out or paths["out"]
        if limit is None:
            limit = self.config["migration"]["limit"]
        match_report_csv = match_report_csv or self.config["migration"].get("match_report_csv")

        products = extract_products(os.path.abspath(products_in), products_in)
        self.log_message(f"Loaded {len(products)} products from {products_in}", level="DEBUG", console=False)
        pages = extract_pages(os.path.abspath(pages_in), pages_in)
        self.log_message(f"Loaded {len(pages)} pages with media from {pages_in}", level="DEBUG", console=False)

        enriched, stats, results = self.merge_products(products, pages, limit=limit)

        abs_out = os.path.abspath(out)
        os.makedirs(os.path.dirname(abs_out), exist_ok=True)
        with open(abs_out, "w", encoding="utf-8") as f:
            f.write(json.dumps(enriched, ensure_ascii=False, indent=2) + "\n")

        if match_report_csv:
            generate_match_report_csv(results, os.path.abspath(match_report_csv))
            self.log_message(f"Match report written to {match_report_csv}", level="DEBUG", console=False)

        print(f"Wrote {len(enriched)} products to {out} (matched: {stats.matched}, unmatched: {stats.unmatched})")
        return stats
