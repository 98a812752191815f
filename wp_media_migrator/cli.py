"""
Command line interface of the product media merge.

Usage:
  merge-product-media
    [--productsIn product-data.json]
    [--pagesIn wp-data/pages.images.json]
    [--out product-data.with-media.json]
    [--limit 50] [--config config/media_merge_config.json]
    [--report-csv reports/media_match_report.csv] [--report-dir reports/media_merge]

Paths are resolved against the current working directory.  Flags win over
the configuration file, which wins over the built-in defaults.
"""

from __future__ import annotations

import argparse
import os
from typing import List, Optional

from wp_media_migrator.extractors.json_extractor import InputFileError
from wp_media_migrator.media_merge_tool import DEFAULT_CONFIG_FILE, ConfigError, MediaMergeTool


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value!r}")
    return number


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="merge-product-media",
        description="Attach the images of scraped WordPress pages to product records",
    )
    p.add_argument("--config", default=None, help=f"JSON configuration file (default: {DEFAULT_CONFIG_FILE}, optional)")
    p.add_argument("--productsIn", dest="products_in", default=None, help="Products JSON array (default: product-data.json)")
    p.add_argument("--pagesIn", dest="pages_in", default=None, help="Scraped pages JSON array (default: wp-data/pages.images.json)")
    p.add_argument("--out", default=None, help="Output JSON file (default: product-data.with-media.json)")
    p.add_argument("--limit", type=_non_negative_int, default=None, help="Process only the first N products")
    p.add_argument("--report-csv", dest="report_csv", default=None, help="Write a CSV linking each product to its matched page")
    p.add_argument("--report-dir", dest="report_dir", default=None, help="Directory for the matched/unmatched JSON Lines reports")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if args.config and not os.path.exists(args.config):
        raise SystemExit(f"Config file not found: {args.config}")
    try:
        tool = MediaMergeTool(config_file=args.config or DEFAULT_CONFIG_FILE)
    except ConfigError as e:
        raise SystemExit(str(e))

    if args.report_dir:
        tool.config["migration"]["report_dir"] = args.report_dir

    try:
        tool.run(
            products_in=args.products_in,
            pages_in=args.pages_in,
            out=args.out,
            limit=args.limit,
            match_report_csv=args.report_csv,
        )
    except InputFileError as e:
        raise SystemExit(f"Error: {e}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
