"""
Top-level package for the WordPress product media merge utility.

This package bundles the components required to attach the images scraped
from legacy WordPress pages to the product records of the reorganized site.
Modules are split into subpackages:

* :mod:`wp_media_migrator.extractors` – helpers to read the JSON exports
* :mod:`wp_media_migrator.matchers` – URL normalization and the matching cascade
* :mod:`wp_media_migrator.models` – typed views over pages and products
* :mod:`wp_media_migrator.utils` – event reports and the match report CSV

Each layer has no direct knowledge of configuration or execution strategy;
orchestration is handled in :mod:`wp_media_migrator.media_merge_tool`.
"""

__version__ = "0.1.0"
