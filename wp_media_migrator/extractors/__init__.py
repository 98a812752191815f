"""
Extractors for the JSON exports consumed by the merge tool.

This subpackage reads the product export and the scraped page media export,
validates their top-level shape and turns page entries into
:class:`~wp_media_migrator.models.PageMedia` instances.
"""

from .json_extractor import InputFileError, extract_pages, extract_products, read_json_array

__all__ = ["InputFileError", "extract_pages", "extract_products", "read_json_array"]
