import json
import os
import sys

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from wp_media_migrator.extractors.json_extractor import (
    InputFileError,
    extract_pages,
    extract_products,
    read_json_array,
)


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(InputFileError, match="not found: pages.json"):
        read_json_array(tmp_path / "pages.json", "pages.json")


def test_non_array_document_is_fatal(tmp_path):
    path = _write(tmp_path / "products.json", {"slug": "/a"})
    with pytest.raises(InputFileError, match="Expected array in products.json"):
        read_json_array(path, "products.json")


def test_invalid_json_is_fatal(tmp_path):
    path = tmp_path / "pages.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(InputFileError, match="Invalid JSON"):
        read_json_array(path)


def test_extract_pages_drops_unusable_entries(tmp_path):
    path = _write(
        tmp_path / "pages.json",
        [
            {"link": "https://x.test/a#f", "images": ["i.jpg", 3, None], "mapIframe": "<iframe></iframe>"},
            {"link": 5, "images": []},
            {"link": "https://x.test/b"},
            "junk",
            {"link": "https://x.test/c", "images": [], "mapIframe": 7},
        ],
    )
    pages = extract_pages(path)
    assert [p.link for p in pages] == ["https://x.test/a", "https://x.test/c"]
    assert pages[0].images == ["i.jpg"]
    assert pages[0].map_iframe == "<iframe></iframe>"
    assert pages[1].images == []
    assert pages[1].map_iframe is None


def test_extract_products_keeps_records_untouched(tmp_path):
    records = [{"slug": "/a", "old_urls": "x", "price": 10, "extra": {"k": [1, 2]}}, {}]
    path = _write(tmp_path / "products.json", records)
    assert extract_products(path) == records


def test_extract_products_rejects_non_objects(tmp_path):
    path = _write(tmp_path / "products.json", [{"slug": "/a"}, "oops"])
    with pytest.raises(InputFileError, match="Expected object at index 1"):
        extract_products(path, "products.json")
