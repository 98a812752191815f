import json
from typing import Any, Dict, List, Optional

from ..models.page_media import PageMedia


class InputFileError(Exception):
    """Raised when an input export cannot be used; aborts the run before any output."""


def read_json_array(file_path, label: Optional[str] = None) -> List[Any]:
    """Read a JSON document that must be a top-level array.

    Args:
        file_path: Path of the JSON file.
        label: Name used in error messages, usually the path as given on the
            command line.  Defaults to ``file_path``.

    Returns:
        list: The decoded array.

    Raises:
        InputFileError: If the file is missing or unreadable, is not valid
            JSON, or does not hold an array.
    """
    label = label or str(file_path)
    try:
        with open(file_path, mode="r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise InputFileError(f"Input file not found: {label}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(f"Cannot read {label}: {e}") from e
    except json.JSONDecodeError as e:
        raise InputFileError(f"Invalid JSON in {label}: {e}") from e
    if not isinstance(data, list):
        raise InputFileError(f"Expected array in {label}")
    return data


def extract_pages(file_path, label: Optional[str] = None) -> List[PageMedia]:
    """Load the scraped pages, dropping entries without a string ``link`` or a list of ``images``."""
    pages = []
    for item in read_json_array(file_path, label):
        page = PageMedia.from_raw(item)
        if page is not None:
            pages.append(page)
    return pages


def extract_products(file_path, label: Optional[str] = None) -> List[Dict[str, Any]]:
    """Load the product records unchanged.

    Raises:
        InputFileError: If an element of the array is not a JSON object.
    """
    label = label or str(file_path)
    products = read_json_array(file_path, label)
    for position, item in enumerate(products):
        if not isinstance(item, dict):
            raise InputFileError(f"Expected object at index {position} in {label}")
    return products
