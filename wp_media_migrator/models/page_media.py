from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.urls import normalize_urlish, split_old_urls


class PageMedia(BaseModel):
    """Images scraped from one legacy page, keyed by its normalized link."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    link: str
    images: List[str] = Field(default_factory=list)
    map_iframe: Optional[str] = Field(None, alias="mapIframe")

    @field_validator("link")
    @classmethod
    def _normalize_link(cls, v: str) -> str:
        return normalize_urlish(v)

    @field_validator("images", mode="before")
    @classmethod
    def _keep_string_images(cls, v: Any):
        if not isinstance(v, list):
            return v
        return [item for item in v if isinstance(item, str)]

    @field_validator("map_iframe", mode="before")
    @classmethod
    def _drop_non_string_iframe(cls, v: Any):
        return v if isinstance(v, str) else None

    @classmethod
    def from_raw(cls, obj: Any) -> Optional["PageMedia"]:
        """Build a page from a raw export entry, or ``None`` if it is unusable.

        An entry is usable when ``link`` is a string and ``images`` is a list.
        """
        if not isinstance(obj, Mapping):
            return None
        link = obj.get("link")
        images = obj.get("images")
        if not isinstance(link, str) or not isinstance(images, list):
            return None
        return cls(link=link, images=images, map_iframe=obj.get("mapIframe"))


class ProductRecord(BaseModel):
    """Typed view over a raw product dict.

    Only ``slug`` and ``old_urls`` are decoded; the original record is kept
    as-is in ``record`` so every other field passes through untouched.
    """

    slug: str = ""
    old_urls: str = ""
    record: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_raw(cls, obj: Mapping[str, Any]) -> "ProductRecord":
        slug = obj.get("slug")
        old_urls = obj.get("old_urls")
        return cls(
            slug=slug if isinstance(slug, str) else "",
            old_urls=old_urls if isinstance(old_urls, str) else "",
            record=dict(obj),
        )

    def legacy_urls(self) -> List[str]:
        return split_old_urls(self.old_urls)

    def with_media(self, page: PageMedia) -> Dict[str, Any]:
        out = dict(self.record)
        out["images"] = list(page.images)
        if page.map_iframe:
            out["mapIframe"] = page.map_iframe
        return out

    def without_media(self) -> Dict[str, Any]:
        out = dict(self.record)
        out["images"] = []
        return out
