import copy
import json
import os
import sys

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from wp_media_migrator.extractors.json_extractor import InputFileError
from wp_media_migrator.media_merge_tool import ConfigError, MediaMergeTool
from wp_media_migrator.models import PageMedia


@pytest.fixture
def tool(tmp_path):
    return MediaMergeTool({"migration": {"report_dir": str(tmp_path / "reports")}})


def _write(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_end_to_end_golfreizen_rewrite(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    _write(
        tmp_path / "product-data.json",
        [{"slug": "/golfreizen/nl/foo-tour", "old_urls": "https://x.test/nl/golfreizen/foo-tour"}],
    )
    _write(
        tmp_path / "wp-data" / "pages.images.json",
        [{"link": "https://x.test/nl/foo-tour", "images": ["https://x.test/a.jpg"]}],
    )

    stats = MediaMergeTool().run()

    assert (stats.matched, stats.unmatched) == (1, 0)
    raw = (tmp_path / "product-data.with-media.json").read_text(encoding="utf-8")
    assert raw.endswith("]\n")
    assert json.loads(raw) == [
        {
            "slug": "/golfreizen/nl/foo-tour",
            "old_urls": "https://x.test/nl/golfreizen/foo-tour",
            "images": ["https://x.test/a.jpg"],
        }
    ]
    assert capsys.readouterr().out.splitlines() == [
        "Wrote 1 products to product-data.with-media.json (matched: 1, unmatched: 0)"
    ]


def test_limit_processes_only_leading_products(tool):
    products = [{"slug": f"/golfreizen/p{i}", "position": i} for i in range(10)]
    original = copy.deepcopy(products)

    enriched, stats, results = tool.merge_products(products, [], limit=3)

    assert len(enriched) == 10
    assert all("images" in p for p in enriched[:3])
    assert enriched[3:] == original[3:]
    assert all("images" not in p for p in enriched[3:])
    assert [p["position"] for p in enriched] == list(range(10))
    assert products == original
    assert (stats.total, stats.processed) == (10, 3)
    assert len(results) == 3


def test_limit_zero_and_beyond_length(tool):
    products = [{"slug": "/a"}, {"slug": "/b"}]
    enriched, stats, _ = tool.merge_products(products, [], limit=0)
    assert enriched == products
    assert stats.processed == 0

    enriched, stats, _ = tool.merge_products(products, [], limit=5)
    assert all(p["images"] == [] for p in enriched)
    assert stats.unmatched == 2


def test_negative_limit_is_rejected(tool):
    with pytest.raises(ValueError):
        tool.merge_products([], [], limit=-1)


def test_unmatched_product_with_old_urls_is_reported_once(tool, tmp_path, capsys):
    pages = [PageMedia(link="https://x.test/nl/other", images=["o.jpg"])]
    products = [
        {"slug": "/golfreizen/zanzibar", "old_urls": "https://old.test/nl/zanzibar-trip"},
        {"slug": "/golfreizen/no-legacy-here"},
    ]

    enriched, stats, _ = tool.merge_products(products, pages)

    assert (stats.matched, stats.unmatched) == (0, 2)
    assert [p["images"] for p in enriched] == [[], []]
    err_lines = capsys.readouterr().err.strip().splitlines()
    assert err_lines == ["No media match for old_urls: https://old.test/nl/zanzibar-trip"]

    report = (tmp_path / "reports" / "unmatched.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(report) == 1
    entry = json.loads(report[0])
    assert entry["code"] == "NO_MEDIA_MATCH"
    assert entry["slug"] == "/golfreizen/zanzibar"


def test_map_iframe_copied_only_when_page_has_one(tool):
    pages = [
        PageMedia(link="https://x.test/nl/with-map", images=["a.jpg"], mapIframe="<iframe src='m'></iframe>"),
        PageMedia(link="https://x.test/nl/no-map", images=["b.jpg"]),
    ]
    products = [
        {"old_urls": "https://x.test/nl/with-map", "title": "A"},
        {"old_urls": "https://x.test/nl/no-map", "title": "B"},
    ]

    enriched, stats, results = tool.merge_products(products, pages)

    assert stats.matched == 2
    assert enriched[0]["mapIframe"] == "<iframe src='m'></iframe>"
    assert "mapIframe" not in enriched[1]
    assert list(enriched[0]) == ["old_urls", "title", "images", "mapIframe"]
    assert [r.tier for r in results] == ["exact", "exact"]


def test_matched_images_are_copies(tool):
    page = PageMedia(link="https://x.test/nl/a", images=["a.jpg"])
    enriched, _, _ = tool.merge_products([{"old_urls": "https://x.test/nl/a"}], [page])
    enriched[0]["images"].append("b.jpg")
    assert page.images == ["a.jpg"]


def test_missing_input_leaves_no_output(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / "product-data.json", [])
    with pytest.raises(InputFileError, match="wp-data"):
        MediaMergeTool().run()
    assert not (tmp_path / "product-data.with-media.json").exists()


def test_run_uses_config_file_and_writes_reports(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / "in" / "products.json", [{"old_urls": "https://x.test/golfreis/a"}, {"slug": "/b"}])
    _write(tmp_path / "in" / "pages.json", [{"link": "https://x.test/a", "images": ["a.jpg"]}])
    _write(
        tmp_path / "config" / "merge.json",
        {
            "paths": {"products_in": "in/products.json", "pages_in": "in/pages.json", "out": "out/products.json"},
            "migration": {"limit": 1, "match_report_csv": "out/report.csv", "report_dir": "reports/media_merge"},
            "logging": {"log_file": "out/merge.log"},
        },
    )

    tool = MediaMergeTool(config_file="config/merge.json")
    stats = tool.run()

    assert (stats.matched, stats.unmatched, stats.processed) == (1, 0, 1)
    written = json.loads((tmp_path / "out" / "products.json").read_text(encoding="utf-8"))
    assert written == [{"old_urls": "https://x.test/golfreis/a", "images": ["a.jpg"]}, {"slug": "/b"}]
    report = (tmp_path / "out" / "report.csv").read_text(encoding="utf-8").splitlines()
    assert report[0] == "Slug,OldURLs,MatchedLink,Tier,ImageCount"
    assert report[1] == ",https://x.test/golfreis/a,https://x.test/a,exact,1"
    assert "DEBUG: Loaded 2 products from in/products.json" in (tmp_path / "out" / "merge.log").read_text(encoding="utf-8")
    assert (tmp_path / "reports" / "media_merge" / "matched.jsonl").exists()


def test_invalid_limit_in_config(tmp_path):
    with pytest.raises(ConfigError):
        MediaMergeTool({"migration": {"limit": "3"}})


def test_invalid_config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid config"):
        MediaMergeTool(config_file=str(path))


@pytest.mark.parametrize("section,value", [("paths", None), ("migration", []), ("logging", "verbose")])
def test_config_sections_must_be_objects(section, value):
    with pytest.raises(ConfigError, match=f"'{section}'"):
        MediaMergeTool({section: value})


def test_default_run_writes_no_reports(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / "product-data.json", [{"old_urls": "https://x.test/nl/a"}, {"old_urls": "https://x.test/nl/b"}])
    _write(tmp_path / "wp-data" / "pages.images.json", [{"link": "https://x.test/nl/a", "images": ["a.jpg"]}])

    tool = MediaMergeTool()
    assert tool.config["migration"]["report_dir"] is None
    tool.run()

    assert not (tmp_path / "reports").exists()


def test_load_messages_only_go_to_log_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / "product-data.json", [{"slug": "/a"}])
    _write(tmp_path / "wp-data" / "pages.images.json", [])

    MediaMergeTool({"logging": {"log_file": "merge.log"}}).run()

    assert capsys.readouterr().out.splitlines() == [
        "Wrote 1 products to product-data.with-media.json (matched: 0, unmatched: 1)"
    ]
    log = (tmp_path / "merge.log").read_text(encoding="utf-8").splitlines()
    assert log == [
        "DEBUG: Loaded 1 products from product-data.json",
        f"DEBUG: Loaded 0 pages with media from {os.path.join('wp-data', 'pages.images.json')}",
    ]
