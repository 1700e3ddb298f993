"""Tests for result normalization helpers and the result models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from searchproxy.config.settings import FAVICON_SERVICE_BASE
from searchproxy.core.normalizer import build_result_item, favicon_url
from searchproxy.models.result import ResultItem, absolute_hostname


class TestAbsoluteHostname:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://docs.python.org/3/", "docs.python.org"),
            ("http://Example.COM:8080/path?q=1", "example.com"),
            ("/relative/path", None),
            ("ftp://files.example.com/x", None),
            ("not a url", None),
            ("https://", None),
            ("https://example.com:99999/", None),
            ("http://a<b>.com/", None),
        ],
    )
    def test_hostname(self, url: str, expected: str | None) -> None:
        assert absolute_hostname(url) == expected


class TestFaviconUrl:
    def test_default_base(self) -> None:
        assert favicon_url("https://docs.python.org/3/") == FAVICON_SERVICE_BASE + "docs.python.org"

    def test_invalid_url_raises(self) -> None:
        with pytest.raises(ValueError, match="Cannot derive a favicon"):
            favicon_url("mailto:someone@example.com")


class TestBuildResultItem:
    def test_full_item(self) -> None:
        item = build_result_item(
            title="  Rust  ",
            url="https://www.rust-lang.org/",
            description="A language empowering everyone.",
        )
        assert item is not None
        assert item.title == "Rust"
        assert item.url == "https://www.rust-lang.org/"
        assert item.favicon == FAVICON_SERVICE_BASE + "www.rust-lang.org"

    def test_missing_title_uses_url(self) -> None:
        item = build_result_item(title=None, url="https://example.com/a", description=None)
        assert item is not None
        assert item.title == "https://example.com/a"
        assert item.description == ""

    @pytest.mark.parametrize(
        "url",
        [
            None,
            "",
            "   ",
            "/wiki/Rust",
            "javascript:alert(1)",
            42,
            "https://exa mple.com/page",
            "https://example.com:notaport/x",
            "http://a<b>.com/",
        ],
    )
    def test_unusable_url_dropped(self, url: object) -> None:
        assert build_result_item(title="t", url=url, description="d") is None

    def test_custom_favicon_base(self) -> None:
        item = build_result_item(title="t", url="https://a.example/", description="", favicon_base="//f/")
        assert item is not None
        assert item.favicon == "//f/a.example"


class TestResultItemModel:
    def test_rejects_relative_url(self) -> None:
        with pytest.raises(ValidationError):
            ResultItem(title="t", url="/relative", description="", favicon="x")

    def test_rejects_malformed_host(self) -> None:
        with pytest.raises(ValidationError):
            ResultItem(title="t", url="https://exa mple.com/page", description="", favicon="x")
