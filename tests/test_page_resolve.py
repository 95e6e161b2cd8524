"""Tests for kidapage.pages.resolve — candidate generation and selection."""

import pytest

from kidapage.pages.resolve import normalize_prefix, select_template, template_candidates


class TestNormalizePrefix:
    @pytest.mark.parametrize("raw", ["pages", "/pages", "pages/", "/pages/", "//pages//"])
    def test_strips_slashes(self, raw: str) -> None:
        assert normalize_prefix(raw) == "pages"

    def test_keeps_inner_slashes(self) -> None:
        assert normalize_prefix("/site/pages/") == "site/pages"

    def test_empty(self) -> None:
        assert normalize_prefix("/") == ""


class TestTemplateCandidates:
    def test_path_yields_file_then_index(self) -> None:
        assert template_candidates("/about", "pages") == [
            "pages/about.html",
            "pages/about/index.html",
        ]

    def test_nested_path(self) -> None:
        assert template_candidates("/docs/install", "pages") == [
            "pages/docs/install.html",
            "pages/docs/install/index.html",
        ]

    def test_root_yields_single_index(self) -> None:
        assert template_candidates("", "pages") == ["pages/index.html"]

    def test_empty_prefix(self) -> None:
        assert template_candidates("/about", "") == ["/about.html", "/about/index.html"]
        assert template_candidates("", "") == ["/index.html"]

    def test_no_decoding_or_sanitizing(self) -> None:
        # The server is trusted to hand over a normalized path
        assert template_candidates("/a%20b", "pages")[0] == "pages/a%20b.html"
        assert template_candidates("/../secret", "pages")[0] == "pages/../secret.html"

    def test_same_input_same_output(self) -> None:
        first = template_candidates("/about", "pages")
        second = template_candidates("/about", "pages")
        assert first == second
        assert first is not second


class TestSelectTemplate:
    candidates = ["pages/about.html", "pages/about/index.html"]

    def test_no_match(self) -> None:
        assert select_template(self.candidates, {"pages/index.html"}) is None

    def test_file_only(self) -> None:
        assert select_template(self.candidates, {"pages/about.html"}) == "pages/about.html"

    def test_index_only(self) -> None:
        registry = {"pages/about/index.html"}
        assert select_template(self.candidates, registry) == "pages/about/index.html"

    def test_both_registered_index_wins_by_default(self) -> None:
        registry = {"pages/about.html", "pages/about/index.html"}
        assert select_template(self.candidates, registry) == "pages/about/index.html"

    def test_both_registered_file_precedence(self) -> None:
        registry = {"pages/about.html", "pages/about/index.html"}
        assert select_template(self.candidates, registry, precedence="file") == "pages/about.html"

    def test_accepts_frozenset_registry(self) -> None:
        registry = frozenset({"pages/index.html"})
        assert select_template(["pages/index.html"], registry) == "pages/index.html"
