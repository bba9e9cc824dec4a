"""Tests for the gemtext renderer (gemlink.gemtext.renderer)."""

from __future__ import annotations

import pytest

from gemlink.gemtext.renderer import (
    BULLET,
    HEADING_1,
    HEADING_2,
    HEADING_3,
    LINK,
    PLAIN,
    QUOTE,
    TEXT,
    Style,
    classify_line,
    render,
    split_link,
)
from gemlink.protocol.models import GemUrl

PAGE_URL = GemUrl("h", 1965, "/dir/page")


# ---------------------------------------------------------------------------
# classify_line / split_link
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "line, expected",
    [
        ("=> /foo Label", (LINK, "/foo Label")),
        ("=>/foo", (TEXT, "=>/foo")),
        ("# Title", (HEADING_1, "Title")),
        ("## Sub", (HEADING_2, "Sub")),
        ("### Minor", (HEADING_3, "Minor")),
        ("* item", (BULLET, "item")),
        ("> quoted", (QUOTE, "quoted")),
        ("#hashtag", (TEXT, "#hashtag")),
        ("*emphasis*", (TEXT, "*emphasis*")),
        ("plain words", (TEXT, "plain words")),
        ("=>", (TEXT, "=>")),
        ("=>   ", (TEXT, "=>   ")),
        ("", (TEXT, "")),
    ],
)
def test_classify_line(line, expected):
    assert classify_line(line) == expected


def test_split_link_with_label():
    assert split_link(" /foo   A  label ") == ("/foo", "A  label")


def test_split_link_label_defaults_to_target():
    assert split_link(" /foo") == ("/foo", "/foo")


def test_split_link_tab_separator():
    assert split_link("\t/foo\tLabel") == ("/foo", "Label")


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------

class TestLinks:
    def test_single_absolute_path_link(self):
        page = render("=> /foo Label\n", PAGE_URL, link_offset=0)
        assert page.links == ["gemini://h/foo"]
        assert page.text == "[1] Label"

    def test_relative_link_resolved_against_directory(self):
        page = render("=> other.gmi\n", PAGE_URL)
        assert page.links == ["gemini://h/dir/other.gmi"]
        assert page.text == "[1] other.gmi"

    def test_numbering_starts_after_offset(self):
        page = render("=> /a A\n=> /b B\n", PAGE_URL, link_offset=4)
        assert page.text == "[5] A\n[6] B"
        assert page.links == ["gemini://h/a", "gemini://h/b"]

    def test_foreign_scheme_annotated_and_kept_verbatim(self):
        page = render("=> https://example.com/x Web page\n", PAGE_URL)
        assert page.links == ["https://example.com/x"]
        assert page.text == "[1] Web page (https)"

    def test_gemini_absolute_not_annotated(self):
        page = render("=> gemini://other/ Other\n", PAGE_URL)
        assert page.text == "[1] Other"

    def test_links_interleaved_with_text(self):
        body = "intro\n=> /a A\nmiddle\n=> /b B\n"
        page = render(body, PAGE_URL)
        assert page.text == "intro\n[1] A\nmiddle\n[2] B"

    def test_arrow_without_space_is_plain_text(self):
        page = render("=>/foo\n", PAGE_URL)
        assert page.links == []
        assert page.text == "=>/foo"


# ---------------------------------------------------------------------------
# Line types
# ---------------------------------------------------------------------------

class TestLineTypes:
    def test_headings_plain(self):
        page = render("# One\n## Two\n### Three\n", PAGE_URL)
        assert page.text == "One\nTwo\n  Three"

    def test_bullet(self):
        assert render("* item\n", PAGE_URL).text == "  • item"

    def test_quote(self):
        assert render("> wise words\n", PAGE_URL).text == "  │ wise words"

    def test_plain_text_unmodified(self):
        line = "Some *text* with <b>html</b> &amp; stuff  "
        assert render(line, PAGE_URL).text == line

    def test_styled_headings_differ(self):
        style = Style(enabled=True)
        page = render("# One\n## Two\n### Three\n", PAGE_URL, style=style)
        one, two, three = page.text.split("\n")
        assert one == f"{Style.BOLD}{Style.UNDERLINE}One{Style.RESET}"
        assert two == f"{Style.BOLD}Two{Style.RESET}"
        assert three == f"  {Style.UNDERLINE}Three{Style.RESET}"


# ---------------------------------------------------------------------------
# Preformatted blocks
# ---------------------------------------------------------------------------

class TestPreformatted:
    def test_contents_verbatim(self):
        body = "```\n# not a heading\n=> /not a link\n  * spaced   out  \n```\n"
        page = render(body, PAGE_URL)
        assert page.text == "# not a heading\n=> /not a link\n  * spaced   out  "
        assert page.links == []

    def test_alt_text_shown_once(self):
        body = "```python\ncode()\n``` trailing\nafter\n"
        assert render(body, PAGE_URL).text == "python\ncode()\nafter"

    def test_markup_resumes_after_block(self):
        body = "```\n=> /x X\n```\n=> /y Y\n"
        page = render(body, PAGE_URL)
        assert page.links == ["gemini://h/y"]
        assert page.text == "=> /x X\n[1] Y"

    def test_unterminated_block_runs_to_end(self):
        page = render("```\n=> /x X\n", PAGE_URL)
        assert page.links == []

    def test_preformatted_dimmed_when_styled(self):
        page = render("```\nart\n```\n", PAGE_URL, style=Style(enabled=True))
        assert page.text == f"{Style.DIM}art{Style.RESET}"


# ---------------------------------------------------------------------------
# Whitespace handling and footer
# ---------------------------------------------------------------------------

class TestWhitespace:
    def test_carriage_returns_stripped(self):
        page = render("# Title\r\n=> /a A\r\n", PAGE_URL)
        assert "\r" not in page.text
        assert page.links == ["gemini://h/a"]

    def test_blank_runs_collapse(self):
        assert render("a\n\n\n\nb\n\n\n", PAGE_URL).text == "a\n\nb"

    def test_double_blank_kept(self):
        assert render("a\n\nb\n", PAGE_URL).text == "a\n\nb"

    def test_footer_after_blank_line(self):
        assert render("a\n\n\n", PAGE_URL, footer="F").text == "a\n\nF"

    def test_footer_only_for_empty_body(self):
        assert render("", PAGE_URL, footer="F").text == "F"


def test_disabled_style_is_identity():
    assert PLAIN.bold("x") == "x"
    assert PLAIN.link_number(3) == "[3]"
    assert Style(enabled=True).link_number(3) == f"{Style.BOLD}{Style.CYAN}[3]{Style.RESET}"
