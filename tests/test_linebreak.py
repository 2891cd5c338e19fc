"""Tests for column-based line wrapping of minified output."""

from __future__ import annotations

from bundle_minifier.linebreak import insert_line_breaks


class TestInsertLineBreaks:
    def test_negative_column_disables_wrapping(self):
        assert insert_line_breaks("a;b;c;", -1) == "a;b;c;"

    def test_zero_breaks_after_every_statement(self):
        assert insert_line_breaks("a;b;c;", 0) == "a;\nb;\nc;"

    def test_breaks_only_past_column(self):
        text = "aaaa;b;cccc;d;"
        assert insert_line_breaks(text, 5) == "aaaa;b;\ncccc;d;"

    def test_wide_column_leaves_text_alone(self):
        assert insert_line_breaks("a;b;c;", 80) == "a;b;c;"

    def test_strings_are_not_split(self):
        text = 'x="a;b;c";y=\'};\';z=`;${1};`;'
        assert insert_line_breaks(text, 0) == (
            'x="a;b;c";\ny=\'};\';\nz=`;${1};`;'
        )

    def test_regex_literals_are_not_split(self):
        assert insert_line_breaks("x=/;}/g;y=2;", 0) == "x=/;}/g;\ny=2;"

    def test_regex_after_keyword(self):
        text = "function f(){return/[;]/.test(s)}"
        assert insert_line_breaks(text, 0) == text

    def test_division_is_not_a_regex(self):
        assert insert_line_breaks("a=b/c;d=e/f;", 0) == "a=b/c;\nd=e/f;"

    def test_comments_are_not_split(self):
        text = "/*! a;b; */x=1;"
        assert insert_line_breaks(text, 0) == text

    def test_existing_newlines_reset_the_column(self):
        assert insert_line_breaks("aaaa\nb;c;", 1) == "aaaa\nb;\nc;"

    def test_css_breaks_after_rules(self):
        text = 'a{b:c}d{content:"}"}e{f:g}'
        assert insert_line_breaks(
            text, 3, break_after="}", regex_literals=False
        ) == 'a{b:c}\nd{content:"}"}\ne{f:g}'

    def test_css_urls_are_not_line_comments(self):
        text = (
            "a{background:url(http://x.org/a.png)}b{color:red}"
            "c{background:url(//cdn.x.org/c.png)}d{color:green}"
        )
        wrapped = insert_line_breaks(
            text,
            0,
            break_after="}",
            regex_literals=False,
            line_comments=False,
        )

        assert wrapped.split("\n") == [
            "a{background:url(http://x.org/a.png)}",
            "b{color:red}",
            "c{background:url(//cdn.x.org/c.png)}",
            "d{color:green}",
        ]

    def test_css_block_comments_still_skipped(self):
        text = "/*! x{} */a{b:c}"
        assert insert_line_breaks(
            text, 0, break_after="}", line_comments=False
        ) == text
