"""Tests for reading compact rule text back into CSSRule objects."""

import pytest

from silkcss.errors import ParseError
from silkcss.model.rule import CSSRule
from silkcss.parser import parse_rule, parse_rules


# ---------------------------------------------------------------------------
# Single rules
# ---------------------------------------------------------------------------


class TestParseRule:
    def test_plain_rule(self):
        rule = parse_rule(".a{color:red}")
        assert rule == CSSRule(".a", "color:red")

    def test_pseudo_selector(self):
        rule = parse_rule(".a:hover{color:blue}")
        assert rule.selector == ".a:hover"
        assert rule.body == "color:blue"

    def test_wrapped_rule(self):
        rule = parse_rule("@media (min-width:768px){.a{padding:2rem}}")
        assert rule == CSSRule(".a", "padding:2rem", ("@media (min-width:768px)",))

    def test_nested_wrappers_outermost_first(self):
        rule = parse_rule("@supports (display:grid){@media print{.a{display:grid}}}")
        assert rule.wrappers == ("@supports (display:grid)", "@media print")

    def test_statement(self):
        rule = parse_rule("@layer reset, base;")
        assert rule.is_statement
        assert rule.selector == "@layer reset, base"

    def test_text_round_trip(self):
        text = "@media (min-width:768px){.silk_p_1rem_abc:hover{padding:1rem}}"
        assert parse_rule(text).text == text

    def test_multiple_declarations_joined(self):
        assert parse_rule("body { margin: 0; padding: 0; }").body == "margin: 0;padding: 0"

    def test_values_with_commas_and_parens(self):
        rule = parse_rule(".a{font-family:Inter, sans-serif}")
        assert rule.body == "font-family:Inter, sans-serif"

    def test_more_than_one_rule_rejected(self):
        with pytest.raises(ParseError, match="exactly one"):
            parse_rule(".a{color:red}.b{color:blue}")


# ---------------------------------------------------------------------------
# Rule lists
# ---------------------------------------------------------------------------


class TestParseRules:
    def test_source_order(self):
        rules = parse_rules(".a{color:red}\n.b{color:blue}\n@import url(x.css);")
        assert [r.selector for r in rules] == [".a", ".b", "@import url(x.css)"]

    def test_grouped_media_block(self):
        rules = parse_rules("@media print{.a{color:black}.b{display:none}}")
        assert [r.wrappers for r in rules] == [("@media print",), ("@media print",)]

    def test_empty_source(self):
        assert parse_rules("") == []
        assert parse_rules("   \n") == []

    def test_empty_block(self):
        assert parse_rules(".a{}") == [CSSRule(".a", "")]


class TestParseErrors:
    def test_unbalanced_braces(self):
        with pytest.raises(ParseError) as exc_info:
            parse_rules(".a{color:red")
        assert exc_info.value.line is not None

    def test_stray_close_brace(self):
        with pytest.raises(ParseError):
            parse_rules("}")

    def test_mixed_declarations_and_rules(self):
        with pytest.raises(ParseError, match="mixes"):
            parse_rules("@media print{color:red;.a{color:blue}}")
