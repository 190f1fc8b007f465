"""Tests for attribute parsing: literal, dynamic, quoted holes, and spreads."""

from __future__ import annotations

from taghtm.parser import parse
from tests.conftest import assert_element


class TestLiteralProps:
    def test_single_prop(self, markup):
        assert_element(markup('<a href="/home"></a>'), "a", {"href": "/home"})

    def test_multiple_props(self, markup):
        node = markup('<input type="text" name="q" />')
        assert node.props == {"type": "text", "name": "q"}

    def test_props_separated_by_newlines(self, markup):
        node = markup('<div\n  id="main"\n\tclass="wide"></div>')
        assert node.props == {"id": "main", "class": "wide"}

    def test_value_keeps_spaces_and_specials(self, markup):
        node = markup('<p title="a <b> = c / d"></p>')
        assert node.props == {"title": "a <b> = c / d"}

    def test_empty_value(self, markup):
        assert markup('<p title=""></p>').props == {"title": ""}

    def test_last_write_wins(self, markup):
        node = markup('<p id="a" id="b"></p>')
        assert node.props == {"id": "b"}

    def test_no_props_is_empty_mapping(self, markup):
        assert markup("<p></p>").props == {}

    def test_unquoted_value_characters_ignored(self, markup):
        node = markup('<p id=x"y"></p>')
        assert node.props == {"id": "y"}


class TestDynamicProps:
    def test_bare_hole_value(self):
        handler = object()
        node = parse(["<button onclick=", ">go</button>"], [handler])
        assert node.props == {"onclick": handler}
        assert node.children == ("go",)

    def test_quoted_hole_value(self):
        node = parse(['<a href="', '">x</a>'], ["/x"])
        assert node.props == {"href": "/x"}

    def test_quoted_hole_discards_literal_prefix(self):
        node = parse(['<a href="/base/', '">x</a>'], ["page"])
        assert node.props == {"href": "page"}

    def test_non_string_value_kept_as_is(self):
        node = parse(["<td colspan=", "></td>"], [3])
        assert node.props == {"colspan": 3}

    def test_dynamic_then_literal(self):
        node = parse(["<p a=", ' b="2"></p>'], [1])
        assert node.props == {"a": 1, "b": "2"}

    def test_quoted_hole_then_more_props(self):
        node = parse(['<p a="', '" b="2"></p>'], [1])
        assert node.props == {"a": 1, "b": "2"}

    def test_dynamic_value_in_self_closing_tag(self):
        node = parse(["<img src=", " />"], ["a.png"])
        assert_element(node, "img", {"src": "a.png"}, ())


class TestSpread:
    def test_spread_merges_all_keys(self):
        node = parse(["<div ", "></div>"], [{"id": "x", "hidden": True}])
        assert node.props == {"id": "x", "hidden": True}

    def test_later_literal_overrides_spread(self):
        node = parse(["<div ", ' id="literal"></div>'], [{"id": "spread"}])
        assert node.props == {"id": "literal"}

    def test_later_spread_overrides_literal(self):
        node = parse(['<div id="literal" ', "></div>"], [{"id": "spread"}])
        assert node.props == {"id": "spread"}

    def test_dotted_spread_prefix(self):
        node = parse(["<div ...", "></div>"], [{"a": 1}])
        assert node.props == {"a": 1}

    def test_two_spreads(self):
        node = parse(["<div ", " ", "></div>"], [{"a": 1, "b": 1}, {"b": 2}])
        assert node.props == {"a": 1, "b": 2}

    def test_none_spread_ignored(self):
        node = parse(["<div ", "></div>"], [None])
        assert node.props == {}

    def test_non_mapping_spread_ignored(self):
        node = parse(["<div ", "></div>"], ["oops"])
        assert node.props == {}

    def test_spread_does_not_mutate_hole(self):
        extra = {"a": 1}
        parse(["<div ", ' b="2"></div>'], [extra])
        assert extra == {"a": 1}


class TestPermissiveProps:
    def test_attribute_without_value_swallows_rest_of_tag(self, markup):
        assert markup("<input disabled>") == []
