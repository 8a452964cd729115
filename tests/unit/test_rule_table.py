"""Unit tests for rules, filters and rule resolution."""

import pytest

from markturn.dom import parse_html
from markturn.exceptions import RuleFilterError
from markturn.node import ClassificationTable
from markturn.options import MarkdownOptions
from markturn.rules import (
    PredicateFilter,
    ReferenceLinkState,
    Rule,
    RuleTable,
    TagFilter,
    as_filter,
    is_unsupported_element,
)
from markturn.rules.defaults import default_rules


def resolve(table: RuleTable, markup: str, name: str) -> Rule:
    node = parse_html(markup).find(name)
    return table.for_node(node, ClassificationTable().classify(node))


def strike(content, node, options):
    return f"~~{content}~~"


@pytest.mark.unit
class TestFilters:
    """Test filter normalization and matching."""

    def test_tag_name(self):
        rule_filter = as_filter("DEL")
        assert rule_filter == TagFilter(frozenset({"del"}))
        assert rule_filter.matches(parse_html("<del>x</del>").find("del"), MarkdownOptions())

    def test_tag_collection(self):
        assert as_filter(["em", "I"]) == TagFilter(frozenset({"em", "i"}))
        assert as_filter(("b",)) == TagFilter(frozenset({"b"}))

    def test_predicate(self):
        def predicate(node, options):
            return node.get("id") == "x"

        rule_filter = as_filter(predicate)
        assert isinstance(rule_filter, PredicateFilter)
        soup = parse_html('<p id="x">a</p><p>b</p>')
        first, second = soup.find_all("p")
        assert rule_filter.matches(first, MarkdownOptions())
        assert not rule_filter.matches(second, MarkdownOptions())

    def test_normalized_filter_passthrough(self):
        rule_filter = TagFilter(frozenset({"p"}))
        assert as_filter(rule_filter) is rule_filter

    @pytest.mark.parametrize("bad", [None, 42, {"p": 1}, ["p", 3], b"p"])
    def test_unsupported_filter_raises(self, bad):
        with pytest.raises(RuleFilterError) as exc_info:
            as_filter(bad)
        assert exc_info.value.parameter_value == bad
        assert isinstance(exc_info.value, TypeError)

    def test_error_surfaces_at_match_time(self):
        rule = Rule(filter=42, replacement=strike)
        with pytest.raises(RuleFilterError):
            rule.matches(parse_html("<p>x</p>").p, MarkdownOptions())


@pytest.mark.unit
class TestRule:
    """Test the Rule value type."""

    def test_stateless_by_default(self):
        assert not Rule(filter="p", replacement=strike).is_stateful

    def test_reference_link_rule_is_stateful(self):
        rule = default_rules()["reference_link"]
        assert rule.is_stateful
        assert isinstance(rule.state_factory(), ReferenceLinkState)

    def test_reference_state_clear(self):
        state = ReferenceLinkState(references=["[1]: a"], ids={"a": 1})
        state.clear()
        assert state.references == [] and state.ids == {}

    def test_default_rules_fresh_each_call(self):
        first = default_rules()
        first.pop("paragraph")
        assert "paragraph" in default_rules()

    def test_default_rule_order(self):
        assert list(default_rules()) == [
            "paragraph",
            "line_break",
            "heading",
            "blockquote",
            "list",
            "list_item",
            "indented_code_block",
            "fenced_code_block",
            "horizontal_rule",
            "inline_link",
            "reference_link",
            "emphasis",
            "strong",
            "code",
            "image",
        ]


@pytest.mark.unit
class TestRuleTable:
    """Test rule precedence."""

    def test_blank_rule_first(self):
        table = RuleTable(MarkdownOptions())
        table.add("empty_em", Rule(filter="em", replacement=strike))
        assert resolve(table, "<em></em>", "em") is table.blank_rule

    def test_builtin_match(self):
        table = RuleTable(MarkdownOptions())
        assert resolve(table, "<p>x</p>", "p") is table.get("paragraph")

    def test_default_rule_last(self):
        table = RuleTable(MarkdownOptions())
        assert resolve(table, "<span>x</span>", "span") is table.default_rule

    def test_added_rule_beats_builtin(self):
        table = RuleTable(MarkdownOptions())
        rule = Rule(filter="p", replacement=strike)
        table.add("custom_paragraph", rule)
        assert resolve(table, "<p>x</p>", "p") is rule

    def test_most_recent_added_wins(self):
        table = RuleTable(MarkdownOptions())
        older = Rule(filter="del", replacement=strike)
        newer = Rule(filter="del", replacement=strike)
        table.add("older", older)
        table.add("newer", newer)
        assert resolve(table, "<del>x</del>", "del") is newer
        assert table.names()[:2] == ["newer", "older"]

    def test_builtin_beats_keep_and_remove(self):
        table = RuleTable(MarkdownOptions())
        table.keep("p")
        table.remove("p")
        assert resolve(table, "<p>x</p>", "p") is table.get("paragraph")

    def test_keep_beats_remove(self):
        table = RuleTable(MarkdownOptions())
        table.remove("del")
        table.keep("del")
        rule = resolve(table, "<del>x</del>", "del")
        assert rule.replacement is MarkdownOptions().keep_replacement

    def test_remove(self):
        table = RuleTable(MarkdownOptions())
        table.remove(["del", "ins"])
        rule = resolve(table, "<ins>x</ins>", "ins")
        assert rule.replacement("x", None, MarkdownOptions()) == ""

    def test_options_rules_override_builtin(self):
        rule = Rule(filter="em", replacement=strike)
        table = RuleTable(MarkdownOptions(rules={"emphasis": rule}))
        assert table.get("emphasis") is rule
        assert table.names().index("emphasis") == list(default_rules()).index("emphasis")

    def test_options_rules_none_disables_builtin(self):
        table = RuleTable(MarkdownOptions(rules={"emphasis": None}))
        assert table.get("emphasis") is None
        assert "emphasis" not in table.names()
        assert resolve(table, "<em>x</em>", "em") is table.default_rule

    def test_options_rules_new_name_appended(self):
        rule = Rule(filter="del", replacement=strike)
        table = RuleTable(MarkdownOptions(rules={"strike": rule}))
        assert table.names()[-1] == "strike"
        assert len(table) == len(default_rules()) + 1

    def test_iteration_order(self):
        table = RuleTable(MarkdownOptions())
        rule = Rule(filter="del", replacement=strike)
        table.add("strike", rule)
        rules = list(table)
        assert rules[0] is rule
        assert rules[1] is table.get("paragraph")

    def test_bad_filter_raises_on_resolution(self):
        table = RuleTable(MarkdownOptions())
        table.add("broken", Rule(filter=3.5, replacement=strike))
        with pytest.raises(RuleFilterError):
            resolve(table, "<p>x</p>", "p")


@pytest.mark.unit
class TestHtmlRetention:
    """Test retention-mode resolution."""

    def test_retention_rule_used_for_unsupported(self):
        table = RuleTable(MarkdownOptions(html_retention_mode="preserve_all"))
        assert resolve(table, '<span id="a">x</span>', "span") is table.retention_rules["preserve_all"]

    def test_retention_beats_added_rules(self):
        table = RuleTable(MarkdownOptions(html_retention_mode="markdown_including_html"))
        table.add("span", Rule(filter="span", replacement=strike))
        rule = resolve(table, '<span class="a">x</span>', "span")
        assert rule is table.retention_rules["markdown_including_html"]

    def test_standard_mode_ignores_unsupported(self):
        table = RuleTable(MarkdownOptions())
        assert resolve(table, '<span id="a">x</span>', "span") is table.default_rule

    @pytest.mark.parametrize(
        "markup,name,expected",
        [
            ("<em>x</em>", "em", False),
            ('<span id="a">x</span>', "span", True),
            ("<custom-element>x</custom-element>", "custom-element", True),
            ('<a href="#" title="t">x</a>', "a", False),
            ('<a href="#" data-track="click">x</a>', "a", True),
            ('<img src="a.png" alt="A" title="T">', "img", False),
            ('<img src="a.png" width="100">', "img", True),
            ('<pre><code class="language-js">x</code></pre>', "pre", False),
            ('<pre><code data-lang="js">x</code></pre>', "pre", True),
            ('<pre><code class="language-js">x</code></pre>', "code", False),
            ('<p><code class="x">y</code></p>', "code", True),
        ],
    )
    def test_is_unsupported_element(self, markup, name, expected):
        assert is_unsupported_element(parse_html(markup).find(name)) is expected
