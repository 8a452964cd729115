"""Integration tests for extending the converter with rules and plugins."""

import re

import pytest

from markturn import HTMLToMarkdown, MarkdownOptions, Rule, html_to_markdown


def strikethrough(service):
    service.add_rule(
        "strikethrough",
        Rule(filter=["del", "s", "strike"], replacement=lambda content, node, options: f"~~{content}~~"),
    )


def task_list_items(service):
    def is_checkbox(node, options):
        return node.name == "input" and node.get("type") == "checkbox" and node.parent.name == "li"

    service.add_rule(
        "task_list_items",
        Rule(
            filter=is_checkbox,
            replacement=lambda content, node, options: ("[x]" if node.has_attr("checked") else "[ ]") + " ",
        ),
    )


def highlighted_code_block(service):
    pattern = re.compile(r"highlight-(?:text|source)-([a-z0-9]+)")

    def is_highlighted(node, options):
        return node.name == "div" and pattern.search(node.get("class") or "") is not None and node.pre is not None

    def replacement(content, node, options):
        language = pattern.search(node.get("class")).group(1)
        return f"\n\n{options.fence}{language}\n{node.pre.get_text()}\n{options.fence}\n\n"

    service.add_rule("highlighted_code_block", Rule(filter=is_highlighted, replacement=replacement))


@pytest.mark.integration
class TestPlugins:
    """Test plugin-style extension of the rule table."""

    def test_strikethrough(self):
        converter = HTMLToMarkdown().use(strikethrough)
        assert converter.render("<p>Some <del>old</del> and <s>stale</s> text</p>") == "Some ~~old~~ and ~~stale~~ text"

    def test_task_list(self):
        converter = HTMLToMarkdown().use([strikethrough, task_list_items])
        html = '<ul><li><input type="checkbox" checked> Done</li><li><input type="checkbox"> Todo</li></ul>'
        assert converter.render(html) == "- [x] Done\n- [ ] Todo"

    def test_highlighted_code_block(self):
        converter = HTMLToMarkdown().use(highlighted_code_block)
        html = '<div class="highlight highlight-source-python"><pre>print(1)</pre></div>'
        assert converter.render(html) == "```python\nprint(1)\n```"

    def test_later_rules_take_precedence(self):
        converter = HTMLToMarkdown()
        converter.add_rule("first", Rule(filter="mark", replacement=lambda c, n, o: f"=={c}=="))
        converter.add_rule("second", Rule(filter="mark", replacement=lambda c, n, o: f"<<{c}>>"))
        assert converter.render("<mark>hi</mark>") == "<<hi>>"

    def test_added_rule_overrides_builtin(self):
        converter = HTMLToMarkdown().add_rule(
            "underscore_emphasis", Rule(filter=["em", "i"], replacement=lambda c, n, o: f"_{c}_")
        )
        assert converter.render("<p><em>a</em></p>") == "_a_"

    def test_builtin_rule_disabled_through_options(self):
        options = MarkdownOptions(rules={"emphasis": None})
        assert html_to_markdown("<p><em>plain</em> text</p>", options) == "plain text"

    def test_builtin_rule_replaced_through_options(self):
        rule = Rule(filter="hr", replacement=lambda c, n, o: "\n\n***\n\n")
        assert html_to_markdown("<p>a</p><hr><p>b</p>", rules={"horizontal_rule": rule}) == "a\n\n***\n\nb"
