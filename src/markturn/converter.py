#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markturn/converter.py
"""HTML to Markdown conversion engine.

This module walks a parsed markup tree depth first and rewrites every element
through an ordered, overridable set of rules (see :mod:`markturn.rules`).
The output of each node is stitched onto the running output with a join step
that keeps at most one blank line between blocks, and a final pass appends
deferred rule output such as reference link definitions.

Key Features
------------
- Built-in rules for paragraphs, headings, lists, blockquotes, code blocks,
  links, images, emphasis and line breaks
- Plugins and custom rules that take precedence over the built-ins
- Keep/remove filters for elements without a Markdown equivalent
- HTML retention modes that preserve unsupported markup
- Markdown escaping of text outside code

Dependencies
------------
- beautifulsoup4: For HTML parsing and tree access

Examples
--------
Basic conversion:

    >>> from markturn import html_to_markdown
    >>> html_to_markdown("<h1>Title</h1><p>Some <em>text</em>.</p>")
    '# Title\\n\\nSome *text*.'

Adding a rule:

    >>> from markturn import HTMLToMarkdown, Rule
    >>> converter = HTMLToMarkdown()
    >>> converter.add_rule("strike", Rule(filter=["del", "s"], replacement=lambda c, n, o: f"~~{c}~~"))
    >>> converter.render("<del>gone</del>")
    '~~gone~~'

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Callable, Iterable, Union

from bs4.element import PageElement, Tag

from markturn.dom import create_root, get_attribute, is_convertible_node, is_element, is_text, node_name
from markturn.dom import is_code_block as _is_code_block
from markturn.exceptions import ConversionError, InvalidInputError, PluginError
from markturn.node import ClassificationTable
from markturn.options import MarkdownOptions
from markturn.rules.base import Rule
from markturn.rules.table import RuleTable
from markturn.utils.escape import escape_markdown
from markturn.utils.text import trim_leading_newlines, trim_trailing_newlines
from markturn.whitespace import collapse_whitespace

logger = logging.getLogger(__name__)

Plugin = Callable[["HTMLToMarkdown"], Any]


def join(output: str, replacement: str) -> str:
    """Join ``replacement`` onto ``output`` with the right number of newlines.

    Trailing newlines of ``output`` and leading newlines of ``replacement`` are
    removed and replaced by the larger of the two counts, capped at two.

    Examples
    --------
        >>> join("Hello\\n\\n\\n", "\\nWorld")
        'Hello\\n\\nWorld'
        >>> join("Hello", "World")
        'HelloWorld'

    """
    left = trim_trailing_newlines(output)
    right = trim_leading_newlines(replacement)
    newlines = max(len(output) - len(left), len(replacement) - len(right))
    return left + "\n\n"[:newlines] + right


@dataclass
class RenderContext:
    """State owned by a single render.

    Attributes
    ----------
    classifications : ClassificationTable
        Node classifications computed during the walk
    rule_states : dict
        Per-rule state objects keyed by rule identity, created on first use
        from each rule's ``state_factory``

    """

    classifications: ClassificationTable
    rule_states: dict[int, Any] = field(default_factory=dict)

    def state_for(self, rule: Rule) -> Any:
        """Return ``rule``'s state for this render, creating it if needed."""
        key = id(rule)
        if key not in self.rule_states:
            self.rule_states[key] = rule.state_factory()  # type: ignore[misc]
        return self.rule_states[key]


class HTMLToMarkdown:
    """Rule-based HTML to Markdown converter.

    Parameters
    ----------
    options : MarkdownOptions or None, default None
        Conversion options. If None, defaults are used.
    **overrides : Any
        Individual option values applied on top of ``options``

    Examples
    --------
        >>> converter = HTMLToMarkdown(heading_style="setext")
        >>> converter.render("<h2>Title</h2>")
        'Title\\n-----'

    """

    def __init__(self, options: MarkdownOptions | None = None, **overrides: Any):
        if options is None:
            options = MarkdownOptions()
        if overrides:
            options = options.create_updated(**overrides)
        self.options = options
        self._rules = RuleTable(options)

    @property
    def rules(self) -> RuleTable:
        """The rule table used to resolve elements."""
        return self._rules

    def render(self, input_data: str | Tag) -> str:
        """Convert markup or a parsed node to Markdown.

        Parameters
        ----------
        input_data : str or bs4.Tag
            Markup string, or an element or document node. Nodes are copied
            before conversion; the caller's tree is not modified.

        Returns
        -------
        str
            Markdown text

        Raises
        ------
        InvalidInputError
            If ``input_data`` is neither a string nor an element/document node
        RuleFilterError
            If a registered rule has a filter of an unsupported kind
        ConversionError
            If the tree is nested deeper than the interpreter's recursion limit

        """
        if not isinstance(input_data, str) and not is_convertible_node(input_data):
            raise InvalidInputError(input_data)
        if input_data == "":
            return ""

        root = create_root(input_data, self.options.html_parser)
        collapse_whitespace(root, preformatted_code=self.options.preformatted_code)

        context = RenderContext(classifications=ClassificationTable(self.options.preformatted_code))
        logger.debug("Rendering %s", node_name(root) or type(input_data).__name__)
        try:
            output = self.process(root, context)
        except RecursionError as e:
            raise ConversionError(
                "Document is nested too deeply to convert", conversion_stage="conversion", original_error=e
            ) from e
        markdown = self.post_process(output, context)
        logger.debug("Rendered %d characters of Markdown", len(markdown))
        return markdown

    def use(self, plugin: Plugin | Iterable[Plugin]) -> HTMLToMarkdown:
        """Apply a plugin, or a list of plugins, to this converter.

        A plugin is a callable receiving the converter, typically registering
        rules with :meth:`add_rule`, :meth:`keep` or :meth:`remove`.

        Raises
        ------
        PluginError
            If ``plugin`` is neither callable nor a list/tuple of callables

        """
        if isinstance(plugin, (list, tuple)):
            for item in plugin:
                self.use(item)
        elif callable(plugin):
            logger.debug("Applying plugin %s", getattr(plugin, "__name__", repr(plugin)))
            plugin(self)
        else:
            raise PluginError(plugin)
        return self

    def add_rule(self, key: str, rule: Rule) -> HTMLToMarkdown:
        """Register ``rule`` under ``key``, ahead of all existing rules."""
        self._rules.add(key, rule)
        return self

    def keep(self, rule_filter: Any) -> HTMLToMarkdown:
        """Keep elements matching ``rule_filter`` as HTML in the output."""
        self._rules.keep(rule_filter)
        return self

    def remove(self, rule_filter: Any) -> HTMLToMarkdown:
        """Remove elements matching ``rule_filter``, including their content."""
        self._rules.remove(rule_filter)
        return self

    def escape(self, text: str) -> str:
        """Escape Markdown syntax in ``text``. Override to customize escaping."""
        return escape_markdown(text)

    def is_code_block(self, node: PageElement | None) -> bool:
        """Return True if ``node`` is shaped like a preformatted code block."""
        return _is_code_block(node)

    def process(self, parent: PageElement, context: RenderContext) -> str:
        """Convert the children of ``parent`` and join their output."""
        output = ""
        for node in list(parent.children):
            classification = context.classifications.classify(node)
            replacement = ""
            if is_text(node):
                value = str(node)
                previous = node.previous_sibling
                if node_name(previous) == "input" and get_attribute(previous, "type") == "checkbox":
                    value = value.lstrip()
                if not classification.is_code and self.options.escape_special:
                    value = self.escape(value)
                replacement = value
            elif is_element(node):
                replacement = self._replacement_for_node(node, context)
            output = join(output, replacement)
        return output

    def _replacement_for_node(self, node: Tag, context: RenderContext) -> str:
        classification = context.classifications[node]
        rule = self._rules.for_node(node, classification)
        content = self.process(node, context)
        whitespace = classification.flanking_whitespace
        if whitespace.leading or whitespace.trailing:
            content = content.strip()

        if rule.is_stateful:
            replacement = rule.replacement(content, node, self.options, context.state_for(rule))
        else:
            replacement = rule.replacement(content, node, self.options)
        return whitespace.leading + replacement + whitespace.trailing

    def post_process(self, output: str, context: RenderContext) -> str:
        """Append deferred rule output and trim surrounding whitespace."""
        for rule in self._rules:
            if rule.append is None:
                continue
            if rule.is_stateful:
                output = join(output, rule.append(self.options, context.state_for(rule)))
            else:
                output = join(output, rule.append(self.options))
        return output.lstrip("\t\r\n").rstrip()


def _read_input(input_data: Union[str, Path, IO[str], IO[bytes], Tag]) -> str | Tag:
    if isinstance(input_data, (str, Tag)):
        return input_data

    if isinstance(input_data, Path):
        try:
            return input_data.read_text(encoding="utf-8")
        except OSError as e:
            raise ConversionError(
                f"Failed to read HTML file: {e}", conversion_stage="file_reading", original_error=e
            ) from e

    if hasattr(input_data, "read"):
        try:
            content = input_data.read()
        except (OSError, ValueError) as e:
            raise ConversionError(
                f"Failed to read HTML input: {e}", conversion_stage="file_reading", original_error=e
            ) from e
        if isinstance(content, bytes):
            try:
                return content.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ConversionError(
                    f"HTML input is not valid UTF-8: {e}", conversion_stage="decoding", original_error=e
                ) from e
        return content

    raise InvalidInputError(input_data)


def html_to_markdown(
    input_data: Union[str, Path, IO[str], IO[bytes], Tag],
    options: MarkdownOptions | None = None,
    **overrides: Any,
) -> str:
    """Convert HTML to Markdown format.

    Parameters
    ----------
    input_data : str, pathlib.Path, file-like object or bs4.Tag
        HTML content to convert. Can be:
        - String containing HTML content directly
        - pathlib.Path object pointing to an HTML file
        - File-like object (StringIO, TextIOWrapper) containing HTML content
        - File-like object opened in binary mode (will be decoded as UTF-8)
        - An already parsed BeautifulSoup document or element
    options : MarkdownOptions or None, default None
        Conversion options. If None, uses default settings.
    **overrides : Any
        Individual option values applied on top of ``options``

    Returns
    -------
    str
        Markdown representation of the HTML content

    Raises
    ------
    InvalidInputError
        If the input type is not supported
    ConversionError
        If the input cannot be read

    Examples
    --------
    Convert HTML string directly:

        >>> print(html_to_markdown("<h1>Title</h1><p>Content with <strong>bold</strong> text.</p>"))
        # Title
        <BLANKLINE>
        Content with **bold** text.

    Use with file-like object:

        >>> from io import StringIO
        >>> html_to_markdown(StringIO("<h2>Header</h2><p>Paragraph</p>"), heading_style="setext")
        'Header\\n------\\n\\nParagraph'

    """
    content = _read_input(input_data)
    return HTMLToMarkdown(options, **overrides).render(content)
