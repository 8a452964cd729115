#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markturn/rules/defaults.py
"""Built-in conversion rules.

Every rule returns Markdown text for one element. Block-level rules pad their
output with ``"\\n\\n"`` on both sides; the engine's join step collapses
adjacent padding into a single blank line.

Rules
-----
paragraph, line_break, heading, blockquote, list, list_item,
indented_code_block, fenced_code_block, horizontal_rule, inline_link,
reference_link, emphasis, strong, code, image

"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from bs4.element import PageElement

from markturn.constants import HEADING_ELEMENTS, INDENTED_CODE_PREFIX, LIST_ELEMENTS, MIN_CODE_FENCE_LENGTH
from markturn.dom import (
    element_children,
    first_child,
    get_attribute,
    is_element,
    is_text,
    last_element_child,
    node_name,
    text_content,
)
from markturn.rules.base import ReferenceLinkState, Rule
from markturn.utils.text import (
    longest_run,
    sanitized_link_content,
    sanitized_link_title,
    trim_newlines,
)

if TYPE_CHECKING:
    from markturn.options import MarkdownOptions

logger = logging.getLogger(__name__)

_LANGUAGE_CLASS_PATTERN = re.compile(r"(?:lang|language)-(\S+)")
_NOT_LIST_MARKER_LINE = re.compile(r"\n(?!\s*(?:\d+\.\s|[-+*]\s))")
_LINE_BREAKS = re.compile(r"\r?\n|\r")
_INLINE_CODE_NEEDS_PADDING = re.compile(r"^`|^ .*?[^ ].* \Z|`\Z")
_LINK_PARENS = re.compile(r"([()])")


def paragraph(content: str, node: PageElement, options: MarkdownOptions) -> str:
    return f"\n\n{content}\n\n"


def line_break(content: str, node: PageElement, options: MarkdownOptions) -> str:
    return f"{options.br}\n"


def heading(content: str, node: PageElement, options: MarkdownOptions) -> str:
    """ATX headings by default; setext underlines for levels 1 and 2 when configured."""
    level = int(node_name(node)[1])
    if options.heading_style == "setext" and level < 3:
        underline = ("=" if level == 1 else "-") * len(content)
        return f"\n\n{content}\n{underline}\n\n"
    return f"\n\n{'#' * level} {content}\n\n"


def blockquote(content: str, node: PageElement, options: MarkdownOptions) -> str:
    quoted = re.sub(r"^", "> ", trim_newlines(content), flags=re.MULTILINE)
    return f"\n\n{quoted}\n\n"


def list_(content: str, node: PageElement, options: MarkdownOptions) -> str:
    parent = node.parent
    if node_name(parent) == "li" and last_element_child(parent) is node:
        return f"\n{content}"
    return f"\n\n{content}\n\n"


def _ordered_list_start(parent: PageElement) -> int:
    start = get_attribute(parent, "start")
    if not start:
        return 1
    try:
        return int(start.strip())
    except ValueError:
        logger.warning("Ignoring non-integer ordered list start attribute: %r", start)
        return 1


def _list_nesting_level(node: PageElement) -> int:
    level = 0
    ancestor = node.parent
    while ancestor is not None:
        if node_name(ancestor) in LIST_ELEMENTS and node_name(ancestor.parent) == "li":
            level += 1
        ancestor = ancestor.parent
    return level


def _has_only_nested_list(node: PageElement) -> bool:
    children = list(node.children)
    if not children:
        return False
    return all(
        (is_text(child) and not str(child).strip()) or (is_element(child) and node_name(child) in LIST_ELEMENTS)
        for child in children
    )


def list_item(content: str, node: PageElement, options: MarkdownOptions) -> str:
    """Render a list item, indenting continuation lines under its marker.

    Ordered items are numbered from the list's ``start`` attribute plus the
    item's position among the list's direct ``<li>`` children. Items holding
    nothing but a nested list emit the nested list directly instead of an
    empty marker line.
    """
    parent = node.parent
    spacing = " " * options.list_marker_space_count
    if node_name(parent) == "ol":
        items = [child for child in element_children(parent) if node_name(child) == "li"]
        index = next((i for i, item in enumerate(items) if item is node), 0)
        prefix = f"{_ordered_list_start(parent) + index}.{spacing}"
    else:
        prefix = f"{options.bullet_list_marker}{spacing}"

    is_paragraph = content.endswith("\n")
    content = trim_newlines(content) + ("\n" if is_paragraph else "")
    trailer = "\n" if node.next_sibling is not None else ""

    if _has_only_nested_list(node) and content.strip():
        return content + trailer

    one_indent = "\t" if options.list_item_indent == "tab" else " " * options.list_item_indent_space_count
    indent = one_indent * _list_nesting_level(node)
    content = _NOT_LIST_MARKER_LINE.sub(lambda _match: "\n" + one_indent, content)
    return indent + prefix + content + trailer


def _is_pre_with_code(node: PageElement) -> bool:
    return node_name(node) == "pre" and node_name(first_child(node)) == "code"


def indented_code_block_filter(node: PageElement, options: MarkdownOptions) -> bool:
    return options.code_block_style == "indented" and _is_pre_with_code(node)


def indented_code_block(content: str, node: PageElement, options: MarkdownOptions) -> str:
    code = text_content(first_child(node))
    return "\n\n" + INDENTED_CODE_PREFIX + code.replace("\n", "\n" + INDENTED_CODE_PREFIX) + "\n\n"


def fenced_code_block_filter(node: PageElement, options: MarkdownOptions) -> bool:
    return options.code_block_style == "fenced" and node_name(node) == "pre"


def fenced_code_block(content: str, node: PageElement, options: MarkdownOptions) -> str:
    """Emit a fenced block, lengthening the fence past any fence-like run inside the code."""
    child = first_child(node)
    code_element = child if node_name(child) == "code" else node

    match = _LANGUAGE_CLASS_PATTERN.search(get_attribute(code_element, "class") or "")
    language = match.group(1) if match else ""
    code = text_content(code_element)

    fence_char = options.fence[:1] or "`"
    run = longest_run(code, fence_char, line_start=True)
    fence = fence_char * max(MIN_CODE_FENCE_LENGTH, run + 1)

    if code.endswith("\n"):
        code = code[:-1]
    return f"\n\n{fence}{language}\n{code}\n{fence}\n\n"


def horizontal_rule(content: str, node: PageElement, options: MarkdownOptions) -> str:
    return f"\n\n{options.hr}\n\n"


def inline_link_filter(node: PageElement, options: MarkdownOptions) -> bool:
    return options.link_style == "inlined" and node_name(node) == "a" and bool(get_attribute(node, "href"))


def inline_link(content: str, node: PageElement, options: MarkdownOptions) -> str:
    href = _LINK_PARENS.sub(r"\\\1", get_attribute(node, "href") or "")
    title_attr = get_attribute(node, "title")
    title = ""
    if title_attr:
        escaped_title = sanitized_link_title(title_attr).replace('"', '\\"')
        title = f' "{escaped_title}"'
    return f"[{sanitized_link_content(content)}]({href}{title})"


def reference_link_filter(node: PageElement, options: MarkdownOptions) -> bool:
    return options.link_style == "referenced" and node_name(node) == "a" and bool(get_attribute(node, "href"))


def reference_link(content: str, node: PageElement, options: MarkdownOptions, state: ReferenceLinkState) -> str:
    """Emit a reference marker and record its definition for the end of the document.

    With the ``full`` reference style links get numeric ids; identical
    ``href`` and title pairs share an id when deduplication is enabled. The
    ``collapsed`` and ``shortcut`` styles use the link text as the label and
    deduplicate on it.
    """
    href = get_attribute(node, "href") or ""
    title_attr = get_attribute(node, "title")
    title = f' "{sanitized_link_title(title_attr)}"' if title_attr else ""
    destination = href + title
    deduplicate = options.link_reference_deduplication == "full"

    if options.link_reference_style in ("collapsed", "shortcut"):
        replacement = f"[{content}][]" if options.link_reference_style == "collapsed" else f"[{content}]"
        if not deduplicate or content not in state.ids:
            state.ids[content] = len(state.references) + 1
            state.references.append(f"[{content}]: {destination}")
        return replacement

    existing = state.ids.get(destination)
    if deduplicate and existing is not None:
        ref_id = existing
    else:
        ref_id = len(state.references) + 1
        state.ids[destination] = ref_id
        state.references.append(f"[{ref_id}]: {destination}")
    return f"[{content}][{ref_id}]"


def reference_link_append(options: MarkdownOptions, state: ReferenceLinkState) -> str:
    if not state.references:
        return ""
    references = "\n\n" + "\n".join(state.references) + "\n\n"
    state.clear()
    return references


def emphasis(content: str, node: PageElement, options: MarkdownOptions) -> str:
    content = content.strip()
    if not content:
        return ""
    return f"{options.em_delimiter}{content}{options.em_delimiter}"


def strong(content: str, node: PageElement, options: MarkdownOptions) -> str:
    content = content.strip()
    if not content:
        return ""
    return f"{options.strong_delimiter}{content}{options.strong_delimiter}"


def code_filter(node: PageElement, options: MarkdownOptions) -> bool:
    """Inline code: a ``<code>`` that is not the only child of a ``<pre>``."""
    if node_name(node) != "code":
        return False
    has_siblings = node.previous_sibling is not None or node.next_sibling is not None
    return not (node_name(node.parent) == "pre" and not has_siblings)


def code(content: str, node: PageElement, options: MarkdownOptions) -> str:
    """Wrap inline code in a backtick delimiter longer than any backtick run it contains."""
    text = _LINE_BREAKS.sub(" ", content)
    padding = " " if _INLINE_CODE_NEEDS_PADDING.search(text) else ""
    delimiter = "`" * (longest_run(text, "`") + 1)
    return f"{delimiter}{padding}{text}{padding}{delimiter}"


def image(content: str, node: PageElement, options: MarkdownOptions) -> str:
    src = get_attribute(node, "src") or ""
    if not src:
        return ""
    alt_attr = get_attribute(node, "alt")
    alt = sanitized_link_title(alt_attr) if alt_attr else ""
    title_attr = get_attribute(node, "title")
    title = sanitized_link_title(title_attr) if title_attr else ""
    title_part = f' "{title}"' if title else ""
    return f"![{alt}]({src}{title_part})"


def default_rules() -> dict[str, Rule]:
    """Return the built-in rules, keyed by name, in matching order.

    A fresh dictionary is returned on every call so callers may modify it.
    """
    return {
        "paragraph": Rule(filter="p", replacement=paragraph),
        "line_break": Rule(filter="br", replacement=line_break),
        "heading": Rule(filter=HEADING_ELEMENTS, replacement=heading),
        "blockquote": Rule(filter="blockquote", replacement=blockquote),
        "list": Rule(filter=LIST_ELEMENTS, replacement=list_),
        "list_item": Rule(filter="li", replacement=list_item),
        "indented_code_block": Rule(filter=indented_code_block_filter, replacement=indented_code_block),
        "fenced_code_block": Rule(filter=fenced_code_block_filter, replacement=fenced_code_block),
        "horizontal_rule": Rule(filter="hr", replacement=horizontal_rule),
        "inline_link": Rule(filter=inline_link_filter, replacement=inline_link),
        "reference_link": Rule(
            filter=reference_link_filter,
            replacement=reference_link,
            append=reference_link_append,
            state_factory=ReferenceLinkState,
        ),
        "emphasis": Rule(filter=("em", "i"), replacement=emphasis),
        "strong": Rule(filter=("strong", "b"), replacement=strong),
        "code": Rule(filter=code_filter, replacement=code),
        "image": Rule(filter="img", replacement=image),
    }
