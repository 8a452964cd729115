#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markturn/utils/css.py
"""Inline ``style`` attribute parsing.

Only declaration lists are handled (``property: value; ...``), which is all a
``style`` attribute can contain. Semicolons and colons inside quotes or
parentheses (``url(data:...)``, quoted font names) do not split declarations.
"""

from __future__ import annotations

from typing import NamedTuple

from markturn.constants import MONOSPACE_FONT_FAMILIES


class Declaration(NamedTuple):
    """A single CSS declaration."""

    property: str
    value: str


def _split_outside_groups(text: str, separator: str, maxsplit: int = -1) -> list[str]:
    parts: list[str] = []
    current: list[str] = []
    quote: str | None = None
    depth = 0
    for char in text:
        if quote:
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")" and depth:
            depth -= 1
        elif char == separator and depth == 0 and (maxsplit < 0 or len(parts) < maxsplit):
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


def parse_style_declarations(style: str | None) -> list[Declaration]:
    """Parse a ``style`` attribute into its declarations.

    Parameters
    ----------
    style : str or None
        Raw attribute value

    Returns
    -------
    list of Declaration
        Declarations in source order, property names lower-cased. Malformed
        entries (no colon, empty property) are skipped.

    Examples
    --------
        >>> parse_style_declarations("color: red; font-family: 'Fira Code', monospace")
        [Declaration(property='color', value='red'), Declaration(property='font-family', value="'Fira Code', monospace")]

    """
    if not style:
        return []

    declarations = []
    for chunk in _split_outside_groups(style, ";"):
        pieces = _split_outside_groups(chunk, ":", maxsplit=1)
        if len(pieces) != 2:
            continue
        prop, value = pieces[0].strip().lower(), pieces[1].strip()
        if prop:
            declarations.append(Declaration(prop, value))
    return declarations


def font_families(value: str) -> list[str]:
    """Split a ``font-family`` value into unquoted, lower-cased family names."""
    return [name.strip().strip("'\"").strip().lower() for name in _split_outside_groups(value, ",") if name.strip()]


def declares_monospace_font(style: str | None) -> bool:
    """Return True if the style declares a monospace font family.

    Both ``font-family`` and the ``font`` shorthand are inspected; for the
    shorthand every comma separated token is checked, which covers the
    family list at its end.
    """
    for declaration in parse_style_declarations(style):
        if declaration.property == "font-family":
            families = font_families(declaration.value)
        elif declaration.property == "font":
            families = [family.split()[-1] if family.split() else family for family in font_families(declaration.value)]
        else:
            continue
        if any(family in MONOSPACE_FONT_FAMILIES for family in families):
            return True
    return False
