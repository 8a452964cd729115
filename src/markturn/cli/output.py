"""Terminal rendering of converted Markdown."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/markturn/cli/output.py
from __future__ import annotations

import argparse
import sys
from typing import TextIO

from markturn.exceptions import DependencyError


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(
    args: argparse.Namespace, raise_on_missing: bool = False, stream: TextIO | None = None
) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    raise_on_missing : bool, default False
        Raise DependencyError if rich is not installed
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    Returns
    -------
    bool
        True if Rich output should be used

    Notes
    -----
    Rich output is used when:
    - The --rich flag is set
    - AND either --force-rich is set OR the stream is a TTY
    - AND Rich library is available

    """
    if not getattr(args, "rich", False):
        return False

    if not check_rich_available():
        if raise_on_missing:
            raise DependencyError(
                "Rich terminal output",
                [("rich", "")],
                install_command="pip install markturn[rich]",
            )
        return False

    if getattr(args, "force_rich", False):
        return True

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def render_rich_markdown(markdown: str, code_theme: str | None = None) -> str:
    """Render Markdown to terminal text with Rich styling.

    Parameters
    ----------
    markdown : str
        Markdown produced by the converter
    code_theme : str, optional
        Pygments theme for code blocks

    Returns
    -------
    str
        Captured console output, including ANSI styling

    """
    from rich.console import Console
    from rich.markdown import Markdown

    kwargs = {"code_theme": code_theme} if code_theme else {}
    console = Console(force_terminal=True)
    with console.capture() as capture:
        console.print(Markdown(markdown, **kwargs))
    return capture.get()
