#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command line interface for markturn.

Usage::

    markturn page.html -o page.md --heading-style setext
    curl -s https://example.com | markturn --link-style referenced

Option values are resolved with the precedence: command-line flag, then
``MARKTURN_<OPTION>`` environment variable, then configuration file, then the
built-in default.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from markturn.cli.builder import DynamicCLIBuilder
from markturn.cli.config import discover_config_file, load_config_file, normalize_config_keys
from markturn.cli.output import render_rich_markdown, should_use_rich_output
from markturn.constants import (
    ENV_PREFIX,
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from markturn.converter import html_to_markdown
from markturn.exceptions import ConversionError, DependencyError, MarkturnError, ValidationError
from markturn.logging_utils import configure_logging
from markturn.options import MarkdownOptions

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = f"{ENV_PREFIX}CONFIG"


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _load_config_values(parsed_args: argparse.Namespace, valid_keys: set[str]) -> Dict[str, Any]:
    if parsed_args.no_config:
        return {}

    config_path: Optional[Path | str] = parsed_args.config or os.environ.get(CONFIG_ENV_VAR)
    if not config_path:
        config_path = discover_config_file()
        if config_path is None:
            return {}
        logger.debug("Using discovered configuration file %s", config_path)

    return normalize_config_keys(load_config_file(config_path), valid_keys)


def build_options(parsed_args: argparse.Namespace, option_actions: Mapping[str, argparse.Action]) -> MarkdownOptions:
    """Resolve option values from the config file, environment and command line.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments
    option_actions : mapping
        Option field name to the argparse action that parsed it

    Returns
    -------
    MarkdownOptions
        Resolved options

    Raises
    ------
    argparse.ArgumentTypeError
        If the configuration file cannot be loaded
    ValueError
        If a resolved value is invalid

    """
    values = _load_config_values(parsed_args, set(option_actions))

    provided = getattr(parsed_args, "_provided_args", set())
    for dest, action in option_actions.items():
        if dest in provided or getattr(action, "from_env", False):
            values[dest] = getattr(parsed_args, dest)

    return MarkdownOptions(**values)


def _read_input(input_arg: Optional[str]) -> str | Path:
    if input_arg and input_arg != "-":
        return Path(input_arg)
    return sys.stdin.read()


def _write_output(markdown: str, parsed_args: argparse.Namespace) -> None:
    if parsed_args.out:
        Path(parsed_args.out).write_text(markdown + "\n", encoding="utf-8")
        logger.info("Wrote %s", parsed_args.out)
    elif should_use_rich_output(parsed_args, raise_on_missing=True):
        sys.stdout.write(render_rich_markdown(markdown, code_theme=parsed_args.rich_code_theme))
    else:
        sys.stdout.write(markdown + "\n")


def main(args: list[str] | None = None) -> int:
    """Run the command line interface.

    Parameters
    ----------
    args : list of str, optional
        Arguments to parse instead of ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    builder = DynamicCLIBuilder()
    parser = builder.build_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        options = build_options(parsed_args, builder.option_actions)
    except (argparse.ArgumentTypeError, ValueError, TypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    if parsed_args.input and parsed_args.input != "-" and not Path(parsed_args.input).is_file():
        print(f"Error: Input file not found: {parsed_args.input}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        markdown = html_to_markdown(_read_input(parsed_args.input), options)
    except ConversionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except DependencyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_DEPENDENCY_ERROR
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except MarkturnError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    try:
        _write_output(markdown, parsed_args)
    except DependencyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_DEPENDENCY_ERROR
    except OSError as e:
        print(f"Error: Could not write output: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    return EXIT_SUCCESS


__all__ = ["build_options", "main"]
