#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Dynamic CLI argument builder for markturn.

Command line flags for conversion options are generated from the field
metadata of :class:`~markturn.options.MarkdownOptions` rather than declared
by hand, so new options appear on the command line automatically.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import MISSING, Field, fields
from typing import Any, Dict, Optional, Type

from markturn import __version__
from markturn.cli.actions import TrackingStoreAction, TrackingStoreFalseAction, TrackingStoreTrueAction
from markturn.options import MarkdownOptions

logger = logging.getLogger(__name__)


class DynamicCLIBuilder:
    """Builds the argument parser from an options dataclass.

    Attributes
    ----------
    option_actions : dict
        Maps option field names to the argparse action created for them

    """

    def __init__(self, options_class: Type[Any] = MarkdownOptions) -> None:
        """Initialize the CLI builder."""
        self.options_class = options_class
        self.option_actions: Dict[str, argparse.Action] = {}

    @staticmethod
    def snake_to_kebab(name: str) -> str:
        """Convert snake_case to kebab-case."""
        return name.replace("_", "-")

    def infer_cli_name(self, field_name: str, is_boolean_with_true_default: bool = False) -> str:
        """Infer the CLI flag for a field, using the ``--no-*`` form for flags that default to True."""
        kebab_name = self.snake_to_kebab(field_name)
        if is_boolean_with_true_default and not kebab_name.startswith("no-"):
            kebab_name = f"no-{kebab_name}"
        return f"--{kebab_name}"

    @staticmethod
    def _should_process_field(field: Field) -> bool:
        return not field.metadata.get("exclude_from_cli", False) and field.default is not MISSING

    def get_argument_kwargs(self, field: Field) -> Dict[str, Any]:
        """Build argparse keyword arguments from a field's default and metadata.

        Parameters
        ----------
        field : Field
            Dataclass field

        Returns
        -------
        dict
            Keyword arguments for ``parser.add_argument``

        """
        metadata = field.metadata
        kwargs: Dict[str, Any] = {"dest": field.name, "help": metadata.get("help")}

        if isinstance(field.default, bool):
            kwargs["action"] = TrackingStoreFalseAction if field.default else TrackingStoreTrueAction
            kwargs["default"] = field.default
            return kwargs

        kwargs["action"] = TrackingStoreAction
        kwargs["default"] = field.default
        kwargs["type"] = metadata.get("type", str)
        if "choices" in metadata:
            kwargs["choices"] = metadata["choices"]
        else:
            kwargs["metavar"] = field.name.upper()
        return kwargs

    def add_options_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add one argument per CLI-visible option field."""
        group = parser.add_argument_group("Markdown options")
        for field in fields(self.options_class):
            if not self._should_process_field(field):
                logger.debug("Skipping option %s for CLI", field.name)
                continue
            is_true_flag = field.default is True
            cli_name = field.metadata.get("cli_name")
            flag = f"--{cli_name}" if cli_name else self.infer_cli_name(field.name, is_true_flag)
            self.option_actions[field.name] = group.add_argument(flag, **self.get_argument_kwargs(field))

    def build_parser(self, prog: Optional[str] = None) -> argparse.ArgumentParser:
        """Create the complete argument parser."""
        parser = argparse.ArgumentParser(
            prog=prog or "markturn",
            description="Convert HTML to Markdown.",
            epilog="Options may also be set with MARKTURN_<OPTION> environment variables "
            "or in a .markturn.toml/.yaml/.json file or [tool.markturn] in pyproject.toml.",
        )
        parser.add_argument("input", nargs="?", help="HTML file to convert (default: read from stdin; '-' for stdin)")
        parser.add_argument("-o", "--out", dest="out", help="Write Markdown to this file instead of stdout")
        parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

        config_group = parser.add_argument_group("Configuration")
        config_group.add_argument("--config", help="Load options from this configuration file")
        config_group.add_argument(
            "--no-config", action="store_true", help="Do not load any configuration file (ignores discovery)"
        )

        output_group = parser.add_argument_group("Output")
        output_group.add_argument(
            "--rich", action="store_true", help="Render Markdown with rich styling when writing to a terminal"
        )
        output_group.add_argument(
            "--force-rich", action="store_true", help="Use rich styling even when stdout is not a terminal"
        )
        output_group.add_argument("--rich-code-theme", help="Pygments theme for code blocks in rich output")

        self.add_options_arguments(parser)

        logging_group = parser.add_argument_group("Logging")
        logging_group.add_argument(
            "--log-level",
            default="WARNING",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            type=str.upper,
            help="Logging level (default: WARNING)",
        )
        logging_group.add_argument("--log-file", help="Also write log output to this file")
        logging_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
        logging_group.add_argument("--verbose", "-v", action="store_true", help="Shorthand for --log-level DEBUG")
        return parser


def create_parser() -> argparse.ArgumentParser:
    """Create the markturn argument parser."""
    return DynamicCLIBuilder().build_parser()
