#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom argparse actions for option arguments.

The actions record which arguments were given explicitly on the command line
and take their defaults from ``MARKTURN_<DEST>`` environment variables, so
that option precedence (flag, environment, config file, built-in default)
can be resolved after parsing.
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import Any, Callable, Optional, Sequence, Union

from markturn.constants import ENV_PREFIX

logger = logging.getLogger(__name__)

TRUTHY_ENV_VALUES = ("true", "1", "yes", "on")


def env_key_for(dest: str) -> str:
    """Environment variable consulted for the argument stored in ``dest``."""
    return f"{ENV_PREFIX}{dest.upper().replace('-', '_').replace('.', '_')}"


def _mark_provided(namespace: argparse.Namespace, dest: str) -> None:
    if not hasattr(namespace, "_provided_args"):
        namespace._provided_args = set()
    namespace._provided_args.add(dest)


class TrackingStoreAction(argparse.Action):
    """Store action that tracks explicit use and reads its default from the environment.

    Attributes
    ----------
    from_env : bool
        True when the default was taken from an environment variable

    """

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        nargs: Optional[Union[int, str]] = None,
        const: Optional[Any] = None,
        default: Optional[Any] = None,
        type: Optional[Callable[[str], Any]] = None,
        choices: Optional[Sequence[Any]] = None,
        required: bool = False,
        help: Optional[str] = None,
        metavar: Optional[Union[str, tuple[str, ...]]] = None,
    ) -> None:
        """Initialize the action, applying any environment variable default."""
        self.from_env = False
        env_key = env_key_for(dest)
        env_value = os.environ.get(env_key)
        if env_value is not None:
            try:
                default = type(env_value) if type is not None else env_value
                self.from_env = True
            except (ValueError, TypeError) as e:
                logger.warning("Invalid environment variable %s=%s: %s", env_key, env_value, e)

        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=nargs,
            const=const,
            default=default,
            type=type,
            choices=choices,
            required=required,
            help=help,
            metavar=metavar,
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        setattr(namespace, self.dest, values)
        _mark_provided(namespace, self.dest)


class _TrackingFlagAction(argparse.Action):
    """Shared implementation of the boolean flag actions."""

    flag_value: bool = True

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        default: bool = False,
        required: bool = False,
        help: Optional[str] = None,
    ) -> None:
        self.from_env = False
        env_value = os.environ.get(env_key_for(dest))
        if env_value is not None:
            default = env_value.lower() in TRUTHY_ENV_VALUES
            self.from_env = True

        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=0,
            const=self.flag_value,
            default=default,
            required=required,
            help=help,
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        setattr(namespace, self.dest, self.flag_value)
        _mark_provided(namespace, self.dest)


class TrackingStoreTrueAction(_TrackingFlagAction):
    """``store_true`` counterpart of :class:`TrackingStoreAction`."""

    flag_value = True


class TrackingStoreFalseAction(_TrackingFlagAction):
    """``store_false`` counterpart of :class:`TrackingStoreAction`.

    The environment variable holds the option's value, not the flag's:
    ``MARKTURN_ESCAPE_SPECIAL=false`` has the same effect as ``--no-escape-special``.
    """

    flag_value = False
