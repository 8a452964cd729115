#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the markturn library.

This module defines specialized exception classes for the error conditions
that can occur while configuring the converter or rendering a document.

Exception Hierarchy
-------------------
- MarkturnError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidInputError (render input is not markup or a node; also a TypeError)
    - RuleFilterError (rule filter of an unsupported kind; also a TypeError)
    - PluginError (plugin is not callable; also a TypeError)

  - ConversionError (reading input for conversion failed)

  - DependencyError (optional package for a feature is missing)

"""

from __future__ import annotations

from typing import Any


class MarkturnError(Exception):
    """Base exception class for all markturn-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MarkturnError):
    """Exception raised for invalid input parameters or configuration.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidInputError(ValidationError, TypeError):
    """Exception raised when ``render`` receives something it cannot convert.

    Only markup strings and BeautifulSoup element/document nodes are
    accepted. The message names the offending value.

    Parameters
    ----------
    value : any
        The rejected input value

    """

    def __init__(self, value: Any):
        """Initialize the error from the rejected value."""
        super().__init__(
            f"{value!r} is not a string, or an element/document node.",
            parameter_name="input",
            parameter_value=value,
        )


class RuleFilterError(ValidationError, TypeError):
    """Exception raised when a rule filter is neither a tag name, a collection of tag names, nor a callable.

    This is a configuration bug rather than a data error, and surfaces the
    first time the rule is matched against a node.

    Parameters
    ----------
    rule_filter : any
        The offending filter value

    """

    def __init__(self, rule_filter: Any):
        """Initialize the error from the offending filter."""
        super().__init__(
            "`filter` needs to be a string, a collection of strings, or a callable",
            parameter_name="filter",
            parameter_value=rule_filter,
        )


class PluginError(ValidationError, TypeError):
    """Exception raised when ``use`` receives something other than a plugin or a list of plugins."""

    def __init__(self, plugin: Any):
        """Initialize the error from the rejected plugin."""
        super().__init__(
            "plugin must be a callable or a list of callables",
            parameter_name="plugin",
            parameter_value=plugin,
        )


class ConversionError(MarkturnError):
    """Exception raised when reading or preparing input for conversion fails.

    Parameters
    ----------
    message : str
        Description of the failure
    conversion_stage : str, optional
        Stage at which the failure happened (e.g. "file_reading")
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, conversion_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the conversion error with stage information."""
        super().__init__(message, original_error=original_error)
        self.conversion_stage = conversion_stage


class DependencyError(MarkturnError):
    """Exception raised when an optional package needed for a feature is not installed.

    Parameters
    ----------
    feature_name : str
        Feature that needs the packages (e.g. ``"lxml parser"``)
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    install_command : str, optional
        Suggested pip install command to resolve the issue
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        feature_name: str,
        missing_packages: list[tuple[str, str]],
        install_command: str = "",
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error with package details."""
        if message is None:
            pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
            message = f"{feature_name} requires the following packages: {pkg_list}"
            if not install_command and missing_packages:
                packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in missing_packages)
                install_command = f"pip install --upgrade {packages_str}"
            if install_command:
                message += f"\nInstall with: {install_command}"

        super().__init__(message, original_error=original_error)
        self.feature_name = feature_name
        self.missing_packages = missing_packages
        self.install_command = install_command
