"""Pytest configuration and shared fixtures for the markturn test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os
from pathlib import Path
from typing import Generator

import pytest
from hypothesis import Phase, Verbosity, settings

from markturn import HTMLToMarkdown, MarkdownOptions
from markturn.constants import ENV_PREFIX

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def converter() -> HTMLToMarkdown:
    """Provide a converter with default options.

    Returns
    -------
    HTMLToMarkdown
        Fresh converter instance.

    """
    return HTMLToMarkdown()


@pytest.fixture
def default_options() -> MarkdownOptions:
    """Provide default conversion options."""
    return MarkdownOptions()


@pytest.fixture
def clean_env(monkeypatch) -> Generator[None, None, None]:
    """Remove every MARKTURN_* environment variable for the duration of a test."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch) -> Path:
    """Run the test from an empty directory with an empty home, so no config file is discovered.

    Returns
    -------
    Path
        The working directory.

    """
    work = tmp_path / "work"
    home = tmp_path / "home"
    work.mkdir()
    home.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    return work


@pytest.fixture(autouse=True)
def reset_root_logger() -> Generator[None, None, None]:
    """Remove handlers installed by the CLI's logging setup."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
