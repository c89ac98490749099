"""Pytest configuration and shared fixtures for the mlgrep test suite.

This module provides shared fixtures, test configuration, and sample inputs
used across the entire test suite.
"""

import io
import logging
import os

import pytest

from mlgrep.engine.separator import Separator

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=50)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Keep config discovery and color detection independent of the host.

    Tests run from an empty directory with an empty home so no stray
    ``.mlgrep.toml`` is picked up.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("MLGREP_CONFIG", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    logging.getLogger().handlers.clear()


@pytest.fixture
def default_separator() -> Separator:
    """Separator recognizing blank lines and ----/==== rules."""
    return Separator.compile()


@pytest.fixture
def log_text() -> str:
    """A small multi-record log with dashed rules between entries."""
    return (
        "startup banner\n"
        "----\n"
        "job 1\n"
        "status: ok\n"
        "----\n"
        "job 2\n"
        "err: disk full\n"
        "warn: retrying\n"
        "----\n"
        "job 3\n"
        "err: timeout\n"
    )


@pytest.fixture
def log_stream(log_text) -> io.StringIO:
    """``log_text`` as a readable stream."""
    return io.StringIO(log_text)


@pytest.fixture
def timestamped_log() -> str:
    """Log entries opened by timestamps, some spanning several lines."""
    return (
        "2024-03-01 12:00:01 INFO service started\n"
        "2024-03-01 12:00:05 ERROR request failed\n"
        "Traceback (most recent call last):\n"
        '  File "app.py", line 3, in handler\n'
        "ValueError: bad input\n"
        "2024-03-01 12:00:09 INFO request ok\n"
    )
