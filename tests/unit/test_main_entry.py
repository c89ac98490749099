"""Unit tests for __main__.py entry points."""

import sys
from unittest.mock import patch

import pytest


@pytest.mark.unit
class TestMlgrepMain:
    """Test mlgrep/__main__.py entry point."""

    def test_main_module_importable(self):
        """Test that __main__.py module is importable."""
        import mlgrep.__main__  # noqa: F401

    def test_main_with_help(self, capsys):
        """Test running with --help argument."""
        from mlgrep.cli import main

        with patch.object(sys, "argv", ["mlgrep", "--help"]):
            assert main() == 0
        assert "PATTERN" in capsys.readouterr().out

    def test_version(self, capsys):
        from mlgrep import __version__
        from mlgrep.cli import main

        assert main(["--version"]) == 0
        assert __version__ in capsys.readouterr().out
