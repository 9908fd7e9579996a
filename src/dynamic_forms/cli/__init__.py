"""CLI package: Typer-based command-line interface.

Usage:
    python -m dynamic_forms.cli --help
    python -m dynamic_forms.cli submit --help
"""

from dynamic_forms.cli._app import app

# Register command modules (side-effect imports)
import dynamic_forms.cli.cmd_forms  # noqa: F401
import dynamic_forms.cli.cmd_submit  # noqa: F401

__all__ = ["app"]
