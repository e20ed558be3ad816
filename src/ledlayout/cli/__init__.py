"""Command-line interface for ledlayout.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Placement for a single outline or every character of a text
- Path edit validation with exit codes
- JSON output for scripting
- Module and power supply catalog listing
"""

from ledlayout.cli.app import cli, main

__all__ = ["cli", "main"]
