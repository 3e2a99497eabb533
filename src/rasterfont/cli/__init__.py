"""Command-line interface for rasterfont.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bar across vectorization and the FontForge build
- Ctrl+C cancels cleanly (exit code 130)
- Glyph inventory report
"""

from rasterfont.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
