"""Command-line interface for approxoffset.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for cycle computation
- Verbose/quiet output modes
- Polygon listing for inspecting input files
- Detailed error reporting
"""

from approxoffset.cli.app import cli, main

__all__ = ["cli", "main"]
