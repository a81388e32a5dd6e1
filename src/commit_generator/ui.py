"""
Terminal output helpers shared by the CLI and the interaction loop.
"""

from __future__ import annotations

import time
from typing import Optional

import click


class ProgressIndicator:
    """Status line shown while a blocking call runs.

    Purely cosmetic: it writes a line before the wrapped block and
    rewrites it afterwards, without touching anything the block uses.
    """

    def __init__(self, message: str, show_spinner: bool = True):
        self.message = message
        self.show_spinner = show_spinner
        self.start_time: Optional[float] = None

    def __enter__(self):
        self.start_time = time.time()
        if self.show_spinner:
            click.echo(f"⠋ {self.message}...", nl=False)
        else:
            click.echo(f"→ {self.message}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.time() - (self.start_time or time.time())
        mark = "✗" if exc_type is not None else "✓"
        if self.show_spinner:
            click.echo(f"\r{mark} {self.message} (took {elapsed:.1f}s)")
        else:
            click.echo(f"  {mark} Done ({elapsed:.1f}s)")
        return False


def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}")


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✅ {message}")


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}")


def print_error(message: str, indent: int = 0):
    """Print an error message to stderr."""
    prefix = "  " * indent
    click.echo(f"{prefix}❌ {message}", err=True)


def print_suggestion(message: str):
    """Show a suggested commit message."""
    click.echo("\n💡 Commit suggestion:")
    click.echo(click.style(f'"{message}"', fg="cyan", bold=True))
    click.echo("")
