"""
Top-level package for commit_generator.

This package exposes the main CLI entry point via the
``commit_generator.cli`` module.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
