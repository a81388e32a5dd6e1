#!/usr/bin/env python
"""
Thin wrapper script to invoke the commit_generator CLI.

Running ``python commitgen.py`` is equivalent to running the
``commit-generator`` console script installed via ``pyproject.toml``.
"""

from commit_generator.cli import main


if __name__ == "__main__":
    main(prog_name="commit-generator")
