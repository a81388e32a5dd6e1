"""
Wrapper around the ``ollama`` executable.

The HTTP client talks to a running server; this module covers the two
things only the command line tool does for us: confirming that Ollama is
installed, and downloading a model with ``ollama pull``.
"""

from __future__ import annotations

import logging
import subprocess


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


INSTALL_URL = "https://ollama.com"


class OllamaNotInstalledError(Exception):
    """Raised when the ``ollama`` executable is missing or unusable."""

    pass


class OllamaRuntime:
    """Run ``ollama`` subcommands."""

    def __init__(self, executable: str = "ollama") -> None:
        self.executable = executable

    def ensure_installed(self) -> None:
        """Check that ``ollama --version`` runs successfully.

        Raises
        ------
        OllamaNotInstalledError
            If the executable cannot be spawned or exits with an error.
        """
        cmd = [self.executable, "--version"]
        logger.debug("Checking for Ollama: %s", cmd)
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            logger.error("Failed to execute %s: %s", self.executable, exc)
            raise OllamaNotInstalledError(
                f"`{self.executable}` command not found."
            ) from exc
        if result.returncode != 0:
            logger.error(
                "%s --version exited with %s: %s",
                self.executable,
                result.returncode,
                result.stderr.strip(),
            )
            raise OllamaNotInstalledError(
                f"`{self.executable} --version` failed with status {result.returncode}."
            )
        logger.debug("Found %s", result.stdout.strip())

    def pull(self, model: str) -> bool:
        """Download ``model`` with ``ollama pull``.

        The command's own progress output goes straight to the terminal.
        Returns True on success, False if the command could not be run or
        exited with a non-zero status.
        """
        cmd = [self.executable, "pull", model]
        logger.debug("Pulling model: %s", cmd)
        try:
            result = subprocess.run(cmd)
        except OSError as exc:
            logger.error("Failed to execute %s: %s", self.executable, exc)
            return False
        if result.returncode != 0:
            logger.error("ollama pull %s exited with %s", model, result.returncode)
            return False
        return True
