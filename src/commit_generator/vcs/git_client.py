"""
Git client implementation for commit_generator.

This module wraps the two Git operations the generator needs: listing
what is staged in the index and creating the commit. All subprocess
calls go through a single helper so that unit tests can mock them
easily.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class GitError(Exception):
    """Raised when a Git command cannot be run or fails."""

    pass


class GitClient:
    """Client for interacting with a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached. ``.git`` may be a file for worktrees and
        submodules.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], capture: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        When ``capture`` is False, Git writes straight to the terminal so
        that hook output and the commit summary stay visible.

        Raises
        ------
        GitError
            If Git cannot be spawned, its output cannot be decoded, or
            the command exits with a non-zero status.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", full_cmd)
        kwargs = {}
        if capture:
            # Strict decoding: invalid UTF-8 is reported as an error.
            kwargs = dict(
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
            )
        try:
            result = subprocess.run(full_cmd, cwd=self.repo_root, **kwargs)
        except OSError as exc:
            logger.error("Failed to execute git: %s", exc)
            raise GitError(f"Failed to execute git: {exc}") from exc
        except UnicodeDecodeError as exc:
            logger.error("Unicode decode error in Git output: %s", exc)
            raise GitError(f"Git output is not valid UTF-8 text: {exc}") from exc

        if result.returncode != 0:
            stderr = (result.stderr or "").strip() if capture else ""
            stdout = (result.stdout or "").strip() if capture else ""
            logger.error(
                "Git command failed (%s): %s\nSTDOUT: %s\nSTDERR: %s",
                result.returncode,
                " ".join(full_cmd),
                stdout,
                stderr,
            )
            raise GitError(
                stderr or stdout or f"git {args[0]} exited with status {result.returncode}"
            )
        return result

    # ------------------------------------------------------------------
    # Staged changes
    # ------------------------------------------------------------------
    def get_staged_files(self, include_diff: bool = False) -> List[str]:
        """Return what is currently staged for commit, one entry per line.

        Parameters
        ----------
        include_diff : bool, optional
            When False (the default) the entries are the staged file
            paths. When True they are the lines of the staged diff.

        Returns
        -------
        List[str]
            The output lines in order. An empty list means nothing is
            staged.

        Raises
        ------
        GitError
            If the diff command fails.
        """
        # Unquoted paths: non-ASCII names reach the prompt as written.
        args = ["-c", "core.quotePath=false", "diff", "--cached"]
        if not include_diff:
            args.append("--name-only")
        result = self._run(args)
        return result.stdout.splitlines()

    # ------------------------------------------------------------------
    # Committing
    # ------------------------------------------------------------------
    def commit(self, message: str) -> None:
        """Create a commit with the given message.

        The message is passed as a single argument, so multi-line text
        and shell metacharacters reach Git untouched. If the commit
        fails, a GitError is raised.
        """
        self._run(["commit", "-m", message], capture=False)
