"""
Command line interface for the commit_generator tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``commit-generator`` command. It checks the
environment, collects the staged changes, builds the prompt and then
hands over to :class:`~commit_generator.session.CommitSession`.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from commit_generator import __version__
from commit_generator.config.loader import DEFAULT_MODEL, load_config
from commit_generator.llm.ollama_client import OllamaClient
from commit_generator.llm.ollama_runtime import (
    INSTALL_URL,
    OllamaNotInstalledError,
    OllamaRuntime,
)
from commit_generator.prompts.builder import build_prompt
from commit_generator.session import CommitSession
from commit_generator.ui import print_error, print_info
from commit_generator.vcs.git_client import GitClient, GitError

# Create a module-level logger. Attach a null handler and disable
# propagation to avoid logging errors when the root logger's stream is
# closed (such as during unit tests).
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_NO_REPO = 3
EXIT_OLLAMA_MISSING = 5
EXIT_VCS_FAILURE = 6


@click.command()
@click.option(
    "-m",
    "--model",
    default=DEFAULT_MODEL,
    show_default=True,
    help="Ollama model used to generate the message.",
)
@click.option("--diff", "include_diff", is_flag=True, help="Send the staged diff instead of the staged file names.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="commit-generator")
def main(model: str, include_diff: bool, verbose: bool) -> None:
    """Generate a commit message for the staged changes with a local LLM."""
    # force=True so that repeated invocations (tests) reconfigure handlers.
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    ctx = click.get_current_context(silent=True)

    try:
        runtime = OllamaRuntime()
        try:
            runtime.ensure_installed()
        except OllamaNotInstalledError as exc:
            print_error(f"Error: {exc}")
            print_error(f"Please install Ollama from {INSTALL_URL} and make sure it's in your PATH.")
            raise click.exceptions.Exit(EXIT_OLLAMA_MISSING)

        repo_root = GitClient.find_repo_root(Path.cwd())
        if repo_root is None:
            print_error("Current directory is not inside a Git repository.")
            raise click.exceptions.Exit(EXIT_NO_REPO)
        git_client = GitClient(repo_root)

        config = load_config(model=model, include_diff=include_diff)

        try:
            files = git_client.get_staged_files(include_diff=config.include_diff)
        except GitError as exc:
            print_error(f"Failed to read staged changes: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        if not files:
            click.echo("Nothing to commit 😴")
            raise click.exceptions.Exit(EXIT_SUCCESS)

        logger.debug("Collected %d staged line(s) from %s", len(files), repo_root)
        print_info(f"Using model {config.model} at {config.server_url}")

        prompt = build_prompt(config.prompt_template, files)
        ollama_client = OllamaClient(
            base_url=config.base_url,
            port=config.port,
            model=config.model,
            request_timeout=config.request_timeout,
        )
        session = CommitSession(config, git_client, ollama_client, runtime)

        try:
            outcome = session.run(prompt)
        except GitError as exc:
            print_error(f"Commit failed: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        logger.debug("Session finished: %s", outcome.value)
        raise click.exceptions.Exit(EXIT_SUCCESS)

    except (click.exceptions.Exit, click.exceptions.Abort):
        # Click handles its own exit and Ctrl-C exceptions
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
