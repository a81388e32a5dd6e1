"""
Interactive generate / confirm / retry loop.

:class:`CommitSession` asks the model for a message, shows it, and lets
the user commit it, ask for another one, or give up. When the model is
not installed on the server it is pulled once and generation is retried.

Every step is a blocking call that finishes before the next one starts.
The session receives everything it needs (configuration and the three
collaborators) up front and never reads the environment itself.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, Optional

import click

from commit_generator.config.loader import GeneratorConfig
from commit_generator.llm.ollama_client import LLMError, ModelNotFoundError, OllamaClient
from commit_generator.llm.ollama_runtime import OllamaRuntime
from commit_generator.ui import (
    ProgressIndicator,
    print_error,
    print_success,
    print_suggestion,
    print_warning,
)
from commit_generator.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class SessionOutcome(enum.Enum):
    """How a session ended."""

    COMMITTED = "committed"
    CANCELED = "canceled"
    # Generation or model download failed; already reported to the user.
    FAILED = "failed"


def _confirm(text: str) -> bool:
    return click.confirm(text, default=False)


class CommitSession:
    """Drive one commit from suggestion to ``git commit``.

    Parameters
    ----------
    config : GeneratorConfig
        Resolved settings; only ``model`` is read here.
    git_client : GitClient
        Used to create the commit.
    ollama_client : OllamaClient
        Used to generate suggestions.
    runtime : OllamaRuntime
        Used to pull the model when the server does not have it.
    confirm : callable, optional
        Yes/no prompt, ``click.confirm`` by default.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        git_client: GitClient,
        ollama_client: OllamaClient,
        runtime: OllamaRuntime,
        confirm: Optional[Callable[[str], bool]] = None,
    ) -> None:
        self.config = config
        self.git_client = git_client
        self.ollama_client = ollama_client
        self.runtime = runtime
        self.confirm = confirm or _confirm
        self.pulled = False

    def _generate(self, prompt: str) -> str:
        with ProgressIndicator("Generating commit message"):
            return self.ollama_client.generate(prompt)

    def _pull_model(self) -> bool:
        model = self.config.model
        print_warning(f"Model '{model}' not found. Downloading...")
        if self.runtime.pull(model):
            print_success("Model downloaded successfully. Retrying...")
            return True
        print_error(f"Error: Failed to download model '{model}'.")
        print_error(
            "Please make sure Ollama is running and try to pull the model "
            f"manually: ollama pull {model}"
        )
        return False

    def run(self, prompt: str) -> SessionOutcome:
        """Loop until the user commits or cancels, or generation fails.

        Raises
        ------
        GitError
            If the commit itself fails.
        """
        while True:
            try:
                suggestion = self._generate(prompt).strip()
            except ModelNotFoundError as exc:
                logger.debug("Generation failed, model missing: %s", exc)
                if self.pulled:
                    # The server still lacks the model after a successful pull.
                    print_error(
                        f"Model '{self.config.model}' is still not available "
                        f"after downloading it: {exc}"
                    )
                    return SessionOutcome.FAILED
                if not self._pull_model():
                    return SessionOutcome.FAILED
                self.pulled = True
                continue
            except LLMError as exc:
                print_error(f"An unexpected error occurred: {exc}")
                return SessionOutcome.FAILED

            if not suggestion:
                # git refuses an empty message, so it is never offered.
                print_warning("The model returned an empty suggestion.")
            else:
                print_suggestion(suggestion)

                if self.confirm("👍 Commit with this message?"):
                    logger.debug("Committing with message: %r", suggestion)
                    self.git_client.commit(suggestion)
                    print_success("Commit successful!")
                    return SessionOutcome.COMMITTED

            if not self.confirm("🔄 Generate another suggestion?"):
                click.echo("❌ Canceled.")
                return SessionOutcome.CANCELED
            logger.debug("Regenerating with model %s", self.config.model)
