"""
Configuration loader for commit_generator.

Everything the generator reads from its environment is resolved here,
once, at startup:

* the Ollama service address, from the ``OLLAMA_URL`` environment
  variable (malformed values fall back to ``http://localhost:11434``);
* the prompt template, from ``~/.config/commit_generator/prompt.md`` if
  that file exists, otherwise the built-in default;
* the model identifier and collection mode, from the command line.

The result is an immutable :class:`GeneratorConfig` that is handed to the
interaction loop. Nothing is ever written back to disk.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from commit_generator.llm.ollama_client import resolve_service_address
from commit_generator.prompts.builder import load_prompt_template


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings or logging errors in
# environments where the root logger may be closed. Explicit configuration
# in the CLI overrides this behaviour.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


DEFAULT_MODEL = "gemma3:latest"
DEFAULT_REQUEST_TIMEOUT = 120.0
OLLAMA_URL_ENV = "OLLAMA_URL"
PROMPT_FILE_NAME = "prompt.md"


@dataclass(frozen=True)
class GeneratorConfig:
    """Settings for one run of the generator."""

    model: str
    base_url: str
    port: int
    prompt_template: str
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    include_diff: bool = False

    @property
    def server_url(self) -> str:
        return f"{self.base_url}:{self.port}"


def _get_config_directory() -> Path:
    """Return the per-user configuration directory.

    Returns:
        Path to ``~/.config/commit_generator``.
    """
    return Path.home() / ".config" / "commit_generator"


def load_config(
    model: str = DEFAULT_MODEL,
    include_diff: bool = False,
    env: Optional[Mapping[str, str]] = None,
    config_dir: Optional[Path] = None,
) -> GeneratorConfig:
    """Resolve the generator configuration.

    Args:
        model: Model identifier passed to Ollama. Not validated.
        include_diff: Send the staged diff instead of the file names.
        env: Environment mapping to read ``OLLAMA_URL`` from. Defaults to
            ``os.environ``.
        config_dir: Directory holding the optional ``prompt.md``.
            Defaults to ``~/.config/commit_generator``.

    Returns:
        The resolved :class:`GeneratorConfig`.
    """
    if env is None:
        env = os.environ
    if config_dir is None:
        config_dir = _get_config_directory()

    base_url, port = resolve_service_address(env.get(OLLAMA_URL_ENV))
    template = load_prompt_template(config_dir / PROMPT_FILE_NAME)

    config = GeneratorConfig(
        model=model,
        base_url=base_url,
        port=port,
        prompt_template=template,
        include_diff=include_diff,
    )
    logger.debug(
        "Resolved configuration: server=%s model=%s include_diff=%s",
        config.server_url,
        config.model,
        config.include_diff,
    )
    return config
