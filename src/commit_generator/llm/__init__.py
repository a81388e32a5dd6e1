"""
Language model integration for commit_generator.

This package contains the :class:`OllamaClient` for requesting
completions from an Ollama server and :class:`OllamaRuntime` for the
operations that only the ``ollama`` executable provides.
"""

from .ollama_client import LLMError, ModelNotFoundError, OllamaClient  # noqa: F401
from .ollama_runtime import OllamaNotInstalledError, OllamaRuntime  # noqa: F401
