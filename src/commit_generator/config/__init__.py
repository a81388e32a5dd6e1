"""
Configuration loading for commit_generator.

Resolves the model, Ollama server address and prompt template once at
startup. See :mod:`commit_generator.config.loader` for implementation
details.
"""

from .loader import GeneratorConfig, load_config  # noqa: F401
