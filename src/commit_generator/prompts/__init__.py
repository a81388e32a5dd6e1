"""Prompt template loading and substitution."""

from .builder import (  # noqa: F401
    DEFAULT_PROMPT_TEMPLATE,
    PLACEHOLDER,
    build_prompt,
    load_prompt_template,
)
