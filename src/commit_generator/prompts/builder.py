"""
Prompt construction for commit message generation.

A prompt template is plain text in which every ``{}`` marker is replaced
by the staged file list, one entry per line. Users can replace the
built-in template by writing their own to
``~/.config/commit_generator/prompt.md``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from textwrap import dedent
from typing import Iterable, Optional


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


PLACEHOLDER = "{}"

DEFAULT_PROMPT_TEMPLATE = dedent(
    """\
    Action: Generate a clear, single-line git commit message for the following staged files.
    Staged files:
    {}

    - Follow the conventional commit style (e.g., feat, fix, refactor, docs).
    - Describe the intent of the changes (what and why, not how).
    - Use only the information available from the file names.
    - Respond with only the commit message, no extra text.
    - Do not return any other information.

    **Example 1**
    Staged files:
    - src/user/profile.ts
    - src/components/Avatar.tsx

    Commit Message:
    feat: add user profile page and avatar component

    now generate a commit message for the following staged files:
    Staged files:
    {}

    DO NOT RETURN ANYTHING ELSE, ONLY THE COMMIT MESSAGE."""
)


def load_prompt_template(path: Optional[Path] = None) -> str:
    """Return the user's prompt template, or the built-in default.

    Parameters
    ----------
    path : Path, optional
        Location of the custom template. If it is missing or cannot be
        read, :data:`DEFAULT_PROMPT_TEMPLATE` is returned.
    """
    if path is None:
        return DEFAULT_PROMPT_TEMPLATE
    try:
        template = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Using default prompt template (%s: %s)", path, exc)
        return DEFAULT_PROMPT_TEMPLATE
    logger.debug("Loaded custom prompt template from: %s", path)
    if PLACEHOLDER not in template:
        logger.warning(
            "Prompt template %s has no %s marker; staged files will not be sent",
            path,
            PLACEHOLDER,
        )
    return template


def build_prompt(template: str, files: Iterable[str]) -> str:
    """Substitute the newline-joined ``files`` for every placeholder.

    File names are inserted as-is; a name that itself contains the
    placeholder is not treated specially.
    """
    return template.replace(PLACEHOLDER, "\n".join(files))
