"""
Version control integration.

Only Git is supported: the client lists staged changes and creates the
commit once the user has accepted a suggested message.
"""

from .git_client import GitClient, GitError  # noqa: F401
