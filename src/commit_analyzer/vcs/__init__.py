"""
Version control system (VCS) integration.

Contains the Git client that reads the staged diff handed to the
analyzer.
"""

from .git_client import GitClient, GitError  # noqa: F401
