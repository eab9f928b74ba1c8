"""Version backends answering branch and tag queries."""

from .base import VersionBackend
from .git import GitBackend, GitError, NoPatchVersionError

__all__ = [
    "VersionBackend",
    "GitBackend",
    "GitError",
    "NoPatchVersionError",
]
