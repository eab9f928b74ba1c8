"""Abstract base class for version backends."""

from abc import ABC, abstractmethod
from typing import List, Optional


class VersionBackend(ABC):
    """Query contract consumed by WebVersions.

    Implementations return lists already deduplicated and sorted newest
    first. Absence of data is an empty list or None, never an exception;
    exceptions are reserved for real failures (process, I/O, bad location).
    """

    @abstractmethod
    def get_all_minor_versions(
        self,
        repository_dir: str,
        read_local: Optional[bool] = None,
        read_remote: Optional[bool] = None,
    ) -> List[str]:
        """Return minor versions (X.Y) found in branch names.

        Args:
            repository_dir: Repository location
            read_local: Include local branches (None means configured default)
            read_remote: Include remote branches (None means configured default)

        Returns:
            Minor versions, newest first; empty when there are none
        """

    @abstractmethod
    def get_last_stable_minor_version(
        self,
        repository_dir: str,
        read_local: Optional[bool] = None,
        read_remote: Optional[bool] = None,
    ) -> Optional[str]:
        """Return the newest minor version or None."""

    @abstractmethod
    def get_last_patch_version(self, repository_dir: str) -> Optional[str]:
        """Return the newest patch version across all release lines or None."""

    @abstractmethod
    def get_last_patch_version_of(self, superior_version: str, repository_dir: str) -> str:
        """Return the newest patch version belonging to a minor or major line.

        Args:
            superior_version: Minor (X.Y) or major (X) version
            repository_dir: Repository location

        Returns:
            Patch version string
        """

    @abstractmethod
    def get_all_patch_versions(self, repository_dir: str) -> List[str]:
        """Return patch versions (X.Y.Z) found in tags, newest first."""

    def get_current_branch(self, repository_dir: str) -> Optional[str]:  # pylint: disable=unused-argument
        """Return the checked-out branch or detached HEAD marker.

        Backends without a notion of a working copy return None.
        """
        return None
