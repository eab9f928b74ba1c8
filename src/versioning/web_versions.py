"""Website version catalogue and lookups built on top of a version backend."""

from __future__ import annotations

import logging
from typing import List, Optional

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

from .backends.base import VersionBackend
from .models import VersionCatalogue
from .parser import classify_version

logger = logging.getLogger(__name__)


class WebVersions:
    """Resolve website versions of one repository.

    The unstable label (a branch such as ``main``) is always part of the
    catalogues returned by ``get_all_minor_versions`` and
    ``get_all_patch_versions`` even though the backend never reports it.
    Nothing is cached; every query asks the backend again and backend
    exceptions reach the caller untouched.
    """

    def __init__(self, backend: VersionBackend, repository_dir: str,
                 unstable_version: Optional[str] = None):
        """Initialize resolver.

        Args:
            backend: Backend answering branch and tag queries (may be shared)
            repository_dir: Repository location passed through to the backend
            unstable_version: Unstable label (defaults to Constants.DEFAULT_UNSTABLE_VERSION, "main")
        """
        self._backend = backend
        self._repository_dir = repository_dir
        self._unstable_version = unstable_version or Constants.DEFAULT_UNSTABLE_VERSION

    @property
    def backend(self) -> VersionBackend:
        return self._backend

    @property
    def repository_dir(self) -> str:
        return self._repository_dir

    def get_last_unstable_version(self) -> str:
        return self._unstable_version

    def _with_unstable(self, versions: List[str]) -> List[str]:
        # The backend should never report the unstable label; guard anyway so
        # the catalogue stays unique.
        return [self._unstable_version] + [v for v in versions if v != self._unstable_version]

    def get_all_minor_versions(self) -> VersionCatalogue:
        """Return the unstable label followed by stable minor versions, newest first."""
        return self._with_unstable(self.get_all_stable_minor_versions())

    def get_all_stable_minor_versions(self) -> VersionCatalogue:
        return list(self._backend.get_all_minor_versions(self._repository_dir) or [])

    def get_last_stable_minor_version(self) -> Optional[str]:
        return self._backend.get_last_stable_minor_version(self._repository_dir)

    def get_last_stable_patch_version(self) -> Optional[str]:
        return self._backend.get_last_patch_version(self._repository_dir)

    def get_all_patch_versions(self) -> VersionCatalogue:
        """Return the unstable label followed by stable patch versions, newest first."""
        return self._with_unstable(self.get_all_stable_patch_versions())

    def get_all_stable_patch_versions(self) -> VersionCatalogue:
        return list(self._backend.get_all_patch_versions(self._repository_dir) or [])

    def has_minor_version(self, minor_version: str) -> bool:
        """Tell whether the version is the unstable label or a known minor version.

        Unknown or malformed input simply yields False.
        """
        if not isinstance(minor_version, str):
            return False
        if minor_version == self._unstable_version:
            return True
        return minor_version in self.get_all_minor_versions()

    def get_last_patch_version_of(self, superior_version: str) -> str:
        """Return the newest patch version of a minor or major version.

        The unstable label and git's detached HEAD marker are returned as
        they are: neither names a release line the backend could expand.
        Everything else goes to the backend verbatim.
        """
        version = classify_version(superior_version, self._unstable_version)
        if version.is_terminal:
            if is_debug_enabled(logger):
                logger.debug(
                    "Version is terminal, not resolved",
                    extra=extra_context(
                        event="decision",
                        component="web_versions",
                        action="get_last_patch_version_of",
                        outcome=version.category.value,
                        target=superior_version,
                    ),
                )
            return superior_version

        if is_debug_enabled(logger):
            logger.debug(
                "Resolving last patch version through backend",
                extra=extra_context(
                    event="decision",
                    component="web_versions",
                    action="get_last_patch_version_of",
                    outcome=version.category.value,
                    target=superior_version,
                ),
            )
        return self._backend.get_last_patch_version_of(superior_version, self._repository_dir)
