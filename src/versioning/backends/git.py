"""Git backend reading minor versions from branches and patch versions from tags."""

from __future__ import annotations

import logging
import os
import re
import subprocess
from typing import Iterable, List, Optional, Sequence

import semantic_version

from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants

from ..parser import is_minor_version, is_patch_version, strip_version_prefix
from .base import VersionBackend

logger = logging.getLogger(__name__)

_MINOR_BRANCH_RE = re.compile(r'^[vV]?\d+\.\d+$')


class GitError(RuntimeError):
    """A git invocation failed or the repository could not be read."""

    def __init__(self, message: str, command: Optional[Sequence[str]] = None,
                 returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stderr = stderr


class NoPatchVersionError(GitError):
    """No patch tag belongs to the requested minor or major version."""

    def __init__(self, superior_version: str, repository_dir: str):
        super().__init__(
            f"No patch version found for '{superior_version}' in {repository_dir}"
        )
        self.superior_version = superior_version
        self.repository_dir = repository_dir


def _as_semver(version: str) -> semantic_version.Version:
    # Minor versions sort as X.Y.0; int() also tolerates leading zeros.
    parts = [int(part) for part in version.split('.')] + [0, 0]
    return semantic_version.Version(major=parts[0], minor=parts[1], patch=parts[2])


def _sort_descending(versions: Iterable[str]) -> List[str]:
    """Deduplicate and sort numeric versions, newest first."""
    unique = set(versions)
    return sorted(unique, key=_as_semver, reverse=True)


class GitBackend(VersionBackend):
    """Version backend shelling out to the git executable.

    Minor versions come from branch names (``1.2``, ``v1.2``, ``origin/1.2``),
    patch versions from tag names (``1.2.3``, ``v1.2.3``). A ``v`` prefix is
    stripped from everything returned.
    """

    def __init__(self, git_binary: Optional[str] = None, timeout: Optional[int] = None):
        """Initialize git backend.

        Args:
            git_binary: git executable (defaults to Constants.GIT_BINARY)
            timeout: Per-command timeout in seconds (defaults to Constants.GIT_TIMEOUT_SEC)
        """
        self.git_binary = git_binary or Constants.GIT_BINARY
        self.timeout = timeout if timeout is not None else Constants.GIT_TIMEOUT_SEC

    def _run(self, args: List[str], repository_dir: str) -> List[str]:
        """Run a git command inside the repository and return non-empty output lines."""
        if not os.path.isdir(repository_dir):
            raise GitError(f"Repository directory does not exist: {repository_dir}")

        command = [self.git_binary, *args]
        with Timer() as t:
            try:
                result = subprocess.run(
                    command,
                    cwd=repository_dir,
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                    check=False,
                )
            except FileNotFoundError as exc:
                raise GitError(f"git executable not found: {self.git_binary}", command) from exc
            except subprocess.TimeoutExpired as exc:
                raise GitError(
                    f"git timed out after {self.timeout} seconds: {' '.join(command)}", command
                ) from exc

        if is_debug_enabled(logger):
            logger.debug(
                "git command",
                extra=extra_context(
                    event="git_command",
                    component="git_backend",
                    action=" ".join(args),
                    outcome="success" if result.returncode == 0 else "failure",
                    returncode=result.returncode,
                    duration_ms=t.duration_ms(),
                    target=repository_dir,
                ),
            )

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise GitError(
                f"git {' '.join(args)} failed with exit code {result.returncode}: {stderr}",
                command,
                result.returncode,
                stderr,
            )
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def _branch_names(self, repository_dir: str, remote: bool) -> List[str]:
        args = ["branch", "--list", "--format=%(refname:short)"]
        if remote:
            args.insert(1, "--remotes")
        return self._run(args, repository_dir)

    def get_all_minor_versions(
        self,
        repository_dir: str,
        read_local: Optional[bool] = None,
        read_remote: Optional[bool] = None,
    ) -> List[str]:
        if read_local is None:
            read_local = Constants.INCLUDE_LOCAL_BRANCHES
        if read_remote is None:
            read_remote = Constants.INCLUDE_REMOTE_BRANCHES

        branches: List[str] = []
        if read_local:
            branches.extend(self._branch_names(repository_dir, remote=False))
        if read_remote:
            # origin/1.2 -> 1.2; origin/feature/1.2 stays feature/1.2
            branches.extend(name.split('/', 1)[-1] for name in self._branch_names(repository_dir, remote=True))

        minors = [strip_version_prefix(name) for name in branches if _MINOR_BRANCH_RE.match(name)]
        return _sort_descending(minors)

    def get_last_stable_minor_version(
        self,
        repository_dir: str,
        read_local: Optional[bool] = None,
        read_remote: Optional[bool] = None,
    ) -> Optional[str]:
        minors = self.get_all_minor_versions(repository_dir, read_local, read_remote)
        return minors[0] if minors else None

    def get_all_patch_versions(self, repository_dir: str) -> List[str]:
        tags = self._run(["tag", "--list"], repository_dir)
        return _sort_descending(strip_version_prefix(tag) for tag in tags if is_patch_version(tag))

    def get_last_patch_version(self, repository_dir: str) -> Optional[str]:
        patches = self.get_all_patch_versions(repository_dir)
        return patches[0] if patches else None

    def get_last_patch_version_of(self, superior_version: str, repository_dir: str) -> str:
        """Return the newest patch tag within a release line.

        ``"1"`` matches every ``1.*.*`` tag, ``"1.2"`` every ``1.2.*`` tag and
        a full patch version matches only itself.

        Raises:
            NoPatchVersionError: when no tag belongs to the line
        """
        wanted = strip_version_prefix(superior_version)
        if not (is_minor_version(wanted) or is_patch_version(wanted)):
            raise NoPatchVersionError(superior_version, repository_dir)

        wanted_parts = [int(part) for part in wanted.split('.')]
        for patch in self.get_all_patch_versions(repository_dir):
            parts = [int(part) for part in patch.split('.')]
            if parts[:len(wanted_parts)] == wanted_parts:
                return patch
        raise NoPatchVersionError(superior_version, repository_dir)

    def get_current_branch(self, repository_dir: str) -> Optional[str]:
        """Return the checked-out branch name, or git's detached HEAD marker.

        Returns None on a repository without any commit yet.
        """
        for line in self._run(["branch", "--no-color", "--list"], repository_dir):
            if line.startswith("* "):
                return line[2:].strip()
        return None
