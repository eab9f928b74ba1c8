"""Data models for version identifiers."""

from dataclasses import dataclass
from enum import Enum
from typing import List


class VersionCategory(Enum):
    """What a version string names, as far as resolution is concerned."""
    UNSTABLE = "unstable"
    OPAQUE_DESCRIPTOR = "opaque_descriptor"
    RELEASE_LINE = "release_line"
    PATCH = "patch"


@dataclass(frozen=True)
class VersionIdentifier:
    """A raw version string tagged with its category."""
    raw: str
    category: VersionCategory

    @property
    def is_terminal(self) -> bool:
        """True when the identifier never expands through the backend."""
        return self.category in (VersionCategory.UNSTABLE, VersionCategory.OPAQUE_DESCRIPTOR)

    def __str__(self) -> str:
        return self.raw


# Ordered, unique version strings, newest first.
VersionCatalogue = List[str]
