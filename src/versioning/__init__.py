"""Website version resolution for Git repositories."""

from .models import VersionCategory, VersionIdentifier
from .web_versions import WebVersions

__all__ = [
    "VersionCategory",
    "VersionIdentifier",
    "WebVersions",
]
