"""Version string classification utilities."""

import re
from typing import Any

from constants import Constants

from .models import VersionCategory, VersionIdentifier

_DETACHED_HEAD_RE = re.compile(Constants.DETACHED_HEAD_PATTERN)
_PATCH_RE = re.compile(r'^[vV]?(\d+)\.(\d+)\.(\d+)$')
_MINOR_RE = re.compile(r'^[vV]?(\d+)(?:\.(\d+))?$')


def strip_version_prefix(text: str) -> str:
    """Drop a single leading 'v'/'V' from a numeric version string."""
    if len(text) > 1 and text[0] in 'vV' and text[1].isdigit():
        return text[1:]
    return text


def is_detached_head_descriptor(text: Any) -> bool:
    """Return True for git's '(HEAD detached at <ref>)' marker."""
    return isinstance(text, str) and bool(_DETACHED_HEAD_RE.match(text))


def is_patch_version(text: Any) -> bool:
    """Return True for X.Y.Z, optionally prefixed by 'v'."""
    return isinstance(text, str) and bool(_PATCH_RE.match(text))


def is_minor_version(text: Any) -> bool:
    """Return True for a release line: X or X.Y, optionally prefixed by 'v'."""
    return isinstance(text, str) and bool(_MINOR_RE.match(text))


def classify_version(raw: str, unstable_label: str) -> VersionIdentifier:
    """Tag a raw version string with its category.

    The unstable label wins over every shape check, so a label such as "2.x"
    or even "1.0" configured as unstable is never sent to the backend.
    Anything that is neither unstable, detached nor a patch is treated as a
    release line and left to the backend to interpret.
    """
    if raw == unstable_label:
        category = VersionCategory.UNSTABLE
    elif is_detached_head_descriptor(raw):
        category = VersionCategory.OPAQUE_DESCRIPTOR
    elif is_patch_version(raw):
        category = VersionCategory.PATCH
    else:
        category = VersionCategory.RELEASE_LINE
    return VersionIdentifier(raw=raw, category=category)
