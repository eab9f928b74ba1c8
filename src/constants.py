"""Constants used in the project."""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    NOT_FOUND = 1
    GIT_ERROR = 2


class Actions(Enum):
    """Queries exposed on the command line.

    Args:
        Enum (string): Action names accepted by the CLI.
    """

    UNSTABLE = "unstable"
    MINOR = "minor"
    STABLE_MINOR = "stable-minor"
    LAST_MINOR = "last-minor"
    PATCH = "patch"
    STABLE_PATCH = "stable-patch"
    LAST_PATCH = "last-patch"
    LAST_PATCH_OF = "last-patch-of"
    HAS_MINOR = "has-minor"
    CURRENT = "current"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    DEFAULT_UNSTABLE_VERSION = "main"
    GIT_BINARY = "git"
    GIT_TIMEOUT_SEC = 30
    INCLUDE_LOCAL_BRANCHES = True
    INCLUDE_REMOTE_BRANCHES = True
    DETACHED_HEAD_PATTERN = r"^\(HEAD detached at .+\)$"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ACTIONS = [action.value for action in Actions]
    ACTIONS_WITH_VERSION = [Actions.LAST_PATCH_OF.value, Actions.HAS_MINOR.value]

    ENV_CONFIG = "WEBVERSIONS_CONFIG"
    ENV_UNSTABLE_VERSION = "WEBVERSIONS_UNSTABLE_VERSION"
    ENV_GIT_BINARY = "WEBVERSIONS_GIT_BINARY"
    ENV_LOG_LEVEL = "WEBVERSIONS_LOG_LEVEL"


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Read the YAML config file, if any.

    The path comes from the argument or the WEBVERSIONS_CONFIG environment
    variable. A missing or unreadable file yields an empty mapping.
    """
    path = path or os.environ.get(Constants.ENV_CONFIG)
    if not path:
        return {}
    if not os.path.isfile(path):
        logger.warning("Config file not found: %s", path)
        return {}

    import yaml  # pylint: disable=import-outside-toplevel

    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Failed to load config %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level must be a mapping", path)
        return {}
    return data


def apply_config(path: Optional[str] = None) -> None:
    """Apply YAML config then environment overrides onto Constants.

    Precedence: defaults < YAML file < environment. CLI flags are applied by
    the caller afterwards.
    """
    cfg = _load_yaml_config(path)

    unstable = cfg.get("unstable_version")
    if isinstance(unstable, str) and unstable.strip():
        Constants.DEFAULT_UNSTABLE_VERSION = unstable.strip()

    git_cfg = cfg.get("git")
    if isinstance(git_cfg, dict):
        if isinstance(git_cfg.get("binary"), str) and git_cfg["binary"].strip():
            Constants.GIT_BINARY = git_cfg["binary"].strip()
        if git_cfg.get("timeout") is not None:
            try:
                Constants.GIT_TIMEOUT_SEC = int(git_cfg["timeout"])
            except (TypeError, ValueError):
                logger.warning("Ignoring invalid git.timeout value: %r", git_cfg["timeout"])
        if isinstance(git_cfg.get("include_local"), bool):
            Constants.INCLUDE_LOCAL_BRANCHES = git_cfg["include_local"]
        if isinstance(git_cfg.get("include_remote"), bool):
            Constants.INCLUDE_REMOTE_BRANCHES = git_cfg["include_remote"]

    env_unstable = os.environ.get(Constants.ENV_UNSTABLE_VERSION)
    if env_unstable and env_unstable.strip():
        Constants.DEFAULT_UNSTABLE_VERSION = env_unstable.strip()
    env_git = os.environ.get(Constants.ENV_GIT_BINARY)
    if env_git and env_git.strip():
        Constants.GIT_BINARY = env_git.strip()
