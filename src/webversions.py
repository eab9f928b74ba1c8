"""webversions - Website versions derived from Git branches and tags

    Prints the version catalogue of a repository or answers a single
    version query.

    Returns:
        int: Exit code
"""
import sys
import logging
import json
from typing import Any, Optional

from constants import Actions, Constants, ExitCodes, apply_config
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from versioning.backends.base import VersionBackend
from versioning.backends.git import GitBackend, GitError
from versioning.web_versions import WebVersions


def run_action(web: WebVersions, backend: VersionBackend, action: str, version: Optional[str] = None) -> Any:
    """Run one CLI action against the resolver.

    Returns a list, a string, None or a bool depending on the action.
    """
    if action == Actions.UNSTABLE.value:
        return web.get_last_unstable_version()
    if action == Actions.MINOR.value:
        return web.get_all_minor_versions()
    if action == Actions.STABLE_MINOR.value:
        return web.get_all_stable_minor_versions()
    if action == Actions.LAST_MINOR.value:
        return web.get_last_stable_minor_version()
    if action == Actions.PATCH.value:
        return web.get_all_patch_versions()
    if action == Actions.STABLE_PATCH.value:
        return web.get_all_stable_patch_versions()
    if action == Actions.LAST_PATCH.value:
        return web.get_last_stable_patch_version()
    if action == Actions.LAST_PATCH_OF.value:
        return web.get_last_patch_version_of(version)
    if action == Actions.HAS_MINOR.value:
        return web.has_minor_version(version)
    if action == Actions.CURRENT.value:
        current = backend.get_current_branch(web.repository_dir)
        if current is None:
            return None
        return web.get_last_patch_version_of(current)
    raise ValueError(f"Unknown action: {action}")


def render(result: Any, as_json: bool = False) -> str:
    """Format an action result for stdout."""
    if as_json:
        return json.dumps(result)
    if result is None:
        return ""
    if isinstance(result, bool):
        return "true" if result else "false"
    if isinstance(result, list):
        return "\n".join(result)
    return str(result)


def exit_code_for(result: Any) -> int:
    if result is None or result is False:
        return ExitCodes.NOT_FOUND.value
    return ExitCodes.SUCCESS.value


def main(argv=None, backend=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    apply_config(args.CONFIG)
    configure_logging(args.LOG_LEVEL, args.LOG_FILE)

    # CLI has highest precedence
    if args.GIT_BINARY:
        Constants.GIT_BINARY = args.GIT_BINARY
    if args.NO_LOCAL:
        Constants.INCLUDE_LOCAL_BRANCHES = False
    if args.NO_REMOTE:
        Constants.INCLUDE_REMOTE_BRANCHES = False

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action,
                                target=args.REPOSITORY_DIR)
        )

    if backend is None:
        backend = GitBackend()
    web = WebVersions(backend, args.REPOSITORY_DIR, args.UNSTABLE_VERSION)

    try:
        result = run_action(web, backend, args.action, args.version)
    except GitError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.GIT_ERROR.value)

    output = render(result, args.JSON)
    if output:
        print(output)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(event="function_exit", component="cli", action=args.action,
                                outcome="empty" if result in (None, [], False) else "found")
        )
    sys.exit(exit_code_for(result))


if __name__ == "__main__":
    main()
