"""Argument parsing functionality for webversions."""

import argparse
from constants import Constants

def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="webversions",
        description=(
            "webversions - Website versions derived from Git branches and tags"
        ),
        add_help=True,
    )

    parser.add_argument("action",
                        help="Query to run",
                        action="store", type=str,
                        choices=Constants.ACTIONS)
    parser.add_argument("version",
                        help="Version argument for last-patch-of and has-minor",
                        nargs="?",
                        type=str)

    parser.add_argument("-C", "--repository",
                        dest="REPOSITORY_DIR",
                        help="Path to the Git repository (default: current directory)",
                        action="store", type=str,
                        default=".")
    parser.add_argument("-u", "--unstable-version",
                        dest="UNSTABLE_VERSION",
                        help="Name of the unstable version (default: main, or configured value)",
                        action="store", type=str)
    parser.add_argument("--config",
                        dest="CONFIG",
                        help="Path to a YAML config file",
                        action="store", type=str)
    parser.add_argument("--git",
                        dest="GIT_BINARY",
                        help="git executable to use",
                        action="store", type=str)
    parser.add_argument("--no-local",
                        dest="NO_LOCAL",
                        help="Ignore local branches when listing minor versions.",
                        action="store_true")
    parser.add_argument("--no-remote",
                        dest="NO_REMOTE",
                        help="Ignore remote branches when listing minor versions.",
                        action="store_true")
    parser.add_argument("--json",
                        dest="JSON",
                        help="Print the result as JSON.",
                        action="store_true")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    args = parser.parse_args(argv)
    if args.action in Constants.ACTIONS_WITH_VERSION and not args.version:
        parser.error(f"{args.action} requires a version argument")
    return args
