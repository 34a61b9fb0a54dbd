"""Argument parsing functionality for tagmatrix."""

import argparse
import sys

ACTIONS = ("resolve", "check")


def _add_common(parser):
    parser.add_argument("-m", "--major",
                        dest="MAJORS",
                        help="Major line to resolve; repeat for several (default: built-in list)",
                        action="append",
                        type=int)
    parser.add_argument("-c", "--config",
                        dest="CONFIG_FILE",
                        help="Path to YAML configuration file",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)


def parse_args(argv=None):
    """Parses the arguments passed to the program.

    When no action is named, ``resolve`` is assumed.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] not in ACTIONS + ("-h", "--help"):
        argv.insert(0, "resolve")

    parser = argparse.ArgumentParser(
        prog="tagmatrix",
        description=(
            "tagmatrix - Resolve the newest minor image tag per major line for a CI matrix"
        ),
        add_help=True,
    )
    sub = parser.add_subparsers(dest="action", required=True)

    resolve = sub.add_parser("resolve",
                             help="Fetch the tag catalog and write the version matrix")
    _add_common(resolve)
    resolve.add_argument("-o", "--output",
                         dest="OUTPUT",
                         help="File to append the versions= line to (default: $GITHUB_OUTPUT)",
                         action="store",
                         type=str)
    resolve.add_argument("--catalog-url",
                         dest="CATALOG_URL",
                         help="Tag catalog endpoint",
                         action="store",
                         type=str)
    resolve.add_argument("--page-size",
                         dest="PAGE_SIZE",
                         help="Requested catalog page size",
                         action="store",
                         type=int)
    resolve.add_argument("--timeout",
                         dest="TIMEOUT",
                         help="Per-request timeout in seconds",
                         action="store",
                         type=float)
    resolve.add_argument("--retries",
                         dest="RETRIES",
                         help="Attempts per catalog page (1 disables retrying)",
                         action="store",
                         type=int)
    resolve.add_argument("--retry-delay",
                         dest="RETRY_DELAY",
                         help="Base backoff delay in seconds between attempts",
                         action="store",
                         type=float)

    check = sub.add_parser("check",
                           help="Validate a chosen version against the supported major lines")
    _add_common(check)
    check.add_argument("VERSION",
                       help="Version to validate, e.g. 16, 16.2 or latest",
                       type=str)

    return parser.parse_args(argv)
