"""tagmatrix - resolve the newest minor image tag per major line for a CI matrix.

    Returns:
        int: Exit code
"""
import logging
import sys

from args import parse_args
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from config import ConfigError, MatrixConfig
from constants import ExitCodes
from output.github_output import emit
from registry.dockerhub import fetch_catalog
from registry.models import Err
from versioning.bounds import is_supported
from versioning.resolver import resolve

logger = logging.getLogger(__name__)


def setup_logging(args):
    """Configure logging from --loglevel and --logfile."""
    configure_logging(getattr(args, "LOG_LEVEL", None))

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        ))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def run_resolve(config: MatrixConfig) -> ExitCodes:
    """Fetch, resolve and emit the version matrix.

    Args:
        config (MatrixConfig): Validated run configuration.

    Returns:
        ExitCodes: Outcome of the run; nothing is written unless SUCCESS.
    """
    logger.info(
        "Generating matrix for major versions: %s",
        ", ".join(str(m) for m in config.major_lines),
    )

    result = fetch_catalog(config)
    if isinstance(result, Err):
        logger.error("Could not reach the tag catalog. Aborting.")
        return ExitCodes.CONNECTION_ERROR
    if not result.tags:
        logger.error("Could not fetch any tags. Aborting.")
        return ExitCodes.EMPTY_CATALOG

    matrix = resolve(result.tags, config.major_lines)
    logger.info("Final version matrix: [%s]", ", ".join(matrix))

    if not emit(matrix, config.destination_path):
        return ExitCodes.FILE_ERROR
    return ExitCodes.SUCCESS


def run_check(version: str, config: MatrixConfig) -> ExitCodes:
    """Validate a user-chosen version against the configured major lines."""
    if is_supported(version, config.major_lines):
        logger.info("Version %s is supported.", version)
        return ExitCodes.SUCCESS
    logger.error(
        "Unsupported version: %s (supported majors %d-%d or latest)",
        version, min(config.major_lines), max(config.major_lines),
    )
    return ExitCodes.UNSUPPORTED_VERSION


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    setup_logging(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    try:
        config = MatrixConfig.from_args(args)
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)

    if args.action == "check":
        code = run_check(args.VERSION, config)
    else:
        code = run_resolve(config)
    sys.exit(code.value)


if __name__ == "__main__":
    main()
