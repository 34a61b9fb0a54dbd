"""Write the resolved version matrix to the CI step output file."""
from __future__ import annotations

import json
import logging
from typing import Optional, Sequence

from constants import Constants

logger = logging.getLogger(__name__)


def format_output_line(matrix: Sequence[str], key: str = Constants.OUTPUT_KEY) -> str:
    """Return ``<key>=<json-array>`` followed by a newline, on a single line."""
    payload = json.dumps(list(matrix), separators=(",", ":"), ensure_ascii=False)
    return f"{key}={payload}\n"


def emit(matrix: Sequence[str], destination: Optional[str]) -> bool:
    """Append the matrix line to ``destination``.

    Args:
        matrix: Ordered version strings ending in "latest".
        destination: Output file path (normally $GITHUB_OUTPUT).

    Returns:
        bool: True when the line was written.
    """
    if not destination:
        logger.error(
            "%s environment variable not set. Skipping output.", Constants.ENV_GITHUB_OUTPUT
        )
        return False

    line = format_output_line(matrix)
    try:
        with open(destination, "a", encoding="utf-8") as fh:
            fh.write(line)
    except OSError as e:
        logger.error("Output file couldn't be written: %s", e)
        return False
    logger.info("Wrote %s to %s", line.strip(), destination)
    return True
