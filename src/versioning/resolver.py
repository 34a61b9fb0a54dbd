"""Select the newest minor version per major line from a tag catalog."""

import logging
from typing import Iterable, List, Sequence

from constants import Constants
from .models import ResolvedVersion, VersionMatrix
from .parser import parse

logger = logging.getLogger(__name__)


def resolve_major(all_tags: Iterable[str], major: int) -> ResolvedVersion:
    """Pick the highest minor release of ``major`` among ``all_tags``.

    Minors compare numerically, so ``16.10`` beats ``16.2``. Duplicate tags
    yield the same winner.
    """
    candidates = [v for v in (parse(tag, major) for tag in all_tags) if v is not None]
    if not candidates:
        return ResolvedVersion(major=major, version=None, candidate_count=0)
    best = sorted(candidates, key=lambda v: v.minor, reverse=True)[0]
    return ResolvedVersion(major=major, version=best, candidate_count=len(candidates))


def resolve(all_tags: Sequence[str], majors: Sequence[int]) -> VersionMatrix:
    """Build the version matrix for ``majors`` in the given order.

    Major lines with no matching tag are skipped. The ``latest`` sentinel is
    always appended last.

    Args:
        all_tags: Complete tag set from the catalog.
        majors: Ordered major lines to resolve.

    Returns:
        List of resolved version strings followed by "latest".
    """
    matrix: List[str] = []
    for major in majors:
        result = resolve_major(all_tags, major)
        if result.found:
            matrix.append(result.version.raw)
            logger.info(
                "Found latest minor for major %s: %s (%d candidates)",
                major, result.version.raw, result.candidate_count,
            )
        else:
            logger.warning("Could not find any minor version for major %s.", major)

    matrix.append(Constants.LATEST_TAG)
    return matrix
