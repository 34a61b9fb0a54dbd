"""Tag parsing utilities for major line resolution."""

import re
from typing import Optional

from .models import ParsedVersion

CANONICAL_TAG = re.compile(r"^[1-9][0-9]*\.[0-9]+$")


def is_canonical(tag: str) -> bool:
    """Return True if ``tag`` is a plain ``<major>.<minor>`` numeric pair.

    The major part has no leading zero and is at least 1; suffixed variants
    such as ``16-alpine`` or ``16.2-bookworm`` are rejected.
    """
    return isinstance(tag, str) and CANONICAL_TAG.fullmatch(tag) is not None


def parse(tag: str, major: int) -> Optional[ParsedVersion]:
    """Parse ``tag`` as a release of the given major line.

    Returns None unless the tag is canonical and its major component equals
    ``major`` exactly (so ``160.2`` never matches major 16).
    """
    if not is_canonical(tag):
        return None
    major_part, minor_part = tag.split(".", 1)
    if major_part != str(major):
        return None
    return ParsedVersion(major=major, minor=int(minor_part, 10), raw=tag)
