"""Range check for a user-selected version against the supported major lines."""

import re
from typing import Optional, Sequence

from constants import Constants

_LEADING_MAJOR = re.compile(r"^([1-9][0-9]*)(?:\.[0-9]+)?$")


def major_of(version: str) -> Optional[int]:
    """Return the major component of ``16`` or ``16.2`` style strings, else None."""
    match = _LEADING_MAJOR.fullmatch(version.strip()) if isinstance(version, str) else None
    if not match:
        return None
    return int(match.group(1))


def is_supported(version: str, majors: Sequence[int]) -> bool:
    """Check that ``version`` is ``latest`` or within ``[min(majors), max(majors)]``."""
    if isinstance(version, str) and version.strip() == Constants.LATEST_TAG:
        return True
    major = major_of(version)
    if major is None or not majors:
        return False
    return min(majors) <= major <= max(majors)
