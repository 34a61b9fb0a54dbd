"""Data models for tag parsing and matrix resolution."""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class ParsedVersion:
    """A catalog tag of the canonical ``<major>.<minor>`` form."""
    major: int
    minor: int
    raw: str


@dataclass(frozen=True)
class ResolvedVersion:
    """Resolution outcome for one major line."""
    major: int
    version: Optional[ParsedVersion]
    candidate_count: int

    @property
    def found(self) -> bool:
        """True when at least one tag matched the major line."""
        return self.version is not None


# Ordered resolved version strings, always terminated by the "latest" sentinel.
VersionMatrix = List[str]
