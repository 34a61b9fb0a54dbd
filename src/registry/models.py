"""Result and pagination state types for catalog retrieval."""

from dataclasses import dataclass, field
from typing import List, Union


@dataclass(frozen=True)
class Ok:
    """Catalog fetched completely."""
    tags: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Err:
    """Catalog could not be fetched; ``reason`` is a human-readable cause."""
    reason: str


FetchResult = Union[Ok, Err]


@dataclass(frozen=True)
class Fetching:
    """Next page to request, plus the names accumulated so far."""
    url: str
    tags: List[str] = field(default_factory=list)
    pages: int = 0


@dataclass(frozen=True)
class Done:
    """Terminal: no further page."""
    tags: List[str]
    pages: int


@dataclass(frozen=True)
class Failed:
    """Terminal: a page request or its body was unusable."""
    reason: str


PageState = Union[Fetching, Done, Failed]
