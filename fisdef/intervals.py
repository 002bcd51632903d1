"""
Interval Selection

Turns the user's choice of FISPACT-II time steps into an explicit list of
interval indices.

Accepted forms:
    Single number       : e.g. 1
    Multiple numbers    : e.g. "1 5 12" (quoted)
    Range (inclusive)   : e.g. 1-3
    All steps           : 'all' or blank
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from .errors import MalformedSpec, OutOfRange

logger = logging.getLogger(__name__)


class SpecKind(Enum):
    SINGLE = "single"
    LIST = "list"
    RANGE = "range"
    ALL = "all"


@dataclass(frozen=True)
class IndexSpec:
    """A user request for one or more interval indices."""
    kind: SpecKind
    values: Tuple[int, ...] = ()

    @classmethod
    def single(cls, index: int) -> "IndexSpec":
        return cls(SpecKind.SINGLE, (index,))

    @classmethod
    def of(cls, indices) -> "IndexSpec":
        return cls(SpecKind.LIST, tuple(indices))

    @classmethod
    def range(cls, start: int, end: int) -> "IndexSpec":
        if start > end:
            raise MalformedSpec(f"Invalid range format: '{start}-{end}'")
        return cls(SpecKind.RANGE, (start, end))

    @classmethod
    def all(cls) -> "IndexSpec":
        return cls(SpecKind.ALL)

    def expand(self, n: int) -> List[int]:
        """Concrete indices before any validation."""
        if self.kind == SpecKind.RANGE:
            start, end = self.values
            return list(range(start, end + 1))
        if self.kind == SpecKind.ALL:
            return list(range(n))
        return list(self.values)

    def __str__(self) -> str:
        if self.kind == SpecKind.RANGE:
            return f"{self.values[0]}-{self.values[1]}"
        if self.kind == SpecKind.ALL:
            return "All"
        return " ".join(str(v) for v in self.values)


def _parse_index(text: str) -> int:
    text = text.strip()
    if not text.isdigit():
        raise ValueError(text)
    return int(text)


def parse_index_spec(text: str) -> IndexSpec:
    """
    Parse the user index syntax.

    Raises:
        MalformedSpec: If the text matches none of the accepted forms
    """
    if text is None or text.strip().lower() in ("", "all"):
        return IndexSpec.all()

    if "-" in text:
        start, _, end = text.partition("-")
        try:
            return IndexSpec.range(_parse_index(start), _parse_index(end))
        except ValueError:
            raise MalformedSpec(f"Invalid range format: '{text}'")

    try:
        values = [_parse_index(v) for v in text.split()]
    except ValueError:
        raise MalformedSpec(f"'{text}' is not integers ('0 1 2'), range (0-2), or 'all'")

    if len(values) == 1:
        return IndexSpec.single(values[0])
    return IndexSpec.of(values)


def select_intervals(spec: IndexSpec, n: int) -> List[int]:
    """
    Valid interval indices for an inventory of n intervals.

    Returns:
        Sorted, distinct indices, all less than n

    Raises:
        OutOfRange: If none of the requested indices exist
    """
    logger.debug(f"{n} intervals found in file")

    indices = sorted(set(spec.expand(n)))
    indices = [i for i in indices if i < n]

    if not indices:
        if n == 0:
            raise OutOfRange(f"\"{spec}\" not valid, the inventory has no intervals")
        raise OutOfRange(f"\"{spec}\" not valid for expected 0-{n - 1} range")

    logger.debug(f"Valid intervals: {indices}")
    return indices
