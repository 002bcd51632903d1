"""
Run Configuration Module

Environment settings for the IAEA decay data provider and the options
collected for a single run.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Set

from .intervals import IndexSpec
from .nuclear.records import RadType
from .source import SortProperty


# ==============================================================================
# Environment
# ==============================================================================

# Offline decay data, laid out as <dir>/<rad code>/<nuclide key>.csv
DATA_DIR = Path(
    os.getenv("FISDEF_DATA_DIR", str(Path.home() / ".fisdef" / "iaea"))
).expanduser()

# IAEA LiveChart API endpoint used by --fetch
IAEA_URL = os.getenv("FISDEF_IAEA_URL", "https://nds.iaea.org/relnsd/v1/data")

# Timeout for live IAEA requests (seconds)
IAEA_TIMEOUT = float(os.getenv("FISDEF_IAEA_TIMEOUT", "30"))

# Keep a copy of live responses in DATA_DIR
SAVE_FETCHED = os.getenv("FISDEF_SAVE_FETCHED", "1").lower() in {"1", "true", "yes", "on"}

# Default first MCNP distribution number
DEFAULT_START_ID = 100


class OutputFormat(Enum):
    """Output files that can be requested for each interval."""
    JSON = "json"
    TEXT = "text"
    MCNP = "mcnp"


@dataclass
class RunConfig:
    """Options for one run over an inventory."""

    path: Path
    index: IndexSpec = field(default_factory=IndexSpec.all)
    rad: RadType = RadType.GAMMA
    sort: SortProperty = SortProperty.ENERGY
    # Query IAEA directly instead of the offline data
    fetch: bool = False
    # Prefix for output files, <output>_<index>.<ext>
    output: str = "step"
    formats: Set[OutputFormat] = field(default_factory=set)
    start_id: int = DEFAULT_START_ID
    verbose: int = 0
    quiet: bool = False

    def wants(self, fmt: OutputFormat) -> bool:
        """Whether the given output format was requested."""
        return fmt in self.formats
