"""
Error types raised across the package.

Fatal errors (MalformedSpec, OutOfRange, InventoryError) stop the run.
The rest are recovered close to where they are raised.
"""


class FisdefError(Exception):
    """Base class for all fisdef errors."""


class MalformedSpec(FisdefError, ValueError):
    """User index syntax could not be parsed."""


class OutOfRange(FisdefError):
    """No requested interval index falls inside the inventory."""


class UnresolvableNuclide(FisdefError, ValueError):
    """An inventory name does not map to a known nuclide."""


class NoDecayData(FisdefError):
    """Nothing in an interval has usable decay data."""


class FileCreateFailure(FisdefError, OSError):
    """Neither the requested output path nor its fallback could be created."""


class ProviderError(FisdefError):
    """The decay data provider failed to answer a lookup."""


class InventoryError(FisdefError):
    """The inventory file is missing or unreadable."""
