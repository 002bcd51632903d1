"""
IAEA Decay Data Provider

Decay radiation records from the IAEA LiveChart of nuclides, either from a
local directory of pre-fetched CSV files or directly from the LiveChart API.

Offline layout:
    <data_dir>/<rad code>/<nuclide key>.csv    e.g. iaea/g/60co.csv

Live queries:
    <base_url>?fields=decay_rads&nuclides=60co&rad_types=g

Records for every excitation level of the nuclide are returned together.
See resolver.py for picking out a single isomer.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import httpx

from ..errors import ProviderError
from .nuclide import NuclideIdentity
from .records import DecayRecord, RadType

logger = logging.getLogger(__name__)

# LiveChart rejects requests without a user agent
USER_AGENT = "fisdef"

# Candidate column names for each record field, first match wins
_ENERGY_COLUMNS = ("energy", "mean_energy")
_HALF_LIFE_COLUMNS = ("half_life_sec", "p_half_life_sec")


# ==============================================================================
# CSV Parsing
# ==============================================================================

def _to_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value.strip())
    except ValueError:
        return None


def _first_float(row: Dict[str, str], columns: Tuple[str, ...]) -> Optional[float]:
    for column in columns:
        if column in row:
            value = _to_float(row[column])
            if value is not None:
                return value
    return None


def _nuclide_name(row: Dict[str, str], prefix: str) -> str:
    """Build "Co60" from the <prefix>_symbol, <prefix>_z and <prefix>_n columns."""
    symbol = (row.get(f"{prefix}_symbol") or "").strip()
    z = _to_float(row.get(f"{prefix}_z"))
    n = _to_float(row.get(f"{prefix}_n"))
    if z is None or n is None:
        return symbol
    return f"{symbol}{int(z + n)}"


def parse_livechart_csv(text: str) -> List[DecayRecord]:
    """
    Parse a LiveChart decay_rads CSV response.

    Blank or non-numeric values become None rather than failing the row.

    Args:
        text: CSV text with a header row

    Returns:
        Records in file order (empty if there are no data rows)
    """
    reader = csv.DictReader(io.StringIO(text.strip()))
    if reader.fieldnames is None or "intensity" not in reader.fieldnames:
        # Error responses are a bare code such as "0"
        return []

    records = []
    for row in reader:
        decay = (row.get("decay") or "").strip()
        records.append(DecayRecord(
            parent=_nuclide_name(row, "p"),
            daughter=_nuclide_name(row, "d"),
            parent_energy=_to_float(row.get("p_energy")),
            decay_mode=decay or None,
            branching=_to_float(row.get("decay_%")),
            energy=_first_float(row, _ENERGY_COLUMNS),
            intensity=_to_float(row.get("intensity")),
            half_life=_first_float(row, _HALF_LIFE_COLUMNS),
        ))
    return records


# ==============================================================================
# Provider
# ==============================================================================

class IaeaProvider:
    """
    Looks up decay records by nuclide and radiation type.

    Results are memoised for the lifetime of the provider, so a nuclide that
    appears in several intervals is only read or fetched once.
    """

    def __init__(
        self,
        data_dir: Path,
        base_url: str = "https://nds.iaea.org/relnsd/v1/data",
        timeout: float = 30.0,
        save_fetched: bool = True,
        client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            data_dir: Directory of pre-fetched CSV files
            base_url: LiveChart API endpoint
            timeout: Timeout for live requests (seconds)
            save_fetched: Write live responses into data_dir
            client: Optional HTTP client to use instead of a new one
        """
        self.data_dir = Path(data_dir)
        self.base_url = base_url
        self.timeout = timeout
        self.save_fetched = save_fetched
        self._client = client
        self._cache: Dict[Tuple[str, RadType, bool], Optional[List[DecayRecord]]] = {}

    def cache_path(self, identity: NuclideIdentity, rad_type: RadType) -> Path:
        return self.data_dir / rad_type.code / f"{identity.iaea_key()}.csv"

    def lookup(
        self,
        identity: NuclideIdentity,
        rad_type: RadType,
        live: bool = False,
    ) -> Optional[List[DecayRecord]]:
        """
        All decay records of a nuclide for one radiation type.

        The isomeric state of the identity is ignored.

        Returns:
            Records, or None if there is no data for the nuclide

        Raises:
            ProviderError: If a live query fails
        """
        key = (identity.iaea_key(), rad_type, live)
        if key not in self._cache:
            if live:
                records = self._fetch(identity, rad_type)
            else:
                records = self._load(identity, rad_type)
            self._cache[key] = records or None
        return self._cache[key]

    def _load(self, identity: NuclideIdentity, rad_type: RadType) -> Optional[List[DecayRecord]]:
        path = self.cache_path(identity, rad_type)
        if not path.exists():
            logger.debug(f"No offline {rad_type} data for {identity.name()} at {path}")
            return None
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ProviderError(f"Unable to read {path}: {e}")
        return self._parse(text, str(path))

    def _fetch(self, identity: NuclideIdentity, rad_type: RadType) -> Optional[List[DecayRecord]]:
        params = {
            "fields": "decay_rads",
            "nuclides": identity.iaea_key(),
            "rad_types": rad_type.code,
        }
        logger.debug(f"Fetching {rad_type} data for {identity.name()} from {self.base_url}")

        try:
            response = self._get(params)
            response.raise_for_status()
        except httpx.TimeoutException:
            raise ProviderError(f"IAEA request timed out for {identity.name()}")
        except httpx.HTTPError as e:
            raise ProviderError(f"IAEA request failed for {identity.name()}: {e}")

        records = self._parse(response.text, self.base_url)
        if records and self.save_fetched:
            self._save(identity, rad_type, response.text)
        return records

    @staticmethod
    def _parse(text: str, origin: str) -> List[DecayRecord]:
        try:
            return parse_livechart_csv(text)
        except csv.Error as e:
            raise ProviderError(f"Malformed decay data from {origin}: {e}")

    def _get(self, params: Dict[str, str]) -> httpx.Response:
        headers = {"User-Agent": USER_AGENT}
        if self._client is not None:
            return self._client.get(self.base_url, params=params, headers=headers)
        with httpx.Client(timeout=self.timeout) as client:
            return client.get(self.base_url, params=params, headers=headers)

    def _save(self, identity: NuclideIdentity, rad_type: RadType, text: str) -> None:
        path = self.cache_path(identity, rad_type)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            logger.warning(f"Failed to save {identity.name()} data to {path}: {e}")
