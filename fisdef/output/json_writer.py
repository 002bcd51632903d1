"""JSON output of decay sources."""

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

from ..source import Source
from .files import create_file_with_fallback


def source_to_dict(source: Source) -> Dict[str, Any]:
    """Convert a source to a JSON-ready dictionary."""
    return {
        'name_fispact': source.inventory_name,
        'name_iaea': source.identity.name_with_state(),
        'activity': source.activity,
        'energy': [r.energy for r in source.records],
        'intensity': [r.intensity for r in source.records],
    }


def render_json(sources: Sequence[Source]) -> str:
    """List of every source with activity and energy/intensity data."""
    data: List[Dict[str, Any]] = [source_to_dict(s) for s in sources]
    return json.dumps(data, indent=2)


def write_json(sources: Sequence[Source], path: Path, index: int) -> None:
    """Write the sources to <path>.json."""
    with create_file_with_fallback(path, "json", f"step_{index}.json") as f:
        f.write(render_json(sources))
