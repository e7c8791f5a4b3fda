"""Load the workload pattern catalog from JSON. Declaration order is the tie-break priority."""
import json
import logging
from pathlib import Path
from typing import Any

from sparkadvisor.models import WorkloadPattern

_LOG = logging.getLogger(__name__)

_CATALOG_DIR = Path(__file__).resolve().parent
_PATTERNS_FILE = _CATALOG_DIR / "patterns.json"
_PATTERNS_CACHE: dict[str, tuple[WorkloadPattern, ...]] = {}


def load_patterns(path: Path | None = None) -> tuple[WorkloadPattern, ...]:
    """
    Parse a catalog file into an ordered tuple of frozen patterns.
    Raises on a missing file, malformed JSON or an invalid entry.
    """
    path = Path(path) if path is not None else _PATTERNS_FILE
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list) or not data:
        raise ValueError(f"Pattern catalog {path} must be a non-empty JSON list")
    patterns = tuple(WorkloadPattern.model_validate(entry) for entry in data)
    _LOG.info("Loaded %d workload patterns from %s", len(patterns), path.name)
    return patterns


def get_patterns() -> tuple[WorkloadPattern, ...]:
    """Return the process-wide catalog, loading it on first use."""
    key = str(_PATTERNS_FILE)
    if key not in _PATTERNS_CACHE:
        _PATTERNS_CACHE[key] = load_patterns(_PATTERNS_FILE)
    return _PATTERNS_CACHE[key]


def get_pattern_summaries() -> list[dict[str, Any]]:
    """Return list of { name, description, recommended_category, indicator_count } in catalog order."""
    return [
        {
            "name": p.name,
            "description": p.description,
            "recommended_category": p.recommended_category,
            "indicator_count": len(p.indicators),
        }
        for p in get_patterns()
    ]
