"""Workload pattern catalog. Entries live in patterns.json, in priority order."""
from sparkadvisor.catalog.loader import (
    load_patterns,
    get_patterns,
    get_pattern_summaries,
)

__all__ = ["load_patterns", "get_patterns", "get_pattern_summaries"]
