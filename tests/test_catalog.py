"""Tests for the workload pattern catalog."""
import json

import pytest
from pydantic import ValidationError

from sparkadvisor.catalog import get_pattern_summaries, get_patterns, load_patterns


def test_catalog_order(patterns):
    """ML patterns come before generic analytics; order is the tie-break priority."""
    assert [p.name for p in patterns] == [
        "ML Training",
        "ML Inference",
        "ETL Pipeline",
        "Analytics Query",
        "Streaming Processing",
        "Graph Processing",
    ]
    assert [p.recommended_category for p in patterns] == [
        "ml-training", "ml-inference", "etl", "analytics", "streaming", "graph",
    ]


def test_indicators_lowercase_and_non_empty(patterns):
    for p in patterns:
        assert len(p.indicators) > 0
        assert all(i == i.lower() for i in p.indicators)


def test_template_matches_category(patterns):
    for p in patterns:
        assert p.typical_characteristics.category == p.recommended_category


def test_catalog_loaded_once():
    assert get_patterns() is get_patterns()


def test_patterns_are_frozen(patterns):
    with pytest.raises(ValidationError):
        patterns[0].name = "Renamed"


def test_load_patterns_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_patterns(tmp_path / "missing.json")


def test_load_patterns_empty_list(tmp_path):
    path = tmp_path / "patterns.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_patterns(path)


def test_load_patterns_rejects_empty_indicators(tmp_path):
    path = tmp_path / "patterns.json"
    path.write_text(json.dumps([{
        "name": "Nothing",
        "description": "no indicators",
        "indicators": [],
        "recommended_category": "etl",
    }]), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_patterns(path)


def test_pattern_summaries():
    summaries = get_pattern_summaries()
    assert len(summaries) == 6
    assert summaries[0]["name"] == "ML Training"
    assert summaries[0]["indicator_count"] == 11
