"""Pytest fixtures for workload advisor tests."""
import pytest

from sparkadvisor.catalog import get_patterns
from sparkadvisor.models import MemoryFootprint, WorkloadCharacteristics
from sparkadvisor.resilience import clear_cache


@pytest.fixture(autouse=True)
def reset_result_cache():
    """API tests must not see responses cached by an earlier test."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def patterns():
    return get_patterns()


@pytest.fixture
def make_characteristics():
    """Build a WorkloadCharacteristics with quiet defaults; override any field by keyword."""

    def _make(
        category="etl",
        data_size_bytes=0,
        peak_gb=0.0,
        cache_gb=None,
        spill_risk="low",
        **overrides,
    ):
        fields = {
            "category": category,
            "data_size_bytes": data_size_bytes,
            "compute_intensity": "low",
            "io_pattern": "sequential",
            "gpu_utilization": "none",
            "shuffle_intensity": "moderate",
            "confidence": 1.0,
            "memory_footprint": MemoryFootprint(
                estimated_peak_gb=peak_gb,
                cache_requirement_gb=cache_gb,
                spill_risk=spill_risk,
            ),
        }
        fields.update(overrides)
        return WorkloadCharacteristics(**fields)

    return _make
