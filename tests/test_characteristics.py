"""Tests for characteristic inference."""
import pytest

from sparkadvisor.characteristics import (
    count_matching,
    determine_compute_intensity,
    determine_gpu_utilization,
    determine_io_pattern,
    determine_shuffle_intensity,
    estimate_memory_footprint,
    resolve,
)
from sparkadvisor.models import HistoricalWorkloadMetrics

GB = 1024 ** 3


def test_resolve_precedence():
    assert resolve("override", "derived", "fallback") == "override"
    assert resolve(None, "derived", "fallback") == "derived"
    assert resolve(None, None, "fallback") == "fallback"


def test_count_matching_is_case_insensitive():
    assert count_matching(["JOIN a", "GroupBy b", "filter"], ("join", "groupby")) == 2
    assert count_matching(None, ("join",)) == 0


def test_compute_template_wins_without_operations():
    assert determine_compute_intensity("etl", None, "medium") == "medium"
    assert determine_compute_intensity("ml-training", None, "low") == "low"


def test_compute_empty_operation_list_disables_template():
    assert determine_compute_intensity("etl", [], "high") == "low"


def test_compute_category_overrides_operations():
    assert determine_compute_intensity("ml-training", ["filter"]) == "very-high"
    assert determine_compute_intensity("graph", []) == "very-high"
    assert determine_compute_intensity("analytics", []) == "high"


def test_compute_heavy_operation_counts():
    assert determine_compute_intensity("etl", ["join a", "fit b"]) == "medium"
    assert determine_compute_intensity("etl", ["join a", "fit b", "reduce", "fold"]) == "high"
    assert determine_compute_intensity("etl", ["join a"]) == "low"


def test_io_pattern():
    assert determine_io_pattern("analytics", None, "sequential") == "sequential"  # template
    assert determine_io_pattern("streaming", ["join"]) == "streaming"
    assert determine_io_pattern("etl", ["lookup dimension"]) == "random"
    assert determine_io_pattern("graph", []) == "random"
    assert determine_io_pattern("etl", ["filter", "map"]) == "sequential"


def test_gpu_utilization():
    assert determine_gpu_utilization("etl", "kernels written in cuda", "none") == "high"
    assert determine_gpu_utilization("ml-training", "") == "high"
    assert determine_gpu_utilization("ml-inference", "") == "medium"
    assert determine_gpu_utilization("graph", "") == "medium"
    assert determine_gpu_utilization("analytics", "", "high") == "low"
    assert determine_gpu_utilization("streaming", "", None) == "none"
    assert determine_gpu_utilization("mixed", "", "high") == "high"


@pytest.mark.parametrize(
    "read_mb, write_mb, expected",
    [
        (6000, 5000, "extreme"),
        (3000, 2500, "heavy"),
        (600, 500, "moderate"),
        (60, 50, "light"),
        (50, 50, "none"),  # 100 is not above the light threshold
        (0, 0, "none"),
    ],
)
def test_shuffle_from_history(read_mb, write_mb, expected):
    history = HistoricalWorkloadMetrics(shuffle_read_mb=read_mb, shuffle_write_mb=write_mb)
    assert determine_shuffle_intensity("graph", history, ["join"] * 10, "extreme") == expected


def test_shuffle_history_needs_read_and_write():
    history = HistoricalWorkloadMetrics(shuffle_read_mb=20000)
    assert determine_shuffle_intensity("etl", history, None, "moderate") == "moderate"


def test_shuffle_operations():
    assert determine_shuffle_intensity("graph", None, []) == "extreme"
    assert determine_shuffle_intensity("analytics", None, []) == "heavy"
    assert determine_shuffle_intensity("etl", None, ["join"] * 6) == "heavy"
    assert determine_shuffle_intensity("etl", None, ["distinct", "repartition", "coalesce"]) == "moderate"
    assert determine_shuffle_intensity("etl", None, ["distinct"]) == "light"
    assert determine_shuffle_intensity("etl", None, [], "moderate") == "moderate"
    assert determine_shuffle_intensity("etl", None, []) == "none"


def test_memory_ml_training():
    m = estimate_memory_footprint(10 * GB, "ml-training", "low")
    assert m.estimated_peak_gb == pytest.approx(40.0)
    assert m.spill_risk == "high"
    assert m.cache_requirement_gb is None


def test_memory_multiplier_precedence():
    """Compute intensity is checked before the analytics multiplier."""
    assert estimate_memory_footprint(10 * GB, "graph", "very-high").estimated_peak_gb == pytest.approx(35.0)
    assert estimate_memory_footprint(10 * GB, "analytics", "high").estimated_peak_gb == pytest.approx(30.0)
    assert estimate_memory_footprint(10 * GB, "analytics", "medium").estimated_peak_gb == pytest.approx(25.0)
    assert estimate_memory_footprint(10 * GB, "etl", "low").estimated_peak_gb == pytest.approx(20.0)


def test_memory_cache_and_spill():
    m = estimate_memory_footprint(10 * GB, "analytics", "high")
    assert m.cache_requirement_gb == pytest.approx(5.0)
    assert m.spill_risk == "medium"
    assert estimate_memory_footprint(10 * GB, "etl", "medium").spill_risk == "low"
    assert estimate_memory_footprint(0, "analytics", "high").cache_requirement_gb == 0
