"""Characteristic inference: compute, I/O, GPU, shuffle and memory profile (pure functions, no I/O)."""
from typing import Optional, Sequence, TypeVar

from sparkadvisor.models import (
    ComputeIntensity,
    GPUUtilization,
    HistoricalWorkloadMetrics,
    IOPattern,
    MemoryFootprint,
    ShuffleIntensity,
    SpillRisk,
    WorkloadCategory,
)
from sparkadvisor.sizes import to_gb

T = TypeVar("T")

COMPUTE_HEAVY_OPS = ("train", "fit", "aggregate", "join", "cartesian", "groupby", "reduce", "fold")
RANDOM_ACCESS_OPS = ("join", "lookup", "sample", "random")
SHUFFLE_OPS = ("join", "groupby", "aggregate", "distinct", "repartition", "coalesce")
GPU_KEYWORDS = ("gpu", "cuda", "rapids", "tensor", "deep learning", "neural network")

# Total historical shuffle (read + write, MB) lower bounds, checked highest first.
SHUFFLE_MB_THRESHOLDS: tuple[tuple[float, ShuffleIntensity], ...] = (
    (10_000, "extreme"),
    (5_000, "heavy"),
    (1_000, "moderate"),
    (100, "light"),
)

CACHE_FRACTION = 0.5


def resolve(override: Optional[T], derived: Optional[T], fallback: T) -> T:
    """First non-None of explicit override, derived value, fallback default."""
    if override is not None:
        return override
    if derived is not None:
        return derived
    return fallback


def count_matching(operations: Optional[Sequence[str]], vocabulary: Sequence[str]) -> int:
    """Number of operations whose lowercased name contains any vocabulary term."""
    if not operations:
        return 0
    return sum(1 for op in operations if any(term in op.lower() for term in vocabulary))


def determine_compute_intensity(
    category: WorkloadCategory,
    operations: Optional[Sequence[str]] = None,
    default: Optional[ComputeIntensity] = None,
) -> ComputeIntensity:
    """
    Template default applies only when no operation list was given.
    ml-training and graph are very-high regardless of operations.
    """
    override = default if operations is None else None
    heavy = count_matching(operations, COMPUTE_HEAVY_OPS)
    if category in ("ml-training", "graph"):
        derived: ComputeIntensity = "very-high"
    elif heavy > 3 or category == "analytics":
        derived = "high"
    elif heavy > 1:
        derived = "medium"
    else:
        derived = "low"
    return resolve(override, derived, "low")


def determine_io_pattern(
    category: WorkloadCategory,
    operations: Optional[Sequence[str]] = None,
    default: Optional[IOPattern] = None,
) -> IOPattern:
    override = default if operations is None else None
    if category == "streaming":
        derived: IOPattern = "streaming"
    elif count_matching(operations, RANDOM_ACCESS_OPS) > 0 or category in ("analytics", "graph"):
        derived = "random"
    else:
        derived = "sequential"
    return resolve(override, derived, "sequential")


def determine_gpu_utilization(
    category: WorkloadCategory,
    analysis_text: str = "",
    default: Optional[GPUUtilization] = None,
) -> GPUUtilization:
    """GPU keywords anywhere in the text win; otherwise category, then template default."""
    derived: Optional[GPUUtilization] = None
    if category == "ml-training" or any(k in analysis_text for k in GPU_KEYWORDS):
        derived = "high"
    elif category in ("ml-inference", "graph"):
        derived = "medium"
    elif category == "analytics":
        derived = "low"
    return resolve(None, derived, default or "none")


def shuffle_from_history(metrics: Optional[HistoricalWorkloadMetrics]) -> Optional[ShuffleIntensity]:
    """Bucket measured shuffle volume; None when read or write is unknown."""
    if metrics is None or metrics.shuffle_read_mb is None or metrics.shuffle_write_mb is None:
        return None
    total_mb = metrics.shuffle_read_mb + metrics.shuffle_write_mb
    for threshold, intensity in SHUFFLE_MB_THRESHOLDS:
        if total_mb > threshold:
            return intensity
    return "none"


def determine_shuffle_intensity(
    category: WorkloadCategory,
    historical_metrics: Optional[HistoricalWorkloadMetrics] = None,
    operations: Optional[Sequence[str]] = None,
    default: Optional[ShuffleIntensity] = None,
) -> ShuffleIntensity:
    """Measured history beats every heuristic, including the graph category."""
    shuffle_ops = count_matching(operations, SHUFFLE_OPS)
    derived: Optional[ShuffleIntensity] = None
    if category == "graph":
        derived = "extreme"
    elif shuffle_ops > 5 or category == "analytics":
        derived = "heavy"
    elif shuffle_ops > 2:
        derived = "moderate"
    elif shuffle_ops > 0:
        derived = "light"
    return resolve(shuffle_from_history(historical_metrics), derived, default or "none")


def memory_multiplier(category: WorkloadCategory, compute_intensity: ComputeIntensity) -> float:
    if category == "ml-training":
        return 4.0
    if compute_intensity == "very-high":
        return 3.5
    if compute_intensity == "high":
        return 3.0
    if category == "analytics":
        return 2.5
    return 2.0


def estimate_memory_footprint(
    data_size_bytes: int | float,
    category: WorkloadCategory,
    compute_intensity: ComputeIntensity,
) -> MemoryFootprint:
    """
    peak = data_gb * multiplier (4.0 ml-training, 3.5 very-high, 3.0 high, 2.5 analytics, else 2.0).
    Only analytics carries a cache requirement (half the input).
    """
    data_gb = to_gb(data_size_bytes)
    if compute_intensity == "very-high" or category == "ml-training":
        spill_risk: SpillRisk = "high"
    elif compute_intensity == "high":
        spill_risk = "medium"
    else:
        spill_risk = "low"
    return MemoryFootprint(
        estimated_peak_gb=data_gb * memory_multiplier(category, compute_intensity),
        cache_requirement_gb=data_gb * CACHE_FRACTION if category == "analytics" else None,
        spill_risk=spill_risk,
    )
