"""Tuning hints derived from workload characteristics (advisory)."""
from sparkadvisor.models import WorkloadCharacteristics


def generate_optimization_hints(characteristics: WorkloadCharacteristics) -> list[str]:
    """
    Order is fixed: shuffle, memory, GPU, I/O, compute, streaming, cache.
    Each group is gated independently, so the list may be empty.
    """
    hints = []
    memory = characteristics.memory_footprint
    if characteristics.shuffle_intensity in ("heavy", "extreme"):
        hints.append(
            "High shuffle detected. Consider increasing shuffle partitions and enabling adaptive execution."
        )
        hints.append("Use disk-based shuffle for large datasets to prevent OOM errors.")
    if memory.spill_risk == "high":
        hints.append(
            f"High memory pressure detected. Estimated peak: {memory.estimated_peak_gb:.1f}GB."
        )
        hints.append("Consider increasing executor memory or reducing partition sizes.")
    if characteristics.gpu_utilization in ("high", "medium"):
        hints.append("Workload can benefit from GPU acceleration. Consider using RAPIDS Spark.")
    if characteristics.io_pattern == "random":
        hints.append(
            "Random I/O pattern detected. Ensure data is partitioned appropriately for optimal access."
        )
    if characteristics.compute_intensity == "very-high":
        hints.append(
            "Very high compute intensity. Maximize CPU cores per executor for better parallelism."
        )
    if characteristics.category == "streaming":
        hints.append("For streaming workloads, tune trigger interval and checkpoint frequency.")
    if memory.cache_requirement_gb is not None:
        hints.append(
            "Consider caching intermediate results. "
            f"Estimated cache requirement: {memory.cache_requirement_gb:.1f}GB."
        )
    return hints
