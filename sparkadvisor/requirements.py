"""Requirement estimates from category and size alone (no text classification)."""
import logging

from sparkadvisor.models import (
    GPUPrediction,
    GPUPredictionRequest,
    MemoryFootprint,
    RequirementsEstimate,
    RequirementsRequest,
    WorkloadCategory,
    WorkloadCharacteristics,
)
from sparkadvisor.recommend import recommend_resources
from sparkadvisor.sizes import resolve_size, to_gb

_LOG = logging.getLogger(__name__)

# 100 MB/s per core; GPU acceleration triples it
THROUGHPUT_GB_PER_SEC_PER_CORE = 0.1
GPU_THROUGHPUT_FACTOR = 3
MIN_DURATION_MINUTES = 1.0

# category -> (utilization, percentage, recommendation)
_GPU_PROFILES: dict[str, tuple[str, int, str]] = {
    "ml-training": (
        "high", 85,
        "GPU highly recommended for ML training. Use RAPIDS for data preprocessing.",
    ),
    "ml-inference": (
        "medium", 60,
        "GPU beneficial for inference, especially for large batch sizes.",
    ),
    "analytics": (
        "low", 30,
        "GPU can accelerate SQL operations with RAPIDS. Test cost vs. benefit.",
    ),
    "etl": (
        "none", 10,
        "GPU not typically beneficial for ETL. Consider for specific transformations.",
    ),
}
_GPU_DEFAULT_PROFILE = ("none", 0, "GPU not recommended for this workload type.")


def synthetic_characteristics(category: WorkloadCategory, data_size_bytes: int) -> WorkloadCharacteristics:
    """Fixed baseline profile; only ml-training, etl and analytics adjust GPU/compute."""
    c = WorkloadCharacteristics(
        category=category,
        data_size_bytes=data_size_bytes,
        compute_intensity="medium",
        io_pattern="sequential",
        gpu_utilization="none",
        memory_footprint=MemoryFootprint(estimated_peak_gb=to_gb(data_size_bytes) * 2, spill_risk="low"),
        shuffle_intensity="moderate",
        confidence=1.0,
    )
    if category == "ml-training":
        c.gpu_utilization = "high"
        c.compute_intensity = "very-high"
    elif category == "etl":
        c.gpu_utilization = "none"
    elif category == "analytics":
        c.gpu_utilization = "low"
    return c


def analyze_workload_requirements(request: RequirementsRequest) -> RequirementsEstimate:
    """
    cores = executors * cores_per_executor; memory = executors * memory_per_executor.
    duration_min = data_gb / (0.1 GB/s * cores [* 3 with GPU]) / 60, at least 1 minute.
    Raises InvalidSizeError for a malformed data_size.
    """
    data_size = resolve_size(request.data_size)
    data_gb = to_gb(data_size)
    resources = recommend_resources(synthetic_characteristics(request.category, data_size))

    recommend_gpu = (resources.gpu_count or 0) > 0
    estimated_cores = resources.executor_count * resources.executor_cores
    estimated_memory_gb = resources.executor_count * resources.executor_memory_gb

    throughput = THROUGHPUT_GB_PER_SEC_PER_CORE
    if recommend_gpu:
        throughput *= GPU_THROUGHPUT_FACTOR
    duration_minutes = data_gb / (throughput * estimated_cores) / 60
    _LOG.debug(
        "requirements category=%s data_gb=%.2f cores=%d gpu=%s",
        request.category, data_gb, estimated_cores, recommend_gpu,
    )
    return RequirementsEstimate(
        estimated_cores=estimated_cores,
        estimated_memory_gb=estimated_memory_gb,
        estimated_executors=resources.executor_count,
        recommend_gpu=recommend_gpu,
        estimated_duration_minutes=max(MIN_DURATION_MINUTES, duration_minutes),
    )


def predict_gpu_utilization(request: GPUPredictionRequest) -> GPUPrediction:
    """Category-level GPU outlook. Sizes are validated but do not change the prediction."""
    for size in (request.model_size, request.data_size):
        if size is not None:
            resolve_size(size)
    utilization, percentage, recommendation = _GPU_PROFILES.get(request.category, _GPU_DEFAULT_PROFILE)
    return GPUPrediction(utilization=utilization, percentage=percentage, recommendation=recommendation)
