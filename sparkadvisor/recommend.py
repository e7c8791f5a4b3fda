"""Resource recommendation: executor sizing from workload characteristics."""
import math

from sparkadvisor.models import ResourceRecommendation, WorkloadCharacteristics
from sparkadvisor.sizes import to_gb

# Baseline executor shape before category adjustment
MIN_EXECUTOR_MEMORY_GB = 8
BASE_EXECUTOR_CORES = 5
BASE_EXECUTOR_COUNT = 4
# Executor memory covers a quarter of the estimated peak
PEAK_MEMORY_SHARE = 4

GB_PER_TRAINING_GPU = 100
GB_PER_INFERENCE_GPU = 200
GB_PER_ANALYTICS_EXECUTOR = 50
GB_PER_GRAPH_EXECUTOR = 25
GRAPH_EXECUTORS_PER_GPU = 4


def recommend_resources(characteristics: WorkloadCharacteristics) -> ResourceRecommendation:
    """
    Baseline: memory = max(8, ceil(peak / 4)), 5 cores, 4 executors, no GPU.
    Category overrides then replace only the fields they name. Every fractional
    intermediate is rounded up so a recommendation never under-provisions.
    """
    data_gb = to_gb(characteristics.data_size_bytes)
    peak_gb = characteristics.memory_footprint.estimated_peak_gb

    memory_gb = max(MIN_EXECUTOR_MEMORY_GB, math.ceil(peak_gb / PEAK_MEMORY_SHARE))
    cores = BASE_EXECUTOR_CORES
    count = BASE_EXECUTOR_COUNT
    gpu_count: int | None = None

    category = characteristics.category
    if category == "ml-training":
        memory_gb = max(16, memory_gb)
        cores = 8
        gpu_count = max(1, math.ceil(data_gb / GB_PER_TRAINING_GPU))
    elif category == "ml-inference":
        cores = 4
        # 0 when the input size is unknown; still present, unlike etl/mixed
        gpu_count = math.ceil(data_gb / GB_PER_INFERENCE_GPU)
    elif category == "analytics":
        memory_gb = max(12, memory_gb)
        count = max(4, math.ceil(data_gb / GB_PER_ANALYTICS_EXECUTOR))
    elif category == "streaming":
        memory_gb = max(4, memory_gb)
        cores = 4
        count = 2
    elif category == "graph":
        memory_gb = max(16, memory_gb)
        count = max(8, math.ceil(data_gb / GB_PER_GRAPH_EXECUTOR))
        gpu_count = math.ceil(count / GRAPH_EXECUTORS_PER_GPU)

    return ResourceRecommendation(
        executor_memory_gb=memory_gb,
        executor_cores=cores,
        executor_count=count,
        gpu_count=gpu_count,
    )
