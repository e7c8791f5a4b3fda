"""Input/output types for the workload advisor."""
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

WorkloadCategory = Literal["ml-training", "ml-inference", "etl", "analytics", "streaming", "graph", "mixed"]
ComputeIntensity = Literal["low", "medium", "high", "very-high"]
IOPattern = Literal["sequential", "random", "streaming"]
GPUUtilization = Literal["none", "low", "medium", "high"]
ShuffleIntensity = Literal["none", "light", "moderate", "heavy", "extreme"]
SpillRisk = Literal["low", "medium", "high"]

# Size inputs accept a byte count or a human-readable string such as "100GB".
DataSize = int | float | str


class TypicalCharacteristics(BaseModel):
    """Per-pattern defaults. Every field is optional and only fills gaps."""
    model_config = ConfigDict(frozen=True)

    category: Optional[WorkloadCategory] = None
    compute_intensity: Optional[ComputeIntensity] = None
    io_pattern: Optional[IOPattern] = None
    gpu_utilization: Optional[GPUUtilization] = None
    shuffle_intensity: Optional[ShuffleIntensity] = None


class WorkloadPattern(BaseModel):
    """Catalog entry: lexical indicators plus the category they point at."""
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    indicators: tuple[str, ...] = Field(..., min_length=1)
    recommended_category: WorkloadCategory
    typical_characteristics: TypicalCharacteristics = Field(default_factory=TypicalCharacteristics)


class MemoryFootprint(BaseModel):
    estimated_peak_gb: float = Field(..., ge=0)
    cache_requirement_gb: Optional[float] = Field(None, ge=0)
    spill_risk: SpillRisk


class WorkloadCharacteristics(BaseModel):
    """Canonical intermediate record, produced once per classification."""
    category: WorkloadCategory
    data_size_bytes: int = Field(0, ge=0)
    compute_intensity: ComputeIntensity
    io_pattern: IOPattern
    gpu_utilization: GPUUtilization
    memory_footprint: MemoryFootprint
    shuffle_intensity: ShuffleIntensity
    confidence: float = Field(..., ge=0, le=1)


class ResourceRecommendation(BaseModel):
    """Executor sizing. gpu_count is None when the category implies no GPU (distinct from 0)."""
    executor_memory_gb: int = Field(..., ge=8)
    executor_cores: int = Field(..., ge=1)
    executor_count: int = Field(..., ge=1)
    gpu_count: Optional[int] = Field(None, ge=0)


class ClassificationResult(BaseModel):
    """Response from classify_workload and POST /v1/classify."""
    characteristics: WorkloadCharacteristics
    recommended_resources: ResourceRecommendation
    optimization_hints: list[str] = Field(default_factory=list)


class HistoricalWorkloadMetrics(BaseModel):
    """Metrics from previous runs of the same job."""
    previous_data_size: Optional[float] = Field(None, ge=0, description="Input size of the previous run (bytes)")
    shuffle_read_mb: Optional[float] = Field(None, ge=0, description="Shuffle read per run (MB)")
    shuffle_write_mb: Optional[float] = Field(None, ge=0, description="Shuffle write per run (MB)")


class WorkloadAnalysisRequest(BaseModel):
    """Request body for POST /v1/classify. Every field is optional."""
    description: Optional[str] = Field(None, max_length=100_000)
    sql_query: Optional[str] = Field(None, max_length=100_000)
    code_snippet: Optional[str] = Field(None, max_length=100_000)
    operations: Optional[list[str]] = Field(
        None,
        description="Discrete operation names (e.g. join, groupBy, train). Presence disables template defaults.",
    )
    data_size: Optional[DataSize] = Field(None, description="Input size: bytes or a size string like 100GB")
    historical_metrics: Optional[HistoricalWorkloadMetrics] = None


class RequirementsRequest(BaseModel):
    """Request body for POST /v1/requirements."""
    category: WorkloadCategory
    data_size: DataSize


class RequirementsEstimate(BaseModel):
    """Response from POST /v1/requirements."""
    estimated_cores: int
    estimated_memory_gb: int
    estimated_executors: int
    recommend_gpu: bool
    estimated_duration_minutes: float


class GPUPredictionRequest(BaseModel):
    """Request body for POST /v1/gpu-prediction."""
    category: WorkloadCategory
    model_size: Optional[DataSize] = None
    data_size: Optional[DataSize] = None


class GPUPrediction(BaseModel):
    utilization: GPUUtilization
    percentage: int = Field(..., ge=0, le=100)
    recommendation: str
