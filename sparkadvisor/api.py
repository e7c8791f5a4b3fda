"""FastAPI routes for the Spark workload advisor."""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from sparkadvisor.catalog import get_patterns, get_pattern_summaries
from sparkadvisor.classifier import classify_workload
from sparkadvisor.models import (
    ClassificationResult,
    GPUPrediction,
    GPUPredictionRequest,
    RequirementsEstimate,
    RequirementsRequest,
    WorkloadAnalysisRequest,
)
from sparkadvisor.observability import RequestLoggingMiddleware, get_metrics_text, record_classification
from sparkadvisor.requirements import analyze_workload_requirements, predict_gpu_utilization
from sparkadvisor.resilience import (
    get_cached_result,
    get_timeout_sec,
    run_sync_with_timeout,
    set_cached_result,
)
from sparkadvisor.sizes import InvalidSizeError

_LOG = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    raw = (os.environ.get("ADVISOR_CORS_ORIGINS") or "").strip()
    if not raw:
        return []
    if raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Catalog is loaded once here; a broken catalog should stop startup.
    patterns = get_patterns()
    _LOG.info("Workload advisor ready with %d patterns", len(patterns))
    yield


app = FastAPI(
    title="Spark Workload Advisor",
    description="Workload classification and executor sizing for GPU-accelerated Spark clusters",
    version="0.1.0",
    lifespan=lifespan,
)
origins = _cors_origins()
if origins:
    app.add_middleware(CORSMiddleware, allow_origins=origins, allow_credentials=True, allow_methods=["*"], allow_headers=["*"])
app.add_middleware(RequestLoggingMiddleware)


def _run(func, request):
    """Run an advisor entry point with the configured timeout; map errors to HTTP status."""
    try:
        return run_sync_with_timeout(get_timeout_sec(), func, request)
    except InvalidSizeError as e:
        raise HTTPException(status_code=400, detail=f"Invalid data size: {e!s}")
    except TimeoutError:
        raise HTTPException(status_code=504, detail="Analysis timed out. Try again or reduce input size.")


@app.get("/v1/health")
def health():
    """Health check."""
    return {"status": "ok", "service": "workload-advisor", "patterns": len(get_patterns())}


@app.get("/v1/metrics")
def metrics():
    """Prometheus-style metrics (request counts, classifications, uptime)."""
    return PlainTextResponse(get_metrics_text(), media_type="text/plain; charset=utf-8")


@app.get("/v1/patterns")
def patterns():
    """List workload patterns in priority order."""
    return get_pattern_summaries()


@app.post("/v1/classify", response_model=ClassificationResult, response_model_exclude_none=True)
def classify(request: WorkloadAnalysisRequest):
    """
    Classify a workload from its description, query, code and operations; return
    characteristics, recommended executor resources and tuning hints.
    """
    request_dict = request.model_dump()
    cached = get_cached_result("classify", request_dict)
    if cached is not None:
        result = ClassificationResult.model_validate(cached)
    else:
        result = _run(classify_workload, request)
        set_cached_result("classify", request_dict, result.model_dump())
    record_classification(result.characteristics.category)
    return result


@app.post("/v1/requirements", response_model=RequirementsEstimate)
def requirements(request: RequirementsRequest):
    """Estimate cores, memory, executors, GPU and duration from category and data size."""
    request_dict = request.model_dump()
    cached = get_cached_result("requirements", request_dict)
    if cached is not None:
        return RequirementsEstimate.model_validate(cached)
    result = _run(analyze_workload_requirements, request)
    set_cached_result("requirements", request_dict, result.model_dump())
    return result


@app.post("/v1/gpu-prediction", response_model=GPUPrediction)
def gpu_prediction(request: GPUPredictionRequest):
    """Expected GPU utilization and advice for a workload category."""
    return _run(predict_gpu_utilization, request)
