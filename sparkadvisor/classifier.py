"""Workload classifier: match free text against the pattern catalog, then derive characteristics."""
import logging
from typing import NamedTuple, Optional, Sequence

from sparkadvisor.catalog import get_patterns
from sparkadvisor.characteristics import (
    determine_compute_intensity,
    determine_gpu_utilization,
    determine_io_pattern,
    determine_shuffle_intensity,
    estimate_memory_footprint,
)
from sparkadvisor.hints import generate_optimization_hints
from sparkadvisor.models import (
    ClassificationResult,
    TypicalCharacteristics,
    WorkloadAnalysisRequest,
    WorkloadCategory,
    WorkloadCharacteristics,
    WorkloadPattern,
)
from sparkadvisor.recommend import recommend_resources
from sparkadvisor.sizes import format_bytes, resolve_size

_LOG = logging.getLogger(__name__)

# Best score must exceed this to adopt the pattern's category; otherwise "mixed".
MATCH_THRESHOLD = 0.1


class PatternScore(NamedTuple):
    pattern: WorkloadPattern
    score: float
    matches: int


def build_analysis_text(request: WorkloadAnalysisRequest) -> str:
    """Lowercased haystack of every present text field, space-joined."""
    parts = [request.description, request.sql_query, request.code_snippet, *(request.operations or [])]
    return " ".join(p for p in parts if p).lower()


def score_patterns(text: str, patterns: Sequence[WorkloadPattern]) -> list[PatternScore]:
    """Fraction of each pattern's indicators found as substrings of text, in catalog order."""
    haystack = text.lower()
    scores = []
    for pattern in patterns:
        matches = sum(1 for indicator in pattern.indicators if indicator.lower() in haystack)
        scores.append(PatternScore(pattern, matches / len(pattern.indicators), matches))
    return scores


def best_match(scores: Sequence[PatternScore]) -> PatternScore:
    """Strictly highest score wins; ties keep the earlier catalog entry."""
    best = scores[0]
    for candidate in scores[1:]:
        if candidate.score > best.score:
            best = candidate
    return best


def category_and_confidence(match: PatternScore) -> tuple[WorkloadCategory, float]:
    """Half the indicators matched saturates confidence at 1."""
    category = match.pattern.recommended_category if match.score > MATCH_THRESHOLD else "mixed"
    return category, min(match.score * 2, 1.0)


def resolve_data_size(request: WorkloadAnalysisRequest) -> int:
    """Explicit size (bytes or size string) > previous run's size > 0. Invalid strings raise."""
    if request.data_size:
        return resolve_size(request.data_size)
    history = request.historical_metrics
    if history is not None and history.previous_data_size:
        return int(history.previous_data_size)
    return 0


def classify_workload(
    description_or_request: str | WorkloadAnalysisRequest,
    patterns: Optional[Sequence[WorkloadPattern]] = None,
) -> ClassificationResult:
    """
    Classify a workload from a bare description or a structured request and
    return characteristics, recommended resources and tuning hints.
    Raises InvalidSizeError when data_size is not a valid size.
    """
    if isinstance(description_or_request, str):
        request = WorkloadAnalysisRequest(description=description_or_request)
    else:
        request = description_or_request
    if patterns is None:
        patterns = get_patterns()

    analysis_text = build_analysis_text(request)
    scores = score_patterns(analysis_text, patterns)
    match = best_match(scores)
    category, confidence = category_and_confidence(match)
    _LOG.debug(
        "classify_workload best=%s score=%.3f category=%s top=%s",
        match.pattern.name,
        match.score,
        category,
        [(s.pattern.name, round(s.score, 3)) for s in sorted(scores, key=lambda s: -s.score)[:3]],
    )

    data_size = resolve_data_size(request)
    template: TypicalCharacteristics = match.pattern.typical_characteristics
    compute_intensity = determine_compute_intensity(category, request.operations, template.compute_intensity)
    characteristics = WorkloadCharacteristics(
        category=category,
        data_size_bytes=data_size,
        compute_intensity=compute_intensity,
        io_pattern=determine_io_pattern(category, request.operations, template.io_pattern),
        gpu_utilization=determine_gpu_utilization(category, analysis_text, template.gpu_utilization),
        memory_footprint=estimate_memory_footprint(data_size, category, compute_intensity),
        shuffle_intensity=determine_shuffle_intensity(
            category, request.historical_metrics, request.operations, template.shuffle_intensity
        ),
        confidence=confidence,
    )
    result = ClassificationResult(
        characteristics=characteristics,
        recommended_resources=recommend_resources(characteristics),
        optimization_hints=generate_optimization_hints(characteristics),
    )
    _LOG.info(
        "Classified workload as %s (confidence %.2f, data %s)",
        category,
        confidence,
        format_bytes(data_size),
    )
    return result
