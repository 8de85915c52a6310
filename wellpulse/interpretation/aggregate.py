from __future__ import annotations

"""
Fleet-level tallies for dashboards.

Each submission is re-interpreted independently with the same engine, so the
work is a plain map over submissions followed by a reduce into counters.
"""

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

import numpy as np

from wellpulse.internal_core.config import EngineConfig, load_config
from wellpulse.internal_core.contracts import QuestionRef
from wellpulse.interpretation.domain import CATEGORIES
from wellpulse.interpretation.engine import SurveyInterpretation, analyze
from wellpulse.interpretation.scoring import InterpretationError, coerce_questions, round_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FleetSummary:
    total_responses: int
    analyzed_responses: int
    failed_responses: int
    healthy_count: int
    attention_count: int
    risk_count: int
    critical_count: int
    mean_overall_index: float
    category_means: dict[str, float] = field(default_factory=dict)
    recommendation_counts: dict[str, int] = field(default_factory=dict)
    compliance_counts: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_responses": self.total_responses,
            "analyzed_responses": self.analyzed_responses,
            "failed_responses": self.failed_responses,
            "healthy_count": self.healthy_count,
            "attention_count": self.attention_count,
            "risk_count": self.risk_count,
            "critical_count": self.critical_count,
            "mean_overall_index": self.mean_overall_index,
            "category_means": dict(self.category_means),
            "recommendation_counts": dict(self.recommendation_counts),
            "compliance_counts": dict(self.compliance_counts),
        }


def summarize_fleet(
    submissions: Iterable[Optional[Iterable[Any]]],
    questions: Iterable[Any] | None,
    *,
    max_workers: Optional[int] = None,
    config: Optional[EngineConfig] = None,
) -> FleetSummary:
    resolved_config = config or load_config()
    layout = coerce_questions(questions)
    batch = list(submissions)

    workers = max_workers or resolved_config.WELLPULSE_FLEET_MAX_WORKERS
    if workers <= 1 or len(batch) < resolved_config.WELLPULSE_FLEET_PARALLEL_MIN:
        results = [_analyze_safe(item, layout, resolved_config) for item in batch]
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(
                executor.map(lambda item: _analyze_safe(item, layout, resolved_config), batch)
            )

    interpretations = [item for item in results if item is not None]
    failed = len(results) - len(interpretations)
    if failed:
        logger.warning("fleet_summary_skipped failed=%s total=%s", failed, len(batch))
    return _reduce(interpretations, total=len(batch), failed=failed)


def _analyze_safe(
    responses: Optional[Iterable[Any]],
    layout: Sequence[QuestionRef],
    config: EngineConfig,
) -> SurveyInterpretation | None:
    try:
        return analyze(responses, layout, config=config)
    except InterpretationError as exc:
        logger.warning("fleet_submission_invalid error=%s", exc)
        return None


def _reduce(
    interpretations: Sequence[SurveyInterpretation],
    *,
    total: int,
    failed: int,
) -> FleetSummary:
    levels = Counter(item.overall_level.level for item in interpretations)
    recommendations = Counter(item.recommendation_level for item in interpretations)
    compliance = Counter(item.compliance.rating for item in interpretations)

    if interpretations:
        index_values = np.array([item.overall_index for item in interpretations], dtype=float)
        mean_index = round_score(float(index_values.mean()))
        category_matrix = np.array(
            [[score.unrounded_average for score in item.categories] for item in interpretations],
            dtype=float,
        )
        column_means = category_matrix.mean(axis=0)
        category_means = {
            category.key: round_score(float(value))
            for category, value in zip(CATEGORIES, column_means)
        }
    else:
        mean_index = 0.0
        category_means = {category.key: 0.0 for category in CATEGORIES}

    return FleetSummary(
        total_responses=total,
        analyzed_responses=len(interpretations),
        failed_responses=failed,
        healthy_count=levels.get("healthy", 0),
        attention_count=levels.get("attention", 0),
        risk_count=levels.get("risk", 0),
        critical_count=levels.get("high-risk", 0),
        mean_overall_index=mean_index,
        category_means=category_means,
        recommendation_counts={
            tier: recommendations.get(tier, 0)
            for tier in ("none", "monitor", "action-needed", "immediate-action")
        },
        compliance_counts={
            rating: compliance.get(rating, 0) for rating in ("low", "medium", "high", "critical")
        },
    )
