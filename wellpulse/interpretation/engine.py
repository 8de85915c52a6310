from __future__ import annotations

"""
Survey interpretation orchestrator.

Design intent:
- Single public entry point from (responses, question layout) to one frozen result.
- No I/O and no shared mutable state; safe to call concurrently.
- generated_at is metadata only and never feeds scoring.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Literal, Optional, Sequence

from wellpulse.internal_core.config import EngineConfig, load_config
from wellpulse.internal_core.contracts import DomainSummary, InterpretationSummary
from wellpulse.interpretation.diagnosis import CombinedDiagnosis, build_combined_diagnosis
from wellpulse.interpretation.early_warning import EarlyWarning, detect_early_warnings
from wellpulse.interpretation.levels import LevelInfo, classify_score
from wellpulse.interpretation.ratings import (
    ComplianceAssessment,
    SocialRating,
    assess_compliance,
    calculate_social_rating,
)
from wellpulse.interpretation.scoring import (
    CategoryScore,
    build_answer_map,
    coerce_questions,
    coerce_responses,
    overall_raw_average,
    overall_weighted_index,
    round_score,
    score_categories,
)

logger = logging.getLogger(__name__)

RecommendationTier = Literal["none", "monitor", "action-needed", "immediate-action"]

_FLAG_BY_COLOR = {
    "green": "Green",
    "yellow": "Amber",
    "orange": "Amber",
    "red": "Red",
}

_OVERALL_INTERPRETATIONS: dict[str, str] = {
    "healthy": (
        "Overall wellbeing is high. Psychological state, work environment and relationships are all stable."
    ),
    "attention": "Wellbeing is good but some areas need attention. Review the categories below.",
    "risk": (
        "Wellbeing risk is elevated. Professional advice and concrete measures are recommended."
    ),
    "high-risk": "Wellbeing risk is high. Professional psychological support is required.",
}


@dataclass(frozen=True)
class SurveyInterpretation:
    overall_score: float
    overall_index: float
    overall_level: LevelInfo
    overall_interpretation: str
    categories: list[CategoryScore]
    combined_diagnosis: Optional[CombinedDiagnosis]
    early_warnings: list[EarlyWarning]
    compliance: ComplianceAssessment
    social_rating: SocialRating
    recommendation_level: RecommendationTier
    summary: InterpretationSummary
    generated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall_score": self.overall_score,
            "overall_index": self.overall_index,
            "overall_level": self.overall_level.level,
            "overall_level_mn": self.overall_level.label_mn,
            "overall_interpretation": self.overall_interpretation,
            "categories": [item.to_dict() for item in self.categories],
            "combined_diagnosis": (
                self.combined_diagnosis.to_dict() if self.combined_diagnosis is not None else None
            ),
            "early_warnings": [item.to_dict() for item in self.early_warnings],
            "compliance": self.compliance.to_dict(),
            "social_rating": self.social_rating.to_dict(),
            "recommendation_level": self.recommendation_level,
            "data_output": self.summary.model_dump(),
            "generated_at": self.generated_at,
        }


def determine_recommendation_level(
    warnings: Sequence[EarlyWarning],
    overall_index: float,
) -> RecommendationTier:
    critical = sum(1 for item in warnings if item.severity == "critical")
    warning = sum(1 for item in warnings if item.severity == "warning")

    if critical > 0 or overall_index < 2.5:
        return "immediate-action"
    if warning >= 2 or overall_index < 3.4:
        return "action-needed"
    if warnings or overall_index < 4.0:
        return "monitor"
    return "none"


def traffic_light(color: str) -> str:
    return _FLAG_BY_COLOR.get(color, "Red")


def build_summary(
    scores: Sequence[CategoryScore],
    overall_index: float,
    overall_level: LevelInfo,
    recommendation_level: str,
) -> InterpretationSummary:
    return InterpretationSummary(
        overall_index=overall_index,
        risk_level=overall_level.level,
        domains={
            item.label: DomainSummary(
                score=item.average_score,
                weighted_score=item.weighted_score,
                flag=traffic_light(item.level_info.color),  # type: ignore[arg-type]
            )
            for item in scores
        },
        recommendation_level=recommendation_level,
    )


def analyze(
    responses: Iterable[Any] | None,
    questions: Iterable[Any] | None,
    *,
    config: Optional[EngineConfig] = None,
) -> SurveyInterpretation:
    """
    Interpret one survey submission.

    Args:
        responses: (question_id, answer) pairs, mappings or SurveyAnswer objects.
        questions: (question_id, display_order) pairs, mappings or QuestionRef objects.

    Raises:
        InterpretationError: when either input is missing or an entry has an unusable shape.
    """
    resolved_config = config or load_config()
    layout = coerce_questions(questions)
    answers_in = coerce_responses(responses)

    answers = build_answer_map(
        answers_in,
        layout,
        layout_warnings=resolved_config.WELLPULSE_LAYOUT_WARNINGS,
    )
    categories = score_categories(answers)

    overall_score = round_score(overall_raw_average(answers))
    overall_index = overall_weighted_index(categories)
    overall_level = classify_score(overall_index)

    early_warnings = detect_early_warnings(categories, overall_index)
    recommendation_level = determine_recommendation_level(early_warnings, overall_index)

    logger.debug(
        "survey_interpreted answered=%s overall_index=%s level=%s warnings=%s recommendation=%s",
        len(answers),
        overall_index,
        overall_level.level,
        len(early_warnings),
        recommendation_level,
    )

    return SurveyInterpretation(
        overall_score=overall_score,
        overall_index=overall_index,
        overall_level=overall_level,
        overall_interpretation=_OVERALL_INTERPRETATIONS[overall_level.level],
        categories=categories,
        combined_diagnosis=build_combined_diagnosis(categories),
        early_warnings=early_warnings,
        compliance=assess_compliance(categories, overall_index),
        social_rating=calculate_social_rating(categories, overall_index),
        recommendation_level=recommendation_level,
        summary=build_summary(categories, overall_index, overall_level, recommendation_level),
        generated_at=datetime.now(timezone.utc).isoformat(),
    )
