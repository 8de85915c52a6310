from __future__ import annotations

"""
Category scoring for ordinal (1-5) survey answers.

Design intent:
- Resolve answers to survey positions through display_order only.
- Treat unreadable answers as "no signal"; only a broken layout shape raises.
- Keep averages unrounded for aggregation and round for presentation.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Sequence

from pydantic import ValidationError

from wellpulse.internal_core.contracts import QuestionRef, SurveyAnswer
from wellpulse.interpretation.domain import (
    CANONICAL_SLOTS,
    CATEGORIES,
    FLAGGED_ANSWER_MAX,
    IMPACT_MULTIPLIERS,
    CategoryDefinition,
    ImpactClass,
    category_index_for_position,
    impact_class_for_position,
)
from wellpulse.interpretation.levels import LevelInfo, classify_score

logger = logging.getLogger(__name__)

_NO_INTERPRETATION = "Interpretation unavailable."

_CATEGORY_INTERPRETATIONS: dict[str, dict[str, str]] = {
    "mental_health_stress": {
        "healthy": "Psychological state is currently stable. Stress is well managed and recovery is sufficient.",
        "attention": "Signs of increasing stress. Workload may be rising and rest may be insufficient.",
        "risk": "Elevated risk of chronic stress. Persistent fatigue, sleep and concentration problems are showing.",
        "high-risk": "High burnout risk. Emotional exhaustion and detachment from work are present; support is needed.",
    },
    "workplace_environment": {
        "healthy": "The work environment is psychologically safe. Trust is high and communication is open.",
        "attention": "Psychological safety is only partially in place. Trust and communication vary across teams.",
        "risk": "Trust and communication problems are present. Unfair treatment is being perceived.",
        "high-risk": "The work environment is psychologically unsafe. Fear, pressure and isolation are high.",
    },
    "personal_state": {
        "healthy": "Good self-understanding and self-regulation. Self-confidence is high.",
        "attention": "Self-understanding fluctuates. Self-confidence sometimes weakens.",
        "risk": "Periods of weakened self-confidence. Negative thoughts are hard to control.",
        "high-risk": "Self-esteem has dropped seriously. Support is needed.",
    },
    "behavior_interaction": {
        "healthy": "Healthy interaction style. Communicates openly and enjoys teamwork.",
        "attention": "Selective interaction. Tends to withdraw in some situations.",
        "risk": "Avoidant or defensive tendencies. Uncomfortable asking others for help.",
        "high-risk": "At-risk interaction style. Strong tendency to avoid disagreement and isolate.",
    },
    "wellbeing_balance": {
        "healthy": "Wellbeing is high. Satisfied with life and work-life balance is good.",
        "attention": "Wellbeing fluctuates. Work is starting to intrude on personal life.",
        "risk": "Wellbeing has started to decline. Work-life balance is being lost.",
        "high-risk": "Wellbeing has declined seriously. Life satisfaction and energy are low; professional support is needed.",
    },
}


class InterpretationError(ValueError):
    """Raised when responses or the question layout have an unusable shape."""


@dataclass(frozen=True)
class CategoryScore:
    key: str
    label: str
    label_mn: str
    average_score: float
    weighted_score: float
    level_info: LevelInfo
    interpretation: str
    domain_weight: float
    answered_count: int
    critical_count: int
    risk_count: int
    protective_count: int
    unrounded_average: float = field(default=0.0, repr=False)

    @property
    def level(self) -> str:
        return self.level_info.level

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.label,
            "category_key": self.key,
            "category_mn": self.label_mn,
            "average_score": self.average_score,
            "weighted_score": self.weighted_score,
            "level": self.level_info.level,
            "level_mn": self.level_info.label_mn,
            "color": self.level_info.color,
            "icon": self.level_info.icon,
            "interpretation": self.interpretation,
            "domain_weight": self.domain_weight,
            "answered_count": self.answered_count,
            "impact_items": {
                "critical": self.critical_count,
                "risk": self.risk_count,
                "protective": self.protective_count,
            },
        }


_PRESENTATION_STEP = Decimal("0.01")


def round_score(value: float) -> float:
    """Round to 2 decimals with exact halves going up (3.125 -> 3.13).

    Works on the exact binary value of the float, so 1.005 (stored just below
    the half) still rounds to 1.0.
    """
    return float(Decimal(value).quantize(_PRESENTATION_STEP, rounding=ROUND_HALF_UP))


def impact_adjusted_value(answer: int, impact: ImpactClass) -> float:
    """
    Impact-adjusted contribution of one answer.

    Protective items are multiplied by 1.0 and are not reverse-scored, so a low
    protective answer is not penalized relative to its intent. Callers depend on
    this literal behavior; change it here only.
    """
    return answer * IMPACT_MULTIPLIERS.get(impact, 1.0)


def coerce_questions(questions: Iterable[Any] | None) -> list[QuestionRef]:
    if questions is None:
        raise InterpretationError("Question layout is required")
    if not isinstance(questions, Iterable) or isinstance(questions, (str, bytes)):
        raise InterpretationError(
            f"Question layout must be a sequence of entries, got {type(questions).__name__}"
        )
    output: list[QuestionRef] = []
    for index, item in enumerate(questions):
        try:
            output.append(_coerce_question(item))
        except (ValidationError, TypeError, ValueError) as exc:
            raise InterpretationError(f"Question layout entry {index} is malformed: {exc}") from exc
    return output


def coerce_responses(responses: Iterable[Any] | None) -> list[SurveyAnswer]:
    if responses is None:
        raise InterpretationError("Responses are required")
    if not isinstance(responses, Iterable) or isinstance(responses, (str, bytes)):
        raise InterpretationError(
            f"Responses must be a sequence of entries, got {type(responses).__name__}"
        )
    output: list[SurveyAnswer] = []
    for index, item in enumerate(responses):
        try:
            output.append(_coerce_answer(item))
        except (ValidationError, TypeError, ValueError) as exc:
            raise InterpretationError(f"Response entry {index} is malformed: {exc}") from exc
    return output


def _coerce_question(item: Any) -> QuestionRef:
    if isinstance(item, QuestionRef):
        return item
    if isinstance(item, Mapping):
        return QuestionRef.model_validate(dict(item))
    if isinstance(item, (tuple, list)) and len(item) == 2:
        return QuestionRef(question_id=item[0], display_order=item[1])
    raise TypeError(f"unsupported question entry type {type(item).__name__}")


def _coerce_answer(item: Any) -> SurveyAnswer:
    if isinstance(item, SurveyAnswer):
        return item
    if isinstance(item, Mapping):
        return SurveyAnswer.model_validate(dict(item))
    if isinstance(item, (tuple, list)) and len(item) == 2:
        return SurveyAnswer(question_id=item[0], answer=item[1])
    raise TypeError(f"unsupported response entry type {type(item).__name__}")


def build_answer_map(
    responses: Sequence[SurveyAnswer],
    questions: Sequence[QuestionRef],
    *,
    layout_warnings: bool = True,
) -> dict[int, int]:
    """Map display_order -> valid answer value. Later answers for the same slot win."""
    order_by_question: dict[str, int] = {}
    seen_orders: dict[int, str] = {}
    for question in questions:
        if question.question_id in order_by_question:
            continue
        order_by_question[question.question_id] = question.display_order
        if layout_warnings and question.display_order in seen_orders:
            logger.warning(
                "layout_duplicate_display_order display_order=%s questions=%s,%s",
                question.display_order,
                seen_orders[question.display_order],
                question.question_id,
            )
        seen_orders.setdefault(question.display_order, question.question_id)

    if layout_warnings:
        beyond = sorted(
            order for order in seen_orders if category_index_for_position(order - 1) is None
        )
        if beyond:
            logger.warning(
                "layout_outside_canonical count=%s first=%s canonical_slots=%s",
                len(beyond),
                beyond[0],
                CANONICAL_SLOTS,
            )

    answers: dict[int, int] = {}
    for response in responses:
        display_order = order_by_question.get(response.question_id)
        if display_order is None:
            continue
        value = response.numeric_value()
        if value is None:
            continue
        answers[display_order] = value
    return answers


def score_category(category: CategoryDefinition, answers: Mapping[int, int]) -> CategoryScore:
    raw_values: list[int] = []
    adjusted_values: list[float] = []
    critical_count = 0
    risk_count = 0
    protective_count = 0

    for position in category.positions():
        answer = answers.get(position + 1)
        if answer is None:
            continue
        impact = impact_class_for_position(position)
        raw_values.append(answer)
        adjusted_values.append(impact_adjusted_value(answer, impact))
        if impact == "protective":
            protective_count += 1
        elif impact == "critical" and answer <= FLAGGED_ANSWER_MAX:
            critical_count += 1
        elif impact == "risk" and answer <= FLAGGED_ANSWER_MAX:
            risk_count += 1

    average = math.fsum(raw_values) / len(raw_values) if raw_values else 0.0
    weighted = math.fsum(adjusted_values) / len(adjusted_values) if adjusted_values else 0.0
    level_info = classify_score(average)
    interpretation = _CATEGORY_INTERPRETATIONS.get(category.key, {}).get(
        level_info.level, _NO_INTERPRETATION
    )

    return CategoryScore(
        key=category.key,
        label=category.label,
        label_mn=category.label_mn,
        average_score=round_score(average),
        weighted_score=round_score(weighted),
        level_info=level_info,
        interpretation=interpretation,
        domain_weight=category.weight,
        answered_count=len(raw_values),
        critical_count=critical_count,
        risk_count=risk_count,
        protective_count=protective_count,
        unrounded_average=average,
    )


def score_categories(
    answers: Mapping[int, int],
    categories: Sequence[CategoryDefinition] = CATEGORIES,
) -> list[CategoryScore]:
    return [score_category(category, answers) for category in categories]


def overall_raw_average(answers: Mapping[int, int]) -> float:
    if not answers:
        return 0.0
    return math.fsum(answers.values()) / len(answers)


def overall_weighted_index(scores: Sequence[CategoryScore]) -> float:
    """Domain-weighted index, aggregated unrounded and rounded once."""
    if not scores:
        return 0.0
    return round_score(math.fsum(item.unrounded_average * item.domain_weight for item in scores))
