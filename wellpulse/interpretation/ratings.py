from __future__ import annotations

"""
Derived ratings: occupational psychosocial-risk compliance and the social
(wellbeing) rating.

Both are plain decision ladders over category results and the overall index.
"""

from dataclasses import dataclass
from typing import Any, Literal, Sequence

from wellpulse.interpretation.domain import (
    BEHAVIOR_CATEGORY_INDEX,
    CULTURE_CATEGORY_INDEX,
    WELLBEING_CATEGORY_INDEX,
)
from wellpulse.interpretation.scoring import CategoryScore, round_score


ComplianceRating = Literal["low", "medium", "high", "critical"]
SocialBand = Literal["A", "B", "C", "D", "F"]

_COMPLIANCE_NOTES: dict[str, str] = {
    "critical": (
        "ISO 45003 CRITICAL: psychosocial risk is high. An urgent risk management plan and "
        "professional assessment are required; employee health and safety must be addressed."
    ),
    "high": (
        "ISO 45003 HIGH RISK: psychosocial risk is elevated. Carry out a risk assessment, "
        "prepare an improvement plan and monitor it."
    ),
    "medium": "ISO 45003 MEDIUM RISK: some issues found. Apply preventive measures and monitoring.",
    "low": "ISO 45003 COMPLIANT: psychosocial health is at a good level. Continue regular monitoring.",
}

_SOCIAL_BANDS: tuple[tuple[float, SocialBand], ...] = (
    (85.0, "A"),
    (70.0, "B"),
    (55.0, "C"),
    (40.0, "D"),
)


@dataclass(frozen=True)
class ComplianceAssessment:
    rating: ComplianceRating
    requires_action: bool
    notes: str
    high_risk_categories: int
    risk_categories: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "risk_level": self.rating,
            "requires_action": self.requires_action,
            "compliance_notes": self.notes,
            "high_risk_categories": self.high_risk_categories,
            "risk_categories": self.risk_categories,
        }


@dataclass(frozen=True)
class SocialRating:
    social_score: float
    wellbeing_index: float
    diversity_inclusion_score: float
    psychological_safety_score: float
    composite_score: float
    rating: SocialBand

    def to_dict(self) -> dict[str, Any]:
        return {
            "social_score": self.social_score,
            "wellbeing_index": self.wellbeing_index,
            "diversity_inclusion_score": self.diversity_inclusion_score,
            "psychological_safety_score": self.psychological_safety_score,
            "composite_score": self.composite_score,
            "rating": self.rating,
        }


def rate_compliance(
    high_risk_categories: int,
    risk_categories: int,
    overall_index: float,
) -> ComplianceRating:
    if high_risk_categories >= 2 or overall_index < 2.5:
        return "critical"
    if high_risk_categories >= 1 or risk_categories >= 2 or overall_index < 3.4:
        return "high"
    if risk_categories >= 1 or overall_index < 4.0:
        return "medium"
    return "low"


def assess_compliance(
    scores: Sequence[CategoryScore],
    overall_index: float,
) -> ComplianceAssessment:
    high_risk = sum(1 for item in scores if item.level == "high-risk")
    risk = sum(1 for item in scores if item.level == "risk")
    rating = rate_compliance(high_risk, risk, overall_index)
    return ComplianceAssessment(
        rating=rating,
        requires_action=rating != "low",
        notes=_COMPLIANCE_NOTES[rating],
        high_risk_categories=high_risk,
        risk_categories=risk,
    )


def social_band(composite: float) -> SocialBand:
    for lower_bound, band in _SOCIAL_BANDS:
        if composite >= lower_bound:
            return band
    return "F"


def calculate_social_rating(
    scores: Sequence[CategoryScore],
    overall_index: float,
) -> SocialRating:
    # x20 maps the 0-5 scale onto 0-100.
    social = overall_index * 20
    wellbeing = _scaled(scores, WELLBEING_CATEGORY_INDEX)
    if len(scores) > max(CULTURE_CATEGORY_INDEX, BEHAVIOR_CATEGORY_INDEX):
        diversity = (
            scores[CULTURE_CATEGORY_INDEX].unrounded_average
            + scores[BEHAVIOR_CATEGORY_INDEX].unrounded_average
        ) * 10
    else:
        diversity = 0.0
    safety = _scaled(scores, CULTURE_CATEGORY_INDEX)

    composite = (social + wellbeing + diversity + safety) / 4
    return SocialRating(
        social_score=round_score(social),
        wellbeing_index=round_score(wellbeing),
        diversity_inclusion_score=round_score(diversity),
        psychological_safety_score=round_score(safety),
        composite_score=round_score(composite),
        rating=social_band(composite),
    )


def _scaled(scores: Sequence[CategoryScore], index: int) -> float:
    if index >= len(scores):
        return 0.0
    return scores[index].unrounded_average * 20
