from __future__ import annotations

"""
Early-warning triggers over category scores.

Design intent:
- Per-category rules are an ordered ladder; the first matching rule wins.
- Cross-category (systemic) rules run independently after the ladder.
- Every warning names the rule that produced it for downstream traceability.
"""

from dataclasses import dataclass
from typing import Any, Literal, Sequence

from wellpulse.interpretation.domain import CULTURE_CATEGORY_INDEX, STRESS_CATEGORY_INDEX
from wellpulse.interpretation.scoring import CategoryScore


Severity = Literal["info", "warning", "critical"]

CRITICAL_ITEMS_TRIGGER = 2
RISK_ITEMS_TRIGGER = 3
EXTREME_SCORE_MAX = 2.0
HIGH_RISK_SCORE_MAX = 2.6
ELEVATED_SCORE_MAX = 3.4
MONITOR_SCORE_MAX = 4.0
SYSTEMIC_SCORE_MAX = 2.5
BURNOUT_INDEX_MAX = 3.0

_ACTIONS: dict[str, str] = {
    "critical": "Immediate action: professional psychological support, 1-on-1 meeting, risk management plan.",
    "warning": "Medium-term: counselling, improved working conditions, increased monitoring.",
    "info": "Monitor: regular monitoring, preventive measures, offer support.",
}
_NO_ACTION = "No action required."

SYSTEMIC_CATEGORY = "Systemic risk"
BURNOUT_CATEGORY = "Burnout risk"


@dataclass(frozen=True)
class EarlyWarning:
    category: str
    category_key: str
    rule: str
    severity: Severity
    message: str
    action_required: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "category_key": self.category_key,
            "rule": self.rule,
            "severity": self.severity,
            "message": self.message,
            "action_required": self.action_required,
        }


def action_for_severity(severity: str) -> str:
    return _ACTIONS.get(severity, _NO_ACTION)


def detect_category_warning(score: CategoryScore) -> EarlyWarning | None:
    label = score.label
    average = score.unrounded_average

    if score.critical_count >= CRITICAL_ITEMS_TRIGGER:
        return _category_warning(
            score,
            "critical_items",
            "critical",
            f"IMMEDIATE FLAG: {score.critical_count} critical indicators in {label} are at a very low level. "
            "Immediate action required.",
        )
    if average < EXTREME_SCORE_MAX:
        return _category_warning(
            score,
            "extreme_low_score",
            "critical",
            f"URGENT: extremely high risk detected in {label} ({average:.2f}). Direct support required.",
        )
    if average < HIGH_RISK_SCORE_MAX:
        return _category_warning(
            score,
            "high_risk_score",
            "critical",
            f"ALERT: high risk in {label} ({average:.2f}). Professional assessment required.",
        )
    if score.risk_count >= RISK_ITEMS_TRIGGER:
        return _category_warning(
            score,
            "risk_items",
            "warning",
            f"CAUTION: {score.risk_count} risk indicators detected in {label}. Take preventive measures.",
        )
    if average < ELEVATED_SCORE_MAX:
        return _category_warning(
            score,
            "elevated_risk_score",
            "warning",
            f"CAUTION: elevated risk in {label} ({average:.2f}). Take preventive measures.",
        )
    if average < MONITOR_SCORE_MAX:
        return _category_warning(
            score,
            "monitor_score",
            "info",
            f"MONITOR: slight weakening in {label} ({average:.2f}). Keep under observation.",
        )
    return None


def detect_systemic_warnings(
    scores: Sequence[CategoryScore],
    overall_index: float,
) -> list[EarlyWarning]:
    warnings: list[EarlyWarning] = []

    if len(scores) > max(STRESS_CATEGORY_INDEX, CULTURE_CATEGORY_INDEX):
        stress = scores[STRESS_CATEGORY_INDEX]
        culture = scores[CULTURE_CATEGORY_INDEX]
        if (
            stress.unrounded_average <= SYSTEMIC_SCORE_MAX
            and culture.unrounded_average <= SYSTEMIC_SCORE_MAX
        ):
            warnings.append(
                EarlyWarning(
                    category=SYSTEMIC_CATEGORY,
                    category_key="systemic",
                    rule="systemic_stress_culture",
                    severity="critical",
                    message=(
                        f"SYSTEMIC RISK: both {stress.label} and {culture.label} are very low. "
                        "Organization-wide action required."
                    ),
                    action_required=(
                        "Immediate action: revise organizational policy, run leadership training, "
                        "start a culture change programme."
                    ),
                )
            )

    burnout_cluster = any(item.critical_count >= CRITICAL_ITEMS_TRIGGER for item in scores)
    if burnout_cluster and overall_index < BURNOUT_INDEX_MAX:
        warnings.append(
            EarlyWarning(
                category=BURNOUT_CATEGORY,
                category_key="burnout",
                rule="burnout_cluster",
                severity="critical",
                message="HIGH BURNOUT RISK: multiple critical burnout indicators detected.",
                action_required="Immediate support: 1-on-1 meeting, workload reduction, professional counselling.",
            )
        )
    return warnings


def detect_early_warnings(
    scores: Sequence[CategoryScore],
    overall_index: float,
) -> list[EarlyWarning]:
    """Per-category warnings in category order, then systemic warnings."""
    warnings = [
        warning
        for warning in (detect_category_warning(item) for item in scores)
        if warning is not None
    ]
    warnings.extend(detect_systemic_warnings(scores, overall_index))
    return warnings


def _category_warning(
    score: CategoryScore,
    rule: str,
    severity: Severity,
    message: str,
) -> EarlyWarning:
    return EarlyWarning(
        category=score.label,
        category_key=score.key,
        rule=rule,
        severity=severity,
        message=message,
        action_required=action_for_severity(severity),
    )
