from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Sequence

from wellpulse.interpretation.domain import CULTURE_CATEGORY_INDEX, STRESS_CATEGORY_INDEX
from wellpulse.interpretation.scoring import CategoryScore


DiagnosisSeverity = Literal["critical", "high", "moderate", "healthy"]


@dataclass(frozen=True)
class DiagnosisEntry:
    diagnosis: str
    diagnosis_mn: str
    severity: DiagnosisSeverity
    icon: str
    recommendation: str


@dataclass(frozen=True)
class CombinedDiagnosis:
    stress_level: str
    culture_level: str
    diagnosis: str
    diagnosis_mn: str
    severity: DiagnosisSeverity
    icon: str
    recommendation: str

    @property
    def is_fallback(self) -> bool:
        return diagnosis_key(self.stress_level, self.culture_level) not in DIAGNOSIS_MATRIX

    def to_dict(self) -> dict[str, Any]:
        return {
            "stress_level": self.stress_level,
            "culture_level": self.culture_level,
            "diagnosis": self.diagnosis,
            "diagnosis_mn": self.diagnosis_mn,
            "severity": self.severity,
            "icon": self.icon,
            "recommendation": self.recommendation,
        }


DIAGNOSIS_MATRIX: dict[str, DiagnosisEntry] = {
    "high-risk_high-risk": DiagnosisEntry(
        "Systemic burnout risk",
        "Системийн burnout эрсдэл",
        "critical",
        "🔴🔴",
        "Very fragile situation. Serious problems in both employee wellbeing and organizational "
        "culture. An urgent professional programme is essential.",
    ),
    "high-risk_healthy": DiagnosisEntry(
        "Individual overload",
        "Хувь хүний хэт ачаалал",
        "high",
        "🔴🟢",
        "The work environment is safe but the individual is overloaded. Personal recovery, rest "
        "and reduced workload are needed.",
    ),
    "healthy_high-risk": DiagnosisEntry(
        "Cultural toxicity risk",
        "Соёлын хоруу орчин",
        "high",
        "🟢🔴",
        "The individual is stable but the work environment is psychologically unsafe. Trust and "
        "communication culture need improvement.",
    ),
    "risk_risk": DiagnosisEntry(
        "Latent psychosocial risk",
        "Далд сэтгэл зүйн эрсдэл",
        "moderate",
        "🟠🟠",
        "Risk is rising in both stress and culture. Time to take preventive measures.",
    ),
    "attention_risk": DiagnosisEntry(
        "Latent psychosocial risk",
        "Далд сэтгэл зүйн эрсдэл",
        "moderate",
        "🟡🟠",
        "Workplace culture needs attention.",
    ),
    "risk_attention": DiagnosisEntry(
        "Latent psychosocial risk",
        "Далд сэтгэл зүйн эрсдэл",
        "moderate",
        "🟠🟡",
        "Individual stress management needs attention.",
    ),
    "healthy_healthy": DiagnosisEntry(
        "Healthy workplace",
        "Эрүүл ажлын орчин",
        "healthy",
        "🟢🟢",
        "Good. Stress and the work environment are both stable. Keep it up.",
    ),
    "healthy_attention": DiagnosisEntry(
        "Healthy workplace",
        "Ерөнхийдөө эрүүл",
        "healthy",
        "🟢🟡",
        "Good; pay a little attention to workplace culture.",
    ),
    "attention_healthy": DiagnosisEntry(
        "Healthy workplace",
        "Ерөнхийдөө эрүүл",
        "healthy",
        "🟡🟢",
        "Good; pay a little attention to stress management.",
    ),
    "attention_attention": DiagnosisEntry(
        "Healthy workplace",
        "Анхаарал шаардах",
        "healthy",
        "🟡🟡",
        "Generally good, but stress and culture both need small improvements.",
    ),
}

FALLBACK_DIAGNOSIS = DiagnosisEntry(
    "Mixed indicators",
    "Холимог үзүүлэлт",
    "moderate",
    "🟡",
    "Stress and culture levels need attention.",
)


def diagnosis_key(stress_level: str, culture_level: str) -> str:
    return f"{stress_level}_{culture_level}"


def lookup_diagnosis(stress_level: str, culture_level: str) -> CombinedDiagnosis:
    entry = DIAGNOSIS_MATRIX.get(diagnosis_key(stress_level, culture_level), FALLBACK_DIAGNOSIS)
    return CombinedDiagnosis(
        stress_level=stress_level,
        culture_level=culture_level,
        diagnosis=entry.diagnosis,
        diagnosis_mn=entry.diagnosis_mn,
        severity=entry.severity,
        icon=entry.icon,
        recommendation=entry.recommendation,
    )


def build_combined_diagnosis(scores: Sequence[CategoryScore]) -> CombinedDiagnosis | None:
    if len(scores) < 2:
        return None
    return lookup_diagnosis(
        scores[STRESS_CATEGORY_INDEX].level,
        scores[CULTURE_CATEGORY_INDEX].level,
    )
