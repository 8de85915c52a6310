from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


Level = Literal["healthy", "attention", "risk", "high-risk"]
LevelColor = Literal["green", "yellow", "orange", "red"]

HEALTHY_MIN = 4.2
ATTENTION_MIN = 3.4
RISK_MIN = 2.6


@dataclass(frozen=True)
class LevelInfo:
    level: Level
    label: str
    label_mn: str
    color: LevelColor
    icon: str

    def to_dict(self) -> dict[str, str]:
        return {
            "level": self.level,
            "label": self.label,
            "label_mn": self.label_mn,
            "color": self.color,
            "icon": self.icon,
        }


LEVELS: dict[str, LevelInfo] = {
    "healthy": LevelInfo("healthy", "Healthy, stable", "Эрүүл, тогтвортой", "green", "🟢"),
    "attention": LevelInfo("attention", "Needs attention", "Анхаарал шаардах", "yellow", "🟡"),
    "risk": LevelInfo("risk", "Elevated risk", "Эрсдэл нэмэгдсэн", "orange", "🟠"),
    "high-risk": LevelInfo("high-risk", "High risk", "Өндөр эрсдэл", "red", "🔴"),
}


def classify_score(score: float) -> LevelInfo:
    if score >= HEALTHY_MIN:
        return LEVELS["healthy"]
    if score >= ATTENTION_MIN:
        return LEVELS["attention"]
    if score >= RISK_MIN:
        return LEVELS["risk"]
    return LEVELS["high-risk"]
