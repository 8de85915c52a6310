from __future__ import annotations

import json
from typing import Any, Dict, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

TrafficLight = Literal["Green", "Amber", "Red"]


class SurveyAnswer(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    question_id: str = Field(validation_alias=AliasChoices("question_id", "questionId"))
    answer: Any = None

    @field_validator("question_id", mode="before")
    @classmethod
    def _coerce_question_id(cls, value: Any) -> str:
        if value is None:
            raise ValueError("question_id is required")
        return str(value)

    def numeric_value(self) -> Optional[int]:
        """Return the answer as an int in [1, 5], or None when it carries no signal."""
        return parse_answer_value(self.answer)


class QuestionRef(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    question_id: str = Field(validation_alias=AliasChoices("question_id", "questionId", "id"))
    display_order: int = Field(ge=1, validation_alias=AliasChoices("display_order", "displayOrder"))

    @field_validator("question_id", mode="before")
    @classmethod
    def _coerce_question_id(cls, value: Any) -> str:
        if value is None:
            raise ValueError("question_id is required")
        return str(value)


class DomainSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")

    score: float
    weighted_score: float
    flag: TrafficLight


class InterpretationSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")

    overall_index: float
    risk_level: str
    domains: Dict[str, DomainSummary] = Field(default_factory=dict)
    recommendation_level: str


def parse_answer_value(raw: Any) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not raw.is_integer():
            return None
        value = int(raw)
    else:
        text = _decode_stored_answer(str(raw))
        if not text:
            return None
        try:
            value = int(text)
        except ValueError:
            try:
                as_float = float(text)
            except ValueError:
                return None
            if not as_float.is_integer():
                return None
            value = int(as_float)
    if value < 1 or value > 5:
        return None
    return value


def _decode_stored_answer(text: str) -> str:
    # Stored answers are JSON-encoded upstream ("\"4\"" or "4").
    stripped = text.strip()
    if stripped.startswith('"') and stripped.endswith('"') and len(stripped) >= 2:
        try:
            decoded = json.loads(stripped)
        except ValueError:
            return stripped
        return str(decoded).strip()
    return stripped
