from __future__ import annotations

"""
Static psychosocial domain model.

Design intent:
- Category membership and item impact are keyed by 0-based survey position
  (display_order - 1), never inferred from question text.
- The model is validated once at import; a broken table is a programmer error.
"""

import math
from dataclasses import dataclass
from typing import Literal, Mapping, Sequence


ImpactClass = Literal["protective", "neutral", "risk", "critical"]

ITEMS_PER_CATEGORY = 12
CANONICAL_SLOTS = 60
WEIGHT_TOLERANCE = 1e-9

IMPACT_MULTIPLIERS: dict[str, float] = {
    "protective": 1.0,
    "neutral": 1.0,
    "risk": 1.3,
    "critical": 1.6,
}

# Item outcome at or below this value counts as a flagged risk/critical item.
FLAGGED_ANSWER_MAX = 2


class DomainConfigError(ValueError):
    """Raised when the static domain model violates its invariants."""


@dataclass(frozen=True)
class CategoryDefinition:
    key: str
    label: str
    label_mn: str
    start_index: int
    end_index: int
    weight: float

    def positions(self) -> range:
        return range(self.start_index, self.end_index + 1)


CATEGORIES: tuple[CategoryDefinition, ...] = (
    CategoryDefinition(
        key="mental_health_stress",
        label="Mental Health & Stress",
        label_mn="Сэтгэл зүйн эрүүл мэнд & стресс",
        start_index=0,
        end_index=11,
        weight=0.30,
    ),
    CategoryDefinition(
        key="workplace_environment",
        label="Workplace Psychological Environment",
        label_mn="Байгууллагын сэтгэл зүйн орчин & соёл",
        start_index=12,
        end_index=23,
        weight=0.25,
    ),
    CategoryDefinition(
        key="personal_state",
        label="Personal Psychological State",
        label_mn="Хувь хүний сэтгэл зүйн төлөв",
        start_index=24,
        end_index=35,
        weight=0.15,
    ),
    CategoryDefinition(
        key="behavior_interaction",
        label="Behavior & Interaction Style",
        label_mn="Зан төлөв & харилцааны хэв маяг",
        start_index=36,
        end_index=47,
        weight=0.15,
    ),
    CategoryDefinition(
        key="wellbeing_balance",
        label="Overall Wellbeing & Work-Life Balance",
        label_mn="Ерөнхий wellbeing & амьдрал–ажлын тэнцвэр",
        start_index=48,
        end_index=59,
        weight=0.15,
    ),
)

STRESS_CATEGORY_INDEX = 0
CULTURE_CATEGORY_INDEX = 1
BEHAVIOR_CATEGORY_INDEX = 3
WELLBEING_CATEGORY_INDEX = 4


_P, _N, _R, _C = "protective", "neutral", "risk", "critical"

# One row per category, in position order.
_IMPACT_ROWS: list[list[str]] = [
    # Mental Health & Stress: pressure, overload, stress relief, calm, irritability,
    # stability, worry, balance, morning exhaustion, rest, recovery, weekend rumination.
    [_R, _R, _R, _P, _C, _P, _R, _P, _C, _P, _P, _C],
    # Workplace Psychological Environment: authenticity, speaking up, mistakes,
    # trust in leadership, peer trust, unfair treatment, respect, communication,
    # conflict handling, support, org wellbeing focus, isolation.
    [_P, _P, _P, _R, _P, _C, _P, _N, _P, _P, _P, _C],
    # Personal Psychological State
    [_P, _P, _P, _P, _P, _P, _P, _P, _R, _P, _P, _R],
    # Behavior & Interaction Style: ends with work withdrawal.
    [_P, _P, _R, _P, _P, _R, _P, _P, _P, _P, _P, _C],
    # Overall Wellbeing & Work-Life Balance
    [_P, _P, _P, _C, _P, _C, _P, _P, _P, _P, _R, _C],
]

ITEM_IMPACT_MAP: Mapping[int, ImpactClass] = {
    position: impact  # type: ignore[misc]
    for row_index, row in enumerate(_IMPACT_ROWS)
    for position, impact in enumerate(row, start=row_index * ITEMS_PER_CATEGORY)
}


def impact_class_for_position(position: int) -> ImpactClass:
    """Impact class for a 0-based position; anything off the canonical table is neutral."""
    return ITEM_IMPACT_MAP.get(position, "neutral")


def category_index_for_position(position: int) -> int | None:
    for index, category in enumerate(CATEGORIES):
        if category.start_index <= position <= category.end_index:
            return index
    return None


def validate_domain_weights(categories: Sequence[CategoryDefinition]) -> None:
    total = math.fsum(item.weight for item in categories)
    if abs(total - 1.0) > WEIGHT_TOLERANCE:
        raise DomainConfigError(f"Domain weights must sum to 1.0, got {total!r}")
    for item in categories:
        if item.weight < 0:
            raise DomainConfigError(f"Domain weight for {item.key} must be non-negative")


def validate_category_layout(categories: Sequence[CategoryDefinition]) -> None:
    expected_start = 0
    for item in categories:
        if item.start_index != expected_start:
            raise DomainConfigError(
                f"Category {item.key} must start at position {expected_start}, got {item.start_index}"
            )
        if item.end_index - item.start_index + 1 != ITEMS_PER_CATEGORY:
            raise DomainConfigError(
                f"Category {item.key} must span {ITEMS_PER_CATEGORY} positions"
            )
        expected_start = item.end_index + 1
    if expected_start != CANONICAL_SLOTS:
        raise DomainConfigError(
            f"Categories must cover {CANONICAL_SLOTS} positions, cover {expected_start}"
        )


def validate_impact_map(impact_map: Mapping[int, str]) -> None:
    if set(impact_map) != set(range(CANONICAL_SLOTS)):
        raise DomainConfigError(
            f"Item impact table must cover positions 0..{CANONICAL_SLOTS - 1} exactly"
        )
    unknown = sorted({value for value in impact_map.values() if value not in IMPACT_MULTIPLIERS})
    if unknown:
        raise DomainConfigError(f"Unknown impact classes: {unknown}")


def validate_domain_model(
    categories: Sequence[CategoryDefinition] = CATEGORIES,
    impact_map: Mapping[int, str] = ITEM_IMPACT_MAP,
) -> None:
    validate_domain_weights(categories)
    validate_category_layout(categories)
    validate_impact_map(impact_map)


validate_domain_model()
