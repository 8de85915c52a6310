from wellpulse.interpretation.diagnosis import (
    DIAGNOSIS_MATRIX,
    build_combined_diagnosis,
    lookup_diagnosis,
)
from wellpulse.interpretation.domain import CATEGORIES
from wellpulse.interpretation.scoring import score_categories, score_category


def test_matrix_entries_resolve_by_stress_and_culture_level() -> None:
    systemic = lookup_diagnosis("high-risk", "high-risk")
    assert systemic.diagnosis == "Systemic burnout risk"
    assert systemic.severity == "critical"
    assert systemic.icon == "🔴🔴"
    assert not systemic.is_fallback

    overload = lookup_diagnosis("high-risk", "healthy")
    assert overload.diagnosis == "Individual overload"
    assert overload.severity == "high"

    toxic = lookup_diagnosis("healthy", "high-risk")
    assert toxic.diagnosis == "Cultural toxicity risk"

    latent = lookup_diagnosis("attention", "risk")
    assert latent.diagnosis == "Latent psychosocial risk"
    assert latent.severity == "moderate"

    assert lookup_diagnosis("healthy", "healthy").severity == "healthy"


def test_every_level_pair_resolves_without_raising() -> None:
    levels = ["healthy", "attention", "risk", "high-risk"]
    for stress in levels:
        for culture in levels:
            result = lookup_diagnosis(stress, culture)
            assert result.stress_level == stress
            assert result.culture_level == culture
            if f"{stress}_{culture}" not in DIAGNOSIS_MATRIX:
                assert result.is_fallback
                assert result.diagnosis == "Mixed indicators"
                assert result.severity == "moderate"


def test_unmapped_pair_uses_mixed_indicator_fallback() -> None:
    result = lookup_diagnosis("risk", "high-risk")
    assert result.is_fallback
    assert result.diagnosis == "Mixed indicators"
    assert result.diagnosis_mn == "Холимог үзүүлэлт"
    assert result.severity == "moderate"
    assert result.to_dict()["stress_level"] == "risk"


def test_combined_diagnosis_requires_two_categories() -> None:
    only_one = [score_category(CATEGORIES[0], {1: 5})]
    assert build_combined_diagnosis(only_one) is None
    assert build_combined_diagnosis([]) is None

    scores = score_categories({order: 5 for order in range(1, 61)})
    diagnosis = build_combined_diagnosis(scores)
    assert diagnosis is not None
    assert diagnosis.diagnosis == "Healthy workplace"
