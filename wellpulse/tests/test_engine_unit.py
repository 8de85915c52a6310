import logging
from dataclasses import replace

import pytest

from wellpulse.internal_core.config import load_config
from wellpulse.interpretation.early_warning import EarlyWarning
from wellpulse.interpretation.engine import analyze, determine_recommendation_level, traffic_light
from wellpulse.interpretation.scoring import InterpretationError


def _layout() -> list[tuple[str, int]]:
    return [(f"q{order}", order) for order in range(1, 61)]


def _per_category(values: list[int]) -> list[tuple[str, str]]:
    responses = []
    for category_index in range(5):
        start = category_index * 12 + 1
        for offset, value in enumerate(values):
            responses.append((f"q{start + offset}", str(value)))
    return responses


def _warning(severity: str) -> EarlyWarning:
    return EarlyWarning(
        category="Test",
        category_key="test",
        rule="test",
        severity=severity,  # type: ignore[arg-type]
        message="",
        action_required="",
    )


def test_balanced_healthy_submission() -> None:
    result = analyze(_per_category([4, 4, 4, 4, 5]), _layout())

    assert result.overall_index == 4.2
    assert result.overall_score == 4.2
    assert result.overall_level.level == "healthy"
    assert all(item.average_score == 4.2 for item in result.categories)
    assert result.early_warnings == []
    assert result.compliance.rating == "low"
    assert result.recommendation_level == "none"
    assert result.social_rating.composite_score == 84.0
    assert result.social_rating.rating == "B"
    assert result.combined_diagnosis is not None
    assert result.combined_diagnosis.diagnosis == "Healthy workplace"

    summary = result.summary
    assert summary.overall_index == 4.2
    assert summary.risk_level == "healthy"
    assert summary.recommendation_level == "none"
    assert {item.flag for item in summary.domains.values()} == {"Green"}
    assert set(summary.domains) == {item.label for item in result.categories}


def test_uniformly_low_submission_needs_immediate_action() -> None:
    result = analyze(_per_category([2, 2, 3, 3, 2]), _layout())

    assert result.overall_index == 2.4
    assert result.overall_level.level == "high-risk"
    assert result.compliance.rating == "critical"
    assert result.recommendation_level == "immediate-action"
    assert any(item.severity == "critical" for item in result.early_warnings)
    assert result.early_warnings[-1].category_key == "systemic"
    assert result.combined_diagnosis is not None
    assert result.combined_diagnosis.diagnosis == "Systemic burnout risk"
    assert {item.flag for item in result.summary.domains.values()} == {"Red"}


def test_analysis_is_deterministic_apart_from_timestamp() -> None:
    responses = _per_category([3, 4, 2, 5, 1, 4, 3])
    first = analyze(responses, _layout()).to_dict()
    second = analyze(list(reversed(responses)), _layout()).to_dict()
    first.pop("generated_at")
    second.pop("generated_at")
    assert first == second


def test_to_dict_carries_data_output_summary() -> None:
    payload = analyze(_per_category([4, 4, 4, 4, 5]), _layout()).to_dict()
    assert payload["data_output"]["risk_level"] == "healthy"
    assert payload["data_output"]["recommendation_level"] == "none"
    assert payload["compliance"]["risk_level"] == "low"
    assert payload["generated_at"]
    assert len(payload["categories"]) == 5


def test_empty_submission_still_produces_a_result() -> None:
    result = analyze([], _layout())
    assert result.overall_score == 0
    assert result.overall_index == 0
    assert result.overall_level.level == "high-risk"
    assert result.recommendation_level == "immediate-action"
    assert len(result.categories) == 5


def test_camel_case_payload_is_accepted() -> None:
    questions = [{"id": f"q{order}", "displayOrder": order} for order in range(1, 61)]
    responses = [{"questionId": f"q{order}", "answer": '"5"'} for order in range(1, 61)]
    result = analyze(responses, questions)
    assert result.overall_index == 5.0
    assert result.recommendation_level == "none"


def test_missing_inputs_raise() -> None:
    with pytest.raises(InterpretationError):
        analyze(None, _layout())
    with pytest.raises(InterpretationError):
        analyze([], None)


def test_recommendation_tier_ladder() -> None:
    assert determine_recommendation_level([], 4.0) == "none"
    assert determine_recommendation_level([], 3.99) == "monitor"
    assert determine_recommendation_level([], 3.39) == "action-needed"
    assert determine_recommendation_level([], 2.49) == "immediate-action"
    assert determine_recommendation_level([_warning("info")], 4.5) == "monitor"
    assert determine_recommendation_level([_warning("warning")], 4.5) == "monitor"
    assert determine_recommendation_level([_warning("warning")] * 2, 4.5) == "action-needed"
    assert determine_recommendation_level([_warning("critical")], 4.5) == "immediate-action"


def test_traffic_light_flags() -> None:
    assert traffic_light("green") == "Green"
    assert traffic_light("yellow") == "Amber"
    assert traffic_light("orange") == "Amber"
    assert traffic_light("red") == "Red"


def test_mixed_submission_flags_amber_domains() -> None:
    result = analyze(_per_category([3, 4, 3, 4]), _layout())
    assert result.overall_index == 3.5
    assert {item.flag for item in result.summary.domains.values()} == {"Amber"}
    assert result.summary.risk_level == "attention"


def test_overall_score_rounds_exact_halves_up() -> None:
    responses = [(f"q{order}", "3") for order in range(37, 44)] + [("q44", "4")]
    result = analyze(responses, _layout())
    assert result.overall_score == 3.13
    assert result.categories[3].average_score == 3.13


def test_layout_warning_toggle_silences_engine(caplog) -> None:
    layout = _layout() + [("extra", 61)]
    quiet = replace(load_config(), WELLPULSE_LAYOUT_WARNINGS=False)
    with caplog.at_level(logging.WARNING, logger="wellpulse"):
        analyze([("extra", "5")], layout, config=quiet)
    assert caplog.records == []

    loud = replace(load_config(), WELLPULSE_LAYOUT_WARNINGS=True)
    with caplog.at_level(logging.WARNING, logger="wellpulse"):
        result = analyze([("extra", "5")], layout, config=loud)
    assert "layout_outside_canonical" in caplog.text
    assert result.overall_score == 5.0
