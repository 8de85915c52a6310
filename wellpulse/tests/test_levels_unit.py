import pytest

from wellpulse.interpretation.levels import classify_score


@pytest.mark.parametrize(
    ("score", "level", "color"),
    [
        (5.0, "healthy", "green"),
        (4.2, "healthy", "green"),
        (4.19, "attention", "yellow"),
        (3.4, "attention", "yellow"),
        (3.39, "risk", "orange"),
        (2.6, "risk", "orange"),
        (2.59, "high-risk", "red"),
        (1.0, "high-risk", "red"),
        (0.0, "high-risk", "red"),
    ],
)
def test_classify_score_threshold_ladder(score: float, level: str, color: str) -> None:
    info = classify_score(score)
    assert info.level == level
    assert info.color == color
    assert info.icon
    assert info.label_mn


def test_level_is_monotonic_in_score() -> None:
    ladder = ["high-risk", "risk", "attention", "healthy"]
    scores = [x / 100 for x in range(100, 501, 7)]
    ranks = [ladder.index(classify_score(score).level) for score in scores]
    assert ranks == sorted(ranks)
