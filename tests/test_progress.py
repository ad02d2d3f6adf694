import pytest

from sadhana_coach.exceptions import ValidationError
from sadhana_coach.progress import (
    RANKS,
    calculate_session_points,
    next_rank,
    rank_for_points,
)


@pytest.mark.parametrize("duration, accuracy, expected", [
    (0, 0, 0),
    (59, 50, 0),
    (60, 50, 10),
    (300, 60, 50),
    (300, 61, 60),
    (300, 80, 60),
    (300, 80.5, 70),
    (185, 95, 50),
])
def test_session_points(duration, accuracy, expected):
    assert calculate_session_points(duration, accuracy) == expected


def test_negative_duration_rejected():
    with pytest.raises(ValidationError):
        calculate_session_points(-1, 90)


def test_ranks_ascend():
    thresholds = [r.points_required for r in RANKS]
    assert thresholds == sorted(thresholds)
    assert thresholds[0] == 0


@pytest.mark.parametrize("points, key", [
    (0, "padatik"),
    (249, "padatik"),
    (250, "ashvarohi"),
    (3500, "ardharathi"),
    (99999, "maharathi"),
    (250000, "maha_maharathi"),
])
def test_rank_for_points(points, key):
    assert rank_for_points(points).key == key


def test_next_rank():
    assert next_rank(0).key == "ashvarohi"
    assert next_rank(7000).key == "ati_rathi"
    assert next_rank(100000) is None


def test_negative_points_rejected():
    with pytest.raises(ValidationError):
        rank_for_points(-5)
