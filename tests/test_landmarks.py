import math
import random

import pytest

from sadhana_coach.exceptions import ValidationError
from sadhana_coach.landmarks import (
    LANDMARK_COUNT,
    BodyLandmark,
    Landmark,
    PoseLandmarks,
    calculate_angle,
    calculate_distance,
    is_visible,
    midpoint,
    parse_frame,
)


def test_body_landmark_indices_match_blazepose():
    assert LANDMARK_COUNT == 33
    assert BodyLandmark.NOSE == 0
    assert BodyLandmark.LEFT_SHOULDER == 11
    assert BodyLandmark.RIGHT_HIP == 24
    assert BodyLandmark.RIGHT_FOOT_INDEX == 32


def test_right_angle():
    a, b, c = Landmark(1, 0), Landmark(0, 0), Landmark(0, 1)
    assert calculate_angle(a, b, c) == pytest.approx(90.0)


def test_straight_line_is_180():
    a, b, c = Landmark(0.2, 0.3), Landmark(0.3, 0.3), Landmark(0.4, 0.3)
    assert calculate_angle(a, b, c) == pytest.approx(180.0)


def test_reflex_difference_folds_into_interior_angle():
    a = Landmark(math.cos(math.radians(170)), math.sin(math.radians(170)))
    c = Landmark(math.cos(math.radians(-170)), math.sin(math.radians(-170)))
    assert calculate_angle(a, Landmark(0, 0), c) == pytest.approx(20.0)


def test_angle_is_symmetric_and_bounded():
    rng = random.Random(11)
    for _ in range(200):
        a, b, c = (Landmark(rng.random(), rng.random()) for _ in range(3))
        forward = calculate_angle(a, b, c)
        assert 0.0 <= forward <= 180.0
        assert forward == pytest.approx(calculate_angle(c, b, a))


def test_distance_and_midpoint():
    a, b = Landmark(0.1, 0.1), Landmark(0.4, 0.5)
    assert calculate_distance(a, b) == pytest.approx(0.5)
    mid = midpoint(a, b)
    assert (mid.x, mid.y) == pytest.approx((0.25, 0.3))


@pytest.mark.parametrize("point, expected", [
    (None, False),
    (Landmark(0.5, 0.5), False),
    (Landmark(0.5, 0.5, visibility=0.5), False),
    (Landmark(0.5, 0.5, visibility=0.51), True),
])
def test_visibility(point, expected):
    assert is_visible(point) is expected


def test_visibility_threshold_is_configurable():
    point = Landmark(0.5, 0.5, visibility=0.3)
    assert is_visible(point, threshold=0.2)
    assert not is_visible(point)


def test_from_dict_accepts_vis_alias():
    lm = Landmark.from_dict({"x": 0.1, "y": 0.2, "vis": 0.8})
    assert lm == Landmark(0.1, 0.2, 0.0, 0.8)


def test_from_dict_rejects_malformed_points():
    with pytest.raises(ValidationError):
        Landmark.from_dict({"x": 0.1})
    with pytest.raises(ValidationError):
        Landmark.from_dict({"x": "left", "y": 0.2})


def test_parse_frame_keeps_missing_points():
    frame = parse_frame([{"x": 0.1, "y": 0.2, "visibility": 0.9}, None])
    assert frame[1] is None
    assert parse_frame(None) == []


def test_pose_landmarks_tolerates_short_frames():
    pose = PoseLandmarks([Landmark(0.5, 0.1, visibility=0.9)])

    assert pose.get(BodyLandmark.NOSE) is not None
    assert pose.get(BodyLandmark.LEFT_ANKLE) is None
    assert pose.visible(BodyLandmark.NOSE)
    assert not pose.visible(BodyLandmark.NOSE, BodyLandmark.LEFT_HIP)
    with pytest.raises(KeyError):
        pose[BodyLandmark.LEFT_HIP]
