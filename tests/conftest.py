import pytest

from sadhana_coach.landmarks import LANDMARK_COUNT, BodyLandmark as BL, Landmark
from sadhana_coach.pose_analyzer import PoseAnalyzer, no_jitter


def make_frame(points, visibility=0.9, size=LANDMARK_COUNT):
    """
    Build a landmark frame. Listed points are visible; every other slot holds
    an invisible placeholder.
    """
    frame = [Landmark(x=0.5, y=0.5, visibility=0.0) for _ in range(size)]
    for part, (x, y) in points.items():
        frame[part] = Landmark(x=x, y=y, visibility=visibility)
    return frame


MOUNTAIN_PERFECT = {
    BL.NOSE: (0.50, 0.15),
    BL.LEFT_SHOULDER: (0.42, 0.30),
    BL.RIGHT_SHOULDER: (0.58, 0.30),
    BL.LEFT_HIP: (0.45, 0.55),
    BL.RIGHT_HIP: (0.55, 0.55),
    BL.LEFT_ANKLE: (0.45, 0.95),
    BL.RIGHT_ANKLE: (0.55, 0.95),
}

WARRIOR_II_PERFECT = {
    BL.LEFT_SHOULDER: (0.40, 0.30),
    BL.LEFT_ELBOW: (0.30, 0.30),
    BL.LEFT_WRIST: (0.20, 0.30),
    BL.RIGHT_SHOULDER: (0.60, 0.30),
    BL.RIGHT_ELBOW: (0.70, 0.30),
    BL.RIGHT_WRIST: (0.80, 0.30),
    # front leg: horizontal thigh, vertical shin
    BL.LEFT_HIP: (0.45, 0.60),
    BL.LEFT_KNEE: (0.30, 0.60),
    BL.LEFT_ANKLE: (0.30, 0.80),
    # back leg: straight line
    BL.RIGHT_HIP: (0.55, 0.60),
    BL.RIGHT_KNEE: (0.65, 0.75),
    BL.RIGHT_ANKLE: (0.75, 0.90),
}

TREE_PERFECT = {
    BL.NOSE: (0.50, 0.15),
    BL.LEFT_SHOULDER: (0.42, 0.30),
    BL.RIGHT_SHOULDER: (0.58, 0.30),
    BL.LEFT_WRIST: (0.49, 0.40),
    BL.RIGHT_WRIST: (0.51, 0.40),
    BL.LEFT_HIP: (0.45, 0.55),
    BL.RIGHT_HIP: (0.55, 0.55),
    BL.LEFT_ANKLE: (0.45, 0.95),
    BL.RIGHT_ANKLE: (0.52, 0.60),
}

DOWNWARD_DOG_PERFECT = {
    side_part: xy
    for parts, xy in (
        ((BL.LEFT_WRIST, BL.RIGHT_WRIST), (0.10, 0.70)),
        ((BL.LEFT_SHOULDER, BL.RIGHT_SHOULDER), (0.25, 0.55)),
        ((BL.LEFT_HIP, BL.RIGHT_HIP), (0.50, 0.30)),
        ((BL.LEFT_KNEE, BL.RIGHT_KNEE), (0.80, 0.50)),
        ((BL.LEFT_ANKLE, BL.RIGHT_ANKLE), (0.95, 0.60)),
    )
    for side_part in parts
}


@pytest.fixture
def analyzer():
    return PoseAnalyzer(jitter=no_jitter)


def to_dicts(frame):
    return [
        {"x": lm.x, "y": lm.y, "z": lm.z, "visibility": lm.visibility}
        for lm in frame
    ]
