"""
Body landmark primitives for pose scoring.

Landmarks follow the MediaPipe BlazePose topology (33 points) in normalized
image coordinates. Geometry helpers work on 2D x/y only.
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterable, List, Mapping, Optional, Sequence

import numpy as np

from sadhana_coach.exceptions import ValidationError

DEFAULT_VISIBILITY_THRESHOLD = 0.5


class BodyLandmark(IntEnum):
    """BlazePose landmark indices."""
    NOSE = 0
    LEFT_EYE_INNER = 1
    LEFT_EYE = 2
    LEFT_EYE_OUTER = 3
    RIGHT_EYE_INNER = 4
    RIGHT_EYE = 5
    RIGHT_EYE_OUTER = 6
    LEFT_EAR = 7
    RIGHT_EAR = 8
    MOUTH_LEFT = 9
    MOUTH_RIGHT = 10
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_PINKY = 17
    RIGHT_PINKY = 18
    LEFT_INDEX = 19
    RIGHT_INDEX = 20
    LEFT_THUMB = 21
    RIGHT_THUMB = 22
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28
    LEFT_HEEL = 29
    RIGHT_HEEL = 30
    LEFT_FOOT_INDEX = 31
    RIGHT_FOOT_INDEX = 32


LANDMARK_COUNT = len(BodyLandmark)


@dataclass(frozen=True)
class Landmark:
    x: float
    y: float
    z: float = 0.0
    visibility: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Landmark":
        """Build a landmark from a JSON-style dict ("vis" accepted as an alias of "visibility")."""
        try:
            visibility = data.get("visibility", data.get("vis"))
            return cls(
                x=float(data["x"]),
                y=float(data["y"]),
                z=float(data.get("z", 0.0)),
                visibility=None if visibility is None else float(visibility),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ValidationError(f"Invalid landmark {data!r}: {e}")

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)


def parse_frame(raw: Optional[Iterable[Optional[Mapping[str, Any]]]]) -> List[Optional[Landmark]]:
    """Convert raw landmark dicts into Landmarks. Missing entries stay None."""
    if raw is None:
        return []
    return [None if item is None else Landmark.from_dict(item) for item in raw]


def calculate_angle(a: Landmark, b: Landmark, c: Landmark) -> float:
    """
    Interior angle at vertex b formed by rays b->a and b->c, in degrees [0, 180].
    """
    radians = (
        np.arctan2(c.y - b.y, c.x - b.x)
        - np.arctan2(a.y - b.y, a.x - b.x)
    )
    angle = abs(float(np.degrees(radians)))
    if angle > 180.0:
        angle = 360.0 - angle
    return angle


def calculate_distance(a: Landmark, b: Landmark) -> float:
    return float(np.linalg.norm(b.as_array() - a.as_array()))


def midpoint(a: Landmark, b: Landmark) -> Landmark:
    return Landmark(x=(a.x + b.x) / 2, y=(a.y + b.y) / 2)


def is_visible(point: Optional[Landmark], threshold: float = DEFAULT_VISIBILITY_THRESHOLD) -> bool:
    """True if the landmark exists and its confidence exceeds the threshold."""
    return (
        point is not None
        and point.visibility is not None
        and point.visibility > threshold
    )


class PoseLandmarks:
    """Named access to a single frame of landmarks."""

    def __init__(
        self,
        frame: Sequence[Optional[Landmark]],
        visibility_threshold: float = DEFAULT_VISIBILITY_THRESHOLD,
    ):
        self.frame = frame
        self.visibility_threshold = visibility_threshold

    def get(self, part: BodyLandmark) -> Optional[Landmark]:
        if part < len(self.frame):
            return self.frame[part]
        return None

    def __getitem__(self, part: BodyLandmark) -> Landmark:
        point = self.get(part)
        if point is None:
            raise KeyError(part.name)
        return point

    def visible(self, *parts: BodyLandmark) -> bool:
        return all(is_visible(self.get(p), self.visibility_threshold) for p in parts)

    def hip_center(self) -> Landmark:
        return midpoint(self[BodyLandmark.LEFT_HIP], self[BodyLandmark.RIGHT_HIP])
