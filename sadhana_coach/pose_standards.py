"""
Asana Standards and Thresholds for Pose Scoring.

Defines the geometric tolerance bands, point values, and accuracy floors
used by the per-pose evaluators. Centralizes all "magic numbers" for easy tuning.

Distances are in normalized image coordinates; angles are in degrees.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class MountainPoseStandards:
    """Tadasana: stacked, level, feet hip-width apart."""

    # Spinal line (|nose.x - hip_center.x|)
    SPINE_TIGHT: float = 0.03
    SPINE_LOOSE: float = 0.06
    SPINE_POINTS: int = 40
    SPINE_PARTIAL_POINTS: int = 25

    # Shoulder level (|left.y - right.y|)
    SHOULDER_TIGHT: float = 0.02
    SHOULDER_LOOSE: float = 0.04
    SHOULDER_POINTS: int = 30
    SHOULDER_PARTIAL_POINTS: int = 20

    # Hip level (|left.y - right.y|)
    HIP_TIGHT: float = 0.02
    HIP_POINTS: int = 30

    # Ankle separation (|left.x - right.x|), exclusive band
    FEET_MIN: float = 0.05
    FEET_MAX: float = 0.15
    FEET_POINTS: int = 40

    ACCURACY_FLOOR: int = 60


@dataclass(frozen=True)
class WarriorIIStandards:
    """Virabhadrasana II: straight arms, front knee at 90, straight back leg."""

    # Arm straightness (|elbow angle - 180|, both arms)
    ARM_TIGHT: float = 10.0
    ARM_LOOSE: float = 20.0
    ARM_POINTS: int = 35
    ARM_PARTIAL_POINTS: int = 25

    # Front (left) knee bend (|knee angle - 90|)
    FRONT_KNEE_TARGET: float = 90.0
    FRONT_KNEE_TIGHT: float = 10.0
    FRONT_KNEE_LOOSE: float = 20.0
    FRONT_KNEE_SHALLOW: float = 110.0  # > 110 = not bent enough
    FRONT_KNEE_POINTS: int = 35
    FRONT_KNEE_PARTIAL_POINTS: int = 25

    # Back (right) leg straightness
    BACK_LEG_MIN_ANGLE: float = 160.0
    BACK_LEG_POINTS: int = 30

    ACCURACY_FLOOR: int = 65


@dataclass(frozen=True)
class TreePoseStandards:
    """Vrikshasana: foot lifted, torso centered, hands in prayer or overhead."""

    # Ankle distance (lifted foot)
    LIFT_TIGHT: float = 0.3
    LIFT_LOOSE: float = 0.2
    LIFT_POINTS: int = 40
    LIFT_PARTIAL_POINTS: int = 30

    # Torso alignment (|nose.x - hip_center.x|)
    TORSO_TIGHT: float = 0.04
    TORSO_POINTS: int = 35

    # Hands
    PRAYER_MAX_DISTANCE: float = 0.1
    PRAYER_POINTS: int = 25
    OVERHEAD_MARGIN: float = 0.1  # wrists this far above the shoulder line
    OVERHEAD_POINTS: int = 20

    ACCURACY_FLOOR: int = 65


@dataclass(frozen=True)
class DownwardDogStandards:
    """Adho Mukha Svanasana: inverted V with long arms and legs."""

    # Hip angle (shoulder-hip-knee), matches the catalog keypoint range
    HIP_MIN: float = 90.0
    HIP_MAX: float = 120.0
    HIP_LOOSE_MARGIN: float = 15.0
    HIP_POINTS: int = 40
    HIP_PARTIAL_POINTS: int = 25

    # Arm line (wrist-shoulder-hip)
    ARM_LINE_MIN: float = 160.0
    ARM_LINE_LOOSE_MIN: float = 135.0
    ARM_LINE_POINTS: int = 30
    ARM_LINE_PARTIAL_POINTS: int = 20

    # Legs (hip-knee-ankle)
    LEG_MIN_ANGLE: float = 160.0
    LEG_POINTS: int = 30

    # Hips above shoulders (image y grows downward)
    HIP_LIFT_POINTS: int = 30

    ACCURACY_FLOOR: int = 60


# Singleton instances
MOUNTAIN_STANDARDS = MountainPoseStandards()
WARRIOR_II_STANDARDS = WarriorIIStandards()
TREE_STANDARDS = TreePoseStandards()
DOWNWARD_DOG_STANDARDS = DownwardDogStandards()


# ============================================
# SCORING CONSTANTS
# ============================================

MIN_ACCURACY = 50
MAX_ACCURACY = 95
MAX_SUBSCORE = 100

# Pose without a dedicated evaluator
GENERIC_BASE_ACCURACY = 75.0
GENERIC_VARIATION = 7.5

# Empty frame
NEUTRAL_SCORE = 50

DEFAULT_JITTER_SPREAD = 3.0
