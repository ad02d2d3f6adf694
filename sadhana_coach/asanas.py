"""
Asana catalog.

Static pose definitions with the joint-angle keypoints used for validation,
plus dosha-based recommendations.
"""
from dataclasses import dataclass
from typing import Dict, List, Mapping, Tuple

from sadhana_coach.dosha_questions import Dosha
from sadhana_coach.exceptions import UnknownPoseError, ValidationError

DIFFICULTIES = ("beginner", "intermediate", "advanced")

GOAL_BENEFITS: Dict[str, Tuple[str, ...]] = {
    "calm": ("calming", "stress_relief", "grounding"),
    "energy": ("energizing", "strengthening", "stamina"),
    "strength": ("strengthening", "back_strengthening"),
    "flexibility": ("stretching", "stretches_back"),
}

MAX_RECOMMENDATIONS = 5


@dataclass(frozen=True)
class PoseKeypoint:
    angle_range: Tuple[float, float]
    description: str

    def contains(self, angle: float) -> bool:
        low, high = self.angle_range
        return low <= angle <= high


@dataclass(frozen=True)
class Asana:
    id: str
    name: str
    sanskrit_name: str
    balances_dosha: Tuple[Dosha, ...]
    benefits: Tuple[str, ...]
    difficulty: str
    duration_seconds: int
    instructions: Tuple[str, ...]
    pose_keypoints: Mapping[str, PoseKeypoint]

    def as_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "sanskrit_name": self.sanskrit_name,
            "balances_dosha": [d.value for d in self.balances_dosha],
            "benefits": list(self.benefits),
            "difficulty": self.difficulty,
            "duration_seconds": self.duration_seconds,
            "instructions": list(self.instructions),
            "pose_keypoints": {
                name: {"angle_range": list(kp.angle_range), "description": kp.description}
                for name, kp in self.pose_keypoints.items()
            },
        }


ASANAS: Tuple[Asana, ...] = (
    Asana(
        id="mountain_pose",
        name="Mountain Pose",
        sanskrit_name="Tadasana",
        balances_dosha=(Dosha.VATA, Dosha.PITTA, Dosha.KAPHA),
        benefits=("grounding", "posture", "awareness"),
        difficulty="beginner",
        duration_seconds=30,
        instructions=(
            "Stand tall with feet hip-width apart",
            "Ground down through all four corners of feet",
            "Engage leg muscles and lift kneecaps",
            "Lengthen spine and crown of head toward ceiling",
            "Relax shoulders away from ears",
            "Breathe deeply and hold the pose",
        ),
        pose_keypoints={
            "spine_alignment": PoseKeypoint((170, 190), "Spine should be straight and aligned"),
            "shoulder_level": PoseKeypoint((175, 185), "Shoulders should be level and relaxed"),
        },
    ),
    Asana(
        id="child_pose",
        name="Child's Pose",
        sanskrit_name="Balasana",
        balances_dosha=(Dosha.VATA, Dosha.PITTA),
        benefits=("calming", "stress_relief", "stretches_back"),
        difficulty="beginner",
        duration_seconds=45,
        instructions=(
            "Kneel on the floor with big toes touching",
            "Sit back on your heels",
            "Separate knees about hip-width apart",
            "Fold forward, extending arms in front or alongside body",
            "Rest forehead on the mat",
            "Breathe deeply and relax",
        ),
        pose_keypoints={
            "hip_knee_angle": PoseKeypoint((45, 90), "Knees should be comfortably bent"),
            "spine_curve": PoseKeypoint((120, 150), "Natural curve in spine as you fold forward"),
        },
    ),
    Asana(
        id="warrior_ii",
        name="Warrior II",
        sanskrit_name="Virabhadrasana II",
        balances_dosha=(Dosha.KAPHA,),
        benefits=("strengthening", "stamina", "focus"),
        difficulty="intermediate",
        duration_seconds=30,
        instructions=(
            "Step left foot back about 4 feet",
            "Turn left foot out 90 degrees, right foot slightly in",
            "Bend right knee directly over ankle",
            "Extend arms parallel to floor",
            "Gaze over right fingertips",
            "Keep torso upright and breathe steadily",
        ),
        pose_keypoints={
            "front_knee_angle": PoseKeypoint((80, 100), "Front knee should be at 90 degrees over ankle"),
            "arm_extension": PoseKeypoint((170, 190), "Arms should be parallel to floor"),
            "back_leg_straight": PoseKeypoint((160, 180), "Back leg should be straight and strong"),
        },
    ),
    Asana(
        id="downward_dog",
        name="Downward Facing Dog",
        sanskrit_name="Adho Mukha Svanasana",
        balances_dosha=(Dosha.KAPHA, Dosha.VATA),
        benefits=("strengthening", "stretching", "energizing"),
        difficulty="beginner",
        duration_seconds=45,
        instructions=(
            "Start on hands and knees",
            "Tuck toes under and lift hips up and back",
            "Straighten legs as much as comfortable",
            "Press hands firmly into mat",
            "Create inverted V shape with body",
            "Breathe deeply and hold",
        ),
        pose_keypoints={
            "hip_angle": PoseKeypoint((90, 120), "Hips should create peak of inverted V"),
            "shoulder_alignment": PoseKeypoint((160, 180), "Shoulders should be aligned over wrists"),
        },
    ),
    Asana(
        id="tree_pose",
        name="Tree Pose",
        sanskrit_name="Vrikshasana",
        balances_dosha=(Dosha.VATA,),
        benefits=("balance", "focus", "grounding"),
        difficulty="intermediate",
        duration_seconds=30,
        instructions=(
            "Stand in Mountain Pose",
            "Shift weight to left foot",
            "Place right foot on inner left thigh or calf (avoid knee)",
            "Press foot into leg and leg into foot",
            "Bring palms together at heart center or overhead",
            "Find a focal point and breathe steadily",
        ),
        pose_keypoints={
            "standing_leg_straight": PoseKeypoint((170, 180), "Standing leg should be straight and strong"),
            "lifted_leg_angle": PoseKeypoint((60, 120), "Lifted leg should be positioned comfortably"),
        },
    ),
    Asana(
        id="cobra_pose",
        name="Cobra Pose",
        sanskrit_name="Bhujangasana",
        balances_dosha=(Dosha.KAPHA, Dosha.VATA),
        benefits=("back_strengthening", "heart_opening", "energizing"),
        difficulty="beginner",
        duration_seconds=20,
        instructions=(
            "Lie face down with forehead on mat",
            "Place palms under shoulders",
            "Press pubic bone down and engage legs",
            "Press hands down and lift chest",
            "Keep shoulders away from ears",
            "Breathe deeply and hold",
        ),
        pose_keypoints={
            "back_extension": PoseKeypoint((15, 45), "Gentle backbend, not too deep"),
            "shoulder_position": PoseKeypoint((45, 90), "Shoulders should be away from ears"),
        },
    ),
)

_ASANAS_BY_ID: Dict[str, Asana] = {asana.id: asana for asana in ASANAS}


def get_asana(pose_id: str) -> Asana:
    try:
        return _ASANAS_BY_ID[pose_id]
    except KeyError:
        raise UnknownPoseError(f"Unknown asana: {pose_id!r}")


def recommend_asanas(
    dominant_dosha,
    goal: str = "energy",
    difficulty: str = "all",
) -> List[Asana]:
    """
    Asanas that balance the given dosha, filtered by difficulty and goal.

    Returns at most MAX_RECOMMENDATIONS entries in catalog order.
    """
    try:
        dosha = Dosha(dominant_dosha)
    except ValueError:
        raise ValidationError(f"Unknown dosha: {dominant_dosha!r}")
    if goal not in GOAL_BENEFITS:
        raise ValidationError(f"Goal must be one of {tuple(GOAL_BENEFITS)}, got {goal!r}")
    if difficulty != "all" and difficulty not in DIFFICULTIES:
        raise ValidationError(f"Difficulty must be 'all' or one of {DIFFICULTIES}, got {difficulty!r}")

    matches = [a for a in ASANAS if dosha in a.balances_dosha]
    if difficulty != "all":
        matches = [a for a in matches if a.difficulty == difficulty]

    wanted = GOAL_BENEFITS[goal]
    matches = [a for a in matches if any(b in wanted for b in a.benefits)]

    return matches[:MAX_RECOMMENDATIONS]
