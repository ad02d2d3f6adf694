"""
Yoga pose scoring engine.

Scores a single frame of body landmarks against a target asana and produces
an accuracy estimate with categorized feedback.

Features:
- One evaluator per supported asana, registered by pose id
- Generic baseline for asanas without a dedicated evaluator
- Graceful degradation: checks whose landmarks are not visible are skipped
- Injectable jitter source so scores can be made reproducible
"""
import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from sadhana_coach.landmarks import (
    DEFAULT_VISIBILITY_THRESHOLD,
    BodyLandmark as BL,
    Landmark,
    PoseLandmarks,
    calculate_angle,
    calculate_distance,
    midpoint,
)
from sadhana_coach.logging_config import get_logger
from sadhana_coach.pose_standards import (
    DEFAULT_JITTER_SPREAD,
    DOWNWARD_DOG_STANDARDS,
    GENERIC_BASE_ACCURACY,
    GENERIC_VARIATION,
    MAX_ACCURACY,
    MAX_SUBSCORE,
    MIN_ACCURACY,
    MOUNTAIN_STANDARDS,
    NEUTRAL_SCORE,
    TREE_STANDARDS,
    WARRIOR_II_STANDARDS,
)

logger = get_logger(__name__)

Jitter = Callable[[float], float]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class UniformJitter:
    """Symmetric uniform noise in [-spread, spread]."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def __call__(self, spread: float) -> float:
        return self._rng.uniform(-spread, spread)


def no_jitter(spread: float) -> float:
    return 0.0


class Category(str, Enum):
    ALIGNMENT = "alignment"
    BALANCE = "balance"
    TECHNIQUE = "technique"


@dataclass
class PoseScore:
    alignment: int
    balance: int
    technique: int
    overall: int

    def as_dict(self) -> Dict[str, int]:
        return {
            "alignment": self.alignment,
            "balance": self.balance,
            "technique": self.technique,
            "overall": self.overall,
        }


@dataclass
class PoseAnalysisResult:
    accuracy: int
    feedback: str
    specific_feedback: List[str]
    improvements: List[str]
    score: PoseScore

    def as_dict(self) -> Dict:
        return {
            "accuracy": self.accuracy,
            "feedback": self.feedback,
            "specific_feedback": list(self.specific_feedback),
            "improvements": list(self.improvements),
            "score": self.score.as_dict(),
        }


@dataclass
class Scorecard:
    """
    Accumulates check results for one evaluation.

    Every check declares its full point value up front with expect(), whether
    or not its landmarks are visible. A sub-score is the share of expected
    points earned in that category, capped at 100. A category with no checks
    takes the mean of the categories that have them.
    """

    earned: Dict[Category, float] = field(default_factory=lambda: {c: 0.0 for c in Category})
    possible: Dict[Category, float] = field(default_factory=lambda: {c: 0.0 for c in Category})
    specific_feedback: List[str] = field(default_factory=list)
    improvements: List[str] = field(default_factory=list)

    def expect(self, category: Category, max_points: float) -> None:
        self.possible[category] += max_points

    def passed(self, category: Category, points: float, feedback: str) -> None:
        self.earned[category] += points
        self.specific_feedback.append(feedback)

    def failed(self, improvement: str) -> None:
        self.improvements.append(improvement)

    def subscores(self) -> Dict[Category, float]:
        scored = {
            c: min(float(MAX_SUBSCORE), 100.0 * self.earned[c] / self.possible[c])
            for c in Category
            if self.possible[c] > 0
        }
        fallback = sum(scored.values()) / len(scored) if scored else 0.0
        return {c: scored.get(c, fallback) for c in Category}


EvaluatorFn = Callable[[PoseLandmarks, Scorecard], None]


@dataclass(frozen=True)
class PoseEvaluator:
    pose_id: str
    evaluate: EvaluatorFn
    accuracy_floor: int
    encouragement: str


POSE_EVALUATORS: Dict[str, PoseEvaluator] = {}


def register_pose_evaluator(pose_id: str, accuracy_floor: int, encouragement: str):
    """Decorator registering an evaluator function for a pose id."""

    def decorator(fn: EvaluatorFn) -> EvaluatorFn:
        POSE_EVALUATORS[pose_id] = PoseEvaluator(
            pose_id=pose_id,
            evaluate=fn,
            accuracy_floor=accuracy_floor,
            encouragement=encouragement,
        )
        return fn

    return decorator


# ============================================
# POSE EVALUATORS
# ============================================

@register_pose_evaluator(
    "mountain_pose",
    accuracy_floor=MOUNTAIN_STANDARDS.ACCURACY_FLOOR,
    encouragement="Good posture! Keep focusing on alignment.",
)
def evaluate_mountain_pose(pose: PoseLandmarks, card: Scorecard) -> None:
    s = MOUNTAIN_STANDARDS

    # Spinal line: head stacked over hips
    card.expect(Category.ALIGNMENT, s.SPINE_POINTS)
    if pose.visible(BL.NOSE, BL.LEFT_HIP, BL.RIGHT_HIP):
        offset = abs(pose[BL.NOSE].x - pose.hip_center().x)
        if offset < s.SPINE_TIGHT:
            card.passed(Category.ALIGNMENT, s.SPINE_POINTS, "Perfect spinal alignment")
        elif offset < s.SPINE_LOOSE:
            card.passed(Category.ALIGNMENT, s.SPINE_PARTIAL_POINTS, "Good spinal alignment")
        else:
            card.failed("Align your head directly over your hips")

    # Shoulder level
    card.expect(Category.ALIGNMENT, s.SHOULDER_POINTS)
    if pose.visible(BL.LEFT_SHOULDER, BL.RIGHT_SHOULDER):
        tilt = abs(pose[BL.LEFT_SHOULDER].y - pose[BL.RIGHT_SHOULDER].y)
        if tilt < s.SHOULDER_TIGHT:
            card.passed(Category.ALIGNMENT, s.SHOULDER_POINTS, "Shoulders perfectly level")
        elif tilt < s.SHOULDER_LOOSE:
            card.passed(Category.ALIGNMENT, s.SHOULDER_PARTIAL_POINTS, "Shoulders nearly level")
        else:
            card.failed("Level your shoulders - imagine a string pulling them evenly")

    # Hip level
    card.expect(Category.BALANCE, s.HIP_POINTS)
    if pose.visible(BL.LEFT_HIP, BL.RIGHT_HIP):
        tilt = abs(pose[BL.LEFT_HIP].y - pose[BL.RIGHT_HIP].y)
        if tilt < s.HIP_TIGHT:
            card.passed(Category.BALANCE, s.HIP_POINTS, "Hips level and squared")
        else:
            card.failed("Keep hips level and squared forward")

    # Feet hip-width apart
    card.expect(Category.BALANCE, s.FEET_POINTS)
    if pose.visible(BL.LEFT_ANKLE, BL.RIGHT_ANKLE):
        stance = abs(pose[BL.LEFT_ANKLE].x - pose[BL.RIGHT_ANKLE].x)
        if s.FEET_MIN < stance < s.FEET_MAX:
            card.passed(Category.BALANCE, s.FEET_POINTS, "Perfect feet positioning")
        elif stance >= s.FEET_MAX:
            card.failed("Bring feet closer together, hip-width apart")
        else:
            card.failed("Widen your stance slightly")


@register_pose_evaluator(
    "warrior_ii",
    accuracy_floor=WARRIOR_II_STANDARDS.ACCURACY_FLOOR,
    encouragement="Strong warrior pose! Focus on your foundation.",
)
def evaluate_warrior_ii(pose: PoseLandmarks, card: Scorecard) -> None:
    s = WARRIOR_II_STANDARDS

    # Arms extended parallel to the floor
    card.expect(Category.ALIGNMENT, s.ARM_POINTS)
    if pose.visible(
        BL.LEFT_SHOULDER, BL.LEFT_ELBOW, BL.LEFT_WRIST,
        BL.RIGHT_SHOULDER, BL.RIGHT_ELBOW, BL.RIGHT_WRIST,
    ):
        left_bend = abs(calculate_angle(pose[BL.LEFT_SHOULDER], pose[BL.LEFT_ELBOW], pose[BL.LEFT_WRIST]) - 180)
        right_bend = abs(calculate_angle(pose[BL.RIGHT_SHOULDER], pose[BL.RIGHT_ELBOW], pose[BL.RIGHT_WRIST]) - 180)
        if left_bend < s.ARM_TIGHT and right_bend < s.ARM_TIGHT:
            card.passed(Category.ALIGNMENT, s.ARM_POINTS, "Arms perfectly extended")
        elif left_bend < s.ARM_LOOSE and right_bend < s.ARM_LOOSE:
            card.passed(Category.ALIGNMENT, s.ARM_PARTIAL_POINTS, "Good arm extension")
        else:
            card.failed("Straighten your arms and keep them parallel to the floor")

    # Front (left) knee at 90 degrees
    card.expect(Category.TECHNIQUE, s.FRONT_KNEE_POINTS)
    if pose.visible(BL.LEFT_HIP, BL.LEFT_KNEE, BL.LEFT_ANKLE):
        knee = calculate_angle(pose[BL.LEFT_HIP], pose[BL.LEFT_KNEE], pose[BL.LEFT_ANKLE])
        deviation = abs(knee - s.FRONT_KNEE_TARGET)
        if deviation < s.FRONT_KNEE_TIGHT:
            card.passed(Category.TECHNIQUE, s.FRONT_KNEE_POINTS, "Perfect front leg bend")
        elif deviation < s.FRONT_KNEE_LOOSE:
            card.passed(Category.TECHNIQUE, s.FRONT_KNEE_PARTIAL_POINTS, "Good front leg bend")
        elif knee > s.FRONT_KNEE_SHALLOW:
            card.failed("Bend your front knee deeper - aim for 90 degrees")
        else:
            card.failed("Don't let your front knee go past your ankle")

    # Back (right) leg straight
    card.expect(Category.BALANCE, s.BACK_LEG_POINTS)
    if pose.visible(BL.RIGHT_HIP, BL.RIGHT_KNEE, BL.RIGHT_ANKLE):
        knee = calculate_angle(pose[BL.RIGHT_HIP], pose[BL.RIGHT_KNEE], pose[BL.RIGHT_ANKLE])
        if knee > s.BACK_LEG_MIN_ANGLE:
            card.passed(Category.BALANCE, s.BACK_LEG_POINTS, "Back leg perfectly straight")
        else:
            card.failed("Straighten your back leg and engage your thigh muscles")


@register_pose_evaluator(
    "tree_pose",
    accuracy_floor=TREE_STANDARDS.ACCURACY_FLOOR,
    encouragement="Stay strong in your tree pose. Find your drishti (focal point).",
)
def evaluate_tree_pose(pose: PoseLandmarks, card: Scorecard) -> None:
    s = TREE_STANDARDS

    # Lifted foot
    card.expect(Category.BALANCE, s.LIFT_POINTS)
    if pose.visible(BL.LEFT_ANKLE, BL.RIGHT_ANKLE):
        lift = calculate_distance(pose[BL.LEFT_ANKLE], pose[BL.RIGHT_ANKLE])
        if lift > s.LIFT_TIGHT:
            card.passed(Category.BALANCE, s.LIFT_POINTS, "Excellent balance and leg lift")
        elif lift > s.LIFT_LOOSE:
            card.passed(Category.BALANCE, s.LIFT_PARTIAL_POINTS, "Good balance")
        else:
            card.failed("Lift your foot higher on your standing leg (avoid the knee)")

    # Torso centered
    card.expect(Category.ALIGNMENT, s.TORSO_POINTS)
    if pose.visible(BL.NOSE, BL.LEFT_HIP, BL.RIGHT_HIP):
        offset = abs(pose[BL.NOSE].x - pose.hip_center().x)
        if offset < s.TORSO_TIGHT:
            card.passed(Category.ALIGNMENT, s.TORSO_POINTS, "Perfect torso alignment")
        else:
            card.failed("Keep your torso centered over your standing leg")

    # Hands in prayer or overhead
    card.expect(Category.TECHNIQUE, s.PRAYER_POINTS)
    if pose.visible(BL.LEFT_WRIST, BL.RIGHT_WRIST):
        left_wrist, right_wrist = pose[BL.LEFT_WRIST], pose[BL.RIGHT_WRIST]
        if calculate_distance(left_wrist, right_wrist) < s.PRAYER_MAX_DISTANCE:
            card.passed(Category.TECHNIQUE, s.PRAYER_POINTS, "Beautiful hand position in prayer")
        elif (
            pose.visible(BL.LEFT_SHOULDER, BL.RIGHT_SHOULDER)
            and midpoint(left_wrist, right_wrist).y
            < midpoint(pose[BL.LEFT_SHOULDER], pose[BL.RIGHT_SHOULDER]).y - s.OVERHEAD_MARGIN
        ):
            card.passed(Category.TECHNIQUE, s.OVERHEAD_POINTS, "Good overhead arm extension")
        else:
            card.failed("Bring your palms together at your heart or reach your arms overhead")


def _first_visible_side(pose: PoseLandmarks, left: Sequence[BL], right: Sequence[BL]) -> Optional[List[Landmark]]:
    for side in (left, right):
        if pose.visible(*side):
            return [pose[part] for part in side]
    return None


@register_pose_evaluator(
    "downward_dog",
    accuracy_floor=DOWNWARD_DOG_STANDARDS.ACCURACY_FLOOR,
    encouragement="Keep pressing the floor away and breathe into your back body.",
)
def evaluate_downward_dog(pose: PoseLandmarks, card: Scorecard) -> None:
    s = DOWNWARD_DOG_STANDARDS

    # Inverted V at the hips
    card.expect(Category.ALIGNMENT, s.HIP_POINTS)
    points = _first_visible_side(
        pose,
        (BL.LEFT_SHOULDER, BL.LEFT_HIP, BL.LEFT_KNEE),
        (BL.RIGHT_SHOULDER, BL.RIGHT_HIP, BL.RIGHT_KNEE),
    )
    if points:
        hip = calculate_angle(*points)
        if s.HIP_MIN <= hip <= s.HIP_MAX:
            card.passed(Category.ALIGNMENT, s.HIP_POINTS, "Strong inverted V through the hips")
        elif s.HIP_MIN - s.HIP_LOOSE_MARGIN <= hip <= s.HIP_MAX + s.HIP_LOOSE_MARGIN:
            card.passed(Category.ALIGNMENT, s.HIP_PARTIAL_POINTS, "Good hip angle")
        elif hip < s.HIP_MIN:
            card.failed("Walk your feet back a little to open the hip angle")
        else:
            card.failed("Lift your hips higher toward the ceiling")

    # Long line from wrists through shoulders to hips
    card.expect(Category.ALIGNMENT, s.ARM_LINE_POINTS)
    points = _first_visible_side(
        pose,
        (BL.LEFT_WRIST, BL.LEFT_SHOULDER, BL.LEFT_HIP),
        (BL.RIGHT_WRIST, BL.RIGHT_SHOULDER, BL.RIGHT_HIP),
    )
    if points:
        arm_line = calculate_angle(*points)
        if arm_line >= s.ARM_LINE_MIN:
            card.passed(Category.ALIGNMENT, s.ARM_LINE_POINTS, "Long line from wrists to hips")
        elif arm_line >= s.ARM_LINE_LOOSE_MIN:
            card.passed(Category.ALIGNMENT, s.ARM_LINE_PARTIAL_POINTS, "Good arm extension")
        else:
            card.failed("Press the floor away and lengthen through your arms")

    # Legs straight
    card.expect(Category.TECHNIQUE, s.LEG_POINTS)
    points = _first_visible_side(
        pose,
        (BL.LEFT_HIP, BL.LEFT_KNEE, BL.LEFT_ANKLE),
        (BL.RIGHT_HIP, BL.RIGHT_KNEE, BL.RIGHT_ANKLE),
    )
    if points:
        if calculate_angle(*points) > s.LEG_MIN_ANGLE:
            card.passed(Category.TECHNIQUE, s.LEG_POINTS, "Legs long and straight")
        else:
            card.failed("Work toward straighter legs, sending your heels toward the mat")

    # Hips above shoulders
    card.expect(Category.BALANCE, s.HIP_LIFT_POINTS)
    if pose.visible(BL.LEFT_HIP, BL.RIGHT_HIP, BL.LEFT_SHOULDER, BL.RIGHT_SHOULDER):
        shoulders = midpoint(pose[BL.LEFT_SHOULDER], pose[BL.RIGHT_SHOULDER])
        if pose.hip_center().y < shoulders.y:
            card.passed(Category.BALANCE, s.HIP_LIFT_POINTS, "Hips lifted above the shoulders")
        else:
            card.failed("Press your hips up and back to form the inverted V")


# ============================================
# ANALYZER
# ============================================

def _neutral_result() -> PoseAnalysisResult:
    return PoseAnalysisResult(
        accuracy=NEUTRAL_SCORE,
        feedback="Position yourself in view of the camera",
        specific_feedback=[],
        improvements=["Make sure your full body is visible"],
        score=PoseScore(
            alignment=NEUTRAL_SCORE,
            balance=NEUTRAL_SCORE,
            technique=NEUTRAL_SCORE,
            overall=NEUTRAL_SCORE,
        ),
    )


class PoseAnalyzer:
    """
    Scores landmark frames against registered pose evaluators.

    Args:
        jitter: callable returning a random offset in [-spread, spread].
            Defaults to UniformJitter(); pass no_jitter for exact scores.
        jitter_spread: spread of the final accuracy jitter.
        visibility_threshold: minimum landmark confidence for a check to run.
        evaluators: pose id -> evaluator table, defaults to POSE_EVALUATORS.
    """

    def __init__(
        self,
        jitter: Optional[Jitter] = None,
        jitter_spread: float = DEFAULT_JITTER_SPREAD,
        visibility_threshold: float = DEFAULT_VISIBILITY_THRESHOLD,
        evaluators: Optional[Dict[str, PoseEvaluator]] = None,
    ):
        self.jitter = jitter if jitter is not None else UniformJitter()
        self.jitter_spread = jitter_spread
        self.visibility_threshold = visibility_threshold
        self.evaluators = evaluators if evaluators is not None else POSE_EVALUATORS

    def supports(self, pose_id: str) -> bool:
        return pose_id in self.evaluators

    def score_frame(self, landmarks: Sequence[Optional[Landmark]], pose_id: str) -> PoseAnalysisResult:
        """Run the pose evaluator without jitter or clamping."""
        evaluator = self.evaluators[pose_id]
        card = Scorecard()
        evaluator.evaluate(PoseLandmarks(landmarks, self.visibility_threshold), card)

        subscores = card.subscores()
        alignment = subscores[Category.ALIGNMENT]
        balance = subscores[Category.BALANCE]
        technique = subscores[Category.TECHNIQUE]
        overall = round_half_up((alignment + balance + technique) / 3)

        if card.specific_feedback:
            feedback = ". ".join(card.specific_feedback) + "."
        else:
            feedback = evaluator.encouragement

        return PoseAnalysisResult(
            accuracy=max(evaluator.accuracy_floor, overall),
            feedback=feedback,
            specific_feedback=card.specific_feedback,
            improvements=card.improvements,
            score=PoseScore(
                alignment=round_half_up(alignment),
                balance=round_half_up(balance),
                technique=round_half_up(technique),
                overall=overall,
            ),
        )

    def _generic_result(self) -> PoseAnalysisResult:
        return PoseAnalysisResult(
            accuracy=GENERIC_BASE_ACCURACY + self.jitter(GENERIC_VARIATION),
            feedback="Hold the pose steady and focus on your breath.",
            specific_feedback=["Good posture"],
            improvements=["Keep breathing steadily"],
            score=PoseScore(alignment=75, balance=75, technique=75, overall=75),
        )

    def analyze(self, landmarks: Optional[Sequence[Optional[Landmark]]], pose_id: str) -> PoseAnalysisResult:
        """
        Score one frame against the target pose.

        Returns a fixed neutral result for an empty frame. Otherwise the
        accuracy is jittered, clamped to [MIN_ACCURACY, MAX_ACCURACY] and
        rounded to an int.
        """
        if not landmarks:
            logger.debug(f"Empty landmark frame for pose {pose_id}")
            return _neutral_result()

        if self.supports(pose_id):
            result = self.score_frame(landmarks, pose_id)
        else:
            logger.debug(f"No evaluator for pose {pose_id}, using generic baseline")
            result = self._generic_result()

        accuracy = result.accuracy + self.jitter(self.jitter_spread)
        result.accuracy = max(MIN_ACCURACY, min(MAX_ACCURACY, round_half_up(accuracy)))

        logger.debug(
            f"Pose analysis - pose: {pose_id}, accuracy: {result.accuracy}, "
            f"score: {result.score.as_dict()}, improvements: {len(result.improvements)}"
        )
        return result
