"""
Yoga pose analysis tool for Sadhana Coach.

Parses one frame of raw landmarks from the pose-detection pipeline, scores
it against the target asana and returns the feedback payload for the UI.
"""
from typing import Any, Dict, List, Optional

from sadhana_coach.config import settings
from sadhana_coach.exceptions import AnalysisError, ValidationError
from sadhana_coach.landmarks import LANDMARK_COUNT, parse_frame
from sadhana_coach.logging_config import get_logger
from sadhana_coach.pose_analyzer import PoseAnalyzer, UniformJitter, no_jitter

logger = get_logger(__name__)

_analyzer: Optional[PoseAnalyzer] = None


def build_pose_analyzer() -> PoseAnalyzer:
  """Create an analyzer from centralized settings."""
  return PoseAnalyzer(
    jitter=UniformJitter() if settings.pose_jitter_enabled else no_jitter,
    jitter_spread=settings.pose_jitter_spread,
    visibility_threshold=settings.pose_visibility_threshold,
  )


def get_pose_analyzer() -> PoseAnalyzer:
  """Get or create the shared analyzer."""
  global _analyzer
  if _analyzer is None:
    _analyzer = build_pose_analyzer()
    logger.info(
      f"Pose analyzer initialized - evaluators: {sorted(_analyzer.evaluators)}, "
      f"jitter: {settings.pose_jitter_enabled}"
    )
  return _analyzer


def analyze_yoga_pose(
  landmarks: Optional[List[Optional[Dict[str, Any]]]],
  pose_id: str,
  analyzer: Optional[PoseAnalyzer] = None,
) -> dict:
  """
  Analyze one frame of pose landmarks against a target asana.

  Args:
    landmarks: Up to 33 landmark dicts {x, y, z?, visibility?} in BlazePose order.
      Missing points may be null. An empty list yields a neutral result.
    pose_id: Target asana id (e.g., "mountain_pose").
    analyzer: Analyzer to use; defaults to the shared settings-driven analyzer.

  Returns:
    dict: {
      status: "success",
      pose_id: str,
      pose_supported: bool,
      accuracy: int (50-95),
      feedback: str,
      specific_feedback: [str, ...],
      improvements: [str, ...],
      score: {alignment, balance, technique, overall},
    } or {status, error_type, message} on error
  """
  logger.debug(f"Starting pose analysis - pose: {pose_id}", extra={"pose_id": pose_id})

  try:
    if not isinstance(pose_id, str) or not pose_id.strip():
      raise ValidationError("pose_id is required")

    if landmarks is not None and not isinstance(landmarks, list):
      raise ValidationError("landmarks must be a list of landmark objects")

    if landmarks and len(landmarks) > LANDMARK_COUNT:
      raise ValidationError(
        f"Expected at most {LANDMARK_COUNT} landmarks, got {len(landmarks)}"
      )

    frame = parse_frame(landmarks)
    analyzer = analyzer or get_pose_analyzer()

    try:
      result = analyzer.analyze(frame, pose_id)
    except (ArithmeticError, KeyError) as e:
      raise AnalysisError(f"Scoring failed for {pose_id}: {e}")

    return {
      "status": "success",
      "pose_id": pose_id,
      "pose_supported": analyzer.supports(pose_id),
      **result.as_dict(),
    }

  except ValidationError as ve:
    logger.warning(f"Validation error during pose analysis: {ve}")
    return {
      "status": "error",
      "error_type": "validation",
      "message": str(ve),
    }

  except AnalysisError as ae:
    logger.error(f"Pose analysis failed: {ae}", exc_info=True)
    return {
      "status": "error",
      "error_type": "analysis",
      "message": str(ae),
    }
