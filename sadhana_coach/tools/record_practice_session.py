"""
Practice session tool for Sadhana Coach.

Converts a finished yoga session into sadhana points and reports the
resulting warrior rank. Persisting the totals is up to the caller.
"""
from sadhana_coach.exceptions import ValidationError
from sadhana_coach.logging_config import get_logger
from sadhana_coach.progress import calculate_session_points, next_rank, rank_for_points

logger = get_logger(__name__)


def record_practice_session(
  current_points: int,
  duration_seconds: float,
  accuracy: float,
) -> dict:
  """
  Award points for a completed session.

  Args:
    current_points: User's sadhana points before this session.
    duration_seconds: Session length.
    accuracy: Final pose accuracy shown to the user (0-100).

  Returns:
    dict: {
      status: "success",
      points_earned: int,
      total_points: int,
      rank: str,
      rank_title: str,
      rank_changed: bool,
      next_rank: str | None,
      points_to_next_rank: int | None,
    } or {status, error_type, message} on error
  """
  logger.info(
    f"Recording practice session - duration: {duration_seconds}s, accuracy: {accuracy}"
  )

  try:
    if current_points < 0:
      raise ValidationError(f"current_points must be non-negative, got {current_points}")
    if not 0 <= accuracy <= 100:
      raise ValidationError(f"accuracy must be between 0 and 100, got {accuracy}")

    earned = calculate_session_points(duration_seconds, accuracy)
    total = current_points + earned

    previous = rank_for_points(current_points)
    current = rank_for_points(total)
    upcoming = next_rank(total)

    if current != previous:
      logger.info(f"Rank advanced: {previous.key} -> {current.key}")

    return {
      "status": "success",
      "points_earned": earned,
      "total_points": total,
      "rank": current.key,
      "rank_title": current.title,
      "rank_changed": current != previous,
      "next_rank": upcoming.key if upcoming else None,
      "points_to_next_rank": upcoming.points_required - total if upcoming else None,
    }

  except ValidationError as ve:
    logger.warning(f"Validation error recording session: {ve}")
    return {
      "status": "error",
      "error_type": "validation",
      "message": str(ve),
    }
