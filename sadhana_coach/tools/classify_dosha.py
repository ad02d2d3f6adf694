"""
Dosha classification tool for Sadhana Coach.

Scores a completed (or partial) questionnaire and returns the ranked
constitution together with reference information for the top two doshas.
"""
from typing import Any, Dict, Mapping

from sadhana_coach.dosha_classifier import classify, score_answers
from sadhana_coach.dosha_questions import DOSHA_INFO, DOSHA_QUESTIONS, Dosha
from sadhana_coach.exceptions import ValidationError
from sadhana_coach.logging_config import get_logger

logger = get_logger(__name__)


def _dosha_summary(dosha: Dosha) -> Dict[str, Any]:
  info = DOSHA_INFO[dosha]
  return {
    "dosha": dosha.value,
    "sanskrit": info.sanskrit,
    "element": info.element,
    "qualities": list(info.qualities),
    "description": info.description,
  }


def classify_dosha(answers: Mapping[Any, str]) -> dict:
  """
  Classify a user's constitution from questionnaire answers.

  Args:
    answers: Mapping of question id (int or numeric string) to option key ("a", "b" or "c").

  Returns:
    dict: {
      status: "success",
      dominant: str,
      secondary: str,
      scores: {vata, pitta, kapha},
      answered: int,
      total_questions: int,
      complete: bool,
      dominant_info: {...},
      secondary_info: {...},
    } or {status, error_type, message} on error
  """
  logger.info("Starting dosha classification")

  try:
    if not isinstance(answers, Mapping):
      raise ValidationError("Answers must be a mapping of question id to option")

    scores = score_answers(answers, DOSHA_QUESTIONS)
    classification = classify(scores)
    total_questions = len(DOSHA_QUESTIONS)

    if scores.total < total_questions:
      logger.warning(
        f"Classifying partial assessment - answered: {scores.total}/{total_questions}"
      )

    logger.info(
      f"Dosha classification complete - dominant: {classification.dominant.value}, "
      f"secondary: {classification.secondary.value}, scores: {scores.as_dict()}"
    )

    return {
      "status": "success",
      **classification.as_dict(),
      "answered": scores.total,
      "total_questions": total_questions,
      "complete": scores.total == total_questions,
      "dominant_info": _dosha_summary(classification.dominant),
      "secondary_info": _dosha_summary(classification.secondary),
    }

  except ValidationError as ve:
    logger.warning(f"Validation error during dosha classification: {ve}")
    return {
      "status": "error",
      "error_type": "validation",
      "message": str(ve),
    }
