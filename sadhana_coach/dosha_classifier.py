"""
Dosha classification engine.

Tallies questionnaire answers into a dosha score vector and ranks the three
doshas into a dominant/secondary constitution. Also provides the linear
assessment flow used by the onboarding questionnaire.
"""
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence, Union

from sadhana_coach.dosha_questions import (
    DOSHA_PRIORITY,
    DOSHA_QUESTIONS,
    OPTION_KEYS,
    Dosha,
    Question,
)
from sadhana_coach.exceptions import IncompleteAnswerError, ValidationError
from sadhana_coach.logging_config import get_logger

logger = get_logger(__name__)

AnswerSet = Mapping[Union[int, str], str]


@dataclass(frozen=True)
class DoshaScores:
    """Number of answers pointing at each dosha."""

    vata: int = 0
    pitta: int = 0
    kapha: int = 0

    def __getitem__(self, dosha: Union[Dosha, str]) -> int:
        return getattr(self, Dosha(dosha).value)

    @property
    def total(self) -> int:
        return self.vata + self.pitta + self.kapha

    def as_dict(self) -> Dict[str, int]:
        return {"vata": self.vata, "pitta": self.pitta, "kapha": self.kapha}


@dataclass(frozen=True)
class DoshaClassification:
    dominant: Dosha
    secondary: Dosha
    scores: DoshaScores

    def as_dict(self) -> Dict:
        return {
            "dominant": self.dominant.value,
            "secondary": self.secondary.value,
            "scores": self.scores.as_dict(),
        }


def _parse_question_id(raw_id) -> Optional[int]:
    # JSON object keys arrive as strings; bools and floats are not ids
    if isinstance(raw_id, bool):
        return None
    if isinstance(raw_id, int):
        return raw_id
    if isinstance(raw_id, str) and raw_id.strip().isdigit():
        return int(raw_id.strip())
    return None


def score_answers(
    answers: AnswerSet,
    questions: Sequence[Question] = DOSHA_QUESTIONS,
) -> DoshaScores:
    """
    Tally answers into a DoshaScores vector.

    Answers referencing unknown question ids are ignored. Option keys the
    question does not offer are ignored with a warning.
    """
    by_id = {q.id: q for q in questions}
    counts = {dosha: 0 for dosha in DOSHA_PRIORITY}

    for raw_id, option in answers.items():
        question = by_id.get(_parse_question_id(raw_id))
        if question is None:
            logger.debug(f"Skipping answer for unknown question id: {raw_id!r}")
            continue
        if not isinstance(option, str) or option not in question.options:
            logger.warning(f"Skipping invalid option {option!r} for question {question.id}")
            continue
        counts[question.dosha_for(option)] += 1

    return DoshaScores(
        vata=counts[Dosha.VATA],
        pitta=counts[Dosha.PITTA],
        kapha=counts[Dosha.KAPHA],
    )


def classify(scores: DoshaScores) -> DoshaClassification:
    """
    Rank doshas by score. Ties resolve in DOSHA_PRIORITY order, so an
    all-zero vector classifies as vata with pitta secondary.
    """
    if any(scores[dosha] < 0 for dosha in DOSHA_PRIORITY):
        raise ValidationError(f"Dosha scores must be non-negative: {scores.as_dict()}")

    ranked = sorted(DOSHA_PRIORITY, key=lambda dosha: -scores[dosha])
    return DoshaClassification(dominant=ranked[0], secondary=ranked[1], scores=scores)


@dataclass
class DoshaAssessment:
    """
    Step-by-step questionnaire.

    The assessment moves through the questions in order. Each question must be
    answered before advancing; advancing past the last question completes the
    assessment and produces the classification.
    """

    questions: Sequence[Question] = DOSHA_QUESTIONS
    current_index: int = 0
    answers: Dict[int, str] = field(default_factory=dict)
    result: Optional[DoshaClassification] = None

    def __post_init__(self):
        if not self.questions:
            raise ValidationError("An assessment needs at least one question")

    @property
    def current_question(self) -> Question:
        return self.questions[self.current_index]

    @property
    def is_complete(self) -> bool:
        return self.result is not None

    @property
    def progress(self) -> float:
        return (self.current_index + 1) / len(self.questions) * 100

    def answer(self, option: str) -> None:
        if option not in OPTION_KEYS:
            raise ValidationError(f"Answer must be one of {OPTION_KEYS}, got {option!r}")
        self.answers[self.current_question.id] = option

    def next(self) -> Optional[DoshaClassification]:
        """Advance to the next question, or complete the assessment from the last one."""
        if self.current_question.id not in self.answers:
            raise IncompleteAnswerError(
                f"Question {self.current_question.id} must be answered before continuing"
            )

        if self.current_index < len(self.questions) - 1:
            self.current_index += 1
            return None

        self.result = classify(score_answers(self.answers, self.questions))
        logger.info(
            f"Dosha assessment complete - dominant: {self.result.dominant.value}, "
            f"secondary: {self.result.secondary.value}, scores: {self.result.scores.as_dict()}"
        )
        return self.result

    def previous(self) -> None:
        if self.current_index > 0:
            self.current_index -= 1
