import random

import pytest

from sadhana_coach.dosha_classifier import (
    DoshaAssessment,
    DoshaScores,
    classify,
    score_answers,
)
from sadhana_coach.dosha_questions import DOSHA_QUESTIONS, Dosha, questions_as_dicts
from sadhana_coach.exceptions import IncompleteAnswerError, ValidationError


def test_question_bank_has_twenty_three_option_questions():
    assert len(DOSHA_QUESTIONS) == 20
    assert [q.id for q in DOSHA_QUESTIONS] == list(range(1, 21))
    for q in DOSHA_QUESTIONS:
        assert q.dosha_for("a") is Dosha.VATA
        assert q.dosha_for("b") is Dosha.PITTA
        assert q.dosha_for("c") is Dosha.KAPHA


def test_all_a_answers_classify_as_vata_with_pitta_secondary():
    answers = {q.id: "a" for q in DOSHA_QUESTIONS}

    scores = score_answers(answers)
    assert scores == DoshaScores(vata=20, pitta=0, kapha=0)

    result = classify(scores)
    assert result.dominant is Dosha.VATA
    assert result.secondary is Dosha.PITTA
    assert result.scores is scores


def test_unknown_question_ids_are_ignored():
    answers = {1: "a", 2: "b", 99: "c", "not-a-number": "a", "3": "c"}

    scores = score_answers(answers)

    assert scores.as_dict() == {"vata": 1, "pitta": 1, "kapha": 1}
    assert scores.total == 3


def test_string_question_ids_are_accepted():
    scores = score_answers({"1": "b", "2": "b"})
    assert scores.pitta == 2


def test_invalid_option_is_skipped():
    scores = score_answers({1: "a", 2: "z"})
    assert scores.total == 1


def test_non_string_options_are_skipped():
    scores = score_answers({1: ["a"], 2: None, 3: {"b": 1}, 4: "c"})
    assert scores.as_dict() == {"vata": 0, "pitta": 0, "kapha": 1}


def test_float_and_bool_ids_are_not_question_ids():
    assert score_answers({1.9: "a", True: "b", False: "c"}).total == 0
    assert score_answers({" 2 ": "a", "2.0": "b"}).as_dict() == {"vata": 1, "pitta": 0, "kapha": 0}


def test_sum_matches_number_of_known_answers():
    rng = random.Random(7)
    for _ in range(50):
        ids = rng.sample(range(1, 30), rng.randint(0, 25))
        answers = {qid: rng.choice("abc") for qid in ids}
        known = [qid for qid in ids if 1 <= qid <= 20]

        assert score_answers(answers).total == len(known)


def test_classification_ignores_answer_order():
    answers = [(q.id, "abc"[i % 3]) for i, q in enumerate(DOSHA_QUESTIONS)]
    shuffled = answers[:]
    random.Random(3).shuffle(shuffled)

    assert classify(score_answers(dict(answers))) == classify(score_answers(dict(shuffled)))


def test_tie_breaks_follow_priority_order():
    result = classify(DoshaScores(vata=5, pitta=5, kapha=0))
    assert (result.dominant, result.secondary) == (Dosha.VATA, Dosha.PITTA)

    result = classify(DoshaScores(vata=2, pitta=7, kapha=7))
    assert (result.dominant, result.secondary) == (Dosha.PITTA, Dosha.KAPHA)


def test_zero_vector_classifies_without_error():
    result = classify(DoshaScores())
    assert result.dominant is Dosha.VATA
    assert result.secondary is Dosha.PITTA


def test_kapha_dominant():
    result = classify(DoshaScores(vata=3, pitta=6, kapha=11))
    assert result.as_dict() == {
        "dominant": "kapha",
        "secondary": "pitta",
        "scores": {"vata": 3, "pitta": 6, "kapha": 11},
    }


def test_negative_scores_rejected():
    with pytest.raises(ValidationError):
        classify(DoshaScores(vata=-1))


def test_questions_as_dicts_hides_dosha_mapping():
    payload = questions_as_dicts()
    assert payload[0]["options"]["a"] == "Slender, light, I find it hard to gain weight"
    assert "dosha" not in str(payload[0]["options"])


class TestDoshaAssessment:

    def test_cannot_advance_without_answer(self):
        assessment = DoshaAssessment()

        with pytest.raises(IncompleteAnswerError):
            assessment.next()

        assert assessment.current_index == 0
        assert not assessment.is_complete

    def test_invalid_option_rejected(self):
        assessment = DoshaAssessment()
        with pytest.raises(ValidationError):
            assessment.answer("d")

    def test_previous_stays_in_bounds(self):
        assessment = DoshaAssessment()
        assessment.previous()
        assert assessment.current_index == 0

        assessment.answer("a")
        assessment.next()
        assert assessment.current_index == 1
        assessment.previous()
        assert assessment.current_index == 0

    def test_completing_all_questions_classifies(self):
        assessment = DoshaAssessment()

        for _ in range(len(DOSHA_QUESTIONS) - 1):
            assessment.answer("b")
            assert assessment.next() is None

        assert assessment.progress == 100
        assessment.answer("b")
        result = assessment.next()

        assert assessment.is_complete
        assert result.dominant is Dosha.PITTA
        assert result.secondary is Dosha.VATA
        assert result.scores.pitta == 20

    def test_changing_an_earlier_answer(self):
        questions = DOSHA_QUESTIONS[:2]
        assessment = DoshaAssessment(questions=questions)

        assessment.answer("a")
        assessment.next()
        assessment.previous()
        assessment.answer("c")
        assessment.next()
        assessment.answer("c")
        result = assessment.next()

        assert result.scores.as_dict() == {"vata": 0, "pitta": 0, "kapha": 2}
