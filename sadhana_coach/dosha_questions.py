"""
Dosha questionnaire and reference data.

Defines the three dosha categories, their explicit tie-break priority, and
the fixed 20-question Prakriti assessment used by the dosha classifier.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Tuple


class Dosha(str, Enum):
    """Ayurvedic constitution categories."""
    VATA = "vata"
    PITTA = "pitta"
    KAPHA = "kapha"


# Ties in the classifier resolve in this order.
DOSHA_PRIORITY: Tuple[Dosha, ...] = (Dosha.VATA, Dosha.PITTA, Dosha.KAPHA)

OPTION_KEYS: Tuple[str, ...] = ("a", "b", "c")


@dataclass(frozen=True)
class AnswerOption:
    text: str
    dosha: Dosha


@dataclass(frozen=True)
class Question:
    """A single assessment question with exactly three answer options."""

    id: int
    question: str
    options: Mapping[str, AnswerOption]

    def __post_init__(self):
        if tuple(sorted(self.options)) != OPTION_KEYS:
            raise ValueError(
                f"Question {self.id} must offer exactly the options {OPTION_KEYS}, "
                f"got {tuple(sorted(self.options))}"
            )

    def dosha_for(self, option: str) -> Dosha:
        return self.options[option].dosha


@dataclass(frozen=True)
class DoshaInfo:
    sanskrit: str
    element: str
    qualities: Tuple[str, ...]
    description: str


DOSHA_INFO: Dict[Dosha, DoshaInfo] = {
    Dosha.VATA: DoshaInfo(
        sanskrit="वात",
        element="Air & Space",
        qualities=("Light", "Dry", "Cold", "Rough", "Subtle", "Mobile"),
        description="The principle of movement and communication",
    ),
    Dosha.PITTA: DoshaInfo(
        sanskrit="पित्त",
        element="Fire & Water",
        qualities=("Hot", "Sharp", "Light", "Oily", "Liquid", "Mobile"),
        description="The principle of digestion and transformation",
    ),
    Dosha.KAPHA: DoshaInfo(
        sanskrit="कफ",
        element="Earth & Water",
        qualities=("Heavy", "Slow", "Cool", "Oily", "Smooth", "Dense"),
        description="The principle of structure and lubrication",
    ),
}


def _question(qid: int, text: str, vata: str, pitta: str, kapha: str) -> Question:
    return Question(
        id=qid,
        question=text,
        options={
            "a": AnswerOption(vata, Dosha.VATA),
            "b": AnswerOption(pitta, Dosha.PITTA),
            "c": AnswerOption(kapha, Dosha.KAPHA),
        },
    )


DOSHA_QUESTIONS: Tuple[Question, ...] = (
    # Physical traits (Prakriti)
    _question(
        1, "How would you describe your natural body frame?",
        "Slender, light, I find it hard to gain weight",
        "Medium, athletic, good muscle definition",
        "Broad, sturdy, I gain weight easily",
    ),
    _question(
        2, "What is your skin type?",
        "Dry, rough, often cold to touch",
        "Sensitive, warm, prone to rashes or acne",
        "Oily, smooth, soft and cool",
    ),
    _question(
        3, "How would you describe your hair?",
        "Thin, dry, coarse, or curly",
        "Fine, straight, early graying or balding",
        "Thick, lustrous, wavy, and oily",
    ),
    _question(
        4, "What are your eyes like?",
        "Small, dry, dark, or nervous",
        "Medium size, penetrating, light-sensitive",
        "Large, calm, attractive with thick eyelashes",
    ),
    _question(
        5, "How is your appetite?",
        "Variable, I often forget to eat",
        "Strong, I get irritable when hungry",
        "Steady but mild, I can skip meals easily",
    ),
    _question(
        6, "What is your physical stamina like?",
        "Low endurance, I tire easily but recover quickly",
        "Moderate, good stamina but dislike heat",
        "Excellent endurance, slow to start but steady",
    ),
    # Mental and emotional traits (Manas)
    _question(
        7, "How would you describe your temperament?",
        "Anxious, worrying, enthusiastic",
        "Irritable, aggressive, focused",
        "Calm, content, steady",
    ),
    _question(
        8, "How is your memory?",
        "I learn fast but forget quickly",
        "Sharp, clear, good retention",
        "Slow to learn but never forget",
    ),
    _question(
        9, "How do you react to stress?",
        "I become anxious and worried",
        "I become angry and irritated",
        "I withdraw and become silent",
    ),
    _question(
        10, "What are your sleep patterns like?",
        "Light sleeper, toss and turn, vivid dreams",
        "Moderate sleep, wake up refreshed",
        "Deep, long sleep, hard to wake up",
    ),
    _question(
        11, "How do you make decisions?",
        "Quickly but often change my mind",
        "Methodical, decisive, rarely change",
        "Slowly after much deliberation",
    ),
    _question(
        12, "How is your speech pattern?",
        "Fast, talkative, sometimes scattered",
        "Sharp, articulate, persuasive",
        "Slow, melodious, thoughtful",
    ),
    # Lifestyle habits
    _question(
        13, "What foods do you naturally crave?",
        "Sweet, sour, salty foods",
        "Sweet, bitter, astringent foods",
        "Pungent, bitter, astringent foods",
    ),
    _question(
        14, "How are your energy levels throughout the day?",
        "Bursts of energy, then fatigue",
        "Steady, high energy, especially midday",
        "Slow to start, steady throughout",
    ),
    _question(
        15, "What weather do you prefer?",
        "Warm, humid weather",
        "Cool, well-ventilated spaces",
        "Warm, dry weather",
    ),
    _question(
        16, "How do you handle routine?",
        "I prefer variety and change",
        "I like structured, organized routines",
        "I thrive on steady, predictable routines",
    ),
    _question(
        17, "What is your relationship with money?",
        "I spend impulsively, earn and spend quickly",
        "I spend on quality items, good planner",
        "I save regularly, spend cautiously",
    ),
    _question(
        18, "How do you exercise?",
        "I enjoy varied, creative activities",
        "I like competitive, challenging workouts",
        "I prefer slow, steady, relaxing activities",
    ),
    _question(
        19, "What describes your bowel movements?",
        "Irregular, dry, sometimes constipated",
        "Regular, loose, 2-3 times daily",
        "Regular, heavy, once daily",
    ),
    _question(
        20, "How do you respond to cold weather?",
        "I get very cold and uncomfortable",
        "I tolerate cold well",
        "I don't mind cold but feel sluggish",
    ),
)


def questions_as_dicts(questions=DOSHA_QUESTIONS) -> List[Dict]:
    """Serialize the question bank for API responses (dosha mapping omitted)."""
    return [
        {
            "id": q.id,
            "question": q.question,
            "options": {key: q.options[key].text for key in OPTION_KEYS},
        }
        for q in questions
    ]
