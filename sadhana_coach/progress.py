"""
Sadhana points and warrior ranks earned from practice sessions.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from sadhana_coach.exceptions import ValidationError

POINTS_PER_MINUTE = 10

# (accuracy strictly above, bonus), checked in order
ACCURACY_BONUSES: Tuple[Tuple[float, int], ...] = ((80, 20), (60, 10))


@dataclass(frozen=True)
class Rank:
    key: str
    title: str
    sanskrit: str
    points_required: int
    description: str
    unlocks: str


RANKS: Tuple[Rank, ...] = (
    Rank("padatik", "Padatik", "पदातति", 0,
         "An infantry soldier on foot", "Basic access to all features"),
    Rank("ashvarohi", "Ashvarohi", "अश्वारोही", 250,
         "A horseman or cavalry soldier", "New background music for sessions"),
    Rank("gaja", "Gaja", "गजा", 1000,
         "A soldier mounted on an elephant", "Endurance yoga program"),
    Rank("ardharathi", "Ardharathi", "अर्ध्रथी", 3500,
         "A warrior on a chariot", "Advanced Pranayama techniques"),
    Rank("rathi", "Rathi", "रथी", 7000,
         "An elite chariot warrior", "Masterclass yoga flows"),
    Rank("ati_rathi", "Ati-Rathi", "अतिरथी", 15000,
         "An elite warrior, equal to 12 Rathis", "Customize yoga sessions"),
    Rank("maharathi", "Maharathi", "महारथी", 40000,
         "The highest rank warrior", "Golden app theme"),
    Rank("maha_maharathi", "Mahā-Mahārathi", "महा-महारथी", 100000,
         "The ultimate rank warrior", "Personal congratulatory note from the Guru"),
)


def calculate_session_points(duration_seconds: float, accuracy: float) -> int:
    """10 points per completed minute plus an accuracy bonus."""
    if duration_seconds < 0:
        raise ValidationError(f"Session duration must be non-negative, got {duration_seconds}")

    points = int(duration_seconds // 60) * POINTS_PER_MINUTE
    for threshold, bonus in ACCURACY_BONUSES:
        if accuracy > threshold:
            return points + bonus
    return points


def rank_for_points(points: int) -> Rank:
    if points < 0:
        raise ValidationError(f"Sadhana points must be non-negative, got {points}")
    current = RANKS[0]
    for rank in RANKS:
        if points >= rank.points_required:
            current = rank
    return current


def next_rank(points: int) -> Optional[Rank]:
    """The next rank to unlock, or None at the top rank."""
    for rank in RANKS:
        if rank.points_required > points:
            return rank
    return None
