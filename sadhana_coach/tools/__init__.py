"""Tools package for Sadhana Coach.

Each module defines a single service-facing function that validates raw
input, runs an engine and returns a status dict.
"""

from .analyze_yoga_pose import analyze_yoga_pose
from .classify_dosha import classify_dosha
from .record_practice_session import record_practice_session

__all__ = [
  "classify_dosha",
  "analyze_yoga_pose",
  "record_practice_session",
]
