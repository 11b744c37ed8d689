import math
from typing import Dict, Union

from services.records import CheckInSlot, coerce_number

EXERCISE_KEYWORDS = ('exercise', 'workout', 'run', 'walk', 'yoga', 'sport', 'gym')
MOVEMENT_KEYWORDS = ('stretch', 'dance')

OPTIMAL_HYDRATION_CUPS = 8

SCORE_BANDS = (
    (80, 'Excellent'),
    (60, 'Good'),
    (40, 'Fair'),
)


def _clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def round_half_up(value: float) -> int:
    """Round .5 away from zero for the non-negative scores used here."""
    return int(math.floor(value + 0.5))


def sleep_points(hours) -> int:
    """Tiered sleep points (0-20); 7-9 hours is the optimal band."""
    if hours is None:
        return 0
    if 7 <= hours <= 9:
        return 20
    if 6 <= hours < 7 or 9 < hours <= 10:
        return 15
    if 5 <= hours < 6 or 10 < hours <= 12:
        return 10
    if 0 < hours < 5:
        return 5
    return 0


def activity_points(activity: str) -> int:
    """Keyword-tiered activity points (0-15)."""
    text = (activity or '').lower()
    if any(keyword in text for keyword in EXERCISE_KEYWORDS):
        return 15
    if any(keyword in text for keyword in MOVEMENT_KEYWORDS):
        return 10
    if text.strip():
        return 5
    return 0


def food_points(eaten) -> float:
    if eaten is True:
        return 5
    if eaten is False:
        return 0
    return 2.5


def compute_score(record: Union[CheckInSlot, Dict]) -> int:
    """
    Compute the instant 0-100 wellness score of a single check-in.

    Weights: sleep 20, mood 20, hydration 20, stress 20, activity 15, food 5.
    Out-of-range values are clamped rather than rejected.

    Args:
        record: A CheckInSlot or a dict with the same fields

    Returns:
        int: Score between 0 and 100
    """
    slot = CheckInSlot.from_dict(record)

    mood = _clamp(slot.mood, 0, 10)
    stress = _clamp(slot.stress, 0, 10)
    hydration = max(0, slot.hydration)

    score = sleep_points(slot.sleep)
    score += (mood / 10) * 20
    score += min(hydration / OPTIMAL_HYDRATION_CUPS, 1) * 20
    score += ((10 - stress) / 10) * 20
    score += activity_points(slot.activity)
    score += food_points(slot.eaten)

    return round_half_up(_clamp(score, 0, 100))


def compute_simple_score(record: Dict) -> int:
    """
    Legacy five-factor score: 20 linear points each for sleep (8h), mood,
    hydration (8 cups), inverted stress and activity minutes (60).
    """
    slot = CheckInSlot.from_dict(record)
    if isinstance(record, CheckInSlot):
        record = record.to_dict()
    minutes = coerce_number(record.get('activity'), 0)

    score = ((slot.sleep or 0) / 8) * 20
    score += (slot.mood / 10) * 20
    score += (slot.hydration / OPTIMAL_HYDRATION_CUPS) * 20
    score += ((10 - slot.stress) / 10) * 20
    score += (minutes / 60) * 20

    return round_half_up(_clamp(score, 0, 100))


def score_label(score: int) -> str:
    for threshold, label in SCORE_BANDS:
        if score >= threshold:
            return label
    return 'Needs Attention'
