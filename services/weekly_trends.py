"""
Weekly wellness trend for the dashboard chart.

The daily score here weighs mood 60, stress 30 and sleep 10. It is a
different scale from the per-check-in score in ``score_engine`` and the two
are not interchangeable.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from statistics import mean
from typing import Dict, Iterable, List, Optional

from services.records import (
    DEFAULT_MOOD,
    DEFAULT_STRESS,
    DailyCheckIn,
    parse_history,
    pick_latest_per_date,
)
from services.score_engine import round_half_up

DAY_NAMES = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun')
OPTIMAL_SLEEP_HOURS = 7.5
TREND_DAYS = 7
TREND_THRESHOLD = 5


@dataclass
class TrendPoint:
    day: str
    date: date
    score: int
    has_data: bool

    def to_dict(self) -> Dict:
        return {
            'day': self.day,
            'date': self.date.isoformat(),
            'score': self.score,
            'hasData': self.has_data,
        }


def daily_wellness_score(daily: Optional[DailyCheckIn]) -> Optional[int]:
    """
    Score a whole day from its submitted slots (0-100).

    Returns None when nothing was submitted that day.
    """
    if daily is None:
        return None
    submitted = [slot for _, slot in daily.submitted_slots()]
    if not submitted:
        return None

    # A stored 0 means the slider was never set
    avg_mood = mean(slot.mood or DEFAULT_MOOD for slot in submitted)
    avg_stress = mean(slot.stress or DEFAULT_STRESS for slot in submitted)
    sleeps = [slot.sleep for slot in submitted if slot.sleep is not None]
    avg_sleep = mean(sleeps) if sleeps else 0

    mood_score = (avg_mood / 10) * 60
    stress_score = ((10 - avg_stress) / 10) * 30
    sleep_score = 0
    if avg_sleep > 0:
        sleep_score = max(0, 10 - abs(avg_sleep - OPTIMAL_SLEEP_HOURS) * 2)

    total = mood_score + stress_score + sleep_score
    return round_half_up(max(0, min(100, total)))


def weekly_trend(history: Iterable, today: Optional[date] = None) -> List[TrendPoint]:
    """
    Build the seven-day score series ending today, oldest first.

    When several history entries share a date, the newest by timestamp is
    used. Days without a submitted check-in get score 0 and ``has_data=False``.
    """
    entries = parse_history(history)
    today = today or date.today()
    by_date = pick_latest_per_date(entries)

    points = []
    for offset in range(TREND_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        entry = by_date.get(day)
        score = daily_wellness_score(entry.checkins) if entry else None
        points.append(TrendPoint(
            day=DAY_NAMES[day.weekday()],
            date=day,
            score=score if score is not None else 0,
            has_data=score is not None,
        ))
    return points


def format_for_chart(points: List[TrendPoint]) -> Dict:
    return {
        'labels': [point.day for point in points],
        'datasets': [
            {
                'label': 'Wellness Score',
                'data': [point.score for point in points],
                'backgroundColor': '#ff9f55',
            },
        ],
    }


def trend_direction(points: List[TrendPoint]) -> str:
    """'up', 'down' or 'stable', comparing the later half of the scored days
    with the earlier half."""
    scores = [point.score for point in points if point.has_data]
    if len(scores) < 2:
        return 'stable'

    half = len(scores) // 2
    change = mean(scores[half:]) - mean(scores[:half])
    if change > TREND_THRESHOLD:
        return 'up'
    if change < -TREND_THRESHOLD:
        return 'down'
    return 'stable'
