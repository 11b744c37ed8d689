"""Profile statistics, badges and the assistant personality."""
import zlib
from dataclasses import dataclass, field
from datetime import date
from statistics import mean
from typing import Dict, Iterable, List, Optional

from services.records import DailyCheckIn, SLOTS, parse_history, pick_latest_per_date
from services.score_engine import round_half_up
from services.streaks import calculate_streak

BADGES = (
    ('Beginner Explorer', 'total_checkins', 5),
    ('Mood Master', 'avg_mood', 7),
    ('Streak Champion', 'longest_streak', 5),
    ('Monthly Warrior', 'longest_streak', 30),
    ('Century Club', 'longest_streak', 100),
)

PERSONALITY_GREETINGS = {
    'cheerful': [
        "Hey there, wellness warrior! Your data is looking brighter than a disco ball!",
        "Well, well, well... look who's been crushing their wellness goals!",
        "Hello, you magnificent human! Ready for some wellness wisdom?",
    ],
    'supportive': [
        "Hey friend, I'm here to help you navigate this wellness journey.",
        "I see you've been going through some ups and downs. Let's work through this together.",
        "Your wellness journey is unique, and I'm here to support you every step of the way.",
    ],
    'analytical': [
        "Greetings, data enthusiast! Let me analyze your wellness patterns.",
        "Hello! I've been studying your check-ins like a detective with a magnifying glass.",
        "Welcome! Your wellness data tells quite the story. Let me break it down for you.",
    ],
}


@dataclass
class ProfileStats:
    total_checkins: int = 0
    avg_mood: int = 5
    longest_streak: int = 0
    current_streak: int = 0
    badges: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'totalCheckins': self.total_checkins,
            'avgMood': self.avg_mood,
            'longestStreak': self.longest_streak,
            'currentStreak': self.current_streak,
            'badges': list(self.badges),
        }


def earned_badges(stats: ProfileStats) -> List[str]:
    return [name for name, attr, threshold in BADGES if getattr(stats, attr) >= threshold]


def _include_today(entries, today_record: Optional[DailyCheckIn], today: date):
    if today_record is None or not today_record.has_submission():
        return entries
    if any(entry.get('date') == today.isoformat() for entry in entries if isinstance(entry, dict)):
        return entries
    return list(entries) + [{'date': today.isoformat(), 'checkins': today_record.to_dict()}]


def profile_stats(history: Iterable, today_record: Optional[DailyCheckIn] = None,
                  today: Optional[date] = None) -> ProfileStats:
    """
    Collect the numbers shown on the profile page.

    Args:
        history: Stored history dicts, oldest or newest first
        today_record: The user's current daily record, counted when it has a
            submission that is not in the history yet
        today: Reference date (defaults to the local date)

    Returns:
        ProfileStats with the earned badges filled in
    """
    today = today or date.today()
    history = _include_today(list(history), today_record, today)
    by_date = pick_latest_per_date(parse_history(history))

    total = sum(len(entry.checkins.submitted_slots()) for entry in by_date.values())

    moods = []
    if today_record is not None:
        moods = [today_record.slots[name].mood for name in SLOTS
                 if name in today_record.slots and today_record.slots[name].mood > 0]
    avg_mood = round_half_up(mean(moods)) if moods else 5

    streak = calculate_streak(history, today=today)
    stats = ProfileStats(
        total_checkins=total,
        avg_mood=avg_mood,
        longest_streak=streak.longest_streak,
        current_streak=streak.current_streak,
    )
    stats.badges = earned_badges(stats)
    return stats


def _day_average(daily: DailyCheckIn, attr: str) -> float:
    values = [getattr(daily.slots[name], attr) for name in SLOTS if name in daily.slots]
    values = [value for value in values if value > 0]
    return mean(values) if values else 5


def assistant_personality(history: Iterable) -> str:
    """
    'cheerful' for a good week (mood >= 7 and stress <= 4), 'supportive' when
    mood <= 4 or stress >= 7, otherwise 'analytical'.

    Each day contributes its own slot average, so busy days do not outweigh
    quiet ones.
    """
    days = list(pick_latest_per_date(parse_history(list(history))).values())
    if not days:
        return 'analytical'

    avg_mood = mean(_day_average(entry.checkins, 'mood') for entry in days)
    avg_stress = mean(_day_average(entry.checkins, 'stress') for entry in days)

    if avg_mood >= 7 and avg_stress <= 4:
        return 'cheerful'
    if avg_mood <= 4 or avg_stress >= 7:
        return 'supportive'
    return 'analytical'


def personality_greeting(personality: str, seed: str = '') -> str:
    greetings = PERSONALITY_GREETINGS.get(personality, PERSONALITY_GREETINGS['analytical'])
    return greetings[zlib.crc32(seed.encode('utf-8')) % len(greetings)]
