"""Day streaks from the check-in history."""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, Optional

from services.records import DailyCheckIn, parse_history

STREAK_MILESTONES = {
    7: "Amazing! You've hit a 7-day streak!",
    14: "Incredible! 2 weeks of consistency!",
    30: "Legendary! A full month streak!",
    100: "Unstoppable! 100 days of wellness!",
}


@dataclass
class StreakResult:
    current_streak: int = 0
    longest_streak: int = 0
    last_checkin_date: Optional[date] = None

    def to_dict(self) -> Dict:
        return {
            'currentStreak': self.current_streak,
            'longestStreak': self.longest_streak,
            'lastCheckInDate': self.last_checkin_date.isoformat() if self.last_checkin_date else None,
        }


def has_checked_in(daily: Optional[DailyCheckIn]) -> bool:
    """True when at least one slot of the day has been submitted."""
    return daily is not None and daily.has_submission()


def calculate_streak(history: Iterable, today: Optional[date] = None) -> StreakResult:
    """
    Compute the current and longest run of consecutive check-in days.

    A day counts when any history entry for it has a submitted slot. The
    current streak is anchored on today when today is checked in, otherwise on
    yesterday, so an unfinished day does not break the streak.

    Args:
        history: List of HistoryEntry objects or stored history dicts
        today: Reference date (defaults to the local date)

    Returns:
        StreakResult
    """
    entries = parse_history(history)
    today = today or date.today()

    checked_in = {entry.date for entry in entries if has_checked_in(entry.checkins)}
    if not checked_in:
        return StreakResult()

    checked_in_today = today in checked_in
    expected = today if checked_in_today else today - timedelta(days=1)

    current = 0
    while expected in checked_in:
        current += 1
        expected -= timedelta(days=1)
    if checked_in_today:
        current = max(current, 1)

    ordered = sorted(checked_in)
    longest = running = 1
    for previous, day in zip(ordered, ordered[1:]):
        if (day - previous).days == 1:
            running += 1
            longest = max(longest, running)
        else:
            running = 1

    return StreakResult(
        current_streak=current,
        longest_streak=longest,
        last_checkin_date=ordered[-1],
    )


def streak_message(streak: int) -> str:
    if streak <= 0:
        return "Start your streak today!"
    if streak == 1:
        return "Great start! Keep it going!"
    if streak < 7:
        return f"{streak} day streak! You're on fire!"
    if streak < 30:
        return f"{streak} days strong! Amazing!"
    if streak < 100:
        return f"{streak} days! You're a legend!"
    return f"{streak} days! Unstoppable!"


def is_streak_milestone(streak: int) -> bool:
    return streak in STREAK_MILESTONES


def milestone_message(streak: int) -> str:
    return STREAK_MILESTONES.get(streak, f"Great job! {streak} day streak!")
