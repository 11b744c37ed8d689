"""Check-in reminder and streak notifications for DailyWell."""
from datetime import datetime, timedelta
from typing import Optional, Tuple
from extensions import db
from models.user import User
from models.checkin import CheckInHistory, DailyCheckInRecord
from services.streaks import calculate_streak, has_checked_in, is_streak_milestone, milestone_message
from utils.email import send_email
import logging

logger = logging.getLogger(__name__)

DEFAULT_REMINDER_TIME = "09:00"


def parse_reminder_time(value: str) -> Tuple[int, int]:
    """Split an "HH:MM" (or "HH:MM:SS") reminder time into hours and minutes.

    Raises:
        ValueError: if the value is not a valid time of day
    """
    if not isinstance(value, str):
        raise ValueError(f"Reminder time must be a string, got {type(value).__name__}")
    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
        raise ValueError(f"Reminder time must look like HH:MM, got {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Reminder time out of range: {value!r}")
    return hours, minutes


def next_reminder_at(reminder_time: str, now: datetime) -> datetime:
    """The next moment the daily reminder fires; tomorrow if today's has passed."""
    hours, minutes = parse_reminder_time(reminder_time)
    scheduled = now.replace(hour=hours, minute=minutes, second=0, microsecond=0)
    if scheduled <= now:
        scheduled += timedelta(days=1)
    return scheduled


def reminder_message(streak: int = 0) -> Tuple[str, str]:
    """Title and body of the daily check-in reminder."""
    if streak > 0:
        return (
            f"{streak} Day Streak - Keep It Going!",
            f"Don't break your {streak} day streak! Complete your check-in now.",
        )
    return (
        "Time for Your Daily Check-in!",
        "Track your wellness and build healthy habits with a quick check-in.",
    )


class NotificationManager:
    """Manages sending notifications to users."""

    @classmethod
    def send_email(cls, user: User, subject: str, body: str) -> bool:
        """Send an email notification to the user.

        Args:
            user: The user to notify
            subject: Email subject
            body: Plain-text body

        Returns:
            bool: True if email was sent successfully, False otherwise
        """
        if not user.email:
            logger.warning(f"User {user.id} has no email address configured")
            return False

        try:
            send_email(user.email, subject, body)
            logger.info(f"Email sent to {user.email}: {subject}")
            return True
        except Exception as e:
            logger.error(f"Failed to send email to {user.email}: {str(e)}", exc_info=True)
            return False

    @classmethod
    def send_checkin_reminder(cls, user: User, streak: int = 0) -> bool:
        subject, body = reminder_message(streak)
        return cls.send_email(user, subject, body)

    @classmethod
    def send_streak_achievement(cls, user: User, streak: int) -> bool:
        """Congratulate the user on a milestone streak; other streaks are ignored."""
        if not is_streak_milestone(streak) or not user.notifications_enabled:
            return False
        return cls.send_email(user, "Streak Achievement!", milestone_message(streak))


def reminder_is_due(user: User, now: datetime) -> bool:
    """True when the user's reminder time has passed today and no reminder went out yet."""
    if not user.notifications_enabled or not user.email:
        return False
    if user.last_reminder_date == now.date():
        return False
    try:
        hours, minutes = parse_reminder_time(user.reminder_time or DEFAULT_REMINDER_TIME)
    except ValueError:
        logger.warning(f"User {user.id} has an invalid reminder time {user.reminder_time!r}")
        return False
    return (now.hour, now.minute) >= (hours, minutes)


def send_due_reminders(now: Optional[datetime] = None) -> int:
    """Send today's reminder to every user whose reminder time has passed.

    Users who already checked in today are skipped. Delivery is best-effort:
    failures are logged and never raised.

    Returns:
        int: number of reminders sent
    """
    now = now or datetime.now()
    today = now.date()
    sent = 0

    try:
        users = User.query.filter(
            User.email.isnot(None),
            User.notifications_enabled.is_(True),
        ).all()

        for user in users:
            if not reminder_is_due(user, now):
                continue

            record = db.session.get(DailyCheckInRecord, user.id)
            if record is not None and record.date == today and has_checked_in(record.daily()):
                continue

            history = CheckInHistory.all_for(user.id)
            streak = calculate_streak(history, today=today).current_streak
            if NotificationManager.send_checkin_reminder(user, streak):
                user.last_reminder_date = today
                sent += 1

        db.session.commit()

    except Exception as e:
        logger.error(f"Error sending check-in reminders: {str(e)}", exc_info=True)
        db.session.rollback()

    return sent
