from datetime import date, datetime

import pytest

from conftest import make_entry, make_slot
from extensions import db
from models import CheckInHistory, DailyCheckInRecord, User
from services.records import DailyCheckIn
from utils import notifications
from utils.notifications import (
    NotificationManager,
    next_reminder_at,
    parse_reminder_time,
    reminder_is_due,
    reminder_message,
    send_due_reminders,
)


@pytest.fixture
def outbox(monkeypatch):
    sent = []
    monkeypatch.setattr(notifications, 'send_email',
                        lambda to, subject, body, html=None: sent.append((to, subject, body)))
    return sent


class TestSchedule:
    def test_parse_reminder_time(self):
        assert parse_reminder_time('09:00') == (9, 0)
        assert parse_reminder_time('21:45:00') == (21, 45)

    @pytest.mark.parametrize('value', ['9am', '25:00', '12:60', '', None, '12'])
    def test_invalid_reminder_times(self, value):
        with pytest.raises(ValueError):
            parse_reminder_time(value)

    def test_next_reminder_is_today_when_still_ahead(self, now):
        assert next_reminder_at('18:00', now) == datetime(2024, 1, 5, 18, 0)

    def test_next_reminder_rolls_over_to_tomorrow(self, now):
        assert next_reminder_at('09:00', now) == datetime(2024, 1, 6, 9, 0)
        assert next_reminder_at('10:30', now) == datetime(2024, 1, 6, 10, 30)

    def test_reminder_message(self):
        assert reminder_message(0) == (
            "Time for Your Daily Check-in!",
            "Track your wellness and build healthy habits with a quick check-in.",
        )
        title, body = reminder_message(4)
        assert title == "4 Day Streak - Keep It Going!"
        assert "Don't break your 4 day streak!" in body


class TestDueReminders:
    def _user(self, user_id, **fields):
        fields.setdefault('notifications_enabled', True)
        user = User(id=user_id, email=f'{user_id}@example.com', **fields)
        db.session.add(user)
        return user

    def test_reminder_is_due(self, app, now):
        user = self._user('due', reminder_time='09:00')
        assert reminder_is_due(user, now)
        user.last_reminder_date = now.date()
        assert not reminder_is_due(user, now)
        assert not reminder_is_due(User(id='late', email='x@example.com', reminder_time='11:00',
                                        notifications_enabled=True), now)
        assert not reminder_is_due(User(id='nomail', reminder_time='09:00', notifications_enabled=True), now)

    def test_send_due_reminders(self, app, now, outbox):
        self._user('streaker', reminder_time='09:00')
        self._user('done', reminder_time='08:00')
        self._user('muted', reminder_time='08:00', notifications_enabled=False)
        self._user('later', reminder_time='11:00')
        db.session.commit()

        for day in ('2024-01-03', '2024-01-04'):
            entry = make_entry(day)
            CheckInHistory.append('streaker', DailyCheckIn.from_dict(entry['checkins'], day=day))
        done = DailyCheckInRecord.load_today('done', now.date())
        done.store(DailyCheckIn.from_dict({'morning': make_slot()}, day=now.date()))
        db.session.commit()

        assert send_due_reminders(now) == 1
        assert outbox == [(
            'streaker@example.com',
            "2 Day Streak - Keep It Going!",
            "Don't break your 2 day streak! Complete your check-in now.",
        )]
        assert db.session.get(User, 'streaker').last_reminder_date == date(2024, 1, 5)

        # Already reminded today
        assert send_due_reminders(now) == 0

    def test_delivery_failures_are_logged_not_raised(self, app, now, monkeypatch):
        def boom(*args, **kwargs):
            raise ConnectionRefusedError('smtp down')

        monkeypatch.setattr(notifications, 'send_email', boom)
        self._user('unlucky', reminder_time='09:00')
        db.session.commit()

        assert send_due_reminders(now) == 0
        assert db.session.get(User, 'unlucky').last_reminder_date is None


class TestStreakAchievement:
    def test_only_milestones_are_sent(self, app, outbox):
        user = User(id='u', email='u@example.com', notifications_enabled=True)
        assert not NotificationManager.send_streak_achievement(user, 8)
        assert NotificationManager.send_streak_achievement(user, 7)
        assert outbox == [('u@example.com', 'Streak Achievement!', "Amazing! You've hit a 7-day streak!")]

    def test_muted_users_get_nothing(self, app, outbox):
        user = User(id='u', email='u@example.com', notifications_enabled=False)
        assert not NotificationManager.send_streak_achievement(user, 7)
        assert outbox == []
