from datetime import date, datetime, timedelta

from extensions import db
from services.records import DailyCheckIn, default_daily_checkin


class DailyCheckInRecord(db.Model):
    """The user's check-ins for the current day, one row per user."""
    __tablename__ = 'daily_checkins'

    user_id = db.Column(db.String(128), db.ForeignKey('users.id'), primary_key=True)
    date = db.Column(db.Date, nullable=False, default=date.today)
    checkins = db.Column(db.JSON, nullable=False, default=dict)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @classmethod
    def load_today(cls, user_id, today=None):
        """Fetch the user's record, resetting it when it belongs to another day.

        The returned row is added to the session but not committed.
        """
        today = today or date.today()
        record = db.session.get(cls, user_id)
        if record is None:
            record = cls(user_id=user_id)
            db.session.add(record)
        if record.date != today or not record.checkins:
            record.store(default_daily_checkin(today))
        return record

    def daily(self) -> DailyCheckIn:
        return DailyCheckIn.from_dict(self.checkins, day=self.date)

    def store(self, daily: DailyCheckIn):
        # Reassign so SQLAlchemy notices the JSON change
        self.date = date.fromisoformat(daily.date)
        self.checkins = daily.to_dict()

    def __repr__(self):
        return f'<DailyCheckInRecord {self.user_id} {self.date}>'


class CheckInHistory(db.Model):
    """Append-only snapshot of a day's check-ins, written on every submission."""
    __tablename__ = 'checkin_history'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(128), db.ForeignKey('users.id'), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    checkins = db.Column(db.JSON, nullable=False)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    @classmethod
    def append(cls, user_id, daily: DailyCheckIn, timestamp=None):
        entry = cls(
            user_id=user_id,
            date=date.fromisoformat(daily.date),
            checkins=daily.to_dict(),
            timestamp=timestamp or datetime.utcnow(),
        )
        db.session.add(entry)
        return entry

    @classmethod
    def recent(cls, user_id, days, today=None):
        """History dicts for the last ``days`` days, oldest first."""
        today = today or date.today()
        rows = (cls.query
                .filter(cls.user_id == user_id, cls.date > today - timedelta(days=days))
                .order_by(cls.timestamp.asc(), cls.id.asc())
                .all())
        return [row.to_history_dict() for row in rows]

    @classmethod
    def all_for(cls, user_id):
        """Every history dict the user ever stored, oldest first."""
        rows = (cls.query
                .filter(cls.user_id == user_id)
                .order_by(cls.timestamp.asc(), cls.id.asc())
                .all())
        return [row.to_history_dict() for row in rows]

    def to_history_dict(self):
        return {
            'userId': self.user_id,
            'date': self.date.isoformat(),
            'checkins': self.checkins,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
        }

    def __repr__(self):
        return f'<CheckInHistory {self.user_id} {self.date}>'
