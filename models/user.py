from datetime import datetime

from flask_login import UserMixin

from extensions import db


class User(UserMixin, db.Model):
    """A user known through the identity gateway; no credentials are stored here."""
    __tablename__ = 'users'

    id = db.Column(db.String(128), primary_key=True)
    email = db.Column(db.String(120), index=True)
    display_name = db.Column(db.String(120))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Reminder settings
    notifications_enabled = db.Column(db.Boolean, default=True, nullable=False)
    reminder_time = db.Column(db.String(5), default='09:00', nullable=False)
    last_reminder_date = db.Column(db.Date)

    # Relationships
    daily_record = db.relationship('DailyCheckInRecord', backref='user', uselist=False,
                                   cascade='all, delete-orphan')
    history = db.relationship('CheckInHistory', backref='user', lazy='dynamic',
                              cascade='all, delete-orphan')

    def notification_settings(self):
        return {
            'notificationsEnabled': self.notifications_enabled,
            'reminderTime': self.reminder_time,
        }

    def __repr__(self):
        return f'<User {self.id}>'
