import math

from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict
from wtforms import (
    StringField,
    BooleanField,
    IntegerField,
    FloatField,
)
from wtforms.validators import (
    Length,
    NumberRange,
    Optional,
    StopValidation,
    ValidationError,
)

from utils.notifications import parse_reminder_time


def text_only(form, field):
    raw = form.payload.get(field.name)
    if raw is not None and not isinstance(raw, str):
        # Stop here so later validators never see a non-string
        raise StopValidation("Must be text.")


class JSONForm(FlaskForm):
    """Base for forms filled from a JSON request body.

    Authentication happens at the gateway, so these forms carry no CSRF token.
    """

    class Meta:
        csrf = False

    def __init__(self, payload=None, **kwargs):
        self.payload = payload if isinstance(payload, dict) else {}
        super().__init__(formdata=self._formdata(self.payload), **kwargs)

    @staticmethod
    def _formdata(payload):
        data = MultiDict()
        for key, value in payload.items():
            if value is None:
                continue
            if isinstance(value, float) and not math.isfinite(value):
                value = "invalid"
            elif not isinstance(value, (str, int, float, bool)):
                value = str(value)
            data[key] = value
        return data

    def provided(self):
        """Field values for the keys the client actually sent."""
        return {
            name: (None if self.payload[name] is None else field.data)
            for name, field in self._fields.items()
            if name in self.payload
        }


class CheckInSlotForm(JSONForm):
    """Field edits for one check-in slot. Every field is optional so a
    request can update a single slider."""

    eaten = BooleanField("Eaten", validators=[Optional()])
    activity = StringField("Activity", validators=[Optional(), text_only, Length(max=200)])
    mood = IntegerField("Mood", validators=[Optional(), NumberRange(min=1, max=10)])
    stress = IntegerField("Stress", validators=[Optional(), NumberRange(min=1, max=10)])
    sleep = FloatField("Sleep", validators=[Optional(), NumberRange(min=0, max=12)])
    hydration = IntegerField("Hydration", validators=[Optional(), NumberRange(min=0, max=16)])

    def validate_eaten(self, eaten):
        raw = self.payload.get("eaten")
        if raw is not None and not isinstance(raw, bool):
            raise ValidationError("Eaten must be true, false or null.")

    def updates(self):
        values = self.provided()
        # Only eaten may be cleared; a null slider keeps its value
        return {name: value for name, value in values.items()
                if value is not None or name == "eaten"}


class NotificationSettingsForm(JSONForm):
    notifications_enabled = BooleanField("Notifications enabled", validators=[Optional()])
    reminder_time = StringField("Reminder time", validators=[Optional(), text_only, Length(min=4, max=8)])

    def validate_notifications_enabled(self, notifications_enabled):
        raw = self.payload.get("notifications_enabled")
        if raw is not None and not isinstance(raw, bool):
            raise ValidationError("Must be true or false.")

    def validate_reminder_time(self, reminder_time):
        if reminder_time.data:
            try:
                parse_reminder_time(reminder_time.data)
            except ValueError as e:
                raise ValidationError(str(e))
