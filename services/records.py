"""Value types for daily check-ins and the append-only check-in history.

Records arrive from the store and from request bodies as plain dicts. The
helpers here turn them into typed values, substituting the documented
defaults for anything missing or malformed, and turn them back into
JSON-ready dicts.
"""
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple, Union

from services.errors import InvalidRecordError

logger = logging.getLogger(__name__)

SLOTS = ('morning', 'afternoon', 'evening')

DEFAULT_MOOD = 5
DEFAULT_STRESS = 5
DEFAULT_HYDRATION = 0
DEFAULT_SLEEP = 0

Number = Union[int, float]


def coerce_number(value, default: Optional[Number]) -> Optional[Number]:
    """Return ``value`` as an int or float, or ``default`` when it is missing,
    non-numeric or NaN. Booleans are not numbers here."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number):
        return default
    if number.is_integer():
        return int(number)
    return number


def parse_iso_date(value) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` (or a longer ISO timestamp) into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or len(value.strip()) < 10:
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp into a naive UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


@dataclass
class CheckInSlot:
    """One morning/afternoon/evening check-in.

    ``sleep`` is only recorded on the morning slot; the other slots carry
    ``None``.
    """
    eaten: Optional[bool] = None
    activity: str = ''
    mood: Number = DEFAULT_MOOD
    stress: Number = DEFAULT_STRESS
    sleep: Optional[Number] = None
    hydration: Number = DEFAULT_HYDRATION
    submitted: bool = False
    advice: str = ''

    @classmethod
    def from_dict(cls, data) -> 'CheckInSlot':
        if isinstance(data, CheckInSlot):
            return data
        if not isinstance(data, Mapping):
            raise InvalidRecordError(
                f"Check-in slot must be a mapping, got {type(data).__name__}"
            )

        eaten = data.get('eaten')
        activity = data.get('activity')
        advice = data.get('advice')

        return cls(
            eaten=eaten if isinstance(eaten, bool) else None,
            activity=str(activity) if activity is not None else '',
            mood=coerce_number(data.get('mood'), DEFAULT_MOOD),
            stress=coerce_number(data.get('stress'), DEFAULT_STRESS),
            sleep=coerce_number(data.get('sleep'), None),
            hydration=coerce_number(data.get('hydration'), DEFAULT_HYDRATION),
            submitted=data.get('submitted') is True,
            advice=str(advice) if advice is not None else '',
        )

    def to_dict(self) -> Dict:
        return {
            'eaten': self.eaten,
            'activity': self.activity,
            'mood': self.mood,
            'stress': self.stress,
            'sleep': self.sleep,
            'hydration': self.hydration,
            'submitted': self.submitted,
            'advice': self.advice,
        }


@dataclass
class DailyCheckIn:
    """The check-in slots of a single calendar day."""
    date: str
    slots: Dict[str, CheckInSlot] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data, day=None) -> 'DailyCheckIn':
        if isinstance(data, DailyCheckIn):
            return data
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise InvalidRecordError(
                f"Daily check-in must be a mapping, got {type(data).__name__}"
            )

        parsed_day = parse_iso_date(day if day is not None else data.get('date'))
        slots = {
            name: CheckInSlot.from_dict(data[name])
            for name in SLOTS
            if isinstance(data.get(name), Mapping)
        }
        return cls(date=parsed_day.isoformat() if parsed_day else '', slots=slots)

    def slot(self, name: str) -> CheckInSlot:
        if name not in SLOTS:
            raise KeyError(name)
        if name not in self.slots:
            self.slots[name] = CheckInSlot(sleep=DEFAULT_SLEEP if name == 'morning' else None)
        return self.slots[name]

    def submitted_slots(self) -> List[Tuple[str, CheckInSlot]]:
        return [(name, self.slots[name]) for name in SLOTS
                if name in self.slots and self.slots[name].submitted]

    def has_submission(self) -> bool:
        return bool(self.submitted_slots())

    def latest_submitted(self) -> Optional[Tuple[str, CheckInSlot]]:
        """The last slot of the day that has been submitted, if any."""
        submitted = self.submitted_slots()
        return submitted[-1] if submitted else None

    def to_dict(self) -> Dict:
        data = {'date': self.date}
        for name in SLOTS:
            if name in self.slots:
                data[name] = self.slots[name].to_dict()
        return data


@dataclass(frozen=True)
class HistoryEntry:
    """An immutable snapshot appended every time a slot is submitted."""
    user_id: Optional[str]
    date: date
    checkins: DailyCheckIn
    timestamp: Optional[datetime] = None

    def to_dict(self) -> Dict:
        return {
            'userId': self.user_id,
            'date': self.date.isoformat(),
            'checkins': self.checkins.to_dict(),
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
        }


def parse_history_entry(data) -> Optional[HistoryEntry]:
    """Build a HistoryEntry from a stored dict; ``None`` when it has no valid date."""
    if isinstance(data, HistoryEntry):
        return data
    if not isinstance(data, Mapping):
        raise InvalidRecordError(
            f"History entry must be a mapping, got {type(data).__name__}"
        )

    day = parse_iso_date(data.get('date'))
    if day is None:
        logger.debug(f"Dropping history entry without a valid date: {data.get('date')!r}")
        return None

    user_id = data.get('userId', data.get('user_id'))
    return HistoryEntry(
        user_id=str(user_id) if user_id is not None else None,
        date=day,
        checkins=DailyCheckIn.from_dict(data.get('checkins') or {}, day=day),
        timestamp=parse_timestamp(data.get('timestamp')),
    )


def parse_history(items: Iterable) -> List[HistoryEntry]:
    """Parse a list of stored history dicts, silently dropping undated ones."""
    if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, (list, tuple)):
        raise InvalidRecordError(
            f"History must be a list of entries, got {type(items).__name__}"
        )
    entries = []
    for item in items:
        entry = parse_history_entry(item)
        if entry is not None:
            entries.append(entry)
    return entries


def pick_latest_per_date(entries: Iterable[HistoryEntry]) -> Dict[date, HistoryEntry]:
    """Keep one entry per date: the one with the newest timestamp.

    Entries without a timestamp lose to any timestamped entry; equal
    timestamps go to whichever appears later in ``entries``.
    """
    latest: Dict[date, HistoryEntry] = {}
    for entry in entries:
        current = latest.get(entry.date)
        if current is None or _timestamp_key(entry) >= _timestamp_key(current):
            latest[entry.date] = entry
    return latest


def _timestamp_key(entry: HistoryEntry) -> datetime:
    return entry.timestamp or datetime.min


def default_daily_checkin(day) -> DailyCheckIn:
    """Fresh record for a new calendar day: nothing submitted, neutral sliders."""
    parsed = parse_iso_date(day)
    if parsed is None:
        raise InvalidRecordError(f"Not an ISO date: {day!r}")
    return DailyCheckIn(
        date=parsed.isoformat(),
        slots={
            'morning': CheckInSlot(sleep=DEFAULT_SLEEP),
            'afternoon': CheckInSlot(),
            'evening': CheckInSlot(),
        },
    )
