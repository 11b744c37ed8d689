from datetime import date, datetime, timedelta

import pytest

from app import create_app
from config import TestConfig
from extensions import db


TODAY = date(2024, 1, 5)


@pytest.fixture
def today(monkeypatch):
    """Pin the server date used by the routes."""
    for module in ('routes.checkin', 'routes.dashboard', 'routes.insights',
                   'routes.profile', 'routes.assistant'):
        monkeypatch.setattr(f'{module}.local_today', lambda: TODAY)
    return TODAY


@pytest.fixture
def app(today):
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    return {'X-User-Id': 'user-1'}


def make_slot(**overrides):
    slot = {
        'eaten': True,
        'activity': '',
        'mood': 5,
        'stress': 5,
        'sleep': None,
        'hydration': 0,
        'submitted': True,
        'advice': '',
    }
    slot.update(overrides)
    return slot


def make_entry(day, submitted=True, timestamp=None, user_id='user-1', **slot):
    """A stored history dict with a single morning check-in."""
    if isinstance(day, date):
        day = day.isoformat()
    return {
        'userId': user_id,
        'date': day,
        'checkins': {'morning': make_slot(submitted=submitted, **slot)},
        'timestamp': timestamp,
    }


def consecutive_entries(last_day, count):
    return [make_entry(last_day - timedelta(days=offset)) for offset in range(count - 1, -1, -1)]


@pytest.fixture
def entry_factory():
    return make_entry


@pytest.fixture
def slot_factory():
    return make_slot


@pytest.fixture
def now():
    return datetime(2024, 1, 5, 10, 30)
