from datetime import date

from conftest import make_entry, make_slot
from services.records import DailyCheckIn
from services.weekly_trends import (
    TrendPoint,
    daily_wellness_score,
    format_for_chart,
    trend_direction,
    weekly_trend,
)

TODAY = date(2024, 1, 7)  # a Sunday


def test_always_seven_points_oldest_first():
    points = weekly_trend([], today=TODAY)
    assert len(points) == 7
    assert points[0].date == date(2024, 1, 1)
    assert points[-1].date == TODAY
    assert [p.day for p in points] == ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']
    assert all(p.score == 0 and not p.has_data for p in points)


def test_day_score_formula():
    daily = DailyCheckIn.from_dict({'morning': make_slot(mood=8, stress=2, sleep=7.5)})
    # 48 + 24 + 10
    assert daily_wellness_score(daily) == 82


def test_sleep_is_averaged_only_where_recorded():
    daily = DailyCheckIn.from_dict({
        'morning': make_slot(mood=6, stress=4, sleep=5.5),
        'evening': make_slot(mood=6, stress=4, sleep=None),
    })
    # 36 + 18 + (10 - 2*2)
    assert daily_wellness_score(daily) == 60


def test_unset_sliders_count_as_neutral():
    daily = DailyCheckIn.from_dict({'morning': make_slot(mood=0, stress=0)})
    # 30 + 15, same as mood 5 and stress 5
    assert daily_wellness_score(daily) == 45


def test_unsubmitted_days_have_no_score():
    daily = DailyCheckIn.from_dict({'morning': make_slot(submitted=False)})
    assert daily_wellness_score(daily) is None
    assert daily_wellness_score(None) is None


def test_trend_uses_the_newest_entry_per_date():
    history = [
        make_entry('2024-01-07', mood=10, stress=1, timestamp='2024-01-07T21:00:00'),
        make_entry('2024-01-07', mood=1, stress=10, timestamp='2024-01-07T08:00:00'),
        make_entry('2024-01-03', mood=5, stress=5),
        make_entry('2023-12-20', mood=9),
    ]
    points = weekly_trend(history, today=TODAY)
    by_date = {p.date: p for p in points}
    assert by_date[TODAY].score == 87
    assert by_date[date(2024, 1, 3)].score == 45
    assert by_date[date(2024, 1, 3)].has_data
    assert sum(p.has_data for p in points) == 2


def test_point_serialization():
    point = TrendPoint(day='Sun', date=TODAY, score=70, has_data=True)
    assert point.to_dict() == {'day': 'Sun', 'date': '2024-01-07', 'score': 70, 'hasData': True}


def test_chart_payload():
    points = weekly_trend([make_entry('2024-01-07', mood=10, stress=1)], today=TODAY)
    chart = format_for_chart(points)
    assert chart['labels'][-1] == 'Sun'
    assert chart['datasets'][0]['data'] == [0, 0, 0, 0, 0, 0, 87]


def _points(*scores):
    return [TrendPoint(day='Mon', date=TODAY, score=s or 0, has_data=s is not None) for s in scores]


def test_trend_direction():
    assert trend_direction(_points(40, 50, 70, 80)) == 'up'
    assert trend_direction(_points(80, 70, 50, 40)) == 'down'
    assert trend_direction(_points(60, 62, 61, 63)) == 'stable'
    assert trend_direction(_points(None, 70, None)) == 'stable'
