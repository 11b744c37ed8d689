from flask import Blueprint
from flask_login import current_user

from extensions import db, cache
from models.checkin import CheckInHistory, DailyCheckInRecord
from routes.checkin import dashboard_cache_key
from services.score_engine import compute_score, score_label
from services.streaks import calculate_streak, streak_message
from services.weekly_trends import (
    TREND_DAYS,
    daily_wellness_score,
    format_for_chart,
    trend_direction,
    weekly_trend,
)
from utils.helpers import json_success, local_today, login_required_api

# Create blueprint
dashboard_bp = Blueprint('dashboard', __name__)


def build_dashboard(user_id, today):
    """Everything the dashboard shows, as a JSON-ready dict."""
    record = DailyCheckInRecord.load_today(user_id, today)
    db.session.commit()
    daily = record.daily()

    streak = calculate_streak(CheckInHistory.all_for(user_id), today=today)
    points = weekly_trend(CheckInHistory.recent(user_id, TREND_DAYS, today=today), today=today)

    today_score = daily_wellness_score(daily)
    latest = daily.latest_submitted()
    latest_score = compute_score(latest[1]) if latest else None

    return {
        'date': today.isoformat(),
        'todayScore': today_score or 0,
        'hasCheckedInToday': today_score is not None,
        'latestCheckIn': {
            'slot': latest[0],
            'score': latest_score,
            'label': score_label(latest_score),
            'advice': latest[1].advice,
        } if latest else None,
        'streak': streak.to_dict(),
        'streakMessage': streak_message(streak.current_streak),
        'weeklyTrend': [point.to_dict() for point in points],
        'chart': format_for_chart(points),
        'trend': trend_direction(points),
    }


@dashboard_bp.route('/dashboard')
@login_required_api
def index():
    today = local_today()
    key = dashboard_cache_key(current_user.id, today)

    dashboard = cache.get(key)
    if dashboard is None:
        dashboard = build_dashboard(current_user.id, today)
        cache.set(key, dashboard)

    return json_success(dashboard=dashboard)
