from flask import Blueprint, request
from flask_login import current_user

from extensions import db
from models.checkin import CheckInHistory, DailyCheckInRecord
from services.factor_analyzer import analyze_all
from services.profile_stats import assistant_personality, personality_greeting
from services.resources import personalized_resources, resources_by_category, search_resources
from utils.helpers import json_success, local_today, login_required_api

PERSONALITY_WINDOW_DAYS = 7

# Create blueprint
insights_bp = Blueprint('insights', __name__)


@insights_bp.route('/insights')
@login_required_api
def index():
    """Factor analysis of the latest submitted check-in, with matching resources."""
    today = local_today()
    record = DailyCheckInRecord.load_today(current_user.id, today)
    db.session.commit()
    daily = record.daily()

    latest = daily.latest_submitted()
    analysis = None
    if latest:
        slot_name, slot = latest
        analysis = {'slot': slot_name, **analyze_all(slot, slot_name).to_dict()}

    week = CheckInHistory.recent(current_user.id, PERSONALITY_WINDOW_DAYS, today=today)
    personality = assistant_personality(week)

    return json_success(
        analysis=analysis,
        message=None if latest else "Complete a check-in to see your wellness insights.",
        personality=personality,
        greeting=personality_greeting(personality, seed=f"{current_user.id}:{today.isoformat()}"),
        resources=personalized_resources(daily),
    )


@insights_bp.route('/insights/resources')
@login_required_api
def resources():
    keyword = request.args.get('q', '').strip()
    if keyword:
        return json_success(query=keyword, resources=search_resources(keyword))

    category = request.args.get('category', 'general')
    return json_success(category=category, resources=resources_by_category(category))
