import logging

from flask import Blueprint
from flask_login import current_user
from sqlalchemy.exc import SQLAlchemyError

from extensions import db, cache
from forms import CheckInSlotForm
from models.checkin import CheckInHistory, DailyCheckInRecord
from services.factor_analyzer import analyze_all, compose_checkin_advice
from services.records import SLOTS
from services.score_engine import compute_score, score_label
from services.streaks import calculate_streak, is_streak_milestone
from utils.helpers import get_json_body, json_error, json_success, local_today, login_required_api
from utils.notifications import NotificationManager

logger = logging.getLogger(__name__)

# Create blueprint
checkin_bp = Blueprint('checkin', __name__)


def dashboard_cache_key(user_id, today):
    return f"dashboard:{user_id}:{today.isoformat()}"


def _slot_scores(daily):
    return {name: compute_score(slot) for name, slot in daily.slots.items()}


def _apply_updates(entry, slot, updates):
    for name, value in updates.items():
        # Sleep is only tracked in the morning
        if name == 'sleep' and slot != 'morning':
            continue
        setattr(entry, name, value)


@checkin_bp.route('/today', methods=['GET'])
@login_required_api
def today():
    """Today's check-ins, reset to fresh defaults on a new day."""
    day = local_today()
    try:
        record = DailyCheckInRecord.load_today(current_user.id, day)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to load check-ins for {current_user.id}: {str(e)}", exc_info=True)
        return json_error('Could not load check-ins', 500)

    daily = record.daily()
    return json_success(date=daily.date, checkins=daily.to_dict(), scores=_slot_scores(daily))


@checkin_bp.route('/<slot>', methods=['PATCH'])
@login_required_api
def update_slot(slot):
    """Apply field edits to one slot without submitting it."""
    if slot not in SLOTS:
        return json_error(f'Unknown check-in slot: {slot}', 404)

    form = CheckInSlotForm(payload=get_json_body())
    if not form.validate():
        return json_error('Invalid check-in data', 400, errors=form.errors)

    day = local_today()
    try:
        record = DailyCheckInRecord.load_today(current_user.id, day)
        daily = record.daily()
        entry = daily.slot(slot)
        _apply_updates(entry, slot, form.updates())
        record.store(daily)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to update {slot} check-in for {current_user.id}: {str(e)}", exc_info=True)
        return json_error('Could not save check-in', 500)

    return json_success(slot=slot, checkin=entry.to_dict(), score=compute_score(entry))


@checkin_bp.route('/<slot>/submit', methods=['POST'])
@login_required_api
def submit_slot(slot):
    """
    Finalize a slot: optional last edits, advice, score and analysis.

    Every submission appends a snapshot of the whole day to the history.
    """
    if slot not in SLOTS:
        return json_error(f'Unknown check-in slot: {slot}', 404)

    form = CheckInSlotForm(payload=get_json_body())
    if not form.validate():
        return json_error('Invalid check-in data', 400, errors=form.errors)

    day = local_today()
    try:
        record = DailyCheckInRecord.load_today(current_user.id, day)
        daily = record.daily()
        entry = daily.slot(slot)
        _apply_updates(entry, slot, form.updates())

        # A resubmitted slot is not the day's first check-in
        first_today = not daily.has_submission()
        entry.submitted = True
        entry.advice = compose_checkin_advice(slot, entry)
        record.store(daily)
        CheckInHistory.append(current_user.id, daily)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to submit {slot} check-in for {current_user.id}: {str(e)}", exc_info=True)
        return json_error('Could not save check-in', 500)

    cache.delete(dashboard_cache_key(current_user.id, day))

    history = CheckInHistory.all_for(current_user.id)
    streak = calculate_streak(history, today=day)
    if first_today and is_streak_milestone(streak.current_streak):
        NotificationManager.send_streak_achievement(current_user, streak.current_streak)

    score = compute_score(entry)
    logger.info(f"User {current_user.id} submitted {slot} check-in (score {score})")
    return json_success(
        slot=slot,
        checkin=entry.to_dict(),
        advice=entry.advice,
        score=score,
        label=score_label(score),
        analysis=analyze_all(entry, slot).to_dict(),
        streak=streak.to_dict(),
    )
