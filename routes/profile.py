import logging

from flask import Blueprint
from flask_login import current_user
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from forms import NotificationSettingsForm
from models.checkin import CheckInHistory, DailyCheckInRecord
from services.profile_stats import profile_stats
from utils.helpers import get_json_body, json_error, json_success, local_today, login_required_api
from utils.notifications import parse_reminder_time

logger = logging.getLogger(__name__)

# Create blueprint
profile_bp = Blueprint('profile', __name__)

# Request bodies use the same camelCase keys the responses do
SETTINGS_FIELDS = {
    'notificationsEnabled': 'notifications_enabled',
    'reminderTime': 'reminder_time',
}


@profile_bp.route('/profile')
@login_required_api
def index():
    today = local_today()
    record = DailyCheckInRecord.load_today(current_user.id, today)
    db.session.commit()

    history = CheckInHistory.all_for(current_user.id)
    stats = profile_stats(history, today_record=record.daily(), today=today)

    return json_success(
        user={'id': current_user.id, 'email': current_user.email, 'displayName': current_user.display_name},
        stats=stats.to_dict(),
        notifications=current_user.notification_settings(),
    )


@profile_bp.route('/profile/notifications', methods=['PUT'])
@login_required_api
def update_notifications():
    body = get_json_body()
    payload = {field: body[key] for key, field in SETTINGS_FIELDS.items() if key in body}

    form = NotificationSettingsForm(payload=payload)
    if not form.validate():
        errors = {key: form.errors[field] for key, field in SETTINGS_FIELDS.items() if field in form.errors}
        return json_error('Invalid notification settings', 400, errors=errors)

    try:
        for field, value in form.provided().items():
            if value is None or value == '':
                continue
            if field == 'reminder_time':
                value = '%02d:%02d' % parse_reminder_time(value)
            setattr(current_user, field, value)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to update notification settings for {current_user.id}: {str(e)}", exc_info=True)
        return json_error('Could not save notification settings', 500)

    return json_success(notifications=current_user.notification_settings())
