from flask import Blueprint, current_app
from flask_login import current_user

from extensions import db
from models.checkin import DailyCheckInRecord
from services.advice_providers import build_default_providers
from services.advice_selector import AdviceContext, select_advice, select_branch
from services.genz_advisor import GenZAdvisor
from utils.helpers import get_json_body, json_error, json_success, local_today, login_required_api

assistant_bp = Blueprint('assistant', __name__, url_prefix='/assistant')


def _today_context():
    record = DailyCheckInRecord.load_today(current_user.id, local_today())
    db.session.commit()
    return record.daily()


def _message(body):
    message = body.get('message', '')
    return message if isinstance(message, str) else None


@assistant_bp.route('/advice', methods=['POST'])
@login_required_api
def advice():
    """Deterministic, keyword-driven advice grounded in today's check-ins."""
    message = _message(get_json_body())
    if message is None:
        return json_error('message must be text', 400)

    context = AdviceContext.from_checkins(_today_context())
    return json_success(
        advice=select_advice(message, context),
        branch=select_branch(message, context),
        context=context.to_dict(),
    )


@assistant_bp.route('/chat', methods=['POST'])
@login_required_api
def chat():
    """Casual chat; wellness questions get canned replies, anything else goes to
    the configured text-generation providers."""
    message = _message(get_json_body())
    if message is None:
        return json_error('message must be text', 400)

    advisor = GenZAdvisor(build_default_providers(current_app.config))
    reply = advisor.advise(message, _today_context())
    return json_success(reply=reply.to_dict())
