from datetime import date
from functools import wraps
from flask import request, jsonify
from flask_login import current_user


def login_required_api(f):
    """API route decorator to require authentication."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return jsonify({
                'status': 'error',
                'message': 'Authentication required',
            }), 401
        return f(*args, **kwargs)
    return decorated_function


def json_error(message, status=400, **extra):
    """Error response in the shape every JSON endpoint uses."""
    return jsonify({'status': 'error', 'message': message, **extra}), status


def json_success(**data):
    return jsonify({'status': 'success', **data})


def get_json_body():
    """The request's JSON object, or an empty dict for anything else."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def local_today():
    """Today's date on the server clock; patched in tests."""
    return date.today()
