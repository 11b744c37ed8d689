import logging

import click
from flask import Flask, current_app, jsonify

from config import Config
from extensions import db, login_manager, migrate, mail, cache, csrf
from services.errors import InvalidRecordError


def create_app(config_class=Config):
    # Create and configure the app
    app = Flask(__name__)
    app.config.from_object(config_class)
    config_class.init_app(app)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)  # Initialize Flask-Migrate
    mail.init_app(app)
    cache.init_app(app)
    csrf.init_app(app)

    # Import User model here to avoid circular imports
    from models import User

    # Identity comes from the auth gateway, which sets the user id header
    @login_manager.request_loader
    def load_user_from_request(request):
        user_id = (request.headers.get(current_app.config['USER_ID_HEADER']) or '').strip()
        if not user_id:
            return None
        user = db.session.get(User, user_id)
        if user is None:
            user = User(id=user_id, reminder_time=current_app.config['DEFAULT_REMINDER_TIME'])
            db.session.add(user)
            db.session.commit()
            current_app.logger.info(f"Registered user {user_id} on first request")
        return user

    # Register blueprints
    from routes.checkin import checkin_bp
    from routes.dashboard import dashboard_bp
    from routes.insights import insights_bp
    from routes.profile import profile_bp
    from routes.assistant import assistant_bp

    for blueprint in (checkin_bp, dashboard_bp, insights_bp, profile_bp, assistant_bp):
        csrf.exempt(blueprint)

    app.register_blueprint(checkin_bp, url_prefix='/checkin')
    app.register_blueprint(dashboard_bp, url_prefix='/')
    app.register_blueprint(insights_bp, url_prefix='/')
    app.register_blueprint(profile_bp, url_prefix='/')
    app.register_blueprint(assistant_bp)

    @app.errorhandler(InvalidRecordError)
    def handle_invalid_record(error):
        return jsonify({'status': 'error', 'message': str(error)}), 400

    @app.cli.command('send-reminders')
    def send_reminders_command():
        """Email today's check-in reminder to users whose reminder time has passed."""
        from utils.notifications import send_due_reminders
        sent = send_due_reminders()
        click.echo(f"Sent {sent} reminder(s).")

    # Create database tables
    with app.app_context():
        db.create_all()

    return app

if __name__ == '__main__':
    app = create_app()
    app.run(debug=True)
