import logging

import click
from flask import Flask, jsonify
from flask_migrate import Migrate
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from config import Config
from models import db
from routes import admin_bp, booking_slots_bp, health_bp, user_bookings_bp, users_bp, workouts_bp
from utils.auth_context import load_current_user

logger = logging.getLogger(__name__)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    _configure_logging(app)

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(booking_slots_bp)
    app.register_blueprint(user_bookings_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(workouts_bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    @app.before_request
    def _load_user():
        load_current_user()

    @app.errorhandler(SQLAlchemyError)
    def _database_error(exc):
        db.session.rollback()
        logger.exception("Database error: %s", exc)
        return jsonify(error="Internal Server Error"), 500

    @app.errorhandler(HTTPException)
    def _http_error(exc):
        return jsonify(error=exc.description or exc.name), exc.code

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        return resp

    register_cli(app)

    return app


def _configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)

#-------------------------
from datetime import date

from models.user import User
from utils.seed import seed_slots


def register_cli(app):
    @app.cli.command("make-admin")
    @click.argument("email")
    def make_admin(email):
        """Give a user the admin flag by email (bootstrap)."""
        user = User.query.filter_by(email=email.strip().lower()).first()
        if not user:
            click.echo("User not found")
            return

        if not user.is_admin:
            user.is_admin = True
            user.is_approved = True
            db.session.commit()

        click.echo(f"{user.email} is now an admin")

    @app.cli.command("seed-slots")
    @click.option("--start", "start", default=None, help="First day, YYYY-MM-DD (default: today)")
    @click.option("--days", default=7, show_default=True, type=int)
    @click.option("--capacity", default=10, show_default=True, type=int)
    def seed_slots_command(start, days, capacity):
        """Create hourly booking slots inside opening hours."""
        if capacity <= 0:
            raise click.BadParameter("capacity must be positive", param_hint="--capacity")
        first_day = date.fromisoformat(start) if start else date.today()
        created = seed_slots(first_day, days, capacity)
        click.echo(f"Created {created} slot(s)")

#-------------------------


if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5002)
