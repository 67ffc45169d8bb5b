import logging
import re
from logging.handlers import RotatingFileHandler

from flask import Flask, flash, redirect, request, url_for
from config.config import Config
from extensions import login_manager

from models.user import PortalUser
from services.api_client import ApiError
from services.registry import get_stores, persist_cookies
from utils.formatting import register_filters

# Route Imports
from routes.auth_routes import auth_bp
from routes.dashboard_routes import dashboard_bp
from routes.profile_routes import profile_bp
from routes.course_routes import course_bp
from routes.hostel_routes import hostel_bp
from routes.bus_pass_routes import bus_pass_bp
from routes.course_fee_routes import course_fee_bp
from routes.academics_routes import academics_bp
from routes.exam_routes import exam_bp

# Paths the lowercase redirect must never touch
CASE_EXEMPT_PREFIXES = ("/static/", "/api/", "/favicon.ico")

# Gateway payment ids after /receipt/ are case-sensitive
CASE_PRESERVING_TAIL = re.compile(r"^(.*?/receipt/)(.+)$", re.IGNORECASE)


def configure_logging(app):
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    if app.config.get("LOG_FILE") and not any(
        isinstance(h, RotatingFileHandler) for h in root.handlers
    ):
        handler = RotatingFileHandler(app.config["LOG_FILE"], maxBytes=1_000_000, backupCount=3)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)
    app.logger.setLevel(level)


def normalized_path(path):
    match = CASE_PRESERVING_TAIL.match(path)
    if match:
        return match.group(1).lower() + match.group(2)
    return path.lower()


def lowercase_redirect():
    path = request.path
    if path.startswith(CASE_EXEMPT_PREFIXES):
        return None
    target = normalized_path(path)
    if target == path:
        return None
    query = request.query_string.decode()
    if query:
        target = f"{target}?{query}"
    return redirect(target, code=307)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    configure_logging(app)
    register_filters(app)

    # Initialize Login Manager
    login_manager.init_app(app)
    login_manager.login_view = "auth.login"
    login_manager.login_message = "Please sign in to continue."
    login_manager.login_message_category = "info"

    # The backend owns the session; every request re-checks it there
    @login_manager.user_loader
    def load_user(user_id):
        profile = get_stores().auth.check_auth()
        if not profile:
            return None
        return PortalUser(profile)

    app.before_request(lowercase_redirect)
    app.after_request(persist_cookies)

    @app.errorhandler(ApiError)
    def handle_api_error(exc):
        app.logger.warning("Unhandled backend error on %s: %s", request.path, exc)
        flash(exc.message or "Something went wrong. Please try again.", "danger")
        return redirect(url_for("dashboard.home"))

    # Register Blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(course_bp)
    app.register_blueprint(hostel_bp)
    app.register_blueprint(bus_pass_bp)
    app.register_blueprint(course_fee_bp)
    app.register_blueprint(academics_bp)
    app.register_blueprint(exam_bp)

    return app

if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=5000, debug=True)
