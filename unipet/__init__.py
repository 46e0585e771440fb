"""
Unipet Website Backend - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from unipet.config import Config
from unipet.extensions import db, limiter, login_manager

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance

    Raises:
        ConfigurationError: if no admin credential pair is set in the
        environment.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Trust X-Forwarded-For only for the configured number of proxy hops
    hops = app.config.get('PROXY_FIX_X_FOR', 0)
    if hops:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops)

    from unipet.logging_setup import configure_logging
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    limiter.init_app(app)

    from unipet.auth.credentials import load_admin_credentials
    from unipet.auth.lockout import LockoutTracker
    from unipet.auth.routes import load_admin, unauthorized

    # Fail fast when the admin account is not configured
    app.extensions['unipet.credentials'] = load_admin_credentials(app)

    tracker = LockoutTracker(
        max_attempts=app.config['LOCKOUT_MAX_ATTEMPTS'],
        lockout_seconds=app.config['LOCKOUT_SECONDS'],
    )
    if not app.testing:
        tracker.start_sweeper(app.config['LOCKOUT_SWEEP_INTERVAL'])
    app.extensions['unipet.lockout'] = tracker

    if app.config.get('SECRET_KEY_GENERATED'):
        logger.warning('SESSION_SECRET is not set; using a random key. '
                       'Admin sessions will not survive a restart.')

    # User loader for Flask-Login
    login_manager.user_loader(load_admin)
    login_manager.unauthorized_handler(unauthorized)

    # Register blueprints
    from unipet.auth import auth_bp
    from unipet.admin import admin_bp
    from unipet.public import public_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
    app.register_blueprint(public_bp)

    from unipet.errors import register_error_handlers
    register_error_handlers(app)

    # Create database tables
    with app.app_context():
        _ensure_sqlite_directory(app.config['SQLALCHEMY_DATABASE_URI'])
        db.create_all()
        _ensure_default_data()

    return app


def _ensure_default_data():
    """Ensure the site settings row exists."""
    from unipet.models import SiteSettings

    if SiteSettings.query.first() is None:
        db.session.add(SiteSettings())
        db.session.commit()
        logger.info('Created default site settings row')


def _ensure_sqlite_directory(uri):
    if not uri.startswith('sqlite:///') or ':memory:' in uri:
        return
    directory = os.path.dirname(uri[len('sqlite:///'):])
    if directory:
        os.makedirs(directory, exist_ok=True)
