"""
Configuration settings for the Unipet website backend
"""
import os
import secrets
from datetime import timedelta


def _env_flag(name, default='false'):
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


_GENERATED_SECRET = secrets.token_hex(64)


class Config:
    """Flask application configuration"""

    APP_ENV = os.environ.get('APP_ENV') or os.environ.get('FLASK_ENV') or 'development'

    # Session signing secret. When SESSION_SECRET is missing a random one is
    # generated per process and create_app() logs a warning.
    SECRET_KEY = os.environ.get('SESSION_SECRET') or _GENERATED_SECRET
    SECRET_KEY_GENERATED = not os.environ.get('SESSION_SECRET')

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'unipet.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Admin sessions expire after 24h
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    SESSION_COOKIE_NAME = 'unipet_admin_session'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = APP_ENV == 'production'

    # Rate limiting (Flask-Limiter)
    RATELIMIT_ENABLED = _env_flag('RATELIMIT_ENABLED', 'true')
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    # Retry-After is written by the 429 error handler
    RATELIMIT_HEADERS_ENABLED = False
    LOGIN_RATE_LIMIT = '5 per 15 minutes'
    CONTACT_RATE_LIMIT = '10 per hour'

    # Lockout after repeated failed logins from one IP
    LOCKOUT_MAX_ATTEMPTS = 5
    LOCKOUT_SECONDS = 30 * 60
    LOCKOUT_SWEEP_INTERVAL = 60 * 60

    # Number of reverse proxies in front of the app. When set, ProxyFix takes
    # the client address from that many X-Forwarded-For hops (rightmost
    # first); 0 keeps the socket address.
    PROXY_FIX_X_FOR = int(os.environ.get('PROXY_FIX_X_FOR', '0'))

    # Uploads
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024
    IMAGE_MAX_WIDTH = 800
    IMAGE_MAX_HEIGHT = 600
    IMAGE_QUALITY = 80
    REMOTE_IMAGE_TIMEOUT = 10

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Admin credentials come from the environment: ADMIN_USER/ADMIN_PASSWORD,
    # or the legacy LOGIN/SENHA pair. ADMIN_PASSWORD_HASH may replace the
    # plaintext password.
    ADMIN_USER_VARS = ('ADMIN_USER', 'ADMIN_PASSWORD')
    LEGACY_ADMIN_USER_VARS = ('LOGIN', 'SENHA')
    ADMIN_PASSWORD_HASH_VAR = 'ADMIN_PASSWORD_HASH'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    APP_ENV = 'test'
    SECRET_KEY = 'test-secret'
    SECRET_KEY_GENERATED = False
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SESSION_COOKIE_SECURE = False
    RATELIMIT_ENABLED = True
    PROXY_FIX_X_FOR = 0
    LOG_LEVEL = 'WARNING'
