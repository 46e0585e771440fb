"""
Flask Extensions

Shared extension instances, bound to the application in create_app().
"""

from flask_limiter import Limiter
from flask_login import LoginManager
from flask_limiter.util import get_remote_address
from flask_sqlalchemy import SQLAlchemy

# Database instance
db = SQLAlchemy()

# Session identity for the single admin account
login_manager = LoginManager()

# Per-route limits only, keyed by the peer address (ProxyFix applied in
# create_app when proxies are trusted); storage comes from RATELIMIT_STORAGE_URI
limiter = Limiter(key_func=get_remote_address, default_limits=[])
