"""
Admin Decorator

Protects admin API routes with the session identity set at login.
"""

from functools import wraps

from flask_login import current_user

from unipet.extensions import login_manager


def admin_required(f):
    """Reject the request with 401 unless an admin is logged in."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated or not getattr(current_user, 'username', None):
            return login_manager.unauthorized()
        return f(*args, **kwargs)
    return wrapper
