"""
Auth Routes

Admin login, logout and session identity. The admin account comes from the
environment; failed attempts are rate limited and tracked per client IP.
"""

import logging
from datetime import datetime, timezone

from flask import current_app, jsonify, session
from flask_limiter.util import get_remote_address
from flask_login import current_user, login_user, logout_user

from unipet.auth import auth_bp
from unipet.auth.credentials import ensure_credentials_loadable, validate
from unipet.auth.identity import ADMIN_ID, AdminIdentity
from unipet.errors import AuthenticationError, ConfigurationError, LockoutError, ValidationError
from unipet.extensions import limiter
from unipet.utils import request_payload

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = 'Credenciais inválidas'
MISSING_FIELDS_MESSAGE = 'Username e senha são obrigatórios'


def get_lockout_tracker():
    return current_app.extensions['unipet.lockout']


def get_credentials():
    return current_app.extensions['unipet.credentials']


def _login_rate_limit():
    return current_app.config.get('LOGIN_RATE_LIMIT', '5 per 15 minutes')


def _counts_against_limit(response):
    # Only rejected credentials use up the window
    return response.status_code == 401


@auth_bp.route('/api/admin/login', methods=['POST'])
@limiter.limit(_login_rate_limit, deduct_when=_counts_against_limit)
def login():
    """Authenticate the admin and start a session."""
    data = request_payload()
    username = str(data.get('username') or '').strip()
    password = str(data.get('password') or '')

    if not username or not password:
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    ip = get_remote_address()
    tracker = get_lockout_tracker()

    if tracker.is_locked(ip):
        retry_after = tracker.retry_after(ip)
        logger.warning('Login rejected for locked IP %s (%ds left)', ip, retry_after)
        raise LockoutError(retry_after=retry_after)

    try:
        ensure_credentials_loadable(current_app)
    except ConfigurationError:
        logger.error('Admin credentials are no longer available in the environment')
        raise

    if not validate(username, password, get_credentials()):
        record = tracker.record_failure(ip)
        remaining = max(tracker.max_attempts - record.count, 0)
        logger.warning('Failed admin login from %s (%d attempts remaining)', ip, remaining)
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

    tracker.record_success(ip)

    # Fresh session on every login
    session.clear()
    identity = AdminIdentity(get_credentials().username)
    login_user(identity, fresh=True)
    session.permanent = True
    session['admin_created_at'] = identity.created_at.isoformat()

    logger.info('Admin %s logged in from %s', identity.username, ip)
    return jsonify(identity.to_dict()), 200


@auth_bp.route('/api/admin/logout', methods=['POST'])
def logout():
    """Destroy the admin session."""
    try:
        logout_user()
        session.clear()
    except Exception as exc:
        logger.error('Error destroying admin session: %s', exc, exc_info=True)
        return jsonify({'error': 'Erro ao encerrar sessão'}), 500
    return jsonify({'success': True}), 200


@auth_bp.route('/api/admin/user', methods=['GET'])
def current_admin():
    """Return the logged-in admin identity."""
    if not current_user.is_authenticated:
        raise AuthenticationError()
    return jsonify(current_user.to_dict()), 200


def load_admin(user_id):
    """Flask-Login user loader: rebuild the identity from the session."""
    if user_id != ADMIN_ID:
        return None
    credentials = current_app.extensions.get('unipet.credentials')
    if credentials is None:
        return None
    created_at = None
    raw = session.get('admin_created_at')
    if raw:
        try:
            created_at = datetime.fromisoformat(raw)
        except ValueError:
            created_at = None
    return AdminIdentity(credentials.username, created_at or datetime.now(timezone.utc))


def unauthorized():
    """Flask-Login unauthorized handler: JSON 401 instead of a redirect."""
    raise AuthenticationError()
