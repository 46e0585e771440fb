"""
Admin Credentials

The admin account is a single username/password pair taken from the
environment. The password is hashed once when loaded and every comparison
runs in constant time.
"""

import hmac
import logging
import os

from werkzeug.security import check_password_hash, generate_password_hash

from unipet.errors import ConfigurationError

logger = logging.getLogger(__name__)

PRIMARY_VARS = ('ADMIN_USER', 'ADMIN_PASSWORD')
LEGACY_VARS = ('LOGIN', 'SENHA')
PASSWORD_HASH_VAR = 'ADMIN_PASSWORD_HASH'

MISSING_VARIABLES_MESSAGE = 'Authentication setup failed: missing environment variables'


def _resolve(environ, primary, legacy, hash_var):
    """Pick the credential pair to use.

    Returns (username, password, password_hash, source). Raises
    ConfigurationError when neither pair is complete.
    """
    user_var, password_var = primary
    username = environ.get(user_var, '')
    password = environ.get(password_var, '')
    password_hash = environ.get(hash_var, '')
    if username and (password_hash or password):
        return username, password, password_hash, 'primary'

    user_var, password_var = legacy
    username = environ.get(user_var, '')
    password = environ.get(password_var, '')
    if username and password:
        return username, password, '', 'legacy'

    raise ConfigurationError(MISSING_VARIABLES_MESSAGE)


class CredentialSource:
    """Interface for anything that can verify admin credentials."""

    username = None

    def verify(self, username, password):
        raise NotImplementedError


class EnvCredentialSource(CredentialSource):
    """Single admin account configured through environment variables."""

    def __init__(self, username, password_hash, source='primary'):
        self.username = username
        self._password_hash = password_hash
        self.source = source

    @classmethod
    def from_environ(cls, environ=None, primary=PRIMARY_VARS, legacy=LEGACY_VARS,
                     hash_var=PASSWORD_HASH_VAR):
        """Load the credential pair, preferring the primary variable names."""
        if environ is None:
            environ = os.environ
        username, password, password_hash, source = _resolve(environ, primary, legacy, hash_var)
        if not password_hash:
            password_hash = generate_password_hash(password)
        if source == 'legacy':
            logger.info('Admin credentials loaded from legacy variables %s/%s', *legacy)
        return cls(username, password_hash, source)

    def verify(self, username, password):
        # Both halves are always evaluated so timing does not reveal which
        # one was wrong.
        username_ok = hmac.compare_digest(
            (username or '').encode('utf-8'), self.username.encode('utf-8'))
        password_ok = check_password_hash(self._password_hash, password or '')
        return username_ok and password_ok

    def __repr__(self):
        return f'<EnvCredentialSource {self.username!r} ({self.source})>'


def validate(username, password, source=None):
    """Return True when the pair matches the configured admin account.

    Without an explicit source the pair is checked against the environment.
    """
    if source is None:
        source = EnvCredentialSource.from_environ()
    return source.verify(username, password)


def _var_names(app):
    if app is None:
        return {}
    return {
        'primary': tuple(app.config.get('ADMIN_USER_VARS', PRIMARY_VARS)),
        'legacy': tuple(app.config.get('LEGACY_ADMIN_USER_VARS', LEGACY_VARS)),
        'hash_var': app.config.get('ADMIN_PASSWORD_HASH_VAR', PASSWORD_HASH_VAR),
    }


def load_admin_credentials(app=None, environ=None):
    """Load admin credentials using the variable names from app config."""
    return EnvCredentialSource.from_environ(environ, **_var_names(app))


def ensure_credentials_loadable(app=None, environ=None):
    """Raise ConfigurationError if the environment no longer holds a pair."""
    names = {'primary': PRIMARY_VARS, 'legacy': LEGACY_VARS, 'hash_var': PASSWORD_HASH_VAR}
    names.update(_var_names(app))
    _resolve(os.environ if environ is None else environ, **names)
