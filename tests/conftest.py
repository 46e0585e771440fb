import pytest

from unipet import create_app
from unipet.config import TestConfig
from unipet.extensions import db

ADMIN_USER = 'admin@test.com'
ADMIN_PASSWORD = 'secure-password-123'


class NoRateLimitConfig(TestConfig):
    RATELIMIT_ENABLED = False


class FakeClock:
    """Manually advanced replacement for time.time."""

    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def admin_env(monkeypatch):
    for var in ('LOGIN', 'SENHA', 'ADMIN_PASSWORD_HASH'):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv('ADMIN_USER', ADMIN_USER)
    monkeypatch.setenv('ADMIN_PASSWORD', ADMIN_PASSWORD)


def _build(config_class):
    app = create_app(config_class)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def app(admin_env):
    yield from _build(TestConfig)


@pytest.fixture
def unlimited_app(admin_env):
    """App with Flask-Limiter switched off so only the lockout applies."""
    yield from _build(NoRateLimitConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def unlimited_client(unlimited_app):
    return unlimited_app.test_client()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def login():
    def _login(client, username=ADMIN_USER, password=ADMIN_PASSWORD, ip='203.0.113.10'):
        return client.post('/api/admin/login',
                           json={'username': username, 'password': password},
                           environ_base={'REMOTE_ADDR': ip})
    return _login


@pytest.fixture
def admin_client(client, login):
    resp = login(client)
    assert resp.status_code == 200
    return client
