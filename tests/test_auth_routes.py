from unipet.errors import LockoutError

IP = '203.0.113.50'


def tracker_of(app):
    return app.extensions['unipet.lockout']


def test_login_success_returns_identity(client, login):
    resp = login(client)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['id'] == 'admin'
    assert body['username'] == 'admin@test.com'
    assert body['createdAt']
    assert 'password' not in body


def test_login_sets_http_only_session_cookie(client, login):
    resp = login(client)
    cookies = resp.headers.getlist('Set-Cookie')
    session_cookie = [c for c in cookies if c.startswith('unipet_admin_session=')]
    assert session_cookie
    assert 'HttpOnly' in session_cookie[0]
    assert 'SameSite=Lax' in session_cookie[0]
    assert not any(c.startswith('remember_token=') for c in cookies)


def test_login_accepts_form_data(client):
    resp = client.post('/api/admin/login',
                       data={'username': 'admin@test.com', 'password': 'secure-password-123'})
    assert resp.status_code == 200


def test_missing_fields_return_400_without_counting(app, client, login):
    for username, password in [('', 'x'), ('admin@test.com', ''), ('', '')]:
        resp = login(client, username, password, ip=IP)
        assert resp.status_code == 400
        assert resp.get_json() == {'error': 'Username e senha são obrigatórios'}
    assert tracker_of(app).failure_count(IP) == 0


def test_missing_fields_do_not_use_up_rate_limit(client, login):
    for _ in range(8):
        assert client.post('/api/admin/login', json={}, environ_base={'REMOTE_ADDR': IP}).status_code == 400
    assert login(client, ip=IP).status_code == 200


def test_invalid_credentials_are_indistinguishable(client, login):
    wrong_password = login(client, 'admin@test.com', 'nope', ip='203.0.113.1')
    wrong_username = login(client, 'someone@test.com', 'secure-password-123', ip='203.0.113.2')
    assert wrong_password.status_code == wrong_username.status_code == 401
    assert wrong_password.get_json() == wrong_username.get_json() == {'error': 'Credenciais inválidas'}


def test_failures_are_counted_per_ip(app, client, login):
    login(client, password='bad', ip=IP)
    login(client, password='bad', ip=IP)
    assert tracker_of(app).failure_count(IP) == 2
    assert tracker_of(app).failure_count('203.0.113.99') == 0


def test_sixth_attempt_is_blocked(client, login):
    for _ in range(5):
        assert login(client, password='bad', ip=IP).status_code == 401
    resp = login(client, ip=IP)
    assert resp.status_code in (423, 429)
    assert resp.headers['Retry-After']


def test_lockout_returns_423_with_retry_after(unlimited_app, unlimited_client, login):
    for _ in range(5):
        assert login(unlimited_client, password='bad', ip=IP).status_code == 401

    resp = login(unlimited_client, password='bad', ip=IP)
    assert resp.status_code == 423
    body = resp.get_json()
    assert 'temporariamente bloqueada' in body['error']
    assert 0 < body['retryAfter'] <= 30 * 60
    assert resp.headers['Retry-After'] == str(body['retryAfter'])


def test_lockout_takes_precedence_over_valid_credentials(unlimited_client, login):
    for _ in range(5):
        login(unlimited_client, password='bad', ip=IP)
    resp = login(unlimited_client, ip=IP)
    assert resp.status_code == 423
    assert resp.get_json()['error'] == LockoutError.message


def test_success_resets_failure_count(unlimited_app, unlimited_client, login):
    for _ in range(4):
        login(unlimited_client, password='bad', ip=IP)
    assert login(unlimited_client, ip=IP).status_code == 200
    assert tracker_of(unlimited_app).failure_count(IP) == 0

    for _ in range(4):
        assert login(unlimited_client, password='bad', ip=IP).status_code == 401
    assert login(unlimited_client, ip=IP).status_code == 200


def test_lockout_expires_after_thirty_minutes(unlimited_app, unlimited_client, login, fake_clock):
    tracker_of(unlimited_app).clock = fake_clock
    for _ in range(5):
        login(unlimited_client, password='bad', ip=IP)
    assert login(unlimited_client, ip=IP).status_code == 423

    fake_clock.advance(31 * 60)
    resp = login(unlimited_client, ip=IP)
    assert resp.status_code == 200
    assert resp.get_json()['username'] == 'admin@test.com'


def test_lockout_does_not_affect_other_ips(unlimited_client, login):
    for _ in range(5):
        login(unlimited_client, password='bad', ip=IP)
    assert login(unlimited_client, ip='203.0.113.51').status_code == 200


def test_rate_limit_returns_429(client, login):
    for _ in range(5):
        login(client, password='bad', ip=IP)
    resp = login(client, password='bad', ip=IP)
    assert resp.status_code == 429
    body = resp.get_json()
    assert 'error' in body
    assert 0 < body['retryAfter'] <= 15 * 60
    assert resp.headers['Retry-After'] == str(body['retryAfter'])


def test_spoofed_forwarded_for_does_not_escape_lockout(unlimited_client):
    statuses = []
    for i in range(10):
        resp = unlimited_client.post('/api/admin/login',
                                     json={'username': 'admin@test.com', 'password': 'bad'},
                                     headers={'X-Forwarded-For': f'10.0.0.{i}'})
        statuses.append(resp.status_code)
    assert statuses == [401] * 5 + [423] * 5


def test_spoofed_forwarded_for_does_not_escape_rate_limit(client):
    statuses = []
    for i in range(6):
        resp = client.post('/api/admin/login',
                           json={'username': 'admin@test.com', 'password': 'bad'},
                           headers={'X-Forwarded-For': f'10.0.0.{i}'})
        statuses.append(resp.status_code)
    assert statuses == [401] * 5 + [429]


def test_trusted_proxy_hop_sets_client_address(admin_env):
    from unipet import create_app
    from unipet.config import TestConfig

    class BehindProxyConfig(TestConfig):
        PROXY_FIX_X_FOR = 1

    app = create_app(BehindProxyConfig)
    app.test_client().post('/api/admin/login', json={'username': 'x', 'password': 'y'},
                           headers={'X-Forwarded-For': '192.0.2.1, 10.0.0.1'})
    # Only the hop appended by the trusted proxy counts
    assert tracker_of(app).failure_count('10.0.0.1') == 1
    assert tracker_of(app).failure_count('192.0.2.1') == 0


def test_credentials_removed_at_runtime_return_500(client, login, monkeypatch):
    monkeypatch.delenv('ADMIN_USER')
    resp = login(client)
    assert resp.status_code == 500
    assert resp.get_json() == {'error': 'Authentication setup failed: missing environment variables'}


def test_legacy_credentials_can_log_in(monkeypatch):
    from unipet import create_app
    from unipet.config import TestConfig

    for var in ('ADMIN_USER', 'ADMIN_PASSWORD', 'ADMIN_PASSWORD_HASH'):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv('LOGIN', 'legacy-admin')
    monkeypatch.setenv('SENHA', 'legacy-senha')

    client = create_app(TestConfig).test_client()
    resp = client.post('/api/admin/login', json={'username': 'legacy-admin', 'password': 'legacy-senha'})
    assert resp.status_code == 200
    assert resp.get_json()['username'] == 'legacy-admin'


# ── Session ──────────────────────────────────────────────────

def test_user_requires_session(client):
    resp = client.get('/api/admin/user')
    assert resp.status_code == 401
    assert resp.get_json() == {'error': 'Admin authentication required'}


def test_user_after_login(admin_client):
    resp = admin_client.get('/api/admin/user')
    assert resp.status_code == 200
    assert resp.get_json()['username'] == 'admin@test.com'


def test_created_at_is_stable_across_requests(client, login):
    created_at = login(client).get_json()['createdAt']
    assert client.get('/api/admin/user').get_json()['createdAt'] == created_at


def test_logout_ends_session(admin_client):
    resp = admin_client.post('/api/admin/logout')
    assert resp.status_code == 200
    assert resp.get_json() == {'success': True}
    assert admin_client.get('/api/admin/user').status_code == 401
    assert admin_client.get('/api/admin/plans').status_code == 401


def test_logout_without_session_is_harmless(client):
    assert client.post('/api/admin/logout').status_code == 200


def test_protected_routes_reject_anonymous(client):
    for method, path in [
        ('get', '/api/admin/plans'),
        ('post', '/api/admin/faq'),
        ('put', '/api/admin/settings'),
        ('get', '/api/admin/contact/submissions'),
        ('post', '/api/admin/images'),
    ]:
        resp = getattr(client, method)(path, json={})
        assert resp.status_code == 401, path
        assert resp.get_json() == {'error': 'Admin authentication required'}
