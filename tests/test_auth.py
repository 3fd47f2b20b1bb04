from datetime import datetime, timedelta, timezone

import jwt

from extensions import db
from models import User
from tests.conftest import ADMIN_PASSWORD, USER_PASSWORD


def _login(client, username, password):
    return client.post('/api/auth/login', json={'username': username, 'password': password})


def test_login_with_username(client, admin_user):
    response = _login(client, 'admin', ADMIN_PASSWORD)

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['user']['username'] == 'admin'
    assert data['user']['role'] == 'admin'
    assert 'passwordHash' not in data['user']
    assert data['token']


def test_login_with_email_is_case_insensitive(client, admin_user):
    response = _login(client, 'ADMIN@example.com', ADMIN_PASSWORD)
    assert response.status_code == 200


def test_login_records_last_login(app, client, admin_user):
    _login(client, 'admin', ADMIN_PASSWORD)
    with app.app_context():
        assert User.query.filter_by(username='admin').first().last_login is not None


def test_login_rejects_wrong_password(client, admin_user):
    response = _login(client, 'admin', 'wrong')

    assert response.status_code == 401
    assert response.get_json() == {'success': False, 'message': 'Invalid credentials'}


def test_login_rejects_inactive_user(app, client, regular_user):
    with app.app_context():
        User.query.filter_by(id=regular_user.id).update({'is_active': False})
        db.session.commit()
    response = _login(client, 'visitor', USER_PASSWORD)
    assert response.status_code == 401


def test_login_requires_fields(client):
    response = client.post('/api/auth/login', json={'username': 'admin'})

    assert response.status_code == 400
    body = response.get_json()
    assert body['message'] == 'Validation failed'
    assert body['errors'][0]['field'] == 'password'


def test_failed_logins_are_rate_limited(client, admin_user):
    for _ in range(5):
        assert _login(client, 'admin', 'wrong').status_code == 401

    response = _login(client, 'admin', ADMIN_PASSWORD)
    assert response.status_code == 429
    assert response.get_json()['success'] is False


def test_successful_logins_do_not_count_toward_limit(client, admin_user):
    for _ in range(7):
        assert _login(client, 'admin', ADMIN_PASSWORD).status_code == 200


def test_logout_always_succeeds(client):
    assert client.post('/api/auth/logout').status_code == 200


def test_me_returns_current_user(client, admin_headers):
    response = client.get('/api/auth/me', headers=admin_headers)

    assert response.status_code == 200
    assert response.get_json()['data']['email'] == 'admin@example.com'


def test_me_without_token(client):
    response = client.get('/api/auth/me')

    assert response.status_code == 401
    assert response.get_json()['message'] == 'Access token required'


def test_me_with_garbage_token(client):
    response = client.get('/api/auth/me', headers={'Authorization': 'Bearer not-a-token'})

    assert response.status_code == 401
    assert response.get_json()['message'] == 'Invalid or expired token'


def test_me_with_expired_token(app, client, admin_user):
    now = datetime.now(timezone.utc)
    token = jwt.encode({
        'sub': admin_user.id,
        'role': 'admin',
        'iat': now - timedelta(hours=2),
        'exp': now - timedelta(hours=1),
        'iss': app.config['JWT_ISSUER'],
        'aud': app.config['JWT_AUDIENCE'],
    }, app.config['JWT_SECRET_KEY'], algorithm='HS256')

    response = client.get('/api/auth/me', headers={'Authorization': f"Bearer {token}"})
    assert response.status_code == 401
    assert response.get_json()['message'] == 'Invalid or expired token'


def test_register_creates_user(client, admin_headers):
    response = client.post('/api/auth/register', headers=admin_headers, json={
        'username': 'editor',
        'email': 'Editor@Example.com',
        'password': 'Editor123',
    })

    assert response.status_code == 201
    data = response.get_json()['data']
    assert data['user']['email'] == 'editor@example.com'
    assert data['user']['role'] == 'user'
    assert data['token']


def test_register_rejects_duplicates(client, admin_headers):
    response = client.post('/api/auth/register', headers=admin_headers, json={
        'username': 'Admin',
        'email': 'new@example.com',
        'password': 'Editor123',
    })
    assert response.status_code == 400


def test_register_enforces_password_rules(client, admin_headers):
    response = client.post('/api/auth/register', headers=admin_headers, json={
        'username': 'editor',
        'email': 'editor@example.com',
        'password': 'alllowercase1',
    })

    assert response.status_code == 400
    error = response.get_json()['errors'][0]
    assert error['field'] == 'password'
    assert error['message'].startswith('Password must contain')


def test_register_requires_admin(client, user_headers):
    response = client.post('/api/auth/register', headers=user_headers, json={
        'username': 'editor',
        'email': 'editor@example.com',
        'password': 'Editor123',
    })

    assert response.status_code == 403
    assert response.get_json()['message'] == 'Admin access required'
