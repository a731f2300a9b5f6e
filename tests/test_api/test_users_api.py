from unittest.mock import AsyncMock

from api.dependencies import get_current_user, get_database
from api.main import app
from domain.exceptions.currency import AuthenticationError, UserAlreadyExistsError, ValidationError
from infrastructure.persistence.database import Database


def test_register_user(client, mock_user_service, current_user):
    mock_user_service.register.return_value = current_user

    response = client.post('/api/users', json={'username': 'alice', 'password': 'secret-pass'})

    assert response.status_code == 201
    data = response.json()
    assert data['username'] == 'alice'
    assert data['id'] == str(current_user.id)
    mock_user_service.register.assert_awaited_once_with('alice', 'secret-pass')


def test_register_duplicate_user_returns_409(client, mock_user_service):
    mock_user_service.register.side_effect = UserAlreadyExistsError('User alice already exists')

    response = client.post('/api/users', json={'username': 'alice', 'password': 'secret-pass'})

    assert response.status_code == 409
    assert response.json()['detail'] == 'User alice already exists'


def test_register_rejected_by_service_returns_400(client, mock_user_service):
    mock_user_service.register.side_effect = ValidationError('Username must be 3-50 characters')

    response = client.post('/api/users', json={'username': '   a   ', 'password': 'secret-pass'})

    assert response.status_code == 400


def test_register_short_password_is_rejected_by_schema(client, mock_user_service):
    response = client.post('/api/users', json={'username': 'alice', 'password': '123'})

    assert response.status_code == 422
    mock_user_service.register.assert_not_awaited()


def test_me_returns_authenticated_user(client, mock_user_service, current_user):
    del app.dependency_overrides[get_current_user]
    mock_user_service.authenticate.return_value = current_user

    response = client.get('/api/users/me', auth=('alice', 'secret-pass'))

    assert response.status_code == 200
    assert response.json()['username'] == 'alice'
    mock_user_service.authenticate.assert_awaited_once_with('alice', 'secret-pass')


def test_me_with_bad_credentials_returns_401(client, mock_user_service):
    del app.dependency_overrides[get_current_user]
    mock_user_service.authenticate.side_effect = AuthenticationError('Invalid username or password')

    response = client.get('/api/users/me', auth=('alice', 'wrong'))

    assert response.status_code == 401
    assert response.headers['WWW-Authenticate'] == 'Basic'


def test_health_ok(client):
    db = AsyncMock(spec=Database)
    app.dependency_overrides[get_database] = lambda: db

    response = client.get('/health')

    assert response.status_code == 200
    assert response.json() == {'status': 'healthy', 'database': 'ok'}


def test_health_database_unreachable(client):
    db = AsyncMock(spec=Database)
    db.health_check.side_effect = OSError('unable to open database file')
    app.dependency_overrides[get_database] = lambda: db

    response = client.get('/health')

    assert response.status_code == 503
    assert response.json()['status'] == 'unhealthy'
