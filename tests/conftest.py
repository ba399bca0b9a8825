import pytest

from app import create_app
from utils.database import get_database


@pytest.fixture
def app(tmp_path):
    app = create_app('testing')
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')
    with app.app_context():
        yield app
        get_database().close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def database(app):
    return get_database()


@pytest.fixture
def token(client):
    response = client.post('/api/auth/login', json={'username': 'admin', 'password': 'admin123'})
    assert response.status_code == 200
    return response.get_json()['token']


@pytest.fixture
def auth_headers(token):
    return {'Authorization': f'Bearer {token}'}
