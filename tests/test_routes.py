import io

import pytest
from cloudinary.exceptions import Error as CloudinaryError

from utils import uploads


def test_health(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    assert response.get_json() == {'success': True, 'message': 'Server is running'}


def test_cors_headers(client):
    response = client.get('/api/health', headers={'Origin': 'http://localhost:3000'})
    assert response.headers['Access-Control-Allow-Origin'] == '*'
    assert 'Authorization' in response.headers['Access-Control-Allow-Headers']


def test_preflight_on_admin_route_needs_no_token(client):
    response = client.options('/api/admin/projects')
    assert response.status_code == 200
    assert 'PUT' in response.headers['Access-Control-Allow-Methods']


# ==================== AUTH ====================

def test_login_and_verify(client):
    response = client.post('/api/auth/login', json={'username': 'admin', 'password': 'admin123'})
    body = response.get_json()

    assert response.status_code == 200
    assert body['success'] is True
    assert body['admin']['username'] == 'admin'
    assert set(body['admin']) == {'id', 'username', 'email'}

    verify = client.get('/api/auth/verify', headers={'Authorization': f"Bearer {body['token']}"})
    assert verify.status_code == 200
    assert verify.get_json() == {'success': True, 'admin': {'id': body['admin']['id'], 'username': 'admin'}}


def test_login_with_form_body(client):
    response = client.post('/api/auth/login', data={'username': 'admin', 'password': 'admin123'})
    assert response.status_code == 200
    assert response.get_json()['token']


def test_login_failures_share_one_response(client):
    wrong_password = client.post('/api/auth/login', json={'username': 'admin', 'password': 'nope'})
    unknown_user = client.post('/api/auth/login', json={'username': 'ghost', 'password': 'admin123'})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.get_json() == unknown_user.get_json() == {
        'success': False, 'message': 'Invalid credentials'}


def test_login_missing_fields(client):
    response = client.post('/api/auth/login', json={'username': 'admin'})
    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_login_with_non_string_credentials(client):
    response = client.post('/api/auth/login', json={'username': 'admin', 'password': 12345})
    assert response.status_code == 400
    assert response.get_json() == {'success': False, 'message': 'Username and password are required'}


def test_verify_without_token(client):
    response = client.get('/api/auth/verify')
    assert response.status_code == 401
    assert response.get_json() == {'success': False, 'message': 'No token provided'}


def test_verify_with_bad_token(client):
    response = client.get('/api/auth/verify', headers={'Authorization': 'Bearer garbage'})
    assert response.status_code == 401
    assert response.get_json()['message'] == 'Invalid token'


@pytest.mark.parametrize('method, path', [
    ('put', '/api/admin/profile'),
    ('post', '/api/admin/projects'),
    ('put', '/api/admin/projects/1'),
    ('delete', '/api/admin/projects/1'),
    ('post', '/api/admin/skills'),
    ('put', '/api/admin/skills/1'),
    ('delete', '/api/admin/skills/1'),
    ('post', '/api/admin/upload'),
    ('post', '/api/admin/upload-resume'),
])
def test_admin_routes_require_token(client, method, path):
    response = getattr(client, method)(path, json={})
    assert response.status_code == 401
    assert response.get_json()['success'] is False


def test_demo_mode_login(app, client):
    app.config['DEMO_MODE'] = True
    response = client.post('/api/auth/login', json={'username': 'admin', 'password': 'admin123'})
    body = response.get_json()

    assert response.status_code == 200
    assert 'Demo Mode' in body['message']
    assert body['admin']['email'] == 'demo@example.com'


# ==================== PUBLIC + ADMIN CONTENT ====================

def test_profile_update_flow(client, auth_headers):
    response = client.put('/api/admin/profile', headers=auth_headers, json={
        'name': 'Ada', 'role': 'Engineer', 'github_url': 'www.github.com/ada'})
    assert response.status_code == 200
    assert response.get_json()['success'] is True

    profile = client.get('/api/public').get_json()['profile']
    assert profile['name'] == 'Ada'
    assert profile['github_url'] == 'https://github.com/ada'


def test_profile_update_validation(client, auth_headers):
    response = client.put('/api/admin/profile', headers=auth_headers, json={'name': 'Ada'})
    assert response.status_code == 400


def test_project_lifecycle(client, auth_headers):
    created = client.post('/api/admin/projects', headers=auth_headers, json={
        'title': 'Portfolio', 'short_description': 'This site',
        'tech_stack': ['React', 'Node'], 'display_order': 1})
    assert created.status_code == 200
    project_id = created.get_json()['projectId']

    project = client.get(f'/api/public/projects/{project_id}').get_json()['project']
    assert project['tech_stack'] == ['React', 'Node']

    updated = client.put(f'/api/admin/projects/{project_id}', headers=auth_headers, json={
        'title': 'Portfolio v2', 'tech_stack': ['Flask']})
    assert updated.status_code == 200

    projects = client.get('/api/public/projects').get_json()['projects']
    assert [(p['title'], p['tech_stack']) for p in projects] == [('Portfolio v2', ['Flask'])]

    deleted = client.delete(f'/api/admin/projects/{project_id}', headers=auth_headers)
    assert deleted.status_code == 200

    missing = client.get(f'/api/public/projects/{project_id}')
    assert missing.status_code == 404
    assert missing.get_json() == {'success': False, 'message': 'Project not found'}


def test_update_unknown_project(client, auth_headers):
    response = client.put('/api/admin/projects/4242', headers=auth_headers, json={'title': 'x'})
    assert response.status_code == 404


@pytest.mark.parametrize('path', [
    '/api/public/projects/99999999999999999999',
    '/api/public/projects/0',
])
def test_unstorable_project_id_is_not_found(client, path):
    response = client.get(path)
    assert response.status_code == 404
    assert response.get_json()['success'] is False


def test_unstorable_id_on_admin_route_is_not_found(client, auth_headers):
    response = client.put('/api/admin/skills/99999999999999999999', headers=auth_headers, json={'name': 'x'})
    assert response.status_code == 404


def test_display_order_too_large(client, auth_headers):
    response = client.post('/api/admin/projects', headers=auth_headers,
                           json={'title': 'Huge', 'display_order': 10 ** 30})
    assert response.status_code == 400
    assert client.get('/api/public/projects').get_json()['projects'] == []


def test_project_from_form_body(client, auth_headers):
    response = client.post('/api/admin/projects', headers=auth_headers,
                           data={'title': 'Form', 'tech_stack': ['Go', 'Rust']})
    project_id = response.get_json()['projectId']
    project = client.get(f'/api/public/projects/{project_id}').get_json()['project']
    assert project['tech_stack'] == ['Go', 'Rust']


def test_json_body_must_be_object(client, auth_headers):
    response = client.post('/api/admin/projects', headers=auth_headers, json=['not', 'an', 'object'])
    assert response.status_code == 400


def test_skill_lifecycle(client, auth_headers):
    created = client.post('/api/admin/skills', headers=auth_headers,
                          json={'name': 'Python', 'category': 'Backend', 'proficiency_level': 90})
    assert created.status_code == 200
    skill_id = created.get_json()['skillId']

    client.put(f'/api/admin/skills/{skill_id}', headers=auth_headers,
               json={'name': 'Python', 'proficiency_level': 95})
    skills = client.get('/api/public/skills').get_json()['skills']
    assert [(s['name'], s['proficiency_level']) for s in skills] == [('Python', 95)]

    assert client.delete(f'/api/admin/skills/{skill_id}', headers=auth_headers).status_code == 200
    assert client.get('/api/public/skills').get_json()['skills'] == []


def test_skill_out_of_range(client, auth_headers):
    response = client.post('/api/admin/skills', headers=auth_headers,
                           json={'name': 'Everything', 'proficiency_level': 500})
    assert response.status_code == 400


def test_unknown_route_uses_json_envelope(client):
    response = client.get('/api/nothing-here')
    assert response.status_code == 404
    assert response.get_json()['success'] is False


# ==================== UPLOADS ====================

def test_image_upload_to_local_store(client, auth_headers):
    response = client.post('/api/admin/upload', headers=auth_headers, content_type='multipart/form-data',
                           data={'image': (io.BytesIO(b'png-bytes'), 'avatar.png', 'image/png')})
    body = response.get_json()

    assert response.status_code == 200
    assert body['url'].startswith('/uploads/portfolio/images/')

    served = client.get(body['url'])
    assert served.status_code == 200
    assert served.data == b'png-bytes'


def test_upload_without_file(client, auth_headers):
    response = client.post('/api/admin/upload', headers=auth_headers, content_type='multipart/form-data', data={})
    assert response.status_code == 400
    assert response.get_json()['message'] == 'No file uploaded'


def test_upload_wrong_type(client, auth_headers):
    response = client.post('/api/admin/upload', headers=auth_headers, content_type='multipart/form-data',
                           data={'image': (io.BytesIO(b'%PDF'), 'cv.pdf', 'application/pdf')})
    assert response.status_code == 400


def test_resume_upload_failure_hides_provider_details(app, client, auth_headers, monkeypatch):
    app.config.update(ASSET_STORE='cloudinary', CLOUDINARY_CLOUD_NAME='demo',
                      CLOUDINARY_API_KEY='key', CLOUDINARY_API_SECRET='secret')

    def rejected_upload(file, **options):
        raise CloudinaryError('Invalid Signature 1234abcd')

    monkeypatch.setattr(uploads.cloudinary.uploader, 'upload', rejected_upload)
    response = client.post('/api/admin/upload-resume', headers=auth_headers, content_type='multipart/form-data',
                           data={'resume': (io.BytesIO(b'%PDF-1.4'), 'cv.pdf', 'application/pdf')})

    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'message': 'Error uploading file'}
