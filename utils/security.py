"""
Security Module - Password hashing, bearer tokens and admin login
"""

from datetime import datetime, timedelta, timezone
from flask import request, current_app
from jose import JWTError, jwt
from werkzeug.security import generate_password_hash, check_password_hash

from .database import get_database
from .errors import ValidationError, InvalidCredentials, InvalidToken, MissingToken, ConfigurationError


# Compared against when the username is unknown
_DUMMY_PASSWORD_HASH = generate_password_hash('not-the-admin-password')


def get_client_ip():
    """Get real client IP address"""
    return request.environ.get('HTTP_X_FORWARDED_FOR',
                               request.environ.get('REMOTE_ADDR', 'unknown'))


def hash_password(password):
    return generate_password_hash(password)


def verify_password(password, password_hash):
    """Verify password against hash"""
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # Unrecognised hash format stored in the admin row
        return False


def get_signing_key():
    """Secret used to sign tokens; the demo fallback only applies in demo mode"""
    secret = current_app.config.get('JWT_SECRET')
    if secret:
        return secret
    if current_app.config.get('DEMO_MODE'):
        return current_app.config['DEMO_JWT_SECRET']
    current_app.logger.error("JWT_SECRET is not set")
    raise ConfigurationError()


def issue_token(admin_id, username, expires_in=None):
    if expires_in is None:
        expires_in = timedelta(hours=current_app.config.get('JWT_EXPIRATION_HOURS', 24))
    claims = {
        'id': admin_id,
        'username': username,
        'exp': datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(claims, get_signing_key(), algorithm=current_app.config.get('JWT_ALGORITHM', 'HS256'))


def verify_token(token):
    """Return ``{'id', 'username'}`` for a valid token or raise InvalidToken"""
    if not token:
        raise MissingToken()
    try:
        payload = jwt.decode(token, get_signing_key(),
                             algorithms=[current_app.config.get('JWT_ALGORITHM', 'HS256')])
    except JWTError:
        raise InvalidToken()

    admin_id = payload.get('id')
    username = payload.get('username')
    if admin_id is None or not username:
        raise InvalidToken()
    return {'id': admin_id, 'username': username}


def get_bearer_token():
    """Extract the token from an ``Authorization: Bearer <token>`` header"""
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def demo_login(username, password):
    config = current_app.config
    if username != config['DEMO_USERNAME'] or password != config['DEMO_PASSWORD']:
        raise InvalidCredentials(
            f'Demo mode: Use username "{config["DEMO_USERNAME"]}" and password "{config["DEMO_PASSWORD"]}"')

    admin = {'id': 1, 'username': config['DEMO_USERNAME'], 'email': config['DEMO_EMAIL']}
    return issue_token(admin['id'], admin['username']), admin


def login(username, password):
    """Check the admin credentials and return ``(token, admin)``.

    An unknown username and a wrong password raise the same
    InvalidCredentials error.
    """
    if not username or not password:
        raise ValidationError('Username and password are required')
    if not isinstance(username, str) or not isinstance(password, str):
        raise ValidationError('Username and password are required')

    if current_app.config.get('DEMO_MODE'):
        return demo_login(username, password)

    row = get_database().query(
        'SELECT id, username, email, password_hash FROM admin WHERE username = :username',
        {'username': username}).first()

    if row is None:
        verify_password(password, _DUMMY_PASSWORD_HASH)
        raise InvalidCredentials()
    if not verify_password(password, row['password_hash']):
        raise InvalidCredentials()

    admin = {'id': row['id'], 'username': row['username'], 'email': row['email']}
    return issue_token(admin['id'], admin['username']), admin


__all__ = [
    'get_client_ip',
    'hash_password',
    'verify_password',
    'get_signing_key',
    'issue_token',
    'verify_token',
    'get_bearer_token',
    'demo_login',
    'login'
]
