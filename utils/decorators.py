"""
Decorators Module - Authentication decorators
"""

from functools import wraps
from flask import g, request

from .security import get_bearer_token, verify_token


def authenticate_request():
    """Verify the bearer token of the current request and store the admin on ``g``"""
    g.admin = verify_token(get_bearer_token())
    return g.admin


def token_required(f):
    """Decorator to require a valid admin bearer token"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if request.method != 'OPTIONS':
            authenticate_request()
        return f(*args, **kwargs)
    return decorated_function
