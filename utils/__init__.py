"""
Utils Package - Services layer used by the blueprints
"""

from .errors import (
    PortfolioError,
    ValidationError,
    AuthError,
    InvalidCredentials,
    InvalidToken,
    MissingToken,
    NotFound,
    UpstreamError,
    UploadFailed,
    DatabaseError,
    ConfigurationError
)
from .database import Database, get_database, init_database, seed_defaults
from .security import (
    get_client_ip,
    hash_password,
    verify_password,
    issue_token,
    verify_token,
    get_bearer_token,
    login
)
from .decorators import authenticate_request, token_required
from .helpers import get_payload, to_int, normalize_url, serialize_row
from .uploads import upload_image, upload_resume, get_asset_store

__all__ = [
    # Errors
    'PortfolioError',
    'ValidationError',
    'AuthError',
    'InvalidCredentials',
    'InvalidToken',
    'MissingToken',
    'NotFound',
    'UpstreamError',
    'UploadFailed',
    'DatabaseError',
    'ConfigurationError',

    # Database
    'Database',
    'get_database',
    'init_database',
    'seed_defaults',

    # Security
    'get_client_ip',
    'hash_password',
    'verify_password',
    'issue_token',
    'verify_token',
    'get_bearer_token',
    'login',

    # Decorators
    'authenticate_request',
    'token_required',

    # Helpers
    'get_payload',
    'to_int',
    'normalize_url',
    'serialize_row',

    # Uploads
    'upload_image',
    'upload_resume',
    'get_asset_store'
]
