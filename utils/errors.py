"""
Errors Module - Exception types raised by the services layer

Every error carries the HTTP status and the message shown to the client.
The application error handlers turn them into the JSON error envelope.
"""


class PortfolioError(Exception):
    """Base class for errors that map onto an API response"""
    status_code = 500
    message = 'Server error'

    def __init__(self, message=None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_dict(self):
        return {'success': False, 'message': self.message}


class ValidationError(PortfolioError):
    status_code = 400
    message = 'Invalid request'


class AuthError(PortfolioError):
    status_code = 401
    message = 'Unauthorized'


class InvalidCredentials(AuthError):
    message = 'Invalid credentials'


class InvalidToken(AuthError):
    message = 'Invalid token'


class MissingToken(AuthError):
    message = 'No token provided'


class NotFound(PortfolioError):
    status_code = 404
    message = 'Not found'


class UpstreamError(PortfolioError):
    status_code = 500
    message = 'Server error'


class UploadFailed(UpstreamError):
    message = 'Error uploading file'


class DatabaseError(UpstreamError):
    message = 'Database error'


class ConfigurationError(PortfolioError):
    message = 'Server is not configured correctly'


__all__ = [
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
    'ConfigurationError'
]
