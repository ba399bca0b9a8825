"""
Helpers Module - Utility functions for common operations
"""

from datetime import date, datetime
from flask import request
from werkzeug.routing import IntegerConverter

from .errors import ValidationError

# Signed 64-bit, the widest integer column either backend stores
MIN_INTEGER = -2 ** 63
MAX_INTEGER = 2 ** 63 - 1


def allowed_file(filename, allowed_extensions):
    """Check if file extension is allowed"""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed_extensions


def get_payload():
    """Request body as a dict, from JSON or a url-encoded/multipart form"""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    if data is not None:
        raise ValidationError('Request body must be a JSON object')

    payload = request.form.to_dict()
    if 'tech_stack' in request.form:
        payload['tech_stack'] = request.form.getlist('tech_stack')
    return payload


def to_int(value, default=0):
    """Coerce a numeric field; absent or non-numeric values become ``default``"""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        try:
            number = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return default
    if not MIN_INTEGER <= number <= MAX_INTEGER:
        raise ValidationError('Number is out of range')
    return number


class RowIdConverter(IntegerConverter):
    """``<id:name>`` URL segment: a positive integer that fits a database id"""

    def __init__(self, map, *args, **kwargs):
        kwargs.setdefault('min', 1)
        kwargs.setdefault('max', MAX_INTEGER)
        super().__init__(map, *args, **kwargs)


def clean_text(value):
    """Strip strings and turn empty ones into None"""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def normalize_url(url):
    """Give a social link an https scheme.

    ``github.com/x`` and ``www.github.com/x`` both become
    ``https://github.com/x``; links that already carry http(s) are kept.
    """
    if not url:
        return url
    if url.lower().startswith(('http://', 'https://')):
        return url
    if url.startswith('www.'):
        url = url[len('www.'):]
    return f'https://{url}'


def serialize_row(row):
    """Convert a database row into a JSON-safe dict"""
    if not row:
        return row
    data = dict(row)
    for key, value in list(data.items()):
        if isinstance(value, (datetime, date)):
            data[key] = value.isoformat()
    return data


__all__ = [
    'allowed_file',
    'get_payload',
    'to_int',
    'RowIdConverter',
    'clean_text',
    'normalize_url',
    'serialize_row'
]
