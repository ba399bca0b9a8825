"""
Admin Blueprint - Content management behind a bearer token
Handles: Profile, projects, skills, image and resume uploads
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__, url_prefix='/api/admin')

from . import routes
