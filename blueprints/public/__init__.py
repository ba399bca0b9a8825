"""
Public Blueprint - Read-only portfolio content
Handles: Profile, projects, skills
"""

from flask import Blueprint

public_bp = Blueprint('public', __name__, url_prefix='/api/public')

from . import routes
