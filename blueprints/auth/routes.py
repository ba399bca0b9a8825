"""
Auth Routes - Authentication and authorization
"""

from flask import current_app, g, jsonify

from utils.errors import AuthError
from utils.decorators import token_required
from utils.helpers import get_payload
from utils.security import get_client_ip, login as login_admin
from . import auth_bp


@auth_bp.route('/login', methods=['POST'])
def login():
    """Admin login, returns a bearer token"""
    data = get_payload()
    username = data.get('username')
    password = data.get('password')
    client_ip = get_client_ip()

    try:
        token, admin = login_admin(username, password)
    except AuthError:
        current_app.logger.warning(f"Failed login for '{username}' from {client_ip}")
        raise

    current_app.logger.info(f"Admin login: {admin['username']} from {client_ip}")
    message = 'Login successful'
    if current_app.config.get('DEMO_MODE'):
        message = 'Login successful (Demo Mode - Set up database for full functionality)'

    return jsonify({
        'success': True,
        'message': message,
        'token': token,
        'admin': admin
    })


@auth_bp.route('/verify')
@token_required
def verify():
    """Check that the presented token is still valid"""
    return jsonify({'success': True, 'admin': g.admin})
