"""
Portfolio API - Main Application Entry Point
Application Factory Pattern for a modular architecture

This module initializes the Flask application with its extensions,
configuration and middleware. Route handling is delegated to blueprints.
"""

import os
from flask import Flask, jsonify, request, send_from_directory
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from config import get_config
from extensions import db
from utils.errors import PortfolioError, DatabaseError
from utils.database import init_database
from utils.helpers import RowIdConverter

# Import all blueprints
from blueprints.auth import auth_bp
from blueprints.public import public_bp
from blueprints.admin import admin_bp


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(get_config(config_name))

    # Initialize extensions with app
    initialize_extensions(app)

    # Database ids in URLs, bounded to what the backends store
    app.url_map.converters['id'] = RowIdConverter

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Management commands
    from commands import register_commands
    register_commands(app)

    # Health check route
    @app.route('/api/health')
    def health_check():
        return jsonify({'success': True, 'message': 'Server is running'})

    # Files saved by the local asset store
    @app.route('/uploads/<path:filename>')
    def uploaded_file(filename):
        upload_folder = app.config.get('UPLOAD_FOLDER', 'uploads')
        if not os.path.isabs(upload_folder):
            upload_folder = os.path.join(app.root_path, upload_folder)
        return send_from_directory(upload_folder, filename)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions and the persistence adapter"""
    db.init_app(app)

    # Create tables and default rows if they don't exist
    try:
        init_database(app)
        app.logger.info("✓ Database initialized successfully")
    except (SQLAlchemyError, DatabaseError) as e:
        app.logger.error(f"✗ Database initialization failed: {str(e)}")


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(auth_bp)
    app.register_blueprint(public_bp)
    app.register_blueprint(admin_bp)


def register_error_handlers(app):
    """Translate every error into the JSON error envelope"""

    @app.errorhandler(PortfolioError)
    def portfolio_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(SQLAlchemyError)
    def database_error(e):
        app.logger.error(f"Database error: {str(e)}")
        return jsonify(DatabaseError().to_dict()), 500

    @app.errorhandler(413)
    def file_too_large(e):
        max_mb = app.config['MAX_CONTENT_LENGTH'] // (1024 * 1024)
        return jsonify({'success': False, 'message': f'File is too large. Maximum size is {max_mb}MB.'}), 413

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({'success': False, 'message': e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def internal_server_error(e):
        app.logger.exception(f"Server Error: {str(e)}")
        return jsonify({'success': False, 'message': 'Server error'}), 500


def register_hooks(app):
    """Register request/response hooks"""

    @app.after_request
    def add_cors_headers(response):
        """Permissive cross-origin policy for the single-page client"""
        response.headers['Access-Control-Allow-Origin'] = app.config.get('CORS_ORIGINS', '*')
        response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, DELETE, OPTIONS'
        response.headers['Access-Control-Allow-Headers'] = 'Authorization, Content-Type'
        if request.method == 'OPTIONS':
            response.headers['Access-Control-Max-Age'] = '86400'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        return response


if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Create app
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 5000)),
        debug=(env == 'development')
    )
