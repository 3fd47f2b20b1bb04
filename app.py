"""
Portfolio API - Main Application Entry Point
Built with the Application Factory Pattern

This module initializes the Flask application with its extensions, configuration,
error handlers and middleware. All route handling is delegated to blueprints.
"""

import os
import traceback

import click
from flask import Flask, jsonify, request
from pydantic import ValidationError
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.exceptions import HTTPException

from config import get_config, validate_config
from extensions import db, login_manager
from utils.errors import APIError
from utils.helpers import format_validation_errors
from utils.security import load_user_from_request, unauthorized_response

# Import all blueprints
from blueprints.api import api_bp
from blueprints.api.routes import API_ENDPOINTS, API_VERSION, utc_timestamp
from blueprints.auth import auth_bp
from blueprints.projects import projects_bp
from blueprints.enhanced_projects import enhanced_projects_bp
from blueprints.contact import contact_bp
from blueprints.profile import profile_bp
from blueprints.ui_effects import ui_effects_bp


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
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
    validate_config(app)

    # Initialize extensions with app
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Register CLI commands
    register_commands(app)

    @app.route('/')
    def index():
        """Welcome message and endpoint map"""
        return jsonify({
            'success': True,
            'message': 'Welcome to the Portfolio API',
            'version': API_VERSION,
            'documentation': '/api/docs',
            'health': '/health',
            'endpoints': API_ENDPOINTS
        })

    @app.route('/health')
    def health_check():
        """Service health check"""
        return jsonify({
            'success': True,
            'message': 'Portfolio API is running',
            'timestamp': utc_timestamp(),
            'version': API_VERSION,
            'environment': app.config.get('ENV_NAME')
        })

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)

    login_manager.init_app(app)
    login_manager.request_loader(load_user_from_request)
    login_manager.unauthorized_handler(unauthorized_response)

    # Create tables if they don't exist
    with app.app_context():
        try:
            db.create_all()
            # Verify connection
            db.session.execute(text('SELECT 1'))
            app.logger.info("✓ Database initialized successfully")
        except SQLAlchemyError as e:
            app.logger.error(f"✗ Database initialization failed: {str(e)}")


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(api_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(projects_bp)
    app.register_blueprint(enhanced_projects_bp)
    app.register_blueprint(contact_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(ui_effects_bp)


def register_error_handlers(app):
    """Register JSON error handlers"""

    @app.errorhandler(APIError)
    def handle_api_error(e):
        if e.status_code >= 500:
            app.logger.error(f"API error on {request.method} {request.path}: {e.message}")
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        errors = format_validation_errors(e)
        app.logger.warning(f"Validation failed on {request.method} {request.path}: {len(errors)} error(s)")
        return jsonify({
            'success': False,
            'message': 'Validation failed',
            'errors': errors
        }), 400

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(e):
        db.session.rollback()
        app.logger.warning(f"Integrity error on {request.method} {request.path}: {str(e.orig)}")
        return jsonify({'success': False, 'message': 'Duplicate entry'}), 409

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        if e.code == 404:
            if request.path.startswith('/api'):
                return jsonify({
                    'success': False,
                    'message': 'API endpoint not found',
                    'path': request.path,
                    'availableEndpoints': list(API_ENDPOINTS.values())
                }), 404
            return jsonify({
                'success': False,
                'message': 'Endpoint not found',
                'path': request.path,
                'suggestion': 'Check /api/docs for available endpoints'
            }), 404

        if e.code == 413:
            return jsonify({'success': False, 'message': 'Request body is too large'}), 413

        return jsonify({'success': False, 'message': e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def internal_server_error(e):
        db.session.rollback()
        app.logger.exception(f"Server Error on {request.method} {request.path}: {str(e)}")
        body = {
            'success': False,
            'message': 'Internal Server Error',
            'timestamp': utc_timestamp()
        }
        if app.config.get('ENV_NAME') == 'development':
            body['error'] = traceback.format_exc()
        return jsonify(body), 500


def register_hooks(app):
    """Register request/response hooks"""

    @app.before_request
    def log_request():
        app.logger.info(f"{request.method} {request.path}")

    @app.after_request
    def add_cors_headers(response):
        """Allow-listed origins get CORS headers, including preflight"""
        origin = request.headers.get('Origin')
        if origin and origin in app.config.get('CORS_ORIGINS', []):
            response.headers['Access-Control-Allow-Origin'] = origin
            response.headers['Access-Control-Allow-Credentials'] = 'true'
            response.headers.add('Vary', 'Origin')
            if request.method == 'OPTIONS':
                response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, PATCH, DELETE, OPTIONS'
                response.headers['Access-Control-Allow-Headers'] = 'Content-Type, Authorization'
                response.headers['Access-Control-Max-Age'] = '86400'
        return response

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        response.headers['Permissions-Policy'] = 'geolocation=(), microphone=(), camera=()'
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        if request.path.startswith('/api'):
            response.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate'
            response.headers['Pragma'] = 'no-cache'
        return response


def register_commands(app):
    """Register Flask CLI commands"""

    @app.cli.command('seed-db')
    @click.option('--reset', is_flag=True, help='Clear content tables before seeding.')
    def seed_db(reset):
        """Seed the database with the admin user and sample content."""
        from migrations.seed_database import seed_database
        summary = seed_database(reset=reset)
        for name, count in summary.items():
            click.echo(f"{name}: {count}")


# Create app instance for gunicorn
app = create_app()

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
