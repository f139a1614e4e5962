"""Flask application factory."""

import logging
import os

import click
from flask import Flask, request
from flask_limiter.errors import RateLimitExceeded
from werkzeug.exceptions import HTTPException

from .config import config
from .extensions import db, migrate, login_manager, bcrypt, limiter

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """Create and configure the Flask application."""
    if config_name is None:
        config_name = os.environ.get('FLASK_CONFIG', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    logging.basicConfig(
        level=getattr(logging, str(app.config['LOG_LEVEL']).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    limiter.init_app(app)

    os.makedirs(app.instance_path, exist_ok=True)

    # Register blueprints
    from .routes import register_blueprints
    register_blueprints(app)

    from .middleware import register_middleware
    register_middleware(app)

    # Bearer token loader for Flask-Login
    from .errors import ApiError, AuthenticationRequired, error_response
    from .models import User
    from .utils.tokens import bearer_token, decode_access_token

    @login_manager.request_loader
    def load_user_from_request(request):
        token = bearer_token(request.headers.get('Authorization'))
        if token is None:
            return None
        user_id = decode_access_token(token)
        if user_id is None:
            return None
        return db.session.get(User, user_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        raise AuthenticationRequired()

    # Error handlers
    @app.errorhandler(ApiError)
    def api_error(error):
        db.session.rollback()
        return error_response(error.status_code, error.message, error.details)

    @app.errorhandler(RateLimitExceeded)
    def rate_limited(error):
        logger.warning(f"Rate limit {error.description} exceeded on {request.method} {request.path}")
        return error_response(429, 'Rate limit exceeded', {'limit': error.description})

    @app.errorhandler(HTTPException)
    def http_error(error):
        # Routing redirects keep their Location header
        if error.code is None or error.code < 400:
            return error
        return error_response(error.code, error.description or error.name)

    @app.errorhandler(Exception)
    def internal_error(error):
        db.session.rollback()
        logger.exception(f"Unhandled error: {error}")
        return error_response(500, 'An unexpected error occurred')

    @app.cli.command('seed')
    @click.option('--reset', is_flag=True, help='Drop and recreate all tables first.')
    def seed_command(reset):
        """Load demo categories, users, stores, snacks and reviews."""
        from .seed import seed
        seed(reset=reset)

    logger.debug(f"Created app with '{config_name}' config")
    return app
