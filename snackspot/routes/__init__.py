"""Routes package - register all blueprints."""

from flask import Flask, current_app

from snackspot.extensions import limiter

API_PREFIX = '/api/v1'


def rate_limit(name):
    """Apply the ``RATE_LIMITS[name]`` window from config to a view."""
    return limiter.limit(lambda: current_app.config['RATE_LIMITS'][name])


def register_blueprints(app: Flask):
    """Register all blueprints with the application."""
    from .main import main_bp
    from .auth import auth_bp
    from .users import users_bp
    from .categories import categories_bp
    from .stores import stores_bp
    from .snacks import snacks_bp
    from .reviews import reviews_bp
    from .images import images_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp, url_prefix=f'{API_PREFIX}/auth')
    app.register_blueprint(users_bp, url_prefix=f'{API_PREFIX}/users')
    app.register_blueprint(categories_bp, url_prefix=f'{API_PREFIX}/categories')
    app.register_blueprint(stores_bp, url_prefix=f'{API_PREFIX}/stores')
    app.register_blueprint(snacks_bp, url_prefix=f'{API_PREFIX}/snacks')
    app.register_blueprint(reviews_bp, url_prefix=f'{API_PREFIX}/reviews')
    app.register_blueprint(images_bp, url_prefix=f'{API_PREFIX}/images')
