import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()

basedir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Database - SQLite locally, PostgreSQL via DATABASE_URL in production
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        f'sqlite:///{os.path.join(basedir, "instance", "snackspot.db")}'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Tokens
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or SECRET_KEY
    JWT_ALGORITHM = 'HS256'
    JWT_ISSUER = os.environ.get('JWT_ISSUER', 'SnackSpotAuckland')
    ACCESS_TOKEN_EXPIRES = timedelta(minutes=int(os.environ.get('ACCESS_TOKEN_MINUTES', 60)))
    REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.environ.get('REFRESH_TOKEN_DAYS', 7)))

    # Nearby search (meters)
    DEFAULT_SEARCH_RADIUS_M = 1000
    MAX_SEARCH_RADIUS_M = 50000

    # Upload Configuration
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max request size
    MAX_IMAGE_BYTES = 5 * 1024 * 1024
    ALLOWED_IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}

    # Pagination
    ITEMS_PER_PAGE = 20

    # Input validation hook
    INPUT_VALIDATION_ENABLED = True
    MAX_JSON_STRING_LENGTH = 10000
    MAX_QUERY_VALUE_LENGTH = 2048

    # Rate limiting (Flask-Limiter), per user when authenticated, else per client address
    RATELIMIT_ENABLED = os.environ.get('RATELIMIT_ENABLED', 'true').lower() == 'true'
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_DEFAULT = '100 per minute'
    RATELIMIT_HEADERS_ENABLED = True
    RATE_LIMITS = {
        'login': '5 per minute',
        'register': '3 per minute',
        'refresh': '10 per minute',
        'snack_create': '20 per minute',
        'snack_update': '30 per minute',
        'snack_delete': '10 per minute',
        'review_create': '30 per minute',
        'snack_search': '100 per minute',
        'categories': '50 per minute',
        'users': '60 per minute',
    }

    # Response security headers
    SECURITY_HEADERS = {
        'Content-Security-Policy': "default-src 'none'; frame-ancestors 'none'",
        'X-Content-Type-Options': 'nosniff',
        'X-Frame-Options': 'DENY',
        'X-XSS-Protection': '1; mode=block',
        'Referrer-Policy': 'strict-origin-when-cross-origin',
        'Permissions-Policy': 'geolocation=(self), microphone=(), camera=(), payment=()',
    }
    HSTS_MAX_AGE = 31536000  # 1 year

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_REQUEST_BODIES = False


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    SQLALCHEMY_ECHO = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')
    LOG_REQUEST_BODIES = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False

    # Use environment variables for sensitive data
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL')


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    BCRYPT_LOG_ROUNDS = 4
    LOG_LEVEL = 'WARNING'
    RATELIMIT_ENABLED = False


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
