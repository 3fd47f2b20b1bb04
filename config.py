import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def _int_env(name, default):
    try:
        return int(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


def _database_url():
    url = os.environ.get('DATABASE_URL')
    if not url:
        pg_user = os.environ.get('PGUSER')
        pg_pass = os.environ.get('PGPASSWORD')
        pg_host = os.environ.get('PGHOST')
        pg_port = os.environ.get('PGPORT')
        pg_db = os.environ.get('PGDATABASE')
        if all([pg_user, pg_pass, pg_host, pg_port, pg_db]):
            url = f"postgresql://{pg_user}:{pg_pass}@{pg_host}:{pg_port}/{pg_db}"

    if url and url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


class Config:
    """Base configuration"""

    ENV_NAME = 'default'

    # Flask Settings
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'CHANGE-THIS-SECRET-KEY-IN-PRODUCTION')
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # JWT Settings
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET', 'fallback-secret-key-change-in-production')
    JWT_EXPIRES_IN = os.environ.get('JWT_EXPIRES_IN', '7d')
    JWT_ISSUER = 'portfolio-api'
    JWT_AUDIENCE = 'portfolio-users'

    # Database Settings
    SQLALCHEMY_DATABASE_URI = _database_url() or 'sqlite:///portfolio.db'
    # Pool tuning only applies to server databases
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': _int_env('DB_MAX_POOL_SIZE', 10),
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    } if not SQLALCHEMY_DATABASE_URI.startswith('sqlite') else {}
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Request Settings
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024  # 10MB

    # JSON Settings
    JSON_AS_ASCII = False

    # CORS
    CORS_ORIGINS = [
        origin for origin in (
            'http://localhost:3000',
            'http://localhost:5000',
            'http://127.0.0.1:3000',
            'http://127.0.0.1:5000',
            os.environ.get('FRONTEND_URL'),
            os.environ.get('FRONTEND_URL_PROD'),
        ) if origin
    ]

    # Rate limits: scope -> (max requests, window in seconds)
    RATE_LIMIT_ENABLED = True
    RATE_LIMITS = {
        'contact': (_int_env('CONTACT_RATE_LIMIT_MAX', 5), 60 * 60),
        'auth': (_int_env('AUTH_RATE_LIMIT_MAX', 5), 15 * 60),
    }

    # Default admin used by the seed command
    DEFAULT_ADMIN_USERNAME = os.environ.get('DEFAULT_ADMIN_USERNAME', 'admin')
    DEFAULT_ADMIN_EMAIL = os.environ.get('DEFAULT_ADMIN_EMAIL', 'admin@portfolio.local')
    DEFAULT_ADMIN_PASSWORD = os.environ.get('DEFAULT_ADMIN_PASSWORD')

    # Social links
    SOCIAL_GITHUB_URL = os.environ.get('GITHUB_URL', 'https://github.com/soulaimane')
    SOCIAL_LINKEDIN_URL = os.environ.get('LINKEDIN_URL', 'https://linkedin.com/in/soulaimane')
    SOCIAL_TWITTER_URL = os.environ.get('TWITTER_URL', 'https://twitter.com/soulaimane')

    # Admin Notification Settings
    ADMIN_TELEGRAM_BOT_TOKEN = os.environ.get('ADMIN_TELEGRAM_BOT_TOKEN')
    ADMIN_TELEGRAM_CHAT_ID = os.environ.get('ADMIN_TELEGRAM_CHAT_ID')

    # Variables that must be present outside of development
    REQUIRED_ENV_VARS = ('JWT_SECRET', 'DATABASE_URL')


class DevelopmentConfig(Config):
    """Development configuration"""
    ENV_NAME = 'development'
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    ENV_NAME = 'production'
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    """Testing configuration"""
    ENV_NAME = 'testing'
    DEBUG = True
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # For in-memory SQLite during tests, keep engine options empty to avoid
    # passing invalid pool settings like pool_size to SQLite's StaticPool.
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = 'testing-secret-key-with-at-least-32-characters'
    JWT_EXPIRES_IN = '1h'
    ADMIN_TELEGRAM_BOT_TOKEN = None
    ADMIN_TELEGRAM_CHAT_ID = None
    LOG_LEVEL = 'WARNING'
    REQUIRED_ENV_VARS = ()


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(config_name=None):
    """Get configuration by name, falling back to FLASK_ENV"""
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])


def _env_is_set(name):
    # The database may also be configured through the PG* variables
    if name == 'DATABASE_URL':
        return bool(_database_url())
    return bool(os.environ.get(name))


def validate_config(app):
    """Check required settings; fatal problems raise only in production."""
    is_production = app.config.get('ENV_NAME') == 'production'

    missing = [name for name in app.config.get('REQUIRED_ENV_VARS', ()) if not _env_is_set(name)]
    if missing:
        app.logger.error(f"Missing required environment variables: {', '.join(missing)}")
        if is_production:
            raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")
        app.logger.warning('Running with missing environment variables outside production.')

    secret = app.config.get('JWT_SECRET_KEY') or ''
    if is_production and len(secret) < 32:
        raise RuntimeError('JWT_SECRET must be at least 32 characters long in production')

    if not (app.config.get('ADMIN_TELEGRAM_BOT_TOKEN') and app.config.get('ADMIN_TELEGRAM_CHAT_ID')):
        app.logger.info('Telegram notifications not configured. Contact alerts are disabled.')
