import os
from datetime import timedelta
from decimal import Decimal
from pathlib import Path

# Base project directory
BASE_DIR = Path(__file__).resolve().parent


def _split_origins(value):
    return [origin.strip() for origin in (value or '').split(',') if origin.strip()]


class Config:
    """Base application configuration"""

    # Flask secret key (replace in production)
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Database: SQLite by default, any SQLAlchemy URL through DATABASE_URL
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        f'sqlite:///{BASE_DIR / "rental_ps.db"}'

    # Disable modification tracking (saves memory)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Tokens
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET') or 'default-jwt-secret'
    JWT_ALGORITHM = 'HS256'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        minutes=int(os.environ.get('JWT_ACCESS_MINUTES', 15))
    )
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(
        days=int(os.environ.get('JWT_REFRESH_DAYS', 7))
    )

    # Auth cookies
    COOKIE_SECURE = False
    COOKIE_SAMESITE = 'Lax'

    # CORS, empty list means every origin is allowed
    CORS_ORIGINS = _split_origins(os.environ.get('FRONTEND_URL'))

    # Date formats
    DATE_FORMAT = '%Y-%m-%d'
    DATETIME_FORMAT = '%Y-%m-%d %H:%M:%S'

    # Booking settings
    DEFAULT_PRICE_PER_HOUR = Decimal(os.environ.get('DEFAULT_PRICE_PER_HOUR', '7000'))
    PAST_BOOKING_GRACE_MINUTES = 5
    MAX_BOOKING_HOURS = 24
    DEFAULT_PAYMENT_METHOD = 'CASH'
    CURRENCY = 'Rp'

    # Pagination
    ITEMS_PER_PAGE = 10
    MAX_ITEMS_PER_PAGE = 100

    # Logging
    LOG_DIR = os.environ.get('LOG_DIR') or str(BASE_DIR / 'logs')

    APP_NAME = 'Rental PS'
    APP_VERSION = '1.0.0'


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    COOKIE_SECURE = True
    COOKIE_SAMESITE = 'None'


class TestConfig(Config):
    """Test configuration (in-memory database)"""
    TESTING = True
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SECRET_KEY = 'test-secret-key'
    JWT_SECRET_KEY = 'test-jwt-secret'
    CORS_ORIGINS = []


# Configuration registry
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'test': TestConfig,
    'default': DevelopmentConfig
}
