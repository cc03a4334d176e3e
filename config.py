"""
Application Configuration

Centralizes all Flask, database, import and logging settings.
"""

import os

# Base directory of the application
BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-only-change-in-production')

    # SQLAlchemy settings
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///recipe_library.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Image blob storage (full images + generated thumbnails)
    IMAGE_FOLDER = os.environ.get('IMAGE_FOLDER', os.path.join(BASE_DIR, 'static', 'images'))
    THUMBNAIL_SIZE = (300, 300)

    # Upload settings (MacGourmet exports with embedded images get large)
    MAX_CONTENT_LENGTH = 64 * 1024 * 1024  # 64MB max upload

    # Web import settings
    FETCH_TIMEOUT = int(os.environ.get('FETCH_TIMEOUT', '10'))
    FETCH_MAX_SIZE = 10 * 1024 * 1024  # 10MB
    DOWNLOAD_WEB_IMAGES = True

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    DOWNLOAD_WEB_IMAGES = False
    LOG_LEVEL = 'WARNING'


# Configuration dictionary for easy access
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(env=None):
    """Get configuration based on environment."""
    if env is None:
        env = os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
