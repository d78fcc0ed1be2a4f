"""
CMS Web Application Configuration
"""
import os
import secrets

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('CMS_SECRET_KEY') or secrets.token_hex(32)

    # Document and credential storage
    DATA_PATH = os.environ.get('CMS_DATA_PATH', os.path.join(BASE_DIR, 'data'))
    USERS_PATH = os.environ.get('CMS_USERS_PATH', os.path.join(BASE_DIR, 'users.yml'))

    # Debug mode
    DEBUG = os.environ.get('CMS_DEBUG', 'false').lower() == 'true'
    TESTING = False


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True


class ProductionConfig(Config):
    """Production configuration. DEBUG still follows CMS_DEBUG."""


# Config selector
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': ProductionConfig
}
