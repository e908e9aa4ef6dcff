"""
Configuration management for the CMS application.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Base directory
BASE_DIR = Path(__file__).parent.parent


class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = False
    TESTING = False

    # Storage settings
    DATA_DIR = Path(os.getenv('CMS_DATA_DIR', BASE_DIR / 'data'))
    USERS_FILE = Path(os.getenv('CMS_USERS_FILE', BASE_DIR / 'users.yml'))
    HISTORY_FILE = Path(os.getenv('CMS_HISTORY_FILE', BASE_DIR / 'history.yml'))

    # Upload settings
    MAX_IMAGE_SIZE_MB = int(os.getenv('MAX_IMAGE_SIZE_MB', '15'))
    MAX_CONTENT_LENGTH = MAX_IMAGE_SIZE_MB * 1024 * 1024

    # Allowed file extensions
    ALLOWED_TEXT_EXTENSIONS = {'md', 'txt'}
    ALLOWED_IMAGE_EXTENSIONS = {'jpg', 'jpeg', 'png'}


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    FLASK_ENV = 'development'


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    FLASK_ENV = 'production'


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    FLASK_ENV = 'testing'
    DATA_DIR = Path(os.getenv('CMS_TEST_DATA_DIR', BASE_DIR / 'tests' / 'data'))
    USERS_FILE = Path(os.getenv('CMS_TEST_USERS_FILE', BASE_DIR / 'tests' / 'users.yml'))
    HISTORY_FILE = Path(os.getenv('CMS_TEST_HISTORY_FILE', BASE_DIR / 'tests' / 'history.yml'))


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(config_name=None):
    """Get configuration based on environment."""
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')
    return config.get(config_name, DevelopmentConfig)
