"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Remote API Settings
    API_BASE_URL = os.getenv('API_BASE_URL', 'http://127.0.0.1:5000')
    STATS_ENDPOINT = os.getenv('STATS_ENDPOINT', '/api/users/stats')
    REQUEST_TIMEOUT_SECONDS = float(os.getenv('REQUEST_TIMEOUT_SECONDS', 10))

    # Real-time Channel Settings
    SOCKET_URL = os.getenv('SOCKET_URL')
    GAME_COMPLETED_EVENT = os.getenv('GAME_COMPLETED_EVENT', 'gameCompleted')

    # Sync Settings
    POLL_INTERVAL_SECONDS = float(os.getenv('POLL_INTERVAL_SECONDS', 30))
    DISCARD_STALE_RESULTS = os.getenv('DISCARD_STALE_RESULTS', 'True').lower() == 'true'

    # Local Cache Settings
    CACHE_FILE = os.getenv('CACHE_FILE', os.path.join(os.path.expanduser('~'), '.bingo', 'local_storage.json'))
    CREDENTIAL_KEY = os.getenv('CREDENTIAL_KEY', 'accessToken')
    USER_ID = os.getenv('USER_ID')

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    LOG_LEVEL = 'DEBUG'


class ProductionConfig(Config):
    """Production configuration."""
    LOG_LEVEL = 'INFO'


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    API_BASE_URL = 'http://testserver'
    POLL_INTERVAL_SECONDS = 0.05
    REQUEST_TIMEOUT_SECONDS = 1


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
