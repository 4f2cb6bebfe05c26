"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: client configuration (environment-based)
- achievement_settings.py: achievement tier table (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .achievement_settings import ACHIEVEMENT_TIERS, DEFAULT_TIER, validate_tier_table_integrity

__all__ = [
    # Client configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Achievement rules
    'ACHIEVEMENT_TIERS', 'DEFAULT_TIER', 'validate_tier_table_integrity'
]
