"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_running
from .helpers import to_amount, to_count, to_percentage, user_id_from_token
from .sync_logger import sync_logger

__all__ = [
    'require_running', 'to_amount', 'to_count', 'to_percentage',
    'user_id_from_token', 'sync_logger'
]
