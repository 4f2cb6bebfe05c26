"""
Lifecycle Decorators

Contains decorators that gate sync service entry points on its lifecycle.
"""

from functools import wraps

from .sync_logger import sync_logger


def require_running(f):
    """
    Decorator to ignore calls made while the owning service is stopped.

    Events can still be delivered by a channel or signal after teardown; they
    are dropped here instead of starting a new reconciliation.
    """
    @wraps(f)
    def decorated_function(self, *args, **kwargs):
        if not self.running:
            sync_logger.logger.debug(f"Ignored {f.__name__} while stopped")
            return None
        return f(self, *args, **kwargs)

    return decorated_function
