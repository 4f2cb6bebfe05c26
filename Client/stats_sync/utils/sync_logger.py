"""
Sync Logger Module for the Bingo stats client

This module provides structured logging for reconciliation cycles, trigger
sources, fallback decisions and errors, so which branch was taken and why can
be read back from the log file.
"""

import logging
import json
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

from ..config import Config


class SyncLogger:
    """
    Centralized logging system for the stats sync client.

    Features:
    - Reconciliation outcome tracking per user
    - Trigger logging (socket, broadcast, poll, manual)
    - Fallback and error logging with the classified reason
    - JSON structured logs for easy parsing
    """

    def __init__(self, log_dir: Optional[str] = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir) if log_dir else None
        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self.level = getattr(logging, str(level).upper(), logging.INFO)
        self.logger = self._setup_logger()

    def _log_file(self) -> Optional[Path]:
        if not self.log_dir:
            return None
        return self.log_dir / f"sync_log_{datetime.now().strftime('%Y-%m-%d')}.log"

    def _setup_logger(self) -> logging.Logger:
        """Setup the sync logger with file and console handlers."""
        logger = logging.getLogger('bingo_stats_sync')
        logger.setLevel(self.level)

        # Prevent duplicate handlers
        if logger.handlers:
            logger.handlers.clear()

        log_file = self._log_file()
        if log_file:
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(self.level)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s | %(levelname)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            logger.addHandler(file_handler)

        # Console only shows warnings and errors
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logger.addHandler(console_handler)

        return logger

    def _create_log_entry(self,
                          event_type: str,
                          action: str,
                          user_id: Optional[str],
                          details: Dict[str, Any]) -> str:
        """Create a structured log entry."""
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user_id': user_id,
            'details': details
        }
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def log_trigger(self, source: str, cycle: Optional[int] = None, **kwargs):
        """
        Log what started a reconciliation cycle.

        Args:
            source: Trigger source ('socket', 'broadcast', 'poll', 'start', 'manual')
            cycle: Sequence number assigned to the cycle
            **kwargs: Additional details to log
        """
        details = {'source': source, 'cycle': cycle, **kwargs}
        self.logger.debug(self._create_log_entry('TRIGGER', 'reconcile_requested', None, details))

    def log_sync_event(self, user_id: Optional[str], action: str, **kwargs):
        """
        Log a reconciliation outcome.

        Args:
            user_id: User the cycle ran for
            action: Outcome (e.g. 'remote_applied', 'snapshot_delivered', 'stale_discarded')
            **kwargs: Additional details to log
        """
        self.logger.info(self._create_log_entry('SYNC_EVENT', action, user_id, kwargs))

    def log_fallback(self, user_id: Optional[str], reason: str, error: Optional[Exception] = None, **kwargs):
        """
        Log that the remote path was abandoned for the local cache.

        Args:
            user_id: User the cycle ran for
            reason: Why the fallback was taken ('empty_body', 'remote_unavailable', ...)
            error: Classified error that caused the fallback, if any
            **kwargs: Additional details to log
        """
        details = {'reason': reason, **kwargs}
        if error is not None:
            details['error_type'] = type(error).__name__
            details['error_message'] = str(error)
        self.logger.warning(self._create_log_entry('FALLBACK', 'use_local_cache', user_id, details))

    def log_error(self, user_id: Optional[str], error: Exception, action: str, **kwargs):
        """
        Log errors with full context.

        Args:
            user_id: User the cycle ran for, if known
            error: Exception that occurred
            action: Action that was being performed
        """
        details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            **kwargs
        }
        self.logger.error(self._create_log_entry('ERROR', action, user_id, details))

    def get_log_stats(self) -> Dict[str, Any]:
        """Get statistics about logged events (useful for monitoring)."""
        try:
            log_file = self._log_file()
            if not log_file or not log_file.exists():
                return {'error': 'No log file found for today'}

            stats = {
                'log_file': str(log_file),
                'file_size_mb': round(log_file.stat().st_size / (1024 * 1024), 2),
                'total_entries': 0,
                'triggers': 0,
                'sync_events': 0,
                'fallbacks': 0,
                'errors': 0
            }

            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    if line.strip():
                        stats['total_entries'] += 1
                        if '"TRIGGER"' in line:
                            stats['triggers'] += 1
                        elif '"SYNC_EVENT"' in line:
                            stats['sync_events'] += 1
                        elif '"FALLBACK"' in line:
                            stats['fallbacks'] += 1
                        elif '"ERROR"' in line:
                            stats['errors'] += 1

            return stats

        except OSError as e:
            return {'error': f'Failed to get stats: {str(e)}'}


# Global logger instance
sync_logger = SyncLogger(Config.LOG_DIR, Config.LOG_LEVEL)
