"""
Standardized error handling and reporting utilities
"""

import logging
import threading
import traceback
from datetime import datetime, timezone
from typing import Dict, Any, Optional


class AuthorEditsError(Exception):
    """Base class for pipeline failures."""


class SourceUnavailableError(AuthorEditsError):
    """An input source could not be opened or read."""

    def __init__(self, source: str, cause: Optional[BaseException] = None):
        self.source = source
        self.cause = cause
        super().__init__(f"Input source unavailable: {source} ({cause})")


class MalformedStreamError(AuthorEditsError):
    """The XML event stream of one source broke off with a syntax error."""

    def __init__(self, source: str, cause: Optional[BaseException] = None):
        self.source = source
        self.cause = cause
        super().__init__(f"Malformed XML stream in {source}: {cause}")


class OutputSinkError(AuthorEditsError):
    """The aggregated result could not be delivered. Fatal for a run."""

    def __init__(self, destination: str, cause: Optional[BaseException] = None):
        self.destination = destination
        self.cause = cause
        super().__init__(f"Cannot write output to {destination}: {cause}")


class ErrorHandler:
    """
    Centralized error handling with stats tracking and context logging.

    Workers of the orchestrator report into one handler concurrently, so
    stats updates are serialized with a lock.
    """

    def __init__(
        self,
        logger: logging.Logger,
        stats: Optional[Dict[str, Any]] = None,
        debug: bool = False
    ):
        """
        Args:
            logger: Configured logger instance
            stats: Optional stats dictionary to update
            debug: Enable detailed error reporting
        """
        self.logger = logger
        self.stats = stats if stats is not None else {}
        self.debug = debug
        self._lock = threading.Lock()

        self.stats.setdefault('error_count', 0)
        self.stats.setdefault('error_types', {})
        self.stats.setdefault('last_error', None)

    def handle(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Process an exception and return updated stats

        Args:
            error: Exception to handle
            context: Additional context about the error

        Returns:
            Updated stats dictionary
        """
        error_type = type(error).__name__
        error_details = self._build_error_details(error, context, error_type)

        self._update_stats(error_type, error_details)

        self._log_error(error, error_details)
        return self.stats

    def _build_error_details(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]],
        error_type: str
    ) -> Dict[str, Any]:
        cause = getattr(error, 'cause', None)
        return {
            'type': error_type,
            'message': str(error),
            'cause': repr(cause) if cause is not None else None,
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'context': context,
            'traceback': traceback.format_exc() if self.debug else None
        }

    def _update_stats(self, error_type: str, error_details: Dict[str, Any]) -> None:
        with self._lock:
            self.stats['error_count'] += 1
            self.stats['error_types'][error_type] = self.stats['error_types'].get(error_type, 0) + 1
            self.stats['last_error'] = error_details

    def _log_error(self, error: Exception, details: Dict[str, Any]) -> None:
        if isinstance(error, (KeyboardInterrupt, SystemExit)):
            self.logger.critical("Process interrupted: %s", details)
        else:
            log_method = self.logger.error if not self.debug else self.logger.exception
            log_method("Error occurred: %s", details)

    @classmethod
    def create_context(
        cls,
        component: str,
        item_id: Optional[str] = None,
        metadata: Optional[Dict] = None
    ) -> Dict[str, Any]:
        """
        Create standardized error context

        Args:
            component: Which component failed
            item_id: ID of item being processed (source name, output path, ...)
            metadata: Additional context

        Returns:
            Context dictionary
        """
        return {
            'component': component,
            'item_id': item_id,
            'metadata': metadata or {}
        }
