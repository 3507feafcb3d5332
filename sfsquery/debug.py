"""
Debug utilities for sfsquery.

This module provides diagnostics for transport calls, query outcomes and
configuration when debug mode is enabled (SFSQUERY_DEBUG=true).
"""

import sys
import time
import json
from typing import Any, Callable, Dict, List, Optional
from functools import wraps
from .config import DEBUG_LEVELS, config

# Longest string field printed in full at the 'detailed' level
MAX_FIELD_CHARS = 100


class DebugLogger:
    """Debug logger for low-level diagnostics."""

    def __init__(self):
        """Initialize debug logger."""
        self.start_time = time.time()
        self.transport_call_count = 0

    def shows(self, level: str) -> bool:
        """Check whether messages at a verbosity level are currently printed."""
        current = config.get_debug_level()
        if current not in DEBUG_LEVELS or level not in DEBUG_LEVELS:
            return False
        return DEBUG_LEVELS.index(level) <= DEBUG_LEVELS.index(current)

    def log(self, level: str, message: str, data: Optional[Dict[str, Any]] = None):
        """
        Log a query or transport event.

        Args:
            level: Verbosity the message belongs to ('basic', 'detailed', 'verbose')
            message: Event description
            data: Fields to list under the message; shown from 'detailed' up
        """
        if not self.shows(level):
            return

        elapsed = time.time() - self.start_time
        print(f"[DEBUG +{elapsed:.3f}s] {message}", file=sys.stderr)

        if data and self.shows('detailed'):
            for line in self._field_lines(data, full=self.shows('verbose')):
                print(f"[DEBUG]   {line}", file=sys.stderr)

    def _field_lines(self, data: Dict[str, Any], full: bool) -> List[str]:
        """Render event fields, as indented JSON when full, otherwise one summary per field."""
        if full:
            return json.dumps(data, indent=2, sort_keys=True, default=str).splitlines()
        return [f"{key}: {self._summarize_field(value)}" for key, value in data.items()]

    @staticmethod
    def _summarize_field(value: Any) -> str:
        """Shorten containers and long response bodies for one-line display."""
        if isinstance(value, (dict, list)):
            return f"{len(value)} items"
        if isinstance(value, str) and len(value) > MAX_FIELD_CHARS:
            return repr(value[:MAX_FIELD_CHARS - 3] + '...')
        return str(value)

    def log_transport_call(self, transport_name: str, url: str):
        """Log an outgoing HTTP fetch."""
        self.transport_call_count += 1
        self.log('basic', f"Transport call #{self.transport_call_count}: {transport_name}.fetch({url})")

    def log_transport_result(self, transport_name: str, result: Any, execution_time: float):
        """Log a transport response."""
        self.log('basic', f"Transport result: {transport_name} -> {self._summarize_result(result)} "
                          f"({execution_time:.3f}s)")
        self.log('verbose', f"Response body from {transport_name}:", {'body': result})

    def log_transport_error(self, transport_name: str, error: Exception, execution_time: float):
        """Log a transport failure."""
        error_type = type(error).__name__
        error_msg = str(error)[:100]

        self.log('basic', f"Transport error: {transport_name} -> {error_type}: {error_msg} "
                          f"({execution_time:.3f}s)")

    def _summarize_result(self, result: Any) -> str:
        """Create a summary of the result for logging."""
        if result is None:
            return "None"
        elif isinstance(result, str):
            return f"str({len(result)} chars)"
        else:
            return f"{type(result).__name__}({result})"

    def log_query_start(self, target: str, mode: str):
        """Log start of a query."""
        self.log('basic', f"Starting {mode} query for: {target}")

    def log_query_complete(self, target: str, mode: str, total_time: float, result: Dict[str, Any]):
        """Log completion of a query."""
        outcome = 'ok' if result.get('succeeded') else f"failed: {result.get('error')}"
        self.log('basic', f"Completed {mode} query for {target} ({outcome}), {total_time:.3f}s total")
        self.log('detailed', "Query result:", result)

    def log_config_info(self):
        """Log current configuration in debug mode."""
        if not config.is_debug_mode():
            return

        debug_info = {
            'debug_level': config.get_debug_level(),
            'request_timeout': config.get_request_timeout(),
            'enabled_transports': ', '.join(config.get_enabled_transports()),
            'api_host': config.get_api_host(),
            'user_agent': config.get_user_agent()
        }

        self.log('detailed', "Current configuration:", debug_info)


def debug_transport_method(func: Callable) -> Callable:
    """
    Decorator to add debug logging to transport fetch methods.

    This decorator logs the fetched URL, the response summary and any
    error when debug mode is enabled.
    """
    @wraps(func)
    def wrapper(self, url, *args, **kwargs):
        if not config.is_debug_mode():
            return func(self, url, *args, **kwargs)

        transport_name = getattr(self, 'name', self.__class__.__name__)

        debug_logger.log_transport_call(transport_name, url)

        start_time = time.time()
        try:
            result = func(self, url, *args, **kwargs)
            debug_logger.log_transport_result(transport_name, result, time.time() - start_time)
            return result
        except Exception as e:
            debug_logger.log_transport_error(transport_name, e, time.time() - start_time)
            raise

    return wrapper


# Global debug logger instance
debug_logger = DebugLogger()
