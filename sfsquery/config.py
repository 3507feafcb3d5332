"""
Configuration management for sfsquery.

This module provides the package constants (service endpoints, user agent)
and environment-driven settings such as the request timeout, the enabled
HTTP transports and debug mode.
"""

import os
import logging
from typing import Any, List

from . import __version__

# Set up logging for configuration events
logger = logging.getLogger(__name__)

# User-Agent string presented to the StopForumSpam API
USER_AGENT = f"sfsquery/{__version__} (+https://github.com/parseword/sfsquery/)"

# Components of the API URL. Override the host only to reach a specific
# regional server.
API_SCHEME = "http://"
API_HOST = "api.stopforumspam.org"
API_PATH = "/api?json&ip="

DNSBL_ZONE = "i.rbl.stopforumspam.org"

DEFAULT_TIMEOUT = 3.0

# HTTP transports in priority order
TRANSPORT_NAMES = ("urllib", "requests", "socket")

_TRUE_VALUES = ('1', 'true', 'yes', 'on')

# Debug verbosity levels, least to most output
DEBUG_LEVELS = ('basic', 'detailed', 'verbose')


class QueryConfig:
    """Environment-backed configuration for StopForumSpam queries."""

    def get_config_value(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value from the environment.

        Args:
            key: Configuration key, looked up as SFSQUERY_<KEY>
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        env_key = f"SFSQUERY_{key.upper()}"
        return os.getenv(env_key, default)

    def get_api_host(self) -> str:
        """Return the API host, honouring a regional override."""
        host = self.get_config_value('api_host', API_HOST)
        host = (host or '').strip()
        if not host or '/' in host or ' ' in host:
            logger.warning(f"Ignoring invalid API host override: {host!r}")
            return API_HOST
        return host

    def get_api_url(self, ip_address: str) -> str:
        """
        Build the web API URL for an IP address.

        Args:
            ip_address: The IP address to look up

        Returns:
            Full request URL
        """
        return f"{API_SCHEME}{self.get_api_host()}{API_PATH}{ip_address}"

    def get_dnsbl_zone(self) -> str:
        """Return the DNSBL zone suffix."""
        return DNSBL_ZONE

    def get_user_agent(self) -> str:
        """Return the User-Agent header value."""
        return USER_AGENT

    def get_request_timeout(self, default: float = DEFAULT_TIMEOUT) -> float:
        """
        Get request timeout with bounds.

        Args:
            default: Default timeout value

        Returns:
            Bounded timeout value
        """
        try:
            timeout = float(self.get_config_value('request_timeout', default))
            # Enforce bounds: 1-30 seconds
            return max(1.0, min(30.0, timeout))
        except (ValueError, TypeError):
            return default

    def get_query_method(self) -> str:
        """
        Get the default query method.

        Returns:
            'DNS' if SFSQUERY_QUERY_METHOD selects the DNSBL, otherwise 'API'
        """
        method = str(self.get_config_value('query_method', 'API')).strip().upper()
        if method not in ('API', 'DNS'):
            logger.warning(f"Unknown query method {method!r}, using API")
            return 'API'
        return method

    def get_enabled_transports(self) -> List[str]:
        """
        Get the HTTP transports allowed in this environment.

        Returns:
            Transport names in priority order
        """
        raw = self.get_config_value('transports')
        if not raw:
            return list(TRANSPORT_NAMES)

        requested = {name.strip().lower() for name in raw.split(',') if name.strip()}
        unknown = requested.difference(TRANSPORT_NAMES)
        if unknown:
            logger.warning(f"Ignoring unknown transports: {', '.join(sorted(unknown))}")
        return [name for name in TRANSPORT_NAMES if name in requested]

    def is_transport_enabled(self, name: str) -> bool:
        """Check whether a transport is enabled by configuration."""
        return name in self.get_enabled_transports()

    def is_debug_mode(self) -> bool:
        """
        Check if debug mode is enabled.

        Returns:
            True if debug mode is enabled
        """
        debug_value = os.getenv('SFSQUERY_DEBUG', 'false').lower()
        return debug_value in _TRUE_VALUES

    def get_debug_level(self) -> str:
        """
        Get debug level for controlling verbosity.

        Returns:
            Debug level: 'off', 'basic', 'detailed', or 'verbose'
        """
        if not self.is_debug_mode():
            return 'off'

        level = os.getenv('SFSQUERY_DEBUG_LEVEL', 'basic').lower()
        if level in DEBUG_LEVELS:
            return level
        return 'basic'


# Global configuration instance
config = QueryConfig()
