"""
Base transport interface for fetching StopForumSpam API responses.

This module defines the standard interface every HTTP transport implements
so the client can walk an ordered list of them until one succeeds.
"""

import time
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional
from urllib.parse import urlparse

from ..config import config
from ..exceptions import NetworkFailure

READ_CHUNK_SIZE = 10240


class TransportKind(Enum):
    """Enumeration of transport implementation levels."""
    FETCH = "fetch"    # Simple blocking fetch through the default opener
    CLIENT = "client"  # Configurable HTTP client library
    SOCKET = "socket"  # Hand-written HTTP/1.0 over a raw TCP stream

    def __str__(self):
        return self.value


class BaseTransport(ABC):
    """Base class for all HTTP transports."""

    def __init__(self, name: str, kind: TransportKind, timeout: Optional[float] = None,
                 user_agent: Optional[str] = None):
        """
        Initialize the transport.

        Args:
            name: Configuration name of the transport ('urllib', 'requests', 'socket')
            kind: Implementation level of the transport
            timeout: Connect and total timeout in seconds
            user_agent: User-Agent header value
        """
        self.name = name
        self.kind = kind
        self.timeout = timeout if timeout is not None else config.get_request_timeout()
        self.user_agent = user_agent or config.get_user_agent()

    @abstractmethod
    def fetch(self, url: str) -> str:
        """
        Perform a GET request and return the response body.

        Args:
            url: Absolute http(s) URL

        Returns:
            Decoded response body

        Raises:
            NetworkFailure: If the request cannot be completed
        """
        pass

    def supports(self, url: str) -> bool:
        """
        Check whether this transport can fetch a given URL.

        Args:
            url: The URL about to be fetched

        Returns:
            True if the URL scheme is one this transport speaks
        """
        return urlparse(url).scheme in ('http', 'https')

    def is_available(self) -> bool:
        """
        Check if the transport is enabled in this environment.

        Returns:
            True if enabled by configuration, False otherwise
        """
        return config.is_transport_enabled(self.name)

    def _deadline(self) -> float:
        """Return the monotonic time by which the whole fetch must finish."""
        return time.monotonic() + self.timeout

    def _check_deadline(self, deadline: float, received: int) -> float:
        """
        Enforce the total time bound while reading a response.

        Args:
            deadline: Value returned by _deadline() when the fetch started
            received: Bytes read so far, for the error message

        Returns:
            Seconds left before the deadline

        Raises:
            NetworkFailure: If the deadline has passed
        """
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise NetworkFailure(
                f"Operation timed out after {self.timeout:g} seconds with {received} bytes received",
                self.name,
            )
        return remaining

    def _decode(self, body: bytes, charset: Optional[str] = None) -> str:
        """Decode a response body, tolerating bad bytes but not unknown charsets."""
        try:
            return body.decode(charset or 'utf-8', errors='replace')
        except LookupError as e:
            raise NetworkFailure(f"Unsupported response charset: {charset}", self.name) from e

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name} timeout={self.timeout}>"
