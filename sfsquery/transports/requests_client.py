"""
requests transport.

Uses a requests Session with explicit connect and read timeouts, both set
to the configured bound. The body is streamed so the total time is bounded
too.
"""

import requests
from typing import Optional

from .base import READ_CHUNK_SIZE, BaseTransport, TransportKind
from ..debug import debug_transport_method
from ..exceptions import NetworkFailure


class RequestsTransport(BaseTransport):
    """HTTP client transport backed by requests."""

    def __init__(self, timeout: Optional[float] = None, user_agent: Optional[str] = None):
        """Initialize the requests transport."""
        super().__init__("requests", TransportKind.CLIENT, timeout, user_agent)

    @debug_transport_method
    def fetch(self, url: str) -> str:
        """
        Fetch a URL with requests.

        Args:
            url: The URL to fetch

        Returns:
            Response body
        """
        headers = {
            'User-Agent': self.user_agent,
            'Accept': 'application/json'
        }

        deadline = self._deadline()
        chunks = []
        received = 0

        try:
            with requests.Session() as session:
                response = session.get(
                    url,
                    headers=headers,
                    timeout=(self.timeout, self.timeout),
                    allow_redirects=True,
                    stream=True
                )
                try:
                    response.raise_for_status()
                    # the read timeout is per chunk, so the total is checked here
                    for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
                        self._check_deadline(deadline, received)
                        chunks.append(chunk)
                        received += len(chunk)
                finally:
                    response.close()
                return self._decode(b"".join(chunks), response.encoding)
        except requests.exceptions.Timeout as e:
            raise NetworkFailure(f"Operation timed out after {self.timeout:g} seconds: {e}", self.name) from e
        except requests.exceptions.ConnectionError as e:
            raise NetworkFailure(f"Could not connect: {e}", self.name) from e
        except requests.exceptions.RequestException as e:
            raise NetworkFailure(f"Request failed: {e}", self.name) from e
