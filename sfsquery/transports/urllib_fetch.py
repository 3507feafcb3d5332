"""
urllib transport.

The simplest way to fetch a URL: the standard library's default opener with
our User-Agent header. Tried first.
"""

import http.client
import socket
import urllib.error
import urllib.request
from typing import Optional

from .base import READ_CHUNK_SIZE, BaseTransport, TransportKind
from ..debug import debug_transport_method
from ..exceptions import NetworkFailure


class UrllibTransport(BaseTransport):
    """Blocking fetch through urllib.request.urlopen."""

    def __init__(self, timeout: Optional[float] = None, user_agent: Optional[str] = None):
        """Initialize the urllib transport."""
        super().__init__("urllib", TransportKind.FETCH, timeout, user_agent)

    @debug_transport_method
    def fetch(self, url: str) -> str:
        """
        Fetch a URL with urlopen.

        Args:
            url: The URL to fetch

        Returns:
            Response body
        """
        request = urllib.request.Request(url, headers={'User-Agent': self.user_agent})
        deadline = self._deadline()
        chunks = []
        received = 0

        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                charset = response.headers.get_content_charset()
                while True:
                    self._check_deadline(deadline, received)
                    chunk = response.read(READ_CHUNK_SIZE)
                    if not chunk:
                        break
                    chunks.append(chunk)
                    received += len(chunk)
                return self._decode(b"".join(chunks), charset)
        except urllib.error.HTTPError as e:
            raise NetworkFailure(f"HTTP request failed! {e.code} {e.reason}", self.name) from e
        except urllib.error.URLError as e:
            raise NetworkFailure(f"Failed to open stream: {e.reason}", self.name) from e
        except http.client.HTTPException as e:
            raise NetworkFailure(f"Malformed HTTP response: {type(e).__name__}: {e}", self.name) from e
        except (socket.timeout, OSError) as e:
            raise NetworkFailure(f"Failed to open stream: {e}", self.name) from e
