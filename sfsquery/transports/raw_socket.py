"""
Raw socket transport.

Last resort when no HTTP library is usable: speaks HTTP/1.0 over a plain TCP
connection. Plain HTTP only, since there is no TLS handshake here.
"""

import socket
from typing import Optional
from urllib.parse import urlparse

from .base import READ_CHUNK_SIZE, BaseTransport, TransportKind
from ..debug import debug_transport_method
from ..exceptions import NetworkFailure

HEADER_SEPARATOR = b"\r\n\r\n"


class SocketTransport(BaseTransport):
    """Minimal HTTP/1.0 client over socket.create_connection."""

    def __init__(self, timeout: Optional[float] = None, user_agent: Optional[str] = None):
        """Initialize the socket transport."""
        super().__init__("socket", TransportKind.SOCKET, timeout, user_agent)

    def supports(self, url: str) -> bool:
        """Only plaintext http URLs can be fetched over a raw socket."""
        return urlparse(url).scheme == 'http'

    def build_request(self, host: str, path: str) -> bytes:
        """
        Build the raw HTTP/1.0 request.

        Args:
            host: Host header value
            path: Request path including the query string

        Returns:
            Encoded request bytes
        """
        lines = [
            f"GET {path} HTTP/1.0",
            f"Host: {host}",
            f"User-Agent: {self.user_agent}",
            "Accept: text/txt,text/html;q=0.9,*/*;q=0.8",
            "Connection: close",
        ]
        return ("\r\n".join(lines) + "\r\n\r\n").encode('ascii')

    @staticmethod
    def strip_headers(response: bytes) -> bytes:
        """
        Drop the status line and header block from a raw response.

        Args:
            response: Everything read from the socket

        Returns:
            The body following the first blank line

        Raises:
            NetworkFailure: If no header terminator was received
        """
        _, separator, body = response.partition(HEADER_SEPARATOR)
        if not separator:
            raise NetworkFailure("Incomplete HTTP response from server", "socket")
        return body

    @debug_transport_method
    def fetch(self, url: str) -> str:
        """
        Fetch a URL over a raw TCP connection.

        Args:
            url: The http URL to fetch

        Returns:
            Response body
        """
        if not self.supports(url):
            raise NetworkFailure(f"Raw socket transport cannot fetch {urlparse(url).scheme} URLs", self.name)

        parsed = urlparse(url)
        host = parsed.hostname
        port = parsed.port or 80
        path = parsed.path or '/'
        if parsed.query:
            path = f"{path}?{parsed.query}"

        deadline = self._deadline()
        chunks = []
        received = 0
        try:
            with socket.create_connection((host, port), timeout=self.timeout) as sock:
                sock.sendall(self.build_request(host, path))
                while True:
                    # each recv may only wait for what is left of the total bound
                    sock.settimeout(self._check_deadline(deadline, received))
                    chunk = sock.recv(READ_CHUNK_SIZE)
                    if not chunk:
                        break
                    chunks.append(chunk)
                    received += len(chunk)
        except socket.timeout as e:
            raise NetworkFailure(f"Connection to {host}:{port} timed out", self.name) from e
        except socket.gaierror as e:
            raise NetworkFailure(f"Unable to resolve {host}: {e}", self.name) from e
        except OSError as e:
            raise NetworkFailure(f"Unable to connect to {host}:{port} ({e})", self.name) from e

        return self._decode(self.strip_headers(b"".join(chunks)))
