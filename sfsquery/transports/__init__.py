"""
HTTP transports for the StopForumSpam web API.

Transports are tried in priority order: urllib, then requests, then a raw
socket. Each one can be switched off with SFSQUERY_TRANSPORTS.
"""

from typing import List, Optional

from .base import BaseTransport, TransportKind
from .urllib_fetch import UrllibTransport
from .requests_client import RequestsTransport
from .raw_socket import SocketTransport


def default_transports(timeout: Optional[float] = None) -> List[BaseTransport]:
    """Build the transport list in priority order."""
    return [
        UrllibTransport(timeout=timeout),
        RequestsTransport(timeout=timeout),
        SocketTransport(timeout=timeout),
    ]


__all__ = [
    "BaseTransport",
    "TransportKind",
    "UrllibTransport",
    "RequestsTransport",
    "SocketTransport",
    "default_transports",
]
