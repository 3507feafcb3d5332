"""
sfsquery - StopForumSpam reputation lookup client.

This package queries the StopForumSpam service, either through its JSON web
API or through its DNSBL zone, to find out whether an IP address has been
reported as a source of forum spam, how often, and how recently.
"""

__version__ = "1.1.0"
__author__ = "sfsquery"
__license__ = "Apache License 2.0"

from .client import SFSQuery, QueryMode  # noqa: E402

__all__ = ["SFSQuery", "QueryMode", "__version__"]
