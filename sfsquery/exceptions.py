"""
Exceptions raised while querying StopForumSpam.

They never escape the public client API: the query guard catches them and
records the message as the instance error.
"""


class QueryError(Exception):
    """Base class for all query failures."""


class InvalidTarget(QueryError):
    """The target address failed validation for the selected mode."""


class TransportUnavailable(QueryError):
    """No usable network mechanism was found."""


class NetworkFailure(QueryError):
    """A connection, timeout or DNS resolution failure."""

    def __init__(self, reason: str, transport: str = None):
        super().__init__(reason)
        self.reason = reason
        self.transport = transport


class MalformedResponse(QueryError):
    """The response payload could not be decoded."""


class ServiceReportedFailure(QueryError):
    """The payload decoded, but the service reported a failed request."""
