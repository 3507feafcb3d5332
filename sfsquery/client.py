"""
StopForumSpam query client.

One SFSQuery instance looks up one IP address. The query runs lazily on the
first getter call and at most once per instance, whatever the outcome; a
caller that wants to retry constructs a new instance.
"""

import socket
import time
import logging
from enum import Enum
from typing import Callable, List, Optional

from .config import config
from .debug import debug_logger
from .exceptions import (
    QueryError,
    InvalidTarget,
    TransportUnavailable,
    NetworkFailure,
)
from .parsers import (
    SECONDS_PER_DAY,
    build_dnsbl_hostname,
    parse_api_response,
    parse_dnsbl_response,
)
from .result import QueryResult
from .transports import BaseTransport, default_transports
from .validator import IPValidator

logger = logging.getLogger(__name__)

NXDOMAIN = 'NXDOMAIN'

# Resolver errors that mean "no such record" rather than a failed lookup
_NO_RECORD_ERRORS = {
    code for code in (getattr(socket, 'EAI_NONAME', None), getattr(socket, 'EAI_NODATA', None))
    if code is not None
}


class QueryMode(Enum):
    """How the StopForumSpam dataset is reached."""
    API = "API"  # JSON web API over HTTP
    DNS = "DNS"  # DNSBL lookup in i.rbl.stopforumspam.org

    def __str__(self):
        return self.value


def resolve_hostname(hostname: str) -> str:
    """
    Resolve a hostname to an IPv4 address with the platform resolver.

    A name that does not exist is returned unchanged, which is how callers
    tell "not listed" apart from a listed answer.

    Args:
        hostname: Name to resolve

    Returns:
        The resolved address, or the hostname itself if there is no record

    Raises:
        NetworkFailure: If the lookup itself fails (no resolver, timeout)
    """
    try:
        return socket.gethostbyname(hostname)
    except socket.gaierror as e:
        if e.errno in _NO_RECORD_ERRORS:
            return hostname
        raise NetworkFailure(f"DNS lookup for {hostname} failed: {e}") from e
    except (socket.herror, OSError) as e:
        raise NetworkFailure(f"DNS lookup for {hostname} failed: {e}") from e


class SFSQuery:
    """Client for looking up one IP address at StopForumSpam."""

    def __init__(self, ip: str, mode: QueryMode = QueryMode.API,
                 transports: Optional[List[BaseTransport]] = None,
                 resolver: Optional[Callable[[str], str]] = None):
        """
        Initialize the client.

        Args:
            ip: The IPv4 or IPv6 address to query for
            mode: QueryMode.API (default) or QueryMode.DNS
            transports: HTTP transports in priority order (API mode)
            resolver: Hostname resolver (DNS mode), resolve_hostname by default
        """
        self._ip = ip
        self._mode = QueryMode(mode)
        self._transports = transports
        self._resolver = resolver if resolver is not None else resolve_hostname
        self._validator = IPValidator()
        self._result = QueryResult()

    def __repr__(self):
        return f"<SFSQuery {self._ip} mode={self._mode} queried={self._result.queried}>"

    @property
    def mode(self) -> QueryMode:
        """The query mode chosen at construction."""
        return self._mode

    @property
    def result(self) -> QueryResult:
        """The result record, queried on first access."""
        self.query()
        return self._result

    def query(self) -> bool:
        """
        Run the query for this instance if it has not run yet.

        Returns:
            True if the query succeeded (a successful query does not mean the
            address is listed), False if it failed. Later calls return the
            same outcome without touching the network.
        """
        if self._result.queried:
            return self._result.succeeded

        start_time = time.time()
        debug_logger.log_query_start(self._ip, str(self._mode))
        debug_logger.log_config_info()

        self._result.queried = True
        try:
            if self._mode is QueryMode.DNS:
                self._dns_query()
            else:
                self._api_query()
            self._result.succeeded = True
        except QueryError as e:
            self._result.error = str(e)
            self._result.succeeded = False
            logger.warning(f"StopForumSpam {self._mode} query for {self._ip} failed: {e}")

        debug_logger.log_query_complete(self._ip, str(self._mode), time.time() - start_time,
                                        self._result.as_dict())
        return self._result.succeeded

    def _api_query(self):
        """Query the web API and populate the result."""
        if not self._validator.is_queryable(self._ip, allow_ipv6=True):
            raise InvalidTarget("Private, reserved, or invalid IP address")

        url = config.get_api_url(self._validator.normalize_ip(self._ip))
        response = self._fetch(url)

        self._result.raw_response = response.strip()
        self._result.update(parse_api_response(self._result.raw_response))

    def _fetch(self, url: str) -> str:
        """
        Fetch a URL with the first transport that succeeds.

        Args:
            url: The API URL

        Returns:
            Response body

        Raises:
            TransportUnavailable: If no transport can handle the URL
            NetworkFailure: If every usable transport failed
        """
        transports = self._transports if self._transports is not None else default_transports()
        usable = [t for t in transports if t.is_available() and t.supports(url)]

        if not usable:
            raise TransportUnavailable("No supported connection method was found")

        debug_logger.log('detailed', "Usable transports: " +
                         ", ".join(f"{t.name} ({t.kind})" for t in usable))

        last_error = None
        for transport in usable:
            try:
                return transport.fetch(url)
            except NetworkFailure as e:
                logger.debug(f"{transport.kind} transport {transport.name} failed, trying next: {e}")
                last_error = e

        raise last_error

    def _dns_query(self):
        """Query the DNSBL and populate the result."""
        if not self._validator.is_queryable(self._ip, allow_ipv6=False):
            raise InvalidTarget("Private, reserved, or invalid IP address (IPv6 not supported)")

        hostname = build_dnsbl_hostname(self._validator.normalize_ip(self._ip), config.get_dnsbl_zone())
        resolved = self._resolver(hostname)

        if resolved == hostname:
            self._result.raw_response = NXDOMAIN
            return

        self._result.raw_response = resolved
        self._result.update(parse_dnsbl_response(resolved, int(time.time())))

    def get_ip(self) -> str:
        """Return the target IP address."""
        return self._ip

    def get_raw_response(self) -> Optional[str]:
        """
        Return the unparsed response for the current mode.

        JSON text in API mode. In DNS mode, the resolved DNSBL address, or
        'NXDOMAIN' if the address is not listed. None if the query failed
        before a response arrived; get_error() explains why.
        """
        self.query()
        return self._result.raw_response

    def get_api_response(self) -> Optional[str]:
        """Return the raw JSON from the web API, or None in DNS mode."""
        self.query()
        if self._mode is not QueryMode.API:
            return None
        return self._result.raw_response

    def get_dns_response(self) -> Optional[str]:
        """
        Return the DNSBL answer, or None in API mode.

        A listed address yields '127.F.D.C'; an unlisted one 'NXDOMAIN'.
        """
        self.query()
        if self._mode is not QueryMode.DNS:
            return None
        return self._result.raw_response

    def get_appears(self) -> bool:
        """
        Return whether the address appears in the database at all.

        Reports may be years old, so this alone should not be used to deny
        access; see was_reported_in_past_days().
        """
        self.query()
        return self._result.appears

    def get_asn(self) -> int:
        """Return the autonomous system number (always 0 in DNS mode)."""
        self.query()
        return self._result.asn

    def get_confidence(self) -> float:
        """Return the confidence score that the address is a spammer."""
        self.query()
        return self._result.confidence

    def get_country(self) -> Optional[str]:
        """Return the country code (always None in DNS mode)."""
        self.query()
        return self._result.country

    def get_error(self) -> Optional[str]:
        """Return the recorded error message, or None."""
        self.query()
        return self._result.error

    def get_frequency(self) -> int:
        """Return the number of times the address has been reported."""
        self.query()
        return self._result.frequency

    def get_last_seen(self) -> int:
        """
        Return the epoch timestamp of the most recent report.

        For April 20, 2018 at 4:20 PM GMT this is 1524241200. Returns 0 if
        there are no reports.
        """
        self.query()
        return self._result.last_seen

    def was_reported_since(self, epoch: int) -> bool:
        """
        Return whether the address was reported after a given timestamp.

        Args:
            epoch: Unix timestamp, e.g. time.time() - 43200 for 12 hours

        Returns:
            True if listed and last seen after epoch
        """
        self.query()
        return self._result.appears and self._result.last_seen > epoch

    def was_reported_in_past_days(self, days: int = 7) -> bool:
        """
        Return whether the address was reported in the past N days.

        Args:
            days: Window size in days (default 7)

        Returns:
            True if listed and last seen within the window
        """
        return self.was_reported_since(int(time.time()) - SECONDS_PER_DAY * days)
